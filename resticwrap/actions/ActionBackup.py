#	resticwrap - Simplified command line frontend for restic
#	Copyright (C) 2024-2026 Johannes Bauer
#
#	This file is part of resticwrap.
#
#	resticwrap is free software; you can redistribute it and/or modify
#	it under the terms of the GNU General Public License as published by
#	the Free Software Foundation; this program is ONLY licensed under
#	version 3 of the License, later versions are explicitly excluded.
#
#	resticwrap is distributed in the hope that it will be useful,
#	but WITHOUT ANY WARRANTY; without even the implied warranty of
#	MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#	GNU General Public License for more details.
#
#	You should have received a copy of the GNU General Public License
#	along with resticwrap; if not, write to the Free Software
#	Foundation, Inc., 59 Temple Place, Suite 330, Boston, MA  02111-1307  USA
#
#	Johannes Bauer <JohannesBauer@gmx.de>

import logging
from resticwrap.actions.ConfiguredAction import ConfiguredAction
from resticwrap.Notifier import TelegramNotifier
from resticwrap.ResticEngine import BackupResult
from resticwrap.Enums import ResticReturncodes
from resticwrap.Exceptions import NotificationException, ExternalCommandFailedException

_log = logging.getLogger(__spec__.name)

class ActionBackup(ConfiguredAction):
	def _backup(self, repository: "Repository"):
		print(f"Starting backup for repository: {repository.name}")
		try:
			result = self.engine.execute_backup(repository, pre_backup = self._args.pre_backup, post_backup = self._args.post_backup)
		except ExternalCommandFailedException as e:
			_log.error(f"Backup of {repository.name} could not be run: {e}")
			result = BackupResult(repository.name, ResticReturncodes.FatalError, failed_stage = "backup")
		self._results.append(result)
		if result.success:
			print(f"Backup of {repository.name} finished: {result.describe()}")
		else:
			print(f"Backup of {repository.name} {result.describe()}")
		return result.success

	def _notify(self):
		notifier = TelegramNotifier.from_settings(self.config.settings.telegram)
		if notifier is None:
			return
		try:
			notifier.notify_backup(self._results)
		except NotificationException as e:
			_log.error(f"Backup notification failed: {e}")

	def run(self):
		self._results = [ ]
		if self._args.repo_name is not None:
			repository = self.config.get_repository(self._args.repo_name)
			self._backup(repository)
			self._notify()
			return self._results[0].returncode

		repositories = self.config.get_repositories()
		failed = self._for_each_repository(repositories, "Starting backup of all repositories...", self._backup)
		self._notify()
		if failed == 0:
			print("Backup of all repositories completed!")
			return 0
		else:
			print(f"Backup completed with {failed} of {len(repositories)} repositories failed.")
			return 1
