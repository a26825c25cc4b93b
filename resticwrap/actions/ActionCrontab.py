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

import os
from resticwrap.actions.ConfiguredAction import ConfiguredAction
from resticwrap.Configuration import Configuration
from resticwrap.Crontab import CrontabEditor
from resticwrap.Tools import SystemTools

class ActionCrontab(ConfiguredAction):
	@property
	def program(self):
		return SystemTools.program_path()

	@property
	def log_file(self):
		return os.path.abspath(os.path.expanduser(self.config.settings.log_file))

	def _backup_line(self):
		# cron runs jobs from the home directory.
		config_file = os.path.abspath(self.config_filename)
		if config_file == os.path.abspath(os.path.expanduser(Configuration.DEFAULT_FILENAME)):
			config_file = None
		return CrontabEditor.backup_line(self.config.settings.schedule, self.program, self.log_file, config_file = config_file)

	def _run_show(self, editor: CrontabEditor):
		lines = editor.find(CrontabEditor.marker(self.program))
		if len(lines) == 0:
			print("No backup cronjob installed.")
		for line in lines:
			print(line)

	def _run_delete(self, editor: CrontabEditor):
		removed = editor.remove(CrontabEditor.marker(self.program))
		if len(removed) == 0:
			print("No backup cronjob installed, nothing to remove.")
		else:
			print(f"Removed {len(removed)} backup cronjob line(s).")

	def _run_install(self, editor: CrontabEditor):
		line = self._backup_line()
		log_dir = os.path.dirname(self.log_file)
		if log_dir != "":
			os.makedirs(log_dir, exist_ok = True)
		replaced = editor.install(line, CrontabEditor.marker(self.program))
		if len(replaced) > 0:
			print(f"Replaced existing backup cronjob: {replaced[0]}")
		print(f"Installed backup cronjob: {line}")

	def run(self):
		editor = CrontabEditor()
		if self._args.show:
			self._run_show(editor)
		elif self._args.delete:
			self._run_delete(editor)
		else:
			self._run_install(editor)
		return 0
