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
import logging
from resticwrap.MultiCommand import LoggingAction
from resticwrap.Configuration import Configuration
from resticwrap.ResticEngine import ResticEngine
from resticwrap.Exceptions import ConfigurationException

_log = logging.getLogger(__spec__.name)

class ConfiguredAction(LoggingAction):
	CONFIG_REQUIRED = True

	@property
	def config_filename(self):
		return os.path.expanduser(self._args.config_file)

	@property
	def config(self):
		if not hasattr(self, "_config"):
			if (not self.CONFIG_REQUIRED) and (not os.path.exists(self.config_filename)):
				_log.info(f"No configuration at {self.config_filename}, using defaults.")
				self._config = Configuration()
			else:
				self._config = Configuration.load(self.config_filename)
		return self._config

	@property
	def engine(self):
		if not hasattr(self, "_engine"):
			restic_binary = getattr(self._args, "restic_binary", None) or self.config.settings.restic_binary
			self._engine = ResticEngine(restic_binary)
		return self._engine

	def _for_each_repository(self, repositories: list["Repository"], title: str, execute):
		"""Runs execute(repository) -> bool for every repository in turn;
		failures are counted, never rolled back. Returns the number of
		failures."""
		if len(repositories) == 0:
			raise ConfigurationException(f"No repositories configured in {self.config_filename}")
		print(title)
		print("=" * len(title))
		print()
		failed = 0
		for (number, repository) in enumerate(repositories, 1):
			print(f"Processing repository ({number}/{len(repositories)}): {repository.name}")
			print("-------------------------------------------")
			if not execute(repository):
				failed += 1
			print()
		return failed
