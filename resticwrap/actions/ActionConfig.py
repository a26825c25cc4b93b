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
from resticwrap.ConfigMenu import ConfigMenu
from resticwrap.RepositoryDisplay import format_configuration

class ActionConfig(ConfiguredAction):
	def run(self):
		if self._args.show:
			print(format_configuration(self.config))
			return 0

		if os.path.exists(self.config_filename):
			config = self.config
		else:
			print(f"No repositories file at {self.config_filename} yet, starting with an empty configuration.")
			config = Configuration()

		menu = ConfigMenu(config)
		if menu.run():
			config.save(self.config_filename)
			print(f"Configuration written to {self.config_filename}")
		else:
			print("Configuration not saved.")
		return 0
