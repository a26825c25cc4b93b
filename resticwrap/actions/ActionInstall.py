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
from resticwrap.MultiCommand import LoggingAction
from resticwrap.Configuration import Configuration
from resticwrap.Tools import SystemTools

class ActionInstall(LoggingAction):
	def _ensure_restic(self, restic_binary: str):
		if SystemTools.find_binary(restic_binary) is not None:
			print("restic is already installed")
			return True
		print("restic is not installed. Installing...")
		if (not SystemTools.install_package("restic")) or (SystemTools.find_binary(restic_binary) is None):
			print("Error: Failed to install restic, please install it manually.")
			return False
		print("restic installed successfully")
		return True

	def run(self):
		if not self._ensure_restic(self._args.restic_binary or "restic"):
			return 1

		config_filename = os.path.expanduser(self._args.config_file)
		if os.path.exists(config_filename):
			print(f"Repositories file already exists at {config_filename}")
		else:
			Configuration.default().save(config_filename)
			print(f"Created default repositories file at {config_filename}")
			print("Please edit the file or run the 'config' command to set up your backup configurations")
		return 0
