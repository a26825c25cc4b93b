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
import sys
import shutil
import logging
import subprocess

_log = logging.getLogger(__spec__.name)

class SystemTools():
	PACKAGE_MANAGERS = {
		"apt-get": [
			[ "sudo", "apt-get", "update" ],
			[ "sudo", "apt-get", "install", "-y", "{package}" ],
		],
		"dnf": [
			[ "sudo", "dnf", "install", "-y", "{package}" ],
		],
		"pacman": [
			[ "sudo", "pacman", "-S", "--noconfirm", "{package}" ],
		],
	}

	@classmethod
	def find_binary(cls, name: str):
		return shutil.which(os.path.expanduser(name))

	@classmethod
	def detect_package_manager(cls):
		for package_manager in cls.PACKAGE_MANAGERS:
			if cls.find_binary(package_manager) is not None:
				return package_manager
		return None

	@classmethod
	def install_package(cls, package: str):
		package_manager = cls.detect_package_manager()
		if package_manager is None:
			_log.error(f"Could not determine package manager, please install {package} manually.")
			return False
		for cmd in cls.PACKAGE_MANAGERS[package_manager]:
			cmd = [ arg.format(package = package) for arg in cmd ]
			_log.info(f"Executing: {' '.join(cmd)}")
			if subprocess.run(cmd, check = False).returncode != 0:
				_log.error(f"Installation of {package} with {package_manager} failed.")
				return False
		return True

	@classmethod
	def program_path(cls):
		return os.path.realpath(sys.argv[0])
