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
from resticwrap.Enums import ResticReturncodes

class ActionRestore(ConfiguredAction):
	@property
	def target(self):
		if self._args.in_place:
			return "/"
		elif self._args.target_path is not None:
			return os.path.expanduser(self._args.target_path)
		else:
			return os.path.join(os.getcwd(), f"restore-{self._args.repo_name}-{self._args.snapshot}")

	def run(self):
		repository = self.config.get_repository(self._args.repo_name)
		target = self.target
		if self._args.in_place:
			print("Restoring to original locations, existing files will be overwritten.")
		print(f"Restoring snapshot {self._args.snapshot} of {repository.name} to {target}")
		returncode = self.engine.execute_restore(repository, self._args.snapshot, target, include = self._args.files)
		if returncode == ResticReturncodes.Success:
			print(f"Restore of {repository.name} completed.")
		else:
			print(f"Restore of {repository.name} failed: exit status {returncode} ({ResticReturncodes.describe(returncode)})")
		return returncode
