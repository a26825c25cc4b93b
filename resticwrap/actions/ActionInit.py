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

from resticwrap.actions.ConfiguredAction import ConfiguredAction
from resticwrap.Enums import ResticReturncodes

class ActionInit(ConfiguredAction):
	def _init(self, repository: "Repository"):
		print(f"Initializing repository: {repository.name}")
		returncode = self.engine.execute_init(repository)
		if returncode != ResticReturncodes.Success:
			print(f"Failed to initialize repository {repository.name}: exit status {returncode} ({ResticReturncodes.describe(returncode)})")
		else:
			print(f"Repository initialized successfully: {repository.name}")
		return returncode

	def run(self):
		if self._args.repo_name is not None:
			return self._init(self.config.get_repository(self._args.repo_name))

		repositories = self.config.get_repositories()
		failed = self._for_each_repository(repositories, "Initializing all repositories...", lambda repository: self._init(repository) == ResticReturncodes.Success)
		if failed == 0:
			print("All repositories initialized successfully!")
			return 0
		else:
			print(f"Initialization completed with {failed} of {len(repositories)} repositories failed.")
			return 1
