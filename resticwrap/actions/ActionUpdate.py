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

class ActionUpdate(ConfiguredAction):
	CONFIG_REQUIRED = False

	def run(self):
		print(f"Updating restic ({self.engine.restic_binary})...")
		returncode = self.engine.execute_self_update()
		if returncode != 0:
			print(f"restic self-update failed with exit status {returncode}; if restic was installed by a package manager, update it there instead.")
		return returncode
