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

import enum

class ResticReturncodes(enum.IntEnum):
	Success = 0
	FatalError = 1
	GoError = 2
	IncompleteSnapshot = 3
	RepositoryDoesNotExist = 10
	LockFailed = 11
	WrongPassword = 12
	Interrupted = 130

	@classmethod
	def describe(cls, returncode: int):
		try:
			return cls(returncode).name
		except ValueError:
			return str(returncode)
