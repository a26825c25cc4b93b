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

import shlex
import logging
import subprocess
from resticwrap.Exceptions import ExternalCommandFailedException

_log = logging.getLogger(__spec__.name)

class CrontabEditor():
	def __init__(self, crontab_binary: str = "crontab"):
		self._crontab_binary = crontab_binary

	def _run(self, args: list[str], input_text: str | None = None):
		cmd = [ self._crontab_binary ] + args
		_log.debug(f"Executing: {shlex.join(cmd)}")
		try:
			return subprocess.run(cmd, input = input_text, capture_output = True, text = True, check = False)
		except FileNotFoundError as e:
			raise ExternalCommandFailedException(f"Could not execute {self._crontab_binary}: {e.strerror}. Is cron installed?") from e

	@staticmethod
	def _cron_quote(argument: str):
		# An unescaped % ends the command in a crontab line.
		return shlex.quote(argument).replace("%", "\\%")

	@classmethod
	def backup_line(cls, schedule: str, program: str, log_file: str, config_file: str | None = None):
		command = cls.marker(program)
		if config_file is not None:
			command += f" -c {cls._cron_quote(config_file)}"
		return f"{schedule} {command} >> {cls._cron_quote(log_file)} 2>&1"

	@classmethod
	def marker(cls, program: str):
		return f"{cls._cron_quote(program)} backup"

	def read_lines(self):
		result = self._run([ "-l" ])
		if result.returncode != 0:
			if "no crontab" in result.stderr.lower():
				return [ ]
			raise ExternalCommandFailedException(f"Could not read crontab: {result.stderr.strip()}")
		return result.stdout.splitlines()

	def write_lines(self, lines: list[str]):
		text = "".join(f"{line}\n" for line in lines)
		result = self._run([ "-" ], input_text = text)
		if result.returncode != 0:
			raise ExternalCommandFailedException(f"Could not write crontab: {result.stderr.strip()}")

	def find(self, marker: str):
		return [ line for line in self.read_lines() if marker in line ]

	def install(self, line: str, marker: str):
		"""Replaces every line containing the marker by the given line and
		returns the lines that were replaced."""
		lines = self.read_lines()
		replaced = [ existing for existing in lines if marker in existing ]
		lines = [ existing for existing in lines if marker not in existing ]
		lines.append(line)
		self.write_lines(lines)
		return replaced

	def remove(self, marker: str):
		lines = self.read_lines()
		removed = [ existing for existing in lines if marker in existing ]
		if len(removed) > 0:
			self.write_lines([ existing for existing in lines if marker not in existing ])
		return removed
