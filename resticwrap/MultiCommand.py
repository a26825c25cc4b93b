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

import sys
import logging
import argparse
import collections

class BaseAction():
	def __init__(self, cmd: str, args: argparse.Namespace):
		self._cmd = cmd
		self._args = args

	@property
	def cmd(self):
		return self._cmd

	@property
	def args(self):
		return self._args

	def run(self):
		raise NotImplementedError(self.__class__.__name__)

class LoggingAction(BaseAction):
	def __init__(self, cmd: str, args: argparse.Namespace):
		super().__init__(cmd, args)
		self._configure_logging(getattr(args, "verbose", 0))

	@staticmethod
	def _configure_logging(verbosity: int):
		if verbosity <= 0:
			loglevel = logging.WARNING
		elif verbosity == 1:
			loglevel = logging.INFO
		else:
			loglevel = logging.DEBUG
		logging.basicConfig(format = "{name:>32s} [{levelname:.1s}]: {message}", style = "{", level = loglevel, stream = sys.stderr, force = True)

class MultiCommand():
	RegisteredCommand = collections.namedtuple("RegisteredCommand", [ "name", "description", "parsergenerator", "aliases", "action" ])

	def __init__(self, description: str | None = None, trailing_text: str | None = None, prog: str | None = None):
		self._description = description
		self._trailing_text = trailing_text
		self._prog = prog
		self._commands = { }

	@property
	def commands(self):
		return list(self._commands)

	def register(self, commandname: str, description: str, parsergenerator, aliases: list[str] | None = None, action = None):
		if commandname in self._commands:
			raise KeyError(f"Command already registered: {commandname}")
		if action is None:
			raise ValueError(f"No action given for command: {commandname}")
		self._commands[commandname] = self.RegisteredCommand(name = commandname, description = description, parsergenerator = parsergenerator, aliases = aliases or [ ], action = action)

	def _build_parser(self):
		parser = argparse.ArgumentParser(prog = self._prog, description = self._description, epilog = self._trailing_text)
		subparsers = parser.add_subparsers(dest = "command", metavar = "command")
		for command in self._commands.values():
			subparser = subparsers.add_parser(command.name, aliases = command.aliases, help = command.description, description = command.description, epilog = self._trailing_text)
			command.parsergenerator(subparser)
			subparser.set_defaults(registered_command = command)
		return parser

	def run(self, cmdline: list[str]):
		parser = self._build_parser()
		args = parser.parse_args(cmdline)
		if args.command is None:
			parser.print_help(file = sys.stderr)
			return 1
		command = args.registered_command
		action = command.action(command.name, args)
		return action.run()
