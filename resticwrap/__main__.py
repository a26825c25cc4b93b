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
import resticwrap
from resticwrap.MultiCommand import MultiCommand
from resticwrap.Configuration import Configuration
from resticwrap.Exceptions import ResticWrapException
from resticwrap.actions.ActionInstall import ActionInstall
from resticwrap.actions.ActionConfig import ActionConfig
from resticwrap.actions.ActionInit import ActionInit
from resticwrap.actions.ActionBackup import ActionBackup
from resticwrap.actions.ActionRestore import ActionRestore
from resticwrap.actions.ActionList import ActionList
from resticwrap.actions.ActionCrontab import ActionCrontab
from resticwrap.actions.ActionUpdate import ActionUpdate

def _add_common_arguments(parser):
	parser.add_argument("--restic-binary", metavar = "filename", help = "Specifies the restic binary. Defaults to the value in the configuration file, which itself defaults to \"restic\".")
	parser.add_argument("-c", "--config-file", metavar = "filename", default = Configuration.DEFAULT_FILENAME, help = "Specifies the repositories file. Defaults to %(default)s.")
	parser.add_argument("-v", "--verbose", action = "count", default = 0, help = "Increase verbosity. Can be given multiple times.")

def build_multicommand():
	mc = MultiCommand(description = "Simplified command line frontend for restic", trailing_text = f"resticwrap v{resticwrap.VERSION}", prog = "resticwrap")

	def genparser(parser):
		_add_common_arguments(parser)
	mc.register("install", "Install restic if missing and create the default repositories file", genparser, action = ActionInstall)

	def genparser(parser):
		parser.add_argument("-s", "--show", action = "store_true", help = "Only show the configured repositories instead of editing them interactively.")
		_add_common_arguments(parser)
	mc.register("config", "Interactively edit the configured repositories and settings", genparser, action = ActionConfig)

	def genparser(parser):
		parser.set_defaults(show = True)
		_add_common_arguments(parser)
	mc.register("show", "Show the configured repositories", genparser, action = ActionConfig)

	def genparser(parser):
		_add_common_arguments(parser)
		parser.add_argument("repo_name", nargs = "?", help = "Repository to initialize. If not specified, initializes all repositories.")
	mc.register("init", "Initialize restic repositories", genparser, action = ActionInit)

	def genparser(parser):
		parser.add_argument("-pre-backup", "--pre-backup", dest = "pre_backup", metavar = "executable", help = "Hook executed before each backup with the repository name as argument. Overrides the repository's pre_backup setting.")
		parser.add_argument("-post-backup", "--post-backup", dest = "post_backup", metavar = "executable", help = "Hook executed after each backup with the repository name as argument. Overrides the repository's post_backup setting.")
		_add_common_arguments(parser)
		parser.add_argument("repo_name", nargs = "?", help = "Repository to back up. If not specified, backs up all repositories.")
	mc.register("backup", "Back up repositories and apply their retention policies", genparser, action = ActionBackup)

	def genparser(parser):
		parser.add_argument("-f", "--files", metavar = "path", nargs = "+", help = "Only restore these files or directories.")
		group = parser.add_mutually_exclusive_group()
		group.add_argument("-g", "--in-place", action = "store_true", help = "Restore files to their original locations, overwriting existing files.")
		group.add_argument("-p", "--path", dest = "target_path", metavar = "path", help = "Directory to restore into. Defaults to ./restore-<repo>-<snapshot>.")
		_add_common_arguments(parser)
		parser.add_argument("repo_name", help = "Repository to restore from.")
		parser.add_argument("snapshot", help = "Snapshot ID to restore, or \"latest\".")
	mc.register("restore", "Restore a snapshot", genparser, action = ActionRestore)

	def genparser(parser):
		_add_common_arguments(parser)
		parser.add_argument("repo_name", nargs = "?", help = "Repository whose snapshots are listed. If not specified, lists all repositories.")
	mc.register("list", "List snapshots; -v shows restic's full table", genparser, action = ActionList)

	def genparser(parser):
		group = parser.add_mutually_exclusive_group()
		group.add_argument("-s", "--show", action = "store_true", help = "Show the installed backup cronjob.")
		group.add_argument("-d", "--delete", action = "store_true", help = "Remove the backup cronjob.")
		_add_common_arguments(parser)
	mc.register("crontab", "Schedule the backup of all repositories in the user's crontab", genparser, action = ActionCrontab)

	def genparser(parser):
		_add_common_arguments(parser)
	mc.register("update", "Update restic to the latest release", genparser, action = ActionUpdate)
	return mc

def main(argv: list[str] | None = None):
	mc = build_multicommand()
	try:
		returncode = mc.run(sys.argv[1:] if (argv is None) else argv)
	except ResticWrapException as e:
		print(f"Error: {e}", file = sys.stderr)
		returncode = 1
	return (returncode or 0)

if __name__ == "__main__":
	sys.exit(main())
