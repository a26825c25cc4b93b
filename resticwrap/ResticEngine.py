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
import shlex
import logging
import contextlib
import subprocess
from resticwrap.Enums import ResticReturncodes
from resticwrap.Exceptions import ExternalCommandFailedException

_log = logging.getLogger(__spec__.name)

class BackupResult():
	def __init__(self, name: str, returncode: int, failed_stage: str | None = None):
		self._name = name
		self._returncode = int(returncode)
		self._failed_stage = failed_stage

	@property
	def name(self):
		return self._name

	@property
	def returncode(self):
		return self._returncode

	@property
	def failed_stage(self):
		return self._failed_stage

	@property
	def success(self):
		return self._failed_stage is None

	@property
	def incomplete(self):
		return self.success and (self._returncode == ResticReturncodes.IncompleteSnapshot)

	def describe(self):
		if self.incomplete:
			return "incomplete snapshot (some files could not be read)"
		elif self.success:
			return "success"
		else:
			return f"failed during {self._failed_stage.replace('_', '-')} (exit status {self._returncode}, {ResticReturncodes.describe(self._returncode)})"

	def __repr__(self):
		return f"BackupResult({self.name}: {self.describe()})"

class ResticEngine():
	def __init__(self, restic_binary: str = "restic"):
		self._restic_binary = restic_binary

	@property
	def restic_binary(self):
		return self._restic_binary

	def _restic_env(self, repository: "Repository"):
		env = dict(os.environ)
		env["RESTIC_PASSWORD"] = repository.password
		return env

	def _restic_remote_args(self, repository: "Repository"):
		return [ "-r", repository.destination ]

	def _restic_backup_args(self, repository: "Repository"):
		args = self._restic_remote_args(repository)
		args += [ "backup" ]
		for exclude in repository.exclude:
			args += [ "--exclude", exclude ]
		args += repository.expanded_paths
		return args

	def _restic_forget_args(self, repository: "Repository"):
		args = self._restic_remote_args(repository)
		args += [ "forget", "--prune" ]
		for (bucket, count) in repository.retention.items():
			args += [ f"--keep-{bucket}", str(count) ]
		return args

	def _restic_snapshots_args(self, repository: "Repository", verbose: bool = False):
		args = self._restic_remote_args(repository)
		args += [ "snapshots" ]
		if not verbose:
			args += [ "--compact" ]
		return args

	def _restic_restore_args(self, repository: "Repository", snapshot: str, target: str, include: list[str] | None = None):
		args = self._restic_remote_args(repository)
		args += [ "restore", snapshot, "--target", target ]
		for filename in (include or [ ]):
			args += [ "--include", os.path.expanduser(filename) ]
		return args

	def _execute(self, args: list[str], repository: "Repository | None" = None):
		cmd = [ self._restic_binary ] + args
		_log.debug(f"Executing: {shlex.join(cmd)}")
		env = None if (repository is None) else self._restic_env(repository)
		try:
			returncode = subprocess.run(cmd, env = env, check = False).returncode
		except FileNotFoundError as e:
			raise ExternalCommandFailedException(f"Could not execute {self._restic_binary}: {e.strerror}. Is restic installed?") from e
		_log.debug(f"{self._restic_binary} exited with status {returncode}")
		return returncode

	def execute_hook(self, hook: str, repository: "Repository", backup_success: bool | None = None):
		cmd = [ os.path.expanduser(hook), repository.name ]
		env = None
		if backup_success is not None:
			env = dict(os.environ)
			env["RESTICWRAP_BACKUP_SUCCESS"] = "1" if backup_success else "0"
		_log.debug(f"Executing hook: {shlex.join(cmd)}")
		try:
			returncode = subprocess.run(cmd, env = env, check = False).returncode
		except OSError as e:
			_log.error(f"Could not execute hook {hook} for {repository.name}: {e}")
			return False
		if returncode != 0:
			_log.error(f"Hook {hook} for {repository.name} exited with status {returncode}")
		return returncode == 0

	@contextlib.contextmanager
	def execute_pre_post_hooks(self, repository: "Repository", pre_backup: str | None = None, post_backup: str | None = None):
		pre_backup = pre_backup or repository.pre_backup
		post_backup = post_backup or repository.post_backup
		run_args = { "pre_backup_success": True }
		if pre_backup is not None:
			print(f"Running pre-backup hook: {pre_backup}")
			run_args["pre_backup_success"] = self.execute_hook(pre_backup, repository)
		try:
			yield run_args
		finally:
			if run_args["pre_backup_success"] and (post_backup is not None):
				print(f"Running post-backup hook: {post_backup}")
				if not self.execute_hook(post_backup, repository, backup_success = run_args.get("backup_success", False)):
					_log.warning(f"Post-backup hook of {repository.name} failed; backup result is unaffected.")

	def execute_init(self, repository: "Repository"):
		return self._execute(self._restic_remote_args(repository) + [ "init" ], repository)

	def execute_forget(self, repository: "Repository"):
		if repository.retention is None:
			return ResticReturncodes.Success
		return self._execute(self._restic_forget_args(repository), repository)

	def execute_backup(self, repository: "Repository", pre_backup: str | None = None, post_backup: str | None = None):
		with self.execute_pre_post_hooks(repository, pre_backup = pre_backup, post_backup = post_backup) as run_args:
			if not run_args["pre_backup_success"]:
				return BackupResult(repository.name, ResticReturncodes.FatalError, failed_stage = "pre_backup")

			returncode = self._execute(self._restic_backup_args(repository), repository)
			run_args["backup_success"] = returncode in [ ResticReturncodes.Success, ResticReturncodes.IncompleteSnapshot ]
			if not run_args["backup_success"]:
				return BackupResult(repository.name, returncode, failed_stage = "backup")

			if repository.retention is not None:
				print("Applying retention policy...")
				forget_returncode = self.execute_forget(repository)
				if forget_returncode != ResticReturncodes.Success:
					return BackupResult(repository.name, forget_returncode, failed_stage = "forget")
			return BackupResult(repository.name, returncode)

	def execute_snapshots(self, repository: "Repository", verbose: bool = False):
		return self._execute(self._restic_snapshots_args(repository, verbose = verbose), repository)

	def execute_restore(self, repository: "Repository", snapshot: str, target: str, include: list[str] | None = None):
		return self._execute(self._restic_restore_args(repository, snapshot, target, include = include), repository)

	def execute_self_update(self):
		return self._execute([ "self-update" ])
