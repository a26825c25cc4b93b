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

def format_repository(repository: "Repository"):
	lines = [ f"Repository: {repository.name}" ]
	lines.append(f"   └─ Destination: {repository.destination}")
	lines.append("   └─ Backup paths:")
	lines += [ f"      └─ {path}" for path in repository.paths ]
	if len(repository.exclude) > 0:
		lines.append("   └─ Excludes:")
		lines += [ f"      └─ {pattern}" for pattern in repository.exclude ]
	if repository.retention is not None:
		units = {
			"last":		"snapshots",
			"daily":	"days",
			"weekly":	"weeks",
			"monthly":	"months",
		}
		lines.append("   └─ Retention policy:")
		lines += [ f"      └─ Keep {bucket}: {count} {units[bucket]}" for (bucket, count) in repository.retention.items() ]
	if repository.pre_backup is not None:
		lines.append(f"   └─ Pre-backup hook: {repository.pre_backup}")
	if repository.post_backup is not None:
		lines.append(f"   └─ Post-backup hook: {repository.post_backup}")
	return "\n".join(lines)

def format_settings(settings: "Settings"):
	lines = [ "Settings:" ]
	lines.append(f"   └─ Schedule: {settings.schedule}")
	lines.append(f"   └─ Log file: {settings.log_file}")
	lines.append(f"   └─ restic binary: {settings.restic_binary}")
	if settings.telegram.enabled:
		lines.append(f"   └─ Telegram notifications: chat {settings.telegram.chat_id}")
	else:
		lines.append("   └─ Telegram notifications: disabled")
	return "\n".join(lines)

def format_configuration(config: "Configuration"):
	lines = [ "Configured Backup Repositories", "==============================", "" ]
	if len(config.repositories) == 0:
		lines += [ "No repositories configured.", "" ]
	for repository in config.repositories:
		lines += [ format_repository(repository), "" ]
	lines.append(format_settings(config.settings))
	return "\n".join(lines)
