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
import json
from resticwrap.Exceptions import ConfigurationException, RepositoryNotFoundException, DuplicateRepositoryException

def _require(data: dict, key: str, expected_type: type, context: str):
	if key not in data:
		raise ConfigurationException(f"{context}: missing required key '{key}'.")
	value = data[key]
	if not isinstance(value, expected_type):
		raise ConfigurationException(f"{context}: '{key}' must be of type {expected_type.__name__}.")
	return value

def _string_list(data: dict, key: str, context: str, required: bool = False):
	if (key not in data) and (not required):
		return [ ]
	value = _require(data, key, list, context)
	if not all(isinstance(item, str) for item in value):
		raise ConfigurationException(f"{context}: all entries of '{key}' must be strings.")
	return list(value)

def _optional_string(data: dict, key: str, context: str):
	value = data.get(key)
	if value in [ None, "" ]:
		return None
	if not isinstance(value, str):
		raise ConfigurationException(f"{context}: '{key}' must be a string.")
	return value

class Retention():
	KEYS = ( "last", "daily", "weekly", "monthly" )

	def __init__(self, last: int | None = None, daily: int | None = None, weekly: int | None = None, monthly: int | None = None):
		self._counts = {
			"last":		last,
			"daily":	daily,
			"weekly":	weekly,
			"monthly":	monthly,
		}
		for (key, value) in self._counts.items():
			if value is None:
				continue
			if isinstance(value, bool) or (not isinstance(value, int)) or (value < 0):
				raise ConfigurationException(f"Retention count '{key}' must be a non-negative integer, got {value!r}.")

	@property
	def last(self):
		return self._counts["last"]

	@property
	def daily(self):
		return self._counts["daily"]

	@property
	def weekly(self):
		return self._counts["weekly"]

	@property
	def monthly(self):
		return self._counts["monthly"]

	@property
	def empty(self):
		return all(value is None for value in self._counts.values())

	def items(self):
		"""Yields (bucket, count) for every count that is set, in restic's
		--keep-last, --keep-daily, --keep-weekly, --keep-monthly order."""
		for key in self.KEYS:
			if self._counts[key] is not None:
				yield (key, self._counts[key])

	def to_dict(self):
		return dict(self.items())

	@classmethod
	def parse(cls, data: dict):
		if not isinstance(data, dict):
			raise ConfigurationException("Retention policy must be an object.")
		unknown = set(data) - set(cls.KEYS)
		if len(unknown) > 0:
			raise ConfigurationException(f"Unknown retention key(s): {', '.join(sorted(unknown))}")
		return cls(**{ key: data.get(key) for key in cls.KEYS })

	def __eq__(self, other):
		return isinstance(other, Retention) and (self._counts == other._counts)

	def __repr__(self):
		return f"Retention({', '.join(f'{key}={value}' for (key, value) in self.items())})"

class Repository():
	def __init__(self, name: str, destination: str, password: str, paths: list[str], exclude: list[str] | None = None, retention: Retention | None = None, pre_backup: str | None = None, post_backup: str | None = None):
		if name == "":
			raise ConfigurationException("Repository name must not be empty.")
		self._name = name
		self._destination = destination
		self._password = password
		self._paths = list(paths)
		self._exclude = list(exclude or [ ])
		self._retention = None if ((retention is None) or retention.empty) else retention
		self._pre_backup = pre_backup
		self._post_backup = post_backup

	@property
	def name(self):
		return self._name

	@property
	def destination(self):
		return self._destination

	@property
	def password(self):
		return self._password

	@property
	def paths(self):
		return self._paths

	@property
	def expanded_paths(self):
		return [ os.path.expanduser(path) for path in self._paths ]

	@property
	def exclude(self):
		return self._exclude

	@property
	def retention(self):
		return self._retention

	@property
	def pre_backup(self):
		return self._pre_backup

	@property
	def post_backup(self):
		return self._post_backup

	def to_dict(self):
		data = {
			"name":			self.name,
			"destination":	self.destination,
			"password":		self.password,
			"paths":		self.paths,
			"exclude":		self.exclude,
		}
		if self.retention is not None:
			data["retention"] = self.retention.to_dict()
		if self.pre_backup is not None:
			data["pre_backup"] = self.pre_backup
		if self.post_backup is not None:
			data["post_backup"] = self.post_backup
		return data

	@classmethod
	def parse(cls, data: dict):
		if not isinstance(data, dict):
			raise ConfigurationException("Repository entry must be an object.")
		name = _require(data, "name", str, "Repository")
		context = f"Repository '{name}'"
		destination = _require(data, "destination", str, context)
		password = _require(data, "password", str, context)
		paths = _string_list(data, "paths", context, required = True)
		exclude = _string_list(data, "exclude", context)
		retention = None if (data.get("retention") is None) else Retention.parse(data["retention"])
		return cls(name = name, destination = destination, password = password, paths = paths, exclude = exclude, retention = retention, pre_backup = _optional_string(data, "pre_backup", context), post_backup = _optional_string(data, "post_backup", context))

	def __repr__(self):
		return f"Repository({self.name}, {self.destination})"

class TelegramSettings():
	def __init__(self, bot_token: str = "", chat_id: str = ""):
		self._bot_token = bot_token
		self._chat_id = chat_id

	@property
	def bot_token(self):
		return self._bot_token

	@property
	def chat_id(self):
		return self._chat_id

	@property
	def enabled(self):
		return (self._bot_token != "") and (self._chat_id != "")

	def to_dict(self):
		return {
			"bot_token":	self.bot_token,
			"chat_id":		self.chat_id,
		}

	@classmethod
	def parse(cls, data: dict):
		if not isinstance(data, dict):
			raise ConfigurationException("Telegram settings must be an object.")
		# Chat IDs are frequently written as JSON integers.
		chat_id = data.get("chat_id", "")
		if isinstance(chat_id, int) and not isinstance(chat_id, bool):
			chat_id = str(chat_id)
		bot_token = data.get("bot_token", "")
		if (not isinstance(bot_token, str)) or (not isinstance(chat_id, str)):
			raise ConfigurationException("Telegram bot_token and chat_id must be strings.")
		return cls(bot_token = bot_token, chat_id = chat_id)

class Settings():
	DEFAULT_LOG_FILE = "~/.local/share/resticwrap/backup.log"
	DEFAULT_SCHEDULE = "0 2 * * *"
	DEFAULT_RESTIC_BINARY = "restic"
	SCHEDULE_MACROS = ( "@yearly", "@annually", "@monthly", "@weekly", "@daily", "@midnight", "@hourly", "@reboot" )

	def __init__(self, log_file: str = DEFAULT_LOG_FILE, schedule: str = DEFAULT_SCHEDULE, restic_binary: str = DEFAULT_RESTIC_BINARY, telegram: TelegramSettings | None = None):
		self.validate_schedule(schedule)
		self._log_file = log_file
		self._schedule = schedule
		self._restic_binary = restic_binary
		self._telegram = telegram or TelegramSettings()

	@classmethod
	def validate_schedule(cls, schedule: str):
		if schedule in cls.SCHEDULE_MACROS:
			return
		if len(schedule.split()) != 5:
			raise ConfigurationException(f"Invalid cron schedule '{schedule}': expected five fields or one of {', '.join(cls.SCHEDULE_MACROS)}.")

	@property
	def log_file(self):
		return self._log_file

	@property
	def schedule(self):
		return self._schedule

	@property
	def restic_binary(self):
		return self._restic_binary

	@property
	def telegram(self):
		return self._telegram

	def to_dict(self):
		return {
			"log_file":			self.log_file,
			"schedule":			self.schedule,
			"restic_binary":	self.restic_binary,
			"telegram":			self.telegram.to_dict(),
		}

	@classmethod
	def parse(cls, data: dict):
		if not isinstance(data, dict):
			raise ConfigurationException("Settings must be an object.")
		values = { }
		for key in [ "log_file", "schedule", "restic_binary" ]:
			if key in data:
				values[key] = _require(data, key, str, "Settings")
		if "telegram" in data:
			values["telegram"] = TelegramSettings.parse(data["telegram"])
		return cls(**values)

class Configuration():
	DEFAULT_FILENAME = "~/.config/backup-repos.json"

	def __init__(self, repositories: list[Repository] | None = None, settings: Settings | None = None):
		self._repositories = [ ]
		self._settings = settings or Settings()
		for repository in (repositories or [ ]):
			self.add_repository(repository)

	@property
	def repositories(self):
		return list(self._repositories)

	@property
	def settings(self):
		return self._settings

	@settings.setter
	def settings(self, value: Settings):
		self._settings = value

	def _index_of(self, name: str):
		for (index, repository) in enumerate(self._repositories):
			if repository.name == name:
				return index
		return None

	def has_repository(self, name: str):
		return self._index_of(name) is not None

	def get_repository(self, name: str):
		index = self._index_of(name)
		if index is None:
			raise RepositoryNotFoundException(f"Repository '{name}' not found")
		return self._repositories[index]

	def get_repositories(self, name: str | None = None):
		if name is None:
			return self.repositories
		return [ self.get_repository(name) ]

	def add_repository(self, repository: Repository):
		if self.has_repository(repository.name):
			raise DuplicateRepositoryException(f"Repository '{repository.name}' already exists")
		self._repositories.append(repository)

	def replace_repository(self, old_name: str, repository: Repository):
		index = self._index_of(old_name)
		if index is None:
			raise RepositoryNotFoundException(f"Repository '{old_name}' not found")
		if (repository.name != old_name) and self.has_repository(repository.name):
			raise DuplicateRepositoryException(f"Repository '{repository.name}' already exists")
		self._repositories[index] = repository

	def remove_repository(self, name: str):
		index = self._index_of(name)
		if index is None:
			raise RepositoryNotFoundException(f"Repository '{name}' not found")
		return self._repositories.pop(index)

	def to_dict(self):
		return {
			"settings":		self.settings.to_dict(),
			"repositories":	[ repository.to_dict() for repository in self._repositories ],
		}

	def save(self, filename: str):
		"""Rewrites the whole document. There is no locking; whoever saves
		last wins."""
		filename = os.path.expanduser(filename)
		dirname = os.path.dirname(filename)
		if dirname != "":
			os.makedirs(dirname, exist_ok = True)
		fd = os.open(filename, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
		with os.fdopen(fd, "w") as f:
			json.dump(self.to_dict(), f, indent = 4)
			f.write("\n")
		# O_CREAT does not touch the mode of a pre-existing file.
		os.chmod(filename, 0o600)

	@classmethod
	def default(cls):
		example = Repository(name = "example", destination = "sftp:user@host:backup", password = "your-password-here", paths = [ "~/Documents" ], exclude = [ "*.tmp" ], retention = Retention(last = 24, daily = 7, weekly = 4, monthly = 12))
		return cls(repositories = [ example ])

	@classmethod
	def parse_json(cls, json_data: dict):
		if not isinstance(json_data, dict):
			raise ConfigurationException("Configuration document must be a JSON object.")
		repositories = [ Repository.parse(data) for data in _require(json_data, "repositories", list, "Configuration") ]
		settings = Settings.parse(json_data["settings"]) if ("settings" in json_data) else Settings()
		return cls(repositories = repositories, settings = settings)

	@classmethod
	def load(cls, filename: str):
		filename = os.path.expanduser(filename)
		try:
			with open(filename) as f:
				json_data = json.load(f)
		except FileNotFoundError as e:
			raise ConfigurationException(f"Repositories file not found at {filename}") from e
		except json.decoder.JSONDecodeError as e:
			raise ConfigurationException(f"Invalid JSON in {filename}: {e}") from e
		return cls.parse_json(json_data)
