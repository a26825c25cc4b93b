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

import getpass
from resticwrap.Configuration import Repository, Retention, Settings, TelegramSettings
from resticwrap.Exceptions import ConfigurationException
from resticwrap.RepositoryDisplay import format_configuration

class ConfigMenu():
	"""Interactive editor for the repositories document.

	Works on the in-memory Configuration only; run() returns True when the
	user asked to save, the caller then rewrites the whole file. Entering a
	single "-" clears an optional value, an empty answer keeps the value
	shown in brackets."""
	CLEAR_VALUE = "-"

	def __init__(self, config: "Configuration", prompt = None, prompt_password = None):
		self._config = config
		self._prompt = prompt or input
		self._prompt_password = prompt_password or getpass.getpass
		self._modified = False
		self._menu = [
			("Show configuration", self._show),
			("Add repository", self._add_repository),
			("Edit repository", self._edit_repository),
			("Delete repository", self._delete_repository),
			("Edit settings", self._edit_settings),
			("Save and quit", True),
			("Quit without saving", False),
		]

	@property
	def config(self):
		return self._config

	@property
	def modified(self):
		return self._modified

	def _ask(self, question: str, default: str | None = None, required: bool = False):
		suffix = "" if (default in [ None, "" ]) else f" [{default}]"
		while True:
			answer = self._prompt(f"{question}{suffix}: ").strip()
			if answer != "":
				return answer
			if default not in [ None, "" ]:
				return default
			if not required:
				return ""
			print("A value is required.")

	def _ask_optional(self, question: str, default: str | None = None):
		answer = self._ask(question, default)
		if answer in [ "", self.CLEAR_VALUE ]:
			return None
		return answer

	def _ask_list(self, question: str, default: list[str] | None = None, required: bool = False):
		default_text = None if (not default) else ", ".join(default)
		while True:
			answer = self._ask(f"{question} (comma separated)", default_text)
			if answer == self.CLEAR_VALUE:
				values = [ ]
			else:
				values = [ item.strip() for item in answer.split(",") if item.strip() != "" ]
			if required and (len(values) == 0):
				print("At least one entry is required.")
				continue
			return values

	def _ask_count(self, question: str, default: int | None = None):
		while True:
			answer = self._ask(question, None if (default is None) else str(default))
			if answer in [ "", self.CLEAR_VALUE ]:
				return None
			try:
				value = int(answer)
			except ValueError:
				value = -1
			if value >= 0:
				return value
			print("Please enter a non-negative integer.")

	def _ask_secret(self, question: str, current: str = ""):
		suffix = " [set]" if (current != "") else ""
		answer = self._prompt(f"{question}{suffix}: ").strip()
		if answer == "":
			return current
		if answer == self.CLEAR_VALUE:
			return ""
		return answer

	def _ask_yes_no(self, question: str, default: bool = False):
		while True:
			answer = self._prompt(f"{question} [{'Y/n' if default else 'y/N'}]: ").strip().lower()
			if answer == "":
				return default
			if answer in [ "y", "yes" ]:
				return True
			if answer in [ "n", "no" ]:
				return False
			print("Please answer y or n.")

	def _ask_name(self, default: str | None = None):
		while True:
			name = self._ask("Repository name", default, required = True)
			if (name != default) and self._config.has_repository(name):
				print(f"Repository '{name}' already exists.")
				continue
			return name

	def _ask_password(self, current: str | None = None):
		while True:
			if current is None:
				password = self._prompt_password("Repository password: ")
			else:
				password = self._prompt_password("Repository password (empty keeps current): ")
				if password == "":
					return current
			if password != "":
				return password
			print("A password is required.")

	def _ask_retention(self, current: "Retention | None" = None):
		if not self._ask_yes_no("Configure a retention policy?", default = current is not None):
			return None
		current = current or Retention()
		return Retention(
			last = self._ask_count("Keep last N snapshots", current.last),
			daily = self._ask_count("Keep daily snapshots for N days", current.daily),
			weekly = self._ask_count("Keep weekly snapshots for N weeks", current.weekly),
			monthly = self._ask_count("Keep monthly snapshots for N months", current.monthly),
		)

	def _ask_repository(self, current: "Repository | None" = None):
		return Repository(
			name = self._ask_name(None if (current is None) else current.name),
			destination = self._ask("Destination (e.g. sftp:user@host:path)", None if (current is None) else current.destination, required = True),
			password = self._ask_password(None if (current is None) else current.password),
			paths = self._ask_list("Backup paths", None if (current is None) else current.paths, required = True),
			exclude = self._ask_list("Exclude patterns", None if (current is None) else current.exclude),
			retention = self._ask_retention(None if (current is None) else current.retention),
			pre_backup = self._ask_optional("Pre-backup hook", None if (current is None) else current.pre_backup),
			post_backup = self._ask_optional("Post-backup hook", None if (current is None) else current.post_backup),
		)

	def _select_repository(self):
		repositories = self._config.repositories
		if len(repositories) == 0:
			print("No repositories configured.")
			return None
		for (number, repository) in enumerate(repositories, 1):
			print(f"  {number}) {repository.name} ({repository.destination})")
		answer = self._ask("Repository number or name (empty to cancel)")
		if answer == "":
			return None
		if answer.isdigit() and (1 <= int(answer) <= len(repositories)):
			return repositories[int(answer) - 1]
		return self._config.get_repository(answer)

	def _show(self):
		print(format_configuration(self._config))

	def _add_repository(self):
		repository = self._ask_repository()
		self._config.add_repository(repository)
		self._modified = True
		print(f"Repository '{repository.name}' added.")

	def _edit_repository(self):
		current = self._select_repository()
		if current is None:
			return
		repository = self._ask_repository(current)
		self._config.replace_repository(current.name, repository)
		self._modified = True
		print(f"Repository '{repository.name}' updated.")

	def _delete_repository(self):
		repository = self._select_repository()
		if repository is None:
			return
		if self._ask_yes_no(f"Really delete repository '{repository.name}'?"):
			self._config.remove_repository(repository.name)
			self._modified = True
			print(f"Repository '{repository.name}' deleted.")

	def _edit_settings(self):
		settings = self._config.settings
		while True:
			schedule = self._ask("Cron schedule", settings.schedule, required = True)
			try:
				Settings.validate_schedule(schedule)
				break
			except ConfigurationException as e:
				print(e)
		log_file = self._ask("Log file", settings.log_file, required = True)
		restic_binary = self._ask("restic binary", settings.restic_binary, required = True)
		bot_token = self._ask_secret("Telegram bot token", settings.telegram.bot_token)
		chat_id = self._ask_optional("Telegram chat id", settings.telegram.chat_id) or ""
		self._config.settings = Settings(log_file = log_file, schedule = schedule, restic_binary = restic_binary, telegram = TelegramSettings(bot_token = bot_token, chat_id = chat_id))
		self._modified = True
		print("Settings updated.")

	def _print_menu(self):
		print()
		for (number, (text, _)) in enumerate(self._menu, 1):
			print(f"  {number}) {text}")

	def run(self):
		try:
			while True:
				self._print_menu()
				choice = self._prompt("Choice: ").strip()
				if (not choice.isdigit()) or (not 1 <= int(choice) <= len(self._menu)):
					print("Invalid choice.")
					continue
				(_, handler) = self._menu[int(choice) - 1]
				if handler is True:
					return True
				if handler is False:
					if self._modified and (not self._ask_yes_no("Discard unsaved changes?")):
						continue
					return False
				try:
					handler()
				except ConfigurationException as e:
					print(f"Error: {e}")
		except EOFError:
			print()
			return False
