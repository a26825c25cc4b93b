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

import html
import socket
import logging
import requests
from resticwrap.Exceptions import NotificationException

_log = logging.getLogger(__spec__.name)

class TelegramNotifier():
	API_URI = "https://api.telegram.org/bot{bot_token}/sendMessage"

	def __init__(self, bot_token: str, chat_id: str, timeout_secs: float = 15):
		self._bot_token = bot_token
		self._chat_id = chat_id
		self._timeout_secs = timeout_secs

	@classmethod
	def from_settings(cls, telegram: "TelegramSettings"):
		if not telegram.enabled:
			return None
		return cls(bot_token = telegram.bot_token, chat_id = telegram.chat_id)

	@property
	def uri(self):
		return self.API_URI.format(bot_token = self._bot_token)

	def send_message(self, text: str):
		payload = {
			"chat_id":		self._chat_id,
			"text":			text,
			"parse_mode":	"HTML",
		}
		# Exception texts would contain the URI and thereby the bot token,
		# so only the exception class is reported.
		try:
			response = requests.post(self.uri, data = payload, timeout = self._timeout_secs)
		except requests.RequestException as e:
			raise NotificationException(f"Could not reach Telegram API: {e.__class__.__name__}") from None
		if not response.ok:
			raise NotificationException(f"Telegram API returned HTTP {response.status_code}: {response.text[:200]}")
		_log.debug(f"Telegram notification sent to chat {self._chat_id}")

	@staticmethod
	def format_backup_report(results: list["BackupResult"], hostname: str | None = None):
		hostname = hostname or socket.gethostname()
		failed = sum(1 for result in results if not result.success)
		lines = [ f"<b>Backup report from {html.escape(hostname)}</b>" ]
		for result in results:
			mark = "✅" if result.success else "❌"
			lines.append(f"{mark} <code>{html.escape(result.name)}</code>: {html.escape(result.describe())}")
		if failed == 0:
			lines.append(f"All {len(results)} repositories backed up successfully.")
		else:
			lines.append(f"{failed} of {len(results)} repositories failed.")
		return "\n".join(lines)

	def notify_backup(self, results: list["BackupResult"]):
		self.send_message(self.format_backup_report(results))
