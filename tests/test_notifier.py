import pytest
import requests

from resticwrap.Configuration import TelegramSettings
from resticwrap.Exceptions import NotificationException
from resticwrap.Notifier import TelegramNotifier
from resticwrap.ResticEngine import BackupResult


class FakeResponse:
	def __init__(self, status_code: int = 200, text: str = "{\"ok\": true}") -> None:
		self.status_code = status_code
		self.text = text

	@property
	def ok(self) -> bool:
		return self.status_code < 400


@pytest.fixture
def posts(monkeypatch: pytest.MonkeyPatch) -> list[dict]:
	posts = []

	def fake_post(url, **kwargs):
		posts.append({"url": url, **kwargs})
		return FakeResponse()

	monkeypatch.setattr(requests, "post", fake_post)
	return posts


def test_from_settings_requires_token_and_chat_id() -> None:
	assert TelegramNotifier.from_settings(TelegramSettings()) is None
	assert TelegramNotifier.from_settings(TelegramSettings(bot_token="123:abc")) is None
	assert TelegramNotifier.from_settings(TelegramSettings(bot_token="123:abc", chat_id="42")) is not None


def test_send_message_posts_html_form(posts: list[dict]) -> None:
	TelegramNotifier("123:abc", "42").send_message("<b>hello</b>")

	assert posts == [{
		"url": "https://api.telegram.org/bot123:abc/sendMessage",
		"data": {"chat_id": "42", "text": "<b>hello</b>", "parse_mode": "HTML"},
		"timeout": 15,
	}]


def test_network_error_does_not_leak_token(monkeypatch: pytest.MonkeyPatch) -> None:
	def fake_post(url, **kwargs):
		raise requests.ConnectionError(f"Max retries exceeded with url: {url}")

	monkeypatch.setattr(requests, "post", fake_post)

	with pytest.raises(NotificationException) as excinfo:
		TelegramNotifier("123:secret-token", "42").send_message("text")
	assert "ConnectionError" in str(excinfo.value)
	assert "secret-token" not in str(excinfo.value)


def test_http_error_raises(monkeypatch: pytest.MonkeyPatch) -> None:
	monkeypatch.setattr(requests, "post", lambda url, **kwargs: FakeResponse(400, "Bad Request: chat not found"))

	with pytest.raises(NotificationException, match="HTTP 400: Bad Request: chat not found"):
		TelegramNotifier("123:abc", "42").send_message("text")


def test_backup_report_lists_every_repository() -> None:
	results = [BackupResult("documents", 0), BackupResult("photos", 12, failed_stage="backup")]

	report = TelegramNotifier.format_backup_report(results, hostname="nas")

	assert report.splitlines() == [
		"<b>Backup report from nas</b>",
		"✅ <code>documents</code>: success",
		"❌ <code>photos</code>: failed during backup (exit status 12, WrongPassword)",
		"1 of 2 repositories failed.",
	]


def test_backup_report_escapes_html() -> None:
	report = TelegramNotifier.format_backup_report([BackupResult("a<b>&c", 0)], hostname="host<1>")

	assert "host&lt;1&gt;" in report
	assert "<code>a&lt;b&gt;&amp;c</code>" in report
	assert report.endswith("All 1 repositories backed up successfully.")


def test_notify_backup_sends_report(posts: list[dict]) -> None:
	TelegramNotifier("123:abc", "42").notify_backup([BackupResult("documents", 0)])

	assert "documents" in posts[0]["data"]["text"]
