import pytest

from resticwrap.ConfigMenu import ConfigMenu
from resticwrap.Configuration import Configuration, Retention, Settings, TelegramSettings


class ScriptedPrompt:
	"""Answers prompts from a fixed list; running out of answers behaves
	like the user pressing Ctrl-D."""

	def __init__(self, answers: list[str]) -> None:
		self.answers = list(answers)
		self.questions: list[str] = []

	def __call__(self, question: str) -> str:
		self.questions.append(question)
		if len(self.answers) == 0:
			raise EOFError()
		return self.answers.pop(0)


def make_menu(config: Configuration, answers: list[str], passwords: list[str] | None = None) -> ConfigMenu:
	return ConfigMenu(config, prompt=ScriptedPrompt(answers), prompt_password=ScriptedPrompt(passwords or []))


def test_add_repository_and_save() -> None:
	config = Configuration()
	menu = make_menu(config, [
		"2",
		"offsite",
		"sftp:me@nas:restic",
		"~/Documents, ~/Pictures",
		"*.iso",
		"y", "10", "7", "", "6",
		"",
		"~/bin/notify",
		"6",
	], passwords=["hunter2"])

	assert menu.run() is True
	repository = config.get_repository("offsite")
	assert repository.destination == "sftp:me@nas:restic"
	assert repository.password == "hunter2"
	assert repository.paths == ["~/Documents", "~/Pictures"]
	assert repository.exclude == ["*.iso"]
	assert repository.retention == Retention(last=10, daily=7, monthly=6)
	assert repository.pre_backup is None
	assert repository.post_backup == "~/bin/notify"


def test_required_values_are_asked_again(capsys: pytest.CaptureFixture[str]) -> None:
	config = Configuration()
	menu = make_menu(config, [
		"2",
		"", "offsite",
		"", "/mnt/backup",
		"", "/data",
		"",
		"n",
		"", "",
		"6",
	], passwords=["", "pw"])

	assert menu.run() is True
	assert config.get_repository("offsite").paths == ["/data"]
	output = capsys.readouterr().out
	assert "A value is required." in output
	assert "A password is required." in output
	assert "At least one entry is required." in output


def test_add_rejects_existing_name(sample_config: Configuration, capsys: pytest.CaptureFixture[str]) -> None:
	menu = make_menu(sample_config, ["2", "documents", "newname", "/repo", "/data", "", "n", "", "", "6"], passwords=["pw"])

	assert menu.run() is True
	assert "Repository 'documents' already exists." in capsys.readouterr().out
	assert sample_config.has_repository("newname")


def test_edit_repository_keeps_defaults(sample_config: Configuration) -> None:
	menu = make_menu(sample_config, [
		"3", "1",
		"docs",
		"",
		"",
		"-",
		"y", "", "", "", "-",
		"",
		"",
		"6",
	], passwords=[""])

	assert menu.run() is True
	assert [repository.name for repository in sample_config.repositories] == ["docs", "photos"]
	repository = sample_config.get_repository("docs")
	assert repository.destination == "sftp:user@host:backup"
	assert repository.password == "secret"
	assert repository.paths == ["~/Documents", "/etc"]
	assert repository.exclude == []
	assert repository.retention == Retention(last=24, daily=7, weekly=4)


def test_delete_repository_by_name(sample_config: Configuration) -> None:
	menu = make_menu(sample_config, ["4", "photos", "y", "6"])

	assert menu.run() is True
	assert [repository.name for repository in sample_config.repositories] == ["documents"]


def test_delete_can_be_declined(sample_config: Configuration) -> None:
	menu = make_menu(sample_config, ["4", "2", "n", "7"])

	assert menu.run() is False
	assert len(sample_config.repositories) == 2
	assert not menu.modified


def test_select_unknown_repository_reports_error(sample_config: Configuration, capsys: pytest.CaptureFixture[str]) -> None:
	menu = make_menu(sample_config, ["3", "nope", "7"])

	assert menu.run() is False
	assert "Error: Repository 'nope' not found" in capsys.readouterr().out


def test_edit_settings(sample_config: Configuration, capsys: pytest.CaptureFixture[str]) -> None:
	menu = make_menu(sample_config, [
		"5",
		"every day", "@daily",
		"",
		"/usr/local/bin/restic",
		"123:abc",
		"42",
		"6",
	])

	assert menu.run() is True
	settings = sample_config.settings
	assert settings.schedule == "@daily"
	assert settings.log_file == "/var/log/resticwrap.log"
	assert settings.restic_binary == "/usr/local/bin/restic"
	assert settings.telegram.enabled
	assert settings.telegram.chat_id == "42"
	assert "Invalid cron schedule 'every day'" in capsys.readouterr().out


def test_quit_with_changes_asks_for_confirmation(sample_config: Configuration) -> None:
	menu = make_menu(sample_config, ["4", "1", "y", "7", "n", "7", "y"])

	assert menu.run() is False
	assert menu.modified


def test_invalid_choice_and_show(sample_config: Configuration, capsys: pytest.CaptureFixture[str]) -> None:
	menu = make_menu(sample_config, ["9", "abc", "1", "7"])

	assert menu.run() is False
	output = capsys.readouterr().out
	assert output.count("Invalid choice.") == 2
	assert "Configured Backup Repositories" in output


def test_end_of_input_quits_without_saving(sample_config: Configuration) -> None:
	menu = make_menu(sample_config, ["2", "new"])

	assert menu.run() is False
	assert not sample_config.has_repository("new")


def test_edit_settings_hides_bot_token(sample_config: Configuration) -> None:
	sample_config.settings = Settings(telegram=TelegramSettings(bot_token="123:very-secret", chat_id="42"))
	prompt = ScriptedPrompt(["5", "", "", "", "", "", "6"])
	menu = ConfigMenu(sample_config, prompt=prompt, prompt_password=ScriptedPrompt([]))

	assert menu.run() is True
	assert sample_config.settings.telegram.bot_token == "123:very-secret"
	assert "Telegram bot token [set]: " in prompt.questions
	assert not any("very-secret" in question for question in prompt.questions)


def test_edit_settings_clears_bot_token(sample_config: Configuration) -> None:
	sample_config.settings = Settings(telegram=TelegramSettings(bot_token="123:abc", chat_id="42"))
	menu = make_menu(sample_config, ["5", "", "", "", "-", "", "6"])

	assert menu.run() is True
	assert sample_config.settings.telegram.bot_token == ""
	assert not sample_config.settings.telegram.enabled
