import subprocess

import pytest

from resticwrap.Crontab import CrontabEditor
from resticwrap.Exceptions import ExternalCommandFailedException


class FakeCrontab:
	"""Emulates `crontab -l` and `crontab -` on an in-memory table."""

	def __init__(self, lines: list[str] | None = None, read_error: str | None = None) -> None:
		self.lines = lines
		self.read_error = read_error
		self.writes: list[str] = []

	def __call__(self, cmd, **kwargs) -> subprocess.CompletedProcess:
		if cmd[1:] == ["-l"]:
			if self.read_error is not None:
				return subprocess.CompletedProcess(cmd, 1, stdout="", stderr=self.read_error)
			if self.lines is None:
				return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="no crontab for user\n")
			return subprocess.CompletedProcess(cmd, 0, stdout="".join(f"{line}\n" for line in self.lines), stderr="")
		if cmd[1:] == ["-"]:
			self.writes.append(kwargs["input"])
			self.lines = kwargs["input"].splitlines()
			return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")
		raise AssertionError(f"unexpected command {cmd}")


@pytest.fixture
def fake_crontab(monkeypatch: pytest.MonkeyPatch) -> FakeCrontab:
	fake = FakeCrontab(["MAILTO=admin", "0 * * * * /usr/bin/other-job"])
	monkeypatch.setattr(subprocess, "run", fake)
	return fake


def test_backup_line_format() -> None:
	line = CrontabEditor.backup_line("0 2 * * *", "/usr/local/bin/resticwrap", "/home/u/backup.log")

	assert line == "0 2 * * * /usr/local/bin/resticwrap backup >> /home/u/backup.log 2>&1"


def test_backup_line_quotes_paths_and_config() -> None:
	line = CrontabEditor.backup_line("@daily", "/opt/my tools/resticwrap", "/var/log/backup.log", config_file="/etc/my repos.json")

	assert line == "@daily '/opt/my tools/resticwrap' backup -c '/etc/my repos.json' >> /var/log/backup.log 2>&1"
	assert CrontabEditor.marker("/opt/my tools/resticwrap") in line


def test_install_appends_and_keeps_foreign_lines(fake_crontab: FakeCrontab) -> None:
	editor = CrontabEditor()
	line = CrontabEditor.backup_line("0 2 * * *", "/bin/resticwrap", "/tmp/backup.log")

	replaced = editor.install(line, CrontabEditor.marker("/bin/resticwrap"))

	assert replaced == []
	assert fake_crontab.lines == ["MAILTO=admin", "0 * * * * /usr/bin/other-job", line]
	assert fake_crontab.writes[-1].endswith("\n")


def test_install_replaces_exactly_own_line(fake_crontab: FakeCrontab) -> None:
	fake_crontab.lines.append("0 1 * * * /bin/resticwrap backup >> /tmp/old.log 2>&1")
	editor = CrontabEditor()
	line = CrontabEditor.backup_line("30 4 * * *", "/bin/resticwrap", "/tmp/backup.log")

	replaced = editor.install(line, CrontabEditor.marker("/bin/resticwrap"))

	assert replaced == ["0 1 * * * /bin/resticwrap backup >> /tmp/old.log 2>&1"]
	assert fake_crontab.lines == ["MAILTO=admin", "0 * * * * /usr/bin/other-job", line]


def test_install_into_empty_crontab(monkeypatch: pytest.MonkeyPatch) -> None:
	fake = FakeCrontab(None)
	monkeypatch.setattr(subprocess, "run", fake)

	CrontabEditor().install("@daily /bin/resticwrap backup", "/bin/resticwrap backup")

	assert fake.lines == ["@daily /bin/resticwrap backup"]


def test_find_and_remove(fake_crontab: FakeCrontab) -> None:
	fake_crontab.lines.append("0 1 * * * /bin/resticwrap backup >> /tmp/old.log 2>&1")
	editor = CrontabEditor()
	marker = CrontabEditor.marker("/bin/resticwrap")

	assert editor.find(marker) == ["0 1 * * * /bin/resticwrap backup >> /tmp/old.log 2>&1"]
	assert editor.remove(marker) == ["0 1 * * * /bin/resticwrap backup >> /tmp/old.log 2>&1"]
	assert fake_crontab.lines == ["MAILTO=admin", "0 * * * * /usr/bin/other-job"]
	assert editor.find(marker) == []


def test_remove_without_own_line_does_not_write(fake_crontab: FakeCrontab) -> None:
	assert CrontabEditor().remove("/bin/resticwrap backup") == []
	assert fake_crontab.writes == []


def test_read_failure_raises(monkeypatch: pytest.MonkeyPatch) -> None:
	monkeypatch.setattr(subprocess, "run", FakeCrontab(read_error="crontab: permission denied\n"))

	with pytest.raises(ExternalCommandFailedException, match="permission denied"):
		CrontabEditor().read_lines()


def test_missing_crontab_binary_raises(monkeypatch: pytest.MonkeyPatch) -> None:
	def fake_run(cmd, **kwargs):
		raise FileNotFoundError(2, "No such file or directory")

	monkeypatch.setattr(subprocess, "run", fake_run)

	with pytest.raises(ExternalCommandFailedException, match="Is cron installed"):
		CrontabEditor().read_lines()


def test_backup_line_escapes_percent_signs() -> None:
	line = CrontabEditor.backup_line("@daily", "/bin/resticwrap", "/var/log/backup-%Y.log", config_file="/etc/100%.json")

	assert line == "@daily /bin/resticwrap backup -c /etc/100\\%.json >> /var/log/backup-\\%Y.log 2>&1"
	assert CrontabEditor.marker("/opt/50%/resticwrap") == "/opt/50\\%/resticwrap backup"
