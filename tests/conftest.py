import json
import subprocess
from pathlib import Path

import pytest

from resticwrap.Configuration import Configuration, Repository, Retention, Settings, TelegramSettings


class SubprocessRecorder:
	"""Stands in for subprocess.run; every call is recorded and answered
	with a CompletedProcess whose return code can be chosen per keyword."""

	def __init__(self) -> None:
		self.calls: list[dict] = []
		self.returncodes: dict[str, int] = {}
		self.stdout = ""
		self.stderr = ""

	def __call__(self, cmd, **kwargs) -> subprocess.CompletedProcess:
		cmd = list(cmd)
		self.calls.append({"cmd": cmd, **kwargs})
		returncode = 0
		for (keyword, value) in self.returncodes.items():
			if keyword in cmd:
				returncode = value
		return subprocess.CompletedProcess(cmd, returncode, stdout=self.stdout, stderr=self.stderr)

	@property
	def commands(self) -> list[list[str]]:
		return [call["cmd"] for call in self.calls]


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> SubprocessRecorder:
	recorder = SubprocessRecorder()
	monkeypatch.setattr(subprocess, "run", recorder)
	return recorder


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
	home = tmp_path / "home"
	home.mkdir()
	monkeypatch.setenv("HOME", str(home))
	return home


@pytest.fixture
def documents_repository() -> Repository:
	return Repository(
		name="documents",
		destination="sftp:user@host:backup",
		password="secret",
		paths=["~/Documents", "/etc"],
		exclude=["*.tmp", "cache"],
		retention=Retention(last=24, daily=7, weekly=4, monthly=12),
	)


@pytest.fixture
def photos_repository() -> Repository:
	return Repository(
		name="photos",
		destination="/mnt/usb/restic",
		password="other-secret",
		paths=["/srv/photos"],
	)


@pytest.fixture
def sample_config(documents_repository: Repository, photos_repository: Repository) -> Configuration:
	settings = Settings(schedule="30 3 * * *", log_file="/var/log/resticwrap.log", telegram=TelegramSettings())
	return Configuration(repositories=[documents_repository, photos_repository], settings=settings)


@pytest.fixture
def config_file(tmp_path: Path, sample_config: Configuration) -> Path:
	filename = tmp_path / "backup-repos.json"
	sample_config.save(str(filename))
	return filename


def write_json(path: Path, data: object) -> Path:
	path.write_text(json.dumps(data), encoding="utf-8")
	return path
