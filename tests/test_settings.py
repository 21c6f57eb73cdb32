"""Tests for Settings loading and persistence."""

import json

import pytest
from pydantic import ValidationError

from git_workflow.config.settings import Settings


def test_defaults():
    settings = Settings()
    assert settings.notifications.enabled is True
    assert settings.notifications.level == "INFO"
    assert settings.status.prompt_title == "Git Status"
    assert settings.git.repo_path is None


def test_environment_override(monkeypatch):
    monkeypatch.setenv("GW_NOTIFICATIONS__ENABLED", "false")
    monkeypatch.setenv("GW_UI__LOG_LEVEL", "DEBUG")

    settings = Settings()

    assert settings.notifications.enabled is False
    assert settings.ui.log_level == "DEBUG"


def test_validation():
    with pytest.raises(ValidationError):
        Settings(status={"max_preview_lines": 1})
    with pytest.raises(ValidationError):
        Settings(notifications={"level": "LOUD"})


def test_save_and_load(tmp_path):
    config_path = tmp_path / "nested" / "config.json"
    Settings(status={"prompt_title": "Changes"}).save_to_file(config_path)

    assert json.loads(config_path.read_text())["status"]["prompt_title"] == "Changes"
    assert Settings.from_file(config_path).status.prompt_title == "Changes"


def test_from_missing_file(tmp_path):
    assert Settings.from_file(tmp_path / "missing.json").status.prompt_title == "Git Status"


def test_default_config_file_is_read(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    config_path = tmp_path / "git-workflow" / "config.json"
    config_path.parent.mkdir()
    config_path.write_text(json.dumps({"status": {"show_icons": False}}))

    assert Settings().status.show_icons is False


def test_paths_follow_xdg(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))

    settings = Settings()

    assert settings.config_dir == tmp_path / "cfg" / "git-workflow"
    assert settings.log_file == tmp_path / "cache" / "git-workflow" / "git-workflow.log"
