from pathlib import Path

import pytest

from rebase_editor.config import DEFAULT_DATA_DIR, DEFAULT_LOG_LEVEL, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("REBASE_EDITOR_DATA_DIR", raising=False)
    monkeypatch.delenv("REBASE_EDITOR_LOG_LEVEL", raising=False)


def test_defaults():
    settings = load_settings()
    assert settings.data_dir == DEFAULT_DATA_DIR
    assert settings.log_level == DEFAULT_LOG_LEVEL


def test_reads_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("REBASE_EDITOR_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("REBASE_EDITOR_LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.data_dir == Path(tmp_path)
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("level", ["verbose", "", "loud"])
def test_unknown_log_level_falls_back(monkeypatch, level):
    monkeypatch.setenv("REBASE_EDITOR_LOG_LEVEL", level)
    assert load_settings().log_level == DEFAULT_LOG_LEVEL
