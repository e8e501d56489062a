import json
import sys
from pathlib import Path

import pytest
from loguru import logger

from rebase_editor.config import Settings
from rebase_editor.plan_store import PLAN_FILE_NAME

SAMPLE_JOBS = [
    {"action": "Pick", "commitId": "abc123", "message": ""},
    {"action": "Reword", "commitId": "def456", "message": "fix typo"},
]


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")


@pytest.fixture
def git_dir(tmp_path: Path) -> Path:
    """A git directory with an in-progress merge-based rebase."""
    git_dir = tmp_path / ".git"
    (git_dir / "rebase-merge").mkdir(parents=True)
    return git_dir


@pytest.fixture
def write_jobs(git_dir: Path):
    def _write(jobs=SAMPLE_JOBS) -> Path:
        path = git_dir / PLAN_FILE_NAME
        path.write_text(json.dumps({"jobs": jobs}), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(data_dir=tmp_path / "data", log_level="DEBUG")
