import json

import pytest

from rebase_editor.errors import MalformedPlanError
from rebase_editor.model import Job, JobPlan, RebaseAction
from rebase_editor.plan_store import (
    PLAN_FILE_NAME,
    load_plan,
    parse_plan,
    plan_path,
    remove_plan,
    write_plan,
)

from .conftest import SAMPLE_JOBS


def test_plan_path(git_dir):
    assert plan_path(git_dir) == git_dir / PLAN_FILE_NAME


def test_load_plan(write_jobs):
    plan = load_plan(write_jobs())
    assert [job.commit_id for job in plan.jobs] == ["abc123", "def456"]
    assert plan[1].action is RebaseAction.REWORD
    assert plan[1].message == "fix typo"


def test_parse_bare_array():
    plan = parse_plan(json.dumps(SAMPLE_JOBS))
    assert len(plan) == 2


@pytest.mark.parametrize(
    "text",
    [
        "",
        "not json",
        '{"jobs": [{"action": "Pick"}]}',
        '{"jobs": "abc123"}',
        "42",
        "{}",
        '{"plan": []}',
        '{"Jobs": [{"action": "Pick", "commitId": "abc123"}]}',
        '{"jobs": [], "version": 2}',
    ],
)
def test_parse_malformed(text):
    with pytest.raises(MalformedPlanError):
        parse_plan(text)


def test_malformed_error_names_source(git_dir):
    path = git_dir / PLAN_FILE_NAME
    path.write_text("{", encoding="utf-8")
    with pytest.raises(MalformedPlanError) as excinfo:
        load_plan(path)
    assert excinfo.value.path == path
    assert str(path) in str(excinfo.value)


def test_write_plan_is_readable(git_dir):
    plan = JobPlan(
        jobs=(
            Job(action=RebaseAction.PICK, commit_id="abc123"),
            Job(
                action=RebaseAction.REWORD,
                commit_id="def456",
                message="fix typo\n\nbody",
            ),
        )
    )
    target = write_plan(plan, git_dir)
    assert target == plan_path(git_dir)
    assert json.loads(target.read_text())["jobs"][1]["commitId"] == "def456"
    assert load_plan(target) == plan
    assert [p.name for p in git_dir.iterdir() if p.is_file()] == [PLAN_FILE_NAME]


def test_remove_plan(write_jobs, git_dir):
    write_jobs()
    remove_plan(git_dir)
    assert not plan_path(git_dir).exists()
    remove_plan(git_dir)
