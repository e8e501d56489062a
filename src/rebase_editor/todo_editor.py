from pathlib import Path

from loguru import logger

from .model import EditorOutcome, JobPlan, RebaseAction
from .plan_store import load_plan, plan_path

TODO_FILE_NAME = "git-rebase-todo"
REBASE_STATE_DIR_NAME = "rebase-merge"

_COMMAND_LETTERS = {
    RebaseAction.PICK: "p",
    RebaseAction.EDIT: "e",
    RebaseAction.REWORD: "r",
    RebaseAction.SQUASH: "s",
    RebaseAction.FIXUP: "f",
}


def command_letter(action: RebaseAction) -> str:
    """Git todo command for an action. Everything without a letter is a drop."""
    return _COMMAND_LETTERS.get(action, "d")


def render_todo(plan: JobPlan) -> list[str]:
    """Render a plan as git-rebase-todo lines, one per job."""
    return [f"{command_letter(job.action)} {job.commit_id}" for job in plan.jobs]


def _decline(reason: str) -> EditorOutcome:
    logger.debug(f"Todo editor declined: {reason}")
    return EditorOutcome.DECLINED


def edit_todo(todo_file: Path) -> EditorOutcome:
    """
    Replace the todo list Git handed to the sequence editor with the plan.

    The file is left untouched unless it is a git-rebase-todo inside a
    rebase-merge directory whose git directory holds a plan sidecar.

    Raises:
        MalformedPlanError: If the sidecar exists but cannot be parsed.
    """
    if todo_file.name.lower() != TODO_FILE_NAME:
        return _decline(f"{todo_file.name} is not {TODO_FILE_NAME}")

    state_dir = todo_file.absolute().parent
    if not state_dir.is_dir() or state_dir.name != REBASE_STATE_DIR_NAME:
        return _decline(
            f"{state_dir} is not a {REBASE_STATE_DIR_NAME} directory"
        )

    jobs_file = plan_path(state_dir.parent)
    if not jobs_file.exists():
        return _decline(f"no plan at {jobs_file}")

    lines = render_todo(load_plan(jobs_file))
    todo_file.write_text(
        "".join(f"{line}\n" for line in lines), encoding="utf-8", newline=""
    )
    logger.info(f"{len(lines)} todo lines written to {todo_file}")
    return EditorOutcome.WRITTEN
