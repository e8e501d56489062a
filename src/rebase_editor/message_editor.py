import re
from pathlib import Path

from loguru import logger

from .model import EditorOutcome, Job, JobPlan
from .plan_store import load_plan, plan_path
from .todo_editor import REBASE_STATE_DIR_NAME

MESSAGE_FILE_NAME = "COMMIT_EDITMSG"
PROGRESS_FILE_NAME = "done"


def count_completed(done_file: Path) -> int:
    """Number of non-empty lines in Git's rebase-merge/done file."""
    text = done_file.read_text(encoding="utf-8", errors="replace")
    return sum(1 for line in re.split(r"[\r\n]", text) if line)


def current_job(plan: JobPlan, completed: int) -> Job | None:
    """
    Find the job whose message Git is asking for.

    Git appends the step in flight to the done file before invoking the
    message editor, so the current job is the last counted one,
    plan[completed - 1]. Counts outside 1..len(plan) have no current job.
    """
    if completed < 1 or completed > len(plan):
        return None
    return plan[completed - 1]


def _decline(reason: str) -> EditorOutcome:
    logger.debug(f"Message editor declined: {reason}")
    return EditorOutcome.DECLINED


def edit_message(message_file: Path) -> EditorOutcome:
    """
    Replace the commit message Git handed to the editor with the planned one.

    Raises:
        MalformedPlanError: If the sidecar exists but cannot be parsed.
    """
    if message_file.name.lower() != MESSAGE_FILE_NAME.lower():
        return _decline(f"{message_file.name} is not {MESSAGE_FILE_NAME}")

    git_dir = message_file.absolute().parent
    jobs_file = plan_path(git_dir)
    if not jobs_file.exists():
        return _decline(f"no plan at {jobs_file}")

    plan = load_plan(jobs_file)
    done_file = git_dir / REBASE_STATE_DIR_NAME / PROGRESS_FILE_NAME
    if not done_file.exists():
        return _decline(f"no progress marker at {done_file}")

    completed = count_completed(done_file)
    job = current_job(plan, completed)
    if job is None:
        logger.warning(
            f"Progress {completed} outside 1..{len(plan)}, "
            "leaving message untouched"
        )
        return EditorOutcome.DECLINED

    message_file.write_text(job.message, encoding="utf-8", newline="")
    logger.info(f"Message for {job.commit_id} written to {message_file}")
    return EditorOutcome.WRITTEN
