import shlex
import sys
from pathlib import Path

from git import GitCommandError, Repo
from loguru import logger

from .dispatch import MESSAGE_EDITOR_FLAG, TODO_EDITOR_FLAG
from .errors import RebaseInProgressError
from .model import JobPlan
from .plan_store import remove_plan, write_plan


def editor_command(flag: str) -> str:
    """Shell command Git runs to call back into this program."""
    return shlex.join([sys.executable, "-m", "rebase_editor", flag])


def editor_environment() -> dict[str, str]:
    """Environment pointing Git's editor hooks at this program."""
    return {
        "GIT_SEQUENCE_EDITOR": editor_command(TODO_EDITOR_FLAG),
        "GIT_EDITOR": editor_command(MESSAGE_EDITOR_FLAG),
    }


def rebase_in_progress(git_dir: Path) -> bool:
    """Check if the old or current rebase state directory exists"""
    return (git_dir / "rebase-apply").exists() or (
        git_dir / "rebase-merge"
    ).exists()


def _run_rebase(repo: Repo, *args: str) -> bool:
    git_dir = Path(repo.git_dir)
    try:
        repo.git.rebase(*args, env=editor_environment())
    except GitCommandError as e:
        if not rebase_in_progress(git_dir):
            remove_plan(git_dir)
            raise
        logger.warning(f"Rebase stopped: {e}")
        return False

    if rebase_in_progress(git_dir):
        logger.info("Rebase stopped for editing")
        return False

    remove_plan(git_dir)
    logger.info("Rebase finished")
    return True


def start_rebase(repo: Repo, base: str, plan: JobPlan) -> bool:
    """
    Rebase the current branch onto base following a plan.

    The plan is written next to Git's rebase state before Git starts and
    removed once the rebase finishes. While Git is stopped at an edit step
    or a conflict the plan stays in place so later message-editor calls
    still find it.

    Returns:
        True if the rebase finished, False if Git stopped part way.

    Raises:
        RebaseInProgressError: If the repository is already rebasing.
        GitCommandError: If Git failed without leaving a rebase in progress.
    """
    git_dir = Path(repo.git_dir)
    if rebase_in_progress(git_dir):
        raise RebaseInProgressError(
            f"A rebase is already in progress in {repo.working_dir}"
        )
    write_plan(plan, git_dir)
    logger.info(f"Starting interactive rebase onto {base}")
    return _run_rebase(repo, "-i", base)


def continue_rebase(repo: Repo) -> bool:
    """Continue a stopped rebase with the editor hooks still wired."""
    return _run_rebase(repo, "--continue")


def abort_rebase(repo: Repo) -> None:
    """Abort the current rebase and drop its plan."""
    try:
        repo.git.rebase("--abort")
    finally:
        remove_plan(Path(repo.git_dir))
