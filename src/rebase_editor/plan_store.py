import os
import tempfile
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from .errors import MalformedPlanError
from .model import JobPlan

PLAN_FILE_NAME = "rebase_editor_jobs.json"


def plan_path(git_dir: Path) -> Path:
    """Location of the plan sidecar for a git directory."""
    return git_dir / PLAN_FILE_NAME


def parse_plan(text: str, source: Path | None = None) -> JobPlan:
    """
    Validate the JSON text of a plan sidecar.

    Args:
        text: Sidecar contents, either {"jobs": [...]} or a bare job array.
        source: Where the text came from, used in error messages.

    Raises:
        MalformedPlanError: If the text is not JSON of the expected shape.
    """
    try:
        return JobPlan.model_validate_json(text)
    except ValidationError as e:
        raise MalformedPlanError(str(e), source) from e


def load_plan(path: Path) -> JobPlan:
    """Read and validate a plan sidecar."""
    plan = parse_plan(path.read_text(encoding="utf-8"), source=path)
    logger.debug(f"{len(plan)} jobs loaded from {path}")
    return plan


def write_plan(plan: JobPlan, git_dir: Path) -> Path:
    """Atomically write a plan sidecar into a git directory."""
    target = plan_path(git_dir)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{PLAN_FILE_NAME}.", dir=git_dir, text=True
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(plan.model_dump_json(by_alias=True, indent=2))
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.info(f"{len(plan)} jobs written to {target}")
    return target


def remove_plan(git_dir: Path) -> None:
    """Delete the plan sidecar if present."""
    target = plan_path(git_dir)
    if target.exists():
        target.unlink()
        logger.debug(f"Removed {target}")
