from pathlib import Path


class RebaseEditorError(Exception):
    """Base class for rebase editor errors."""


class MalformedPlanError(RebaseEditorError):
    """Raised when a job plan sidecar cannot be parsed."""

    def __init__(self, reason: str, path: Path | None = None):
        self.reason = reason
        self.path = path
        location = f" in {path}" if path else ""
        super().__init__(f"Malformed rebase plan{location}: {reason}")


class RebaseInProgressError(RebaseEditorError):
    """Raised when a rebase is started while another is running."""
