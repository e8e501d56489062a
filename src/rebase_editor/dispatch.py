from collections.abc import Callable, Sequence
from pathlib import Path

from loguru import logger

from .config import Settings, load_settings
from .crash import report_crash
from .message_editor import edit_message
from .model import EditorOutcome
from .todo_editor import edit_todo

TODO_EDITOR_FLAG = "--rebase-todo-editor"
MESSAGE_EDITOR_FLAG = "--rebase-message-editor"

CALLBACKS: dict[str, Callable[[Path], EditorOutcome]] = {
    TODO_EDITOR_FLAG: edit_todo,
    MESSAGE_EDITOR_FLAG: edit_message,
}


def dispatch(
    argv: Sequence[str], settings: Settings | None = None
) -> int | None:
    """
    Run the editor callback selected by the process arguments.

    Args:
        argv: Process arguments without the program name.
        settings: Where crash logs go. Loaded from the environment if omitted.

    Returns:
        The exit code for a recognized callback, or None when the
        arguments are not an editor callback.
    """
    if len(argv) < 2 or argv[0] not in CALLBACKS:
        return None

    flag, target = argv[0], Path(argv[1])
    logger.debug(f"Launched as {flag} for {target}")
    try:
        outcome = CALLBACKS[flag](target)
    except Exception as e:
        report_crash(e, (settings or load_settings()).data_dir)
        return 1
    logger.debug(f"{flag}: {outcome}")
    return 0
