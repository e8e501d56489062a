import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from git import Repo
from loguru import logger

from . import launcher
from .config import Settings, load_settings
from .dispatch import CALLBACKS, dispatch
from .plan_store import load_plan
from .todo_editor import render_todo

LOG_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{message}</level>"


def _not_crash(record) -> bool:
    return not record["extra"].get("crash", False)


def set_callback_logger(settings: Settings) -> None:
    """Log editor callbacks to stderr, Git owns stdout."""
    logger.remove()
    logger.add(
        sink=sys.stderr,
        format=LOG_FORMAT,
        level=settings.log_level,
        filter=_not_crash,
    )


def set_logger(verbose: bool, silent: bool, settings: Settings) -> None:
    """Set up the Loguru logger."""
    logger.remove()
    log_file = settings.data_dir / "rebase-editor.log"

    if verbose:
        logger.add(
            sink=sys.stdout, format=LOG_FORMAT, level="DEBUG", filter=_not_crash
        )
        logger.add(
            sink=log_file, format=LOG_FORMAT, level="DEBUG", filter=_not_crash
        )
    elif silent:
        logger.add(
            sink=log_file, format=LOG_FORMAT, level="ERROR", filter=_not_crash
        )
    else:
        logger.add(
            sink=sys.stdout, format=LOG_FORMAT, level="INFO", filter=_not_crash
        )


def open_repo(path: Path) -> Repo:
    """Open the repository containing path."""
    return Repo(path, search_parent_directories=True)


def render_command(args: argparse.Namespace) -> int:
    for line in render_todo(load_plan(args.plan_file)):
        print(line)
    return 0


def start_command(args: argparse.Namespace) -> int:
    plan = load_plan(args.plan_file)
    if not launcher.start_rebase(open_repo(args.repo), args.base, plan):
        logger.info("Run 'rebase-editor continue' once the stop is resolved")
    return 0


def continue_command(args: argparse.Namespace) -> int:
    if not launcher.continue_rebase(open_repo(args.repo)):
        logger.info("Rebase stopped again")
    return 0


def abort_command(args: argparse.Namespace) -> int:
    launcher.abort_rebase(open_repo(args.repo))
    logger.info("Rebase aborted")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create a parser for the command line arguments."""
    parser = argparse.ArgumentParser(
        prog="rebase-editor",
        description="Run planned Git interactive rebases without an editor",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )
    parser.add_argument(
        "-q", "--silent", action="store_true", help="Disable logging to stdout"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    repo_parser = argparse.ArgumentParser(add_help=False)
    repo_parser.add_argument(
        "-r",
        "--repo",
        metavar="REPO",
        type=Path,
        default=Path.cwd(),
        help="Path inside the repository. Defaults to the current directory",
    )

    render = subparsers.add_parser(
        "render", help="Print the todo list a plan file produces"
    )
    render.add_argument(
        "plan_file", metavar="PLAN_FILE", type=Path, help="JSON job plan"
    )
    render.set_defaults(func=render_command)

    start = subparsers.add_parser(
        "start", parents=[repo_parser], help="Start a planned interactive rebase"
    )
    start.add_argument(
        "base", metavar="BASE", type=str, help="Commit to rebase onto"
    )
    start.add_argument(
        "plan_file", metavar="PLAN_FILE", type=Path, help="JSON job plan"
    )
    start.set_defaults(func=start_command)

    resume = subparsers.add_parser(
        "continue", parents=[repo_parser], help="Continue a stopped rebase"
    )
    resume.set_defaults(func=continue_command)

    abort = subparsers.add_parser(
        "abort", parents=[repo_parser], help="Abort the rebase and drop its plan"
    )
    abort.set_defaults(func=abort_command)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Rebase-Editor

    When Git launches the program as its sequence or message editor the
    matching callback rewrites the file from the prepared plan and the exit
    code is returned straight away. Any other arguments go to the command
    line interface used to prepare and drive planned rebases.
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    settings = load_settings()

    if argv and argv[0] in CALLBACKS:
        set_callback_logger(settings)
    exit_code = dispatch(argv, settings)
    if exit_code is not None:
        return exit_code

    args = create_parser().parse_args(argv)
    set_logger(args.verbose, args.silent, settings)
    return args.func(args)
