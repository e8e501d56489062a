import sys

from loguru import logger

from rebase_editor.main import main


def run() -> None:
    try:
        exit_code = main()
    except Exception as e:
        logger.error(e)
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    run()
