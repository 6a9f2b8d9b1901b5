"""bufed CLI entry point.

Allows running via `python -m bufed` and provides the console script
defined in `pyproject.toml`.

Usage:
    bufed [--log-level LEVEL] [FILE]
    bufed --version
    bufed --keytest
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import platformdirs

from .constants import EditorConstants
from .version import get_version_string

logger = logging.getLogger(__name__)


def configure_logging(level_name: Optional[str] = None, log_dir: Optional[Path] = None) -> Path:
    """Send log records to a file; the terminal belongs to the editor.

    Returns:
        Path of the log file
    """
    level_name = (level_name
                  or os.environ.get(EditorConstants.LOG_LEVEL_ENV)
                  or EditorConstants.DEFAULT_LOG_LEVEL)
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level: {level_name}")
    log_dir = log_dir or Path(platformdirs.user_log_dir(EditorConstants.APP_NAME, EditorConstants.APP_AUTHOR))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / EditorConstants.LOG_FILE_NAME
    logging.basicConfig(
        filename=str(log_path),
        level=level,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    return log_path


def run_keyboard_test() -> None:
    """Print parsed key events until ESC, using the editor's input stack."""
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler

    term = TerminalInterface()
    kb = KeyboardHandler(term)
    term.setup()
    try:
        term.stream.write("Keyboard test mode - press keys to see parsed events. Quit with ESC.\r\n")
        term.stream.flush()
        for ev in kb.events():
            if ev.is_special('escape'):
                break
            raw = ev.raw.encode('unicode_escape').decode('ascii')
            term.stream.write(f"type={ev.key_type.value} value={ev.value!r} raw='{raw}'\r\n")
            term.stream.flush()
    finally:
        term.cleanup()


def parse_args(args: list[str]) -> dict:
    """Very small argument parser: flags first, then an optional filename."""
    options: dict = {"action": "edit", "filename": None, "log_level": None}
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("--version", "-V"):
            options["action"] = "version"
        elif arg in ("--keytest", "--keyboard-test"):
            options["action"] = "keytest"
        elif arg == "--log-level":
            if i + 1 >= len(args):
                raise ValueError("--log-level needs a value")
            options["log_level"] = args[i + 1]
            i += 1
        elif arg.startswith("--log-level="):
            options["log_level"] = arg.split("=", 1)[1]
        elif arg.startswith("-") and arg != "-":
            raise ValueError(f"unknown option: {arg}")
        elif options["filename"] is None:
            options["filename"] = arg
        else:
            raise ValueError("only one file can be edited at a time")
        i += 1
    return options


def main(argv: Optional[list[str]] = None) -> int:
    try:
        options = parse_args(sys.argv[1:] if argv is None else argv)
    except ValueError as e:
        print(f"bufed: {e}", file=sys.stderr)
        return 2
    if options["action"] == "version":
        print(get_version_string())
        return 0

    try:
        configure_logging(options["log_level"])
    except ValueError as e:
        print(f"bufed: {e}", file=sys.stderr)
        return 2

    if options["action"] == "keytest":
        run_keyboard_test()
        return 0

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor()
    try:
        if options["filename"]:
            editor.load_file(options["filename"])
        editor.run()
    except (OSError, UnicodeDecodeError) as e:
        logger.exception("Editing session ended with an error")
        print(f"bufed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
