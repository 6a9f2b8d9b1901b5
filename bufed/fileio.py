"""Plain-text load and save for buffers.

One buffer line per text line. Every line is written newline-terminated,
including the last one.
"""

import logging
import os
import tempfile

from .buffer import split_lines
from .constants import EditorConstants

logger = logging.getLogger(__name__)


def read_lines(path: str) -> list[str]:
    """Read ``path`` into a list of lines.

    A missing file is a new document and yields an empty list. Any other
    failure (permissions, a directory, bad encoding) propagates.

    Raises:
        OSError: the file exists but cannot be read.
        UnicodeDecodeError: the file is not valid UTF-8.
    """
    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            content = f.read()
    except FileNotFoundError:
        logger.info("%s does not exist, starting with an empty buffer", path)
        return []
    lines = split_lines(content)
    logger.info("Loaded %d lines from %s", len(lines), path)
    return lines


def write_lines(path: str, lines: list[str]) -> None:
    """Write ``lines`` to ``path`` atomically.

    The text goes to a temporary file in the same directory, which is then
    renamed over the target, so a failed save leaves the old file intact.

    Raises:
        OSError: the file could not be written.
    """
    dir_name = os.path.dirname(path) or '.'
    with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', newline='',
                                     dir=dir_name,
                                     suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                     delete=False) as temp_file:
        temp_filename = temp_file.name
        try:
            for line in lines:
                temp_file.write(line + '\n')
            temp_file.flush()
            os.fsync(temp_file.fileno())
        except BaseException:
            temp_file.close()
            os.remove(temp_filename)
            raise
    try:
        os.replace(temp_filename, path)
    except OSError:
        os.remove(temp_filename)
        raise
    logger.info("Saved %d lines to %s", len(lines), path)
