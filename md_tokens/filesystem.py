"""Reading Markdown sources within a size limit."""

from __future__ import annotations

import os
import stat
from pathlib import Path


def read_markdown(filepath: Path, max_size: int) -> str:
    """Return the UTF-8 text of `filepath` once its size has been checked.

    The size comes from a single ``stat`` call taken before the file is opened,
    so an oversized file is never read into memory.

    Args:
        filepath: File to read.
        max_size: Largest accepted size in bytes.

    Returns:
        str: Decoded file content.

    Raises:
        IOError: If the file is missing, unreadable, not a regular file, or
            larger than `max_size`.
        UnicodeDecodeError: If the content is not valid UTF-8.
    """
    try:
        file_stat = os.stat(filepath)
    except OSError as error:
        raise IOError(f"Cannot read {filepath}: {error.strerror or error}") from error

    if not stat.S_ISREG(file_stat.st_mode):
        raise IOError(f"{filepath} is not a regular file.")
    if file_stat.st_size > max_size:
        raise IOError(
            f"{filepath} is {file_stat.st_size} bytes, above the maximum allowed size "
            f"of {max_size} bytes."
        )

    with open(filepath, encoding="utf-8") as handle:
        return handle.read()
