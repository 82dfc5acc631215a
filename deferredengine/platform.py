"""Platform helpers: paths, file access and logging."""

from __future__ import annotations

import os
import sys

WINDOW_TITLE = "Advanced Graphics Programming"
WINDOW_WIDTH = 1080
WINDOW_HEIGHT = 720

_SEPARATORS = ("/", "\\")


def make_path(directory: str, filename: str) -> str:
    """Join a directory and a file name with a forward slash."""
    return f"{directory}/{filename}"


def get_directory_part(path: str) -> str:
    """Return everything before the last path separator, or "" if there is none."""
    index = max(path.rfind(separator) for separator in _SEPARATORS)
    return path[:index] if index >= 0 else ""


def read_text_file(filepath: str | os.PathLike) -> str:
    """Read a whole file and return its text.

    Raises OSError (for example FileNotFoundError) when the file cannot be opened.
    """
    with open(filepath, "rb") as handle:
        return handle.read().decode("utf-8")


def get_file_last_write_timestamp(filepath: str | os.PathLike) -> int:
    """Return the file's last modification time in whole seconds, or 0 if unknown."""
    try:
        return int(os.stat(filepath).st_mtime)
    except OSError:
        return 0


def log_string(text: str) -> None:
    """Write one line of log output to standard error."""
    sys.stderr.write(f"{text}\n")
    sys.stderr.flush()