"""Temporary files holding lists of strings."""

from __future__ import annotations

import contextlib
import os
import tempfile
from typing import Iterable, Optional


def write_temporary_file(data: Iterable[str], print_sep: str) -> Optional[str]:
    """Write the strings, each followed by print_sep, to a new temporary file.

    Returns the file's path, or None when the file cannot be created.
    """
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            prefix="fuzzfind-temp-",
            delete=False,
            encoding="utf-8",
            newline="",
        ) as handle:
            handle.write(print_sep.join(data))
            handle.write(print_sep)
            return handle.name
    except OSError:
        return None


def remove_files(files: Iterable[str]) -> None:
    """Delete the files, ignoring any that cannot be removed."""
    for filename in files:
        with contextlib.suppress(OSError):
            os.remove(filename)