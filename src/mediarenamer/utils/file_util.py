"""
Filename sanitizing and the filesystem port used by the rename executor.

`sanitize_filename` turns arbitrary metadata text into a name that is safe as
a single directory entry on any common platform. `FileSystem` is the small
set of operations the executor needs; `LocalFileSystem` backs it with the
real disk and tests swap in an in-memory fake.
"""
import os
import re
from pathlib import Path
from typing import Protocol

from mediarenamer.utils.constants import INVALID_FILENAME_CHARS_REGEX, UNKNOWN_NAME


def collapse_whitespace(text: str | None) -> str:
    """Collapse runs of whitespace into a single space and trim both ends."""
    return re.sub(r"\s+", " ", text or "").strip()


def sanitize_filename(name: str | None) -> str:
    """
    Make a string safe to use as a file or folder name.

    Illegal characters become "_", trailing dots and spaces are dropped (Windows
    refuses them), whitespace is collapsed. Blank results fall back to "Unknown".
    Applying it twice gives the same result as applying it once.
    """
    if not name or not name.strip():
        return UNKNOWN_NAME

    cleaned = INVALID_FILENAME_CHARS_REGEX.sub("_", name)
    cleaned = re.sub(r"[\s.]+$", "", cleaned)
    cleaned = collapse_whitespace(cleaned)

    return cleaned or UNKNOWN_NAME


class FileSystem(Protocol):
    """Operations the rename executor performs against storage."""

    def exists(self, path: Path) -> bool: ...

    def parent_of(self, path: Path) -> Path | None: ...

    def move(self, source: Path, target: Path) -> None: ...

    def size(self, path: Path) -> int: ...

    def same_entry(self, first: Path, second: Path) -> bool: ...


class LocalFileSystem:
    """`FileSystem` backed by the local disk."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def parent_of(self, path: Path) -> Path | None:
        parent = path.parent
        if parent == path:
            return None
        return parent

    def move(self, source: Path, target: Path) -> None:
        # os.rename is atomic within one volume and never copies.
        os.rename(source, target)

    def size(self, path: Path) -> int:
        return path.stat().st_size

    def same_entry(self, first: Path, second: Path) -> bool:
        try:
            return os.path.samefile(first, second)
        except OSError:
            return False
