"""Shared fixtures: an in-memory filesystem for executor tests."""
import unicodedata
from pathlib import Path

import pytest

from mediarenamer.rename import RenameExecutor
from mediarenamer.utils import LogLevel
from mediarenamer.utils import logger


class MemoryFileSystem:
    """`FileSystem` fake that keeps entries in a dict.

    Directories map to None, files map to their byte size. Failure hooks let
    tests simulate errors from the move or from existence checks.
    """

    def __init__(self):
        self.entries: dict[Path, int | None] = {Path("/"): None}
        self.moves: list[tuple[Path, Path]] = []
        self.fail_move_with: BaseException | None = None
        self.fail_exists_with: BaseException | None = None
        self.silently_drop_moves = False

    def add_dir(self, path: str) -> Path:
        p = Path(path)
        for ancestor in reversed(p.parents):
            self.entries.setdefault(ancestor, None)
        self.entries[p] = None
        return p

    def add_file(self, path: str, size: int = 100) -> Path:
        p = Path(path)
        self.add_dir(str(p.parent))
        self.entries[p] = size
        return p

    def exists(self, path: Path) -> bool:
        if self.fail_exists_with is not None:
            raise self.fail_exists_with
        return path in self.entries

    def parent_of(self, path: Path) -> Path | None:
        return None if path.parent == path else path.parent

    def move(self, source: Path, target: Path) -> None:
        if self.fail_move_with is not None:
            raise self.fail_move_with
        if source not in self.entries:
            raise FileNotFoundError(str(source))
        if target.parent not in self.entries:
            raise FileNotFoundError(str(target.parent))
        self.moves.append((source, target))
        if self.silently_drop_moves:
            return

        moved = {p: v for p, v in self.entries.items() if p == source or source in p.parents}
        for p in moved:
            del self.entries[p]
        for p, v in moved.items():
            self.entries[target / p.relative_to(source)] = v

    def size(self, path: Path) -> int:
        return self.entries[path] or 0

    def same_entry(self, first: Path, second: Path) -> bool:
        return first == second and first in self.entries


class DecomposingFileSystem(MemoryFileSystem):
    """Stores entry names in NFD form, the way HFS+ does."""

    @staticmethod
    def _nfd(path) -> Path:
        return Path(unicodedata.normalize("NFD", str(path)))

    def add_dir(self, path: str) -> Path:
        return super().add_dir(str(self._nfd(path)))

    def exists(self, path: Path) -> bool:
        return super().exists(self._nfd(path))

    def move(self, source: Path, target: Path) -> None:
        super().move(self._nfd(source), self._nfd(target))

    def same_entry(self, first: Path, second: Path) -> bool:
        return super().same_entry(self._nfd(first), self._nfd(second))


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    return MemoryFileSystem()


@pytest.fixture
def decomposing_fs() -> DecomposingFileSystem:
    return DecomposingFileSystem()


@pytest.fixture
def executor(memory_fs) -> RenameExecutor:
    return RenameExecutor(memory_fs)


@pytest.fixture(autouse=True)
def quiet_logs():
    """Keep test output readable; individual tests may lower the level."""
    previous = logger.get_log_level()
    logger.set_log_level(LogLevel.ERROR)
    yield
    logger.set_log_level(previous)
