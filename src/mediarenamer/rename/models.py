"""Data models for the rename package."""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping


@dataclass(frozen=True)
class MediaItem:
    """Read-only snapshot of a library item as supplied by the host."""
    id: str
    name: str = ""
    path: str | None = None
    provider_ids: Mapping[str, str] = field(default_factory=dict)
    year: int | None = None

    def get_provider_id(self, key: str) -> str | None:
        """Look up a provider id by key, ignoring case."""
        wanted = key.strip().lower()
        for provider, value in self.provider_ids.items():
            if provider.strip().lower() == wanted:
                return value
        return None


@dataclass(frozen=True)
class Series(MediaItem):
    """A TV series; its path is the show folder."""


@dataclass(frozen=True)
class Season(MediaItem):
    """A season folder inside a series folder."""
    season_number: int | None = None
    series: Series | None = None


@dataclass(frozen=True)
class Episode(MediaItem):
    """A single episode; its path is the media file."""
    season_number: int | None = None
    episode_number: int | None = None
    series: Series | None = None


@dataclass(frozen=True)
class Movie(MediaItem):
    """A movie; its path is the media file, renames apply to the containing folder."""


class TargetKind(Enum):
    """What kind of filesystem entry a request renames."""
    SERIES_FOLDER = "series_folder"
    SEASON_FOLDER = "season_folder"
    MOVIE_FOLDER = "movie_folder"
    EPISODE_FILE = "episode_file"

    @property
    def is_folder(self) -> bool:
        return self is not TargetKind.EPISODE_FILE


@dataclass(frozen=True)
class RenameRequest:
    """One rename to evaluate; consumed by a single executor call."""
    target_kind: TargetKind
    item: MediaItem | None
    desired_name: str | None
    file_extension: str | None = None
    dry_run: bool = False
    override_path: str | None = None


class RenameOutcome(Enum):
    """Terminal state of one executor call."""
    RENAMED = "renamed"
    SKIPPED_ALREADY_CORRECT = "skipped_already_correct"
    SKIPPED_DRY_RUN = "skipped_dry_run"
    SKIPPED_INVALID_INPUT = "skipped_invalid_input"
    SKIPPED_SAME_LOGICAL_FILE = "skipped_same_logical_file"
    FAILED_TARGET_CONFLICT = "failed_target_conflict"
    FAILED_PERMISSION = "failed_permission"
    FAILED_PATH_NOT_FOUND = "failed_path_not_found"
    FAILED_IO = "failed_io"
    FAILED_UNEXPECTED = "failed_unexpected"
    VERIFY_FAILED = "verify_failed"

    @property
    def is_success(self) -> bool:
        return self is RenameOutcome.RENAMED

    @property
    def is_skip(self) -> bool:
        return self.value.startswith("skipped_")

    @property
    def is_failure(self) -> bool:
        return not (self.is_success or self.is_skip)


@dataclass
class RenameResult:
    """Represents a rename operation result."""
    outcome: RenameOutcome
    source: Path | None = None
    target: Path | None = None
    message: str | None = None
