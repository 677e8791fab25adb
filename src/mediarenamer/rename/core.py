"""
Safe, idempotent renaming of series, season and movie folders and episode files.

The executor takes an already-rendered desired name and decides what to do
with it. Every call walks the same steps and ends in exactly one
`RenameOutcome`:

1. Validate the request (item present, name not blank, episode numbers agree).
2. Resolve the current path and make sure it exists. Movies store the media
   file, so the folder that holds it is what gets renamed.
3. Compute the target as a sibling of the current path.
4. Skip when the name is already correct (provider-id reconciliation may force
   a rename for folders that embed an id).
5. Refuse to overwrite: an occupied target is a conflict, except an episode
   whose target is the same logical file.
6. Stop here on dry runs.
7. Rename, then verify the target exists.

Nothing raises past `RenameExecutor.execute`; filesystem errors are classified
into failure outcomes.

Functions:
- classify_error: Maps an exception raised during a rename to an outcome.

Classes:
- RenameExecutor: Runs rename requests against a `FileSystem`.
"""

from pathlib import Path

from mediarenamer.rename import parser, providers
from mediarenamer.rename.models import (
    Episode,
    MediaItem,
    Movie,
    RenameOutcome,
    RenameRequest,
    RenameResult,
    Season,
    Series,
    TargetKind,
)
from mediarenamer.utils import LogLevel, logger
from mediarenamer.utils.file_util import FileSystem, LocalFileSystem, sanitize_filename

# Kinds whose "already correct" check defers to provider-id reconciliation.
RECONCILE_KINDS = frozenset({TargetKind.SERIES_FOLDER, TargetKind.MOVIE_FOLDER})

_LOG_EVENTS = {
    RenameOutcome.RENAMED: ("rename.success", LogLevel.INFO),
    RenameOutcome.SKIPPED_ALREADY_CORRECT: ("rename.skip", LogLevel.DEBUG),
    RenameOutcome.SKIPPED_SAME_LOGICAL_FILE: ("rename.skip", LogLevel.INFO),
    RenameOutcome.SKIPPED_INVALID_INPUT: ("rename.skip", LogLevel.WARN),
    RenameOutcome.SKIPPED_DRY_RUN: ("rename.dry_run", LogLevel.WARN),
    RenameOutcome.FAILED_TARGET_CONFLICT: ("rename.conflict", LogLevel.ERROR),
    RenameOutcome.VERIFY_FAILED: ("rename.verify_failed", LogLevel.ERROR),
}


def classify_error(exc: BaseException) -> RenameOutcome:
    """
    Map an exception raised while renaming to a failure outcome.

    - PermissionError -> FAILED_PERMISSION
    - FileNotFoundError / NotADirectoryError (source vanished, bad path) -> FAILED_PATH_NOT_FOUND
    - Any other OSError (locked file, cross-device, disk full) -> FAILED_IO
    - Anything else -> FAILED_UNEXPECTED
    """
    if isinstance(exc, PermissionError):
        return RenameOutcome.FAILED_PERMISSION
    if isinstance(exc, (FileNotFoundError, NotADirectoryError)):
        return RenameOutcome.FAILED_PATH_NOT_FOUND
    if isinstance(exc, OSError):
        return RenameOutcome.FAILED_IO
    return RenameOutcome.FAILED_UNEXPECTED


class RenameExecutor:
    """
    Execute rename requests one at a time.

    Calls are synchronous and hold no state between them. There is no locking:
    callers that may race on the same item must serialize those calls, since
    the checks in steps 4-5 and the rename in step 7 are not atomic together.

    Args:
        filesystem: Storage to operate on; defaults to the local disk.
        reconcile_kinds: Target kinds whose matching names are checked against
            the item's provider ids before being skipped.
    """

    def __init__(self, filesystem: FileSystem | None = None, reconcile_kinds=RECONCILE_KINDS):
        self.fs = filesystem or LocalFileSystem()
        self.reconcile_kinds = frozenset(reconcile_kinds)

    def rename_series_folder(self, series: Series, desired_name: str, dry_run: bool = False) -> RenameResult:
        return self.execute(RenameRequest(TargetKind.SERIES_FOLDER, series, desired_name, dry_run=dry_run))

    def rename_season_folder(self, season: Season, desired_name: str, dry_run: bool = False) -> RenameResult:
        return self.execute(RenameRequest(TargetKind.SEASON_FOLDER, season, desired_name, dry_run=dry_run))

    def rename_movie_folder(self, movie: Movie, desired_name: str, dry_run: bool = False) -> RenameResult:
        return self.execute(RenameRequest(TargetKind.MOVIE_FOLDER, movie, desired_name, dry_run=dry_run))

    def rename_episode_file(
            self,
            episode: Episode,
            desired_name: str,
            file_extension: str | None = None,
            dry_run: bool = False,
            override_path: str | None = None,
    ) -> RenameResult:
        return self.execute(RenameRequest(
            TargetKind.EPISODE_FILE,
            episode,
            desired_name,
            file_extension=file_extension,
            dry_run=dry_run,
            override_path=override_path,
        ))

    def execute(self, request: RenameRequest) -> RenameResult:
        """Run one request and report its outcome. Never raises."""
        try:
            return self._execute(request)
        except Exception as exc:
            outcome = classify_error(exc)
            logger.log(
                "rename.error",
                LogLevel.ERROR,
                kind=request.target_kind,
                item=getattr(request.item, "name", None),
                outcome=outcome,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return RenameResult(outcome, message=str(exc))

    def _execute(self, request: RenameRequest) -> RenameResult:
        kind = request.target_kind
        item = request.item

        if item is None:
            return self._finish(RenameOutcome.SKIPPED_INVALID_INPUT, request, message="no item")

        desired = (request.desired_name or "").strip()
        if not desired:
            return self._finish(RenameOutcome.SKIPPED_INVALID_INPUT, request, message="desired name is blank")

        if kind is TargetKind.EPISODE_FILE and not _episode_numbers_agree(item, desired):
            return self._finish(
                RenameOutcome.SKIPPED_INVALID_INPUT,
                request,
                message=f"'{desired}' does not match the episode's season/episode numbers",
            )

        raw_path = item.path
        if kind is TargetKind.EPISODE_FILE and request.override_path and request.override_path.strip():
            raw_path = request.override_path
        if not raw_path or not raw_path.strip():
            return self._finish(RenameOutcome.SKIPPED_INVALID_INPUT, request, message="item has no path")

        current = Path(raw_path)
        if not self.fs.exists(current):
            return self._finish(RenameOutcome.FAILED_PATH_NOT_FOUND, request, source=current,
                                message="current path does not exist")

        if kind is TargetKind.MOVIE_FOLDER:
            current = self.fs.parent_of(current)
            if current is None:
                return self._finish(RenameOutcome.FAILED_PATH_NOT_FOUND, request, source=Path(raw_path),
                                    message="movie file has no containing folder")

        parent = self.fs.parent_of(current)
        if parent is None:
            return self._finish(RenameOutcome.FAILED_PATH_NOT_FOUND, request, source=current,
                                message="cannot rename a filesystem root")

        target = parent / self._target_name(request, current, desired)
        if target.parent != parent:
            return self._finish(RenameOutcome.SKIPPED_INVALID_INPUT, request, source=current, target=target,
                                message="target would leave the source directory")

        if target.name.lower() == current.name.lower():
            if kind not in self.reconcile_kinds or providers.should_skip_rename(item, current.name, target.name):
                return self._finish(RenameOutcome.SKIPPED_ALREADY_CORRECT, request, source=current, target=target)

        if self.fs.exists(target) and not self.fs.same_entry(current, target):
            if not kind.is_folder and self._same_logical_file(current, target):
                return self._finish(RenameOutcome.SKIPPED_SAME_LOGICAL_FILE, request, source=current, target=target,
                                    message="target already holds this file")
            return self._finish(RenameOutcome.FAILED_TARGET_CONFLICT, request, source=current, target=target,
                                message="target already exists")

        if request.dry_run:
            return self._finish(RenameOutcome.SKIPPED_DRY_RUN, request, source=current, target=target,
                                message="dry run, no changes made")

        try:
            self.fs.move(current, target)
        except Exception as exc:
            outcome = classify_error(exc)
            logger.log(
                "rename.error",
                LogLevel.ERROR,
                kind=kind,
                item=item.name,
                source=str(current),
                target=str(target),
                outcome=outcome,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return RenameResult(outcome, source=current, target=target, message=str(exc))

        if not self.fs.exists(target):
            return self._finish(RenameOutcome.VERIFY_FAILED, request, source=current, target=target,
                                message="target missing after rename")

        return self._finish(RenameOutcome.RENAMED, request, source=current, target=target)

    @staticmethod
    def _target_name(request: RenameRequest, current: Path, desired: str) -> str:
        name = sanitize_filename(desired)
        if request.target_kind is not TargetKind.EPISODE_FILE:
            return name

        extension = request.file_extension if request.file_extension is not None else current.suffix
        extension = extension.strip()
        if extension and not extension.startswith("."):
            extension = f".{extension}"
        return f"{name}{extension}"

    def _same_logical_file(self, source: Path, target: Path) -> bool:
        """Equal paths, or two existing files of the same non-zero size."""
        if source == target:
            return True
        if not (self.fs.exists(source) and self.fs.exists(target)):
            return False
        source_size = self.fs.size(source)
        return source_size > 0 and source_size == self.fs.size(target)

    @staticmethod
    def _finish(
            outcome: RenameOutcome,
            request: RenameRequest,
            source: Path | None = None,
            target: Path | None = None,
            message: str | None = None,
    ) -> RenameResult:
        event, level = _LOG_EVENTS.get(outcome, ("rename.error", LogLevel.ERROR))
        logger.log(
            event,
            level,
            kind=request.target_kind,
            item=getattr(request.item, "name", None),
            outcome=outcome,
            source=str(source) if source else None,
            target=str(target) if target else None,
            reason=message,
        )
        return RenameResult(outcome, source=source, target=target, message=message)


def _episode_numbers_agree(item: MediaItem, desired: str) -> bool:
    """An "S##E##" token in the desired name must agree with the item's own numbers."""
    season, episode = parser.parse_season_episode(desired)
    if episode is None:
        return True

    known_season = getattr(item, "season_number", None)
    known_episode = getattr(item, "episode_number", None)
    if known_episode is not None and known_episode != episode:
        return False
    if known_season is not None and known_season != season:
        return False
    return True
