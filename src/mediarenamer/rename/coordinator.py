"""
Per-item rename handling for library update notifications.

The coordinator turns an item snapshot into a rendered desired name and hands
it to the executor. For series it also decides whether an update is worth
acting on at all: disabled settings, an item seen within the cooldown window,
missing provider ids, or provider ids that have not changed since the last
attempt all short-circuit before any filesystem work.

It does not order renames across a hierarchy; a caller that renames a series
and its seasons and episodes decides which goes first.
"""
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from mediarenamer.rename import formatter, parser, providers
from mediarenamer.rename.core import RenameExecutor
from mediarenamer.rename.models import Episode, Movie, RenameRequest, RenameResult, Season, Series, TargetKind
from mediarenamer.utils import LogLevel, constants, logger


@dataclass
class RenameSettings:
    """Run settings for the coordinator; defaults come from the environment."""
    enabled: bool = constants.ENABLED
    dry_run: bool = constants.DRY_RUN
    rename_series_folders: bool = constants.RENAME_SERIES_FOLDERS
    require_provider_id_match: bool = constants.REQUIRE_PROVIDER_ID_MATCH
    only_rename_when_provider_ids_change: bool = constants.ONLY_RENAME_WHEN_PROVIDER_IDS_CHANGE
    per_item_cooldown_seconds: int = constants.PER_ITEM_COOLDOWN_SECONDS
    preferred_providers: list[str] = field(default_factory=lambda: list(constants.PREFERRED_PROVIDERS))
    series_folder_format: str = constants.SERIES_FOLDER_FORMAT
    movie_folder_format: str = constants.MOVIE_FOLDER_FORMAT
    season_folder_format: str = constants.SEASON_FOLDER_FORMAT
    episode_file_format: str = constants.EPISODE_FILE_FORMAT


class RenameCoordinator:
    """
    Render names for library items and run them through a `RenameExecutor`.

    State (cooldowns and last-seen provider hashes) lives on the instance, so
    each host wiring gets its own.
    """

    def __init__(
            self,
            executor: RenameExecutor | None = None,
            settings: RenameSettings | None = None,
            clock: Callable[[], float] = time.monotonic,
    ):
        self.executor = executor or RenameExecutor()
        self.settings = settings or RenameSettings()
        self._clock = clock
        self._last_attempt_by_item: dict[str, float] = {}
        self._provider_hash_by_item: dict[str, str] = {}

    def clear_state(self) -> None:
        self._last_attempt_by_item.clear()
        self._provider_hash_by_item.clear()

    def handle_series(self, series: Series) -> RenameResult | None:
        """
        Rename a series folder after a metadata update, if it qualifies.

        Returns None when the update was ignored, otherwise the executor's result.
        """
        cfg = self.settings
        if not cfg.enabled:
            return self._ignore(series, "disabled")
        if not cfg.rename_series_folders:
            return self._ignore(series, "series_renames_disabled")

        now = self._clock()
        last_try = self._last_attempt_by_item.get(series.id)
        if last_try is not None and now - last_try < cfg.per_item_cooldown_seconds:
            return self._ignore(series, "cooldown")
        self._last_attempt_by_item[series.id] = now

        if not series.path or not series.path.strip():
            return self._ignore(series, "no_path")
        if cfg.require_provider_id_match and not series.provider_ids:
            return self._ignore(series, "no_provider_ids")

        name = (series.name or "").strip()
        if not name or series.year is None:
            return self._ignore(series, "missing_name_or_year", level=LogLevel.INFO)

        if cfg.only_rename_when_provider_ids_change:
            new_hash = providers.compute_provider_hash(series.provider_ids)
            old_hash = self._provider_hash_by_item.get(series.id)
            if new_hash == old_hash:
                return self._ignore(series, "provider_ids_unchanged", level=LogLevel.INFO)
            logger.log("coordinator.provider_change", LogLevel.INFO, item=name, old_hash=old_hash, new_hash=new_hash)
            self._provider_hash_by_item[series.id] = new_hash

        best = providers.get_best_provider(series.provider_ids, cfg.preferred_providers)
        if best is None and cfg.require_provider_id_match:
            return self._ignore(series, "no_usable_provider_id")

        desired = formatter.render_series_or_movie_folder(
            cfg.series_folder_format,
            name,
            series.year,
            best.label if best else None,
            best.id if best else None,
        )
        logger.log("coordinator.desired", LogLevel.INFO, item=name, desired=desired, path=series.path)
        return self.executor.execute(RenameRequest(TargetKind.SERIES_FOLDER, series, desired, dry_run=cfg.dry_run))

    def handle_movie(self, movie: Movie) -> RenameResult | None:
        if not self.settings.enabled:
            return self._ignore(movie, "disabled")

        best = providers.get_best_provider(movie.provider_ids, self.settings.preferred_providers)
        desired = formatter.render_series_or_movie_folder(
            self.settings.movie_folder_format,
            movie.name,
            movie.year,
            best.label if best else None,
            best.id if best else None,
        )
        return self.executor.execute(
            RenameRequest(TargetKind.MOVIE_FOLDER, movie, desired, dry_run=self.settings.dry_run)
        )

    def handle_season(self, season: Season) -> RenameResult | None:
        if not self.settings.enabled:
            return self._ignore(season, "disabled")

        desired = formatter.render_season_folder(
            self.settings.season_folder_format,
            season.season_number,
            season.name,
        )
        return self.executor.execute(
            RenameRequest(TargetKind.SEASON_FOLDER, season, desired, dry_run=self.settings.dry_run)
        )

    def handle_episode(
            self,
            episode: Episode,
            file_extension: str | None = None,
            override_path: str | None = None,
    ) -> RenameResult | None:
        """
        Rename an episode file.

        When the metadata has no episode number, it is recovered from the
        current file name. Episodes still missing a number the template needs
        are ignored. The "{Title}" value is the item name with any
        numbering noise stripped.
        """
        if not self.settings.enabled:
            return self._ignore(episode, "disabled")

        current_path = override_path or episode.path or ""
        episode_number = episode.episode_number
        if episode_number is None:
            episode_number = parser.parse_episode_number(Path(current_path).stem)
            logger.log("coordinator.episode_guess", LogLevel.DEBUG, item=episode.name, episode=episode_number)

        template = self.settings.episode_file_format or constants.DEFAULT_EPISODE_FILE_TEMPLATE
        if (episode.season_number is None and formatter.uses_placeholder(template, "Season")) or \
                (episode_number is None and formatter.uses_placeholder(template, "Episode")):
            return self._ignore(episode, "missing_numbers", level=LogLevel.INFO)

        title = parser.extract_clean_episode_title(episode.name, episode.season_number, episode_number)
        series_name = episode.series.name if episode.series else ""
        year = episode.year if episode.year is not None else (episode.series.year if episode.series else None)

        desired = formatter.render_episode_file_name(
            template,
            series_name,
            episode.season_number,
            episode_number,
            title,
            year,
        )
        return self.executor.execute(RenameRequest(
            TargetKind.EPISODE_FILE,
            episode,
            desired,
            file_extension=file_extension,
            dry_run=self.settings.dry_run,
            override_path=override_path,
        ))

    @staticmethod
    def _ignore(item, reason: str, level: LogLevel = LogLevel.DEBUG) -> None:
        logger.log("coordinator.skip", level, item=item.name, id=item.id, reason=reason)
        return None
