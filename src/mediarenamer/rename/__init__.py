"""
Metadata-driven renaming of media folders and files.

This package renders names from naming templates, recovers episode details
from existing filenames, and renames series, season and movie folders and
episode files on disk without overwriting or re-renaming anything.

Package organization:
- models: Media item snapshots, rename requests and outcomes.
- formatter: Template rendering ("{Name} ({Year}) [{Provider}-{Id}]" and friends).
- parser: Episode number and title heuristics for malformed filenames.
- providers: Provider-id selection, change detection and folder-name reconciliation.
- core: The rename executor: validation, conflict checks, move, verify.
- coordinator: Per-item gating and name rendering ahead of the executor.
- batch: Sequential execution of many requests with progress reporting.

Public API (top-level exports)
- Rendering:
  - `render_series_or_movie_folder`, `render_season_folder`, `render_episode_file_name`
- Parsing:
  - `parse_episode_number`, `extract_clean_episode_title`, `names_match`
- Executing:
  - `RenameExecutor`: `execute(request)` returns a `RenameResult` whose
    `outcome` is a `RenameOutcome`; it never raises.
  - `rename_batch`: Run many requests with progress reporting.

Example:
    from mediarenamer.rename import RenameExecutor, Series, render_series_or_movie_folder
    series = Series(id="1", name="Show", path="/tv/show", provider_ids={"Tvdb": "100"}, year=2020)
    desired = render_series_or_movie_folder(None, series.name, series.year, "tvdb", "100")
    result = RenameExecutor().rename_series_folder(series, desired, dry_run=True)
"""
from .models import (
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

# Rendering
from .formatter import (
    render_episode_file_name,
    render_season_folder,
    render_series_or_movie_folder,
    uses_placeholder,
)

# Parsing
from .parser import (
    extract_clean_episode_title,
    names_match,
    normalize_for_comparison,
    parse_episode_number,
)

# Provider ids
from .providers import (
    extract_provider_id,
    folder_id_matches_any_metadata_id,
    get_best_provider,
    should_skip_rename,
)

# Executing
from .core import RenameExecutor, classify_error
from .coordinator import RenameCoordinator, RenameSettings
from .batch import rename_batch, summarize

__all__ = [
    # Models
    "Episode",
    "MediaItem",
    "Movie",
    "RenameOutcome",
    "RenameRequest",
    "RenameResult",
    "Season",
    "Series",
    "TargetKind",
    # Rendering
    "render_episode_file_name",
    "render_season_folder",
    "render_series_or_movie_folder",
    "uses_placeholder",
    # Parsing
    "extract_clean_episode_title",
    "names_match",
    "normalize_for_comparison",
    "parse_episode_number",
    # Provider ids
    "extract_provider_id",
    "folder_id_matches_any_metadata_id",
    "get_best_provider",
    "should_skip_rename",
    # Executing
    "RenameExecutor",
    "classify_error",
    "RenameCoordinator",
    "RenameSettings",
    "rename_batch",
    "summarize",
]
