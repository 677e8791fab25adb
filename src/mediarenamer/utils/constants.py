"""
Constants and configuration settings for metadata-driven renaming.

This module holds the default naming templates, the placeholder used when a
sanitized name comes out empty, the regexes shared by the parser and the
provider-id helpers, and the run settings. Run settings are read from the
environment (a local `.env` file is loaded first when present) so a host can
tune behavior without code changes.
"""

import os
import re

from dotenv import load_dotenv

load_dotenv()


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    try:
        return int(value) if value else default
    except ValueError:
        return default


def _env_list(key: str, default: list[str]) -> list[str]:
    value = os.getenv(key)
    if not value:
        return list(default)
    return [part.strip() for part in value.split(",") if part.strip()]


# Default naming templates
DEFAULT_SERIES_FOLDER_TEMPLATE = "{Name} ({Year}) [{Provider}-{Id}]"
DEFAULT_MOVIE_FOLDER_TEMPLATE = DEFAULT_SERIES_FOLDER_TEMPLATE
DEFAULT_SEASON_FOLDER_TEMPLATE = "Season {Season:00}"
DEFAULT_EPISODE_FILE_TEMPLATE = "S{Season:00}E{Episode:00} - {Title}"

# Returned by the sanitizer when nothing usable is left
UNKNOWN_NAME = "Unknown"

# Characters that cannot appear in an entry name on Windows, macOS or Linux
INVALID_FILENAME_CHARS_REGEX = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

# Regex patterns for filename parsing
SEASON_EPISODE_REGEX = re.compile(r"S(\d+)E(\d+)", re.IGNORECASE)
PROVIDER_ID_REGEX = re.compile(r"\[([A-Za-z]+)-([^\]]+)\]\s*$")

# Run settings
DEBUG = _env_bool("MR_DEBUG", False)
LOG_LEVEL = os.getenv("MR_LOG_LEVEL", "INFO")
ENABLED = _env_bool("MR_ENABLED", True)
DRY_RUN = _env_bool("MR_DRY_RUN", True)
RENAME_SERIES_FOLDERS = _env_bool("MR_RENAME_SERIES_FOLDERS", True)
REQUIRE_PROVIDER_ID_MATCH = _env_bool("MR_REQUIRE_PROVIDER_ID_MATCH", True)
ONLY_RENAME_WHEN_PROVIDER_IDS_CHANGE = _env_bool("MR_ONLY_RENAME_WHEN_PROVIDER_IDS_CHANGE", True)
PER_ITEM_COOLDOWN_SECONDS = _env_int("MR_PER_ITEM_COOLDOWN_SECONDS", 60)
PREFERRED_PROVIDERS = _env_list("MR_PREFERRED_PROVIDERS", ["Tvdb", "Tmdb", "Imdb"])

SERIES_FOLDER_FORMAT = os.getenv("MR_SERIES_FOLDER_FORMAT") or DEFAULT_SERIES_FOLDER_TEMPLATE
MOVIE_FOLDER_FORMAT = os.getenv("MR_MOVIE_FOLDER_FORMAT") or DEFAULT_MOVIE_FOLDER_TEMPLATE
SEASON_FOLDER_FORMAT = os.getenv("MR_SEASON_FOLDER_FORMAT") or DEFAULT_SEASON_FOLDER_TEMPLATE
EPISODE_FILE_FORMAT = os.getenv("MR_EPISODE_FILE_FORMAT") or DEFAULT_EPISODE_FILE_TEMPLATE
