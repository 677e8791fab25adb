"""
Constants, logging and filesystem helpers shared by the rename package.

This package collects the naming defaults and env-driven run settings, the
structured logger, and the filename sanitizer together with the filesystem
port the rename executor works through.
"""

from .constants import (
    DEBUG,
    DEFAULT_EPISODE_FILE_TEMPLATE,
    DEFAULT_MOVIE_FOLDER_TEMPLATE,
    DEFAULT_SEASON_FOLDER_TEMPLATE,
    DEFAULT_SERIES_FOLDER_TEMPLATE,
    LOG_LEVEL,
    PROVIDER_ID_REGEX,
    SEASON_EPISODE_REGEX,
    UNKNOWN_NAME,
)
from .logger import LogLevel, set_log_level_by_name

set_log_level_by_name("DEBUG" if DEBUG else LOG_LEVEL)

__all__ = [
    "DEBUG",
    "DEFAULT_EPISODE_FILE_TEMPLATE",
    "DEFAULT_MOVIE_FOLDER_TEMPLATE",
    "DEFAULT_SEASON_FOLDER_TEMPLATE",
    "DEFAULT_SERIES_FOLDER_TEMPLATE",
    "LOG_LEVEL",
    "PROVIDER_ID_REGEX",
    "SEASON_EPISODE_REGEX",
    "UNKNOWN_NAME",
    "LogLevel",
]
