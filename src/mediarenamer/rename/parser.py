"""
Best-effort recovery of episode numbers and titles from existing filenames.

These helpers are a fallback for when library metadata is incomplete. They are
pattern matchers with a fixed precedence, not a grammar: callers should prefer
structured metadata whenever it is present.
"""

import re

from mediarenamer.utils import SEASON_EPISODE_REGEX
from mediarenamer.utils.file_util import collapse_whitespace

# Tried in order; the first pattern that matches wins.
EPISODE_NUMBER_PATTERNS = [
    SEASON_EPISODE_REGEX,
    re.compile(r"E(\d+)", re.IGNORECASE),
    re.compile(r"EP\s?(\d+)", re.IGNORECASE),
    re.compile(r"Episode\s?(\d+)", re.IGNORECASE),
]
BARE_NUMBER_REGEX = re.compile(r"(?<![A-Za-z0-9])(\d{1,3})(?![A-Za-z0-9])")

_REPEATED_PREFIX = re.compile(r"^(?:S\d+E\d+\s*-\s*){2,}", re.IGNORECASE)
_GENERIC_PREFIX = re.compile(r"^S\d+E\d+\s*-\s*", re.IGNORECASE)
_EMBEDDED_TOKEN = re.compile(r"[\s_]*(?<![^\s_])S\d+E\d+(?![^\s_])[\s_]*", re.IGNORECASE)
_TRAILING_DUB_EPISODE = re.compile(r"\s*\bSeason\s*\d+\s*Dub\s*Episode\s*\d+.*$", re.IGNORECASE)
_TRAILING_EPISODE = re.compile(r"\s+Episode\s*\d+.*$", re.IGNORECASE)
_EDGE_SEPARATORS = re.compile(r"^[\s\-\u2010-\u2015_]+|[\s\-\u2010-\u2015_]+$")
_EXTENSION = re.compile(r"\.[A-Za-z0-9]{1,5}$")


def parse_season_episode(filename: str | None) -> tuple[int | None, int | None]:
    """Extract season and episode numbers from an "S##E##" token."""
    match = SEASON_EPISODE_REGEX.search(filename or "")
    if match:
        return int(match.group(1)), int(match.group(2))
    return None, None


def parse_episode_number(filename: str | None) -> int | None:
    """
    Recover an episode number from a filename.

    Precedence:
    1. "S02E07" -> 7
    2. "E07" -> 7
    3. "EP07" / "EP 07" -> 7
    4. "Episode07" / "Episode 07" -> 7
    5. The rightmost standalone 1-3 digit number, if it is between 1 and 999
       not touching letters or digits (e.g. "Angel Beats - 01" -> 1, while
       "720p" and "x264" are ignored)

    Returns None when nothing matches.
    """
    if not filename or not filename.strip():
        return None

    for pattern in EPISODE_NUMBER_PATTERNS:
        match = pattern.search(filename)
        if match:
            return int(match.group(match.lastindex))

    candidates = BARE_NUMBER_REGEX.findall(filename)
    if candidates:
        number = int(candidates[-1])
        if 1 <= number <= 999:
            return number
    return None


def extract_clean_episode_title(
        episode_name: str | None,
        season_number: int | None = None,
        episode_number: int | None = None,
) -> str:
    """
    Strip numbering noise from an episode name and return the bare title.

    Examples:
      "S02E06 - S02E06 - The Return" -> "The Return"
      "Show_S01E03_Pilot" -> "Show Pilot"
      "Kaiju Season 1 Dub Episode 4 HD" -> "Kaiju"
    Returns "" for blank input.
    """
    if not episode_name or not episode_name.strip():
        return ""

    s = episode_name.strip()
    s = _REPEATED_PREFIX.sub("", s)

    if season_number is not None and episode_number is not None:
        for token in (
                f"S{season_number}E{episode_number}",
                f"S{season_number:02d}E{episode_number:02d}",
        ):
            s = re.sub(r"^" + re.escape(token) + r"\s*-\s*", "", s, flags=re.IGNORECASE)

    s = _GENERIC_PREFIX.sub("", s)
    s = _EMBEDDED_TOKEN.sub(" ", s)
    s = _TRAILING_DUB_EPISODE.sub("", s)
    s = _TRAILING_EPISODE.sub("", s)
    s = _EDGE_SEPARATORS.sub("", s)
    return collapse_whitespace(s)


def normalize_for_comparison(filename: str | None) -> str:
    """Drop the extension, collapse whitespace and lower-case."""
    s = _EXTENSION.sub("", (filename or "").strip())
    return collapse_whitespace(s).lower()


def names_match(first: str | None, second: str | None) -> bool:
    """True when both names are blank or they normalize to the same string."""
    first_blank = not first or not first.strip()
    second_blank = not second or not second.strip()
    if first_blank or second_blank:
        return first_blank and second_blank
    return normalize_for_comparison(first) == normalize_for_comparison(second)
