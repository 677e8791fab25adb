"""
Template rendering for series, season, movie and episode names.

A naming template is plain text with placeholders that are matched without
regard to case:

- "{Name}" / "{SeriesName}": the item (or parent series) name
- "{Year}": production year
- "{Provider}" / "{Id}": provider label and identifier, e.g. "tvdb" / "81189"
- "{SeasonName}": the season's display name
- "{Title}": the episode title
- "{Season}" / "{Season:NN}" and "{Episode}" / "{Episode:NN}": numbers; the
  number of digits after the colon is the zero-pad width, so "{Season:000}"
  renders season 2 as "002"

Optional values that are missing take their decoration with them, so
"{Name} ({Year}) [{Provider}-{Id}]" with no year and no provider renders as
just the name. Every result is whitespace-collapsed and passed through
`sanitize_filename`, so it is always a usable single entry name.

Example:
    render_series_or_movie_folder(None, "Breaking Bad", 2008, "tvdb", "81189")
        -> "Breaking Bad (2008) [tvdb-81189]"
"""
import re

from mediarenamer.utils.constants import (
    DEFAULT_EPISODE_FILE_TEMPLATE,
    DEFAULT_SEASON_FOLDER_TEMPLATE,
    DEFAULT_SERIES_FOLDER_TEMPLATE,
)
from mediarenamer.utils.file_util import collapse_whitespace, sanitize_filename

_EMPTY_BRACKETS = re.compile(r"\s*\[\s*-?\s*\]")
_EMPTY_PARENS = re.compile(r"\(\s*\)")
_LEADING_SEPARATOR = re.compile(r"^(?:-\s+)+")
_TRAILING_SEPARATOR = re.compile(r"(?:\s+-)+$")


def render_series_or_movie_folder(
        template: str | None,
        name: str | None,
        year: int | None = None,
        provider_label: str | None = None,
        provider_id: str | None = None,
) -> str:
    """
    Render a series or movie folder name.

    Rules:
    1. A missing year removes "({Year})", then " - {Year}", then a bare
       "{Year}", in that order.
    2. A provider label without an id (or the reverse) counts as no provider:
       both placeholders expand to nothing and the leftover "[]" / "[-]" group
       is dropped.
    3. When a value is missing, empty "()" groups and " - " separators left
       dangling at either end are removed. A "-" that is part of the name
       (e.g. "Re-") is kept.

    Parameters:
    - template (str | None): Naming template; None uses "{Name} ({Year}) [{Provider}-{Id}]".
    - name (str | None): Series or movie name.
    - year (int | None): Production year.
    - provider_label (str | None): Provider label such as "tvdb".
    - provider_id (str | None): The provider's identifier for the item.

    Returns:
    - str: Sanitized folder name.
    """
    has_provider_id = bool(provider_label and provider_label.strip()) and bool(provider_id and provider_id.strip())

    s = template or DEFAULT_SERIES_FOLDER_TEMPLATE
    dropped = (
        (not (name or "").strip() and uses_placeholder(s, "Name"))
        or (year is None and uses_placeholder(s, "Year"))
        or (not has_provider_id and (uses_placeholder(s, "Provider") or uses_placeholder(s, "Id")))
    )
    s = _replace_token(s, "Name", name or "")
    s = _replace_token(s, "SeriesName", name or "")
    s = _apply_optional(s, "Year", str(year) if year is not None else None)
    s = _replace_token(s, "Provider", provider_label.strip() if has_provider_id else "")
    s = _replace_token(s, "Id", provider_id.strip() if has_provider_id else "")
    s = collapse_whitespace(s)

    if not has_provider_id:
        s = _EMPTY_BRACKETS.sub("", s)
    if year is None:
        s = _remove_repeatedly(_EMPTY_PARENS, s)

    return _finish(s, dropped)


def render_season_folder(
        template: str | None,
        season_number: int | None = None,
        season_name: str | None = None,
) -> str:
    """
    Render a season folder name such as "Season 01".

    A missing season number removes both "{Season}" and "{Season:NN}"; a missing
    season name removes only the "{SeasonName}" placeholder itself.
    """
    s = template or DEFAULT_SEASON_FOLDER_TEMPLATE
    dropped = (
        (season_number is None and uses_placeholder(s, "Season"))
        or (not (season_name or "").strip() and uses_placeholder(s, "SeasonName"))
    )
    s = _replace_number(s, "Season", season_number)
    s = _replace_token(s, "SeasonName", season_name.strip() if season_name else "")
    return _finish(s, dropped)


def render_episode_file_name(
        template: str | None,
        series_name: str | None,
        season_number: int | None = None,
        episode_number: int | None = None,
        title: str | None = "",
        year: int | None = None,
) -> str:
    """
    Render an episode file name without its extension.

    Parameters:
    - template (str | None): Naming template; None uses "S{Season:00}E{Episode:00} - {Title}".
    - series_name (str | None): Parent series name for "{SeriesName}".
    - season_number (int | None): Season number.
    - episode_number (int | None): Episode number.
    - title (str | None): Clean episode title; when blank "{Title}" is removed
      together with a leading " - " separator.
    - year (int | None): Year, removed with its decoration when missing.

    Returns:
    - str: Sanitized base name, e.g. "S02E07 - The Return".
    """
    s = template or DEFAULT_EPISODE_FILE_TEMPLATE
    dropped = (
        (not (series_name or "").strip() and uses_placeholder(s, "SeriesName"))
        or (year is None and uses_placeholder(s, "Year"))
        or (season_number is None and uses_placeholder(s, "Season"))
        or (episode_number is None and uses_placeholder(s, "Episode"))
        or (not (title or "").strip() and uses_placeholder(s, "Title"))
    )
    s = _replace_token(s, "SeriesName", series_name or "")
    s = _apply_optional(s, "Year", str(year) if year is not None else None)
    s = _replace_number(s, "Season", season_number)
    s = _replace_number(s, "Episode", episode_number)
    s = _apply_optional(s, "Title", title.strip() if title and title.strip() else None)
    return _finish(s, dropped)


def uses_placeholder(template: str | None, token: str) -> bool:
    """True if the template contains "{Token}" or "{Token:NN}", ignoring case."""
    return bool(re.search(r"\{" + token + r"(?::\d+)?\}", template or "", re.IGNORECASE))


def _replace_token(text: str, token: str, value: str) -> str:
    # Callable replacement keeps backslashes in metadata literal.
    return re.sub(re.escape("{" + token + "}"), lambda _m: value, text, flags=re.IGNORECASE)


def _replace_number(text: str, token: str, number: int | None) -> str:
    pattern = re.compile(r"\{" + token + r"(?::(\d+))?\}", re.IGNORECASE)
    if number is None:
        return pattern.sub("", text)

    def _pad(match: re.Match) -> str:
        width = max(1, len(match.group(1) or ""))
        return f"{number:0{width}d}"

    return pattern.sub(_pad, text)


def _apply_optional(text: str, token: str, value: str | None) -> str:
    """Substitute an optional placeholder, or remove it with its decoration."""
    if value is not None:
        return _replace_token(text, token, value)

    placeholder = re.escape("{" + token + "}")
    text = re.sub(r"\s*\(\s*" + placeholder + r"\s*\)", "", text, flags=re.IGNORECASE)
    text = re.sub(r"\s*-\s*" + placeholder, "", text, flags=re.IGNORECASE)
    text = re.sub(r"\s*" + placeholder + r"\s*", " ", text, flags=re.IGNORECASE)
    return text


def _remove_repeatedly(pattern: re.Pattern, text: str) -> str:
    while True:
        cleaned = collapse_whitespace(pattern.sub(" ", text))
        if cleaned == text:
            return cleaned
        text = cleaned


def _strip_separators(text: str) -> str:
    text = _LEADING_SEPARATOR.sub("", collapse_whitespace(text))
    return collapse_whitespace(_TRAILING_SEPARATOR.sub("", text))


def _finish(text: str, dropped: bool) -> str:
    # Separators are only trimmed when a missing value may have left one dangling.
    if not dropped:
        return sanitize_filename(text)

    # Sanitizing can expose a separator (e.g. "Name - ." -> "Name -"), so repeat until stable.
    result = sanitize_filename(_strip_separators(text))
    while True:
        trimmed = _strip_separators(result)
        if trimmed == result:
            return result
        result = sanitize_filename(trimmed)
