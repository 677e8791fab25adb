"""
Provider-id helpers: choosing the id to embed in a folder name, detecting
provider changes, and reconciling an id already embedded in a folder name
against the item's current metadata.

Folder names carry the id as a trailing "[<provider>-<id>]" group, e.g.
"Show (2020) [tvdb-81189]". When a folder name already matches the desired
name textually, the embedded id still decides whether a rename is needed: an
item re-identified to a different catalog entry must not keep a stale id.
"""
from dataclasses import dataclass
from typing import Mapping

from mediarenamer.rename.models import MediaItem
from mediarenamer.utils import LogLevel, PROVIDER_ID_REGEX, logger


@dataclass(frozen=True)
class ProviderChoice:
    """The provider id selected for naming."""
    key: str
    label: str
    id: str


def get_best_provider(provider_ids: Mapping[str, str] | None, preferred_keys: list[str] | None) -> ProviderChoice | None:
    """
    Pick the provider id to embed in a folder name.

    Preferred keys are tried in order (case-insensitive). If none carries a
    usable value, the first non-blank id ordered by key is used. The label is
    the lower-cased key ("Tvdb" -> "tvdb").
    """
    if not provider_ids:
        return None

    by_lower = {key.strip().lower(): (key, value) for key, value in provider_ids.items()}
    for preferred in preferred_keys or []:
        entry = by_lower.get(preferred.strip().lower())
        if entry and entry[1] and entry[1].strip():
            key, value = entry
            return ProviderChoice(key=key, label=key.strip().lower(), id=value.strip())

    for key in sorted(provider_ids, key=str.lower):
        value = provider_ids[key]
        if value and value.strip():
            return ProviderChoice(key=key, label=key.strip().lower(), id=value.strip())
    return None


def compute_provider_hash(provider_ids: Mapping[str, str] | None) -> str:
    """Stable fingerprint of a provider map, used to notice re-identification."""
    if not provider_ids:
        return ""
    return "|".join(
        f"{key.strip()}={(provider_ids[key] or '').strip()}"
        for key in sorted(provider_ids, key=str.lower)
    )


def extract_provider_id(folder_name: str | None) -> str | None:
    """Return "<provider>-<id>" from a trailing "[Provider-Id]" group, provider lower-cased."""
    match = PROVIDER_ID_REGEX.search(folder_name or "")
    if not match:
        return None
    return f"{match.group(1).lower()}-{match.group(2)}"


def folder_id_matches_any_metadata_id(provider_ids: Mapping[str, str] | None, folder_provider_id: str | None) -> bool:
    """True if the folder's "<provider>-<id>" equals any of the item's provider ids, ignoring case."""
    if not folder_provider_id or not provider_ids:
        return False
    wanted = folder_provider_id.strip().lower()
    for key, value in provider_ids.items():
        if not value or not value.strip():
            continue
        if f"{key.strip().lower()}-{value.strip()}".lower() == wanted:
            return True
    return False


def should_skip_rename(item: MediaItem, current_name: str, desired_name: str) -> bool:
    """
    Decide whether a folder whose name already matches can be left alone.

    Returns False (rename) when the names differ, when the embedded ids of the
    two names disagree, or when the current folder embeds an id that none of
    the item's provider ids account for. Returns True (skip) otherwise.
    """
    if (current_name or "").lower() != (desired_name or "").lower():
        return False

    current_id = extract_provider_id(current_name)
    desired_id = extract_provider_id(desired_name)

    if current_id and desired_id and current_id.lower() != desired_id.lower():
        logger.log("rename.reconcile", LogLevel.INFO, item=item.name, reason="id_differs",
                   current_id=current_id, desired_id=desired_id)
        return False

    if current_id and not folder_id_matches_any_metadata_id(item.provider_ids, current_id):
        logger.log("rename.reconcile", LogLevel.INFO, item=item.name, reason="stale_id", current_id=current_id)
        return False

    return True
