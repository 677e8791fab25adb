"""Tests for provider-id selection and folder-id reconciliation."""

from mediarenamer.rename.models import Series
from mediarenamer.rename.providers import (
    ProviderChoice,
    compute_provider_hash,
    extract_provider_id,
    folder_id_matches_any_metadata_id,
    get_best_provider,
    should_skip_rename,
)


class TestGetBestProvider:
    """Tests for choosing the id embedded in folder names."""

    def test_preferred_order(self) -> None:
        ids = {"Tmdb": "1399", "Tvdb": "121361", "Imdb": "tt0944947"}
        assert get_best_provider(ids, ["Tvdb", "Tmdb"]) == ProviderChoice("Tvdb", "tvdb", "121361")

    def test_preferred_keys_ignore_case(self) -> None:
        assert get_best_provider({"TMDB": "1399"}, ["tmdb"]) == ProviderChoice("TMDB", "tmdb", "1399")

    def test_blank_preferred_value_is_skipped(self) -> None:
        ids = {"Tvdb": " ", "Tmdb": "1399"}
        assert get_best_provider(ids, ["Tvdb", "Tmdb"]).label == "tmdb"

    def test_fallback_orders_by_key(self) -> None:
        ids = {"Zap2it": "EP1", "AniDB": "42"}
        assert get_best_provider(ids, ["Tvdb"]) == ProviderChoice("AniDB", "anidb", "42")
        assert get_best_provider(ids, None).label == "anidb"

    def test_nothing_usable(self) -> None:
        assert get_best_provider({}, ["Tvdb"]) is None
        assert get_best_provider(None, ["Tvdb"]) is None
        assert get_best_provider({"Tvdb": ""}, ["Tvdb"]) is None


class TestComputeProviderHash:
    """Tests for the provider-map fingerprint."""

    def test_order_independent(self) -> None:
        assert compute_provider_hash({"Tvdb": "1", "Imdb": "tt2"}) == compute_provider_hash({"Imdb": "tt2", "Tvdb": "1"})
        assert compute_provider_hash({"Tvdb": "1", "Imdb": "tt2"}) == "Imdb=tt2|Tvdb=1"

    def test_changes_with_values(self) -> None:
        assert compute_provider_hash({"Tvdb": "1"}) != compute_provider_hash({"Tvdb": "2"})

    def test_empty(self) -> None:
        assert compute_provider_hash({}) == ""
        assert compute_provider_hash(None) == ""


class TestExtractProviderId:
    """Tests for reading an embedded id from a folder name."""

    def test_trailing_group(self) -> None:
        assert extract_provider_id("Show (2020) [Tvdb-81189]") == "tvdb-81189"
        assert extract_provider_id("Show [imdb-tt0944947]  ") == "imdb-tt0944947"

    def test_absent_or_not_trailing(self) -> None:
        assert extract_provider_id("Show (2020)") is None
        assert extract_provider_id("[tvdb-1] Show") is None
        assert extract_provider_id(None) is None


def test_folder_id_matches_any_metadata_id() -> None:
    ids = {"Tvdb": "81189", "Tmdb": "1396"}
    assert folder_id_matches_any_metadata_id(ids, "tmdb-1396")
    assert folder_id_matches_any_metadata_id(ids, "TVDB-81189")
    assert not folder_id_matches_any_metadata_id(ids, "tvdb-1396")
    assert not folder_id_matches_any_metadata_id(ids, None)
    assert not folder_id_matches_any_metadata_id({}, "tvdb-81189")


class TestShouldSkipRename:
    """Tests for reconciliation of an already-matching folder name."""

    def test_different_names_never_skip(self) -> None:
        series = Series(id="1", name="Show", provider_ids={"Tvdb": "100"})
        assert not should_skip_rename(series, "Old Name", "Show [tvdb-100]")

    def test_matching_name_and_id_skips(self) -> None:
        series = Series(id="1", name="Show", provider_ids={"Tvdb": "100"})
        assert should_skip_rename(series, "Show (2020) [tvdb-100]", "Show (2020) [TVDB-100]")

    def test_stale_id_forces_rename(self) -> None:
        series = Series(id="1", name="Show", provider_ids={"Tvdb": "200"})
        assert not should_skip_rename(series, "Show (2020) [tvdb-100]", "Show (2020) [tvdb-100]")

    def test_names_without_ids_skip(self) -> None:
        series = Series(id="1", name="Show", provider_ids={"Tvdb": "200"})
        assert should_skip_rename(series, "Show (2020)", "show (2020)")
