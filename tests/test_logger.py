"""Tests for the structured logger and env-driven settings helpers."""
import threading

import pytest

from mediarenamer.rename.models import RenameOutcome
from mediarenamer.utils import LogLevel, constants, logger


class TestLog:
    """Tests for structured log lines."""

    def test_line_format(self, capsys) -> None:
        logger.set_log_level(LogLevel.INFO)

        logger.log("rename.success", LogLevel.INFO, item="Show", outcome=RenameOutcome.RENAMED,
                   dry_run=False, reason=None, count=3)

        line = capsys.readouterr().out.strip()
        assert "[INFO] | rename.success" in line
        assert 'item="Show"' in line
        assert "outcome=RENAMED" in line
        assert "dry_run=false" in line
        assert "reason=null" in line
        assert "count=3" in line
        assert 'worker="main"' in line

    def test_values_stay_on_one_line(self, capsys) -> None:
        logger.set_log_level(LogLevel.INFO)

        logger.log("rename.error", LogLevel.ERROR, error='bad "name"\nsecond line')

        out = capsys.readouterr().out
        assert out.count("\n") == 1
        assert 'error="bad \\"name\\"\\nsecond line"' in out

    def test_level_filtering(self, capsys) -> None:
        logger.set_log_level(LogLevel.WARN)

        logger.log("rename.skip", LogLevel.DEBUG, item="a")
        logger.log("rename.skip", LogLevel.INFO, item="b")
        logger.log("rename.dry_run", LogLevel.WARN, item="c")

        out = capsys.readouterr().out
        assert 'item="a"' not in out
        assert 'item="b"' not in out
        assert 'item="c"' in out

    def test_worker_ids_for_threads(self) -> None:
        seen = []
        thread = threading.Thread(target=lambda: seen.extend([logger.get_worker_id(), logger.get_worker_id()]))
        thread.start()
        thread.join()

        assert seen[0].startswith("w")
        assert seen[0] == seen[1]


@pytest.mark.parametrize("name, expected", [
    ("debug", LogLevel.DEBUG),
    (" Warning ", LogLevel.WARN),
    ("ERROR", LogLevel.ERROR),
])
def test_set_log_level_by_name(name, expected) -> None:
    logger.set_log_level_by_name(name)
    assert logger.get_log_level() is expected


def test_unknown_level_name_is_ignored() -> None:
    logger.set_log_level(LogLevel.INFO)
    logger.set_log_level_by_name("verbose")
    assert logger.get_log_level() is LogLevel.INFO


class TestEnvHelpers:
    """Tests for reading run settings from the environment."""

    @pytest.mark.parametrize("raw, expected", [("1", True), ("yes", True), ("TRUE", True), ("0", False), ("off", False)])
    def test_env_bool(self, monkeypatch, raw, expected) -> None:
        monkeypatch.setenv("MR_TEST_FLAG", raw)
        assert constants._env_bool("MR_TEST_FLAG", not expected) is expected

    def test_env_bool_default(self, monkeypatch) -> None:
        monkeypatch.delenv("MR_TEST_FLAG", raising=False)
        assert constants._env_bool("MR_TEST_FLAG", True) is True
        monkeypatch.setenv("MR_TEST_FLAG", "  ")
        assert constants._env_bool("MR_TEST_FLAG", False) is False

    def test_env_int(self, monkeypatch) -> None:
        monkeypatch.setenv("MR_TEST_INT", "15")
        assert constants._env_int("MR_TEST_INT", 60) == 15
        monkeypatch.setenv("MR_TEST_INT", "soon")
        assert constants._env_int("MR_TEST_INT", 60) == 60

    def test_env_list(self, monkeypatch) -> None:
        monkeypatch.setenv("MR_TEST_LIST", " Tmdb, ,Imdb ")
        assert constants._env_list("MR_TEST_LIST", ["Tvdb"]) == ["Tmdb", "Imdb"]
        monkeypatch.delenv("MR_TEST_LIST")
        assert constants._env_list("MR_TEST_LIST", ["Tvdb"]) == ["Tvdb"]
