"""Tests for filename sanitizing and the local filesystem port."""

import pytest

from mediarenamer.utils.file_util import LocalFileSystem, collapse_whitespace, sanitize_filename


class TestSanitizeFilename:
    """Tests for filename sanitization."""

    def test_replaces_illegal_chars(self) -> None:
        assert sanitize_filename("Marvel's Agents: S.H.I.E.L.D.") == "Marvel's Agents_ S.H.I.E.L.D"
        assert sanitize_filename('What? "Now" <Then>') == "What_ _Now_ _Then_"
        assert sanitize_filename("This/That\\Other|Pipe*") == "This_That_Other_Pipe_"

    def test_strips_trailing_dots_and_spaces(self) -> None:
        assert sanitize_filename("Show...") == "Show"
        assert sanitize_filename("  Show . .  ") == "Show"

    def test_collapses_whitespace(self) -> None:
        assert sanitize_filename("Too    Many   Spaces") == "Too Many Spaces"

    def test_control_chars_become_underscores(self) -> None:
        assert sanitize_filename("Tab\there") == "Tab_here"

    @pytest.mark.parametrize("value", [None, "", "   ", "...", " . . "])
    def test_blank_falls_back_to_unknown(self, value) -> None:
        assert sanitize_filename(value) == "Unknown"

    @pytest.mark.parametrize("value", [
        "Show (2020) [tvdb-100]",
        "a. .",
        "  lead and trail  ",
        "x: y / z?",
        "...",
        "Name - .",
        "\t\n",
    ])
    def test_idempotent(self, value) -> None:
        once = sanitize_filename(value)
        assert sanitize_filename(once) == once
        assert once.strip()


def test_collapse_whitespace_handles_none() -> None:
    assert collapse_whitespace(None) == ""
    assert collapse_whitespace("  a \n b  ") == "a b"


class TestLocalFileSystem:
    """Tests for the disk-backed filesystem port."""

    def test_move_and_exists(self, tmp_path) -> None:
        fs = LocalFileSystem()
        source = tmp_path / "old"
        source.mkdir()
        target = tmp_path / "new"

        fs.move(source, target)

        assert fs.exists(target)
        assert not fs.exists(source)

    def test_parent_of_root_is_none(self, tmp_path) -> None:
        fs = LocalFileSystem()
        assert fs.parent_of(tmp_path) == tmp_path.parent
        assert fs.parent_of(tmp_path.parents[-1]) is None

    def test_size(self, tmp_path) -> None:
        fs = LocalFileSystem()
        (tmp_path / "b.mkv").write_bytes(b"12345")
        (tmp_path / "a.mkv").write_bytes(b"")

        assert fs.size(tmp_path / "b.mkv") == 5
        assert fs.size(tmp_path / "a.mkv") == 0

    def test_same_entry(self, tmp_path) -> None:
        fs = LocalFileSystem()
        first = tmp_path / "a.mkv"
        first.write_bytes(b"x")
        second = tmp_path / "b.mkv"
        second.write_bytes(b"x")

        assert fs.same_entry(first, first)
        assert not fs.same_entry(first, second)
        assert not fs.same_entry(first, tmp_path / "missing.mkv")
