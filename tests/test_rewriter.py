"""Tests for in-place content rewriting."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from pmv.core.errors import ReadError, WriteError
from pmv.core.models import Replacement
from pmv.core.rewriter import rewrite_file, rewrite_files


class TestReplacement:
    """Tests for the literal replacement value."""

    def test_non_overlapping_left_to_right(self) -> None:
        assert Replacement("foo", "x").apply("foofoo") == "xx"
        assert Replacement("aa", "b").apply("aaa") == "ba"

    def test_matches_inside_larger_tokens(self) -> None:
        """Replacement is purely lexical."""
        assert Replacement("foo", "new").apply("fooBarService") == "newBarService"

    def test_empty_old_name_is_noop(self) -> None:
        assert Replacement("", "x").apply("abc") == "abc"


class TestRewriteFile:
    """Tests for rewrite_file."""

    def test_replaces_all_occurrences(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_text("hello foo world, foo!")
        assert rewrite_file(path, Replacement("foo", "bar")) is True
        assert path.read_text() == "hello bar world, bar!"

    def test_unchanged_file_reports_false(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_text("nothing to see")
        assert rewrite_file(path, Replacement("foo", "bar")) is False
        assert path.read_text() == "nothing to see"

    def test_line_endings_preserved(self, tmp_path: Path) -> None:
        path = tmp_path / "crlf.txt"
        path.write_bytes(b"foo\r\nline two\rfoo\n")
        rewrite_file(path, Replacement("foo", "bar"))
        assert path.read_bytes() == b"bar\r\nline two\rbar\n"

    def test_bom_preserved(self, tmp_path: Path) -> None:
        path = tmp_path / "bom.txt"
        path.write_bytes(b"\xef\xbb\xbffoo")
        rewrite_file(path, Replacement("foo", "bar"))
        assert path.read_bytes() == b"\xef\xbb\xbfbar"

    def test_invalid_utf8_is_read_error(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.txt"
        original = "café foo".encode("latin-1")
        path.write_bytes(original)
        with pytest.raises(ReadError, match="Failed to open and read") as exc_info:
            rewrite_file(path, Replacement("foo", "bar"))
        assert exc_info.value.path == path
        assert path.read_bytes() == original

    def test_missing_file_is_read_error(self, tmp_path: Path) -> None:
        with pytest.raises(ReadError):
            rewrite_file(tmp_path / "gone.txt", Replacement("foo", "bar"))

    def test_write_failure_is_write_error(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_text("foo")
        real_open = Path.open

        def fake_open(self: Path, mode: str = "r", *args, **kwargs):  # type: ignore[no-untyped-def]
            if "w" in mode:
                raise PermissionError(13, "Permission denied")
            return real_open(self, mode, *args, **kwargs)

        with patch.object(Path, "open", fake_open):
            with pytest.raises(WriteError, match="Could not write back"):
                rewrite_file(path, Replacement("foo", "bar"))


class TestRewriteFiles:
    """Tests for rewrite_files."""

    def test_counts_changed_files(self, tmp_path: Path) -> None:
        changed = tmp_path / "a.txt"
        changed.write_text("foo")
        same = tmp_path / "b.txt"
        same.write_text("bar")
        assert rewrite_files([changed, same], Replacement("foo", "baz")) == 1

    def test_first_failure_aborts_the_rest(self, tmp_path: Path) -> None:
        """Files before the failure stay rewritten, files after are untouched."""
        first = tmp_path / "1.txt"
        first.write_text("foo")
        bad = tmp_path / "2.txt"
        bad.write_bytes(b"\xff\xfe foo")
        last = tmp_path / "3.txt"
        last.write_text("foo")

        with pytest.raises(ReadError):
            rewrite_files([first, bad, last], Replacement("foo", "bar"))

        assert first.read_text() == "bar"
        assert last.read_text() == "foo"
