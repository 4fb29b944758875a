"""Tests for entry traversal helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from lsearch.config import TraversalConfig
from lsearch.utils.files import is_hidden, iter_entries


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "b.log").write_text("b")
    (tmp_path / ".hidden").write_text("h")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "c.txt").write_text("c")
    return tmp_path


def _names(pattern: str, config: TraversalConfig, base: Path) -> list[str]:
    return [entry.path.name for entry in iter_entries(pattern, config, base)]


class TestIsHidden:
    def test_dot_prefix(self) -> None:
        assert is_hidden(Path("/x/.git"))
        assert not is_hidden(Path("/x/git"))


class TestIterEntries:
    """Test iter_entries function."""

    def test_directory_lists_children(self, tree: Path) -> None:
        """A directory pattern lists its direct children, sorted."""
        assert _names(".", TraversalConfig(), tree) == ["a.txt", "b.log", "sub"]

    def test_hidden_included_on_request(self, tree: Path) -> None:
        names = _names(".", TraversalConfig(hidden=True), tree)

        assert ".hidden" in names

    def test_recursive_directory(self, tree: Path) -> None:
        names = _names(".", TraversalConfig(recursive=True), tree)

        assert sorted(names) == ["a.txt", "b.log", "c.txt", "sub"]

    def test_glob(self, tree: Path) -> None:
        assert _names("*.txt", TraversalConfig(), tree) == ["a.txt"]

    def test_recursive_glob(self, tree: Path) -> None:
        names = _names("*.txt", TraversalConfig(recursive=True), tree)

        assert sorted(names) == ["a.txt", "c.txt"]

    def test_single_file(self, tree: Path) -> None:
        entries = list(iter_entries("a.txt", TraversalConfig(), tree))

        assert [entry.path for entry in entries] == [(tree / "a.txt").resolve()]

    def test_absolute_pattern(self, tree: Path) -> None:
        names = _names(str(tree / "sub"), TraversalConfig(), Path("/"))

        assert names == ["c.txt"]

    def test_no_matches(self, tree: Path, caplog: pytest.LogCaptureFixture) -> None:
        """An unmatched pattern yields nothing and logs a warning."""
        with caplog.at_level("WARNING"):
            assert _names("*.pdf", TraversalConfig(), tree) == []

        assert "No matches found" in caplog.text

    def test_paths_are_absolute(self, tree: Path) -> None:
        entries = list(iter_entries(".", TraversalConfig(), tree))

        assert all(entry.path.is_absolute() for entry in entries)

    def test_glob_hidden(self, tree: Path) -> None:
        """Globs honour the hidden flag just like directory listings."""
        assert ".hidden" in _names("*", TraversalConfig(hidden=True), tree)
        assert ".hidden" not in _names("*", TraversalConfig(), tree)

    def test_recursive_glob_hidden(self, tree: Path) -> None:
        (tree / "sub" / ".env").write_text("e")

        names = _names(".*", TraversalConfig(recursive=True, hidden=True), tree)

        assert sorted(names) == [".env", ".hidden"]
