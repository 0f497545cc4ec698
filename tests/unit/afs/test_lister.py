"""Unit tests for the directory lister."""

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from unittest.mock import patch

import pytest
from afswalk.afs.lister import list_child_dirs, read_child_dirs
from afswalk.core.errors import ListDirError


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Directory with subdirs, a file, a symlink to a dir and a dead link."""
    (tmp_path / "beta").mkdir()
    (tmp_path / "alpha").mkdir()
    (tmp_path / ".admin").mkdir()
    (tmp_path / "notes.txt").write_text("x")
    os.symlink(tmp_path / "alpha", tmp_path / "alias")
    os.symlink(tmp_path / "nowhere", tmp_path / "dangling")
    return tmp_path


class TestReadChildDirs:
    """Tests for read_child_dirs."""

    def test_only_real_directories(self, tree: Path) -> None:
        """Files and symlinks are excluded, names are sorted."""
        assert read_child_dirs(str(tree)) == [".admin", "alpha", "beta"]

    def test_empty_directory(self, tmp_path: Path) -> None:
        """An empty directory has no children."""
        assert read_child_dirs(str(tmp_path)) == []

    def test_unstatable_entry_warns(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """An entry that cannot be stat'ed is skipped with a warning."""
        (tmp_path / "ok").mkdir()
        (tmp_path / "gone").mkdir()
        real_scandir = os.scandir

        class _Unreachable:
            def __init__(self, entry: os.DirEntry[str]) -> None:
                self.name = entry.name
                self.path = entry.path

            def is_symlink(self) -> bool:
                raise OSError(110, "Connection timed out")

        @contextmanager
        def scandir(path: str) -> Iterator[list[object]]:
            with real_scandir(path) as entries:
                yield [_Unreachable(e) if e.name == "gone" else e for e in entries]

        with (
            patch("afswalk.afs.lister.os.scandir", side_effect=scandir),
            caplog.at_level("WARNING", logger="afswalk"),
        ):
            names = read_child_dirs(str(tmp_path))

        assert names == ["ok"]
        assert f"Skipping {tmp_path / 'gone'}: cannot stat" in caplog.text

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        """Unreadable directories raise ListDirError."""
        with pytest.raises(ListDirError, match="Cannot list"):
            read_child_dirs(str(tmp_path / "missing"))


class TestListChildDirs:
    """Tests for list_child_dirs."""

    def test_delegates(self, tree: Path) -> None:
        """Returns the same names as read_child_dirs."""
        assert list_child_dirs(str(tree)) == [".admin", "alpha", "beta"]

    def test_failure_returns_empty(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Failure is logged as a warning and yields no children."""
        with caplog.at_level("WARNING", logger="afswalk"):
            result = list_child_dirs(str(tmp_path / "missing"))

        assert result == []
        assert "Cannot list" in caplog.text

    def test_permission_error(self, tmp_path: Path) -> None:
        """PermissionError from scandir is handled like any OSError."""
        with patch("afswalk.afs.lister.os.scandir", side_effect=PermissionError("denied")):
            assert list_child_dirs(str(tmp_path)) == []
