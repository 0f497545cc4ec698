"""Unit tests for traversal models."""

import pytest
from afswalk.afs.models import VolumeRef, WalkStats, WorkItem, qualify, strip_readonly


class TestStripReadonly:
    """Tests for strip_readonly."""

    def test_strips_suffix(self) -> None:
        assert strip_readonly("root.cell.readonly") == "root.cell"

    def test_leaves_other_names(self) -> None:
        assert strip_readonly("root.cell") == "root.cell"
        assert strip_readonly("user.readonlyish") == "user.readonlyish"

    def test_bare_suffix_kept(self) -> None:
        """A name that is only the suffix is not emptied."""
        assert strip_readonly(".readonly") == ".readonly"


class TestQualify:
    """Tests for qualify."""

    def test_home_cell(self) -> None:
        assert qualify("vol", "example.org", "example.org") == "vol"

    def test_no_cell(self) -> None:
        assert qualify("vol", None, "example.org") == "vol"

    def test_foreign_cell(self) -> None:
        assert qualify("vol", "other.edu", "example.org") == "other.edu:vol"


class TestVolumeRef:
    """Tests for VolumeRef."""

    def test_empty_volume_rejected(self) -> None:
        with pytest.raises(ValueError, match="cannot be empty"):
            VolumeRef(cell=None, volume="")

    def test_qualified_name(self) -> None:
        ref = VolumeRef(cell="other.edu", volume="root.cell", read_only=True)

        assert ref.qualified_name("example.org") == "other.edu:root.cell"

    def test_is_immutable(self) -> None:
        ref = VolumeRef(cell=None, volume="v")

        with pytest.raises(AttributeError):
            ref.volume = "w"  # type: ignore[misc]


class TestWorkItem:
    """Tests for WorkItem."""

    def test_defaults(self) -> None:
        item = WorkItem(parent_volume="v", relative_path="a", full_path="/afs/x/a")

        assert item.inherited_acl is None


class TestWalkStats:
    """Tests for WalkStats."""

    def test_summary_mentions_counters(self) -> None:
        stats = WalkStats(directories=3, volumes_visited=2, duplicate_prunes=1)

        summary = stats.summary()

        assert "3 directories examined" in summary
        assert "2 volumes visited" in summary
        assert "1 duplicate" in summary
