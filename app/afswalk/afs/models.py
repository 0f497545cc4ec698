"""Traversal domain models.

This module defines the data structures exchanged between the fs
client, the traversal engine and the reporter.
"""

from dataclasses import dataclass

READONLY_SUFFIX = ".readonly"


def strip_readonly(volume: str) -> str:
    """Drop a trailing ``.readonly`` from a volume name.

    Read-only and read-write replicas are the same logical volume for
    deduplication and ACL purposes.
    """
    if volume.endswith(READONLY_SUFFIX) and len(volume) > len(READONLY_SUFFIX):
        return volume[: -len(READONLY_SUFFIX)]
    return volume


def qualify(volume: str, cell: str | None, home_cell: str) -> str:
    """Return ``cell:volume`` for foreign cells, the bare name otherwise."""
    if cell is None or cell == home_cell:
        return volume
    return f"{cell}:{volume}"


@dataclass(frozen=True, slots=True)
class VolumeRef:
    """Target of a mount point.

    Attributes:
        cell: Cell named by the mount, or None if the mount does not
            name one (it then lives in the cell of the directory).
        volume: Volume name with any ``.readonly`` suffix removed.
        read_only: True for regular (``#``) mounts and explicit
            ``.readonly`` targets, False for read-write (``%``) mounts.
    """

    cell: str | None
    volume: str
    read_only: bool = False

    def __post_init__(self) -> None:
        """Validate volume data after initialization."""
        if not self.volume:
            msg = "Volume name cannot be empty"
            raise ValueError(msg)

    def qualified_name(self, home_cell: str) -> str:
        """Volume name, prefixed with its cell when that is not the home cell."""
        return qualify(self.volume, self.cell, home_cell)


@dataclass(frozen=True, slots=True)
class WorkItem:
    """One directory awaiting examination.

    Attributes:
        parent_volume: Volume (possibly cell-qualified) containing the directory.
        relative_path: Path relative to the mount root of ``parent_volume``.
        full_path: Absolute path of the directory.
        inherited_acl: ACL of the nearest examined ancestor; ignored when
            the directory turns out to be a mount point. None when ACLs
            are not being reported.
    """

    parent_volume: str
    relative_path: str
    full_path: str
    inherited_acl: str | None = None


@dataclass(slots=True)
class WalkStats:
    """Counters collected over one traversal run."""

    directories: int = 0
    mounts_reported: int = 0
    acls_reported: int = 0
    volumes_visited: int = 0
    duplicate_prunes: int = 0
    foreign_prunes: int = 0
    probe_failures: int = 0

    def summary(self) -> str:
        """One-line human readable summary."""
        return (
            f"{self.directories} directories examined, "
            f"{self.volumes_visited} volumes visited, "
            f"{self.mounts_reported} mounts and {self.acls_reported} ACLs reported, "
            f"{self.duplicate_prunes} duplicate and {self.foreign_prunes} foreign "
            f"mounts pruned, {self.probe_failures} probe failures"
        )
