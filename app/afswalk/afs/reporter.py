"""Streaming reporter for mount and ACL records."""

from collections.abc import Callable

import typer

from afswalk.afs.models import VolumeRef


class Reporter:
    """Write mount and ACL records to stdout as they are discovered.

    Args:
        home_cell: Cell the run is scoped to; volumes of other cells are
            printed as ``cell:volume``.
        mounts: Emit mount records.
        acls: Emit ACL records.
        echo: Output function, ``typer.echo`` by default.
    """

    def __init__(
        self,
        home_cell: str,
        *,
        mounts: bool = True,
        acls: bool = False,
        echo: Callable[[str], object] = typer.echo,
    ) -> None:
        self.home_cell = home_cell
        self.mounts = mounts
        self.acls = acls
        self._echo = echo

    def mount(self, path: str, volume: VolumeRef) -> bool:
        """Emit ``<path>\\t<volume>``. Returns True if a line was written."""
        if not self.mounts:
            return False
        self._echo(f"{path}\t{volume.qualified_name(self.home_cell)}")
        return True

    def acl(self, path: str, acl_text: str) -> bool:
        """Emit the ACL block for ``path``. Returns True if it was written."""
        if not self.acls:
            return False
        self._echo(f"Access list for {path} is\n{acl_text}")
        return True
