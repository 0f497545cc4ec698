"""Traversal engine.

Walks the mounted-volume tree below a root directory with an explicit
work queue instead of recursion. Every volume is entered at most once,
mounts into other cells are reported but not descended, and ACLs are
only reported where they differ from the parent directory's.

Children are pushed onto the front of the queue. The initial batch is
ordered so names starting with ``.`` come first: the read-write mount
of a cell root (``/afs/.example.org``) is then entered before its
read-only twin (``/afs/example.org``), which gets pruned as a duplicate.
"""

import logging
import posixpath
from collections import deque
from collections.abc import Callable, Iterable
from typing import Protocol

from afswalk.afs.lister import list_child_dirs
from afswalk.afs.models import VolumeRef, WalkStats, WorkItem, qualify
from afswalk.afs.reporter import Reporter
from afswalk.core.errors import FatalSetupError, ProbeError

logger = logging.getLogger(__name__)


class IntrospectionClient(Protocol):
    """Read-only AFS queries used by the walker."""

    def mount_target(self, path: str) -> VolumeRef | None: ...

    def owning_cell(self, path: str) -> str: ...

    def volume_of(self, path: str) -> str: ...

    def acl_of(self, path: str) -> str: ...


def seed_order(names: Iterable[str]) -> list[str]:
    """Sort names with dot-prefixed entries first, then lexicographically."""
    return sorted(names, key=lambda name: (not name.startswith("."), name))


class Walker:
    """Traverse one cell's namespace starting at ``root``.

    The queue, visited-volume set and statistics belong to a single
    instance; create a new Walker for each run.

    Args:
        client: Introspection client answering the four AFS queries.
        reporter: Destination for mount and ACL records.
        home_cell: Cell the traversal is restricted to.
        root: Absolute directory to start from.
        acls: Fetch and compare ACLs while walking.
        list_dirs: Lists the subdirectory names of a path.
    """

    def __init__(
        self,
        client: IntrospectionClient,
        reporter: Reporter,
        home_cell: str,
        *,
        root: str = "/afs",
        acls: bool = False,
        list_dirs: Callable[[str], list[str]] = list_child_dirs,
    ) -> None:
        self._client = client
        self._reporter = reporter
        self._home_cell = home_cell
        self._root = root
        self._acls = acls
        self._list_dirs = list_dirs

        self._queue: deque[WorkItem] = deque()
        self._visited: set[str] = set()
        self.stats = WalkStats()

    @property
    def visited(self) -> frozenset[str]:
        """Volumes entered so far (foreign ones cell-qualified)."""
        return frozenset(self._visited)

    def run(self) -> WalkStats:
        """Bootstrap from the root and drain the queue.

        Returns:
            Statistics for the run.

        Raises:
            FatalSetupError: If the root's cell, volume or ACL cannot be resolved.
        """
        self._bootstrap()
        while self._queue:
            self._process(self._queue.popleft())
        logger.info("Done: %s", self.stats.summary())
        return self.stats

    # -------------------------------------------------------------------------
    # Bootstrap
    # -------------------------------------------------------------------------

    def _bootstrap(self) -> None:
        root = self._root
        try:
            root_cell = self._client.owning_cell(root)
        except ProbeError as e:
            raise FatalSetupError(f"Cannot determine cell of {root}: {e}") from e

        if root_cell == self._home_cell:
            self._seed_home_root(root)
        else:
            logger.info(
                "%s is in cell %s, looking for mounts of %s below it",
                root,
                root_cell,
                self._home_cell,
            )
            self._seed_foreign_root(root)

        if not self._queue:
            logger.info("Nothing to traverse below %s", root)

    def _seed_home_root(self, root: str) -> None:
        try:
            volume = self._client.volume_of(root)
            acl = self._client.acl_of(root) if self._acls else None
        except ProbeError as e:
            raise FatalSetupError(f"Cannot resolve root {root}: {e}") from e

        self._report_mount(root, VolumeRef(cell=None, volume=volume))
        if acl is not None:
            self._report_acl(root, acl)
        self._mark_visited(volume)
        self._push_children(volume, "", root, acl, seed=True)

    def _seed_foreign_root(self, root: str) -> None:
        for name in seed_order(self._list_dirs(root)):
            path = posixpath.join(root, name)
            target = self._probe_mount(path)
            if target is None:
                continue

            try:
                cell = self._effective_cell(path, target)
            except ProbeError as e:
                self._probe_failed(path, e)
                continue
            if cell != self._home_cell:
                logger.debug("Skipping %s: mount into cell %s", path, cell)
                continue

            volume = target.volume
            self._report_mount(path, target)
            if volume in self._visited:
                self._prune_duplicate(path, volume)
                continue
            self._mark_visited(volume)

            acl: str | None = None
            if self._acls:
                try:
                    acl = self._client.acl_of(path)
                except ProbeError as e:
                    self._probe_failed(path, e)
                    continue
                self._report_acl(path, acl)

            self._push_children(volume, "", path, acl, seed=True)

    # -------------------------------------------------------------------------
    # Main loop
    # -------------------------------------------------------------------------

    def _process(self, item: WorkItem) -> None:
        path = item.full_path
        self.stats.directories += 1
        logger.debug("Examining %s (%s:%s)", path, item.parent_volume, item.relative_path)

        try:
            target = self._client.mount_target(path)
        except ProbeError as e:
            self._probe_failed(path, e)
            return

        parent_volume = item.parent_volume
        relative_path = item.relative_path
        acl = item.inherited_acl

        if target is not None:
            try:
                cell = self._effective_cell(path, target)
            except ProbeError as e:
                self._probe_failed(path, e)
                return

            resolved = VolumeRef(cell=cell, volume=target.volume, read_only=target.read_only)
            volume = qualify(target.volume, cell, self._home_cell)
            self._report_mount(path, resolved)

            if volume in self._visited:
                self._prune_duplicate(path, volume)
                return
            self._mark_visited(volume)

            if cell != self._home_cell:
                logger.info("Pruning %s: volume %s is in cell %s", path, volume, cell)
                self.stats.foreign_prunes += 1
                return

            if self._acls:
                try:
                    acl = self._client.acl_of(path)
                except ProbeError as e:
                    self._probe_failed(path, e)
                    return
                self._report_acl(path, acl)

            parent_volume = volume
            relative_path = ""
        elif self._acls:
            try:
                own_acl = self._client.acl_of(path)
            except ProbeError as e:
                self._probe_failed(path, e)
                return
            if own_acl != item.inherited_acl:
                self._report_acl(path, own_acl)
                acl = own_acl

        self._push_children(parent_volume, relative_path, path, acl)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _push_children(
        self,
        parent_volume: str,
        relative_path: str,
        full_path: str,
        acl: str | None,
        *,
        seed: bool = False,
    ) -> None:
        names = self._list_dirs(full_path)
        if seed:
            names = seed_order(names)
        items = [
            WorkItem(
                parent_volume=parent_volume,
                relative_path=posixpath.join(relative_path, name),
                full_path=posixpath.join(full_path, name),
                inherited_acl=acl,
            )
            for name in names
        ]
        if seed:
            self._queue.extend(items)
        else:
            # extendleft reverses, so feed it backwards to keep listing order
            self._queue.extendleft(reversed(items))

    def _probe_mount(self, path: str) -> VolumeRef | None:
        try:
            return self._client.mount_target(path)
        except ProbeError as e:
            self._probe_failed(path, e)
            return None

    def _effective_cell(self, path: str, target: VolumeRef) -> str:
        if target.cell is not None:
            return target.cell
        return self._client.owning_cell(path)

    def _mark_visited(self, volume: str) -> None:
        self._visited.add(volume)
        self.stats.volumes_visited += 1

    def _prune_duplicate(self, path: str, volume: str) -> None:
        logger.info("Pruning %s: volume %s already visited", path, volume)
        self.stats.duplicate_prunes += 1

    def _probe_failed(self, path: str, error: ProbeError) -> None:
        logger.warning("Skipping %s: %s", path, error)
        self.stats.probe_failures += 1

    def _report_mount(self, path: str, volume: VolumeRef) -> None:
        if self._reporter.mount(path, volume):
            self.stats.mounts_reported += 1

    def _report_acl(self, path: str, acl: str) -> None:
        if self._reporter.acl(path, acl):
            self.stats.acls_reported += 1
