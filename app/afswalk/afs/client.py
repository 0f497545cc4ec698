"""Filesystem introspection client backed by the OpenAFS ``fs`` command.

Wraps the four read-only queries the traversal needs (mount target,
owning cell, volume name, ACL) plus home cell detection. Nothing is
remembered between calls: the walker asks about each path once, and
keeping answers would grow with the size of the cell.
"""

import logging
import os
import subprocess
from pathlib import Path

from afswalk.afs.models import VolumeRef
from afswalk.afs.parsers import (
    parse_examine,
    parse_listacl,
    parse_lsmount,
    parse_whichcell,
    parse_wscell,
)
from afswalk.core.errors import ProbeError, SymlinkProbeError
from afswalk.utils.shell import run_command

logger = logging.getLogger(__name__)


class FsClient:
    """Query AFS metadata through the ``fs`` command.

    Every query method raises a ProbeError subclass when the answer
    cannot be obtained; callers decide whether that is fatal.

    Args:
        fs_command: Name or path of the fs binary.
        timeout: Maximum seconds to wait for one fs invocation.
    """

    def __init__(self, fs_command: str = "fs", *, timeout: float | None = 120.0) -> None:
        self._fs_command = fs_command
        self._timeout = timeout

    def mount_target(self, path: str) -> VolumeRef | None:
        """Resolve the volume mounted at ``path``.

        Returns:
            VolumeRef if ``path`` is a mount point, None otherwise.

        Raises:
            SymlinkProbeError: If ``path`` is a symbolic link.
            ProbeError: If the fs reply cannot be interpreted.
        """
        if os.path.islink(path):
            raise SymlinkProbeError(path, f"{path} is a symbolic link, not following it")
        return parse_lsmount(path, self._run("lsmount", path))

    def owning_cell(self, path: str) -> str:
        """Resolve the cell ``path`` lives in.

        Raises:
            NotApplicableError: If ``path`` is not in AFS.
            ProbeError: If the fs reply cannot be interpreted.
        """
        return parse_whichcell(path, self._run("whichcell", path))

    def volume_of(self, path: str) -> str:
        """Resolve the volume backing ``path``, without a ``.readonly`` suffix.

        Raises:
            ProbeError: If the fs reply cannot be interpreted.
        """
        return parse_examine(path, self._run("examine", path))

    def acl_of(self, path: str) -> str:
        """Resolve the ACL body text for ``path``.

        Raises:
            ProbeError: If the fs reply cannot be interpreted.
        """
        return parse_listacl(path, self._run("listacl", path))

    def workstation_cell(self, this_cell_file: Path | None = None) -> str | None:
        """Determine the local workstation's default cell.

        Asks ``fs wscell`` first and falls back to the first non-empty
        line of the client's ThisCell file.

        Args:
            this_cell_file: Fallback file naming the local cell.

        Returns:
            Lower-cased cell name, or None if it cannot be determined.
        """
        try:
            result = run_command([self._fs_command, "wscell"], timeout=self._timeout)
            cell = parse_wscell(result.output)
            if cell:
                logger.debug("Workstation cell from fs wscell: %s", cell)
                return cell
            logger.debug("Unexpected fs wscell output: %r", result.output.strip())
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            logger.debug("fs wscell failed: %s", e)

        if this_cell_file is None:
            return None

        try:
            for line in this_cell_file.read_text().splitlines():
                if line.strip():
                    cell = line.strip().lower()
                    logger.debug("Workstation cell from %s: %s", this_cell_file, cell)
                    return cell
        except OSError as e:
            logger.warning("Cannot read %s: %s", this_cell_file, e)
        return None

    def _run(self, subcommand: str, path: str) -> str:
        args = [self._fs_command, subcommand, path]
        logger.debug("Running: %s", " ".join(args))
        try:
            result = run_command(args, timeout=self._timeout)
        except subprocess.TimeoutExpired as e:
            msg = f"fs {subcommand} timed out after {e.timeout}s for {path}"
            raise ProbeError(path, msg) from e
        except (FileNotFoundError, OSError) as e:
            raise ProbeError(path, f"Cannot run {self._fs_command}: {e}") from e
        return result.output
