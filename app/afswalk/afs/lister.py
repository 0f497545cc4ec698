"""Directory lister for the traversal.

Lists immediate subdirectories only. Symbolic links are never
followed, so they are filtered out here together with plain files.
"""

import logging
import os

from afswalk.core.errors import ListDirError

logger = logging.getLogger(__name__)


def read_child_dirs(path: str) -> list[str]:
    """Return the names of the real subdirectories of ``path``.

    Args:
        path: Directory to enumerate.

    Returns:
        Sorted subdirectory names (not full paths), excluding ``.``,
        ``..``, symbolic links and non-directories.

    Raises:
        ListDirError: If the directory cannot be opened or read.
    """
    names: list[str] = []
    try:
        with os.scandir(path) as entries:
            for entry in entries:
                if entry.name in (".", ".."):
                    continue
                try:
                    if entry.is_symlink() or not entry.is_dir(follow_symlinks=False):
                        continue
                except OSError as e:
                    logger.warning("Skipping %s: cannot stat: %s", entry.path, e)
                    continue
                names.append(entry.name)
    except OSError as e:
        raise ListDirError(f"Cannot list {path}: {e}") from e
    return sorted(names)


def list_child_dirs(path: str) -> list[str]:
    """Like :func:`read_child_dirs`, but warn and return [] on failure."""
    try:
        return read_child_dirs(path)
    except ListDirError as e:
        logger.warning("%s", e)
        return []
