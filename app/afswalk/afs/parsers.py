"""Parsers for OpenAFS ``fs`` command replies.

Each parser takes the probed path and the combined stdout/stderr text
of one ``fs`` invocation and returns a structured result, raising a
ProbeError subclass when the reply cannot be interpreted.
"""

import re

from afswalk.afs.models import READONLY_SUFFIX, VolumeRef, strip_readonly
from afswalk.core.errors import NotApplicableError, ProbeParseError, SymlinkProbeError

_LSMOUNT_RE = re.compile(
    r"^'(?P<path>.*)' is a mount point for volume '(?P<type>[#%])(?P<target>[^']+)'",
    re.MULTILINE,
)
_NOT_MOUNT_RE = re.compile(r"is not a mount point", re.IGNORECASE)
_SYMLINK_RE = re.compile(r"is a symbolic link", re.IGNORECASE)
_WHICHCELL_RE = re.compile(r"lives in cell '(?P<cell>[^']+)'")
_EXAMINE_RE = re.compile(
    r"(?:contained in volume|Volume status for vid = \d+ named)\s+(?P<volume>\S+)"
)
_LISTACL_HEADER_RE = re.compile(r"^Access list for (?P<path>.+) is\s*$")
_WSCELL_RE = re.compile(r"belongs to cell '(?P<cell>[^']+)'")

# Replies meaning "this path is not part of AFS at all"
_NOT_APPLICABLE_PATTERNS: tuple[str, ...] = (
    "not in afs",
    "doesn't exist",
    "does not exist",
    "no such file",
)


def _excerpt(text: str) -> str:
    return text.strip().replace("\n", " | ")[:200]


def _check_not_applicable(path: str, text: str) -> None:
    lowered = text.lower()
    if any(pattern in lowered for pattern in _NOT_APPLICABLE_PATTERNS):
        raise NotApplicableError(path, f"{path} is not in AFS: {_excerpt(text)}")


def parse_lsmount(path: str, text: str) -> VolumeRef | None:
    """Parse ``fs lsmount`` output.

    Args:
        path: Directory that was probed.
        text: Combined output of the command.

    Returns:
        VolumeRef for a mount point, None if the path is not one.

    Raises:
        SymlinkProbeError: If fs reports the path as a symbolic link.
        NotApplicableError: If the path is not in AFS.
        ProbeParseError: If the reply matches no known shape.
    """
    if _SYMLINK_RE.search(text):
        raise SymlinkProbeError(path, f"{path} is a symbolic link")

    match = _LSMOUNT_RE.search(text)
    if match is None:
        if _NOT_MOUNT_RE.search(text):
            return None
        _check_not_applicable(path, text)
        raise ProbeParseError(path, f"Unexpected lsmount output for {path}: {_excerpt(text)}")

    target = match.group("target")
    cell: str | None = None
    if ":" in target:
        cell_part, target = target.split(":", 1)
        cell = cell_part.lower() or None

    if not target:
        raise ProbeParseError(path, f"Empty volume name in lsmount output for {path}")

    read_only = match.group("type") == "#" or target.endswith(READONLY_SUFFIX)
    return VolumeRef(cell=cell, volume=strip_readonly(target), read_only=read_only)


def parse_whichcell(path: str, text: str) -> str:
    """Parse ``fs whichcell`` output into a lower-cased cell name.

    Raises:
        NotApplicableError: If the path is not in AFS.
        ProbeParseError: If the reply matches no known shape.
    """
    match = _WHICHCELL_RE.search(text)
    if match is None:
        _check_not_applicable(path, text)
        raise ProbeParseError(path, f"Unexpected whichcell output for {path}: {_excerpt(text)}")
    return match.group("cell").lower()


def parse_examine(path: str, text: str) -> str:
    """Parse ``fs examine`` output into a volume name without ``.readonly``.

    Raises:
        NotApplicableError: If the path is not in AFS.
        ProbeParseError: If the reply matches no known shape.
    """
    match = _EXAMINE_RE.search(text)
    if match is None:
        _check_not_applicable(path, text)
        raise ProbeParseError(path, f"Unexpected examine output for {path}: {_excerpt(text)}")
    return strip_readonly(match.group("volume"))


def parse_listacl(path: str, text: str) -> str:
    """Parse ``fs listacl`` output into the ACL body.

    The body is every line after the ``Access list for ... is`` header,
    each terminated by a newline.

    Raises:
        NotApplicableError: If the path is not in AFS.
        ProbeParseError: If the header line is missing.
    """
    lines = text.splitlines()
    for index, line in enumerate(lines):
        if _LISTACL_HEADER_RE.match(line):
            body = lines[index + 1 :]
            return "".join(f"{entry}\n" for entry in body)

    _check_not_applicable(path, text)
    raise ProbeParseError(path, f"Unexpected listacl output for {path}: {_excerpt(text)}")


def parse_wscell(text: str) -> str | None:
    """Parse ``fs wscell`` output into a lower-cased cell name, if present."""
    match = _WSCELL_RE.search(text)
    if match is None:
        return None
    return match.group("cell").lower()
