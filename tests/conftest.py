"""Pytest configuration and shared fixtures.

Captured ``fs`` replies used across the parser, client and CLI tests.
"""

import pytest


@pytest.fixture
def lsmount_regular() -> str:
    """fs lsmount reply for a regular (#) mount."""
    return "'/afs/example.org/b' is a mount point for volume '#vol2'\n"


@pytest.fixture
def lsmount_readwrite() -> str:
    """fs lsmount reply for a read-write (%) mount."""
    return "'/afs/.example.org' is a mount point for volume '%root.cell'\n"


@pytest.fixture
def lsmount_foreign() -> str:
    """fs lsmount reply for a mount into another cell."""
    return "'/afs/example.org/ext' is a mount point for volume '#Other.EDU:root.cell.readonly'\n"


@pytest.fixture
def lsmount_not_mount() -> str:
    """fs lsmount reply (stderr) for an ordinary directory."""
    return "fs: '/afs/example.org/a' is not a mount point.\n"


@pytest.fixture
def whichcell_output() -> str:
    """fs whichcell reply."""
    return "File /afs/example.org/a lives in cell 'example.org'\n"


@pytest.fixture
def examine_output() -> str:
    """fs examine reply (OpenAFS 1.8 format)."""
    return """File /afs/example.org (536870915.1.1) contained in volume root.cell.readonly
Volume status for vid = 536870915 named root.cell.readonly
Current disk quota is 5000
Current blocks used are 12
The partition has 1048576 blocks available out of 2097152
"""


@pytest.fixture
def listacl_output() -> str:
    """fs listacl reply."""
    return """Access list for /afs/example.org is
Normal rights:
  system:administrators rlidwka
  system:anyuser rl
"""


@pytest.fixture
def wscell_output() -> str:
    """fs wscell reply."""
    return "This workstation belongs to cell 'Example.ORG'\n"
