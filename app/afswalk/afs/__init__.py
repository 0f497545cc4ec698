"""AFS namespace traversal.

This module exports the fs client, directory lister, reporter and the
traversal engine.
"""

from afswalk.afs.client import FsClient
from afswalk.afs.lister import list_child_dirs, read_child_dirs
from afswalk.afs.models import VolumeRef, WalkStats, WorkItem
from afswalk.afs.reporter import Reporter
from afswalk.afs.walker import IntrospectionClient, Walker, seed_order

__all__ = [
    "FsClient",
    "IntrospectionClient",
    "Reporter",
    "VolumeRef",
    "WalkStats",
    "Walker",
    "WorkItem",
    "list_child_dirs",
    "read_child_dirs",
    "seed_order",
]
