"""afswalk - inventory mount points and ACLs of an AFS cell."""

__version__ = "0.1.0"
