"""Exception hierarchy for afswalk.

Probe errors are recoverable: the traversal logs them and prunes the
affected branch. Setup errors abort the run with a non-zero exit.
"""


class AfsWalkError(Exception):
    """Base exception for all afswalk errors."""


class FatalSetupError(AfsWalkError):
    """Raised when the run cannot start (home cell or root unresolved)."""


class ProbeError(AfsWalkError):
    """Raised when an introspection call against a path fails.

    Attributes:
        path: The path that was being probed.
    """

    def __init__(self, path: str, message: str) -> None:
        super().__init__(message)
        self.path = path


class ProbeParseError(ProbeError):
    """Raised when the fs command answers with unexpected text."""


class SymlinkProbeError(ProbeError):
    """Raised when a probed path turns out to be a symbolic link."""


class NotApplicableError(ProbeError):
    """Raised when a path is not under AFS control at all."""


class ListDirError(AfsWalkError):
    """Raised when a directory's children cannot be enumerated."""
