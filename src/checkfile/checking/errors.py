"""Errors raised while checking files."""


class CheckFileError(Exception):
    """Base exception for checkfile operations."""


class DetectionError(CheckFileError):
    """Raised when the content-type oracle cannot classify a file."""


class CandidateSourceError(CheckFileError):
    """Raised when a batch list or directory cannot be opened.

    Attributes:
        kind: Either ``"file"`` or ``"dir"``.
        path: Path that could not be opened.
        reason: Operating-system reason string.
    """

    def __init__(self, kind: str, path: str, reason: str) -> None:
        super().__init__(f"cannot open {kind} '{path}' -- {reason}")
        self.kind = kind
        self.path = path
        self.reason = reason


class ProgressSetupError(CheckFileError):
    """Raised when the progress signal handler cannot be installed."""
