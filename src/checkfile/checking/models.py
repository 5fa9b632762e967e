"""Data models shared by the checking pipeline."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

SUPPORTED_EXTENSIONS = frozenset({"gif", "html", "jpeg", "mp4", "pdf", "png", "zip"})
EMPTY_SUBTYPE = "x-empty"


class VerdictKind(str, Enum):
    """Classification outcome for one candidate."""

    OK = "ok"
    MISMATCH = "mismatch"
    UNSUPPORTED = "unsupported"
    EMPTY = "empty"
    ERROR = "error"


class ErrorKind(str, Enum):
    """Reason category attached to ``VerdictKind.ERROR`` verdicts."""

    OPEN = "open"
    IRREGULAR = "irregular"
    DETECTION = "detection"


class Verdict(BaseModel):
    """Immutable result of checking a single candidate.

    Attributes:
        path: Candidate path exactly as it was enumerated.
        kind: Outcome of the check.
        extension: Lowercased extension taken from the path.
        subtype: MIME subtype reported by the oracle.
        mime: Full MIME string reported by the oracle.
        error_kind: Category for error verdicts.
        reason: Human-readable reason for error verdicts.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    kind: VerdictKind
    extension: str = ""
    subtype: str = ""
    mime: str = ""
    error_kind: Optional[ErrorKind] = None
    reason: str = ""

    @classmethod
    def error(cls, path: str, error_kind: ErrorKind, reason: str = "") -> "Verdict":
        """Build an error verdict for ``path``."""
        return cls(path=path, kind=VerdictKind.ERROR, error_kind=error_kind, reason=reason)


class RunStatistics(BaseModel):
    """Counters accumulated over one batch or directory run.

    Unsupported and empty files are folded into ``error`` so that
    ``analyzed == ok + mismatch + error`` always holds.
    """

    analyzed: int = Field(default=0, ge=0)
    ok: int = Field(default=0, ge=0)
    mismatch: int = Field(default=0, ge=0)
    error: int = Field(default=0, ge=0)

    def record(self, verdict: Verdict) -> None:
        """Account for ``verdict`` in the counters."""
        self.analyzed += 1
        if verdict.kind is VerdictKind.OK:
            self.ok += 1
        elif verdict.kind is VerdictKind.MISMATCH:
            self.mismatch += 1
        else:
            self.error += 1

    def summary(self) -> str:
        """Return the fixed-format summary line."""
        return (
            f"[SUMMARY] files analyzed: {self.analyzed}; files OK: {self.ok}; "
            f"files mismatch: {self.mismatch}; errors: {self.error}"
        )


__all__ = [
    "EMPTY_SUBTYPE",
    "SUPPORTED_EXTENSIONS",
    "ErrorKind",
    "RunStatistics",
    "Verdict",
    "VerdictKind",
]
