"""Process-wide progress state and the signal-driven probe that reads it.

The driver writes ``index`` and ``path`` as two separate assignments and the
probe reads them without a lock, so a snapshot taken between the two writes
may pair the new index with the previous path.
"""

from __future__ import annotations

import logging
import os
import signal
from datetime import datetime
from enum import Enum
from types import FrameType
from typing import Any, Optional

from .errors import ProgressSetupError

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMESTAMP_FORMAT = "%Y.%m.%d_%Hh%M:%S"
IDLE_MESSAGE = "no run in progress"


class ProgressStatus(str, Enum):
    """Lifecycle of a ``ProgressState``."""

    IDLE = "idle"
    ACTIVE = "active"
    FINISHED = "finished"


class ProgressState:
    """Current scan position: ``idle`` -> ``active`` -> ``finished``."""

    def __init__(self) -> None:
        self.status = ProgressStatus.IDLE
        self.started_label = ""
        self.index = 0
        self.path = ""

    @property
    def active(self) -> bool:
        return self.status is ProgressStatus.ACTIVE

    def begin(self, timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT) -> None:
        """Mark a run as started and pre-format its start time."""
        self.started_label = datetime.now().strftime(timestamp_format)
        self.index = 0
        self.path = ""
        self.status = ProgressStatus.ACTIVE

    def advance(self, index: int, path: str) -> None:
        """Record the 1-based ``index`` and ``path`` of the candidate being started."""
        self.index = index
        self.path = path

    def finish(self) -> None:
        self.status = ProgressStatus.FINISHED


PROGRESS = ProgressState()


def resolve_signal(name: str) -> signal.Signals:
    """Return the signal called ``name`` on this platform.

    Raises:
        ProgressSetupError: If the platform has no such signal.
    """
    signum = getattr(signal, name.upper(), None)
    if not isinstance(signum, signal.Signals):
        raise ProgressSetupError(f"signal {name} is not available on this platform")
    return signum


class ProgressProbe:
    """Answer progress queries about a ``ProgressState``, typically from a signal."""

    def __init__(self, state: ProgressState | None = None) -> None:
        self.state = state if state is not None else PROGRESS
        self._fd = 2
        self._signum: Optional[signal.Signals] = None
        self._previous: Any = None

    def snapshot(self) -> str:
        """Return ``<start> -- nº <index> / <path>`` for the active run."""
        state = self.state
        if not state.active:
            return IDLE_MESSAGE
        return f"{state.started_label} -- nº {state.index} / {state.path}"

    def install(self, signal_name: str = "SIGUSR1", fd: int = 2) -> "ProgressProbe":
        """Write a snapshot to ``fd`` whenever ``signal_name`` is delivered.

        Raises:
            ProgressSetupError: If the handler cannot be registered.
        """
        signum = resolve_signal(signal_name)
        try:
            self._previous = signal.signal(signum, self._handle)
        except (OSError, ValueError) as exc:
            raise ProgressSetupError(f"cannot install {signal_name} handler: {exc}") from exc
        self._signum = signum
        self._fd = fd
        LOGGER.debug("Progress probe listening on %s", signum.name)
        return self

    def uninstall(self) -> None:
        """Restore the handler that was active before ``install``."""
        if self._signum is None:
            return
        signal.signal(self._signum, self._previous if self._previous is not None else signal.SIG_DFL)
        self._signum = None
        self._previous = None

    def __enter__(self) -> "ProgressProbe":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.uninstall()

    def _handle(self, signum: int, frame: Optional[FrameType]) -> None:
        payload = (self.snapshot() + "\n").encode("utf-8", errors="replace")
        try:
            os.write(self._fd, payload)
        except OSError as exc:
            LOGGER.debug("Progress probe write failed: %s", exc)


__all__ = [
    "IDLE_MESSAGE",
    "PROGRESS",
    "ProgressProbe",
    "ProgressState",
    "ProgressStatus",
    "resolve_signal",
]
