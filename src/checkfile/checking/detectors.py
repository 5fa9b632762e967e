"""Content-type oracles that sniff a file's bytes and return a MIME string."""

from __future__ import annotations

import logging
import subprocess

try:  # pragma: no cover - optional dependency wiring
    import magic
except ImportError:  # pragma: no cover - executed when python-magic or libmagic missing
    magic = None

from checkfile.config.models import DetectionSettings

from .errors import DetectionError

LOGGER = logging.getLogger(__name__)


class ContentTypeOracle:
    """Identify a file's MIME type from its contents."""

    name = "abstract"

    def detect(self, path: str) -> str:
        """Return the ``type/subtype`` string for ``path``.

        Args:
            path: Path to an existing, readable regular file.

        Raises:
            DetectionError: If the content type cannot be determined.
        """
        raise NotImplementedError


class FileCommandOracle(ContentTypeOracle):
    """Delegate detection to the ``file(1)`` utility.

    Output is captured through pipes, so nothing outlives a single call even
    when the executable fails to launch.
    """

    name = "file"

    def __init__(self, command: str = "file") -> None:
        self.command = command

    def detect(self, path: str) -> str:
        args = [self.command, "--mime-type", "-b", "--", path]
        LOGGER.debug("Running %s", args)
        try:
            completed = subprocess.run(args, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise DetectionError(f"could not run '{self.command}': {exc.strerror or exc}") from exc

        if completed.returncode != 0:
            detail = completed.stderr.strip() or f"exit status {completed.returncode}"
            raise DetectionError(f"'{self.command}' failed: {detail}")

        lines = completed.stdout.splitlines()
        if not lines or not lines[0].strip():
            raise DetectionError(f"'{self.command}' produced no output")
        return lines[0].strip()


class MagicOracle(ContentTypeOracle):
    """Detect MIME types in-process through libmagic (``python-magic``)."""

    name = "magic"

    def __init__(self) -> None:
        if magic is None:
            raise DetectionError("python-magic is not installed or libmagic is unavailable")
        self._magic = magic.Magic(mime=True)

    def detect(self, path: str) -> str:
        try:
            mime = self._magic.from_file(path)
        except Exception as exc:
            raise DetectionError(f"libmagic failed: {exc}") from exc
        if not mime:
            raise DetectionError("libmagic returned no type")
        return mime.strip()


def build_oracle(settings: DetectionSettings) -> ContentTypeOracle:
    """Instantiate the oracle selected by ``settings.backend``.

    Raises:
        DetectionError: If the selected backend cannot be initialized.
    """
    if settings.backend == "magic":
        return MagicOracle()
    return FileCommandOracle(settings.file_command)


__all__ = [
    "ContentTypeOracle",
    "FileCommandOracle",
    "MagicOracle",
    "build_oracle",
]
