"""High-level checking orchestration for single files, batch lists and directories."""

from __future__ import annotations

import errno
import logging
import os
import stat
from typing import Iterable

from checkfile.reporting import Reporter

from .classifier import classify
from .detectors import ContentTypeOracle
from .discovery import read_batch_list, scan_directory
from .errors import DetectionError
from .models import ErrorKind, RunStatistics, Verdict
from .progress import DEFAULT_TIMESTAMP_FORMAT, PROGRESS, ProgressState

LOGGER = logging.getLogger(__name__)


class FileChecker:
    """Coordinate open checks, detection, classification and reporting."""

    def __init__(
        self,
        oracle: ContentTypeOracle,
        reporter: Reporter | None = None,
        progress: ProgressState | None = None,
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    ) -> None:
        self.oracle = oracle
        self.reporter = reporter or Reporter()
        self.progress = progress if progress is not None else PROGRESS
        self.timestamp_format = timestamp_format

    def check(self, path: str) -> Verdict:
        """Check one candidate and report its verdict.

        Failures are turned into ``ERROR`` verdicts and never propagate.
        """
        verdict = self._evaluate(path)
        self.reporter.verdict(verdict)
        return verdict

    def run_batch(self, list_path: str) -> RunStatistics:
        """Check every non-blank line of ``list_path`` as a candidate path.

        Raises:
            CandidateSourceError: If the list file cannot be opened.
        """
        candidates = read_batch_list(list_path)
        stats = self._run(candidates)
        self.reporter.summary(stats)
        LOGGER.info("Batch %s finished: %s", list_path, stats.summary())
        return stats

    def run_directory(self, dir_path: str) -> RunStatistics:
        """Check every direct entry of ``dir_path``.

        Raises:
            CandidateSourceError: If the directory cannot be opened.
        """
        listing = scan_directory(dir_path)
        stats = self._run(listing.entries)
        if listing.error is not None:
            self.reporter.enumeration_error(dir_path, listing.error)
        self.reporter.summary(stats)
        LOGGER.info("Directory %s finished: %s", dir_path, stats.summary())
        return stats

    def _run(self, candidates: Iterable[str]) -> RunStatistics:
        stats = RunStatistics()
        self.progress.begin(self.timestamp_format)
        try:
            for index, path in enumerate(candidates, start=1):
                self.progress.advance(index, path)
                stats.record(self.check(path))
        finally:
            self.progress.finish()
        return stats

    def _evaluate(self, path: str) -> Verdict:
        if not os.access(path, os.F_OK):
            return Verdict.error(path, ErrorKind.OPEN, os.strerror(errno.ENOENT))
        if not os.access(path, os.R_OK):
            return Verdict.error(path, ErrorKind.OPEN, os.strerror(errno.EACCES))

        try:
            mode = os.stat(path).st_mode
        except OSError as exc:
            return Verdict.error(path, ErrorKind.OPEN, exc.strerror or str(exc))
        if not stat.S_ISREG(mode):
            return Verdict.error(path, ErrorKind.IRREGULAR)

        try:
            mime = self.oracle.detect(path)
        except DetectionError as exc:
            LOGGER.warning("Detection failed for %s: %s", path, exc)
            return Verdict.error(path, ErrorKind.DETECTION, str(exc))

        LOGGER.debug("%s detected as %s", path, mime)
        return classify(path, mime)


__all__ = ["FileChecker"]
