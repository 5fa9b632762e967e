"""Candidate enumeration for batch lists and directories."""

from __future__ import annotations

import errno
import logging
import os
from dataclasses import dataclass, field
from typing import IO, Iterator, Optional

from .errors import CandidateSourceError

LOGGER = logging.getLogger(__name__)


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)


def read_batch_list(list_path: str) -> Iterator[str]:
    """Open ``list_path`` and return an iterator over its non-blank lines.

    The file is opened eagerly so an unreadable list is reported before any
    candidate is processed; it is closed once the iterator is exhausted or
    discarded.

    Raises:
        CandidateSourceError: If the list file cannot be opened.
    """
    try:
        handle = open(list_path, "r", encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        raise CandidateSourceError("file", list_path, _reason(exc)) from exc
    return _iter_lines(handle)


def _iter_lines(handle: IO[str]) -> Iterator[str]:
    with handle:
        for line in handle:
            candidate = line.rstrip("\r\n")
            if not candidate.strip():
                continue
            yield candidate


@dataclass(slots=True)
class DirectoryListing:
    """Direct entries of a directory.

    Attributes:
        root: Directory path, guaranteed to end with a separator.
        entries: Full candidate paths, sorted by entry name.
        error: Reason the directory stream failed partway, if it did.
    """

    root: str
    entries: list[str] = field(default_factory=list)
    error: Optional[str] = None


def normalize_directory(path: str) -> str:
    """Return ``path`` with a trailing path separator."""
    return path if path.endswith(os.sep) else path + os.sep


def scan_directory(dir_path: str) -> DirectoryListing:
    """List the direct entries of ``dir_path`` without recursing.

    Entries that are themselves directories are included; the checker
    rejects them as irregular files.

    Raises:
        CandidateSourceError: If the directory cannot be opened or
            ``dir_path`` is empty.
    """
    if not dir_path:
        raise CandidateSourceError("dir", dir_path, os.strerror(errno.ENOENT))
    root = normalize_directory(dir_path)
    try:
        iterator = os.scandir(root)
    except OSError as exc:
        raise CandidateSourceError("dir", dir_path, _reason(exc)) from exc

    names: list[str] = []
    error: Optional[str] = None
    with iterator:
        try:
            for entry in iterator:
                names.append(entry.name)
        except OSError as exc:
            error = _reason(exc)
            LOGGER.debug("Directory stream for %s failed after %d entries: %s", root, len(names), error)

    return DirectoryListing(root=root, entries=[root + name for name in sorted(names)], error=error)


__all__ = ["DirectoryListing", "normalize_directory", "read_batch_list", "scan_directory"]
