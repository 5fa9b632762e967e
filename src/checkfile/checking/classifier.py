"""Compare a file's extension with the subtype reported by the oracle."""

from __future__ import annotations

import os

from .models import EMPTY_SUBTYPE, SUPPORTED_EXTENSIONS, Verdict, VerdictKind

_EXTENSION_ALIASES = {"jpg": "jpeg"}


def _after_last(value: str, separator: str) -> str:
    _, found, tail = value.rpartition(separator)
    return tail if found else ""


def file_extension(path: str) -> str:
    """Return the lowercased text after the final ``.`` in the file name of ``path``.

    Args:
        path: Candidate path as enumerated.

    Returns:
        str: Extension without the dot, or an empty string when the name has none.
    """
    return _after_last(os.path.basename(path), ".").lower()


def mime_subtype(mime: str) -> str:
    """Return the subtype portion of a ``type/subtype`` string."""
    return _after_last(mime, "/")


def normalize_extension(extension: str) -> str:
    """Map short-form extensions (``jpg``) to the subtype they denote."""
    return _EXTENSION_ALIASES.get(extension, extension)


def classify(path: str, mime: str) -> Verdict:
    """Decide whether ``path``'s extension agrees with the detected ``mime``.

    Args:
        path: Candidate path as enumerated.
        mime: MIME string returned by the content-type oracle.

    Returns:
        Verdict: ``EMPTY``, ``UNSUPPORTED``, ``OK`` or ``MISMATCH``.
    """
    subtype = mime_subtype(mime)
    if subtype == EMPTY_SUBTYPE:
        return Verdict(path=path, kind=VerdictKind.EMPTY, mime=mime, subtype=subtype)

    if subtype not in SUPPORTED_EXTENSIONS:
        return Verdict(path=path, kind=VerdictKind.UNSUPPORTED, mime=mime, subtype=subtype)

    extension = file_extension(path)
    kind = VerdictKind.OK if subtype == normalize_extension(extension) else VerdictKind.MISMATCH
    return Verdict(path=path, kind=kind, extension=extension, subtype=subtype, mime=mime)


__all__ = ["classify", "file_extension", "mime_subtype", "normalize_extension"]
