"""Render verdicts, summaries and run errors for the command line.

The prefix-tagged lines are written verbatim with ``click.echo`` so that
paths reach scripts unchanged; rich renders only the JSON document.
"""

from __future__ import annotations

import os
from typing import Any, Optional

import click
from rich.console import Console

from checkfile.checking.errors import CandidateSourceError
from checkfile.checking.models import ErrorKind, RunStatistics, Verdict, VerdictKind

console = Console(highlight=False, soft_wrap=True)

_STYLES: dict[VerdictKind, dict[str, Any]] = {
    VerdictKind.OK: {"fg": "green"},
    VerdictKind.MISMATCH: {"fg": "yellow", "bold": True},
    VerdictKind.UNSUPPORTED: {"fg": "cyan"},
    VerdictKind.EMPTY: {"fg": "cyan"},
    VerdictKind.ERROR: {"fg": "red"},
}


def display_path(path: str) -> str:
    """Return ``path`` with undecodable bytes shown as ``\\xNN`` escapes.

    Names read through ``surrogateescape`` carry lone surrogates that a
    strict UTF-8 stream refuses to encode.
    """
    return os.fsencode(path).decode("utf-8", "backslashreplace")


def format_verdict(verdict: Verdict) -> str:
    """Return the stable, prefix-tagged output line for ``verdict``."""
    path = display_path(verdict.path)
    if verdict.kind is VerdictKind.OK:
        return (
            f"[OK] '{path}': extension '{verdict.extension}' "
            f"matches file type '{verdict.subtype}'"
        )
    if verdict.kind is VerdictKind.MISMATCH:
        return (
            f"[MISMATCH] '{path}': extension is '{verdict.extension}', "
            f"file type is '{verdict.subtype}'"
        )
    if verdict.kind is VerdictKind.UNSUPPORTED:
        return f"[INFO] '{path}': type '{verdict.mime}' is not supported by checkFile"
    if verdict.kind is VerdictKind.EMPTY:
        return f"[INFO] '{path}': is an empty file"
    if verdict.error_kind is ErrorKind.IRREGULAR:
        return f"[ERROR] '{path}': irregular files are not supported by checkFile"
    if verdict.error_kind is ErrorKind.DETECTION:
        return f"[ERROR] '{path}': cannot detect file type -- {verdict.reason}"
    return f"[ERROR] cannot open file '{path}' -- {verdict.reason}"


class Reporter:
    """Print run output, honoring JSON and summary-only modes.

    In JSON mode nothing is printed per file; verdicts are collected and a
    single document is emitted by ``finish``. In summary mode only error and
    summary lines are printed.
    """

    def __init__(
        self,
        *,
        json_output: bool = False,
        summary_only: bool = False,
        out: Console | None = None,
    ) -> None:
        self.json_output = json_output
        self.summary_only = summary_only
        self.out = out or console
        self.verdicts: list[Verdict] = []
        self.run_errors: list[str] = []

    def verdict(self, verdict: Verdict) -> None:
        """Emit the line for a single candidate."""
        if self.json_output:
            self.verdicts.append(verdict)
            return
        if verdict.kind is VerdictKind.ERROR:
            self._emit(format_verdict(verdict), err=True, **_STYLES[verdict.kind])
        elif not self.summary_only:
            self._emit(format_verdict(verdict), **_STYLES[verdict.kind])

    def source_error(self, error: CandidateSourceError) -> None:
        """Report a batch list or directory that could not be opened."""
        message = f"cannot open {error.kind} '{display_path(error.path)}' -- {error.reason}"
        self._emit(f"[ERROR] {message}", err=True, fg="red")

    def enumeration_error(self, path: str, reason: str) -> None:
        """Report a directory stream that failed partway through."""
        message = f"cannot read dir '{display_path(path)}' -- {reason}"
        if self.json_output:
            self.run_errors.append(message)
            return
        self._emit(f"[ERROR] {message}", err=True, fg="red")

    def summary(self, stats: RunStatistics) -> None:
        if not self.json_output:
            self._emit(stats.summary(), bold=True)

    def finish(self, *, mode: str, source: str, stats: Optional[RunStatistics] = None) -> None:
        """Emit the JSON document when JSON mode is active."""
        if not self.json_output:
            return
        files = []
        for verdict in self.verdicts:
            entry = verdict.model_dump(mode="json")
            entry["path"] = display_path(verdict.path)
            files.append(entry)
        payload: dict[str, Any] = {
            "context": {"mode": mode, "source": display_path(source)},
            "files": files,
            "errors": list(self.run_errors),
        }
        if stats is not None:
            payload["counts"] = stats.model_dump(mode="json")
        self.out.print_json(data=payload)

    def _emit(self, line: str, *, err: bool = False, **style: Any) -> None:
        click.echo(click.style(line, **style), err=err)


__all__ = ["Reporter", "console", "display_path", "format_verdict"]
