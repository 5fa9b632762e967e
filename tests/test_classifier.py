"""Tests for extension/subtype classification."""

import pytest
from pydantic import ValidationError

from checkfile.checking.classifier import (
    classify,
    file_extension,
    mime_subtype,
    normalize_extension,
)
from checkfile.checking.models import VerdictKind


def test_matching_png_is_ok() -> None:
    verdict = classify("photos/cat.png", "image/png")

    assert verdict.kind is VerdictKind.OK
    assert verdict.extension == "png"
    assert verdict.subtype == "png"


def test_jpg_extension_matches_jpeg_subtype() -> None:
    verdict = classify("holiday.jpg", "image/jpeg")

    assert verdict.kind is VerdictKind.OK
    assert verdict.extension == "jpg"
    assert verdict.subtype == "jpeg"


def test_unsupported_subtype_is_reported_with_full_mime() -> None:
    verdict = classify("notes.txt", "text/plain")

    assert verdict.kind is VerdictKind.UNSUPPORTED
    assert verdict.subtype == "plain"
    assert verdict.mime == "text/plain"


@pytest.mark.parametrize("path", ["empty.png", "empty", "archive.zip"])
def test_empty_sentinel_wins_regardless_of_extension(path: str) -> None:
    assert classify(path, "inode/x-empty").kind is VerdictKind.EMPTY


def test_mismatch_reports_both_sides() -> None:
    verdict = classify("fake.png", "image/gif")

    assert verdict.kind is VerdictKind.MISMATCH
    assert verdict.extension == "png"
    assert verdict.subtype == "gif"


def test_missing_extension_mismatches() -> None:
    verdict = classify("README", "application/pdf")

    assert verdict.kind is VerdictKind.MISMATCH
    assert verdict.extension == ""


def test_extension_is_case_insensitive() -> None:
    assert file_extension("SHOUT.PNG") == file_extension("quiet.png") == "png"
    assert classify("SHOUT.PNG", "image/png").kind is VerdictKind.OK


def test_subtype_case_is_not_folded() -> None:
    assert classify("weird.png", "image/PNG").kind is VerdictKind.UNSUPPORTED


def test_extension_ignores_dots_in_directory_names() -> None:
    assert file_extension("./backups.d/photo") == ""
    assert file_extension("archive.tar.gz") == "gz"


def test_helpers_return_empty_strings_without_separator() -> None:
    assert mime_subtype("garbage") == ""
    assert mime_subtype("application/vnd.ms-excel") == "vnd.ms-excel"
    assert normalize_extension("jpg") == "jpeg"
    assert normalize_extension("png") == "png"


def test_verdicts_are_immutable() -> None:
    verdict = classify("cat.png", "image/png")

    with pytest.raises(ValidationError):
        verdict.extension = "gif"  # type: ignore[misc]
