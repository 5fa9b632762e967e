"""Tests for the checkfile command line interface."""

import json
import os
import sys
from pathlib import Path
from typing import Optional

import pytest
from click.testing import CliRunner

from checkfile.checking.detectors import ContentTypeOracle
from checkfile.checking.errors import DetectionError
from checkfile.cli import cli


class StaticOracle(ContentTypeOracle):
    def __init__(self, types: dict[str, Optional[str]]) -> None:
        self.types = types

    def detect(self, path: str) -> str:
        mime = self.types.get(os.path.basename(path), "application/octet-stream")
        if mime is None:
            raise DetectionError("boom")
        return mime


@pytest.fixture
def oracle_types(monkeypatch: pytest.MonkeyPatch) -> dict[str, Optional[str]]:
    types: dict[str, Optional[str]] = {}
    monkeypatch.setattr("checkfile.cli.build_oracle", lambda settings: StaticOracle(types))
    return types


def test_cli_help_displays_commands() -> None:
    result = CliRunner().invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "verifies that file extensions match" in result.output
    for command in ("file", "batch", "dir", "config"):
        assert command in result.output


def test_file_command_checks_each_path(tmp_path: Path, oracle_types: dict) -> None:
    png = tmp_path / "a.png"
    fake = tmp_path / "b.pdf"
    png.write_bytes(b"x")
    fake.write_bytes(b"x")
    oracle_types.update({"a.png": "image/png", "b.pdf": "application/zip"})

    result = CliRunner().invoke(cli, ["file", str(png), str(fake)])

    assert result.exit_code == 0
    assert f"[OK] '{png}': extension 'png' matches file type 'png'" in result.output
    assert f"[MISMATCH] '{fake}': extension is 'pdf', file type is 'zip'" in result.output
    assert "[SUMMARY]" not in result.output


def test_batch_command_prints_summary(tmp_path: Path, oracle_types: dict) -> None:
    (tmp_path / "one.gif").write_bytes(b"x")
    (tmp_path / "two.html").write_bytes(b"x")
    listing = tmp_path / "list.txt"
    listing.write_text(f"{tmp_path / 'one.gif'}\n\n{tmp_path / 'two.html'}\n", encoding="utf-8")
    oracle_types.update({"one.gif": "image/gif", "two.html": None})

    result = CliRunner().invoke(cli, ["batch", str(listing)])

    assert result.exit_code == 0
    assert "cannot detect file type -- boom" in result.output
    assert (
        "[SUMMARY] files analyzed: 2; files OK: 1; files mismatch: 0; errors: 1" in result.output
    )


def test_batch_with_missing_list_exits_non_zero(tmp_path: Path, oracle_types: dict) -> None:
    missing = tmp_path / "missing.txt"

    result = CliRunner().invoke(cli, ["batch", str(missing)])

    assert result.exit_code == 1
    assert f"[ERROR] cannot open file '{missing}' -- No such file or directory" in result.output


def test_dir_command_on_missing_directory(tmp_path: Path, oracle_types: dict) -> None:
    missing = tmp_path / "nowhere"

    result = CliRunner().invoke(cli, ["dir", str(missing)])

    assert result.exit_code == 1
    assert f"[ERROR] cannot open dir '{missing}' -- No such file or directory" in result.output


def test_dir_command_json_output(tmp_path: Path, oracle_types: dict) -> None:
    (tmp_path / "movie.mp4").write_bytes(b"x")
    (tmp_path / "blank.png").write_bytes(b"")
    oracle_types.update({"movie.mp4": "video/mp4", "blank.png": "inode/x-empty"})

    result = CliRunner().invoke(cli, ["dir", str(tmp_path), "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["context"] == {"mode": "dir", "source": str(tmp_path)}
    assert payload["counts"] == {"analyzed": 2, "ok": 1, "mismatch": 0, "error": 1}
    kinds = {Path(item["path"]).name: item["kind"] for item in payload["files"]}
    assert kinds == {"blank.png": "empty", "movie.mp4": "ok"}


def test_file_command_keeps_tabs_in_paths(tmp_path: Path, oracle_types: dict) -> None:
    target = tmp_path / "a\tb.png"
    target.write_bytes(b"x")
    oracle_types["a\tb.png"] = "image/png"

    result = CliRunner().invoke(cli, ["file", str(target)])

    assert result.exit_code == 0
    assert f"[OK] '{target}': extension 'png' matches file type 'png'" in result.output


@pytest.mark.skipif(
    sys.platform != "linux" or sys.getfilesystemencoding() != "utf-8",
    reason="needs a filesystem that accepts non-UTF-8 names",
)
def test_dir_command_escapes_undecodable_names(tmp_path: Path, oracle_types: dict) -> None:
    with open(os.path.join(os.fsencode(tmp_path), b"caf\xe9.png"), "wb") as handle:
        handle.write(b"x")
    (tmp_path / "ok.png").write_bytes(b"x")
    oracle_types.update({os.fsdecode(b"caf\xe9.png"): "image/png", "ok.png": "image/png"})

    result = CliRunner().invoke(cli, ["dir", str(tmp_path)])

    assert result.exit_code == 0
    assert f"[OK] '{tmp_path}{os.sep}caf\\xe9.png': extension 'png'" in result.output
    assert "[SUMMARY] files analyzed: 2; files OK: 2" in result.output


def test_json_and_summary_are_exclusive(tmp_path: Path, oracle_types: dict) -> None:
    result = CliRunner().invoke(cli, ["dir", str(tmp_path), "--json", "--summary"])

    assert result.exit_code != 0
    assert "--json cannot be combined with --summary" in result.output


def test_unavailable_detector_is_a_startup_failure(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _broken(settings: object) -> ContentTypeOracle:
        raise DetectionError("libmagic missing")

    monkeypatch.setattr("checkfile.cli.build_oracle", _broken)

    result = CliRunner().invoke(cli, ["--backend", "magic", "dir", str(tmp_path)])

    assert result.exit_code == 2
    assert "libmagic missing" in result.output


def test_invalid_environment_config_is_reported(tmp_path: Path) -> None:
    result = CliRunner().invoke(
        cli, ["dir", str(tmp_path)], env={"CHECKFILE__DETECTION__BACKEND": "guess"}
    )

    assert result.exit_code == 1
    assert "Invalid configuration values" in result.output


def test_config_view_shows_effective_settings() -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli, ["--backend", "magic", "config", "view"], env={"CHECKFILE__LOGGING__LEVEL": "INFO"}
    )

    assert result.exit_code == 0
    assert "backend: magic" in result.output
    assert "level: INFO" in result.output

    no_env = runner.invoke(cli, ["config", "view", "--no-env"], env={"CHECKFILE__LOGGING__LEVEL": "INFO"})
    assert "level: WARNING" in no_env.output
