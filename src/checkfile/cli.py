"""Command line interface for checkfile."""

from __future__ import annotations

from typing import Any

import click
import yaml
from rich.syntax import Syntax

from checkfile.checking.detectors import ContentTypeOracle, build_oracle
from checkfile.checking.errors import CandidateSourceError, DetectionError, ProgressSetupError
from checkfile.checking.pipeline import FileChecker
from checkfile.checking.progress import ProgressProbe
from checkfile.config import CheckFileConfig, ConfigError, ConfigManager
from checkfile.logging_config import setup_logging
from checkfile.reporting import Reporter, console


class StartupError(click.ClickException):
    """Unrecoverable failure before any file is checked."""

    exit_code = 2


def _load_config(cli_overrides: dict[str, Any], *, include_env: bool = True) -> CheckFileConfig:
    """Resolve configuration or surface a Click error.

    Raises:
        click.ClickException: If configuration validation fails.
    """
    try:
        return ConfigManager().load(cli_overrides=cli_overrides, include_env=include_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


def _create_oracle(config: CheckFileConfig) -> ContentTypeOracle:
    try:
        return build_oracle(config.detection)
    except DetectionError as exc:
        raise StartupError(f"cannot initialize the '{config.detection.backend}' detector: {exc}") from exc


def _run_scan(ctx: click.Context, mode: str, source: str, json_output: bool, summary_mode: bool) -> None:
    """Run a batch or directory scan with the progress probe installed.

    Args:
        ctx: Click context carrying the resolved configuration.
        mode: ``"batch"`` or ``"dir"``.
        source: Batch list file or directory path.
        json_output: Emit one JSON document instead of lines.
        summary_mode: Print only error and summary lines.
    """
    if json_output and summary_mode:
        raise click.ClickException("--json cannot be combined with --summary.")

    config: CheckFileConfig = ctx.obj["config"]
    reporter = Reporter(json_output=json_output, summary_only=summary_mode)
    checker = FileChecker(
        _create_oracle(config),
        reporter=reporter,
        timestamp_format=config.progress.timestamp_format,
    )

    probe = ProgressProbe(checker.progress)
    try:
        probe.install(config.progress.signal)
    except ProgressSetupError as exc:
        raise StartupError(str(exc)) from exc

    with probe:
        try:
            if mode == "batch":
                stats = checker.run_batch(source)
            else:
                stats = checker.run_directory(source)
        except CandidateSourceError as exc:
            reporter.source_error(exc)
            ctx.exit(1)

    reporter.finish(mode=mode, source=source, stats=stats)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="checkfile")
@click.option(
    "--backend",
    type=click.Choice(["file", "magic"]),
    help="Content detector: the file(1) utility or in-process libmagic.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Diagnostic logging verbosity (written to stderr).",
)
@click.pass_context
def cli(ctx: click.Context, backend: str | None, log_level: str | None) -> None:
    """checkfile verifies that file extensions match the actual file contents.

    Returns:
        None: This function is invoked for its side effects.
    """
    overrides = {"detection.backend": backend, "logging.level": log_level}
    ctx.ensure_object(dict)
    ctx.obj["overrides"] = overrides
    if ctx.invoked_subcommand == "config":
        return
    config = _load_config(overrides)
    ctx.obj["config"] = config
    setup_logging(config.logging.level)


@cli.command("file")
@click.argument("paths", nargs=-1, required=True)
@click.pass_context
def file_command(ctx: click.Context, paths: tuple[str, ...]) -> None:
    """Check one or more files given as PATHS.

    Args:
        ctx: Click context carrying the resolved configuration.
        paths: Files to check; each is reported independently.
    """
    config: CheckFileConfig = ctx.obj["config"]
    checker = FileChecker(_create_oracle(config))
    for path in paths:
        checker.check(path)


@cli.command()
@click.argument("list_file")
@click.option("--json", "json_output", is_flag=True, help="Emit a JSON document with all verdicts.")
@click.option("--summary", "summary_mode", is_flag=True, help="Only emit error and summary lines.")
@click.pass_context
def batch(ctx: click.Context, list_file: str, json_output: bool, summary_mode: bool) -> None:
    """Check every path listed, one per line, in LIST_FILE.

    Send SIGUSR1 to the process to print the current position.
    """
    _run_scan(ctx, "batch", list_file, json_output, summary_mode)


@cli.command("dir")
@click.argument("directory")
@click.option("--json", "json_output", is_flag=True, help="Emit a JSON document with all verdicts.")
@click.option("--summary", "summary_mode", is_flag=True, help="Only emit error and summary lines.")
@click.pass_context
def dir_command(ctx: click.Context, directory: str, json_output: bool, summary_mode: bool) -> None:
    """Check every direct entry of DIRECTORY (not recursive).

    Send SIGUSR1 to the process to print the current position.
    """
    _run_scan(ctx, "dir", directory, json_output, summary_mode)


@cli.group()
def config() -> None:
    """Inspect checkfile configuration.

    Returns:
        None: This function is invoked for its side effects.
    """


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
@click.pass_context
def config_view(ctx: click.Context, no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules.

    Raises:
        click.ClickException: If configuration cannot be resolved.
    """
    overrides = ctx.obj.get("overrides", {}) if ctx.obj else {}
    resolved = _load_config(overrides, include_env=not no_env)
    yaml_text = yaml.safe_dump(resolved.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


def main() -> None:
    """Invoke the Click CLI as the console script entry point.

    Returns:
        None: This function is invoked for its side effects.
    """
    cli()


if __name__ == "__main__":
    main()
