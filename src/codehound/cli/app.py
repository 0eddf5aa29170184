# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application running every analyser and rendering the merged issues."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Any, Final

import typer

from .. import __version__
from ..analyser import AnalysisReport, Analyser
from ..config import ConfigError, HoundConfig, load_config
from ..diff import DiffParseError
from ..git import GitError
from ..integrations import build_integrations
from ..logging import fail, get_console_manager, warn
from ..output import create_output
from ..scope import build_diff_filter
from .options import (
    BIN_DIR_OPTION,
    COLOR_OPTION,
    CONFIG_OPTION,
    EMOJI_OPTION,
    FORMAT_OPTION,
    GIT_DIFF_OPTION,
    IGNORE_OPTION,
    JOBS_OPTION,
    PATHS_ARGUMENT,
    STANDARD_OPTION,
    TIMEOUT_OPTION,
)

EXIT_OK: Final[int] = 0
EXIT_ISSUES: Final[int] = 1
EXIT_FAILURE: Final[int] = 2
PROGRAM_NAME: Final[str] = "codehound"

app = typer.Typer(
    name=PROGRAM_NAME,
    add_completion=False,
    help="Run PHP static analysers and report their issues in one place.",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PROGRAM_NAME} {__version__}")
        raise typer.Exit(code=EXIT_OK)


def resolve_targets(paths: Sequence[Path], cwd: Path) -> list[str]:
    """Return absolute target paths, anchoring relative ones at ``cwd``."""

    return [str(path if path.is_absolute() else (cwd / path)) for path in paths]


def exit_code_for(report: AnalysisReport) -> int:
    """Map an analysis outcome to the process exit status.

    Args:
        report: Outcome of the analysis.

    Returns:
        int: ``2`` when a tool failed, ``1`` when issues remain, otherwise ``0``.
    """

    if report.has_failures:
        return EXIT_FAILURE
    if report.store.has_issues():
        return EXIT_ISSUES
    return EXIT_OK


def _abort(message: str, *, config: HoundConfig | None = None) -> typer.Exit:
    use_emoji = config.use_emoji if config is not None else True
    use_color = config.use_color if config is not None else None
    fail(message, use_emoji=use_emoji, use_color=use_color)
    return typer.Exit(code=EXIT_FAILURE)


@app.command()
def analyse(
    paths: PATHS_ARGUMENT = None,
    ignore: IGNORE_OPTION = None,
    output_format: FORMAT_OPTION = None,
    git_diff: GIT_DIFF_OPTION = None,
    jobs: JOBS_OPTION = None,
    timeout: TIMEOUT_OPTION = None,
    bin_dir: BIN_DIR_OPTION = None,
    standard: STANDARD_OPTION = None,
    config_file: CONFIG_OPTION = None,
    color: COLOR_OPTION = None,
    emoji: EMOJI_OPTION = None,
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=_version_callback, is_eager=True, help="Print the installed version."),
    ] = False,
) -> None:
    """Analyse PATHS with every configured tool and report the issues found."""

    cwd = Path.cwd()
    overrides: dict[str, Any] = {
        "paths": paths or None,
        "ignore": ignore,
        "output_format": output_format,
        "git_diff": git_diff,
        "jobs": jobs,
        "timeout": timeout,
        "binaries_path": bin_dir,
        "standard": standard,
        "use_color": color,
        "use_emoji": emoji,
    }
    try:
        config = load_config(cwd, config_file=config_file, overrides=overrides)
    except ConfigError as exc:
        raise _abort(f"Configuration error: {exc}") from exc

    console = get_console_manager().get(color=config.use_color, emoji=config.use_emoji)
    try:
        output = create_output(
            config.output_format,
            console=console,
            output_directory=cwd,
            use_color=config.use_color,
            use_emoji=config.use_emoji,
        )
        integrations = build_integrations(config)
    except ConfigError as exc:
        raise _abort(f"Configuration error: {exc}", config=config) from exc

    targets = resolve_targets(config.paths, cwd)
    analyser = Analyser(output, integrations, targets, jobs=config.jobs)

    if config.git_diff:
        try:
            diff_filter = build_diff_filter(config.git_diff, Path(targets[0]))
        except ConfigError as exc:
            raise _abort(f"Configuration error: {exc}", config=config) from exc
        except (GitError, DiffParseError) as exc:
            raise _abort(f"Unable to compute the diff scope: {exc}", config=config) from exc
        scoped_targets = diff_filter.files_with_added_code()
        if not scoped_targets and config.output_format == "text":
            warn(
                f"No added lines in {config.git_diff}; nothing to analyse.",
                use_emoji=config.use_emoji,
                use_color=config.use_color,
                console=console,
            )
        analyser.set_analysed_paths(scoped_targets)
        analyser.set_results_filter(diff_filter)

    report = analyser.run()
    raise typer.Exit(code=exit_code_for(report))


def main() -> None:
    """Console-script entry point."""

    app(prog_name=PROGRAM_NAME)


__all__ = ["EXIT_FAILURE", "EXIT_ISSUES", "EXIT_OK", "app", "exit_code_for", "main", "resolve_targets"]
