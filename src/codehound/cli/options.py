# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Typer parameter declarations for the codehound command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

PATHS_ARGUMENT = Annotated[
    list[Path] | None,
    typer.Argument(help="Files or directories to analyse.", show_default=False),
]
IGNORE_OPTION = Annotated[
    str | None,
    typer.Option(
        "--ignore",
        "-i",
        help="Comma-separated list of directories to ignore [default: vendor,tests,features,spec].",
        show_default=False,
    ),
]
FORMAT_OPTION = Annotated[
    str | None,
    typer.Option(
        "--format",
        "-f",
        help="Output format: text, json, csv, xml or html [default: text].",
        show_default=False,
    ),
]
GIT_DIFF_OPTION = Annotated[
    str | None,
    typer.Option(
        "--git-diff",
        "-g",
        help='Limit to files and lines changed between two commits or branches, e.g. "main..feature".',
        show_default=False,
    ),
]
JOBS_OPTION = Annotated[
    int | None,
    typer.Option("--jobs", "-j", min=1, help="Number of tools to run concurrently [default: 1].", show_default=False),
]
TIMEOUT_OPTION = Annotated[
    float | None,
    typer.Option("--timeout", min=0.001, help="Seconds before a tool is considered hung.", show_default=False),
]
BIN_DIR_OPTION = Annotated[
    Path | None,
    typer.Option("--bin-dir", help="Directory holding the analyser executables.", show_default=False),
]
STANDARD_OPTION = Annotated[
    str | None,
    typer.Option("--standard", help="PHP_CodeSniffer coding standard [default: PSR2].", show_default=False),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", help="Configuration file replacing .codehound.toml.", show_default=False),
]
COLOR_OPTION = Annotated[
    bool | None,
    typer.Option("--color/--no-color", help="Toggle ANSI colour output.", show_default=False),
]
EMOJI_OPTION = Annotated[
    bool | None,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output.", show_default=False),
]

__all__ = [
    "BIN_DIR_OPTION",
    "COLOR_OPTION",
    "CONFIG_OPTION",
    "EMOJI_OPTION",
    "FORMAT_OPTION",
    "GIT_DIFF_OPTION",
    "IGNORE_OPTION",
    "JOBS_OPTION",
    "PATHS_ARGUMENT",
    "STANDARD_OPTION",
    "TIMEOUT_OPTION",
]
