# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Output format registry."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Final

from rich.console import Console

from ..config import ConfigError
from .base import AbstractOutput, AnalysisEvent, ToolStarted, Triggerable
from .structured import CsvOutput, HtmlOutput, JsonOutput, XmlOutput
from .text import TextOutput

OUTPUT_FORMATS: Final[Mapping[str, type[AbstractOutput]]] = {
    "text": TextOutput,
    "json": JsonOutput,
    "csv": CsvOutput,
    "xml": XmlOutput,
    "html": HtmlOutput,
}


def create_output(
    name: str,
    *,
    console: Console,
    output_directory: Path,
    use_color: bool = True,
    use_emoji: bool = True,
) -> AbstractOutput:
    """Instantiate the renderer registered under ``name``.

    Args:
        name: Output format name.
        console: Console receiving rendered output.
        output_directory: Directory for file-based outputs.
        use_color: Whether coloured output is requested.
        use_emoji: Whether emoji prefixes are requested.

    Returns:
        AbstractOutput: Renderer instance.

    Raises:
        ConfigError: If ``name`` is not a registered format.
    """

    output_cls = OUTPUT_FORMATS.get(name)
    if output_cls is None:
        known = ", ".join(OUTPUT_FORMATS)
        raise ConfigError(f'Invalid format: "{name}" (expected one of: {known})')
    return output_cls(console, output_directory, use_color=use_color, use_emoji=use_emoji)


__all__ = [
    "OUTPUT_FORMATS",
    "AbstractOutput",
    "AnalysisEvent",
    "CsvOutput",
    "HtmlOutput",
    "JsonOutput",
    "TextOutput",
    "ToolStarted",
    "Triggerable",
    "XmlOutput",
    "create_output",
]
