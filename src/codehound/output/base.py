# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared interfaces for rendering analysis results."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable

from rich.console import Console

from ..models import IssuePayload, Snapshot
from ..results import IssueStore


class AnalysisEvent(str, Enum):
    """Progress events emitted while an analysis runs."""

    STARTING_ANALYSIS = "starting_analysis"
    STARTING_TOOL = "starting_tool"
    FINISHED_TOOL = "finished_tool"
    TOOL_FAILED = "tool_failed"
    FINISHED_ANALYSIS = "finished_analysis"


@dataclass(slots=True, frozen=True)
class ToolStarted:
    """Payload accompanying :attr:`AnalysisEvent.STARTING_TOOL`."""

    description: str
    ignored_paths: tuple[str, ...] = ()


@runtime_checkable
class Triggerable(Protocol):
    """Outputs that react to analysis progress events."""

    def trigger(self, event: AnalysisEvent, data: object | None = None) -> None:
        """Handle ``event`` with its optional payload."""
        ...


@dataclass(slots=True, frozen=True)
class IssueRow:
    """Flattened view of one issue for tabular renderers."""

    file: str
    line: str
    tool: str
    type: str
    message: str


def iter_rows(snapshot: Snapshot) -> Iterator[IssueRow]:
    """Yield one :class:`IssueRow` per issue, in snapshot order."""

    for file, lines in snapshot.items():
        for line, issues in lines.items():
            for issue in issues:
                yield _row(file, line, issue)


def _row(file: str, line: str, issue: IssuePayload) -> IssueRow:
    return IssueRow(file=file, line=line, tool=issue["tool"], type=issue["type"], message=issue["message"])


class AbstractOutput(ABC):
    """Render the final issue snapshot of an analysis."""

    def __init__(
        self,
        console: Console,
        output_directory: Path,
        *,
        use_color: bool = True,
        use_emoji: bool = True,
    ) -> None:
        """Bind the output to a console and a directory for file artifacts.

        Args:
            console: Console receiving rendered text.
            output_directory: Directory where file-based outputs are written.
            use_color: Whether coloured output is requested.
            use_emoji: Whether emoji prefixes are requested.
        """

        self.console = console
        self.output_directory = output_directory
        self.use_color = use_color
        self.use_emoji = use_emoji

    @abstractmethod
    def result(self, store: IssueStore) -> None:
        """Render the filtered snapshot of ``store``."""


__all__ = [
    "AbstractOutput",
    "AnalysisEvent",
    "IssueRow",
    "ToolStarted",
    "Triggerable",
    "iter_rows",
]
