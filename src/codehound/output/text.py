# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Human readable console output."""

from __future__ import annotations

from rich.rule import Rule
from rich.text import Text

from ..integrations.base import ToolExecutionError
from ..logging import fail, ok, section
from ..results import IssueStore
from .base import AbstractOutput, AnalysisEvent, ToolStarted


class TextOutput(AbstractOutput):
    """Print issues grouped by file and report progress as tools run."""

    def result(self, store: IssueStore) -> None:
        snapshot = store.to_dict()
        if not snapshot:
            ok("No issues found.", use_emoji=self.use_emoji, use_color=self.use_color, console=self.console)
            return
        for file, lines in snapshot.items():
            self.console.print(Rule(Text(file, style="bold yellow"), style="yellow", characters="="))
            for line, issues in lines.items():
                for issue in issues:
                    text = Text.assemble(
                        (f"{line}: ", "cyan"),
                        (f"[{issue['tool']}] ", "dim"),
                        issue["message"].strip(),
                    )
                    self.console.print(text)
            self.console.print()

    def trigger(self, event: AnalysisEvent, data: object | None = None) -> None:
        """Report analysis progress on the console.

        Args:
            event: Progress event emitted by the analyser.
            data: :class:`ToolStarted` for tool starts, the raised
                :class:`ToolExecutionError` for failures, otherwise unused.
        """

        flags = {"use_emoji": self.use_emoji, "use_color": self.use_color, "console": self.console}
        match event:
            case AnalysisEvent.STARTING_ANALYSIS:
                section("Starting analysis", use_color=self.use_color, console=self.console)
            case AnalysisEvent.STARTING_TOOL if isinstance(data, ToolStarted):
                self.console.print(Text(f"Running {data.description}... ", style="bold"), end="")
                if data.ignored_paths:
                    self.console.print("Ignored paths:", end="")
                    for path in data.ignored_paths:
                        self.console.print(Text(f"     {path}"), end="")
                    self.console.print(" ", end="")
            case AnalysisEvent.FINISHED_TOOL:
                self.console.print("Done!")
            case AnalysisEvent.TOOL_FAILED if isinstance(data, ToolExecutionError):
                self.console.print()
                fail(str(data), **flags)
                for line in data.stderr_tail():
                    self.console.print(Text(f"    {line}", style="dim"))
            case AnalysisEvent.FINISHED_ANALYSIS:
                ok("Analysis complete!", **flags)
            case _:
                pass


__all__ = ["TextOutput"]
