# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run tool integrations and aggregate their issues into one store."""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from .filters import IDENTITY_FILTER, ResultsFilter
from .integrations.base import ToolExecutionError, ToolIntegration
from .output.base import AbstractOutput, AnalysisEvent, ToolStarted, Triggerable
from .results import IssueStore


@dataclass(slots=True)
class AnalysisReport:
    """Outcome of an analysis: merged issues plus any tool failures."""

    store: IssueStore
    failures: list[ToolExecutionError] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    @property
    def success(self) -> bool:
        """Return ``True`` when every tool ran and no issue survived filtering."""

        return not self.failures and not self.store.has_issues()


@dataclass(slots=True)
class _ToolRun:
    """Result of one integration, kept with its declaration order."""

    order: int
    integration: ToolIntegration
    store: IssueStore | None = None
    error: ToolExecutionError | None = None


class Analyser:
    """Coordinate integrations, merge their stores and render the result.

    Each integration fills a private store. Stores are merged into the master
    store on the calling thread in declaration order, whatever order the tools
    finish in, so issues sharing a location are always ordered by tool order.
    """

    def __init__(
        self,
        output: AbstractOutput,
        integrations: Sequence[ToolIntegration],
        targets: Sequence[str],
        *,
        jobs: int = 1,
    ) -> None:
        """Prepare an analysis.

        Args:
            output: Renderer receiving progress events and the final store.
            integrations: Tools to run.
            targets: Files or directories handed to every tool.
            jobs: Number of tools allowed to run concurrently.
        """

        self._output = output
        self._integrations = list(integrations)
        self._targets = list(targets)
        self._jobs = max(1, jobs)
        self._filter: ResultsFilter = IDENTITY_FILTER

    @property
    def targets(self) -> list[str]:
        return list(self._targets)

    def set_results_filter(self, results_filter: ResultsFilter = IDENTITY_FILTER) -> None:
        """Attach ``results_filter`` to the master store of subsequent runs."""

        self._filter = results_filter

    def set_analysed_paths(self, targets: Sequence[str]) -> None:
        """Replace the files or directories handed to every tool."""

        self._targets = list(targets)

    def _trigger(self, event: AnalysisEvent, data: object | None = None) -> None:
        if isinstance(self._output, Triggerable):
            self._output.trigger(event, data)

    def _execute(self, run: _ToolRun) -> _ToolRun:
        try:
            run.store = run.integration.run(self._targets)
        except ToolExecutionError as exc:
            run.error = exc
        return run

    def _report(self, run: _ToolRun) -> None:
        if run.error is not None:
            self._trigger(AnalysisEvent.TOOL_FAILED, run.error)
        else:
            self._trigger(AnalysisEvent.FINISHED_TOOL)

    def _started(self, integration: ToolIntegration) -> None:
        self._trigger(
            AnalysisEvent.STARTING_TOOL,
            ToolStarted(description=integration.description, ignored_paths=integration.ignored_paths),
        )

    def _run_serial(self, runs: list[_ToolRun]) -> None:
        for run in runs:
            self._started(run.integration)
            self._report(self._execute(run))

    def _run_parallel(self, runs: list[_ToolRun]) -> None:
        with ThreadPoolExecutor(max_workers=self._jobs) as executor:
            futures = [executor.submit(self._execute, run) for run in runs]
            for future in as_completed(futures):
                run = future.result()
                self._started(run.integration)
                self._report(run)

    def analyse(self) -> AnalysisReport:
        """Run every integration and merge their stores.

        No tool runs when there are no targets, which happens when a diff
        scope adds no lines.

        Returns:
            AnalysisReport: Master store, with the results filter attached,
            and the failures of tools that could not complete.
        """

        master = IssueStore()
        report = AnalysisReport(store=master)
        if self._targets:
            runs = [_ToolRun(order=index, integration=item) for index, item in enumerate(self._integrations)]
            if self._jobs > 1 and len(runs) > 1:
                self._run_parallel(runs)
            else:
                self._run_serial(runs)
            for run in sorted(runs, key=lambda item: item.order):
                if run.error is not None:
                    report.failures.append(run.error)
                elif run.store is not None:
                    master.merge_with(run.store)
        master.set_results_filter(self._filter)
        return report

    def run(self) -> AnalysisReport:
        """Analyse, emit progress events and render the filtered result.

        Returns:
            AnalysisReport: Outcome of the analysis.
        """

        self._trigger(AnalysisEvent.STARTING_ANALYSIS)
        report = self.analyse()
        self._trigger(AnalysisEvent.FINISHED_ANALYSIS)
        self._output.result(report.store)
        return report


__all__ = ["AnalysisReport", "Analyser"]
