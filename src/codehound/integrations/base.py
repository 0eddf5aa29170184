# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Base class for integrations with third-party analysis tools."""

from __future__ import annotations

import tempfile

# Reports are produced by locally installed analysis tools.
import xml.etree.ElementTree as ET  # nosec B405
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import ClassVar, Final

from ..process import NOT_FOUND_EXIT_CODE, CommandOptions, CommandRunner, run_command
from ..results import IssueStore

REPORT_PREFIX: Final[str] = "codehound-"
_STDERR_TAIL_LINES: Final[int] = 20


class ToolExecutionError(RuntimeError):
    """Raised when an analysis tool fails instead of reporting issues.

    Covers exit statuses outside the tool's accepted set (timeouts and
    missing executables included) and reports that cannot be parsed.
    """

    def __init__(self, tool: str, returncode: int, stderr: str, *, reason: str | None = None) -> None:
        """Record the failure details.

        Args:
            tool: Name of the failing integration.
            returncode: Exit status of the tool process.
            stderr: Captured standard error, possibly empty.
            reason: Optional explanation overriding the default message.
        """

        self.tool = tool
        self.returncode = returncode
        self.stderr = stderr
        summary = reason or f"exited with status {returncode}"
        super().__init__(f"{tool} {summary}")

    def stderr_tail(self) -> list[str]:
        """Return the last lines of stderr for display."""

        return self.stderr.strip().splitlines()[-_STDERR_TAIL_LINES:]


class ToolIntegration(ABC):
    """Run one external analyser and collect its issues into a private store."""

    name: ClassVar[str]
    description: ClassVar[str]
    executable: ClassVar[str]
    accepted_exit_codes: ClassVar[frozenset[int]] = frozenset({0})

    def __init__(
        self,
        *,
        binaries_path: Path | None = None,
        ignored_paths: Sequence[str] = (),
        timeout: float | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        """Configure the integration.

        Args:
            binaries_path: Directory holding the tool executable. The ``PATH``
                is searched when omitted.
            ignored_paths: Files or directories the tool should skip.
            timeout: Seconds to wait before the tool is considered hung.
            runner: Optional command runner, defaulting to :func:`run_command`.
        """

        self._binaries_path = binaries_path
        self._ignored_paths = tuple(ignored_paths)
        self._timeout = timeout
        self._runner: CommandRunner = runner or run_command
        self._result = IssueStore()

    @property
    def result(self) -> IssueStore:
        """Return the store holding issues parsed from this tool."""

        return self._result

    @property
    def ignored_paths(self) -> tuple[str, ...]:
        return self._ignored_paths

    def executable_path(self) -> str:
        """Return the executable to invoke, honouring ``binaries_path``."""

        if self._binaries_path is None:
            return self.executable
        return str(self._binaries_path / self.executable)

    @abstractmethod
    def ignored_arguments(self) -> list[str]:
        """Return command arguments excluding :attr:`ignored_paths`."""

    @abstractmethod
    def build_command(self, targets: Sequence[str], report_path: Path) -> list[str]:
        """Return the command analysing ``targets`` and writing ``report_path``.

        Args:
            targets: Files or directories to analyse.
            report_path: File the tool must write its XML report to.

        Returns:
            list[str]: Command argument list.
        """

    @abstractmethod
    def parse_report(self, root: ET.Element) -> None:
        """Add the issues described by the report ``root`` to :attr:`result`."""

    def run(self, targets: Sequence[str]) -> IssueStore:
        """Execute the tool against ``targets`` and parse its report.

        Args:
            targets: Files or directories to analyse.

        Returns:
            IssueStore: Store holding the parsed issues.

        Raises:
            ToolExecutionError: If the tool cannot be started, exits with an
                unexpected status, times out, or writes an unparsable report.
        """

        with tempfile.TemporaryDirectory(prefix=REPORT_PREFIX) as tmp:
            report_path = Path(tmp) / f"{self.name}.xml"
            command = self.build_command(targets, report_path)
            options = CommandOptions(check=False).with_timeout(self._timeout)
            try:
                completed = self._runner(command, options=options)
            except FileNotFoundError as exc:
                raise ToolExecutionError(self.name, NOT_FOUND_EXIT_CODE, str(exc), reason=str(exc)) from exc
            if completed.returncode not in self.accepted_exit_codes:
                raise ToolExecutionError(self.name, completed.returncode, completed.stderr or "")
            content = report_path.read_bytes() if report_path.exists() else b""
        self.process_report(content)
        return self._result

    def process_report(self, content: bytes) -> None:
        """Parse XML ``content`` into :attr:`result`; blank content means no issues.

        The raw bytes go to the XML parser so the encoding named in the
        report's declaration is honoured.

        Raises:
            ToolExecutionError: If ``content`` is not well-formed XML or names
                an invalid line.
        """

        if not content.strip():
            return
        try:
            root = ET.fromstring(content)  # nosec B314
        except ET.ParseError as exc:
            raise ToolExecutionError(self.name, 0, "", reason=f"wrote an unparsable report: {exc}") from exc
        self.parse_report(root)

    def line_number(self, value: str | None) -> int:
        """Return the positive line number held by a report attribute.

        Args:
            value: Raw ``line`` attribute, ``None`` when absent.

        Returns:
            int: One-based line number.

        Raises:
            ToolExecutionError: If the attribute is missing, not an integer or
                not positive.
        """

        try:
            line = int(value or "")
        except ValueError:
            line = 0
        if line < 1:
            raise ToolExecutionError(self.name, 0, "", reason=f"reported an invalid line number: {value!r}")
        return line


__all__ = ["ToolExecutionError", "ToolIntegration"]
