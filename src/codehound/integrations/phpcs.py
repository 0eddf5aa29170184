# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Integration with PHP_CodeSniffer (https://github.com/squizlabs/PHP_CodeSniffer)."""

from __future__ import annotations

import xml.etree.ElementTree as ET  # nosec B405
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from ..config import DEFAULT_STANDARD
from ..process import CommandRunner
from .base import ToolIntegration

_FILE_TAG: Final[str] = "file"
_ISSUE_TAGS: Final[frozenset[str]] = frozenset({"error", "warning"})


class PHPCodeSniffer(ToolIntegration):
    """Report coding-standard violations found by ``phpcs``."""

    name = "phpcs"
    description = "PHPCodeSniffer"
    executable = "phpcs"
    # 1 and 2 signal violations (2: some are auto-fixable); 3 is a processing error.
    accepted_exit_codes = frozenset({0, 1, 2})

    def __init__(
        self,
        *,
        binaries_path: Path | None = None,
        ignored_paths: Sequence[str] = (),
        timeout: float | None = None,
        runner: CommandRunner | None = None,
        standard: str = DEFAULT_STANDARD,
    ) -> None:
        super().__init__(binaries_path=binaries_path, ignored_paths=ignored_paths, timeout=timeout, runner=runner)
        self._standard = standard

    def ignored_arguments(self) -> list[str]:
        if not self.ignored_paths:
            return []
        return [f"--ignore={','.join(self.ignored_paths)}"]

    def build_command(self, targets: Sequence[str], report_path: Path) -> list[str]:
        return [
            self.executable_path(),
            "-q",
            f"--standard={self._standard}",
            "--report=xml",
            *self.ignored_arguments(),
            f"--report-file={report_path}",
            *targets,
        ]

    def parse_report(self, root: ET.Element) -> None:
        for file_tag in root.iter(_FILE_TAG):
            file_name = file_tag.get("name")
            if not file_name:
                continue
            for issue_tag in file_tag:
                if issue_tag.tag not in _ISSUE_TAGS:
                    continue
                self.result.add_issue(
                    file_name,
                    self.line_number(issue_tag.get("line")),
                    self.description,
                    issue_tag.get("source", issue_tag.tag),
                    (issue_tag.text or "").strip(),
                )


__all__ = ["PHPCodeSniffer"]
