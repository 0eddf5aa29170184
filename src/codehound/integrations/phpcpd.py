# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Integration with PHP Copy/Paste Detector (https://github.com/sebastianbergmann/phpcpd)."""

from __future__ import annotations

import xml.etree.ElementTree as ET  # nosec B405
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from .base import ToolIntegration

DUPLICATION_TYPE: Final[str] = "duplication"
DUPLICATION_MESSAGE: Final[str] = "Duplicated code"


class PHPCopyPasteDetector(ToolIntegration):
    """Report duplicated code blocks found by ``phpcpd``.

    Every file taking part in a duplication receives an issue at the line
    where its copy starts.
    """

    name = "phpcpd"
    description = "PHPCopyPasteDetector"
    executable = "phpcpd"
    accepted_exit_codes = frozenset({0, 1})

    def ignored_arguments(self) -> list[str]:
        arguments: list[str] = []
        for path in self.ignored_paths:
            arguments.extend(["--exclude", path])
        return arguments

    def build_command(self, targets: Sequence[str], report_path: Path) -> list[str]:
        return [
            self.executable_path(),
            *self.ignored_arguments(),
            f"--log-pmd={report_path}",
            *targets,
        ]

    def parse_report(self, root: ET.Element) -> None:
        for duplication in root.iter("duplication"):
            for file_tag in duplication.findall("file"):
                path = file_tag.get("path")
                if not path:
                    continue
                self.result.add_issue(
                    path,
                    self.line_number(file_tag.get("line")),
                    self.description,
                    DUPLICATION_TYPE,
                    DUPLICATION_MESSAGE,
                )


__all__ = ["PHPCopyPasteDetector"]
