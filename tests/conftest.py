# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from subprocess import CompletedProcess

import pytest

from codehound.process import CommandOptions

_REPORT_FLAGS = ("--report-file=", "--log-pmd=")


@dataclass
class FakeRunner:
    """Command runner that records calls and writes a canned XML report."""

    report: str | bytes = ""
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    missing: bool = False
    calls: list[tuple[list[str], CommandOptions | None]] = field(default_factory=list)

    def __call__(self, args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
        self.calls.append((list(args), options))
        if self.missing:
            raise FileNotFoundError(f"Executable '{args[0]}' was not found on PATH")
        for arg in args:
            for flag in _REPORT_FLAGS:
                if not arg.startswith(flag) or not self.report:
                    continue
                target = Path(arg[len(flag) :])
                if isinstance(self.report, bytes):
                    target.write_bytes(self.report)
                else:
                    target.write_text(self.report, encoding="utf-8")
        return CompletedProcess(list(args), self.returncode, self.stdout, self.stderr)


@pytest.fixture
def fake_runner() -> Callable[..., FakeRunner]:
    """Return a factory building :class:`FakeRunner` instances."""

    def factory(**kwargs: object) -> FakeRunner:
        return FakeRunner(**kwargs)  # type: ignore[arg-type]

    return factory


@pytest.fixture
def phpcs_report() -> str:
    return """<?xml version="1.0" encoding="UTF-8"?>
<phpcs version="3.7.2">
<file name="/repo/src/b.php" errors="1" warnings="1" fixable="0">
 <error line="12" column="5" source="PSR2.Methods.FunctionCallSignature" severity="5" fixable="0">Expected 0 spaces</error>
 <warning line="3" column="1" source="Generic.Files.LineLength.TooLong" severity="5" fixable="0">Line exceeds 120 characters</warning>
</file>
<file name="/repo/src/a.php" errors="1" warnings="0" fixable="1">
 <error line="7" column="1" source="PSR2.Classes.ClassDeclaration" severity="5" fixable="1">  Opening brace must be on its own line </error>
</file>
</phpcs>
"""


@pytest.fixture
def phpcpd_report() -> str:
    return """<?xml version="1.0" encoding="UTF-8"?>
<pmd-cpd>
  <duplication lines="12" tokens="60">
    <file path="/repo/src/a.php" line="20"/>
    <file path="/repo/src/b.php" line="40"/>
    <codefragment>function copy() {}</codefragment>
  </duplication>
</pmd-cpd>
"""
