# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the phpcs and phpcpd integrations."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from codehound.config import ConfigError, HoundConfig
from codehound.integrations import (
    PHPCodeSniffer,
    PHPCopyPasteDetector,
    ToolExecutionError,
    build_integrations,
)
from codehound.process import TIMEOUT_EXIT_CODE

if TYPE_CHECKING:
    from conftest import FakeRunner


def test_phpcs_report_is_parsed_into_store(fake_runner: Callable[..., FakeRunner], phpcs_report: str) -> None:
    runner = fake_runner(report=phpcs_report, returncode=2)
    integration = PHPCodeSniffer(runner=runner)

    store = integration.run(["/repo/src"])

    assert store is integration.result
    assert store.to_dict() == {
        "/repo/src/a.php": {
            "7": [
                {
                    "tool": "PHPCodeSniffer",
                    "type": "PSR2.Classes.ClassDeclaration",
                    "message": "Opening brace must be on its own line",
                },
            ],
        },
        "/repo/src/b.php": {
            "3": [
                {
                    "tool": "PHPCodeSniffer",
                    "type": "Generic.Files.LineLength.TooLong",
                    "message": "Line exceeds 120 characters",
                },
            ],
            "12": [
                {
                    "tool": "PHPCodeSniffer",
                    "type": "PSR2.Methods.FunctionCallSignature",
                    "message": "Expected 0 spaces",
                },
            ],
        },
    }


def test_phpcpd_reports_every_copy_of_a_duplication(
    fake_runner: Callable[..., FakeRunner],
    phpcpd_report: str,
) -> None:
    runner = fake_runner(report=phpcpd_report, returncode=1)

    store = PHPCopyPasteDetector(runner=runner).run(["/repo/src"])

    duplicate = {"tool": "PHPCopyPasteDetector", "type": "duplication", "message": "Duplicated code"}
    assert store.to_dict() == {
        "/repo/src/a.php": {"20": [duplicate]},
        "/repo/src/b.php": {"40": [duplicate]},
    }


def test_phpcs_command_line(fake_runner: Callable[..., FakeRunner]) -> None:
    runner = fake_runner()
    integration = PHPCodeSniffer(
        binaries_path=Path("/opt/php/bin"),
        ignored_paths=["vendor", "tests"],
        timeout=30,
        runner=runner,
        standard="PSR12",
    )

    integration.run(["src", "lib"])

    (args, options) = runner.calls[0]
    assert args[:5] == ["/opt/php/bin/phpcs", "-q", "--standard=PSR12", "--report=xml", "--ignore=vendor,tests"]
    assert args[5].startswith("--report-file=")
    assert args[5].endswith("phpcs.xml")
    assert args[6:] == ["src", "lib"]
    assert options is not None
    assert options.timeout == 30
    assert options.check is False


def test_phpcpd_command_line_excludes_each_ignored_path(fake_runner: Callable[..., FakeRunner]) -> None:
    runner = fake_runner()

    PHPCopyPasteDetector(ignored_paths=["vendor", "spec"], runner=runner).run(["src"])

    (args, _) = runner.calls[0]
    assert args[:5] == ["phpcpd", "--exclude", "vendor", "--exclude", "spec"]
    assert args[5].startswith("--log-pmd=")
    assert args[6:] == ["src"]


def test_phpcs_without_ignored_paths_omits_ignore_flag(fake_runner: Callable[..., FakeRunner]) -> None:
    runner = fake_runner()

    PHPCodeSniffer(runner=runner).run(["src"])

    assert not any(arg.startswith("--ignore") for arg in runner.calls[0][0])


def test_missing_report_means_no_issues(fake_runner: Callable[..., FakeRunner]) -> None:
    store = PHPCodeSniffer(runner=fake_runner()).run(["src"])

    assert store.has_issues() is False


def test_unaccepted_exit_code_raises(fake_runner: Callable[..., FakeRunner]) -> None:
    runner = fake_runner(returncode=3, stderr="ERROR: the standard does not exist\n")

    with pytest.raises(ToolExecutionError, match="phpcs exited with status 3") as excinfo:
        PHPCodeSniffer(runner=runner).run(["src"])

    assert excinfo.value.stderr_tail() == ["ERROR: the standard does not exist"]


def test_phpcpd_rejects_exit_code_two(fake_runner: Callable[..., FakeRunner]) -> None:
    with pytest.raises(ToolExecutionError):
        PHPCopyPasteDetector(runner=fake_runner(returncode=2)).run(["src"])


def test_timeout_is_reported_as_failure(fake_runner: Callable[..., FakeRunner]) -> None:
    runner = fake_runner(returncode=TIMEOUT_EXIT_CODE, stderr="Command timed out after 1.0s")

    with pytest.raises(ToolExecutionError) as excinfo:
        PHPCodeSniffer(timeout=1, runner=runner).run(["src"])

    assert excinfo.value.returncode == TIMEOUT_EXIT_CODE


def test_missing_executable_raises(fake_runner: Callable[..., FakeRunner]) -> None:
    with pytest.raises(ToolExecutionError, match="was not found") as excinfo:
        PHPCodeSniffer(runner=fake_runner(missing=True)).run(["src"])

    assert excinfo.value.returncode == 127


def test_unparsable_report_raises(fake_runner: Callable[..., FakeRunner]) -> None:
    runner = fake_runner(report="<phpcs><file name='x'>")

    with pytest.raises(ToolExecutionError, match="unparsable report"):
        PHPCodeSniffer(runner=runner).run(["src"])


def test_build_integrations_follows_configured_order(fake_runner: Callable[..., FakeRunner]) -> None:
    config = HoundConfig(tools=["phpcpd", "phpcs"], ignore=["vendor"], timeout=5)

    integrations = build_integrations(config, runner=fake_runner())

    assert [integration.name for integration in integrations] == ["phpcpd", "phpcs"]
    assert all(integration.ignored_paths == ("vendor",) for integration in integrations)


def test_build_integrations_rejects_unknown_tool() -> None:
    with pytest.raises(ConfigError, match="phpmd"):
        build_integrations(HoundConfig(tools=["phpcs", "phpmd"]))


def test_report_encoding_declaration_is_honoured(fake_runner: Callable[..., FakeRunner]) -> None:
    report = (
        '<?xml version="1.0" encoding="ISO-8859-1"?>\n'
        '<phpcs><file name="/repo/caf\xe9.php">'
        '<error line="2" source="Generic.Sniff">Unexpected \xe9</error>'
        "</file></phpcs>\n"
    ).encode("latin-1")

    store = PHPCodeSniffer(runner=fake_runner(report=report, returncode=1)).run(["/repo"])

    assert store.to_dict() == {
        "/repo/café.php": {"2": [{"tool": "PHPCodeSniffer", "type": "Generic.Sniff", "message": "Unexpected é"}]},
    }


@pytest.mark.parametrize(
    "line_attribute",
    ['line=""', 'line="abc"', 'line="0"', ""],
    ids=["empty", "text", "zero", "absent"],
)
def test_invalid_phpcs_line_numbers_raise(fake_runner: Callable[..., FakeRunner], line_attribute: str) -> None:
    report = f'<phpcs><file name="/repo/a.php"><error {line_attribute} source="S">m</error></file></phpcs>'

    with pytest.raises(ToolExecutionError, match="invalid line number"):
        PHPCodeSniffer(runner=fake_runner(report=report, returncode=1)).run(["/repo"])


def test_invalid_phpcpd_line_number_raises(fake_runner: Callable[..., FakeRunner]) -> None:
    report = '<pmd-cpd><duplication><file path="/repo/a.php" line="x"/></duplication></pmd-cpd>'

    with pytest.raises(ToolExecutionError, match="invalid line number"):
        PHPCopyPasteDetector(runner=fake_runner(report=report, returncode=1)).run(["/repo"])
