# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for result renderers."""

from __future__ import annotations

import csv
import io
import json
import xml.etree.ElementTree as ET  # nosec B405
from pathlib import Path

import pytest
from rich.console import Console

from codehound.config import ConfigError
from codehound.integrations import ToolExecutionError
from codehound.output import (
    OUTPUT_FORMATS,
    AnalysisEvent,
    HtmlOutput,
    TextOutput,
    ToolStarted,
    Triggerable,
    create_output,
)
from codehound.results import IssueStore


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=200, color_system=None, emoji=False, soft_wrap=True), buffer


def _store() -> IssueStore:
    store = IssueStore()
    store.add_issue("/repo/b.php", 12, "PHPCodeSniffer", "PSR2.Sniff", "  Expected 0 spaces ")
    store.add_issue("/repo/a.php", 3, "PHPCopyPasteDetector", "duplication", "Duplicated code")
    store.add_issue("/repo/a.php", 3, "PHPCodeSniffer", "Generic.Sniff", 'Uses "quotes", commas & <tags>')
    return store


def _render(name: str, store: IssueStore, tmp_path: Path) -> str:
    console, buffer = _console()
    output = create_output(name, console=console, output_directory=tmp_path, use_color=False, use_emoji=False)
    output.result(store)
    return buffer.getvalue()


def test_json_output_matches_snapshot(tmp_path: Path) -> None:
    store = _store()

    assert json.loads(_render("json", store, tmp_path)) == store.to_dict()


def test_json_output_of_empty_store(tmp_path: Path) -> None:
    assert json.loads(_render("json", IssueStore(), tmp_path)) == {}


def test_csv_output_has_one_row_per_issue(tmp_path: Path) -> None:
    rows = list(csv.reader(io.StringIO(_render("csv", _store(), tmp_path))))

    assert rows == [
        ["file", "line", "tool", "type", "message"],
        ["/repo/a.php", "3", "PHPCopyPasteDetector", "duplication", "Duplicated code"],
        ["/repo/a.php", "3", "PHPCodeSniffer", "Generic.Sniff", 'Uses "quotes", commas & <tags>'],
        ["/repo/b.php", "12", "PHPCodeSniffer", "PSR2.Sniff", "Expected 0 spaces"],
    ]


def test_xml_output_groups_issues_by_file_and_line(tmp_path: Path) -> None:
    root = ET.fromstring(_render("xml", _store(), tmp_path).strip())  # nosec B314

    assert root.tag == "codehound"
    assert [file.get("name") for file in root.findall("file")] == ["/repo/a.php", "/repo/b.php"]
    issues = root.findall("./file[@name='/repo/a.php']/line[@number='3']/issue")
    assert [(issue.get("tool"), issue.text) for issue in issues] == [
        ("PHPCopyPasteDetector", "Duplicated code"),
        ("PHPCodeSniffer", 'Uses "quotes", commas & <tags>'),
    ]


def test_html_output_writes_escaped_report(tmp_path: Path) -> None:
    console_text = _render("html", _store(), tmp_path)

    report = (tmp_path / "codehound.html").read_text(encoding="utf-8")
    assert "3 issue(s) found." in report
    assert "&lt;tags&gt;" in report
    assert "<tags>" not in report
    assert "codehound.html" in console_text


def test_html_render_of_empty_store(tmp_path: Path) -> None:
    console, _ = _console()

    assert "No issues found." in HtmlOutput(console, tmp_path).render(IssueStore())


def test_text_output_lists_issues_per_file(tmp_path: Path) -> None:
    text = _render("text", _store(), tmp_path)

    assert text.index("/repo/a.php") < text.index("/repo/b.php")
    assert "3: [PHPCopyPasteDetector] Duplicated code" in text
    assert "12: [PHPCodeSniffer] Expected 0 spaces" in text


def test_text_output_without_issues(tmp_path: Path) -> None:
    assert "No issues found." in _render("text", IssueStore(), tmp_path)


def test_text_output_reports_progress(tmp_path: Path) -> None:
    console, buffer = _console()
    output = TextOutput(console, tmp_path, use_color=False, use_emoji=False)

    output.trigger(AnalysisEvent.STARTING_ANALYSIS)
    output.trigger(AnalysisEvent.STARTING_TOOL, ToolStarted("PHPCodeSniffer", ("vendor", "[tests]")))
    output.trigger(AnalysisEvent.FINISHED_TOOL)
    output.trigger(
        AnalysisEvent.TOOL_FAILED,
        ToolExecutionError("phpcpd", 255, "Fatal error\nstack trace line\n"),
    )
    output.trigger(AnalysisEvent.FINISHED_ANALYSIS)

    text = buffer.getvalue()
    assert "Starting analysis" in text
    assert "Running PHPCodeSniffer... Ignored paths:" in text
    assert "vendor" in text
    assert "[tests]" in text
    assert "Done!" in text
    assert "phpcpd exited with status 255" in text
    assert "stack trace line" in text
    assert "Analysis complete!" in text


def test_only_text_output_is_triggerable(tmp_path: Path) -> None:
    console, _ = _console()
    triggerable = {
        name
        for name in OUTPUT_FORMATS
        if isinstance(create_output(name, console=console, output_directory=tmp_path), Triggerable)
    }

    assert triggerable == {"text"}


def test_unknown_format_is_rejected(tmp_path: Path) -> None:
    console, _ = _console()

    with pytest.raises(ConfigError, match='Invalid format: "yaml"'):
        create_output("yaml", console=console, output_directory=tmp_path)
