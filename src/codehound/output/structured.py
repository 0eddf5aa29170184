# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Machine-readable outputs: JSON, CSV, XML and a static HTML page."""

from __future__ import annotations

import csv
import html
import io
import json
import xml.etree.ElementTree as ET  # nosec B405
from typing import Final

from ..logging import info
from ..results import IssueStore
from .base import AbstractOutput, iter_rows

CSV_HEADER: Final[tuple[str, ...]] = ("file", "line", "tool", "type", "message")
XML_ROOT_TAG: Final[str] = "codehound"
XML_DECLARATION: Final[str] = '<?xml version="1.0" encoding="UTF-8"?>'
HTML_REPORT_NAME: Final[str] = "codehound.html"


class JsonOutput(AbstractOutput):
    """Print the snapshot as a single JSON document."""

    def result(self, store: IssueStore) -> None:
        self.console.out(json.dumps(store.to_dict()), highlight=False)


class CsvOutput(AbstractOutput):
    """Print one CSV row per issue."""

    def result(self, store: IssueStore) -> None:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for row in iter_rows(store.to_dict()):
            writer.writerow((row.file, row.line, row.tool, row.type, row.message.strip()))
        self.console.out(buffer.getvalue().rstrip("\n"), highlight=False)


def snapshot_to_xml(store: IssueStore) -> ET.Element:
    """Build the ``<codehound>`` element tree for the snapshot of ``store``."""

    root = ET.Element(XML_ROOT_TAG)
    for file, lines in store.to_dict().items():
        file_element = ET.SubElement(root, "file", name=file)
        for line, issues in lines.items():
            line_element = ET.SubElement(file_element, "line", number=line)
            for issue in issues:
                issue_element = ET.SubElement(line_element, "issue", tool=issue["tool"], type=issue["type"])
                issue_element.text = issue["message"].strip()
    return root


class XmlOutput(AbstractOutput):
    """Print the snapshot as an XML document."""

    def result(self, store: IssueStore) -> None:
        document = ET.tostring(snapshot_to_xml(store), encoding="unicode")
        self.console.out(f"{XML_DECLARATION}\n{document}", highlight=False)


_HTML_TEMPLATE: Final[str] = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>codehound report</title>
<style>
body {{ font-family: sans-serif; margin: 2em; }}
table {{ border-collapse: collapse; width: 100%; }}
th, td {{ border: 1px solid #ccc; padding: 0.3em 0.6em; text-align: left; vertical-align: top; }}
th {{ background: #f0f0f0; }}
</style>
</head>
<body>
<h1>codehound report</h1>
<p>{summary}</p>
<table>
<thead><tr><th>File</th><th>Line</th><th>Tool</th><th>Type</th><th>Message</th></tr></thead>
<tbody>
{rows}
</tbody>
</table>
</body>
</html>
"""


class HtmlOutput(AbstractOutput):
    """Write a static HTML report into the output directory."""

    def render(self, store: IssueStore) -> str:
        """Return the HTML document for the snapshot of ``store``."""

        rows = [
            "<tr>"
            + "".join(
                f"<td>{html.escape(value)}</td>"
                for value in (row.file, row.line, row.tool, row.type, row.message.strip())
            )
            + "</tr>"
            for row in iter_rows(store.to_dict())
        ]
        summary = f"{len(rows)} issue(s) found." if rows else "No issues found."
        return _HTML_TEMPLATE.format(summary=summary, rows="\n".join(rows))

    def result(self, store: IssueStore) -> None:
        self.output_directory.mkdir(parents=True, exist_ok=True)
        report = self.output_directory / HTML_REPORT_NAME
        report.write_text(self.render(store), encoding="utf-8")
        info(
            f"HTML report written to {report}",
            use_emoji=self.use_emoji,
            use_color=self.use_color,
            console=self.console,
        )


__all__ = [
    "CsvOutput",
    "HtmlOutput",
    "JsonOutput",
    "XmlOutput",
    "snapshot_to_xml",
]
