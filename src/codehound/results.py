# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""In-memory store aggregating issues reported by analysis tools."""

from __future__ import annotations

from collections import defaultdict

from .filters import IDENTITY_FILTER, ResultsFilter
from .models import Issue, Snapshot


class IssueStore:
    """Collect issues keyed by file path and line number.

    Buckets are created lazily and keep insertion order. Ordering by file and
    line is only imposed when a snapshot is taken through :meth:`to_dict`, so
    inserts stay cheap while every reader sees a deterministic layout.
    """

    def __init__(self, results_filter: ResultsFilter = IDENTITY_FILTER) -> None:
        """Create an empty store.

        Args:
            results_filter: Filter applied to every snapshot. Defaults to the
                identity filter.
        """

        self._data: defaultdict[str, defaultdict[int, list[Issue]]] = defaultdict(lambda: defaultdict(list))
        self._filter = results_filter

    @property
    def results_filter(self) -> ResultsFilter:
        """Return the filter applied to snapshots.

        Returns:
            ResultsFilter: Currently attached filter.
        """

        return self._filter

    def add_issue(self, file: str, line: int, tool: str, type: str, message: str) -> None:
        """Append an issue to the ``(file, line)`` bucket.

        Issues are never deduplicated; repeated reports for the same location
        are kept in call order.

        Args:
            file: Path of the file the issue was reported for.
            line: One-based line number. Numeric strings are accepted so report
                attributes can be passed through unchanged.
            tool: Name of the reporting tool.
            type: Tool-specific issue type or rule identifier.
            message: Human readable description.
        """

        self._data[file][int(line)].append(Issue(tool=tool, type=type, message=message))

    def has_issues(self) -> bool:
        """Return whether the filtered snapshot contains any issue.

        Returns:
            bool: ``True`` when :meth:`to_dict` would return a non-empty mapping.
        """

        return bool(self.to_dict())

    def to_dict(self) -> Snapshot:
        """Return a sorted, filtered snapshot of the stored issues.

        Files are ordered lexicographically and lines numerically. Line keys
        are rendered as strings so the snapshot serialises directly to JSON.

        Returns:
            Snapshot: Nested ``file -> line -> issues`` mapping.
        """

        snapshot: Snapshot = {}
        for file in sorted(self._data):
            lines = self._data[file]
            snapshot[file] = {str(line): [issue.to_payload() for issue in lines[line]] for line in sorted(lines)}
        return self._filter.filter(snapshot)

    def merge_with(self, other: IssueStore) -> IssueStore:
        """Replay the filtered snapshot of ``other`` into this store.

        Issues from ``other`` are appended after the ones already held for a
        colliding location.

        Args:
            other: Store whose issues should be merged.

        Returns:
            IssueStore: This store, to allow chaining.
        """

        for file, lines in other.to_dict().items():
            for line, payloads in lines.items():
                for payload in payloads:
                    issue = Issue.from_payload(payload)
                    self.add_issue(file, int(line), issue.tool, issue.type, issue.message)
        return self

    def set_results_filter(self, results_filter: ResultsFilter = IDENTITY_FILTER) -> None:
        """Replace the filter applied to snapshots.

        Args:
            results_filter: New filter. Omitting it restores the identity filter.
        """

        self._filter = results_filter

    def count(self) -> int:
        """Return the number of stored issues, ignoring the attached filter."""

        return sum(len(issues) for lines in self._data.values() for issues in lines.values())

    def __repr__(self) -> str:
        return f"IssueStore(files={len(self._data)}, issues={self.count()}, filter={self._filter!r})"


__all__ = ["IssueStore"]
