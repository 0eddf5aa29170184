# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Restrict issue snapshots to the lines added by a diff."""

from __future__ import annotations

import os
from pathlib import Path

from ..models import Snapshot
from .models import DiffModel


class DiffFilter:
    """Keep only issues reported on lines a change introduced.

    Diff paths are relative to the repository root while issue stores are
    keyed by the paths tools report. Both sides are normalised the same way:
    relative paths are joined onto the repository root and the result passes
    through :func:`os.path.normpath`.
    """

    def __init__(self, root: Path | str, diff: DiffModel) -> None:
        """Create a filter bound to ``diff``.

        Args:
            root: Absolute path of the repository the diff was taken from.
            diff: Parsed diff exposing added lines per file.
        """

        self._root = Path(root)
        self._diff = diff
        self._added: dict[str, frozenset[int]] = {
            self._normalize(path): diff.added_lines(path) for path in diff.files_with_added_lines()
        }

    @property
    def root(self) -> Path:
        """Return the repository root used for path normalisation."""

        return self._root

    @property
    def diff(self) -> DiffModel:
        """Return the diff backing this filter."""

        return self._diff

    def _normalize(self, path: str) -> str:
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self._root / candidate
        return os.path.normpath(candidate)

    def files_with_added_code(self) -> list[str]:
        """Return absolute paths of files gaining at least one line.

        Returns:
            list[str]: Normalised paths in diff order.
        """

        return list(self._added)

    def filter(self, snapshot: Snapshot) -> Snapshot:
        """Drop every issue that is not located on an added line.

        Files absent from the diff, or present without added lines, are
        removed entirely, as are files left without surviving lines. The
        ordering of ``snapshot`` is preserved.

        Args:
            snapshot: Sorted snapshot produced by an issue store.

        Returns:
            Snapshot: Reduced snapshot; ``snapshot`` itself is not modified.
        """

        filtered: Snapshot = {}
        for file, lines in snapshot.items():
            added = self._added.get(self._normalize(file))
            if not added:
                continue
            kept = {line: issues for line, issues in lines.items() if int(line) in added}
            if kept:
                filtered[file] = kept
        return filtered

    def __repr__(self) -> str:
        return f"DiffFilter(root={str(self._root)!r}, files={len(self._added)})"


__all__ = ["DiffFilter"]
