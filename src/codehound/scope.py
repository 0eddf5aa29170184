# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build the diff scope restricting analysis to changed lines."""

from __future__ import annotations

from pathlib import Path

from .diff import DiffFilter, parse_unified_diff
from .git import GitRepository, parse_revision_range
from .process import CommandRunner


def build_diff_filter(revision_range: str, path: Path, *, runner: CommandRunner | None = None) -> DiffFilter:
    """Return a filter keeping only lines added within ``revision_range``.

    Args:
        revision_range: Range such as ``main..feature``.
        path: File or directory inside the repository being analysed.
        runner: Optional command runner used for git invocations.

    Returns:
        DiffFilter: Filter rooted at the repository top level.

    Raises:
        ConfigError: If ``revision_range`` is malformed.
        GitError: If git cannot resolve the repository or the revisions.
        DiffParseError: If the diff output cannot be parsed.
    """

    base, changed = parse_revision_range(revision_range)
    repository = GitRepository(path, runner=runner)
    root = repository.toplevel()
    diff = parse_unified_diff(repository.diff(base, changed))
    return DiffFilter(root, diff)


__all__ = ["build_diff_filter"]
