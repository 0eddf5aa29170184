# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Git access used to scope analysis to a revision range."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

from .config import ConfigError
from .process import NOT_FOUND_EXIT_CODE, CommandOptions, CommandRunner, run_command

RANGE_SEPARATOR: Final[str] = ".."
SYMMETRIC_RANGE_SEPARATOR: Final[str] = "..."
DEFAULT_CHANGED_REF: Final[str] = "HEAD"
DIFF_SRC_PREFIX: Final[str] = "a/"
DIFF_DST_PREFIX: Final[str] = "b/"


class GitError(RuntimeError):
    """Raised when a git command fails."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str) -> None:
        detail = stderr.strip() or "<no stderr>"
        super().__init__(f"'{' '.join(command)}' failed with status {returncode}: {detail}")
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr


def parse_revision_range(value: str) -> tuple[str, str]:
    """Split a ``base..changed`` revision range.

    Args:
        value: Range such as ``main..feature``. ``main..`` compares against ``HEAD``.

    Returns:
        tuple[str, str]: Base and changed revisions.

    Raises:
        ConfigError: If the range is empty, symmetric or lacks a base revision.
    """

    if SYMMETRIC_RANGE_SEPARATOR in value:
        raise ConfigError(f"Symmetric revision ranges are not supported: {value!r}")
    base, separator, changed = value.partition(RANGE_SEPARATOR)
    base = base.strip()
    changed = changed.strip()
    if not base:
        raise ConfigError(f"Revision range must name a base revision: {value!r}")
    if not separator or not changed:
        changed = DEFAULT_CHANGED_REF
    return base, changed


class GitRepository:
    """Thin wrapper over the git command line for a working tree."""

    def __init__(self, path: Path, *, runner: CommandRunner | None = None) -> None:
        """Bind the wrapper to ``path``.

        Args:
            path: File or directory inside the working tree. Files are
                replaced by their parent directory.
            runner: Optional command runner, defaulting to :func:`run_command`.
        """

        self._cwd = path if path.is_dir() else path.parent
        self._runner: CommandRunner = runner or run_command

    @property
    def cwd(self) -> Path:
        """Return the directory git commands run in."""

        return self._cwd

    def toplevel(self) -> Path:
        """Return the absolute root directory of the working tree.

        Returns:
            Path: Directory reported by ``git rev-parse --show-toplevel``.

        Raises:
            GitError: If the directory is not inside a git working tree.
        """

        output = self._git("rev-parse", "--show-toplevel")
        return Path(output.strip())

    def diff(self, base: str, changed: str) -> str:
        """Return the unified diff between two revisions.

        The diff prefixes and path quoting are pinned so user settings such
        as ``diff.noprefix`` or ``diff.mnemonicPrefix`` cannot change the
        headers the parser reads.

        Args:
            base: Revision the change is compared against.
            changed: Revision containing the change.

        Returns:
            str: Raw ``git diff`` output.

        Raises:
            GitError: If git rejects either revision.
        """

        return self._git(
            "-c",
            "core.quotePath=false",
            "diff",
            "--no-color",
            "--no-ext-diff",
            f"--src-prefix={DIFF_SRC_PREFIX}",
            f"--dst-prefix={DIFF_DST_PREFIX}",
            base,
            changed,
            "--",
        )

    def _git(self, *args: str) -> str:
        command = ["git", *args]
        options = CommandOptions(cwd=self._cwd, check=False)
        try:
            completed: CompletedProcess[str] = self._runner(command, options=options)
        except FileNotFoundError as exc:
            raise GitError(command, NOT_FOUND_EXIT_CODE, str(exc)) from exc
        if completed.returncode != 0:
            raise GitError(command, completed.returncode, completed.stderr or "")
        return completed.stdout or ""


__all__ = [
    "DEFAULT_CHANGED_REF",
    "GitError",
    "GitRepository",
    "parse_revision_range",
]
