# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Value objects describing a parsed version-control diff."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator


class FileDiff(BaseModel):
    """Line classification for a single file section of a diff."""

    model_config = ConfigDict(frozen=True)

    old_path: str | None = None
    new_path: str | None = None
    added_lines: frozenset[int] = Field(default_factory=frozenset)
    removed_lines: frozenset[int] = Field(default_factory=frozenset)

    @property
    def is_deleted(self) -> bool:
        """Return ``True`` when the diff removes the file entirely."""

        return self.new_path is None

    @property
    def is_renamed(self) -> bool:
        """Return ``True`` when the file moved between revisions."""

        return self.old_path is not None and self.new_path is not None and self.old_path != self.new_path


class DiffModel(BaseModel):
    """Expose the lines added by a diff, keyed by repository-relative path.

    Files are keyed by their path in the changed revision. Deleted files have
    no such path and therefore never contribute added lines.
    """

    model_config = ConfigDict(frozen=True)

    files: tuple[FileDiff, ...] = Field(default_factory=tuple)
    _added_index: dict[str, frozenset[int]] = PrivateAttr(default_factory=dict)

    @classmethod
    def from_added_lines(cls, added: Mapping[str, Iterable[int]]) -> DiffModel:
        """Build a model from a plain ``path -> added lines`` mapping.

        Args:
            added: Added line numbers keyed by repository-relative path.

        Returns:
            DiffModel: Model holding one :class:`FileDiff` per entry.
        """

        return cls(
            files=tuple(
                FileDiff(old_path=path, new_path=path, added_lines=frozenset(lines)) for path, lines in added.items()
            ),
        )

    @model_validator(mode="after")
    def _index_added_lines(self) -> DiffModel:
        """Index added lines by new path for constant-time lookups.

        Returns:
            DiffModel: Model instance with the lookup index populated.
        """

        index: dict[str, frozenset[int]] = {}
        for file_diff in self.files:
            if file_diff.new_path is None or not file_diff.added_lines:
                continue
            index[file_diff.new_path] = index.get(file_diff.new_path, frozenset()) | file_diff.added_lines
        self._added_index = index
        return self

    def added_lines(self, path: str) -> frozenset[int]:
        """Return the lines added to ``path``.

        Args:
            path: Repository-relative path in the changed revision.

        Returns:
            frozenset[int]: Added line numbers, empty when the file gained none.
        """

        return self._added_index.get(path, frozenset())

    def files_with_added_lines(self) -> list[str]:
        """Return repository-relative paths having at least one added line.

        Returns:
            list[str]: Paths in the order they appear in the diff.
        """

        return list(self._added_index)


__all__ = ["DiffModel", "FileDiff"]
