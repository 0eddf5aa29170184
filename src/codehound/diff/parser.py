# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parse unified diff text into a :class:`~codehound.diff.models.DiffModel`."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Final

from .models import DiffModel, FileDiff

_GIT_HEADER_PREFIX: Final[str] = "diff --git "
_GIT_HEADER: Final[re.Pattern[str]] = re.compile(
    r'^diff --git (?P<old>"(?:[^"\\]|\\.)*"|\S+) (?P<new>"(?:[^"\\]|\\.)*"|\S+)$',
)
_QUOTED_ESCAPE: Final[re.Pattern[str]] = re.compile(r"\\([0-7]{1,3}|.)")
_C_ESCAPES: Final[dict[str, bytes]] = {
    "a": b"\a",
    "b": b"\b",
    "t": b"\t",
    "n": b"\n",
    "v": b"\v",
    "f": b"\f",
    "r": b"\r",
    '"': b'"',
    "\\": b"\\",
}
_HUNK_HEADER: Final[re.Pattern[str]] = re.compile(
    r"^@@ -(?P<old_start>\d+)(?:,(?P<old_len>\d+))? \+(?P<new_start>\d+)(?:,(?P<new_len>\d+))? @@",
)
_DEV_NULL_SENTINEL: Final[str] = "/dev/null"
_PATH_PREFIXES: Final[tuple[str, ...]] = ("a/", "b/")
_OLD_FILE_MARKER: Final[str] = "--- "
_NEW_FILE_MARKER: Final[str] = "+++ "
_RENAME_FROM: Final[str] = "rename from "
_RENAME_TO: Final[str] = "rename to "
_NEW_FILE_MODE: Final[str] = "new file mode"
_DELETED_FILE_MODE: Final[str] = "deleted file mode"
_NO_NEWLINE_MARKER: Final[str] = "\\"
_CONTENT_MARKERS: Final[frozenset[str]] = frozenset({"+", "-", " "})


class DiffParseError(ValueError):
    """Raised when diff text cannot be interpreted as a unified diff."""


@dataclass(slots=True)
class _FileSection:
    """Mutable accumulator for one file section while parsing."""

    old_path: str | None = None
    new_path: str | None = None
    added: set[int] = field(default_factory=set)
    removed: set[int] = field(default_factory=set)
    has_hunks: bool = False

    def freeze(self) -> FileDiff:
        return FileDiff(
            old_path=self.old_path,
            new_path=self.new_path,
            added_lines=frozenset(self.added),
            removed_lines=frozenset(self.removed),
        )


@dataclass(slots=True)
class _HunkCursor:
    """Track the current position inside a hunk body."""

    old_line: int = 0
    new_line: int = 0
    old_remaining: int = 0
    new_remaining: int = 0

    @property
    def active(self) -> bool:
        return self.old_remaining > 0 or self.new_remaining > 0


def _unquote(value: str) -> str:
    """Decode a path quoted by git's ``core.quotePath`` setting.

    Git wraps paths holding special or non-ASCII characters in double quotes
    and writes their bytes as C escapes, e.g. ``"caf\\303\\251.php"``.

    Args:
        value: Path text, with or without surrounding quotes.

    Returns:
        str: Unquoted path with octal byte escapes decoded as UTF-8.
    """

    if len(value) < 2 or not (value.startswith('"') and value.endswith('"')):
        return value
    body = value[1:-1]
    decoded = bytearray()
    position = 0
    for match in _QUOTED_ESCAPE.finditer(body):
        decoded += body[position : match.start()].encode("utf-8")
        token = match.group(1)
        if token[0] in "01234567":
            decoded.append(int(token, 8) & 0xFF)
        else:
            decoded += _C_ESCAPES.get(token, token.encode("utf-8"))
        position = match.end()
    decoded += body[position:].encode("utf-8")
    return decoded.decode("utf-8", errors="surrogateescape")


def _clean_path(raw: str) -> str | None:
    """Return the repository-relative path encoded in a diff header value.

    Args:
        raw: Header value following ``---``/``+++`` or inside ``diff --git``.

    Returns:
        str | None: Path without ``a/``/``b/`` prefixes, or ``None`` for ``/dev/null``.
    """

    value = _unquote(raw.split("\t", 1)[0].strip())
    if value == _DEV_NULL_SENTINEL:
        return None
    for prefix in _PATH_PREFIXES:
        if value.startswith(prefix):
            return value[len(prefix) :]
    return value


def _consume_hunk_line(raw: str, section: _FileSection, cursor: _HunkCursor, line_no: int) -> None:
    """Classify one hunk body line and advance ``cursor``.

    Raises:
        DiffParseError: If ``raw`` is not a valid hunk body line.
    """

    marker = raw[:1]
    if marker == "+":
        section.added.add(cursor.new_line)
        cursor.new_line += 1
        cursor.new_remaining -= 1
    elif marker == "-":
        section.removed.add(cursor.old_line)
        cursor.old_line += 1
        cursor.old_remaining -= 1
    elif marker in {" ", ""}:
        cursor.old_line += 1
        cursor.new_line += 1
        cursor.old_remaining -= 1
        cursor.new_remaining -= 1
    elif marker != _NO_NEWLINE_MARKER:
        raise DiffParseError(f"line {line_no}: unexpected content inside hunk: {raw!r}")


def _open_hunk(raw: str, section: _FileSection | None, line_no: int) -> _HunkCursor:
    match = _HUNK_HEADER.match(raw)
    if match is None:
        raise DiffParseError(f"line {line_no}: malformed hunk header: {raw!r}")
    if section is None:
        raise DiffParseError(f"line {line_no}: hunk header before any file header")
    section.has_hunks = True
    old_len = match.group("old_len")
    new_len = match.group("new_len")
    return _HunkCursor(
        old_line=int(match.group("old_start")),
        new_line=int(match.group("new_start")),
        old_remaining=int(old_len) if old_len is not None else 1,
        new_remaining=int(new_len) if new_len is not None else 1,
    )


def parse_unified_diff(text: str) -> DiffModel:
    """Parse ``git diff`` style unified diff text.

    Renamed files are recorded under both paths; lookups on the resulting
    model use the new path only.

    Args:
        text: Raw diff output.

    Returns:
        DiffModel: Added and removed lines for every file in the diff.

    Raises:
        DiffParseError: If the text contains content outside a hunk, a
            malformed hunk header, or a truncated hunk.
    """

    sections: list[_FileSection] = []
    current: _FileSection | None = None
    cursor = _HunkCursor()

    for line_no, raw in enumerate(text.splitlines(), start=1):
        if cursor.active:
            if current is None:  # pragma: no cover - a hunk always belongs to a section
                raise DiffParseError(f"line {line_no}: hunk content without file header")
            _consume_hunk_line(raw, current, cursor, line_no)
            continue

        if raw.startswith(_GIT_HEADER_PREFIX):
            # Paths with unquoted spaces are ambiguous here; the ---/+++ lines fill them in.
            current = _FileSection()
            if header := _GIT_HEADER.match(raw):
                current.old_path = _clean_path(header.group("old"))
                current.new_path = _clean_path(header.group("new"))
            sections.append(current)
            continue
        if raw.startswith(_OLD_FILE_MARKER):
            if current is None or current.has_hunks:
                current = _FileSection()
                sections.append(current)
            current.old_path = _clean_path(raw[len(_OLD_FILE_MARKER) :])
            continue
        if raw.startswith(_NEW_FILE_MARKER):
            if current is None:
                raise DiffParseError(f"line {line_no}: '+++' header without a preceding '---' header")
            current.new_path = _clean_path(raw[len(_NEW_FILE_MARKER) :])
            continue
        if raw.startswith("@@"):
            cursor = _open_hunk(raw, current, line_no)
            continue
        if current is not None:
            if raw.startswith(_RENAME_FROM):
                current.old_path = _unquote(raw[len(_RENAME_FROM) :].strip())
                continue
            if raw.startswith(_RENAME_TO):
                current.new_path = _unquote(raw[len(_RENAME_TO) :].strip())
                continue
            if raw.startswith(_NEW_FILE_MODE):
                current.old_path = None
                continue
            if raw.startswith(_DELETED_FILE_MODE):
                current.new_path = None
                continue
        if raw[:1] in _CONTENT_MARKERS and current is not None:
            raise DiffParseError(f"line {line_no}: content outside of a hunk: {raw!r}")
        # Remaining lines are metadata (index, mode, similarity, binary notices).

    if cursor.active:
        raise DiffParseError("diff ended inside an unterminated hunk")
    return DiffModel(files=tuple(section.freeze() for section in sections))


__all__ = ["DiffParseError", "parse_unified_diff"]
