# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the codehound package."""

from __future__ import annotations

from typing import Final, TypeAlias

from pydantic import BaseModel, ConfigDict

TOOL_KEY: Final[str] = "tool"
TYPE_KEY: Final[str] = "type"
MESSAGE_KEY: Final[str] = "message"

IssuePayload: TypeAlias = dict[str, str]
LineIssues: TypeAlias = dict[str, list[IssuePayload]]
Snapshot: TypeAlias = dict[str, LineIssues]


class Issue(BaseModel):
    """Describe a single problem reported by an analysis tool.

    The file and line an issue belongs to are not part of the record; they
    are the keys under which an :class:`~codehound.results.IssueStore` files it.
    """

    model_config = ConfigDict(frozen=True)

    tool: str
    type: str
    message: str

    def to_payload(self) -> IssuePayload:
        """Return the issue as the plain mapping used inside snapshots.

        Returns:
            IssuePayload: Mapping with ``tool``, ``type`` and ``message`` keys.
        """

        return {TOOL_KEY: self.tool, TYPE_KEY: self.type, MESSAGE_KEY: self.message}

    @classmethod
    def from_payload(cls, payload: IssuePayload) -> Issue:
        """Build an issue from a snapshot mapping.

        Args:
            payload: Mapping produced by :meth:`to_payload`.

        Returns:
            Issue: Immutable issue record.
        """

        return cls(tool=payload[TOOL_KEY], type=payload[TYPE_KEY], message=payload[MESSAGE_KEY])


__all__ = [
    "MESSAGE_KEY",
    "TOOL_KEY",
    "TYPE_KEY",
    "Issue",
    "IssuePayload",
    "LineIssues",
    "Snapshot",
]
