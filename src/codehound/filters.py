# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Result filters applied to issue snapshots before they are consumed."""

from __future__ import annotations

from typing import Final, Protocol, runtime_checkable

from .models import Snapshot


@runtime_checkable
class ResultsFilter(Protocol):
    """Transform a sorted snapshot into a reduced snapshot.

    Implementations must be pure: repeated calls with the same input return
    equal results and the input is never mutated.
    """

    def filter(self, snapshot: Snapshot) -> Snapshot:
        """Return the subset of ``snapshot`` that should be reported.

        Args:
            snapshot: Sorted snapshot produced by an issue store.

        Returns:
            Snapshot: Reduced snapshot preserving the input ordering.
        """
        ...


class IdentityFilter:
    """Filter that reports every issue unchanged."""

    def filter(self, snapshot: Snapshot) -> Snapshot:
        return snapshot

    def __repr__(self) -> str:
        return "IdentityFilter()"


IDENTITY_FILTER: Final[IdentityFilter] = IdentityFilter()

__all__ = ["IDENTITY_FILTER", "IdentityFilter", "ResultsFilter"]
