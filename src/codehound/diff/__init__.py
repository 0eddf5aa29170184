# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diff ingestion and diff-scoped result filtering."""

from __future__ import annotations

from .filter import DiffFilter
from .models import DiffModel, FileDiff
from .parser import DiffParseError, parse_unified_diff

__all__ = [
    "DiffFilter",
    "DiffModel",
    "DiffParseError",
    "FileDiff",
    "parse_unified_diff",
]
