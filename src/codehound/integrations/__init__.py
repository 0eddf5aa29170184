# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Registry of supported analysis tool integrations."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Final

from ..config import ConfigError, HoundConfig
from ..process import CommandRunner
from .base import ToolExecutionError, ToolIntegration
from .phpcpd import PHPCopyPasteDetector
from .phpcs import PHPCodeSniffer

IntegrationFactory = Callable[[HoundConfig, CommandRunner | None], ToolIntegration]


def _phpcs(config: HoundConfig, runner: CommandRunner | None) -> ToolIntegration:
    return PHPCodeSniffer(
        binaries_path=config.binaries_path,
        ignored_paths=config.ignore,
        timeout=config.timeout,
        runner=runner,
        standard=config.standard,
    )


def _phpcpd(config: HoundConfig, runner: CommandRunner | None) -> ToolIntegration:
    return PHPCopyPasteDetector(
        binaries_path=config.binaries_path,
        ignored_paths=config.ignore,
        timeout=config.timeout,
        runner=runner,
    )


INTEGRATIONS: Final[Mapping[str, IntegrationFactory]] = {
    PHPCodeSniffer.name: _phpcs,
    PHPCopyPasteDetector.name: _phpcpd,
}


def build_integrations(config: HoundConfig, *, runner: CommandRunner | None = None) -> list[ToolIntegration]:
    """Instantiate the integrations named by ``config.tools`` in order.

    Args:
        config: Resolved run configuration.
        runner: Optional command runner shared by every integration.

    Returns:
        list[ToolIntegration]: Fresh integrations, each with an empty store.

    Raises:
        ConfigError: If an unknown tool name is configured.
    """

    unknown = [name for name in config.tools if name not in INTEGRATIONS]
    if unknown:
        known = ", ".join(sorted(INTEGRATIONS))
        raise ConfigError(f"Unknown tool(s): {', '.join(unknown)} (available: {known})")
    return [INTEGRATIONS[name](config, runner) for name in config.tools]


__all__ = [
    "INTEGRATIONS",
    "PHPCodeSniffer",
    "PHPCopyPasteDetector",
    "ToolExecutionError",
    "ToolIntegration",
    "build_integrations",
]
