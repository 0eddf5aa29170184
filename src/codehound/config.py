# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model and loaders for codehound runs."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PROJECT_CONFIG_FILENAME: Final[str] = ".codehound.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "codehound"
DEFAULT_IGNORED: Final[tuple[str, ...]] = ("vendor", "tests", "features", "spec")
DEFAULT_TOOLS: Final[tuple[str, ...]] = ("phpcs", "phpcpd")
DEFAULT_FORMAT: Final[str] = "text"
DEFAULT_STANDARD: Final[str] = "PSR2"


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class HoundConfig(BaseModel):
    """Settings controlling which tools run, on what, and how results render."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    paths: list[Path] = Field(default_factory=lambda: [Path(".")])
    ignore: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORED))
    output_format: str = DEFAULT_FORMAT
    git_diff: str | None = None
    jobs: int = Field(default=1, ge=1)
    timeout: float | None = Field(default=None, gt=0)
    binaries_path: Path | None = None
    tools: list[str] = Field(default_factory=lambda: list(DEFAULT_TOOLS))
    standard: str = DEFAULT_STANDARD
    use_color: bool = True
    use_emoji: bool = True

    @field_validator("ignore", "tools", mode="before")
    @classmethod
    def _split_csv(cls, value: Any) -> Any:
        """Accept comma-separated strings for list settings.

        Args:
            value: Raw value from TOML or the command line.

        Returns:
            Any: List of non-empty entries when ``value`` is a string, otherwise ``value``.
        """

        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("output_format")
    @classmethod
    def _lower_format(cls, value: str) -> str:
        return value.strip().lower()


def _normalise_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    return {str(key).replace("-", "_"): value for key, value in data.items()}


def _read_toml(path: Path) -> dict[str, Any]:
    """Return the TOML document at ``path`` or an empty mapping when absent.

    Raises:
        ConfigError: If the file exists but is not valid TOML.
    """

    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def _pyproject_section(path: Path) -> dict[str, Any]:
    tool_section = _read_toml(path).get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if not isinstance(section, Mapping):
        return {}
    return _normalise_keys(section)


def load_config(
    project_root: Path,
    *,
    config_file: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> HoundConfig:
    """Resolve configuration from project files and command-line overrides.

    Precedence, lowest first: built-in defaults, ``[tool.codehound]`` in
    ``pyproject.toml``, ``.codehound.toml`` (or ``config_file``), ``overrides``.
    Override entries set to ``None`` are ignored.

    Args:
        project_root: Directory searched for configuration files.
        config_file: Explicit configuration file replacing ``.codehound.toml``.
        overrides: Values supplied on the command line.

    Returns:
        HoundConfig: Validated configuration.

    Raises:
        ConfigError: If a file cannot be parsed or a value fails validation.
    """

    if config_file is not None and not config_file.is_file():
        raise ConfigError(f"Configuration file not found: {config_file}")
    merged: dict[str, Any] = {}
    merged.update(_pyproject_section(project_root / PYPROJECT_FILENAME))
    merged.update(_normalise_keys(_read_toml(config_file or project_root / PROJECT_CONFIG_FILENAME)))
    merged.update({key: value for key, value in (overrides or {}).items() if value is not None})
    try:
        return HoundConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


__all__ = [
    "DEFAULT_FORMAT",
    "DEFAULT_IGNORED",
    "DEFAULT_STANDARD",
    "DEFAULT_TOOLS",
    "ConfigError",
    "HoundConfig",
    "load_config",
]
