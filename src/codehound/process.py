# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Commands are built from argument lists; ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final, Protocol

TIMEOUT_EXIT_CODE: Final[int] = 124
NOT_FOUND_EXIT_CODE: Final[int] = 127


@dataclass(slots=True, frozen=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    check: bool = True
    capture_output: bool = True
    timeout: float | None = None
    discard_stdin: bool = True

    def with_timeout(self, timeout: float | None) -> CommandOptions:
        """Return a copy of the options using ``timeout``.

        Args:
            timeout: Timeout in seconds, or ``None`` to wait indefinitely.

        Returns:
            CommandOptions: Updated options instance.

        Raises:
            ValueError: When ``timeout`` is not positive.
        """

        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive")
        return replace(self, timeout=timeout)


class CommandRunner(Protocol):
    """Callable executing a command and returning its completed process."""

    def __call__(self, args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]: ...


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        """Initialise the error with captured subprocess metadata.

        Args:
            command: Normalised command sequence that was executed.
            returncode: Exit status reported by the subprocess.
            stdout: Captured standard output stream.
            stderr: Captured standard error stream.
        """
        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def _ensure_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode(errors="ignore")


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Resolve the executable of ``args`` to an absolute path.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Validated argument list suitable for subprocess execution.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        if not head_path.exists():
            raise FileNotFoundError(f"Executable '{head}' does not exist")
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Execute ``args`` after normalising the executable path.

    A timeout does not raise; it is reported as a completed process with exit
    status :data:`TIMEOUT_EXIT_CODE` and an explanatory stderr line.

    Args:
        args: Command and argument sequence to execute.
        options: Options configuring execution semantics.

    Returns:
        CompletedProcess: Subprocess execution metadata with text streams.

    Raises:
        FileNotFoundError: If the executable cannot be resolved.
        SubprocessExecutionError: When ``check`` is true and the process exits
            with a non-zero status.
    """

    resolved = options or CommandOptions()
    normalized = _normalize_args(args)

    try:
        completed: CompletedProcess[str] = subprocess.run(  # nosec B603 - argument list, no shell
            normalized,
            cwd=str(resolved.cwd) if resolved.cwd is not None else None,
            env=dict(resolved.env) if resolved.env is not None else None,
            check=False,
            capture_output=resolved.capture_output,
            text=True,
            timeout=resolved.timeout,
            stdin=subprocess.DEVNULL if resolved.discard_stdin else None,
        )
    except subprocess.TimeoutExpired as exc:
        stderr = _ensure_text(exc.stderr)
        timeout_msg = f"Command timed out after {resolved.timeout:.1f}s"
        completed = CompletedProcess(
            args=normalized,
            returncode=TIMEOUT_EXIT_CODE,
            stdout=_ensure_text(exc.stdout),
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
        )

    if resolved.check and completed.returncode != 0:
        raise SubprocessExecutionError(normalized, completed.returncode, completed.stdout, completed.stderr)
    return completed


__all__ = [
    "NOT_FOUND_EXIT_CODE",
    "TIMEOUT_EXIT_CODE",
    "CommandOptions",
    "CommandRunner",
    "SubprocessExecutionError",
    "run_command",
]
