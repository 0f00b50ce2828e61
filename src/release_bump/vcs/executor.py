"""External command execution.

Every process the release pipeline starts goes through a CommandExecutor,
so tests can substitute a fake that records calls and returns canned
output.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from release_bump.exceptions import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of a finished command.

    Attributes:
        output: Captured stdout, or stderr/stdout combined on failure
        success: True if the command exited with status 0
    """

    output: str
    success: bool


class CommandExecutor(Protocol):
    """Runs a command synchronously and reports its output."""

    def run(self, args: Sequence[str]) -> CommandResult: ...


class SubprocessExecutor:
    """CommandExecutor backed by ``subprocess.run``."""

    def __init__(self, cwd: Path | None = None) -> None:
        self.cwd = cwd

    def run(self, args: Sequence[str]) -> CommandResult:
        logger.debug("Running: %s", " ".join(args))
        try:
            result = subprocess.run(
                list(args),
                capture_output=True,
                text=True,
                check=False,
                cwd=self.cwd,
            )
        except FileNotFoundError:
            return CommandResult(output=f"Command not found: {args[0]}", success=False)

        if result.returncode != 0:
            output = "\n".join(part for part in (result.stderr, result.stdout) if part.strip())
            return CommandResult(output=output, success=False)
        return CommandResult(output=result.stdout, success=True)


def run_checked(
    executor: CommandExecutor,
    args: Sequence[str],
    *,
    error: type[CommandError] = CommandError,
) -> str:
    """Run a command and return its output, raising on failure.

    Raises:
        CommandError: (or the given subclass) if the command fails
    """
    result = executor.run(args)
    if not result.success:
        raise error(f"Command failed: {' '.join(args)}", command=args, output=result.output)
    return result.output
