"""Command execution seam for external tools (npx, package managers, git).

Everything that shells out goes through a :class:`CommandRunner` so the
orchestrator and its tests never depend on real subprocesses.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from typing import List, Optional, Protocol, Sequence

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127


class CommandError(RuntimeError):
    """An external command exited with a nonzero status."""

    def __init__(self, command: str, args: Sequence[str], returncode: int):
        self.command = command
        self.args_list = list(args)
        self.returncode = returncode
        super().__init__(
            f"Command failed with exit status {returncode}: {format_command(command, args)}"
        )


class CommandRunner(Protocol):
    """Synchronous capability for running one external command."""

    def execute(self, command: str, args: Sequence[str], cwd: Optional[str] = None) -> int:
        ...


def format_command(command: str, args: Sequence[str]) -> str:
    return " ".join(shlex.quote(part) for part in [command, *args])


class SubprocessRunner:
    """Run commands as blocking child processes with inherited stdio.

    No timeout is applied; a hung child blocks the caller.
    """

    def execute(self, command: str, args: Sequence[str], cwd: Optional[str] = None) -> int:
        final_cmd: List[str] = [command, *args]
        logger.info("Running: %s", format_command(command, args))
        try:
            result = subprocess.run(final_cmd, cwd=cwd, check=False)  # noqa: S603
        except FileNotFoundError:
            logger.error("Command not found: %s. Is it installed and in your PATH?", command)
            return COMMAND_NOT_FOUND
        return result.returncode


class DryRunRunner:
    """Log commands instead of running them. Always reports success."""

    def __init__(self) -> None:
        self.commands: List[List[str]] = []

    def execute(self, command: str, args: Sequence[str], cwd: Optional[str] = None) -> int:
        self.commands.append([command, *args])
        logger.info("[dry-run] %s (cwd: %s)", format_command(command, args), cwd or ".")
        return 0


def run_checked(
    runner: CommandRunner,
    command: str,
    args: Sequence[str],
    cwd: Optional[str] = None,
) -> None:
    """Run a command and raise CommandError on a nonzero exit status."""
    returncode = runner.execute(command, list(args), cwd)
    if returncode != 0:
        logger.error("Error executing command: %s", format_command(command, args))
        raise CommandError(command, args, returncode)
