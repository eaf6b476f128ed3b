"""Subprocess execution for git, makepkg, and pacman.

Everything aurvoid launches goes through a CommandRunner. The real
implementation lets the child inherit the terminal's stdin, stdout and
stderr, so makepkg progress is shown live and sudo or gpg prompts reach the
user. Nothing is captured and no timeout is applied.
"""

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Protocol, Sequence, runtime_checkable

logger = logging.getLogger(__name__)


class FailureCause(Enum):
    """Why a command did not succeed."""

    LAUNCH_ERROR = "launch_error"
    EXIT_STATUS = "exit_status"


@dataclass(frozen=True)
class CommandResult:
    """Outcome of running one external command.

    Attributes:
        command: Full argv that was run
        returncode: Exit status, or None if the program never started
        failure: Failure cause, None on success
        detail: Human-readable failure detail (empty on success)
    """

    command: tuple[str, ...]
    returncode: Optional[int]
    failure: Optional[FailureCause] = None
    detail: str = ""

    @property
    def success(self) -> bool:
        return self.failure is None

    @classmethod
    def ok(cls, command: Sequence[str]) -> "CommandResult":
        return cls(command=tuple(command), returncode=0)

    @classmethod
    def exited(cls, command: Sequence[str], returncode: int) -> "CommandResult":
        """Result for a process that ran and exited with returncode."""
        if returncode == 0:
            return cls.ok(command)
        return cls(
            command=tuple(command),
            returncode=returncode,
            failure=FailureCause.EXIT_STATUS,
            detail=f"exited with status {returncode}",
        )

    @classmethod
    def launch_failed(cls, command: Sequence[str], error: OSError) -> "CommandResult":
        """Result for a process that could not be started."""
        return cls(
            command=tuple(command),
            returncode=None,
            failure=FailureCause.LAUNCH_ERROR,
            detail=f"could not launch {command[0]}: {error.strerror or error}",
        )


@runtime_checkable
class CommandRunner(Protocol):
    """Capability for running an external program to completion."""

    def run(self, program: str, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        """Run program with args, optionally inside cwd, and wait for it to exit."""
        ...


class SubprocessRunner:
    """CommandRunner backed by subprocess.run with inherited stdio."""

    def run(self, program: str, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        cmd = [program, *args]
        logger.debug("Running %s (cwd=%s)", " ".join(cmd), cwd)

        try:
            completed = subprocess.run(cmd, cwd=str(cwd) if cwd is not None else None, check=False)
        except OSError as e:
            # Missing binary, permission denied, bad cwd
            logger.debug("Failed to launch %s: %s", program, e)
            return CommandResult.launch_failed(cmd, e)

        logger.debug("%s exited with %d", program, completed.returncode)
        return CommandResult.exited(cmd, completed.returncode)
