"""Remove command: delegate to pacman."""

from typing import Optional

from aurvoid.errors import RemovalFailure
from aurvoid.output import log, log_success
from aurvoid.runner import CommandRunner, SubprocessRunner

SUDO = "sudo"
PACMAN = "pacman"
PACMAN_REMOVE_FLAGS = ("-Rns",)


def remove_package(name: str, runner: Optional[CommandRunner] = None) -> None:
    """Remove an installed package with its unneeded dependencies and config files.

    Args:
        name: Installed package name
        runner: Runner to use (defaults to SubprocessRunner)

    Raises:
        RemovalFailure: If pacman cannot be launched or exits non-zero
    """
    runner = runner if runner is not None else SubprocessRunner()
    log(f"Removing package: {name}")

    result = runner.run(SUDO, [PACMAN, *PACMAN_REMOVE_FLAGS, name])
    if not result.success:
        raise RemovalFailure(f"Failed to remove package {name}: {result.detail}", returncode=result.returncode)

    log_success(f"Successfully removed: {name}")
