"""Exception types raised by the aurvoid install and remove pipelines.

Every terminal failure derives from AurVoidError so the CLI can report it and
exit non-zero with a single except clause. A package that does not exist is
not an error: it is reported through the suggestion path instead.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from aurvoid.packages.models import BuildAttempt


class AurVoidError(Exception):
    """Base class for all terminal aurvoid failures."""

    pass


class NetworkError(AurVoidError):
    """Raised when an RPC query fails at the transport level."""

    pass


class DecodeError(AurVoidError):
    """Raised when an RPC response body does not match the expected schema."""

    pass


class WorkspaceError(AurVoidError):
    """Raised when the build workspace cannot be validated, cleaned, or created."""

    pass


class CloneFailure(AurVoidError):
    """Raised when cloning the recipe repository exits non-zero."""

    pass


class BuildFailure(AurVoidError):
    """Raised when makepkg fails.

    Only the relaxed attempt is ever raised to the user; a failed primary
    attempt is handled inside the build orchestrator by retrying.

    Attributes:
        attempt: Which build attempt failed
        guidance: Remediation lines to show the user
    """

    def __init__(self, message: str, attempt: "BuildAttempt", guidance: Optional[list[str]] = None):
        super().__init__(message)
        self.attempt = attempt
        self.guidance = guidance or []


class RemovalFailure(AurVoidError):
    """Raised when the system package manager fails to remove a package.

    Attributes:
        returncode: pacman's exit status, or None if it could not be launched
    """

    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode
