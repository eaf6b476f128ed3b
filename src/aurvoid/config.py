"""Runtime configuration for aurvoid.

Defaults point at the public AUR and a build directory in the user's home.
Each value can be overridden from the environment:

    AURVOID_API_ROOT        Base URL of the AUR (RPC and git clone URLs)
    AURVOID_BUILD_DIR       Root directory for per-package build workspaces
    AURVOID_SUGGESTION_CAP  Max "did you mean" suggestions shown
    AURVOID_HTTP_TIMEOUT    RPC timeout in seconds (unset means no timeout)
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_API_ROOT = "https://aur.archlinux.org"
DEFAULT_BUILD_DIR_NAME = "aur-builds"
DEFAULT_SUGGESTION_CAP = 5


def get_build_root() -> Path:
    """Get the workspace root directory respecting AURVOID_BUILD_DIR.

    Returns:
        Path to the directory that holds one workspace per package base
    """
    build_env = os.environ.get("AURVOID_BUILD_DIR")
    if build_env:
        return Path(build_env).expanduser().resolve()
    return Path.home() / DEFAULT_BUILD_DIR_NAME


def _read_positive_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %d", name, raw, default)
        return default
    if value < 1:
        logger.warning("Ignoring non-positive %s=%r, using %d", name, raw, default)
        return default
    return value


def _read_timeout(name: str) -> Optional[float]:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, no timeout will be used", name, raw)
        return None
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r, no timeout will be used", name, raw)
        return None
    return value


@dataclass
class VoidConfig:
    """Resolved aurvoid settings.

    Attributes:
        api_root: AUR base URL without trailing slash
        build_root: Directory holding per-package workspaces
        suggestion_cap: Maximum number of suggestions shown on a miss
        http_timeout: RPC timeout in seconds, None to wait indefinitely
    """

    api_root: str = DEFAULT_API_ROOT
    build_root: Path = field(default_factory=get_build_root)
    suggestion_cap: int = DEFAULT_SUGGESTION_CAP
    http_timeout: Optional[float] = None

    def __post_init__(self) -> None:
        self.api_root = self.api_root.rstrip("/")
        self.build_root = Path(self.build_root)

    @property
    def rpc_url(self) -> str:
        """URL of the RPC endpoint."""
        return f"{self.api_root}/rpc/"

    def clone_url(self, build_base: str) -> str:
        """Git URL of the recipe repository for a package base."""
        return f"{self.api_root}/{build_base}.git"

    @classmethod
    def from_env(cls) -> "VoidConfig":
        """Build a config from defaults plus environment overrides."""
        return cls(
            api_root=os.environ.get("AURVOID_API_ROOT") or DEFAULT_API_ROOT,
            build_root=get_build_root(),
            suggestion_cap=_read_positive_int("AURVOID_SUGGESTION_CAP", DEFAULT_SUGGESTION_CAP),
            http_timeout=_read_timeout("AURVOID_HTTP_TIMEOUT"),
        )
