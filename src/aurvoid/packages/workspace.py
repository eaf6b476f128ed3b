"""Per-package build workspace management.

Each package base gets one directory under the build root. A workspace is
wiped at the start of the next build of the same package, not at the end of
a failed one, so a broken clone or build stays on disk for inspection until
the user retries.
"""

import logging
import re
import shutil
from pathlib import Path

from aurvoid.errors import WorkspaceError
from aurvoid.output import log

logger = logging.getLogger(__name__)

# AUR package bases are restricted to this alphabet
_BUILD_BASE_PATTERN = re.compile(r"^[A-Za-z0-9@._+-]+$")


def validate_build_base(build_base: str) -> str:
    """Check that build_base is safe to use as a single path component.

    Args:
        build_base: PackageBase value from the RPC API

    Returns:
        The unchanged build_base

    Raises:
        WorkspaceError: If build_base is empty, "." or "..", contains a path
            separator, or uses characters outside the AUR package alphabet
    """
    if build_base in ("", ".", "..") or not _BUILD_BASE_PATTERN.match(build_base):
        raise WorkspaceError(f"Refusing to use unsafe package base as a directory name: {build_base!r}")
    return build_base


class BuildWorkspace:
    """Owns the scratch directories packages are cloned and built in.

    Args:
        root: Directory holding one workspace per package base
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def path_for(self, build_base: str) -> Path:
        """Return the workspace path for build_base without touching the disk."""
        return self.root / validate_build_base(build_base)

    def prepare(self, build_base: str) -> Path:
        """Return an empty workspace directory for build_base.

        Any leftover directory from a previous attempt is removed first.

        Args:
            build_base: PackageBase of the package being built

        Returns:
            Path to the freshly created, empty workspace

        Raises:
            WorkspaceError: If build_base is unsafe or the directory cannot
                be removed or created
        """
        path = self.path_for(build_base)

        if path.exists() or path.is_symlink():
            log(f"Removing existing directory: {path}")
            try:
                if path.is_dir() and not path.is_symlink():
                    shutil.rmtree(path)
                else:
                    path.unlink()
            except OSError as e:
                raise WorkspaceError(f"Failed to remove stale workspace {path}: {e}") from e

        try:
            path.mkdir(parents=True)
        except OSError as e:
            raise WorkspaceError(f"Failed to create workspace {path}: {e}") from e

        logger.debug("Prepared workspace %s", path)
        return path
