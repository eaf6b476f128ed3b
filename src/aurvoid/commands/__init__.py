"""Command implementations for the void CLI.

This package contains the install and remove pipelines that cli.py
dispatches to.
"""

from aurvoid.commands.install import InstallReport, InstallStatus, PackageInstaller, install_package
from aurvoid.commands.remove import remove_package

__all__ = ["InstallReport", "InstallStatus", "PackageInstaller", "install_package", "remove_package"]
