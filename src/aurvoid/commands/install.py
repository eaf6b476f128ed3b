"""Install command: resolve, build, and fall back to suggestions.

Pipeline for one package name:

1. Exact info lookup against the AUR RPC API
2. Hit: prepare a clean workspace, then clone and build (with one
   relaxed-verification retry)
3. Miss: filtered search, capped to a handful of "did you mean" suggestions

Terminal failures are raised as AurVoidError subclasses; a missing package
is reported through the returned InstallReport instead.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from aurvoid.build.orchestrator import BuildOrchestrator
from aurvoid.config import VoidConfig
from aurvoid.errors import BuildFailure, CloneFailure
from aurvoid.output import log, log_success, log_warning
from aurvoid.packages.models import BuildAttempt, BuildJob, BuildOutcome, PackageRecord
from aurvoid.packages.resolver import PackageResolver
from aurvoid.packages.suggestions import SuggestionEngine
from aurvoid.packages.workspace import BuildWorkspace
from aurvoid.runner import CommandRunner, SubprocessRunner

logger = logging.getLogger(__name__)

PGP_GUIDANCE = [
    "You may need to manually import PGP keys:",
    "Look for any missing key IDs in the error messages above",
    "Then run: gpg --recv-keys <KEY_ID>",
]


class InstallStatus(Enum):
    """User-visible result of an install request."""

    INSTALLED = "installed"
    INSTALLED_UNVERIFIED = "installed_unverified"
    NOT_FOUND = "not_found"


@dataclass
class InstallReport:
    """Result of install_package().

    Attributes:
        query: Package name as given by the user
        status: What happened
        package: Resolved record (None when not found)
        job: Finished build job (None when not found)
        suggestions: Similar packages, only populated when not found
    """

    query: str
    status: InstallStatus
    package: Optional[PackageRecord] = None
    job: Optional[BuildJob] = None
    suggestions: list[PackageRecord] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status is not InstallStatus.NOT_FOUND


class PackageInstaller:
    """Runs the resolve -> build -> retry -> suggest pipeline.

    Args:
        resolver: AUR RPC client
        workspace: Workspace manager for build directories
        orchestrator: Clone and build driver
        suggestions: Suggestion capper for the not-found path
    """

    def __init__(
        self,
        resolver: PackageResolver,
        workspace: BuildWorkspace,
        orchestrator: BuildOrchestrator,
        suggestions: SuggestionEngine,
    ) -> None:
        self.resolver = resolver
        self.workspace = workspace
        self.orchestrator = orchestrator
        self.suggestions = suggestions

    @classmethod
    def from_config(cls, config: VoidConfig, runner: Optional[CommandRunner] = None) -> "PackageInstaller":
        """Wire up the default collaborators for a config."""
        runner = runner if runner is not None else SubprocessRunner()
        return cls(
            resolver=PackageResolver(config),
            workspace=BuildWorkspace(config.build_root),
            orchestrator=BuildOrchestrator(runner, config),
            suggestions=SuggestionEngine(config.suggestion_cap),
        )

    def install(self, name: str) -> InstallReport:
        """Install a package from the AUR, or suggest alternatives.

        Args:
            name: Package name to install

        Returns:
            InstallReport describing a successful install or a miss

        Raises:
            NetworkError: If an RPC request fails
            DecodeError: If an RPC response is malformed
            WorkspaceError: If the build directory cannot be prepared
            CloneFailure: If the recipe cannot be cloned
            BuildFailure: If makepkg fails even with PGP checks skipped
        """
        package = self.resolver.resolve_exact(name)
        if package is None:
            log(f"Package not found in AUR: {name}")
            return self._suggest(name)

        log(f"Installing: {package.name}")
        workspace_path = self.workspace.prepare(package.build_base)
        job = self.orchestrator.run(self.orchestrator.new_job(package, workspace_path))
        return self._report(name, package, job)

    def _suggest(self, name: str) -> InstallReport:
        log("Searching for similar packages...")
        matches = self.resolver.search(name)
        return InstallReport(
            query=name,
            status=InstallStatus.NOT_FOUND,
            suggestions=self.suggestions.rank(matches),
        )

    def _report(self, name: str, package: PackageRecord, job: BuildJob) -> InstallReport:
        if job.outcome is BuildOutcome.CLONE_FAILED:
            raise CloneFailure(f"Failed to clone repository for {package.name} (workspace left at {job.workspace_path})")

        if job.outcome is BuildOutcome.BUILD_FAILED:
            raise BuildFailure(
                f"Failed to build and install {package.name}, even with PGP check skipped",
                attempt=BuildAttempt.RELAXED,
                guidance=list(PGP_GUIDANCE),
            )

        if job.outcome is BuildOutcome.INSTALLED_UNVERIFIED:
            log_warning(f"Successfully installed with PGP check skip: {package.name}")
            status = InstallStatus.INSTALLED_UNVERIFIED
        else:
            log_success(f"Successfully installed: {package.name}")
            status = InstallStatus.INSTALLED

        logger.debug("Finished job %s", job.to_dict())
        return InstallReport(query=name, status=status, package=package, job=job)


def install_package(name: str, config: VoidConfig, runner: Optional[CommandRunner] = None) -> InstallReport:
    """Install name using the default pipeline for config."""
    return PackageInstaller.from_config(config, runner).install(name)
