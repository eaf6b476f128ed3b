"""
Clone-and-build orchestration for AUR packages.

Drives one BuildJob through the state machine:

    CLONING -> BUILDING_PRIMARY -> DONE
                     |
                     +-> BUILDING_RELAXED -> DONE | FAILED

A failed clone ends the job immediately. A failed primary build is retried
exactly once with PGP signature verification disabled; the most common cause
is a signer key the user has not imported yet.
"""

import logging
from pathlib import Path

from aurvoid.config import VoidConfig
from aurvoid.output import TimedLogger, log_warning
from aurvoid.packages.models import BuildAttempt, BuildJob, BuildOutcome, BuildPhase, PackageRecord
from aurvoid.runner import CommandResult, CommandRunner

logger = logging.getLogger(__name__)

GIT = "git"
MAKEPKG = "makepkg"
MAKEPKG_INSTALL_FLAGS = ("-si",)
MAKEPKG_SKIP_PGP_FLAG = "--skippgpcheck"


def makepkg_args(attempt: BuildAttempt) -> list[str]:
    """makepkg arguments for the given attempt."""
    args = list(MAKEPKG_INSTALL_FLAGS)
    if attempt is BuildAttempt.RELAXED:
        args.append(MAKEPKG_SKIP_PGP_FLAG)
    return args


class BuildOrchestrator:
    """
    Clones a package recipe and builds it with makepkg.

    The orchestrator never raises for clone or build failures; it records
    them on the returned BuildJob so the caller decides how to report them.
    """

    def __init__(self, runner: CommandRunner, config: VoidConfig):
        """
        Initialize the orchestrator.

        Args:
            runner: Runner used for git and makepkg
            config: Settings providing the clone URL base
        """
        self.runner = runner
        self.config = config

    def new_job(self, package: PackageRecord, workspace_path: Path) -> BuildJob:
        """Create a job for a resolved package and its prepared workspace."""
        return BuildJob(
            package_name=package.name,
            build_base=package.build_base,
            workspace_path=workspace_path,
        )

    def run(self, job: BuildJob) -> BuildJob:
        """Run the job to a terminal phase.

        Args:
            job: Job in the CLONING phase with a prepared, empty workspace

        Returns:
            The same job with phase DONE or FAILED and its outcome set
        """
        if not self._clone(job).success:
            job.finish(BuildOutcome.CLONE_FAILED)
            return job

        job.phase = BuildPhase.BUILDING_PRIMARY
        if self._build(job, BuildAttempt.PRIMARY).success:
            job.finish(BuildOutcome.INSTALLED)
            return job

        log_warning("First attempt failed, trying with PGP check skip...")
        job.phase = BuildPhase.BUILDING_RELAXED
        if self._build(job, BuildAttempt.RELAXED).success:
            job.finish(BuildOutcome.INSTALLED_UNVERIFIED)
        else:
            job.finish(BuildOutcome.BUILD_FAILED)
        return job

    def _clone(self, job: BuildJob) -> CommandResult:
        url = self.config.clone_url(job.build_base)
        with TimedLogger("Cloning recipe") as stage:
            stage.detail(url)
            result = self.runner.run(GIT, ["clone", url, str(job.workspace_path)])
            if not result.success:
                stage.fail(result.detail)
                logger.debug("Clone of %s failed: %s", url, result.detail)
        return result

    def _build(self, job: BuildJob, attempt: BuildAttempt) -> CommandResult:
        job.attempted[attempt] = True
        label = "Building package" if attempt is BuildAttempt.PRIMARY else "Building package without PGP verification"
        with TimedLogger(label) as stage:
            result = self.runner.run(MAKEPKG, makepkg_args(attempt), cwd=job.workspace_path)
            if not result.success:
                stage.fail(result.detail)
                logger.debug("%s build of %s failed: %s", attempt.value, job.package_name, result.detail)
        return result
