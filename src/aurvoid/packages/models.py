"""Data models for package resolution and building.

Defines the core types shared across the install pipeline:
- PackageRecord: A package as returned by the AUR RPC API
- RelevanceTier: How closely a search hit matches the query
- BuildAttempt / BuildPhase / BuildOutcome: Build state machine vocabulary
- BuildJob: One resolve-to-install run for a single package
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class RelevanceTier(Enum):
    """Relevance of a search hit, strongest first."""

    EXACT = "exact"
    PREFIX = "prefix"
    TOKEN = "token"


class BuildAttempt(Enum):
    """Which makepkg invocation a build step refers to."""

    PRIMARY = "primary"
    RELAXED = "relaxed"


class BuildPhase(Enum):
    """Phase of a build job in the clone -> build -> retry state machine."""

    CLONING = "cloning"
    BUILDING_PRIMARY = "building_primary"
    BUILDING_RELAXED = "building_relaxed"
    DONE = "done"
    FAILED = "failed"


class BuildOutcome(Enum):
    """Final result of a build job."""

    INSTALLED = "installed"
    INSTALLED_UNVERIFIED = "installed_unverified"
    CLONE_FAILED = "clone_failed"
    BUILD_FAILED = "build_failed"


@dataclass(frozen=True)
class PackageRecord:
    """A package entry from the AUR RPC API.

    Attributes:
        name: Package name (identity)
        build_base: PackageBase the recipe repository is named after
        description: Optional one-line description
    """

    name: str
    build_base: str
    description: Optional[str] = None

    @classmethod
    def from_rpc(cls, data: dict[str, Any]) -> "PackageRecord":
        """Build a record from one RPC result object.

        Raises:
            KeyError: If Name or PackageBase is missing
            TypeError: If Name or PackageBase is not a string
        """
        name = data["Name"]
        build_base = data["PackageBase"]
        if not isinstance(name, str) or not isinstance(build_base, str):
            raise TypeError("Name and PackageBase must be strings")
        description = data.get("Description")
        if description is not None and not isinstance(description, str):
            description = str(description)
        return cls(name=name, build_base=build_base, description=description)


@dataclass
class BuildJob:
    """A single build of one resolved package.

    Attributes:
        package_name: Name the user asked for, as resolved
        build_base: PackageBase used for the clone URL and workspace path
        workspace_path: Prepared workspace directory
        attempted: Which makepkg attempts have been run
        phase: Current state machine phase
        outcome: Final outcome, None while the job is running
    """

    package_name: str
    build_base: str
    workspace_path: Path
    attempted: dict[BuildAttempt, bool] = field(default_factory=lambda: {BuildAttempt.PRIMARY: False, BuildAttempt.RELAXED: False})
    phase: BuildPhase = BuildPhase.CLONING
    outcome: Optional[BuildOutcome] = None

    @property
    def succeeded(self) -> bool:
        """True if the package ended up installed, verified or not."""
        return self.outcome in (BuildOutcome.INSTALLED, BuildOutcome.INSTALLED_UNVERIFIED)

    @property
    def attempt_count(self) -> int:
        """Number of makepkg invocations made so far."""
        return sum(1 for ran in self.attempted.values() if ran)

    def finish(self, outcome: BuildOutcome) -> None:
        """Move the job to its terminal phase with the given outcome."""
        self.outcome = outcome
        self.phase = BuildPhase.DONE if self.succeeded else BuildPhase.FAILED

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "package_name": self.package_name,
            "build_base": self.build_base,
            "workspace_path": str(self.workspace_path),
            "attempted": {attempt.value: ran for attempt, ran in self.attempted.items()},
            "phase": self.phase.value,
            "outcome": self.outcome.value if self.outcome is not None else None,
        }
