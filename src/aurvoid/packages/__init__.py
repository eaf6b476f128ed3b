"""AUR package resolution, workspaces, and suggestions."""

from .models import BuildAttempt, BuildJob, BuildOutcome, BuildPhase, PackageRecord, RelevanceTier
from .resolver import PackageResolver, classify_match, filter_relevant
from .suggestions import SuggestionEngine
from .workspace import BuildWorkspace, validate_build_base

__all__ = [
    "BuildAttempt",
    "BuildJob",
    "BuildOutcome",
    "BuildPhase",
    "BuildWorkspace",
    "PackageRecord",
    "PackageResolver",
    "RelevanceTier",
    "SuggestionEngine",
    "classify_match",
    "filter_relevant",
    "validate_build_base",
]
