"""Recipe cloning and makepkg build orchestration."""

from .orchestrator import BuildOrchestrator, makepkg_args

__all__ = ["BuildOrchestrator", "makepkg_args"]
