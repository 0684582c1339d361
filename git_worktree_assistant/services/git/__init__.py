"""Git-related services for git-worktree-assistant."""

from .runner import CommandResult, ProcessRunner
from .refs import RefService
from .worktrees import WorktreeService
from .divergence import Divergence, DivergenceCalculator
from .validation import BranchValidator
from .repository import RepositoryLocator, WorktreeDirectoryCache

__all__ = [
    "CommandResult",
    "ProcessRunner",
    "RefService",
    "WorktreeService",
    "Divergence",
    "DivergenceCalculator",
    "BranchValidator",
    "RepositoryLocator",
    "WorktreeDirectoryCache",
]
