"""Selection state and plans for worktree commands."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from git_worktree_assistant.models.ref import GitRef


class DestinationKind(Enum):
    """What the new worktree checks out."""
    EXISTING = "existing"
    NEW = "new"
    DETACHED = "detached"


class PromptStep(Enum):
    """Next input an add-worktree session needs."""
    FETCH = "fetch"
    DESTINATION = "destination"
    ALREADY_CHECKED_OUT = "already-checked-out"
    BASE = "base"
    COMMIT = "commit"
    BRANCH_NAME = "branch-name"
    PATH = "path"
    READY = "ready"


@dataclass
class WorktreeSelection:
    """Answers collected so far while adding a worktree."""
    fetch: Optional[bool] = None
    kind: Optional[DestinationKind] = None
    ref: Optional[GitRef] = None  # Destination branch for EXISTING
    base_ref: Optional[GitRef] = None
    wants_custom_commit: bool = False
    base_commit: Optional[str] = None
    branch_name: Optional[str] = None  # New branch name for NEW
    path: Optional[str] = None


@dataclass
class WorktreePlan:
    """A `git worktree` invocation ready to run."""
    subcommand: str  # "add" or "remove"
    args: List[str] = field(default_factory=list)  # Arguments after the subcommand
    path: str = ""

    @property
    def argv(self) -> List[str]:
        return ["worktree", self.subcommand, *self.args]

    def __str__(self) -> str:
        return "git " + " ".join(self.argv)
