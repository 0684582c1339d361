"""Data models for git-worktree-assistant."""

from .ref import GitRef, RefSource
from .worktree import Worktree
from .option import OptionAction, PickableOption
from .selection import (
    DestinationKind,
    PromptStep,
    WorktreePlan,
    WorktreeSelection,
)

__all__ = [
    "GitRef",
    "RefSource",
    "Worktree",
    "OptionAction",
    "PickableOption",
    "DestinationKind",
    "PromptStep",
    "WorktreePlan",
    "WorktreeSelection",
]
