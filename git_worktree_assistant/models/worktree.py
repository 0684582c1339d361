"""Worktree data models."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Worktree:
    """A checked-out working copy of the repository."""

    path: str
    head: Optional[str] = None  # Set even when detached
    branch: Optional[str] = None  # Short name, None when detached

    @property
    def is_detached(self) -> bool:
        return self.branch is None

    def __str__(self) -> str:
        """String representation of worktree."""
        target = self.branch if self.branch else f"detached at {self.head or '?'}"
        return f"{self.path} [{target}]"
