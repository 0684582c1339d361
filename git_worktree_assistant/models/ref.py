"""Ref model and related enums"""
from enum import Enum
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from git_worktree_assistant.models.worktree import Worktree


class RefSource(Enum):
    """Namespace a ref was enumerated from."""
    LOCAL = "local"
    REMOTE = "remote"


@dataclass
class GitRef:
    """A named pointer into history, as listed by for-each-ref."""
    source: RefSource
    id: str
    name: str
    upstream: Optional[str] = None  # None = untracked
    is_head: bool = False
    author: str = ""
    message: str = ""
    date: Optional[datetime] = None  # None when git printed an unparseable date
    ahead: Optional[int] = None
    behind: Optional[int] = None
    worktree: Optional[Worktree] = None  # Lookup only, local refs only

    @property
    def is_local(self) -> bool:
        return self.source is RefSource.LOCAL

    @property
    def is_remote(self) -> bool:
        return self.source is RefSource.REMOTE

    @property
    def short_name(self) -> str:
        """Branch name without the remote prefix (``origin/feat/x`` -> ``feat/x``)."""
        if self.is_remote and "/" in self.name:
            return self.name.split("/", 1)[1]
        return self.name

    @property
    def has_divergence(self) -> bool:
        return self.ahead is not None and self.behind is not None

    def set_divergence(self, ahead: int, behind: int) -> None:
        """Set ahead and behind together; they are never set one at a time."""
        self.ahead = ahead
        self.behind = behind
