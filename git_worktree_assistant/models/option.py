"""Pickable option model, the UI-facing projection of refs and worktrees."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from git_worktree_assistant.models.ref import GitRef
from git_worktree_assistant.models.worktree import Worktree


class OptionAction(Enum):
    """Literal actions offered next to real refs."""
    NEW = "new"
    DETACHED = "detached"
    CUSTOM_COMMIT = "custom-commit"


@dataclass
class PickableOption:
    """One labeled choice handed to a chooser."""
    label: str
    description: str = ""
    detail: str = ""
    ref: Optional[GitRef] = None
    worktree: Optional[Worktree] = None
    action: Optional[OptionAction] = None
    value: Optional[str] = None  # Plain answers like "Yes" or "Finish"
    is_separator: bool = False

    @classmethod
    def separator(cls, label: str = "") -> "PickableOption":
        return cls(label=label, is_separator=True)

    @classmethod
    def literal(cls, value: str, description: str = "") -> "PickableOption":
        return cls(label=value, description=description, value=value)
