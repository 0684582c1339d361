"""Projections of refs and worktrees into pickable options."""

from datetime import datetime
from typing import List, Optional, Sequence

from git_worktree_assistant.constants import (
    SYMBOL_AHEAD,
    SYMBOL_BEHIND,
    SYMBOL_HAS_WORKTREE,
    SYMBOL_HEAD,
)
from git_worktree_assistant.formatters.date import time_ago
from git_worktree_assistant.models.option import OptionAction, PickableOption
from git_worktree_assistant.models.ref import GitRef
from git_worktree_assistant.models.worktree import Worktree


def format_ref_description(ref: GitRef) -> str:
    """Markers, divergence, upstream and id, e.g. ``(HEAD) ↑2 [origin/main] a1b2c3``."""
    parts = []
    if ref.worktree:
        parts.append(SYMBOL_HAS_WORKTREE)
    if ref.is_head:
        parts.append(SYMBOL_HEAD)
    if ref.ahead:
        parts.append(f"{SYMBOL_AHEAD}{ref.ahead}")
    if ref.behind:
        parts.append(f"{SYMBOL_BEHIND}{ref.behind}")
    if ref.upstream:
        parts.append(f"[{ref.upstream}]")
    parts.append(ref.id)
    return " ".join(parts)


def format_ref_detail(ref: GitRef, now: Optional[datetime] = None) -> str:
    detail = f"{ref.author}: {ref.message}"
    if ref.date is not None:
        detail += f" ({time_ago(ref.date, now)})"
    return detail


def make_ref_option(ref: GitRef, now: Optional[datetime] = None) -> PickableOption:
    return PickableOption(
        label=ref.name,
        description=format_ref_description(ref),
        detail=format_ref_detail(ref, now),
        ref=ref,
    )


def make_worktree_option(worktree: Worktree) -> PickableOption:
    if worktree.branch:
        detail = worktree.branch
    else:
        detail = f"detached at {worktree.head}" if worktree.head else "detached"
    return PickableOption(label=worktree.path, detail=detail, worktree=worktree)


def destination_options(branches: Sequence[GitRef]) -> List[PickableOption]:
    """New branch and detached actions, then the reconciled branches."""
    return [
        PickableOption(
            label="New Branch",
            detail="Checkout a new branch on the new worktree, similar to the -b option.",
            action=OptionAction.NEW,
        ),
        PickableOption(
            label="Detached worktree",
            detail="Create a worktree with a detached HEAD, without a new branch.",
            action=OptionAction.DETACHED,
        ),
        PickableOption.separator("branches"),
        *[make_ref_option(ref) for ref in branches],
    ]


def base_options(candidates: Sequence[GitRef]) -> List[PickableOption]:
    """HEAD branch, a custom commit action, then the other candidates."""
    options: List[PickableOption] = []
    rest = list(candidates)
    if rest and rest[0].is_head:
        options.append(make_ref_option(rest.pop(0)))
    options.append(
        PickableOption(label="Enter custom commit", action=OptionAction.CUSTOM_COMMIT)
    )
    options.append(PickableOption.separator("branches"))
    options.extend(make_ref_option(ref) for ref in rest)
    return options


def literal_options(values: Sequence[str]) -> List[PickableOption]:
    return [PickableOption.literal(value) for value in values]


def format_sync(ref: GitRef) -> str:
    """Sync column text: ``↑2 ↓1``, ``synced``, or empty when there is no pairing."""
    if not ref.has_divergence:
        return ""
    if not ref.ahead and not ref.behind:
        return "synced"
    parts = []
    if ref.ahead:
        parts.append(f"{SYMBOL_AHEAD}{ref.ahead}")
    if ref.behind:
        parts.append(f"{SYMBOL_BEHIND}{ref.behind}")
    return " ".join(parts)
