"""Worktree command planning: what to ask next and which git arguments to run."""

import os
from typing import Optional

from git_worktree_assistant.constants import DETACHED_PREFIX
from git_worktree_assistant.exceptions import (
    BranchCheckedOutError,
    ValidationError,
    ValidationErrorKind,
)
from git_worktree_assistant.models.selection import (
    DestinationKind,
    PromptStep,
    WorktreePlan,
    WorktreeSelection,
)
from git_worktree_assistant.services.git.validation import BranchValidator
from git_worktree_assistant.logging_config import get_logger

logger = get_logger(__name__)


def next_required_input(selection: WorktreeSelection) -> PromptStep:
    """Decide which answer the add-worktree session needs next.

    Pure function of the answers so far; READY means ``plan_add`` can run and
    ALREADY_CHECKED_OUT means the chosen branch needs no new worktree.
    """
    if selection.fetch is None:
        return PromptStep.FETCH
    if selection.kind is None:
        return PromptStep.DESTINATION

    if selection.kind is DestinationKind.EXISTING:
        if selection.ref is None:
            return PromptStep.DESTINATION
        if selection.ref.worktree is not None:
            return PromptStep.ALREADY_CHECKED_OUT
    else:
        if selection.base_ref is None and not selection.wants_custom_commit:
            return PromptStep.BASE
        if selection.wants_custom_commit and not selection.base_commit:
            return PromptStep.COMMIT
        if selection.kind is DestinationKind.NEW and not selection.branch_name:
            return PromptStep.BRANCH_NAME

    if not selection.path:
        return PromptStep.PATH
    return PromptStep.READY


def suggest_worktree_path(
    parent_dir: str, branch_name: Optional[str], commit: Optional[str]
) -> str:
    """``<parent>/<branch>``, or ``<parent>/detached-<commit>`` without a branch."""
    name = branch_name if branch_name else f"{DETACHED_PREFIX}{commit or ''}"
    parent_dir = parent_dir.strip()
    return os.path.join(parent_dir, name) if parent_dir else name


def suggested_path_for(selection: WorktreeSelection, parent_dir: str) -> str:
    """Default path for the worktree the selection describes."""
    branch_name = None
    if selection.kind is DestinationKind.EXISTING and selection.ref is not None:
        branch_name = selection.ref.short_name
    elif selection.kind is DestinationKind.NEW:
        branch_name = selection.branch_name

    commit = selection.base_ref.id if selection.base_ref is not None else selection.base_commit
    return suggest_worktree_path(parent_dir, branch_name, commit)


class WorktreePlanner:
    """Turns a finished selection into `git worktree` arguments.

    Branch names and commits typed by the user are checked with git before a
    plan is returned, so nothing mutating runs on invalid input.
    """

    def __init__(self, validator: BranchValidator, cwd: str):
        self.validator = validator
        self.cwd = cwd

    def require_valid_branch_name(self, name: str) -> str:
        """Return the trimmed name, or raise ValidationError(INVALID_BRANCH_NAME)."""
        name = (name or "").strip()
        if not self.validator.is_valid_branch_name(name, self.cwd):
            raise ValidationError(ValidationErrorKind.INVALID_BRANCH_NAME, name)
        return name

    def require_valid_commit(self, commit: str) -> str:
        """Return the trimmed commit, or raise ValidationError(INVALID_COMMIT)."""
        commit = (commit or "").strip()
        if not self.validator.is_valid_commit(commit, self.cwd):
            raise ValidationError(ValidationErrorKind.INVALID_COMMIT, commit)
        return commit

    def _base(self, selection: WorktreeSelection) -> str:
        if selection.base_ref is not None:
            return selection.base_ref.name
        if selection.base_commit:
            return self.require_valid_commit(selection.base_commit)
        raise ValueError(f"A base branch or commit is required for a {selection.kind.value} worktree")

    def plan_add(self, selection: WorktreeSelection) -> WorktreePlan:
        """Arguments for `git worktree add` satisfying the selection.

        Raises:
            BranchCheckedOutError: The chosen branch already has a worktree
            ValidationError: The new branch name or typed commit is rejected by git
            ValueError: The selection is missing answers it needs
        """
        path = (selection.path or "").strip()
        if not path:
            raise ValueError("A worktree path is required")

        if selection.kind is DestinationKind.EXISTING:
            ref = selection.ref
            if ref is None:
                raise ValueError("No branch selected")
            if ref.worktree is not None:
                raise BranchCheckedOutError(ref.name, ref.worktree.path)
            if ref.is_local:
                args = [path, ref.name]
            else:
                args = ["--track", "-b", ref.short_name, path, ref.name]

        elif selection.kind is DestinationKind.NEW:
            branch_name = self.require_valid_branch_name(selection.branch_name or "")
            args = ["-b", branch_name, path, self._base(selection)]

        elif selection.kind is DestinationKind.DETACHED:
            args = ["--detach", path, self._base(selection)]

        else:
            raise ValueError("No destination selected")

        plan = WorktreePlan(subcommand="add", args=args, path=path)
        logger.debug(f"Planned {plan}")
        return plan

    def plan_remove(self, path: str) -> WorktreePlan:
        """Arguments for `git worktree remove`; git itself decides if the path is valid."""
        path = (path or "").strip()
        if not path:
            raise ValueError("A worktree path is required")
        return WorktreePlan(subcommand="remove", args=[path], path=path)
