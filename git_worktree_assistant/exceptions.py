"""Custom exceptions for git-worktree-assistant"""

from enum import Enum
from typing import Optional, Sequence


class WorktreeAssistantError(Exception):
    """Base exception for all git-worktree-assistant errors."""
    pass


class CommandError(WorktreeAssistantError):
    """Exception raised when a git command exits non-zero or cannot be spawned."""

    def __init__(
        self,
        command: Sequence[str],
        exit_code: Optional[int] = None,
        stderr: str = "",
    ):
        self.command = list(command)
        self.exit_code = exit_code
        self.stderr = (stderr or "").strip()

        error_msg = f"'{' '.join(self.command)}' failed"
        if exit_code is not None:
            error_msg += f" (exit {exit_code})"
        if self.stderr:
            error_msg += f": {self.stderr}"

        super().__init__(error_msg)


class ValidationErrorKind(Enum):
    """What kind of user input failed validation."""
    INVALID_BRANCH_NAME = "invalid-branch-name"
    INVALID_COMMIT = "invalid-commit"


class ValidationError(WorktreeAssistantError):
    """Exception raised when user input fails a git format or existence check."""

    def __init__(self, kind: ValidationErrorKind, value: str):
        self.kind = kind
        self.value = value

        if kind is ValidationErrorKind.INVALID_BRANCH_NAME:
            error_msg = f'"{value}" is not a valid branch name.'
        else:
            error_msg = f'The commit "{value}" is invalid.'

        super().__init__(error_msg)


class NotInRepositoryError(WorktreeAssistantError):
    """Exception raised when no git work tree contains the given directory."""

    def __init__(self, directory: Optional[str] = None):
        self.directory = directory
        error_msg = "You need to be in a folder with a git repo for this to work!"
        if directory:
            error_msg += f" ({directory})"
        super().__init__(error_msg)


class RefParseError(WorktreeAssistantError):
    """Exception raised when a for-each-ref line does not have the expected fields."""

    def __init__(self, line: str, field_count: int):
        self.line = line
        self.field_count = field_count
        super().__init__(f"Could not parse ref line ({field_count} fields): {line!r}")


class BranchCheckedOutError(WorktreeAssistantError):
    """Raised when the selected branch already has a worktree.

    Not a failure: callers offer to switch to or open ``path`` instead.
    """

    def __init__(self, branch: str, path: str):
        self.branch = branch
        self.path = path
        super().__init__(f"A worktree for branch '{branch}' already exists at {path}")
