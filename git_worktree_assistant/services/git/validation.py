"""Branch name and commit validation against git."""

from git_worktree_assistant.exceptions import CommandError
from git_worktree_assistant.services.git.runner import ProcessRunner
from git_worktree_assistant.logging_config import get_logger

logger = get_logger(__name__)


class BranchValidator:
    """Checks user input with git itself; a failed probe just means "no"."""

    def __init__(self, runner: ProcessRunner):
        self.runner = runner

    def is_valid_branch_name(self, name: str, cwd: str) -> bool:
        """True if `git check-ref-format --branch` accepts ``name`` (exit code only)."""
        if not name:
            return False
        try:
            result = self.runner.run(["check-ref-format", "--branch", name], cwd)
        except CommandError as e:
            logger.warning(f"Could not validate branch name {name!r}: {e}")
            return False
        return result.ok

    def is_valid_commit(self, commit: str, cwd: str) -> bool:
        """True if ``commit`` names a commit object (`git cat-file -t` prints "commit")."""
        if not commit:
            return False
        try:
            result = self.runner.run(["cat-file", "-t", commit], cwd)
        except CommandError as e:
            logger.warning(f"Could not validate commit {commit!r}: {e}")
            return False
        return result.ok and result.stdout.strip() == "commit"
