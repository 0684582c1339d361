"""Worktree operations service for git-worktree-assistant."""

from typing import Dict, List

from git_worktree_assistant.exceptions import CommandError
from git_worktree_assistant.models.selection import WorktreePlan
from git_worktree_assistant.models.worktree import Worktree
from git_worktree_assistant.services.git.runner import ProcessRunner
from git_worktree_assistant.logging_config import get_logger

logger = get_logger(__name__)


def _short_branch_name(full_ref: str) -> str:
    """Drop the first two path segments (``refs/heads/feat/x`` -> ``feat/x``)."""
    parts = full_ref.split("/", 2)
    return parts[2] if len(parts) == 3 else full_ref


def _finish_block(block: Dict[str, str], worktrees: List[Worktree]) -> None:
    path = block.get("path")
    if not path:
        if block:
            logger.debug(f"Skipping worktree block without a path: {block}")
        return
    worktrees.append(
        Worktree(path=path, head=block.get("HEAD"), branch=block.get("branch"))
    )


def parse_worktree_porcelain(output: str) -> List[Worktree]:
    """Parse `git worktree list --porcelain` output.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name
        (blank line between worktrees)

    Detached worktrees have no branch line and are kept with branch=None.
    """
    worktrees: List[Worktree] = []
    current: Dict[str, str] = {}

    for raw_line in output.split("\n"):
        line = raw_line.strip()

        if not line:
            # Empty line marks end of worktree entry
            _finish_block(current, worktrees)
            current = {}
            continue

        if line.startswith("worktree "):
            current["path"] = line[len("worktree "):].strip()
        elif line.startswith("HEAD "):
            current["HEAD"] = line[len("HEAD "):].strip()
        elif line.startswith("branch "):
            current["branch"] = _short_branch_name(line[len("branch "):].strip())

    # Last entry when output had no trailing blank line
    _finish_block(current, worktrees)
    return worktrees


class WorktreeService:
    """Service for listing, adding and removing git worktrees."""

    def __init__(self, runner: ProcessRunner):
        """Initialize the worktree service.

        Args:
            runner: Process runner used for every git call
        """
        self.runner = runner

    def list_worktrees(self, cwd: str) -> List[Worktree]:
        """Get all worktrees of the repository containing ``cwd``.

        Raises:
            CommandError: If git cannot list worktrees
        """
        output = self.runner.run_captured(["worktree", "list", "--porcelain"], cwd)
        worktrees = parse_worktree_porcelain(output)

        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees

    def _execute(self, plan: WorktreePlan, cwd: str) -> None:
        result = self.runner.run(plan.argv, cwd)
        if not result.ok:
            error = CommandError(["git", *plan.argv], result.exit_code, result.stderr)
            logger.error(f"git worktree {plan.subcommand} failed for {plan.path}: {error}")
            raise error

    def add_worktree(self, plan: WorktreePlan, cwd: str) -> None:
        """Run a planned `git worktree add`.

        A failed add is reported as-is; files git already created are left alone.

        Raises:
            CommandError: With git's stderr when the add fails
        """
        self._execute(plan, cwd)
        logger.info(f"Added worktree at {plan.path}")

    def remove_worktree(self, plan: WorktreePlan, cwd: str) -> None:
        """Run a planned `git worktree remove`.

        Dirty or locked worktrees make git fail; that failure is not retried.

        Raises:
            CommandError: With git's stderr when the removal fails
        """
        self._execute(plan, cwd)
        logger.info(f"Removed worktree at {plan.path}")
