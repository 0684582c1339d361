"""Ahead/behind divergence between local branches and their upstreams."""

from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from git_worktree_assistant.constants import LOCAL_REF_NAMESPACE, REMOTE_REF_NAMESPACE
from git_worktree_assistant.exceptions import CommandError
from git_worktree_assistant.models.ref import GitRef
from git_worktree_assistant.services.git.runner import ProcessRunner
from git_worktree_assistant.utils.threading import get_worker_count
from git_worktree_assistant.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Divergence:
    """Commits only on the local side (ahead) and only on the remote side (behind)."""
    ahead: int
    behind: int


class DivergenceCalculator:
    """Counts commits ahead of and behind upstream with `git rev-list`."""

    def __init__(self, runner: ProcessRunner, workers: Optional[int] = None):
        self.runner = runner
        self.workers = workers

    def _count(self, side: str, local: GitRef, remote: GitRef, cwd: str) -> int:
        # Qualified names; a tag called like the branch would win otherwise
        symmetric_range = f"{LOCAL_REF_NAMESPACE}/{local.name}...{REMOTE_REF_NAMESPACE}/{remote.name}"
        output = self.runner.run_captured(["rev-list", side, "--count", symmetric_range], cwd)
        return int(output.strip())

    def count_ahead(self, local: GitRef, remote: GitRef, cwd: str) -> int:
        return self._count("--left-only", local, remote, cwd)

    def count_behind(self, local: GitRef, remote: GitRef, cwd: str) -> int:
        return self._count("--right-only", local, remote, cwd)

    def compute_divergence(self, local: GitRef, remote: GitRef, cwd: str) -> Divergence:
        """Divergence of one pair; identical ids need no git call.

        Raises:
            CommandError: If a count fails
        """
        if local.id == remote.id:
            return Divergence(0, 0)
        return Divergence(
            ahead=self.count_ahead(local, remote, cwd),
            behind=self.count_behind(local, remote, cwd),
        )

    def annotate(self, pairs: Sequence[Tuple[GitRef, GitRef]], cwd: str) -> None:
        """Set symmetric ahead/behind on every (local, remote) pair.

        All counts of all pairs run at once and are joined before anything is
        written. A pair whose count fails is logged and left without data.
        A remote tracked by several locals takes its counts from the first.
        """
        results: Dict[int, Divergence] = {}
        pending: List[Tuple[int, GitRef, GitRef]] = []
        for i, (local, remote) in enumerate(pairs):
            if local.id == remote.id:
                results[i] = Divergence(0, 0)
            else:
                pending.append((i, local, remote))

        if pending:
            results.update(self._count_concurrently(pending, cwd))

        annotated_remotes = set()
        for i, (local, remote) in enumerate(pairs):
            divergence = results.get(i)
            if divergence is None:
                continue
            local.set_divergence(divergence.ahead, divergence.behind)
            if id(remote) not in annotated_remotes:
                remote.set_divergence(divergence.behind, divergence.ahead)
                annotated_remotes.add(id(remote))

    def _count_concurrently(
        self, pending: List[Tuple[int, GitRef, GitRef]], cwd: str
    ) -> Dict[int, Divergence]:
        futures: Dict[int, Tuple[Future, Future]] = {}
        max_workers = get_worker_count(len(pending) * 2, self.workers)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            for i, local, remote in pending:
                futures[i] = (
                    executor.submit(self.count_ahead, local, remote, cwd),
                    executor.submit(self.count_behind, local, remote, cwd),
                )
            wait([f for pair in futures.values() for f in pair])

        results: Dict[int, Divergence] = {}
        for i, local, remote in pending:
            ahead_future, behind_future = futures[i]
            try:
                results[i] = Divergence(ahead_future.result(), behind_future.result())
            except (CommandError, ValueError) as e:
                logger.warning(f"Could not compare {local.name} with {remote.name}: {e}")
        return results
