"""Branch reconciliation: pairing, deduplication and worktree occupancy."""

from typing import Dict, Iterable, List, Optional, Tuple

from git_worktree_assistant.models.ref import GitRef
from git_worktree_assistant.models.worktree import Worktree
from git_worktree_assistant.logging_config import get_logger

logger = get_logger(__name__)


class RefIndex:
    """Name and upstream lookups over one listing, built once per pass.

    When two refs share a name the first one listed wins, locals before remotes.
    """

    def __init__(self, refs: Iterable[GitRef]):
        self.local_by_name: Dict[str, GitRef] = {}
        self.remote_by_name: Dict[str, GitRef] = {}
        self.by_upstream: Dict[str, List[GitRef]] = {}

        for ref in refs:
            names = self.local_by_name if ref.is_local else self.remote_by_name
            names.setdefault(ref.name, ref)
            if ref.upstream:
                self.by_upstream.setdefault(ref.upstream, []).append(ref)

    def is_tracked(self, name: str) -> bool:
        """True if some ref declares ``name`` as its upstream."""
        return name in self.by_upstream

    def tracking_ref(self, name: str) -> Optional[GitRef]:
        """First ref declaring ``name`` as its upstream."""
        declaring = self.by_upstream.get(name)
        return declaring[0] if declaring else None


def attach_worktrees(refs: Iterable[GitRef], worktrees: Iterable[Worktree]) -> None:
    """Point each local ref at the worktree that has it checked out.

    Detached worktrees carry no branch and attach to nothing.
    """
    by_branch: Dict[str, Worktree] = {}
    for worktree in worktrees:
        if worktree.branch:
            by_branch.setdefault(worktree.branch, worktree)

    for ref in refs:
        if ref.is_local:
            ref.worktree = by_branch.get(ref.name)


def linked_pairs(refs: List[GitRef], index: Optional[RefIndex] = None) -> List[Tuple[GitRef, GitRef]]:
    """(local, remote) pairs where the local ref's upstream is a listed remote ref."""
    index = index or RefIndex(refs)
    pairs = []
    for ref in refs:
        if not ref.is_local or not ref.upstream:
            continue
        remote = index.remote_by_name.get(ref.upstream)
        if remote is None:
            logger.debug(f"Upstream {ref.upstream} of {ref.name} is not a listed remote ref")
            continue
        pairs.append((ref, remote))
    return pairs


def reconcile(refs: List[GitRef], worktrees: Iterable[Worktree] = ()) -> List[GitRef]:
    """Deduplicated, user-facing branch list.

    A ref is shown if it tracks an upstream, or if nothing tracks it. A
    tracked remote therefore folds into its local branch, which carries the
    divergence counts. Remaining name clashes keep the local ref.
    """
    attach_worktrees(refs, worktrees)
    index = RefIndex(refs)

    result: List[GitRef] = []
    position: Dict[str, int] = {}
    for ref in refs:
        if not ref.upstream and index.is_tracked(ref.name):
            continue

        if ref.name not in position:
            position[ref.name] = len(result)
            result.append(ref)
        elif ref.is_local and result[position[ref.name]].is_remote:
            result[position[ref.name]] = ref

    return result


def base_candidates(refs: List[GitRef]) -> List[GitRef]:
    """Refs worth offering as a start point, the HEAD branch first.

    Remote refs identical to the local branch tracking them add nothing and
    are left out; diverged remotes stay so they can be picked as a base.
    """
    index = RefIndex(refs)
    candidates = []
    for ref in refs:
        if not ref.upstream:
            tracking = index.tracking_ref(ref.name)
            if tracking is not None and tracking.id == ref.id:
                continue
        candidates.append(ref)
    return head_first(candidates)


def head_first(refs: List[GitRef]) -> List[GitRef]:
    """Move the currently checked-out branch to the front, keeping listing order otherwise."""
    head = next((ref for ref in refs if ref.is_head), None)
    if head is None:
        return list(refs)
    return [head] + [ref for ref in refs if ref is not head]
