"""Core functionality for git-worktree-assistant"""

import os
from concurrent.futures import ThreadPoolExecutor
from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import List, Optional, Union

from rich.console import Console

from git_worktree_assistant.config import Config
from git_worktree_assistant.constants import (
    CHOICE_CANCEL,
    CHOICE_FINISH,
    CHOICE_NO,
    CHOICE_OPEN,
    CHOICE_SWITCH,
    CHOICE_YES,
)
from git_worktree_assistant.formatters import (
    base_options,
    destination_options,
    literal_options,
    make_worktree_option,
)
from git_worktree_assistant.logging_config import get_logger
from git_worktree_assistant.models.option import OptionAction
from git_worktree_assistant.models.ref import GitRef
from git_worktree_assistant.models.selection import (
    DestinationKind,
    PromptStep,
    WorktreeSelection,
)
from git_worktree_assistant.models.worktree import Worktree
from git_worktree_assistant.services.git import (
    BranchValidator,
    DivergenceCalculator,
    ProcessRunner,
    RefService,
    RepositoryLocator,
    WorktreeDirectoryCache,
    WorktreeService,
)
from git_worktree_assistant.services.planner import (
    WorktreePlanner,
    next_required_input,
    suggested_path_for,
)
from git_worktree_assistant.services.reconciler import (
    attach_worktrees,
    base_candidates,
    linked_pairs,
    reconcile,
)
from git_worktree_assistant.services.workspace import WorkspaceOpener
from git_worktree_assistant.ui.base import Chooser

console = Console(stderr=True)
logger = get_logger(__name__)


@dataclass
class RepositoryState:
    """Refs and worktrees from one query cycle, with worktrees and divergence attached."""
    refs: List[GitRef] = field(default_factory=list)
    worktrees: List[Worktree] = field(default_factory=list)

    @property
    def branches(self) -> List[GitRef]:
        """Deduplicated branch view for pickers and listings."""
        return reconcile(self.refs, self.worktrees)


@dataclass
class AddOutcome:
    """How an add-worktree session ended."""
    path: Optional[str] = None  # New or already existing worktree; None if cancelled
    created: bool = False
    open_target: Optional[str] = None  # Folder or workspace file the user chose to switch to or open
    new_window: bool = False


class WorktreeAssistant:
    """Main class for adding, switching to, opening and removing worktrees."""

    def __init__(
        self,
        directory: str,
        config: Union[Config, dict],
        runner: Optional[ProcessRunner] = None,
        cache: Optional[WorktreeDirectoryCache] = None,
        opener: Optional[WorkspaceOpener] = None,
        tui_mode: bool = False,
    ):
        """Initialize WorktreeAssistant.

        Args:
            directory: Directory inside the repository to work from
            config: Configuration dict or Config object
            runner: Process runner for git calls
            cache: Shared cache of directories known to be inside a work tree
            opener: Opens worktrees after switching or adding
            tui_mode: If True, suppresses Rich console output (the picker owns the screen)

        Raises:
            NotInRepositoryError: If ``directory`` is not inside a git work tree
        """
        if isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config
        self.tui_mode = tui_mode

        self.runner = runner or ProcessRunner()
        self.locator = RepositoryLocator(self.runner, cache)
        self.cwd = self.locator.working_directory(directory)

        self.ref_service = RefService(self.runner)
        self.worktree_service = WorktreeService(self.runner)
        self.divergence = DivergenceCalculator(self.runner, self.config.workers)
        self.planner = WorktreePlanner(BranchValidator(self.runner), self.cwd)
        self.opener = opener or WorkspaceOpener(self.config)

        logger.debug(f"Worktree assistant initialized in {self.cwd}")

    def _console_print(self, *args, **kwargs):
        """Print to console only if not in TUI mode."""
        if not self.tui_mode:
            console.print(*args, **kwargs)

    def _absolute(self, path: str) -> str:
        """Typed paths are relative to the directory git runs in, not the process cwd."""
        path = path.strip()
        if not path:
            return path
        return os.path.normpath(os.path.join(self.cwd, os.path.expanduser(path)))

    def _progress(self, message: str):
        """Spinner around a long-running git call; the call itself is never interrupted."""
        if self.tui_mode:
            return nullcontext()
        return console.status(message)

    def fetch(self) -> bool:
        """Run `git fetch --all`; a failed fetch is reported but does not stop the session."""
        with self._progress("Fetching..."):
            result = self.runner.run(["fetch", "--all"], self.cwd)
        if not result.ok:
            logger.warning(f"git fetch --all failed (exit {result.exit_code}): {result.stderr.strip()}")
            return False
        return True

    def load_state(self) -> RepositoryState:
        """Collect refs and worktrees concurrently, then attach worktrees and divergence.

        Raises:
            CommandError: If a listing fails
            RefParseError: If the ref listing is malformed
        """
        with ThreadPoolExecutor(max_workers=2) as executor:
            refs_future = executor.submit(self.ref_service.list_refs, self.cwd)
            worktrees_future = executor.submit(self.worktree_service.list_worktrees, self.cwd)
            refs = refs_future.result()
            worktrees = worktrees_future.result()

        attach_worktrees(refs, worktrees)
        self.divergence.annotate(linked_pairs(refs), self.cwd)
        return RepositoryState(refs=refs, worktrees=worktrees)

    def get_branches(self) -> List[GitRef]:
        return self.load_state().branches

    def list_worktrees(self) -> List[Worktree]:
        return self.worktree_service.list_worktrees(self.cwd)

    def default_parent_directory(self) -> str:
        """Configured parent for new worktrees; relative values hang off the main repo root."""
        parent = self.config.default_worktree_directory
        if parent and not os.path.isabs(parent):
            parent = os.path.join(self.locator.main_root(self.cwd), parent)
        return parent

    def choose_worktree(self, chooser: Chooser) -> Optional[Worktree]:
        worktrees = self.list_worktrees()
        choice = chooser.choose(
            "Which worktree?",
            [make_worktree_option(wt) for wt in worktrees],
            placeholder="Choose a worktree.",
        )
        return choice.worktree if choice else None

    def _offer_open(self, chooser: Chooser, outcome: AddOutcome, title: str, first_choice: str) -> AddOutcome:
        choice = chooser.choose(title, literal_options([first_choice, CHOICE_SWITCH, CHOICE_OPEN]))
        if choice is None or choice.value == first_choice:
            return outcome
        if choice.value == CHOICE_SWITCH:
            outcome.open_target = self.opener.switch(outcome.path)
        else:
            outcome.open_target = self.opener.open_in_new_window(outcome.path)
            outcome.new_window = True
        return outcome

    def add_worktree(self, chooser: Chooser, fetch: Optional[bool] = None) -> AddOutcome:
        """Walk the user through adding a worktree.

        Args:
            chooser: Prompts for every missing answer
            fetch: Answer to the fetch question, or None to use config / ask

        Returns:
            AddOutcome; its path is None if the user cancelled, and created is
            False when the branch already had a worktree

        Raises:
            ValidationError: A typed branch name or commit was rejected
            CommandError: git failed to list refs or to add the worktree
        """
        selection = WorktreeSelection(fetch=fetch if fetch is not None else self.config.fetch)

        if next_required_input(selection) is PromptStep.FETCH:
            choice = chooser.choose(
                "Do you want to fetch info on remote branches now?",
                literal_options([CHOICE_YES, CHOICE_NO]),
                placeholder="Fetch? Yes / No (Your working tree will not be affected)",
            )
            if choice is None:
                return AddOutcome()
            selection.fetch = choice.value == CHOICE_YES

        if selection.fetch:
            self.fetch()
        state = self.load_state()

        while True:
            step = next_required_input(selection)
            logger.debug(f"Next step: {step.value}")

            if step is PromptStep.DESTINATION:
                choice = chooser.choose(
                    "Which branch do you want to check out?",
                    destination_options(state.branches),
                    placeholder="Choose a branch to work on or create a new one.",
                )
                if choice is None:
                    return AddOutcome()
                if choice.action is OptionAction.NEW:
                    selection.kind = DestinationKind.NEW
                elif choice.action is OptionAction.DETACHED:
                    selection.kind = DestinationKind.DETACHED
                else:
                    selection.kind = DestinationKind.EXISTING
                    selection.ref = choice.ref

            elif step is PromptStep.ALREADY_CHECKED_OUT:
                return self._offer_open(
                    chooser,
                    AddOutcome(path=selection.ref.worktree.path),
                    "A worktree for this branch already exists! Do you want to open it?",
                    CHOICE_CANCEL,
                )

            elif step is PromptStep.BASE:
                choice = chooser.choose(
                    "Which branch do you want to branch off of?",
                    base_options(base_candidates(state.refs)),
                    placeholder="Choose a branch.",
                )
                if choice is None:
                    return AddOutcome()
                if choice.action is OptionAction.CUSTOM_COMMIT:
                    selection.wants_custom_commit = True
                else:
                    selection.base_ref = choice.ref

            elif step is PromptStep.COMMIT:
                commit = chooser.ask(
                    "Which commit do you want to base the worktree on?",
                    "Type in the commit hash.",
                )
                if not commit:
                    return AddOutcome()
                selection.base_commit = self.planner.require_valid_commit(commit)

            elif step is PromptStep.BRANCH_NAME:
                name = chooser.ask(
                    "What will the new branch be called?",
                    "Type in the name of the new branch.",
                )
                if not name:
                    return AddOutcome()
                selection.branch_name = self.planner.require_valid_branch_name(name)

            elif step is PromptStep.PATH:
                path = chooser.ask(
                    "Where will the worktree go?",
                    "Type in the directory for the worktree.",
                    value=suggested_path_for(selection, self.default_parent_directory()),
                )
                if not path:
                    return AddOutcome()
                selection.path = self._absolute(path)

            else:
                break

        plan = self.planner.plan_add(selection)
        with self._progress("Adding Worktree..."):
            self.worktree_service.add_worktree(plan, self.cwd)
        self._console_print(f"[green]Worktree '{plan.path}' added successfully![/green]")

        return self._offer_open(
            chooser,
            AddOutcome(path=plan.path, created=True),
            "Worktree added successfully! Do you want to open it?",
            CHOICE_FINISH,
        )

    def switch_to_worktree(self, chooser: Chooser) -> Optional[str]:
        """Pick a worktree and return the target to switch to."""
        worktree = self.choose_worktree(chooser)
        return self.opener.switch(worktree.path if worktree else None)

    def open_worktree(self, chooser: Chooser) -> Optional[str]:
        """Pick a worktree and open it in a new window."""
        worktree = self.choose_worktree(chooser)
        return self.opener.open_in_new_window(worktree.path if worktree else None)

    def remove_worktree(self, chooser: Chooser, path: Optional[str] = None) -> Optional[str]:
        """Remove the given worktree, or one the user picks.

        Returns:
            The removed path, or None if the user cancelled

        Raises:
            CommandError: git refused, e.g. uncommitted changes, a lock, or an unknown path
        """
        if path is None:
            worktree = self.choose_worktree(chooser)
            if worktree is None:
                return None
            path = worktree.path

        plan = self.planner.plan_remove(self._absolute(path))
        with self._progress("Removing Worktree..."):
            self.worktree_service.remove_worktree(plan, self.cwd)
        self._console_print(f"[green]Worktree '{plan.path}' removed successfully![/green]")
        return plan.path
