"""Repository location for git-worktree-assistant."""

import os
from threading import Lock
from typing import Optional, Set

from git_worktree_assistant.exceptions import CommandError, NotInRepositoryError
from git_worktree_assistant.services.git.runner import ProcessRunner
from git_worktree_assistant.logging_config import get_logger

logger = get_logger(__name__)


class WorktreeDirectoryCache:
    """Directories already confirmed to be inside a git work tree.

    Append-only and safe for concurrent check-or-add. One instance usually
    lives as long as the process; tests hand a fresh one to each locator.
    """

    def __init__(self):
        self._directories: Set[str] = set()
        self._lock = Lock()

    def __contains__(self, directory: str) -> bool:
        with self._lock:
            return directory in self._directories

    def __len__(self) -> int:
        with self._lock:
            return len(self._directories)

    def add(self, directory: str) -> None:
        with self._lock:
            self._directories.add(directory)


class RepositoryLocator:
    """Finds the work tree and main repository root for a directory."""

    def __init__(self, runner: ProcessRunner, cache: Optional[WorktreeDirectoryCache] = None):
        self.runner = runner
        self.cache = cache if cache is not None else WorktreeDirectoryCache()

    def is_inside_worktree(self, directory: str) -> bool:
        """Check `git rev-parse --is-inside-work-tree`, remembering positive answers."""
        directory = os.path.abspath(directory)
        if directory in self.cache:
            return True

        try:
            output = self.runner.run_captured(["rev-parse", "--is-inside-work-tree"], directory)
        except CommandError as e:
            logger.debug(f"{directory} is not inside a work tree: {e}")
            return False

        if output.strip() == "true":
            self.cache.add(directory)
            return True
        return False

    def working_directory(self, directory: str) -> str:
        """Return ``directory`` as an absolute path if it is inside a work tree.

        Raises:
            NotInRepositoryError: If it is not
        """
        if not self.is_inside_worktree(directory):
            raise NotInRepositoryError(directory)
        return os.path.abspath(directory)

    def common_dir(self, directory: str) -> str:
        """Absolute git directory shared by all worktrees of the repository.

        Raises:
            NotInRepositoryError: If git cannot resolve it
        """
        try:
            output = self.runner.run_captured(
                ["rev-parse", "--path-format=absolute", "--git-common-dir"], directory
            )
        except CommandError as e:
            logger.debug(f"Could not resolve git common dir for {directory}: {e}")
            raise NotInRepositoryError(directory) from e
        return output.strip()

    def main_root(self, directory: str) -> str:
        """Root of the main working copy, whichever worktree ``directory`` is in.

        Bare repositories have no working copy; their git directory is returned.
        """
        common_dir = self.common_dir(directory)
        if os.path.basename(common_dir.rstrip(os.sep)) == ".git":
            return os.path.dirname(common_dir.rstrip(os.sep))
        return common_dir
