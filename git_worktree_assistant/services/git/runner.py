"""Process runner for git subcommands."""

from dataclasses import dataclass
from typing import List, Sequence

import git

from git_worktree_assistant.exceptions import CommandError
from git_worktree_assistant.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class CommandResult:
    """Fully buffered outcome of one git invocation."""
    exit_code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class ProcessRunner:
    """Runs git subcommands in a given working directory.

    ``run`` hands back the exit status for the caller to judge, while
    ``run_captured`` treats anything but exit 0 as a ``CommandError``.
    """

    def __init__(self, git_executable: str = "git"):
        self.git_executable = git_executable

    def _command(self, args: Sequence[str]) -> List[str]:
        return [self.git_executable, *args]

    def run(self, args: Sequence[str], cwd: str) -> CommandResult:
        """Run ``git <args>`` in ``cwd`` and wait for it to finish.

        Raises:
            CommandError: If the process could not be spawned
        """
        command = self._command(args)
        logger.debug(f"Running {' '.join(command)} in {cwd}")
        try:
            # A fresh Git per call keeps concurrent callers independent
            status, stdout, stderr = git.Git(cwd).execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
            )
        except (git.exc.GitCommandNotFound, OSError) as e:
            logger.debug(f"Could not spawn {command[0]}: {e}")
            raise CommandError(command, None, str(e)) from e

        if status != 0:
            logger.debug(f"{' '.join(command)} exited with {status}: {stderr.strip()}")
        return CommandResult(exit_code=status, stdout=stdout, stderr=stderr)

    def run_captured(self, args: Sequence[str], cwd: str) -> str:
        """Run ``git <args>`` in ``cwd`` and return its stdout.

        Raises:
            CommandError: On spawn failure or non-zero exit
        """
        result = self.run(args, cwd)
        if not result.ok:
            raise CommandError(self._command(args), result.exit_code, result.stderr)
        return result.stdout
