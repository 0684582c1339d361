"""Opening worktrees: workspace file resolution and the configured open command."""

import os
import shlex
import subprocess
from typing import Optional

from git_worktree_assistant.config import Config
from git_worktree_assistant.logging_config import get_logger

logger = get_logger(__name__)


class WorkspaceOpener:
    """Hands a worktree to whatever opens it."""

    def __init__(self, config: Config):
        self.config = config

    def resolve_target(self, path: Optional[str]) -> Optional[str]:
        """The configured workspace file inside ``path`` if it exists, else ``path``."""
        if not path or not path.strip():
            return None

        location = self.config.workspace_file_location
        if location:
            workspace_file = os.path.join(path, location)
            if os.path.exists(workspace_file):
                return workspace_file
            logger.debug(f"No workspace file at {workspace_file}, opening folder")
        return path

    def switch(self, path: Optional[str]) -> Optional[str]:
        """Target the calling shell or editor should switch to."""
        return self.resolve_target(path)

    def open_in_new_window(self, path: Optional[str]) -> Optional[str]:
        """Launch ``open_command`` on the target without waiting for it.

        Without an open command the target is only returned, for the caller to print.
        """
        target = self.resolve_target(path)
        if target is None or not self.config.open_command:
            return target

        command = shlex.split(self.config.open_command) + [target]
        logger.info(f"Opening {target} with {command[0]}")
        subprocess.Popen(command, stdin=subprocess.DEVNULL, stdout=subprocess.DEVNULL)
        return target
