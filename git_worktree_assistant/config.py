"""Configuration handling for git-worktree-assistant"""

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Union


@dataclass
class Config:
    """Configuration for git-worktree-assistant with validation."""

    # Worktree placement
    default_worktree_directory: str = ""  # Relative values resolve against the main repo root
    workspace_file_location: str = ""  # Workspace file to prefer over the bare folder

    # Prompt defaults
    fetch: Optional[bool] = None  # None = ask every time

    # Opening worktrees in a new window, e.g. "code --new-window"
    open_command: Optional[str] = None

    # Execution modes
    interactive: bool = True
    verbose: bool = False
    debug: bool = False
    workers: Optional[int] = None  # Parallel git calls (None = auto-detect)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_default_worktree_directory()
        self._validate_workspace_file_location()
        self._validate_fetch()
        self._validate_open_command()
        self._validate_workers()

    def _validate_default_worktree_directory(self):
        """Normalize default_worktree_directory."""
        if not isinstance(self.default_worktree_directory, str):
            raise ValueError("default_worktree_directory must be a string")
        self.default_worktree_directory = self.default_worktree_directory.strip()

    def _validate_workspace_file_location(self):
        """Workspace file must stay inside the worktree."""
        if not isinstance(self.workspace_file_location, str):
            raise ValueError("workspace_file_location must be a string")
        self.workspace_file_location = self.workspace_file_location.strip()
        if Path(self.workspace_file_location).is_absolute():
            raise ValueError(
                f"workspace_file_location must be relative, got '{self.workspace_file_location}'"
            )

    def _validate_fetch(self):
        """Validate fetch is a bool or None."""
        if self.fetch is not None and not isinstance(self.fetch, bool):
            raise ValueError(f"fetch must be true, false or null, got {self.fetch!r}")

    def _validate_open_command(self):
        """Treat a blank open_command as unset."""
        if self.open_command is not None and not self.open_command.strip():
            self.open_command = None

    def _validate_workers(self):
        """Validate workers is positive."""
        if self.workers is not None and self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")

    def to_dict(self) -> dict:
        """Convert config to a plain dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Config":
        """Load configuration from a JSON file.

        Raises:
            ValueError: If the file is not a JSON object or holds invalid values
        """
        with open(path, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a JSON object")
        return cls.from_dict(data)
