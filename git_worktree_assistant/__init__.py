"""
git-worktree-assistant - Pick a branch, get a worktree
"""

from .__version__ import __version__
from .core import WorktreeAssistant
from .cli.main import main

__all__ = ["WorktreeAssistant", "main", "__version__"]
