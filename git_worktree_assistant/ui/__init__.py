"""User interface adapters for git-worktree-assistant.

- base: the Chooser protocol the assistant prompts through
- console: rich numbered-menu chooser
- picker: textual full-screen chooser
"""

from .base import Chooser
from .console import ConsoleChooser

__all__ = ["Chooser", "ConsoleChooser"]
