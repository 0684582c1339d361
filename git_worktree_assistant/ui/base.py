"""The prompting capability the assistant needs from a user interface."""

from typing import Optional, Protocol, Sequence

from git_worktree_assistant.models.option import PickableOption


class Chooser(Protocol):
    """Presents choices and questions; ``None`` always means the user cancelled."""

    def choose(
        self, title: str, options: Sequence[PickableOption], placeholder: str = ""
    ) -> Optional[PickableOption]:
        ...

    def ask(self, title: str, prompt: str = "", value: str = "") -> Optional[str]:
        ...
