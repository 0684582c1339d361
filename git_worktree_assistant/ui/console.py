"""Plain prompt chooser built on rich, for non-interactive terminals and scripts."""

from typing import List, Optional, Sequence, Tuple

from rich.console import Console
from rich.prompt import Prompt
from rich.text import Text

from git_worktree_assistant.models.option import PickableOption


class ConsoleChooser:
    """Numbered menus and line prompts on stderr, keeping stdout for results."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)

    def _render_option(self, number: int, option: PickableOption) -> Text:
        text = Text.assemble((f"{number:>3}. ", "bold"), (option.label, "cyan"))
        if option.description:
            text.append(f"  {option.description}", style="dim")
        if option.detail:
            text.append(f"\n       {option.detail}", style="italic dim")
        return text

    def _read(self, prompt: str, default: str = "") -> str:
        """One stripped line; closed or exhausted stdin reads as an empty answer."""
        try:
            answer = Prompt.ask(
                prompt,
                console=self.console,
                default=default,
                show_default=bool(default),
            )
        except EOFError:
            self.console.print()
            return ""
        return (answer or "").strip()

    def choose(
        self, title: str, options: Sequence[PickableOption], placeholder: str = ""
    ) -> Optional[PickableOption]:
        """Print a numbered menu and read a number; empty input cancels."""
        numbered: List[Tuple[int, PickableOption]] = []
        self.console.print(f"[bold]{title}[/bold]")
        for option in options:
            if option.is_separator:
                self.console.rule(option.label, style="dim")
                continue
            numbered.append((len(numbered) + 1, option))
            self.console.print(self._render_option(len(numbered), option))

        if not numbered:
            return None

        while True:
            answer = self._read(placeholder or "Choose a number (empty to cancel)")
            if not answer:
                return None
            if answer.isdigit() and 1 <= int(answer) <= len(numbered):
                return numbered[int(answer) - 1][1]
            self.console.print(f"[red]Please enter a number between 1 and {len(numbered)}[/red]")

    def ask(self, title: str, prompt: str = "", value: str = "") -> Optional[str]:
        """Read one line, pre-filled with ``value``; empty input cancels."""
        self.console.print(f"[bold]{title}[/bold]")
        return self._read(prompt or title, value) or None
