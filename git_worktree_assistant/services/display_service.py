"""Display service for the reconciled branch view"""
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from git_worktree_assistant.constants import COLUMNS
from git_worktree_assistant.formatters import format_date, format_sync, time_ago
from git_worktree_assistant.models.ref import GitRef
from git_worktree_assistant.models.worktree import Worktree


class DisplayService:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def _row(self, ref: GitRef) -> List[str]:
        name = f"{ref.name} *" if ref.is_head else ref.name
        age = time_ago(ref.date) if ref.date else format_date(ref.date)
        return [
            name,
            ref.source.value,
            format_sync(ref),
            ref.upstream or "",
            ref.id,
            age,
            ref.worktree.path if ref.worktree else "",
        ]

    def display_branch_table(self, branches: List[GitRef]) -> None:
        """Table of branches, one row per logical branch."""
        table = Table()
        for col in COLUMNS:
            table.add_column(col.label, no_wrap=col.no_wrap)

        for ref in branches:
            style = "cyan" if ref.worktree else None
            table.add_row(*self._row(ref), style=style)

        self.console.print(table)

    def display_worktrees(self, worktrees: List[Worktree]) -> None:
        for worktree in worktrees:
            self.console.print(str(worktree))
