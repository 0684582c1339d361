"""Command-line entry point for git-worktree-assistant"""

import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console

from git_worktree_assistant.cli.args import parse_args
from git_worktree_assistant.config import Config
from git_worktree_assistant.constants import DEFAULT_CONFIG_FILE
from git_worktree_assistant.core import WorktreeAssistant
from git_worktree_assistant.exceptions import (
    CommandError,
    ValidationError,
    WorktreeAssistantError,
)
from git_worktree_assistant.logging_config import get_log_file, get_logger, setup_logging
from git_worktree_assistant.services.display_service import DisplayService
from git_worktree_assistant.ui.console import ConsoleChooser

# Messages go to stderr; stdout only carries paths for the calling shell
console = Console(stderr=True)
logger = get_logger(__name__)


def load_config(parsed_args) -> Config:
    """Config file (explicit or default) with command-line flags on top."""
    if parsed_args.config:
        config = Config.from_file(parsed_args.config)
    else:
        default_file = Path.home() / DEFAULT_CONFIG_FILE
        config = Config.from_file(default_file) if default_file.is_file() else Config()

    overrides = {
        "verbose": parsed_args.verbose or config.verbose,
        "debug": parsed_args.debug or config.debug,
        "interactive": config.interactive and not parsed_args.no_interactive,
    }
    if getattr(parsed_args, "worktree_dir", None):
        overrides["default_worktree_directory"] = parsed_args.worktree_dir
    return Config.from_dict({**config.to_dict(), **overrides})


def make_chooser(use_interactive: bool):
    if use_interactive:
        from git_worktree_assistant.ui.picker import TextualChooser
        return TextualChooser()
    return ConsoleChooser(console)


def _print_target(target: Optional[str]) -> None:
    if target:
        print(target)


def run_command(parsed_args, assistant: WorktreeAssistant, chooser) -> int:
    command = parsed_args.command

    if command == "add":
        outcome = assistant.add_worktree(chooser, fetch=parsed_args.fetch)
        if outcome.open_target and not (outcome.new_window and assistant.config.open_command):
            _print_target(outcome.open_target)
        return 0

    if command == "switch":
        _print_target(assistant.switch_to_worktree(chooser))
        return 0

    if command == "open":
        target = assistant.open_worktree(chooser)
        if not assistant.config.open_command:
            _print_target(target)
        return 0

    if command == "remove":
        assistant.remove_worktree(chooser, parsed_args.path)
        return 0

    if command == "list":
        display = DisplayService()
        if parsed_args.worktrees:
            display.display_worktrees(assistant.list_worktrees())
        else:
            display.display_branch_table(assistant.get_branches())
        return 0

    raise ValueError(f"Unknown command: {command}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)
    debug = parsed_args.debug
    try:
        config = load_config(parsed_args)
        debug = config.debug

        # The full-screen picker needs a real terminal on both ends
        use_interactive = config.interactive and sys.stdin.isatty() and sys.stdout.isatty()
        setup_logging(verbose=config.verbose, debug=config.debug, tui_mode=use_interactive)

        if config.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print(f"[dim]Logging to {get_log_file()}[/dim]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")

        assistant = WorktreeAssistant(parsed_args.directory, config, tui_mode=use_interactive)
        return run_command(parsed_args, assistant, make_chooser(use_interactive))
    except (KeyboardInterrupt, EOFError):
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except ValidationError as e:
        console.print(f"[red]{e}[/red]")
        return 1
    except CommandError as e:
        # git's own message is the useful part
        console.print(f"[red]Command failed! {e.stderr or e}[/red]")
        return 1
    except (WorktreeAssistantError, ValueError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        if debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
