"""Command-line argument parsing for git-worktree-assistant."""

import argparse
from typing import Optional, Sequence

from git_worktree_assistant.__version__ import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-worktree-assistant",
        description="Add, switch to, open and remove git worktrees",
        epilog="Settings are read from ~/.git-worktree-assistant.json when it exists.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "--version", action="version", version=f"git-worktree-assistant {__version__}"
    )
    parser.add_argument(
        "--no-interactive",
        action="store_true",
        help="Use plain numbered prompts instead of the full-screen picker",
    )
    parser.add_argument("--config", metavar="PATH", help="Path to a JSON config file")
    parser.add_argument(
        "-C",
        dest="directory",
        metavar="DIR",
        default=".",
        help="Run as if started in DIR (default: current directory)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    add_parser = subparsers.add_parser("add", help="Add a worktree for a branch, a new branch or a commit")
    fetch_group = add_parser.add_mutually_exclusive_group()
    fetch_group.add_argument(
        "--fetch",
        dest="fetch",
        action="store_const",
        const=True,
        default=None,
        help="Run 'git fetch --all' first without asking",
    )
    fetch_group.add_argument(
        "--no-fetch",
        dest="fetch",
        action="store_const",
        const=False,
        help="Skip fetching without asking",
    )
    add_parser.add_argument(
        "--worktree-dir",
        metavar="DIR",
        help="Parent directory for the suggested worktree path",
    )

    subparsers.add_parser("switch", help="Pick a worktree and print where to switch to")
    subparsers.add_parser("open", help="Pick a worktree and open it in a new window")

    remove_parser = subparsers.add_parser("remove", help="Remove a worktree")
    remove_parser.add_argument("path", nargs="?", help="Worktree path (picked interactively if omitted)")

    list_parser = subparsers.add_parser("list", help="Show branches with divergence and worktrees")
    list_parser.add_argument(
        "--worktrees", action="store_true", help="List worktrees instead of branches"
    )

    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
