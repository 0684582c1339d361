"""Formatting utilities for git-worktree-assistant.

- date: Relative and absolute date formatting
- options: Pickable option projections of refs and worktrees
"""

from .date import format_date, time_ago
from .options import (
    base_options,
    destination_options,
    format_ref_description,
    format_ref_detail,
    format_sync,
    literal_options,
    make_ref_option,
    make_worktree_option,
)

__all__ = [
    # Date
    "format_date",
    "time_ago",
    # Options
    "base_options",
    "destination_options",
    "format_ref_description",
    "format_ref_detail",
    "format_sync",
    "literal_options",
    "make_ref_option",
    "make_worktree_option",
]
