"""Utility functions for git-worktree-assistant."""

from .threading import is_free_threading_enabled, get_worker_count

__all__ = [
    "is_free_threading_enabled",
    "get_worker_count",
]
