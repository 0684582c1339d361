"""Threading utilities for sizing pools of concurrent git calls."""

import os
import sys
from typing import Optional


def is_free_threading_enabled() -> bool:
    """Detect if Python is running with the GIL disabled (3.13+ free-threading)."""
    is_gil_enabled = getattr(sys, "_is_gil_enabled", None)
    return is_gil_enabled is not None and not is_gil_enabled()


def get_worker_count(task_count: int, user_specified: Optional[int] = None) -> int:
    """Pick a thread pool size for ``task_count`` independent git calls.

    Args:
        task_count: Number of tasks about to be submitted
        user_specified: Explicit worker count from config, if any

    Returns:
        Worker count, at least 1 and never more than there are tasks
    """
    if user_specified is not None and user_specified > 0:
        limit = user_specified
    else:
        cpu_count = os.cpu_count() or 1
        # git calls are I/O-bound; free-threading lets more of them overlap
        if is_free_threading_enabled():
            limit = min(64, cpu_count * 2)
        else:
            limit = min(32, cpu_count + 4)

    return max(1, min(limit, task_count))
