"""Shared constants for git-worktree-assistant."""

from dataclasses import dataclass
from typing import List


# Field delimiter for for-each-ref output; only the trailing subject may contain it
REF_FIELD_DELIMITER = "::"

# objectname, refname, upstream, HEAD flag, author date, author name, subject
REF_FORMAT = REF_FIELD_DELIMITER.join(
    [
        "%(objectname:short)",
        "%(refname:lstrip=2)",
        "%(upstream:lstrip=2)",
        "%(if)%(HEAD)%(then)true%(else)false%(end)",
        "%(authordate:iso8601-strict)",
        "%(authorname)",
        "%(subject)",
    ]
)
REF_FIELD_COUNT = 7

LOCAL_REF_NAMESPACE = "refs/heads"
REMOTE_REF_NAMESPACE = "refs/remotes"

DETACHED_PREFIX = "detached-"

DEFAULT_CONFIG_FILE = ".git-worktree-assistant.json"


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    no_wrap: bool = False


# Columns of the `list` table
COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("branch", "Branch", no_wrap=True),
    ColumnDefinition("source", "Source"),
    ColumnDefinition("sync", "Sync", no_wrap=True),
    ColumnDefinition("upstream", "Upstream"),
    ColumnDefinition("id", "Commit", no_wrap=True),
    ColumnDefinition("age", "Last Commit"),
    ColumnDefinition("worktree", "Worktree"),
]


# Symbol constants
SYMBOL_AHEAD = "↑"
SYMBOL_BEHIND = "↓"
SYMBOL_HEAD = "(HEAD)"
SYMBOL_HAS_WORKTREE = "already exists"


# Post-action choices offered after an add or when a worktree already exists
CHOICE_FINISH = "Finish"
CHOICE_CANCEL = "Cancel"
CHOICE_SWITCH = "Switch to worktree"
CHOICE_OPEN = "Open worktree in new window"
CHOICE_YES = "Yes"
CHOICE_NO = "No"
