"""Allow running as `python -m git_worktree_assistant`."""

import sys

from git_worktree_assistant.cli.main import main

sys.exit(main())
