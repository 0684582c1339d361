"""Services for git-worktree-assistant."""
