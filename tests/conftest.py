"""Pytest fixtures for git-worktree-assistant tests"""
import tempfile
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union
from unittest.mock import Mock

import git
import pytest

from git_worktree_assistant.config import Config
from git_worktree_assistant.models.option import PickableOption
from git_worktree_assistant.models.ref import GitRef, RefSource
from git_worktree_assistant.models.worktree import Worktree
from git_worktree_assistant.services.git import ProcessRunner, WorktreeDirectoryCache


# Answer for ScriptedChooser.ask that accepts the suggested value
USE_DEFAULT = object()


class ScriptedChooser:
    """Chooser that replays canned answers and records what it was asked.

    A choose() answer is an option label, a callable picking from the
    options, or None to cancel. An ask() answer is a string, None, or
    USE_DEFAULT.
    """

    def __init__(self, *answers):
        self.answers: List = list(answers)
        self.titles: List[str] = []
        self.offered: List[List[PickableOption]] = []
        self.suggested: List[str] = []

    def _next(self):
        assert self.answers, f"Unexpected prompt: {self.titles[-1]}"
        return self.answers.pop(0)

    def choose(
        self, title: str, options: Sequence[PickableOption], placeholder: str = ""
    ) -> Optional[PickableOption]:
        self.titles.append(title)
        self.offered.append(list(options))
        answer: Union[str, Callable, None] = self._next()
        if answer is None:
            return None
        if callable(answer):
            return answer(options)
        for option in options:
            if not option.is_separator and option.label == answer:
                return option
        raise AssertionError(f"No option {answer!r} in {[o.label for o in options]}")

    def ask(self, title: str, prompt: str = "", value: str = "") -> Optional[str]:
        self.titles.append(title)
        self.suggested.append(value)
        answer = self._next()
        if answer is USE_DEFAULT:
            return value
        return answer


def make_ref(
    name: str,
    source: RefSource = RefSource.LOCAL,
    id: str = "abc1234",
    upstream: Optional[str] = None,
    is_head: bool = False,
) -> GitRef:
    return GitRef(
        source=source,
        id=id,
        name=name,
        upstream=upstream,
        is_head=is_head,
        author="Test User",
        message="Some change",
    )


def make_remote(name: str, id: str = "abc1234") -> GitRef:
    return make_ref(name, source=RefSource.REMOTE, id=id)


def commit_file(repo: git.Repo, name: str, content: str, message: str) -> git.Commit:
    path = Path(repo.working_dir) / name
    path.write_text(content)
    repo.index.add([name])
    return repo.index.commit(message)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with one commit on main."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")

    # Rename master to main if needed
    try:
        repo.git.branch('-M', 'main')
    except git.exc.GitCommandError:
        pass

    yield repo

    repo.close()


@pytest.fixture
def repo_with_remote(git_repo, temp_dir):
    """Repository with a bare origin and branches in every tracking state.

    - main tracks origin/main and is 1 commit ahead
    - feature/behind tracks origin/feature/behind and is 1 commit behind
    - local-only has no upstream
    - origin/remote-only is tracked by no local branch
    """
    repo = git_repo
    origin_path = temp_dir / "origin.git"
    git.Repo.init(origin_path, bare=True).close()
    repo.create_remote("origin", str(origin_path))
    repo.git.push("-u", "origin", "main")

    commit_file(repo, "second.txt", "second\n", "Second commit")

    repo.git.checkout("-b", "feature/behind")
    commit_file(repo, "feature.txt", "feature\n", "Feature work")
    repo.git.push("-u", "origin", "feature/behind")
    repo.git.reset("--hard", "HEAD~1")

    repo.git.push("origin", "main:refs/heads/remote-only")
    repo.git.checkout("main")
    repo.git.branch("local-only")

    yield repo


@pytest.fixture
def runner():
    return ProcessRunner()


@pytest.fixture
def cache():
    """Fresh worktree membership cache per test."""
    return WorktreeDirectoryCache()


@pytest.fixture
def worktree_root(temp_dir):
    """Parent directory for worktrees created by tests, outside the repository."""
    path = temp_dir / "worktrees"
    path.mkdir()
    return path


@pytest.fixture
def config(worktree_root):
    return Config(default_worktree_directory=str(worktree_root), interactive=False)


@pytest.fixture
def mock_runner():
    """ProcessRunner double; configure run / run_captured per test."""
    return Mock(spec=ProcessRunner)


@pytest.fixture
def sample_refs():
    """Local/remote refs covering tracked, untracked and remote-only branches."""
    return [
        make_ref("main", upstream="origin/main", is_head=True, id="1111111"),
        make_ref("feature/x", upstream="origin/feature/x", id="2222222"),
        make_ref("local-only", id="3333333"),
        make_remote("origin/main", id="1111111"),
        make_remote("origin/feature/x", id="4444444"),
        make_remote("origin/remote-only", id="5555555"),
    ]


@pytest.fixture
def sample_worktrees():
    return [
        Worktree(path="/repo", head="1111111", branch="main"),
        Worktree(path="/repo-wt", head="9999999", branch=None),
    ]
