"""End-to-end tests for WorktreeAssistant sessions against real repositories"""
import os
from unittest.mock import patch

import pytest

from conftest import USE_DEFAULT, ScriptedChooser
from git_worktree_assistant.config import Config
from git_worktree_assistant.constants import (
    CHOICE_CANCEL,
    CHOICE_FINISH,
    CHOICE_NO,
    CHOICE_OPEN,
    CHOICE_SWITCH,
    CHOICE_YES,
)
from git_worktree_assistant.core import WorktreeAssistant
from git_worktree_assistant.exceptions import (
    CommandError,
    NotInRepositoryError,
    ValidationError,
    ValidationErrorKind,
)


def worktree_branches(repo):
    """Map of checked-out branch (None when detached) to worktree path."""
    result = {}
    for block in repo.git.worktree("list", "--porcelain").split("\n\n"):
        lines = dict(line.split(" ", 1) for line in block.splitlines() if " " in line)
        if "worktree" not in lines:
            continue
        branch = lines.get("branch", "").replace("refs/heads/", "") or None
        result[branch] = lines["worktree"]
    return result


@pytest.fixture
def assistant(repo_with_remote, config, cache):
    return WorktreeAssistant(repo_with_remote.working_dir, config, cache=cache)


class TestConstruction:
    def test_outside_repository(self, temp_dir, config, cache):
        plain = temp_dir / "plain"
        plain.mkdir()
        with pytest.raises(NotInRepositoryError):
            WorktreeAssistant(str(plain), config, cache=cache)

    def test_dict_config(self, git_repo, cache):
        assistant = WorktreeAssistant(git_repo.working_dir, {"fetch": False, "unknown": 1}, cache=cache)
        assert assistant.config.fetch is False


class TestBranchView:
    """Test the reconciled branch view."""

    def test_branches(self, assistant):
        branches = {b.name: b for b in assistant.get_branches()}

        assert set(branches) == {"main", "feature/behind", "local-only", "origin/remote-only"}
        assert (branches["main"].ahead, branches["main"].behind) == (1, 0)
        assert (branches["feature/behind"].ahead, branches["feature/behind"].behind) == (0, 1)
        assert branches["main"].worktree is not None
        assert branches["local-only"].worktree is None

    def test_list_worktrees(self, assistant, repo_with_remote):
        worktrees = assistant.list_worktrees()
        assert [wt.branch for wt in worktrees] == ["main"]


class TestAddWorktree:
    """Test full add-worktree sessions."""

    def test_existing_local_branch(self, assistant, repo_with_remote, worktree_root):
        chooser = ScriptedChooser(CHOICE_NO, "local-only", USE_DEFAULT, CHOICE_FINISH)

        outcome = assistant.add_worktree(chooser)

        expected = os.path.join(str(worktree_root), "local-only")
        assert chooser.suggested == [expected]
        assert outcome.path == expected
        assert outcome.created
        assert outcome.open_target is None
        assert worktree_branches(repo_with_remote)["local-only"] == expected

    def test_remote_branch_gets_tracking_branch(self, assistant, repo_with_remote, worktree_root):
        chooser = ScriptedChooser(CHOICE_NO, "origin/remote-only", USE_DEFAULT, CHOICE_FINISH)

        outcome = assistant.add_worktree(chooser)

        assert outcome.path == os.path.join(str(worktree_root), "remote-only")
        assert "remote-only" in worktree_branches(repo_with_remote)
        tracking = repo_with_remote.git.rev_parse("--abbrev-ref", "remote-only@{upstream}")
        assert tracking == "origin/remote-only"

    def test_branch_already_checked_out(self, assistant, repo_with_remote):
        chooser = ScriptedChooser(CHOICE_NO, "main", CHOICE_SWITCH)

        outcome = assistant.add_worktree(chooser)

        assert not outcome.created
        assert os.path.realpath(outcome.path) == os.path.realpath(repo_with_remote.working_dir)
        assert outcome.open_target == outcome.path
        assert chooser.titles[-1].startswith("A worktree for this branch already exists!")
        assert len(worktree_branches(repo_with_remote)) == 1

    def test_branch_already_checked_out_cancel(self, assistant):
        outcome = assistant.add_worktree(ScriptedChooser(CHOICE_NO, "main", CHOICE_CANCEL))
        assert outcome.open_target is None

    def test_new_branch(self, assistant, repo_with_remote, worktree_root):
        chooser = ScriptedChooser(CHOICE_NO, "New Branch", "main", "topic", USE_DEFAULT, CHOICE_FINISH)

        outcome = assistant.add_worktree(chooser)

        expected = os.path.join(str(worktree_root), "topic")
        assert outcome.path == expected
        assert worktree_branches(repo_with_remote)["topic"] == expected
        assert repo_with_remote.git.rev_parse("topic") == repo_with_remote.git.rev_parse("main")

    def test_base_options_put_head_first(self, assistant):
        chooser = ScriptedChooser(CHOICE_NO, "New Branch", None)

        assistant.add_worktree(chooser)

        base = [o for o in chooser.offered[-1] if not o.is_separator]
        assert base[0].label == "main"
        assert base[1].label == "Enter custom commit"
        labels = [o.label for o in base]
        assert "origin/remote-only" in labels
        # origin/main differs from main, so it stays pickable
        assert "origin/main" in labels

    def test_detached_on_custom_commit(self, assistant, repo_with_remote, worktree_root):
        commit = repo_with_remote.git.rev_parse("--short", "main~1")
        chooser = ScriptedChooser(
            CHOICE_NO, "Detached worktree", "Enter custom commit", f"  {commit} ", USE_DEFAULT, CHOICE_FINISH
        )

        outcome = assistant.add_worktree(chooser)

        assert outcome.path == os.path.join(str(worktree_root), f"detached-{commit}")
        assert worktree_branches(repo_with_remote)[None] == outcome.path

    def test_invalid_commit_adds_nothing(self, assistant, repo_with_remote):
        chooser = ScriptedChooser(CHOICE_NO, "Detached worktree", "Enter custom commit", "not-a-commit")

        with pytest.raises(ValidationError) as exc_info:
            assistant.add_worktree(chooser)

        assert exc_info.value.kind is ValidationErrorKind.INVALID_COMMIT
        assert len(worktree_branches(repo_with_remote)) == 1

    def test_invalid_branch_name_adds_nothing(self, assistant, repo_with_remote):
        chooser = ScriptedChooser(CHOICE_NO, "New Branch", "main", "bad ^name")

        with pytest.raises(ValidationError) as exc_info:
            assistant.add_worktree(chooser)

        assert exc_info.value.kind is ValidationErrorKind.INVALID_BRANCH_NAME
        assert len(worktree_branches(repo_with_remote)) == 1

    def test_existing_path_fails_in_git(self, assistant, repo_with_remote, worktree_root):
        target = worktree_root / "occupied"
        target.mkdir()
        (target / "file.txt").write_text("taken\n")
        chooser = ScriptedChooser(CHOICE_NO, "local-only", str(target))

        with pytest.raises(CommandError):
            assistant.add_worktree(chooser)

    @pytest.mark.parametrize("answers", [
        (None,),
        (CHOICE_NO, None),
        (CHOICE_NO, "New Branch", None),
        (CHOICE_NO, "New Branch", "main", None),
        (CHOICE_NO, "local-only", None),
        (CHOICE_NO, "local-only", ""),
    ])
    def test_cancel_adds_nothing(self, assistant, repo_with_remote, answers):
        outcome = assistant.add_worktree(ScriptedChooser(*answers))

        assert outcome.path is None
        assert not outcome.created
        assert len(worktree_branches(repo_with_remote)) == 1

    def test_fetch_yes_fetches(self, assistant):
        with patch.object(assistant, "fetch", wraps=assistant.fetch) as fetch:
            assistant.add_worktree(ScriptedChooser(CHOICE_YES, None))
        fetch.assert_called_once()

    def test_fetch_configured_skips_question(self, repo_with_remote, worktree_root, cache):
        config = Config(default_worktree_directory=str(worktree_root), fetch=False)
        assistant = WorktreeAssistant(repo_with_remote.working_dir, config, cache=cache)
        chooser = ScriptedChooser(None)

        with patch.object(assistant, "fetch") as fetch:
            assistant.add_worktree(chooser)

        fetch.assert_not_called()
        assert chooser.titles == ["Which branch do you want to check out?"]

    def test_fetch_argument_overrides_config(self, assistant):
        chooser = ScriptedChooser(None)
        with patch.object(assistant, "fetch") as fetch:
            assistant.add_worktree(chooser, fetch=True)
        fetch.assert_called_once()
        assert chooser.titles == ["Which branch do you want to check out?"]

    def test_failed_fetch_does_not_stop_session(self, assistant, repo_with_remote, temp_dir):
        repo_with_remote.git.remote("set-url", "origin", str(temp_dir / "missing.git"))

        assert assistant.fetch() is False
        outcome = assistant.add_worktree(ScriptedChooser(CHOICE_YES, "local-only", USE_DEFAULT, CHOICE_FINISH))
        assert outcome.created

    def test_open_after_add(self, repo_with_remote, worktree_root, cache):
        config = Config(default_worktree_directory=str(worktree_root), open_command="code --new-window")
        assistant = WorktreeAssistant(repo_with_remote.working_dir, config, cache=cache)

        with patch("git_worktree_assistant.services.workspace.subprocess.Popen") as popen:
            outcome = assistant.add_worktree(ScriptedChooser(CHOICE_NO, "local-only", USE_DEFAULT, CHOICE_OPEN))

        assert outcome.new_window
        popen.assert_called_once()
        assert popen.call_args[0][0] == ["code", "--new-window", outcome.path]

    def test_destination_marks_checked_out_branch(self, assistant):
        chooser = ScriptedChooser(CHOICE_NO, None)
        assistant.add_worktree(chooser)

        options = {o.label: o for o in chooser.offered[-1] if not o.is_separator}
        assert list(options)[:2] == ["New Branch", "Detached worktree"]
        assert options["main"].description.startswith("already exists (HEAD) ↑1 [origin/main]")
        assert "↓1" in options["feature/behind"].description
        assert "origin/main" not in options


class TestDefaultParentDirectory:
    def test_relative_to_main_root_from_linked_worktree(self, git_repo, worktree_root, cache):
        linked = str(worktree_root / "linked")
        git_repo.git.worktree("add", "-b", "linked", linked)
        assistant = WorktreeAssistant(linked, Config(default_worktree_directory="../wts"), cache=cache)

        parent = assistant.default_parent_directory()

        assert os.path.realpath(parent) == os.path.realpath(os.path.join(git_repo.working_dir, "..", "wts"))

    def test_unset(self, git_repo, cache):
        assert WorktreeAssistant(git_repo.working_dir, Config(), cache=cache).default_parent_directory() == ""


class TestSwitchOpenRemove:
    """Test worktree-picking commands."""

    @pytest.fixture
    def linked(self, repo_with_remote, worktree_root):
        path = str(worktree_root / "feature")
        repo_with_remote.git.worktree("add", path, "feature/behind")
        return path

    @staticmethod
    def pick(path):
        return lambda options: next(o for o in options if o.worktree.path == path)

    def test_switch(self, assistant, linked):
        chooser = ScriptedChooser(self.pick(linked))
        assert assistant.switch_to_worktree(chooser) == linked
        assert chooser.titles == ["Which worktree?"]

    def test_switch_prefers_workspace_file(self, repo_with_remote, linked, worktree_root, cache):
        workspace = os.path.join(linked, "project.code-workspace")
        with open(workspace, "w") as f:
            f.write("{}\n")
        config = Config(default_worktree_directory=str(worktree_root), workspace_file_location="project.code-workspace")
        assistant = WorktreeAssistant(repo_with_remote.working_dir, config, cache=cache)

        assert assistant.switch_to_worktree(ScriptedChooser(self.pick(linked))) == workspace

    def test_switch_cancelled(self, assistant):
        assert assistant.switch_to_worktree(ScriptedChooser(None)) is None

    def test_open_without_command_returns_target(self, assistant, linked):
        assert assistant.open_worktree(ScriptedChooser(self.pick(linked))) == linked

    def test_remove_picked(self, assistant, repo_with_remote, linked):
        removed = assistant.remove_worktree(ScriptedChooser(self.pick(linked)))

        assert removed == linked
        assert not os.path.exists(linked)
        assert "feature/behind" not in worktree_branches(repo_with_remote)

    def test_remove_by_path(self, assistant, linked):
        assert assistant.remove_worktree(ScriptedChooser(), linked) == linked

    def test_remove_cancelled(self, assistant, repo_with_remote, linked):
        assert assistant.remove_worktree(ScriptedChooser(None)) is None
        assert os.path.exists(linked)

    def test_remove_with_changes_is_refused(self, assistant, repo_with_remote, linked):
        with open(os.path.join(linked, "feature.txt"), "w") as f:
            f.write("dirty\n")

        with pytest.raises(CommandError):
            assistant.remove_worktree(ScriptedChooser(), linked)
        assert os.path.exists(linked)

    def test_branch_view_sees_new_worktree(self, assistant, linked):
        branches = {b.name: b for b in assistant.get_branches()}
        assert branches["feature/behind"].worktree.path == linked


def test_removed_branch_can_be_added_again(assistant, repo_with_remote, worktree_root):
    path = os.path.join(str(worktree_root), "local-only")
    assistant.add_worktree(ScriptedChooser(CHOICE_NO, "local-only", USE_DEFAULT, CHOICE_FINISH))
    assistant.remove_worktree(ScriptedChooser(), path)

    outcome = assistant.add_worktree(ScriptedChooser(CHOICE_NO, "local-only", USE_DEFAULT, CHOICE_FINISH))

    assert outcome.path == path


class TestRelativePaths:
    """Typed paths resolve against the repository, wherever the process runs."""

    @pytest.fixture
    def elsewhere(self, temp_dir, monkeypatch):
        path = temp_dir / "elsewhere"
        path.mkdir()
        monkeypatch.chdir(path)
        return path

    def test_add_switch_and_remove(self, repo_with_remote, cache, elsewhere):
        config = Config(workspace_file_location="proj.code-workspace")
        assistant = WorktreeAssistant(repo_with_remote.working_dir, config, cache=cache)
        chooser = ScriptedChooser(CHOICE_NO, "local-only", USE_DEFAULT, CHOICE_SWITCH)

        outcome = assistant.add_worktree(chooser)

        expected = os.path.join(repo_with_remote.working_dir, "local-only")
        assert chooser.suggested == ["local-only"]
        assert outcome.path == expected
        assert outcome.open_target == expected
        assert os.path.isdir(expected)
        assert not (elsewhere / "local-only").exists()

        workspace = os.path.join(expected, "proj.code-workspace")
        with open(workspace, "w") as f:
            f.write("{}\n")
        chooser = ScriptedChooser(lambda options: next(o for o in options if o.worktree.branch == "local-only"))
        assert assistant.switch_to_worktree(chooser) == workspace

        os.remove(workspace)
        assert assistant.remove_worktree(ScriptedChooser(), "local-only") == expected
        assert not os.path.exists(expected)
