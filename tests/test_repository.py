"""Integration tests for GitRepository against real throw-away repositories."""

import pytest
from git import Repo

from git_workflow.git_ops.errors import (
    CommandFailedError,
    GitRepositoryError,
    NotARepositoryError,
    ValidationRejectedError,
)
from git_workflow.git_ops.repository import GitRepository, clear_git_repo_cache, is_git_repo


def test_not_a_repository(tmp_path):
    with pytest.raises(NotARepositoryError):
        GitRepository(tmp_path)


def test_missing_directory(tmp_path):
    with pytest.raises(NotARepositoryError):
        GitRepository(tmp_path / "does-not-exist")


def test_subdirectory_finds_repository(git_repo):
    subdir = git_repo / "sub"
    subdir.mkdir()
    repository = GitRepository(subdir)
    assert repository.working_dir.resolve() == git_repo.resolve()


def test_clean_tree_has_no_status_lines(git_repo):
    repository = GitRepository(git_repo)
    assert repository.status_lines() == []
    assert repository.get_status().is_clean


def test_get_status(dirty_repo):
    collection = GitRepository(dirty_repo).get_status()

    tracked = collection.get("tracked.txt")
    assert tracked.is_unstaged and not tracked.is_staged
    assert collection.get("new.txt").is_untracked


def test_stage_then_unstage_round_trip(dirty_repo):
    repository = GitRepository(dirty_repo)

    repository.stage_path("tracked.txt")
    record = repository.get_status().get("tracked.txt")
    assert record.is_staged is True
    assert record.is_unstaged is False

    repository.unstage_path("tracked.txt")
    record = repository.get_status().get("tracked.txt")
    assert record.is_staged is False
    assert record.is_unstaged is True


def test_staging_twice_is_idempotent(dirty_repo):
    repository = GitRepository(dirty_repo)

    repository.stage_path("tracked.txt")
    first = repository.get_status().get("tracked.txt")
    repository.stage_path("tracked.txt")
    second = repository.get_status().get("tracked.txt")

    assert first == second
    assert second.label == "STAGED (Modified)"


def test_stage_untracked_file(dirty_repo):
    repository = GitRepository(dirty_repo)
    repository.stage_path("new.txt")
    assert repository.get_status().get("new.txt").label == "STAGED (Added)"


def test_stage_all_and_unstage_all(dirty_repo):
    repository = GitRepository(dirty_repo)

    repository.stage_all()
    collection = repository.get_status()
    assert all(record.is_staged for record in collection)
    assert not collection.untracked

    repository.unstage_all()
    collection = repository.get_status()
    assert not collection.staged
    assert collection.get("new.txt").is_untracked


def test_stage_missing_path_fails(git_repo):
    repository = GitRepository(git_repo)
    with pytest.raises(CommandFailedError) as exc_info:
        repository.stage_path("missing.txt")
    assert exc_info.value.paths == ["missing.txt"]
    assert exc_info.value.status != 0


def test_invalid_path_is_rejected(git_repo):
    with pytest.raises(ValidationRejectedError):
        GitRepository(git_repo).stage_path("../outside.txt")


def test_diff_for_modified_file(dirty_repo):
    diff = GitRepository(dirty_repo).diff("tracked.txt")
    assert "-original" in diff
    assert "+changed" in diff


def test_diff_for_staged_file(dirty_repo):
    repository = GitRepository(dirty_repo)
    repository.stage_path("tracked.txt")
    assert "+changed" in repository.diff("tracked.txt")


def test_diff_for_untracked_file_shows_content(dirty_repo):
    assert GitRepository(dirty_repo).diff("new.txt") == "+brand new"


def test_diff_is_truncated(git_repo):
    (git_repo / "big.txt").write_text("\n".join(str(i) for i in range(100)))
    diff = GitRepository(git_repo).diff("big.txt", max_lines=10)
    lines = diff.split("\n")
    assert len(lines) == 11
    assert lines[-1].startswith("... (truncated")


def test_commit(dirty_repo):
    repository = GitRepository(dirty_repo)
    repository.stage_path("tracked.txt")

    hexsha = repository.commit("Update tracked file")

    assert repository.repo.head.commit.hexsha == hexsha
    assert repository.get_status().get("tracked.txt") is None


def test_commit_requires_message(git_repo):
    with pytest.raises(GitRepositoryError):
        GitRepository(git_repo).commit("   ")


def test_is_git_repo_is_cached(tmp_path, git_repo):
    clear_git_repo_cache()
    plain = tmp_path / "plain"
    plain.mkdir()

    assert is_git_repo(git_repo) is True
    assert is_git_repo(plain) is False

    Repo.init(plain)
    assert is_git_repo(plain) is False

    clear_git_repo_cache()
    assert is_git_repo(plain) is True
