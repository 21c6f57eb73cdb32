"""Shared fixtures: throw-away git repositories and isolated config dirs."""

import pytest
from git import Repo
from loguru import logger


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep settings and log files out of the real home directory."""
    base = tmp_path_factory.mktemp("xdg")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(base / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(base / "cache"))
    for name in ("GW_NOTIFICATIONS__ENABLED", "GW_NOTIFICATIONS__LEVEL", "GW_UI__LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield
    logger.remove()


@pytest.fixture
def git_repo(tmp_path):
    """A repository with one commit containing README.md and tracked.txt."""
    repo_dir = tmp_path / "repo"
    repo_dir.mkdir()
    repo = Repo.init(repo_dir)
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")

    (repo_dir / "README.md").write_text("# Test Project\n")
    (repo_dir / "tracked.txt").write_text("original\n")
    repo.git.add("README.md", "tracked.txt")
    repo.git.commit("-m", "Initial commit")
    return repo_dir


@pytest.fixture
def dirty_repo(git_repo):
    """git_repo with one unstaged modification and one untracked file."""
    (git_repo / "tracked.txt").write_text("changed\n")
    (git_repo / "new.txt").write_text("brand new\n")
    return git_repo


@pytest.fixture
def porcelain():
    """Read the current porcelain listing of a repository as a list of lines."""
    def read(repo_dir):
        output = Repo(repo_dir).git.status("--porcelain")
        return output.splitlines() if output else []
    return read
