"""CLI tests using Typer's CliRunner."""

import json
from unittest.mock import patch

from typer.testing import CliRunner

from git_workflow import __version__
from git_workflow.cli import app


runner = CliRunner()


def invoke(repo_dir, *args):
    return runner.invoke(app, ["--repo", str(repo_dir), *args])


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_list(dirty_repo):
    result = invoke(dirty_repo, "list")

    assert result.exit_code == 0
    assert "○ [UNSTAGED (Modified)] tracked.txt" in result.output
    assert "? [UNTRACKED] new.txt" in result.output


def test_list_clean_tree(git_repo):
    result = invoke(git_repo, "list")
    assert result.exit_code == 0
    assert "Working tree is clean" in result.output


def test_not_a_repository(tmp_path):
    result = invoke(tmp_path, "list")
    assert result.exit_code == 1
    assert "Not a Git repository" in result.output


def test_stage_and_unstage(dirty_repo, porcelain):
    result = invoke(dirty_repo, "stage", "tracked.txt", "new.txt")
    assert result.exit_code == 0
    assert "2 of 2 succeeded" in result.output
    assert sorted(porcelain(dirty_repo)) == ["A  new.txt", "M  tracked.txt"]

    result = invoke(dirty_repo, "unstage", "tracked.txt")
    assert result.exit_code == 0
    assert "Unstaged: tracked.txt" in result.output
    assert " M tracked.txt" in porcelain(dirty_repo)


def test_stage_rejects_traversal(dirty_repo, porcelain):
    before = porcelain(dirty_repo)

    result = invoke(dirty_repo, "stage", "../etc/passwd")

    assert result.exit_code == 1
    assert "Invalid file path" in result.output
    assert porcelain(dirty_repo) == before


def test_partial_failure_exit_code(dirty_repo, porcelain):
    result = invoke(dirty_repo, "stage", "tracked.txt", "missing.txt")

    assert result.exit_code == 1
    assert "1 of 2 succeeded" in result.output
    assert "M  tracked.txt" in porcelain(dirty_repo)


def test_stage_all_and_unstage_all(dirty_repo, porcelain):
    result = invoke(dirty_repo, "stage-all")
    assert result.exit_code == 0
    assert "Staged all changes" in result.output

    result = invoke(dirty_repo, "unstage-all")
    assert result.exit_code == 0
    assert sorted(porcelain(dirty_repo)) == [" M tracked.txt", "?? new.txt"]


def test_status_non_interactive(dirty_repo):
    result = invoke(dirty_repo, "status", "--no-interactive")
    assert result.exit_code == 0
    assert "tracked.txt" in result.output
    assert "UNTRACKED" in result.output


def test_config_show(git_repo):
    result = invoke(git_repo, "config", "--show")
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["status"]["prompt_title"] == "Git Status"


def test_config_file_option(dirty_repo, tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"notifications": {"enabled": False}}))

    result = runner.invoke(app, ["--config", str(config_path), "--repo", str(dirty_repo), "stage", "tracked.txt"])

    assert result.exit_code == 0
    assert "Staged" not in result.output


def test_repository_check_runs_before_session(tmp_path):
    with patch("git_workflow.cli.is_git_repo", return_value=False) as check, \
            patch("git_workflow.cli.StatusSession") as session_cls:
        result = invoke(tmp_path, "stage", "tracked.txt")

    assert result.exit_code == 1
    assert "Not a Git repository" in result.output
    check.assert_called_once_with(tmp_path)
    session_cls.assert_not_called()
