"""
Git repository operations with comprehensive error handling.
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Sequence
from git import Repo, InvalidGitRepositoryError, NoSuchPathError, GitCommandError
from loguru import logger

from .errors import GitRepositoryError, NotARepositoryError, CommandFailedError
from .status import StatusCollection, build_status_collection
from ..utils.security import validate_filepath


@lru_cache(maxsize=None)
def _is_git_repo_cached(path: str) -> bool:
    try:
        Repo(path, search_parent_directories=True)
        return True
    except (InvalidGitRepositoryError, NoSuchPathError):
        return False


def is_git_repo(path: Optional[Path] = None) -> bool:
    """Check (once per directory) whether `path` is inside a git repository."""
    target = Path(path) if path else Path.cwd()
    return _is_git_repo_cached(str(target.resolve()))


def clear_git_repo_cache() -> None:
    """Forget cached repository checks, e.g. after `git init`."""
    _is_git_repo_cached.cache_clear()


class GitRepository:
    """Git repository interface used by the status picker."""

    def __init__(self, repo_path: Optional[Path] = None):
        """Initialize Git repository."""
        self.repo_path = Path(repo_path) if repo_path else Path.cwd()
        self.repo: Optional[Repo] = None
        self._initialize_repo()

    def _initialize_repo(self) -> None:
        """Initialize the Git repository object."""
        try:
            self.repo = Repo(self.repo_path, search_parent_directories=True)
            logger.debug(f"Initialized Git repository at {self.repo.working_dir}")
        except (InvalidGitRepositoryError, NoSuchPathError):
            raise NotARepositoryError(f"Not a Git repository: {self.repo_path}")

        if self.repo.bare:
            raise NotARepositoryError(f"Bare repository has no working tree: {self.repo_path}")

    @property
    def working_dir(self) -> Path:
        return Path(self.repo.working_tree_dir)

    def _run(self, *args: str, paths: Sequence[str] = ()) -> str:
        """Run one git subcommand, translating failures into CommandFailedError."""
        command, *rest = args
        logger.debug(f"Executing: git {' '.join(args)}")
        try:
            return getattr(self.repo.git, command)(*rest)
        except GitCommandError as e:
            logger.warning(f"git {' '.join(args)} failed with status {e.status}")
            raise CommandFailedError(args, status=e.status, stderr=str(e.stderr or ""), paths=paths)

    def status_lines(self) -> List[str]:
        """Raw `git status --porcelain` lines, in git's order."""
        output = self._run('status', '--porcelain')
        return output.splitlines() if output else []

    def get_status(self) -> StatusCollection:
        """Fetch and parse the current status listing."""
        lines = self.status_lines()
        collection = build_status_collection(lines)
        logger.debug(
            f"Status listing: {len(lines)} lines, {len(collection)} records "
            f"({len(collection.staged)} staged, {len(collection.unstaged)} unstaged, "
            f"{len(collection.untracked)} untracked)"
        )
        return collection

    def stage_path(self, file_path: str) -> None:
        """Add one path to the index."""
        validate_filepath(file_path)
        self._run('add', '--', file_path, paths=[file_path])
        logger.info(f"Staged: {file_path}")

    def unstage_path(self, file_path: str) -> None:
        """Remove one path from the index, keeping the working tree."""
        validate_filepath(file_path)
        self._run('reset', 'HEAD', '--', file_path, paths=[file_path])
        logger.info(f"Unstaged: {file_path}")

    def stage_all(self) -> None:
        """Stage every change, including deletions and untracked files."""
        self._run('add', '-A')
        logger.info("Staged all changes")

    def unstage_all(self) -> None:
        """Reset the whole index to HEAD."""
        self._run('reset', 'HEAD', '--')
        logger.info("Unstaged all changes")

    def diff(self, file_path: str, max_lines: int = 500) -> str:
        """Diff text for one path; untracked files show their content instead."""
        validate_filepath(file_path)
        diff_output = self._run('diff', '--', file_path, paths=[file_path])
        if not diff_output:
            diff_output = self._run('diff', '--cached', '--', file_path, paths=[file_path])

        if not diff_output:
            full_path = self.working_dir / file_path
            if full_path.is_file():
                try:
                    content = full_path.read_text(encoding='utf-8', errors='ignore')
                except OSError as e:
                    logger.debug(f"Could not read {full_path}: {e}")
                    return f"Untracked file: {file_path}"
                diff_output = "\n".join(f"+{line}" for line in content.splitlines())
            else:
                return f"No diff output for {file_path}"

        lines = diff_output.split('\n')
        if len(lines) > max_lines:
            lines = lines[:max_lines] + [f"... (truncated, {len(lines) - max_lines} more lines)"]
        return "\n".join(lines)

    def commit(self, message: str) -> str:
        """Commit the index with the given message and return the new hash."""
        if not message or not message.strip():
            raise GitRepositoryError("Commit message is empty")
        self._run('commit', '-m', message)
        hexsha = self.repo.head.commit.hexsha
        logger.info(f"Created commit {hexsha[:8]}: {message}")
        return hexsha
