"""
Exceptions raised by git operations.
"""

from typing import Optional, Sequence


class GitRepositoryError(Exception):
    """Custom exception for Git repository operations."""
    pass


class NotARepositoryError(GitRepositoryError):
    """The target directory is not inside a git working tree."""
    pass


class ValidationRejectedError(GitRepositoryError):
    """A path failed validation before any git command was built."""

    def __init__(self, path: object, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid file path {path!r}: {reason}")


class CommandFailedError(GitRepositoryError):
    """A git command exited with a non-zero status."""

    def __init__(
        self,
        command: Sequence[str],
        status: Optional[int] = None,
        stderr: str = "",
        paths: Sequence[str] = (),
    ):
        self.command = list(command)
        self.status = status
        self.stderr = (stderr or "").strip()
        self.paths = list(paths)
        message = f"git {' '.join(self.command)} failed"
        if status is not None:
            message += f" (exit {status})"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)
