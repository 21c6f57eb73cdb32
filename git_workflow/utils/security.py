"""
Path validation applied before any path reaches a git command.
"""

import re

from ..git_ops.errors import ValidationRejectedError


SHELL_METACHARACTERS = frozenset(";&|$`<>!(){}\n\r\x00")

# "C:\..." / "C:/..."
_DRIVE_RE = re.compile(r'^[A-Za-z]:[\\/]')
_SEPARATOR_RE = re.compile(r'[\\/]')


def validate_filepath(filepath: object) -> str:
    """
    Check that a repository-relative path is safe to hand to git.

    Returns the path unchanged, or raises ValidationRejectedError.
    """
    if not isinstance(filepath, str) or not filepath or not filepath.strip():
        raise ValidationRejectedError(filepath, "path is empty")

    if '..' in _SEPARATOR_RE.split(filepath):
        raise ValidationRejectedError(filepath, "parent-directory traversal")

    if filepath[0] in ('/', '\\', '~') or _DRIVE_RE.match(filepath):
        raise ValidationRejectedError(filepath, "absolute path")

    found = sorted(set(filepath) & SHELL_METACHARACTERS)
    if found:
        raise ValidationRejectedError(
            filepath, f"shell metacharacters {''.join(found)!r}"
        )

    return filepath

