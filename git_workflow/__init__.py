"""
Git Workflow - interactive git status picker.

Lists `git status --porcelain` as classified rows and stages or unstages the
selected files, re-reading the listing after every change.
"""

__version__ = "1.0.0"

from git_workflow.core import StatusSession
from git_workflow.config.settings import Settings

__all__ = ["StatusSession", "Settings"]
