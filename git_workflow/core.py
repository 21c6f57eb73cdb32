"""
Status session: the listing, the selection and the actions that change them.
"""

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional
from loguru import logger

from .config.settings import Settings
from .git_ops.actions import ActionReport, Direction, StageExecutor
from .git_ops.errors import GitRepositoryError
from .git_ops.repository import GitRepository
from .git_ops.status import StatusCollection, StatusRecord


class SessionState(str, Enum):
    IDLE = "idle"
    EXECUTING = "executing"


class ActionInProgressError(GitRepositoryError):
    """A mutating action was requested while another one was running."""
    pass


class StatusSession:
    """
    Holds one status listing and the user's selection over it.

    Every successful stage/unstage replaces the listing with a fresh one and
    drops the selection. Only one mutating action runs at a time.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        repository: Optional[GitRepository] = None,
        repo_path: Optional[Path] = None,
    ):
        self.settings = settings or Settings()
        self.repository = repository or GitRepository(repo_path or self.settings.git.repo_path)
        self.executor = StageExecutor(self.repository)
        self.state = SessionState.IDLE
        self.collection = StatusCollection()
        self.cursor = 0
        self._selected: Dict[str, None] = {}
        self.last_report: Optional[ActionReport] = None

        logger.debug(f"Status session opened for {self.repository.repo_path}")

    # Listing

    def open(self) -> StatusCollection:
        return self.refresh()

    def refresh(self) -> StatusCollection:
        """Rebuild the listing from scratch; selection does not survive."""
        self.collection = self.repository.get_status()
        self._selected.clear()
        self.cursor = 0
        return self.collection

    @property
    def current(self) -> Optional[StatusRecord]:
        if 0 <= self.cursor < len(self.collection):
            return self.collection[self.cursor]
        return None

    def move_cursor(self, index: int) -> Optional[StatusRecord]:
        if not self.collection:
            self.cursor = 0
            return None
        self.cursor = max(0, min(index, len(self.collection) - 1))
        return self.current

    # Selection

    def toggle_selection(self, path: str) -> bool:
        """Toggle `path` in the multi-selection and return whether it is now selected."""
        if self.collection.get(path) is None:
            raise KeyError(path)
        if path in self._selected:
            del self._selected[path]
            return False
        self._selected[path] = None
        return True

    def clear_selection(self) -> None:
        self._selected.clear()

    def is_selected(self, path: str) -> bool:
        return path in self._selected

    @property
    def multi_selection(self) -> List[str]:
        """Selected paths in listing order."""
        return [path for path in self.collection.paths if path in self._selected]

    def selected_paths(self) -> List[str]:
        """The multi-selection if there is one, otherwise the row under the cursor."""
        if self._selected:
            return self.multi_selection
        record = self.current
        return [record.path] if record else []

    def selection_info(self) -> str:
        record = self.current
        if record is None:
            return ""
        info = f"▶ {record.path} [{record.label or 'Unknown'}]"
        if self._selected:
            info += f" | {len(self._selected)} file(s) selected"
        return info

    # Actions

    def _run_action(self, action, direction: Direction) -> ActionReport:
        if self.state is SessionState.EXECUTING:
            raise ActionInProgressError("Another git action is still running")

        self.state = SessionState.EXECUTING
        try:
            report = action()
        finally:
            self.state = SessionState.IDLE

        self.last_report = report
        if report.any_succeeded:
            self.refresh()
        elif report.attempted:
            logger.debug(f"{direction.value} made no change, keeping current listing")
        return report

    def stage_selected(self) -> ActionReport:
        paths = self.selected_paths()
        if not paths:
            logger.debug("No files selected")
            return ActionReport(direction=Direction.STAGE)
        return self._run_action(lambda: self.executor.stage(paths), Direction.STAGE)

    def unstage_selected(self) -> ActionReport:
        paths = self.selected_paths()
        if not paths:
            logger.debug("No files selected")
            return ActionReport(direction=Direction.UNSTAGE)
        return self._run_action(lambda: self.executor.unstage(paths), Direction.UNSTAGE)

    def stage_all(self) -> ActionReport:
        return self._run_action(self.executor.stage_all, Direction.STAGE)

    def unstage_all(self) -> ActionReport:
        return self._run_action(self.executor.unstage_all, Direction.UNSTAGE)

    def commit(self, message: str) -> str:
        if self.state is SessionState.EXECUTING:
            raise ActionInProgressError("Another git action is still running")

        self.state = SessionState.EXECUTING
        try:
            hexsha = self.repository.commit(message)
        finally:
            self.state = SessionState.IDLE
        self.refresh()
        return hexsha
