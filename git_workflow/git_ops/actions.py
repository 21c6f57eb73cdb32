"""
Stage/unstage execution with per-path reporting.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional
from loguru import logger

from .errors import CommandFailedError, ValidationRejectedError
from .repository import GitRepository


class Direction(str, Enum):
    STAGE = "stage"
    UNSTAGE = "unstage"

    @property
    def past_tense(self) -> str:
        return "Staged" if self is Direction.STAGE else "Unstaged"


@dataclass(frozen=True)
class PathResult:
    """Outcome of one git invocation. `path` is None for bulk operations."""

    path: Optional[str]
    success: bool
    error_kind: Optional[str] = None  # "ValidationRejected" | "CommandFailed"
    message: str = ""


@dataclass
class ActionReport:
    """Per-path outcome of a stage/unstage request."""

    direction: Direction
    results: List[PathResult] = field(default_factory=list)
    bulk: bool = False

    @property
    def attempted(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for result in self.results if result.success)

    @property
    def failed(self) -> List[PathResult]:
        return [result for result in self.results if not result.success]

    @property
    def ok(self) -> bool:
        """At least one command ran and none failed."""
        return self.attempted > 0 and not self.failed

    @property
    def any_succeeded(self) -> bool:
        return self.succeeded > 0

    @property
    def summary(self) -> str:
        if self.bulk:
            if self.ok:
                return f"{self.direction.past_tense} all changes"
            return f"Failed to {self.direction.value} all changes"
        return f"{self.succeeded} of {self.attempted} succeeded"


class StageExecutor:
    """Runs stage/unstage commands against one repository."""

    def __init__(self, repository: GitRepository):
        self.repository = repository

    def execute(self, paths: Iterable[str], direction: Direction) -> ActionReport:
        """
        Stage or unstage each path in turn.

        A rejected or failing path is recorded and the rest of the batch
        still runs.
        """
        report = ActionReport(direction=direction)
        operation = (
            self.repository.stage_path if direction is Direction.STAGE
            else self.repository.unstage_path
        )

        for file_path in paths:
            try:
                operation(file_path)
                report.results.append(PathResult(path=file_path, success=True))
            except ValidationRejectedError as e:
                logger.warning(str(e))
                report.results.append(PathResult(
                    path=file_path, success=False,
                    error_kind="ValidationRejected", message=e.reason
                ))
            except CommandFailedError as e:
                report.results.append(PathResult(
                    path=file_path, success=False,
                    error_kind="CommandFailed", message=str(e)
                ))

        logger.info(f"{direction.value}: {report.summary}")
        return report

    def stage(self, paths: Iterable[str]) -> ActionReport:
        return self.execute(paths, Direction.STAGE)

    def unstage(self, paths: Iterable[str]) -> ActionReport:
        return self.execute(paths, Direction.UNSTAGE)

    def _execute_bulk(self, direction: Direction) -> ActionReport:
        report = ActionReport(direction=direction, bulk=True)
        try:
            if direction is Direction.STAGE:
                self.repository.stage_all()
            else:
                self.repository.unstage_all()
            report.results.append(PathResult(path=None, success=True))
        except CommandFailedError as e:
            report.results.append(PathResult(
                path=None, success=False, error_kind="CommandFailed", message=str(e)
            ))
        return report

    def stage_all(self) -> ActionReport:
        return self._execute_bulk(Direction.STAGE)

    def unstage_all(self) -> ActionReport:
        return self._execute_bulk(Direction.UNSTAGE)
