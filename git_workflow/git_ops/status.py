"""
Parsing of `git status --porcelain` output into classified status records.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple, Union
from loguru import logger


# Two status-code characters, whitespace, then the path
STATUS_LINE_RE = re.compile(r'^(.)(.)\s+(.+)$')

STAGED_CODES = ('M', 'A', 'D', 'R')
UNSTAGED_CODES = ('M', 'D')
UNTRACKED_CODE = '?'

KIND_NAMES = {
    'M': "Modified",
    'A': "Added",
    'D': "Deleted",
    'R': "Renamed",
}


def _normalize_code(code: str) -> str:
    """Blank columns are stored as the empty string."""
    return code.strip()


@dataclass(frozen=True)
class StatusRecord:
    """One file's state in the index and the working tree."""

    path: str
    index_code: str = ""
    worktree_code: str = ""

    @property
    def xy(self) -> str:
        return f"{self.index_code or ' '}{self.worktree_code or ' '}"

    @property
    def is_staged(self) -> bool:
        return self.index_code in STAGED_CODES

    @property
    def is_unstaged(self) -> bool:
        return self.worktree_code in UNSTAGED_CODES

    @property
    def is_untracked(self) -> bool:
        return self.worktree_code == UNTRACKED_CODE

    @property
    def kind(self) -> str:
        """Human name of the change; the index column wins over the worktree column."""
        if self.is_staged:
            return KIND_NAMES[self.index_code]
        if self.is_unstaged:
            return KIND_NAMES[self.worktree_code]
        return ""

    @property
    def label(self) -> str:
        """
        Classification shown to the user.

        The combined case always reads "(Modified)", whatever the worktree
        code is.
        """
        label = ""
        if self.is_staged:
            label = f"STAGED ({KIND_NAMES[self.index_code]})"
        if self.is_unstaged:
            if self.is_staged:
                label = "STAGED + UNSTAGED (Modified)"
            else:
                label = f"UNSTAGED ({KIND_NAMES[self.worktree_code]})"
        if self.is_untracked:
            label = "UNTRACKED"
        return label

    @property
    def icon(self) -> str:
        if self.is_untracked:
            return "?"
        if self.is_staged and self.is_unstaged:
            return "●○"
        if self.is_staged:
            return "●"
        if self.is_unstaged:
            return "○"
        return ""

    @property
    def display(self) -> str:
        return f"{self.icon} [{self.label}] {self.path}"


def parse_status_line(line: Optional[str]) -> Optional[StatusRecord]:
    """
    Parse one porcelain line ("XY path") into a StatusRecord.

    Returns None for blank lines and anything that does not have the
    two-code-plus-path shape. Never raises.
    """
    if not isinstance(line, str) or not line.strip():
        return None

    match = STATUS_LINE_RE.match(line.rstrip('\r\n'))
    if not match:
        return None

    index_code, worktree_code, path = match.groups()
    return StatusRecord(
        path=path,
        index_code=_normalize_code(index_code),
        worktree_code=_normalize_code(worktree_code),
    )


@dataclass(frozen=True)
class StatusCollection:
    """
    Ordered, immutable result of one status listing.

    `raw_line_count` counts the non-blank input lines so callers can tell a
    clean working tree from a listing where nothing could be parsed.
    """

    records: Tuple[StatusRecord, ...] = field(default_factory=tuple)
    raw_line_count: int = 0

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[StatusRecord]:
        return iter(self.records)

    def __getitem__(self, index: int) -> StatusRecord:
        return self.records[index]

    def __bool__(self) -> bool:
        return bool(self.records)

    @property
    def is_clean(self) -> bool:
        """The listing itself was empty."""
        return self.raw_line_count == 0

    @property
    def all_skipped(self) -> bool:
        """The listing had lines but none of them parsed."""
        return self.raw_line_count > 0 and not self.records

    @property
    def paths(self) -> List[str]:
        return [record.path for record in self.records]

    @property
    def staged(self) -> List[StatusRecord]:
        return [record for record in self.records if record.is_staged]

    @property
    def unstaged(self) -> List[StatusRecord]:
        return [record for record in self.records if record.is_unstaged]

    @property
    def untracked(self) -> List[StatusRecord]:
        return [record for record in self.records if record.is_untracked]

    def get(self, path: str) -> Optional[StatusRecord]:
        for record in self.records:
            if record.path == path:
                return record
        return None

    def index_of(self, path: str) -> int:
        """Position of `path` in the listing, or -1."""
        for i, record in enumerate(self.records):
            if record.path == path:
                return i
        return -1


def build_status_collection(lines: Union[str, Iterable[str], None]) -> StatusCollection:
    """Parse a full porcelain listing, skipping lines that do not parse."""
    if lines is None:
        return StatusCollection()
    if isinstance(lines, str):
        lines = lines.splitlines()

    records = []
    raw_line_count = 0
    for line in lines:
        if not line or not line.strip():
            continue
        raw_line_count += 1
        record = parse_status_line(line)
        if record is None:
            logger.trace(f"Skipping unparseable status line: {line!r}")
            continue
        records.append(record)

    return StatusCollection(records=tuple(records), raw_line_count=raw_line_count)
