"""Classification of porcelain status codes into a change summary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

ADDED_MARKERS = ("?", "A")
MODIFIED_MARKER = "M"
DELETED_MARKER = "D"


@dataclass(frozen=True)
class ChangeSummary:
    """Counts of added, modified and deleted paths."""

    added: int = 0
    modified: int = 0
    deleted: int = 0

    def __post_init__(self) -> None:
        for name in ("added", "modified", "deleted"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")

    @property
    def is_empty(self) -> bool:
        return self.added == 0 and self.modified == 0 and self.deleted == 0


def summarize_status(lines: Iterable[str]) -> ChangeSummary:
    """Count status lines per change kind.

    Only the two-character XY code at the start of each line is examined.
    A code is counted in every bucket whose marker it contains, so ``AM``
    (added, then modified in the work tree) counts as added and modified.
    """
    added = modified = deleted = 0
    for line in lines:
        if not line.strip():
            continue
        code = line[:2]
        if any(marker in code for marker in ADDED_MARKERS):
            added += 1
        if MODIFIED_MARKER in code:
            modified += 1
        if DELETED_MARKER in code:
            deleted += 1
    return ChangeSummary(added=added, modified=modified, deleted=deleted)
