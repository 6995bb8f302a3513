"""Diff two resolved environment maps."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum


class ChangeType(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class Change:
    """One variable's difference between two maps."""

    key: str
    type: ChangeType
    old_value: str = ""
    new_value: str = ""


@dataclass
class DiffResult:
    """The full, key-sorted diff between two maps."""

    changes: list[Change] = field(default_factory=list)

    def has_changes(self) -> bool:
        return any(c.type is not ChangeType.UNCHANGED for c in self.changes)

    def summary(self) -> str:
        counts = {t: 0 for t in ChangeType}
        for change in self.changes:
            counts[change.type] += 1
        return (
            f"+{counts[ChangeType.ADDED]} added, -{counts[ChangeType.REMOVED]} removed, "
            f"~{counts[ChangeType.MODIFIED]} modified"
        )


def diff_vars(old: Mapping[str, str], new: Mapping[str, str]) -> DiffResult:
    """Diff ``old`` against ``new``, one change per key in sorted order."""
    result = DiffResult()
    for key in sorted({*old, *new}):
        if key in old and key not in new:
            change = Change(key, ChangeType.REMOVED, old_value=old[key])
        elif key not in old:
            change = Change(key, ChangeType.ADDED, new_value=new[key])
        elif old[key] != new[key]:
            change = Change(key, ChangeType.MODIFIED, old[key], new[key])
        else:
            change = Change(key, ChangeType.UNCHANGED, old[key], new[key])
        result.changes.append(change)
    return result