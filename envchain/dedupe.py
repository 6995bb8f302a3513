"""Merge several env maps into one, dropping duplicate keys."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum


class Strategy(Enum):
    """Which occurrence of a duplicated key wins."""

    KEEP_FIRST = "first"
    KEEP_LAST = "last"


@dataclass
class DedupeResult:
    """The merged variables and the keys whose duplicates were removed."""

    vars: dict[str, str] = field(default_factory=dict)
    removed: list[str] = field(default_factory=list)

    def summary(self) -> str:
        if not self.removed:
            return "no duplicates found"
        return f"{len(self.removed)} duplicate(s) removed: [{' '.join(self.removed)}]"


def dedupe(
    sources: Sequence[Mapping[str, str]] | None,
    strategy: Strategy = Strategy.KEEP_FIRST,
    restrict_to_keys: Iterable[str] | None = None,
) -> DedupeResult:
    """Merge ``sources`` in order, resolving repeated keys by ``strategy``.

    When ``restrict_to_keys`` is non-empty only those keys are deduplicated;
    every other key simply takes the last value seen and is never reported.
    """
    result = DedupeResult()
    if not sources:
        return result

    restrict = set(restrict_to_keys or ())
    seen: set[str] = set()
    for src in sources:
        for key in sorted(src):
            value = src[key]
            if restrict and key not in restrict:
                result.vars[key] = value
                continue
            if key in seen:
                if strategy is Strategy.KEEP_LAST:
                    result.vars[key] = value
                result.removed.append(key)
                continue
            seen.add(key)
            result.vars[key] = value

    result.removed.sort()
    return result