"""Compare two environment variable maps key by key."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass
class CompareResult:
    """How two env maps relate: keys unique to each side, changed and shared."""

    only_in_left: dict[str, str] = field(default_factory=dict)
    only_in_right: dict[str, str] = field(default_factory=dict)
    different: dict[str, tuple[str, str]] = field(default_factory=dict)
    shared: dict[str, str] = field(default_factory=dict)

    def summary(self) -> str:
        """Return a one-line description of the comparison."""
        return (
            f"+{len(self.only_in_right)} added, -{len(self.only_in_left)} removed, "
            f"~{len(self.different)} changed, {len(self.shared)} shared"
        )

    def keys(self) -> list[str]:
        """Return every key that differs between the two sides, sorted."""
        return sorted({*self.only_in_left, *self.only_in_right, *self.different})


def compare(left: Mapping[str, str], right: Mapping[str, str]) -> CompareResult:
    """Compare ``left`` with ``right`` and classify every key."""
    result = CompareResult()
    for key, left_value in left.items():
        if key in right:
            right_value = right[key]
            if left_value == right_value:
                result.shared[key] = left_value
            else:
                result.different[key] = (left_value, right_value)
        else:
            result.only_in_left[key] = left_value
    for key, right_value in right.items():
        if key not in left:
            result.only_in_right[key] = right_value
    return result