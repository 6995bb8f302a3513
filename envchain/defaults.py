"""Fill in default values for missing or empty keys of an env map.

Each :class:`DefaultEntry` names a key, its fallback value and whether an
existing non-empty value should be replaced anyway::

    entries = [
        DefaultEntry("LOG_LEVEL", "info"),
        DefaultEntry("PORT", "8080"),
        DefaultEntry("ENV", "production", override=True),
    ]
    print(apply_defaults(env, entries).summary())
"""

from __future__ import annotations

from collections.abc import Iterable, MutableMapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class DefaultEntry:
    """A fallback value for one key."""

    key: str
    value: str
    override: bool = False


@dataclass
class DefaultsResult:
    """Which keys were filled in, left alone, or overridden."""

    applied: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    overrode: list[str] = field(default_factory=list)

    def summary(self) -> str:
        return (
            f"applied={len(self.applied)} skipped={len(self.skipped)} "
            f"overrode={len(self.overrode)}"
        )


def apply_defaults(
    dst: MutableMapping[str, str],
    entries: Iterable[DefaultEntry] | None,
) -> DefaultsResult:
    """Apply ``entries`` to ``dst`` in place; entries with an empty key are ignored."""
    if dst is None:
        raise ValueError("defaults: dst map must not be nil")
    result = DefaultsResult()
    for entry in entries or ():
        if not entry.key:
            continue
        if not dst.get(entry.key):
            dst[entry.key] = entry.value
            result.applied.append(entry.key)
        elif entry.override:
            dst[entry.key] = entry.value
            result.overrode.append(entry.key)
        else:
            result.skipped.append(entry.key)
    return result