"""Copy a named context into a new name, optionally keeping only some keys."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Entry:
    """A single environment variable within a context."""

    key: str
    value: str


@dataclass
class ClonedContext:
    """A named collection of environment entries."""

    name: str
    entries: list[Entry] = field(default_factory=list)


class Cloner:
    """Clones contexts out of a mapping of context name to entries."""

    def __init__(self, source: Mapping[str, Sequence[Entry]]) -> None:
        if source is None:
            raise ValueError("clone: source map must not be nil")
        self._source = source

    def clone(
        self,
        src_name: str,
        dst_name: str,
        filter_keys: Iterable[str] | None = None,
    ) -> ClonedContext:
        """Return a copy of ``src_name`` named ``dst_name``.

        When ``filter_keys`` is non-empty only those keys are kept.
        """
        if not dst_name:
            raise ValueError("clone: destination name must not be empty")
        try:
            entries = self._source[src_name]
        except KeyError:
            raise LookupError(f"clone: source context {src_name!r} not found") from None
        wanted = set(filter_keys or ())
        cloned = [
            Entry(e.key, e.value) for e in entries if not wanted or e.key in wanted
        ]
        return ClonedContext(name=dst_name, entries=cloned)