"""In-memory registry of named, ordered chains of contexts."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Chain:
    """An ordered sequence of context names applied in turn."""

    name: str
    contexts: list[str] = field(default_factory=list)


class ChainStore:
    """Holds named chains."""

    def __init__(self) -> None:
        self._chains: dict[str, Chain] = {}

    def set(self, name: str, contexts: list[str]) -> None:
        """Register ``name`` with the given non-empty, duplicate-free contexts."""
        if not name:
            raise ValueError("chain name must not be empty")
        contexts = list(contexts)
        if not contexts:
            raise ValueError(f"chain {name!r} must have at least one context")
        seen: set[str] = set()
        for ctx in contexts:
            if not ctx:
                raise ValueError(f"chain {name!r} contains an empty context name")
            if ctx in seen:
                raise ValueError(f"chain {name!r} contains duplicate context {ctx!r}")
            seen.add(ctx)
        self._chains[name] = Chain(name=name, contexts=contexts)

    def get(self, name: str) -> Chain:
        try:
            return self._chains[name]
        except KeyError:
            raise LookupError(f"chain {name!r} not found") from None

    def delete(self, name: str) -> None:
        if self._chains.pop(name, None) is None:
            raise LookupError(f"chain {name!r} not found")

    def list(self) -> list[Chain]:
        """Return all chains sorted by name."""
        return sorted(self._chains.values(), key=lambda c: c.name)