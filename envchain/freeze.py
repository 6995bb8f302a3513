"""Immutable snapshots of env maps, for detecting drift later on.

Freeze a baseline, then compare it with the live environment::

    frozen = Freezer(env)
    changed = frozen.diff_from(current_env)
    if changed:
        print("env has drifted:", changed)
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping


class Freezer:
    """Holds a private copy of an env map that cannot be changed."""

    def __init__(self, source: Mapping[str, str]) -> None:
        if source is None:
            raise ValueError("source map must not be nil")
        self._frozen: dict[str, str] = dict(source)

    def get(self, key: str) -> str | None:
        """Return the frozen value of ``key``, or None when it is absent."""
        return self._frozen.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._frozen

    def __len__(self) -> int:
        return len(self._frozen)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def keys(self) -> list[str]:
        """Return all frozen keys, sorted."""
        return sorted(self._frozen)

    def snapshot(self) -> dict[str, str]:
        """Return a copy of the frozen map."""
        return dict(self._frozen)

    def diff_from(self, live: Mapping[str, str]) -> list[str]:
        """Return the keys that differ from ``live``, sorted.

        Keys missing from or changed in ``live`` are listed by name; keys
        only present in ``live`` are listed with a leading ``+``.
        """
        changed = [
            key
            for key, value in self._frozen.items()
            if key not in live or live[key] != value
        ]
        changed.extend(f"+{key}" for key in live if key not in self._frozen)
        return sorted(changed)