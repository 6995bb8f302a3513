"""Expand ``${VAR}`` and ``${VAR:-default}`` references inside values."""

from __future__ import annotations

import os
import re
from collections.abc import Callable, Mapping

_PLACEHOLDER = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-(.*?))?\}")


class UnresolvedVariableError(LookupError):
    """A reference had no value and no inline default."""

    def __init__(self, name: str, key: str | None = None) -> None:
        self.name = name
        self.key = key
        message = f"unresolved variable: {name}"
        if key is not None:
            message = f"key {key}: {message}"
        super().__init__(message)


class Interpolator:
    """Resolves references from a variable map, then a lookup, then a default."""

    def __init__(
        self,
        vars: Mapping[str, str] | None = None,
        lookup: Callable[[str], str | None] | None = None,
    ) -> None:
        self.vars = dict(vars or {})
        self.lookup = lookup if lookup is not None else os.environ.get

    def _replace(self, match: re.Match[str]) -> str:
        name, default = match.group(1), match.group(2)
        if name in self.vars:
            return self.vars[name]
        found = self.lookup(name)
        if found is not None:
            return found
        if default is not None:
            return default
        raise UnresolvedVariableError(name)

    def resolve(self, text: str) -> str:
        """Expand every reference in ``text``."""
        return _PLACEHOLDER.sub(self._replace, text)

    def resolve_all(self, vars: Mapping[str, str]) -> dict[str, str]:
        """Return a new map with every value expanded."""
        out = {}
        for key, value in vars.items():
            try:
                out[key] = self.resolve(value)
            except UnresolvedVariableError as exc:
                raise UnresolvedVariableError(exc.name, key) from exc
        return out