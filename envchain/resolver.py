"""Resolve a named context, following its chain of parent contexts."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

_REFERENCE = re.compile(
    r"\$(?:\{(?P<braced>[^}]*)\}|(?P<open>\{)|(?P<special>[*#$@!?\-0-9])|(?P<name>[A-Za-z_][A-Za-z0-9_]*))"
)


def _lookup(name: str) -> str:
    value = os.environ.get(name)
    return value if value is not None else "$" + name


def _replace(match: re.Match[str]) -> str:
    if match["braced"] is not None:
        return _lookup(match["braced"]) if match["braced"] else ""
    if match["open"] is not None:
        return ""
    return _lookup(match["special"] or match["name"])


def expand_env(value: str) -> str:
    """Replace ``$VAR`` and ``${VAR}`` with values from the OS environment.

    Unset variables are left as ``$VAR``; malformed ``${}`` and an unclosed
    ``${`` are dropped, and a ``$`` not followed by a name is kept.
    """
    return _REFERENCE.sub(_replace, value)


@dataclass
class ResolvedContext:
    """The merged variables of a context."""

    name: str
    vars: dict[str, str] = field(default_factory=dict)

    def to_env_list(self) -> list[str]:
        """Return the variables as ``KEY=VALUE`` strings with upper-cased keys."""
        return [f"{key.upper()}={value}" for key, value in self.vars.items()]


@dataclass(frozen=True)
class _RawContext:
    extends: str
    vars: Mapping[str, str]


class Resolver:
    """Merges context variables along their ``extends`` chain."""

    def __init__(
        self,
        defs: Mapping[str, Mapping[str, str] | None],
        extends: Mapping[str, str] | None = None,
    ) -> None:
        extends = extends or {}
        self._contexts = {
            name: _RawContext(extends=extends.get(name, ""), vars=vars or {})
            for name, vars in defs.items()
        }

    def resolve(self, name: str) -> ResolvedContext:
        """Return the context ``name`` with inherited variables merged in."""
        return ResolvedContext(name=name, vars=self._merge(name, set()))

    def _merge(self, name: str, seen: set[str]) -> dict[str, str]:
        if name in seen:
            raise ValueError(f"circular extends detected at context {name!r}")
        seen.add(name)
        try:
            ctx = self._contexts[name]
        except KeyError:
            raise LookupError(f"context {name!r} not found") from None
        base = self._merge(ctx.extends, seen) if ctx.extends else {}
        base.update((key, expand_env(value)) for key, value in ctx.vars.items())
        return base