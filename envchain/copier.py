"""Copy environment variables from one context map into another."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass
class CopyResult:
    """What a copy did: keys copied, keys skipped, and the overwrite mode."""

    copied: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    overwrite: bool = False

    def summary(self) -> str:
        return f"copied {len(self.copied)} vars, skipped {len(self.skipped)}"


class Copier:
    """Merges one env map into another, optionally replacing existing keys."""

    def __init__(self, overwrite: bool = False) -> None:
        self.overwrite = overwrite

    def copy(
        self,
        src: Mapping[str, str],
        dst: Mapping[str, str] | None = None,
    ) -> tuple[dict[str, str], CopyResult]:
        """Return a new map of ``dst`` with ``src`` merged in, and a result.

        Keys are processed in sorted order; neither input is modified.
        """
        if src is None:
            raise ValueError("source context is nil")
        out = dict(dst or {})
        result = CopyResult(overwrite=self.overwrite)
        for key in sorted(src):
            if key in out and not self.overwrite:
                result.skipped.append(key)
                continue
            out[key] = src[key]
            result.copied.append(key)
        return out, result