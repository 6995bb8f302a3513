"""Persistent short-name aliases that map labels to context names.

Each alias is stored as its own JSON file inside a directory, which keeps
them easy to inspect or keep under version control.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path


@dataclass(frozen=True)
class Alias:
    """A short name pointing at a context name."""

    name: str
    context: str


class AliasStore:
    """Stores aliases as JSON files in a directory."""

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self.directory = Path(directory)
        try:
            self.directory.mkdir(mode=0o700, parents=True, exist_ok=True)
        except OSError as exc:
            raise OSError(f"alias: create dir: {exc}") from exc

    def _path(self, name: str) -> Path:
        return self.directory / f"{name}.json"

    def set(self, name: str, context: str) -> None:
        """Create or replace the alias ``name``."""
        if not name:
            raise ValueError("alias: name must not be empty")
        if not context:
            raise ValueError("alias: context must not be empty")
        path = self._path(name)
        path.write_text(json.dumps(asdict(Alias(name, context)), indent=2))
        os.chmod(path, 0o600)

    def get(self, name: str) -> Alias:
        """Return the alias ``name``; raise LookupError if it does not exist."""
        try:
            data = self._path(name).read_text()
        except FileNotFoundError:
            raise LookupError(f"alias: {name!r} not found") from None
        try:
            raw = json.loads(data)
            return Alias(name=raw.get("name", ""), context=raw.get("context", ""))
        except (json.JSONDecodeError, AttributeError) as exc:
            raise ValueError(f"alias: unmarshal: {exc}") from exc

    def delete(self, name: str) -> None:
        """Remove the alias ``name``; raise LookupError if it does not exist."""
        try:
            self._path(name).unlink()
        except FileNotFoundError:
            raise LookupError(f"alias: {name!r} not found") from None

    def list(self) -> list[Alias]:
        """Return every readable alias, sorted by name."""
        if not self.directory.exists():
            return []
        aliases = []
        for path in self.directory.iterdir():
            if path.suffix != ".json":
                continue
            try:
                aliases.append(self.get(path.stem))
            except (LookupError, ValueError, OSError):
                continue
        return sorted(aliases, key=lambda a: a.name)