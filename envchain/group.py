"""Named groups of contexts, persisted as JSON files in a directory."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path


@dataclass
class Group:
    """A label associated with a set of context names."""

    name: str
    contexts: list[str] = field(default_factory=list)


class GroupStore:
    """Stores groups as JSON files in a directory."""

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(mode=0o750, parents=True, exist_ok=True)

    def _path(self, name: str) -> Path:
        return self.directory / f"{name}.json"

    def save(self, group: Group) -> None:
        """Write ``group`` to disk, replacing any existing entry."""
        if not group.name:
            raise ValueError("group name must not be empty")
        if not group.contexts:
            raise ValueError("group must contain at least one context")
        path = self._path(group.name)
        path.write_text(json.dumps(asdict(group), indent=2))
        os.chmod(path, 0o640)

    def load(self, name: str) -> Group:
        try:
            data = self._path(name).read_text()
        except FileNotFoundError:
            raise LookupError(f"group not found: {name}") from None
        raw = json.loads(data)
        return Group(name=raw.get("name", ""), contexts=list(raw.get("contexts") or []))

    def delete(self, name: str) -> None:
        try:
            self._path(name).unlink()
        except FileNotFoundError:
            raise LookupError(f"group not found: {name}") from None

    def list(self) -> list[Group]:
        """Return all saved groups sorted by name."""
        groups = [
            self.load(path.stem)
            for path in self.directory.iterdir()
            if not path.is_dir() and path.suffix == ".json"
        ]
        return sorted(groups, key=lambda g: g.name)