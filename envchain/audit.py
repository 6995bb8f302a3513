"""Append-only audit log of envchain actions, stored as JSON lines."""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, TextIO

ACTION_EXPORT = "export"
ACTION_VALIDATE = "validate"
ACTION_DIFF = "diff"

_TIMESTAMP_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?"
    r"(?P<tz>Z|[+-]\d{2}:\d{2})?$"
)


@dataclass
class AuditEntry:
    """A single audit log event."""

    timestamp: datetime
    action: str
    context: str
    vars: list[str] = field(default_factory=list)
    meta: dict[str, str] = field(default_factory=dict)


def _format_timestamp(ts: datetime) -> str:
    text = ts.astimezone(timezone.utc).isoformat()
    return text.replace("+00:00", "Z")


def _parse_timestamp(text: str) -> datetime:
    match = _TIMESTAMP_RE.match(text)
    if not match:
        raise ValueError(f"invalid timestamp {text!r}")
    frac = (match["frac"] or "")[:6].ljust(6, "0")
    tz = match["tz"] or "Z"
    if tz == "Z":
        tz = "+00:00"
    return datetime.fromisoformat(f"{match['base']}.{frac}{tz}")


def _entry_to_json(entry: AuditEntry) -> str:
    data: dict[str, Any] = {
        "timestamp": _format_timestamp(entry.timestamp),
        "action": entry.action,
        "context": entry.context,
    }
    if entry.vars:
        data["vars"] = list(entry.vars)
    if entry.meta:
        data["meta"] = dict(entry.meta)
    return json.dumps(data, separators=(",", ":"))


def _entry_from_json(line: str) -> AuditEntry:
    data = json.loads(line)
    if not isinstance(data, dict):
        raise ValueError("entry is not a JSON object")
    return AuditEntry(
        timestamp=_parse_timestamp(data["timestamp"]),
        action=data.get("action", ""),
        context=data.get("context", ""),
        vars=list(data.get("vars") or []),
        meta=dict(data.get("meta") or {}),
    )


class AuditLogger:
    """Writes audit entries as JSON lines to a file opened for appending."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.fspath(path)
        fd = os.open(self.path, os.O_APPEND | os.O_CREAT | os.O_WRONLY, 0o600)
        self._file: TextIO = os.fdopen(fd, "a", encoding="utf-8")

    def log(
        self,
        action: str,
        context: str,
        vars: list[str] | None = None,
        meta: dict[str, str] | None = None,
    ) -> None:
        """Append one entry stamped with the current UTC time."""
        entry = AuditEntry(
            timestamp=datetime.now(timezone.utc),
            action=action,
            context=context,
            vars=list(vars or []),
            meta=dict(meta or {}),
        )
        self._file.write(_entry_to_json(entry) + "\n")
        self._file.flush()

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> AuditLogger:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def read_all(path: str | os.PathLike[str]) -> list[AuditEntry]:
    """Parse every entry in the log at ``path``; blank lines are ignored."""
    with open(path, encoding="utf-8") as handle:
        text = handle.read()
    entries = []
    for line in text.split("\n"):
        if not line:
            continue
        try:
            entries.append(_entry_from_json(line))
        except (ValueError, KeyError, TypeError) as exc:
            raise ValueError(f"audit: parse line: {exc}") from exc
    return entries


class AuditMiddleware:
    """Records common envchain actions; does nothing when no path is given."""

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self._logger = AuditLogger(path) if path else None

    @property
    def enabled(self) -> bool:
        return self._logger is not None

    def log_export(self, context: str, fmt: str, vars: list[str] | None = None) -> None:
        if self._logger:
            self._logger.log(ACTION_EXPORT, context, vars, {"format": fmt})

    def log_validate(self, context: str, vars: list[str] | None = None) -> None:
        if self._logger:
            self._logger.log(ACTION_VALIDATE, context, vars, None)

    def log_diff(self, context_a: str, context_b: str) -> None:
        if self._logger:
            self._logger.log(ACTION_DIFF, context_a, None, {"compare_to": context_b})

    def close(self) -> None:
        if self._logger:
            self._logger.close()

    def __enter__(self) -> AuditMiddleware:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()