"""Render resolved environment variables as dotenv, shell exports or JSON."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import TextIO

_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


class Format(str, Enum):
    DOTENV = "dotenv"
    EXPORT = "export"
    JSON = "json"


def _quote(text: str) -> str:
    """Double-quote ``text`` with backslash escapes for special characters."""
    parts = []
    for ch in text:
        code = ord(ch)
        if ch in _ESCAPES:
            parts.append(_ESCAPES[ch])
        elif ch.isprintable():
            parts.append(ch)
        elif code < 0x80:
            parts.append(f"\\x{code:02x}")
        elif code <= 0xFFFF:
            parts.append(f"\\u{code:04x}")
        else:
            parts.append(f"\\U{code:08x}")
    return '"' + "".join(parts) + '"'


def _quote_value(value: str) -> str:
    if any(ch in value for ch in " \t\n#"):
        return _quote(value)
    return value


class Exporter:
    """Serialises env maps in one format, keys in sorted order."""

    def __init__(self, fmt: Format | str) -> None:
        try:
            self.format = Format(fmt)
        except ValueError:
            raise ValueError(
                f"unsupported format {str(fmt)!r}: must be one of dotenv, export, json"
            ) from None

    def render(self, env: Mapping[str, str]) -> str:
        """Return ``env`` rendered in the configured format."""
        keys = sorted(env)
        if self.format is Format.DOTENV:
            return "".join(f"{k}={_quote_value(env[k])}\n" for k in keys)
        if self.format is Format.EXPORT:
            return "".join(f"export {k}={_quote_value(env[k])}\n" for k in keys)
        lines = ",\n".join(f"  {_quote(k)}: {_quote(env[k])}" for k in keys)
        return "{\n" + lines + "\n}\n"

    def write(self, stream: TextIO, env: Mapping[str, str]) -> None:
        """Write the rendered ``env`` to ``stream``."""
        stream.write(self.render(env))