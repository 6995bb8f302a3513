"""Collapse nested mappings into flat environment variable maps."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class FlattenResult:
    """Flattened variables and warnings about skipped values."""

    vars: dict[str, str] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def _format_scalar(value: Any) -> str | None:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    return None


def _walk(
    src: Mapping[str, Any],
    prefix: str,
    separator: str,
    upper_case: bool,
    result: FlattenResult,
) -> None:
    for key in sorted(src):
        value = src[key]
        full = f"{prefix}{separator}{key}" if prefix else key
        if upper_case:
            full = full.upper()
        if isinstance(value, Mapping):
            _walk(value, full, separator, upper_case, result)
            continue
        text = _format_scalar(value)
        if text is None:
            result.warnings.append(
                f"skipped {json.dumps(full)}: unsupported type {type(value).__name__}"
            )
        else:
            result.vars[full] = text


def flatten(
    src: Mapping[str, Any] | None,
    separator: str = "_",
    prefix: str = "",
    upper_case: bool = False,
) -> FlattenResult:
    """Flatten ``src`` into ``KEY -> string`` pairs.

    Nested mappings are joined with ``separator`` (``"_"`` when empty);
    strings, numbers, booleans and ``None`` become strings; other values
    are skipped with a warning.
    """
    result = FlattenResult()
    if src is None:
        return result
    _walk(src, prefix, separator or "_", upper_case, result)
    return result