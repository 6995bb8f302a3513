"""Select environment variables by key prefix, pattern and exclusions."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping


def filter_vars(
    vars: Mapping[str, str],
    key_prefix: str = "",
    key_pattern: str = "",
    exclude_keys: Iterable[str] = (),
    invert_match: bool = False,
) -> dict[str, str]:
    """Return the variables whose keys match every given criterion.

    With ``invert_match`` the variables that do not match are returned instead.
    """
    regex = None
    if key_pattern:
        try:
            regex = re.compile(key_pattern)
        except re.error as exc:
            raise ValueError(f"invalid key pattern {key_pattern!r}: {exc}") from exc
    excluded = set(exclude_keys)

    def matches(key: str) -> bool:
        if key_prefix and not key.startswith(key_prefix):
            return False
        if regex is not None and not regex.search(key):
            return False
        return key not in excluded

    return {k: v for k, v in vars.items() if matches(k) != invert_match}