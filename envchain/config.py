"""Load and validate envchain YAML configuration files."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

import yaml


class ConfigError(ValueError):
    """Raised when a config file cannot be read, parsed or validated."""


@dataclass
class ContextDef:
    """One context in a config file: its variables and optional parent."""

    vars: dict[str, str] = field(default_factory=dict)
    extends: str = ""


@dataclass
class Config:
    """The top-level structure of an envchain config file."""

    version: str
    contexts: dict[str, ContextDef] = field(default_factory=dict)

    def to_resolver_inputs(self) -> tuple[dict[str, dict[str, str]], dict[str, str]]:
        """Return the definitions and extends maps a resolver is built from."""
        defs = {name: ctx.vars for name, ctx in self.contexts.items()}
        extends = {name: ctx.extends for name, ctx in self.contexts.items() if ctx.extends}
        return defs, extends


class _UniqueKeyLoader(yaml.SafeLoader):
    """A safe loader that rejects mappings with repeated keys."""

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            try:
                duplicate = key in seen
            except TypeError:
                continue
            if duplicate:
                raise yaml.constructor.ConstructorError(
                    None, None, f"mapping key {key!r} already defined", key_node.start_mark
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def _scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        raise ConfigError(f"parsing config: expected a scalar, got {type(value).__name__}")
    return str(value)


def _mapping(value: Any, what: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"parsing config: {what} must be a mapping")
    return value


def _build(raw: Any) -> Config:
    data = _mapping(raw, "document")
    contexts = {}
    for name, body in _mapping(data.get("contexts"), "contexts").items():
        body = _mapping(body, f"context {name!r}")
        contexts[_scalar(name)] = ContextDef(
            vars={
                _scalar(k): _scalar(v)
                for k, v in _mapping(body.get("vars"), f"vars of {name!r}").items()
            },
            extends=_scalar(body.get("extends")),
        )
    return Config(version=_scalar(data.get("version")), contexts=contexts)


def _validate(cfg: Config) -> None:
    if not cfg.version:
        raise ConfigError("config missing required field: version")
    for name, ctx in cfg.contexts.items():
        if ctx.extends and ctx.extends not in cfg.contexts:
            raise ConfigError(f"context {name!r} extends unknown context {ctx.extends!r}")


def load(path: str | os.PathLike[str]) -> Config:
    """Read, parse and validate the config file at ``path``."""
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        raise ConfigError(f"reading config: {exc}") from exc
    try:
        raw = yaml.load(text, Loader=_UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ConfigError(f"parsing config: {exc}") from exc
    cfg = _build(raw)
    _validate(cfg)
    return cfg