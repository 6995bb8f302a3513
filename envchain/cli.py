"""Command-line interface for managing and inspecting environment contexts."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, TextIO

from envchain import config as config_mod
from envchain.alias import AliasStore
from envchain.audit import read_all
from envchain.chain import ChainStore
from envchain.dedupe import Strategy, dedupe
from envchain.defaults import DefaultEntry, apply_defaults
from envchain.diff import ChangeType, diff_vars
from envchain.encrypt import Encryptor
from envchain.freeze import Freezer
from envchain.group import Group, GroupStore
from envchain.resolver import Resolver

_CHAIN_STORE = ChainStore()

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _dump_json(value: Any) -> str:
    """Serialise ``value`` as indented JSON with sorted keys and HTML-safe text."""
    text = json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False)
    for char, escape in _JSON_ESCAPES.items():
        text = text.replace(char, escape)
    return text


def _quoted(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _table(rows: Sequence[Sequence[str]], padding: int = 2) -> str:
    """Align ``rows`` into columns; the last cell of each row is not padded."""
    columns = max((len(row) for row in rows), default=0)
    widths = [
        max((len(row[i]) for row in rows if i < len(row) - 1), default=0) + padding
        for i in range(columns)
    ]
    lines = []
    for row in rows:
        cells = [cell.ljust(widths[i]) for i, cell in enumerate(row[:-1])]
        lines.append("".join(cells) + (row[-1] if row else ""))
    return "".join(line + "\n" for line in lines)


def _parse_env_map(text: str) -> dict[str, str] | None:
    """Decode the first JSON value in ``text`` as a string map; ``null`` gives None."""
    stripped = text.lstrip()
    if not stripped:
        raise ValueError("EOF")
    value, _ = json.JSONDecoder().raw_decode(stripped)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError(f"cannot decode {type(value).__name__} into a string map")
    for key, item in value.items():
        if item is not None and not isinstance(item, str):
            raise ValueError(f"value of {key!r} is not a string")
    return {key: item or "" for key, item in value.items()}


def _read_stdin_map(stream: TextIO | None = None) -> dict[str, str] | None:
    stream = stream if stream is not None else sys.stdin
    try:
        return _parse_env_map(stream.read())
    except ValueError as exc:
        raise ValueError(f"failed to decode stdin: {exc}") from exc


def _parse_pairs(pairs: Iterable[str]) -> dict[str, str]:
    out = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"invalid pair {_quoted(pair)}: expected KEY=VALUE")
        out[key] = value
    return out


def _split_list(values: Iterable[str] | None) -> list[str]:
    return [part for value in values or () for part in value.split(",")]


def _format_rfc3339(ts: datetime) -> str:
    base = ts.strftime("%Y-%m-%dT%H:%M:%S")
    offset = ts.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return base + "Z"
    sign = "+" if offset > timedelta(0) else "-"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{base}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


# ---------------------------------------------------------------- alias


def _default_alias_dir() -> Path:
    return Path.home() / ".envchain" / "aliases"


def _alias_store(directory: str) -> AliasStore:
    return AliasStore(directory or _default_alias_dir())


def _alias_set(args: argparse.Namespace) -> None:
    _alias_store(args.alias_dir).set(args.name, args.context)
    print(f"alias {_quoted(args.name)} -> {_quoted(args.context)} saved")


def _alias_list(args: argparse.Namespace) -> None:
    aliases = _alias_store(args.alias_dir).list()
    if not aliases:
        print("no aliases defined")
        return
    rows = [["NAME", "CONTEXT"]] + [[a.name, a.context] for a in aliases]
    sys.stdout.write(_table(rows))


def _alias_delete(args: argparse.Namespace) -> None:
    _alias_store(args.alias_dir).delete(args.name)
    print(f"alias {_quoted(args.name)} deleted")


# ---------------------------------------------------------------- audit


def _audit(args: argparse.Namespace) -> None:
    try:
        entries = read_all(args.log)
    except FileNotFoundError:
        print("no audit log found")
        return
    except (OSError, ValueError) as exc:
        raise ValueError(f"reading audit log: {exc}") from exc
    if not entries:
        print("audit log is empty")
        return
    if args.limit > 0 and len(entries) > args.limit:
        entries = entries[-args.limit:]
    rows = [["TIMESTAMP", "ACTION", "CONTEXT", "VARS"]]
    for entry in reversed(entries):
        rows.append([
            _format_rfc3339(entry.timestamp),
            entry.action,
            entry.context,
            str(len(entry.vars)) if entry.vars else "-",
        ])
    sys.stdout.write(_table(rows))


# ---------------------------------------------------------------- chain


def _chain_set(args: argparse.Namespace) -> None:
    _CHAIN_STORE.set(args.name, args.contexts.split(","))


def _chain_show(args: argparse.Namespace) -> None:
    chain = _CHAIN_STORE.get(args.name)
    print(f"chain: {chain.name}")
    for number, ctx in enumerate(chain.contexts, start=1):
        print(f"  {number}. {ctx}")


def _chain_list(args: argparse.Namespace) -> None:
    chains = _CHAIN_STORE.list()
    if not chains:
        print("no chains defined")
        return
    for chain in chains:
        print(f"{chain.name}: {' -> '.join(chain.contexts)}")


def _chain_delete(args: argparse.Namespace) -> None:
    _CHAIN_STORE.delete(args.name)


# ---------------------------------------------------------------- dedupe


def _dedupe(args: argparse.Namespace) -> None:
    maps = []
    for raw in args.source:
        try:
            parsed = _parse_env_map(raw)
        except ValueError as exc:
            raise ValueError(f"invalid source JSON {_quoted(raw)}: {exc}") from exc
        maps.append(parsed or {})
    strategies = {"first": Strategy.KEEP_FIRST, "last": Strategy.KEEP_LAST}
    if args.strategy not in strategies:
        raise ValueError(
            f"unknown strategy {_quoted(args.strategy)}: must be 'first' or 'last'"
        )
    result = dedupe(maps, strategies[args.strategy], _split_list(args.keys))
    print(_dump_json(result.vars))
    if result.removed:
        print(f"info: {result.summary()}", file=sys.stderr)


# ---------------------------------------------------------------- defaults


def _defaults(args: argparse.Namespace) -> None:
    entries = []
    for pair in args.set:
        key, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"invalid pair {_quoted(pair)}: expected KEY=VALUE")
        entries.append(DefaultEntry(key, value, override=args.override))
    src = _read_stdin_map()
    result = apply_defaults(src, entries)
    print(_dump_json(src))
    print(f"# {result.summary()}", file=sys.stderr)


# ---------------------------------------------------------------- diff


def _diff(args: argparse.Namespace) -> None:
    try:
        cfg = config_mod.load(args.config)
    except config_mod.ConfigError as exc:
        raise config_mod.ConfigError(f"loading config: {exc}") from exc
    defs, extends = cfg.to_resolver_inputs()
    resolver = Resolver(defs, extends)
    resolved = {}
    for name in (args.from_context, args.to_context):
        try:
            resolved[name] = resolver.resolve(name).vars
        except (ValueError, LookupError) as exc:
            raise type(exc)(f"resolving context {_quoted(name)}: {exc}") from exc
    result = diff_vars(resolved[args.from_context], resolved[args.to_context])
    if not result.has_changes():
        print("No differences found.")
        return
    for change in result.changes:
        if change.type is ChangeType.ADDED:
            print(f"+ {change.key}={change.new_value}")
        elif change.type is ChangeType.REMOVED:
            print(f"- {change.key}={change.old_value}")
        elif change.type is ChangeType.MODIFIED:
            print(f"~ {change.key}: {change.old_value} -> {change.new_value}")
        elif args.show_unchanged:
            print(f"  {change.key}={change.new_value}")
    print()
    print(result.summary())


# ---------------------------------------------------------------- encrypt


def _encrypt(args: argparse.Namespace) -> None:
    encryptor = Encryptor(args.passphrase)
    try:
        if args.decrypt:
            output = encryptor.decrypt(args.value)
        else:
            output = encryptor.encrypt(args.value)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise
    print(output)


# ---------------------------------------------------------------- freeze


def _freeze(args: argparse.Namespace) -> None:
    try:
        source = _parse_pairs(args.set)
    except ValueError as exc:
        raise ValueError(f"--set: {exc}") from exc
    frozen = Freezer(source)
    if not args.diff:
        print(_dump_json(frozen.snapshot()))
        return
    try:
        live = _parse_pairs(args.diff)
    except ValueError as exc:
        raise ValueError(f"--diff: {exc}") from exc
    changed = frozen.diff_from(live)
    if not changed:
        print("no drift detected")
        return
    print("drifted keys:")
    for key in changed:
        print(f"  {key}")


# ---------------------------------------------------------------- group


def _default_group_dir() -> str:
    return str(Path.home()) + "/.envchain/groups"


def _group_store(directory: str | None) -> GroupStore:
    return GroupStore(directory or _default_group_dir())


def _group_set(args: argparse.Namespace) -> None:
    _group_store(args.dir).save(Group(name=args.name, contexts=args.contexts.split(",")))


def _group_list(args: argparse.Namespace) -> None:
    groups = _group_store(args.dir).list()
    if not groups:
        print("no groups defined")
        return
    for group in groups:
        print(f"{group.name}\t[{', '.join(group.contexts)}]")


def _group_delete(args: argparse.Namespace) -> None:
    _group_store(args.dir).delete(args.name)


# ---------------------------------------------------------------- parser


def _help_handler(parser: argparse.ArgumentParser) -> Callable[[argparse.Namespace], None]:
    def show(_: argparse.Namespace) -> None:
        parser.print_help()

    return show


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="envchain", description="Manage environment contexts.")
    parser.set_defaults(handler=_help_handler(parser))
    commands = parser.add_subparsers(title="commands", metavar="COMMAND")

    alias = commands.add_parser("alias", help="Manage context aliases")
    alias.set_defaults(handler=_help_handler(alias))
    alias_sub = alias.add_subparsers(metavar="COMMAND")
    p = alias_sub.add_parser("set", help="Create or update an alias")
    p.add_argument("name")
    p.add_argument("context")
    p.set_defaults(handler=_alias_set)
    alias_set = p
    p = alias_sub.add_parser("list", help="List all aliases")
    p.set_defaults(handler=_alias_list)
    alias_list = p
    p = alias_sub.add_parser("delete", help="Delete an alias")
    p.add_argument("name")
    p.set_defaults(handler=_alias_delete)
    for sub in (alias_set, alias_list, p):
        sub.add_argument("--alias-dir", default="", help="directory for alias storage")

    p = commands.add_parser("audit", help="Show audit log of envchain actions")
    p.add_argument("--log", default=".envchain-audit.log", help="path to audit log file")
    p.add_argument("--limit", type=int, default=20, help="max number of entries to show (0 = all)")
    p.set_defaults(handler=_audit)

    chain = commands.add_parser("chain", help="Manage named context chains")
    chain.set_defaults(handler=_help_handler(chain))
    chain_sub = chain.add_subparsers(metavar="COMMAND")
    p = chain_sub.add_parser("set", help="Define a named chain of contexts")
    p.add_argument("name")
    p.add_argument("contexts", metavar="ctx1,ctx2,...")
    p.set_defaults(handler=_chain_set)
    p = chain_sub.add_parser("show", help="Show contexts in a named chain")
    p.add_argument("name")
    p.set_defaults(handler=_chain_show)
    p = chain_sub.add_parser("list", help="List all named chains")
    p.set_defaults(handler=_chain_list)
    p = chain_sub.add_parser("delete", help="Delete a named chain")
    p.add_argument("name")
    p.set_defaults(handler=_chain_delete)

    p = commands.add_parser(
        "dedupe", help="Remove duplicate keys across environment variable sources"
    )
    p.add_argument("--source", action="append", required=True, help="JSON env map (repeatable)")
    p.add_argument("--strategy", default="first", help="dedup strategy: first|last")
    p.add_argument("--keys", action="append", help="restrict dedup to these keys only")
    p.set_defaults(handler=_dedupe)

    p = commands.add_parser("defaults", help="Apply default values to a JSON env map from stdin")
    p.add_argument("--override", action="store_true", help="Replace existing non-empty values")
    p.add_argument("-s", "--set", action="append", required=True,
                   help="Default entry as KEY=VALUE (repeatable)")
    p.set_defaults(handler=_defaults)

    p = commands.add_parser("diff", help="Show variable differences between two contexts")
    p.add_argument("from_context", metavar="from-context")
    p.add_argument("to_context", metavar="to-context")
    p.add_argument("-c", "--config", default="envchain.yaml", help="path to config file")
    p.add_argument("-u", "--show-unchanged", action="store_true",
                   help="include unchanged variables in output")
    p.set_defaults(handler=_diff)

    p = commands.add_parser("encrypt", help="Encrypt or decrypt a single env var value")
    p.add_argument("value")
    p.add_argument("-p", "--passphrase", required=True,
                   help="passphrase for encryption/decryption")
    p.add_argument("-d", "--decrypt", action="store_true",
                   help="decrypt the given value instead of encrypting")
    p.set_defaults(handler=_encrypt)

    p = commands.add_parser("freeze", help="Freeze an env map and optionally diff against a live set")
    p.add_argument("--set", action="append", required=True, help="KEY=VALUE pairs to freeze")
    p.add_argument("--diff", action="append", default=[],
                   help="KEY=VALUE pairs to diff against the frozen snapshot")
    p.set_defaults(handler=_freeze)

    group = commands.add_parser("group", help="Manage named groups of contexts")
    group.add_argument("--dir", default=None, help="group storage directory")
    group.set_defaults(handler=_help_handler(group))
    group_sub = group.add_subparsers(metavar="COMMAND")
    subs = []
    p = group_sub.add_parser("set", help="Create or update a group")
    p.add_argument("name")
    p.add_argument("contexts", metavar="ctx1,ctx2,...")
    p.set_defaults(handler=_group_set)
    subs.append(p)
    p = group_sub.add_parser("list", help="List all groups")
    p.set_defaults(handler=_group_list)
    subs.append(p)
    p = group_sub.add_parser("delete", help="Delete a group")
    p.add_argument("name")
    p.set_defaults(handler=_group_delete)
    subs.append(p)
    for sub in subs:
        sub.add_argument("--dir", default=argparse.SUPPRESS, help="group storage directory")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return its exit status."""
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1
    try:
        args.handler(args)
    except (ValueError, LookupError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())