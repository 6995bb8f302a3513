# envchain

Tools for working with environment-variable contexts: named sets of
variables that can extend one another, and that can be compared, diffed,
exported, frozen, encrypted and organised into aliases, chains and groups.

## Installation

```
pip install .
```

This installs the `envchain` command.

## Command line

```
envchain alias set prod production-us-east
envchain alias list
envchain alias delete prod

envchain group set backend dev,staging
envchain group list
envchain group delete backend

envchain chain set release dev,staging,prod
envchain chain show release

envchain diff dev prod --config envchain.yaml
envchain freeze --set APP_ENV=prod --diff APP_ENV=staging
envchain dedupe --source '{"HOST":"a"}' --source '{"HOST":"b"}' --strategy last
echo '{"PORT":""}' | envchain defaults --set PORT=8080
envchain encrypt --passphrase placeholder my-value
envchain encrypt --decrypt --passphrase placeholder <ciphertext>
envchain audit --log .envchain-audit.log --limit 20
```

What each command does:

- `alias set|list|delete` – keep short names for contexts, one JSON file
  per alias under `~/.envchain/aliases` (or `--alias-dir`).
- `group set|list|delete` – keep named lists of contexts, one JSON file per
  group under `~/.envchain/groups` (or `--dir`).
- `chain set|show|list|delete` – named, ordered, duplicate-free lists of
  contexts.
- `diff FROM TO` – resolve two contexts from a config file (`-c`, default
  `envchain.yaml`) and print added (`+`), removed (`-`) and modified (`~`)
  variables with a summary; `-u` also lists unchanged ones.
- `freeze --set K=V ...` – print the frozen map as JSON; with
  `--diff K=V ...` print the keys that drifted (`+KEY` for keys only in
  the live set).
- `dedupe --source JSON ...` – merge JSON maps, keeping the `first` or
  `last` value of repeated keys (`--strategy`); `--keys` restricts which
  keys are deduplicated.
- `defaults --set K=V ...` – read a JSON map from stdin, fill in missing or
  empty keys (`--override` replaces non-empty ones too) and print it.
- `encrypt VALUE -p PASSPHRASE` – AES-GCM encrypt a value (key is the
  SHA-256 of the passphrase), output base64; `-d` decrypts.
- `audit` – show the newest entries of a JSON-lines audit log, newest first.

Run `envchain --help` or `envchain <command> --help` for every option.
The command exits with status 1 and an `Error:` message on failure.

## Config file

```yaml
version: "1"
contexts:
  base:
    vars:
      LOG_LEVEL: info
  dev:
    extends: base
    vars:
      APP_ENV: development
```

`version` is required, repeated keys are rejected, and `extends` must name
a context in the same file. A context inherits the variables of the
context it extends and overrides them with its own; circular `extends`
chains are an error. Values may reference OS variables as `$NAME` or
`${NAME}`; unset ones are left as `$NAME`.

## Library use

```python
from envchain.config import load
from envchain.resolver import Resolver
from envchain.exporter import Exporter, Format

cfg = load("envchain.yaml")
resolver = Resolver(*cfg.to_resolver_inputs())
ctx = resolver.resolve("dev")
print(Exporter(Format.DOTENV).render(ctx.vars))
```

Modules:

- `envchain.config` – `load`, `Config`, `ContextDef`, `ConfigError`.
- `envchain.resolver` – `Resolver`, `ResolvedContext`, `expand_env`.
- `envchain.exporter` – `Exporter` with `render`/`write` in `Format.DOTENV`,
  `Format.EXPORT` or `Format.JSON`, keys sorted.
- `envchain.compare` – `compare` and `CompareResult`.
- `envchain.diff` – `diff_vars`, `DiffResult`, `Change`, `ChangeType`.
- `envchain.filtering` – `filter_vars` by prefix, regex, exclusions, inverted.
- `envchain.flatten` – `flatten` nested mappings into string maps.
- `envchain.interpolate` – `Interpolator` for `${VAR}` and `${VAR:-default}`;
  raises `UnresolvedVariableError`.
- `envchain.dedupe` – `dedupe` and `Strategy`.
- `envchain.defaults` – `apply_defaults` and `DefaultEntry`.
- `envchain.freeze` – `Freezer`.
- `envchain.encrypt` – `Encryptor` and `DecryptionError`.
- `envchain.cloner` – `Cloner` copies a context under a new name.
- `envchain.copier` – `Copier` merges one map into another.
- `envchain.alias`, `envchain.group` – `AliasStore`, `GroupStore` on disk.
- `envchain.chain` – `ChainStore`, in memory.
- `envchain.audit` – `AuditLogger`, `AuditMiddleware`, `read_all`.

## What it does not do

- Chains are kept in memory only: `chain set` in one run is gone by the
  next, so `chain show` and `chain list` only see chains of the same
  process.
- No command writes the audit log; `envchain audit` only reads it. Entries
  are written through `AuditLogger` or `AuditMiddleware` from Python.
- There is no command to export, validate, filter, flatten, clone or copy
  contexts; those are available as library functions only.

## Tests

```
pip install .[test]
pytest
```