import pytest

from envchain.config import Config, ConfigError, ContextDef, load


@pytest.fixture
def write(tmp_path):
    def _write(content):
        path = tmp_path / "envchain.yaml"
        path.write_text(content)
        return path

    return _write


def test_load_valid_config(write):
    path = write(
        """
version: "1"
contexts:
  dev:
    vars:
      APP_ENV: development
  prod:
    extends: dev
    vars:
      APP_ENV: production
"""
    )
    cfg = load(path)
    assert len(cfg.contexts) == 2
    assert cfg.version == "1"
    assert cfg.contexts["prod"].extends == "dev"
    assert cfg.contexts["prod"].vars == {"APP_ENV": "production"}


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load(tmp_path / "nope.yaml")


def test_load_missing_version(write):
    path = write("contexts:\n  dev:\n    vars:\n      X: y\n")
    with pytest.raises(ConfigError, match="version"):
        load(path)


def test_load_unknown_extends(write):
    path = write(
        """
version: "1"
contexts:
  staging:
    extends: base
    vars:
      APP_ENV: staging
"""
    )
    with pytest.raises(ConfigError, match="unknown context"):
        load(path)


def test_load_duplicate_context(write):
    path = write(
        """
version: "1"
contexts:
  dev:
    vars: {A: "1"}
  dev:
    vars: {A: "2"}
"""
    )
    with pytest.raises(ConfigError):
        load(path)


def test_numeric_scalars_become_strings(write):
    path = write("version: 1\ncontexts:\n  dev:\n    vars:\n      PORT: 8080\n      DEBUG: true\n")
    cfg = load(path)
    assert cfg.version == "1"
    assert cfg.contexts["dev"].vars == {"PORT": "8080", "DEBUG": "true"}


def test_invalid_yaml(write):
    path = write("version: [unclosed\n")
    with pytest.raises(ConfigError):
        load(path)


def test_to_resolver_inputs(write):
    path = write(
        """
version: "1"
contexts:
  base:
    vars:
      LOG: info
  dev:
    extends: base
    vars:
      APP_ENV: dev
"""
    )
    defs, extends = load(path).to_resolver_inputs()
    assert defs["base"] == {"LOG": "info"}
    assert extends == {"dev": "base"}


def test_to_resolver_inputs_direct():
    cfg = Config(version="1", contexts={"a": ContextDef(vars={"X": "1"})})
    assert cfg.to_resolver_inputs() == ({"a": {"X": "1"}}, {})