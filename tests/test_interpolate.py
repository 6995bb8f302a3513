import pytest

from envchain.interpolate import Interpolator, UnresolvedVariableError


def _lookup(key):
    return "from_os" if key == "OS_VAR" else None


def make(vars=None):
    return Interpolator(vars, lookup=_lookup)


def test_no_placeholders():
    assert make().resolve("hello world") == "hello world"


def test_from_vars_map():
    assert make({"HOST": "localhost"}).resolve("http://${HOST}:8080") == "http://localhost:8080"


def test_from_lookup():
    assert make().resolve("val=${OS_VAR}") == "val=from_os"


def test_vars_take_precedence_over_lookup():
    assert make({"OS_VAR": "mine"}).resolve("${OS_VAR}") == "mine"


def test_inline_default():
    assert make().resolve("${MISSING:-fallback}") == "fallback"


def test_empty_inline_default():
    assert make().resolve("[${MISSING:-}]") == "[]"


def test_lowercase_not_a_reference():
    assert make().resolve("${lower}") == "${lower}"


def test_unresolved_raises():
    with pytest.raises(UnresolvedVariableError) as info:
        make().resolve("${NOPE}")
    assert info.value.name == "NOPE"
    assert str(info.value) == "unresolved variable: NOPE"


def test_resolve_all_success():
    out = make({"BASE": "https://example.com"}).resolve_all(
        {"API_URL": "${BASE}/api", "STATIC": "plain"}
    )
    assert out == {"API_URL": "https://example.com/api", "STATIC": "plain"}


def test_resolve_all_propagates_error():
    with pytest.raises(UnresolvedVariableError) as info:
        make().resolve_all({"KEY": "${GHOST}"})
    assert info.value.key == "KEY"
    assert str(info.value) == "key KEY: unresolved variable: GHOST"


def test_default_lookup_uses_environment(monkeypatch):
    monkeypatch.setenv("ENVCHAIN_TEST_HOST", "db.example.com")
    assert Interpolator().resolve("${ENVCHAIN_TEST_HOST}") == "db.example.com"