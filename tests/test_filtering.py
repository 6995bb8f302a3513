import pytest

from envchain.filtering import filter_vars


def test_no_options_returns_all():
    vars = {"FOO": "1", "BAR": "2", "BAZ": "3"}
    assert filter_vars(vars) == vars


def test_key_prefix():
    vars = {"APP_HOST": "localhost", "APP_PORT": "8080", "DB_URL": "postgres://"}
    assert filter_vars(vars, key_prefix="APP_") == {"APP_HOST": "localhost", "APP_PORT": "8080"}


def test_key_pattern():
    vars = {"SECRET_KEY": "secret", "SECRET_TOKEN": "token", "PUBLIC_URL": "http://"}
    got = filter_vars(vars, key_pattern="^SECRET_")
    assert set(got) == {"SECRET_KEY", "SECRET_TOKEN"}


def test_key_pattern_matches_anywhere():
    got = filter_vars({"MY_TOKEN": "token", "OTHER": "2"}, key_pattern="TOKEN")
    assert got == {"MY_TOKEN": "token"}


def test_invalid_pattern_raises():
    with pytest.raises(ValueError):
        filter_vars({"FOO": "bar"}, key_pattern="[invalid")


def test_exclude_keys():
    got = filter_vars({"FOO": "1", "BAR": "2", "BAZ": "3"}, exclude_keys=["BAR", "BAZ"])
    assert got == {"FOO": "1"}


def test_invert_match():
    vars = {"APP_HOST": "localhost", "APP_PORT": "8080", "DB_URL": "postgres://"}
    got = filter_vars(vars, key_prefix="APP_", invert_match=True)
    assert got == {"DB_URL": "postgres://"}


def test_invert_includes_excluded_keys():
    got = filter_vars({"A": "1", "B": "2"}, exclude_keys=["A"], invert_match=True)
    assert got == {"A": "1"}