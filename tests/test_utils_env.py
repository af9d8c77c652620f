"""Tests for the environment variable utility."""

import pytest

from netpath.utils.env import EnvVarTypeError, get_env


def test_get_env_basic(monkeypatch):
    """Set variables are returned; missing or empty ones fall back to default."""
    monkeypatch.setenv("NETPATH_TEST_VAR", "test_value")
    monkeypatch.setenv("NETPATH_EMPTY_VAR", "")
    monkeypatch.delenv("NETPATH_MISSING_VAR", raising=False)

    assert get_env("NETPATH_TEST_VAR") == "test_value"
    assert get_env("NETPATH_MISSING_VAR", default="default") == "default"
    assert get_env("NETPATH_MISSING_VAR") is None
    assert get_env("NETPATH_EMPTY_VAR", default="fallback") == "fallback"


def test_get_env_coercion(monkeypatch):
    """Test type coercion for common types."""
    monkeypatch.setenv("NETPATH_BOOL_TRUE", "true")
    monkeypatch.setenv("NETPATH_BOOL_FALSE", "0")
    monkeypatch.setenv("NETPATH_INT", "1048576")
    monkeypatch.setenv("NETPATH_FLOAT", "2.5")
    monkeypatch.setenv("NETPATH_LIST", "8.8.8.8:53, 1.1.1.1:53 ")

    assert get_env("NETPATH_BOOL_TRUE", as_type=bool) is True
    assert get_env("NETPATH_BOOL_FALSE", as_type=bool) is False
    assert get_env("NETPATH_INT", as_type=int) == 1048576
    assert get_env("NETPATH_FLOAT", as_type=float) == 2.5
    assert get_env("NETPATH_LIST", as_type=list) == ["8.8.8.8:53", "1.1.1.1:53"]

    monkeypatch.setenv("NETPATH_INT", "many")
    with pytest.raises(EnvVarTypeError) as excinfo:
        get_env("NETPATH_INT", as_type=int)
    assert excinfo.value.name == "NETPATH_INT"


def test_blank_value_counts_as_unset(monkeypatch):
    monkeypatch.setenv("NETPATH_BLANK", "")

    assert get_env("NETPATH_BLANK") is None
    assert get_env("NETPATH_BLANK", default=3.0, as_type=float) == 3.0
