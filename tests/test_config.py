"""Tests for endpoint configuration."""

import pytest
from pydantic import ValidationError

from netpath.config import EndpointConfig, ReachabilityTarget
from netpath.models.constants import ProbeKind
from netpath.utils.env import EnvVarTypeError

ENV_VARS = [
    "NETPATH_REACHABILITY_TARGETS",
    "NETPATH_REACHABILITY_TIMEOUT",
    "NETPATH_PING_URL",
    "NETPATH_DOWNLOAD_URL",
    "NETPATH_UPLOAD_URL",
    "NETPATH_PING_TIMEOUT",
    "NETPATH_DOWNLOAD_TIMEOUT",
    "NETPATH_UPLOAD_TIMEOUT",
    "NETPATH_UPLOAD_BYTES",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = EndpointConfig()

    assert [str(t) for t in config.reachability_targets] == ["8.8.8.8:53", "1.1.1.1:53"]
    assert config.reachability_timeout == 3.0
    assert config.timeout_for(ProbeKind.PING) == 10.0
    assert config.timeout_for(ProbeKind.DOWNLOAD) == 30.0
    assert config.timeout_for(ProbeKind.UPLOAD) == 30.0
    assert config.upload_bytes == 1024 * 1024


def test_url_for_maps_probe_kinds():
    config = EndpointConfig(
        ping_url="http://a/ping", download_url="http://a/dl", upload_url="http://a/up"
    )

    assert config.url_for(ProbeKind.PING) == "http://a/ping"
    assert config.url_for(ProbeKind.DOWNLOAD) == "http://a/dl"
    assert config.url_for(ProbeKind.UPLOAD) == "http://a/up"
    with pytest.raises(ValueError):
        config.url_for(ProbeKind.REACHABILITY)


def test_from_env_without_overrides_matches_defaults():
    assert EndpointConfig.from_env() == EndpointConfig()


def test_from_env_overrides(monkeypatch):
    monkeypatch.setenv("NETPATH_REACHABILITY_TARGETS", "127.0.0.1:9000, [::1]:9001")
    monkeypatch.setenv("NETPATH_PING_URL", "http://127.0.0.1:8000/ping")
    monkeypatch.setenv("NETPATH_DOWNLOAD_TIMEOUT", "5.5")
    monkeypatch.setenv("NETPATH_UPLOAD_BYTES", "4096")

    config = EndpointConfig.from_env()

    assert config.reachability_targets == [
        ReachabilityTarget(host="127.0.0.1", port=9000),
        ReachabilityTarget(host="::1", port=9001),
    ]
    assert str(config.reachability_targets[1]) == "[::1]:9001"
    assert config.ping_url == "http://127.0.0.1:8000/ping"
    assert config.download_timeout == 5.5
    assert config.upload_bytes == 4096


def test_from_env_bad_number(monkeypatch):
    monkeypatch.setenv("NETPATH_PING_TIMEOUT", "soon")

    with pytest.raises(EnvVarTypeError):
        EndpointConfig.from_env()


def test_from_env_bad_target(monkeypatch):
    monkeypatch.setenv("NETPATH_REACHABILITY_TARGETS", "8.8.8.8")

    with pytest.raises(EnvVarTypeError):
        EndpointConfig.from_env()


def test_from_env_out_of_range(monkeypatch):
    monkeypatch.setenv("NETPATH_UPLOAD_BYTES", "0")

    with pytest.raises(ValidationError):
        EndpointConfig.from_env()


def test_target_port_range():
    with pytest.raises(ValidationError):
        ReachabilityTarget(host="8.8.8.8", port=70000)


@pytest.mark.parametrize("value", ["::1", "fe80::1:53", "2001:db8::1"])
def test_parse_rejects_unbracketed_ipv6(value):
    with pytest.raises(ValueError, match="bracketed"):
        ReachabilityTarget.parse(value)


def test_parse_bracketed_ipv6():
    target = ReachabilityTarget.parse("[2001:db8::1]:53")

    assert (target.host, target.port) == ("2001:db8::1", 53)
    assert str(target) == "[2001:db8::1]:53"


def test_reachability_from_env_ignores_speed_test_variables(monkeypatch):
    monkeypatch.setenv("NETPATH_UPLOAD_TIMEOUT", "soon")
    monkeypatch.setenv("NETPATH_REACHABILITY_TIMEOUT", "0.5")

    config = EndpointConfig.reachability_from_env()

    assert config.reachability_timeout == 0.5
    assert config.upload_timeout == 30.0
    with pytest.raises(EnvVarTypeError):
        EndpointConfig.from_env()
