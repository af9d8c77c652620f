"""Tests for the TCP reachability prober."""

import socket
from unittest.mock import MagicMock, patch

import pytest

from netpath.backends.reachability import ReachabilityProber
from netpath.config import EndpointConfig, ReachabilityTarget


def _target(port, host="127.0.0.1"):
    return ReachabilityTarget(host=host, port=port)


def test_reachable_when_target_accepts(listening_port):
    """A listening endpoint makes the host reachable."""
    prober = ReachabilityProber(targets=[_target(listening_port)], timeout=1.0)

    assert prober.is_internet_reachable() is True


def test_unreachable_when_all_targets_refuse(closed_port):
    """Refused connections on every target yield False."""
    prober = ReachabilityProber(
        targets=[_target(closed_port), _target(closed_port)], timeout=1.0
    )

    assert prober.is_internet_reachable() is False


def test_falls_through_to_second_target(closed_port, listening_port):
    """A refused first target does not stop the second attempt."""
    prober = ReachabilityProber(
        targets=[_target(closed_port), _target(listening_port)], timeout=1.0
    )

    assert prober.is_internet_reachable() is True


def test_short_circuits_on_first_success():
    """Targets after the first success are never tried."""
    connection = MagicMock()
    with patch(
        "netpath.backends.reachability.socket.create_connection",
        return_value=connection,
    ) as create:
        prober = ReachabilityProber(
            targets=[_target(53, "192.0.2.1"), _target(53, "192.0.2.2")], timeout=2.5
        )
        assert prober.is_internet_reachable() is True

    create.assert_called_once_with(("192.0.2.1", 53), timeout=2.5)
    connection.__exit__.assert_called_once()


def test_each_attempt_uses_its_own_timeout():
    """Timeouts on every target are tried in order, then False."""
    with patch(
        "netpath.backends.reachability.socket.create_connection",
        side_effect=socket.timeout("timed out"),
    ) as create:
        prober = ReachabilityProber(
            targets=[_target(53, "192.0.2.1"), _target(53, "192.0.2.2")], timeout=0.5
        )
        assert prober.is_internet_reachable() is False

    assert [c.args[0] for c in create.call_args_list] == [
        ("192.0.2.1", 53),
        ("192.0.2.2", 53),
    ]
    assert all(c.kwargs["timeout"] == 0.5 for c in create.call_args_list)


def test_defaults_use_public_dns_resolvers():
    """Without arguments the prober uses the configured DNS targets."""
    prober = ReachabilityProber()

    assert [(t.host, t.port) for t in prober.targets] == [
        ("8.8.8.8", 53),
        ("1.1.1.1", 53),
    ]
    assert prober.timeout == 3.0


def test_from_config():
    config = EndpointConfig(
        reachability_targets=[_target(5353, "10.0.0.1")], reachability_timeout=1.5
    )
    prober = ReachabilityProber.from_config(config)

    assert prober.targets == [_target(5353, "10.0.0.1")]
    assert prober.timeout == 1.5


def test_rejects_non_positive_timeout():
    with pytest.raises(ValueError):
        ReachabilityProber(timeout=0)
