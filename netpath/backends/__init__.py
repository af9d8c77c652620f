"""Network backends: enumeration, reachability, speed tests and rate sampling."""

from netpath.backends.network import InterfaceEnumerator, list_interfaces
from netpath.backends.reachability import ReachabilityProber, is_internet_reachable
from netpath.backends.speedtest import (
    ProbeOutcome,
    SpeedTester,
    SpeedTestReport,
    run_speed_test,
)
from netpath.backends.throughput import InterfaceRateSampler, get_interface_speed_data

__all__ = [
    "InterfaceEnumerator",
    "InterfaceRateSampler",
    "ProbeOutcome",
    "ReachabilityProber",
    "SpeedTestReport",
    "SpeedTester",
    "get_interface_speed_data",
    "is_internet_reachable",
    "list_interfaces",
    "run_speed_test",
]
