"""Netpath - network interface discovery and path performance probes."""

from netpath.backends.network import list_interfaces
from netpath.backends.reachability import is_internet_reachable
from netpath.backends.speedtest import run_speed_test
from netpath.backends.throughput import get_interface_speed_data
from netpath.connectivity import (
    ConnectivityClassifier,
    list_active_interfaces,
    list_internet_connected_interfaces,
)
from netpath.errors import (
    ClassificationError,
    EnumerationError,
    InterfaceNotFoundError,
    NetpathError,
    TestError,
)
from netpath.models.network_models import (
    InterfaceRecord,
    InterfaceSpeedData,
    SpeedTestResult,
)

__version__ = "0.1.0"

__all__ = [
    "ClassificationError",
    "ConnectivityClassifier",
    "EnumerationError",
    "InterfaceNotFoundError",
    "InterfaceRecord",
    "InterfaceSpeedData",
    "NetpathError",
    "SpeedTestResult",
    "TestError",
    "__version__",
    "get_interface_speed_data",
    "is_internet_reachable",
    "list_active_interfaces",
    "list_interfaces",
    "list_internet_connected_interfaces",
    "run_speed_test",
]
