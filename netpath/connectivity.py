"""Connectivity classification of network interfaces.

``internet_connected()`` applies a host-wide reachability check to every
active interface. It does not bind probes to individual interfaces, so the
result is either every active interface or none of them.
"""

from __future__ import annotations

from netpath.backends.network import InterfaceEnumerator
from netpath.backends.reachability import ReachabilityProber
from netpath.config import EndpointConfig
from netpath.errors import ClassificationError, EnumerationError
from netpath.models.network_models import InterfaceRecord
from netpath.utils.env import EnvVarError
from netpath.utils.logger import Logger


class ConnectivityClassifier:
    """Filters enumerated interfaces into active and internet-connected sets."""

    def __init__(
        self,
        enumerator: InterfaceEnumerator | None = None,
        prober: ReachabilityProber | None = None,
    ) -> None:
        self._enumerator = enumerator or InterfaceEnumerator()
        self._prober = prober or ReachabilityProber()
        self._log = Logger.get_quiet("connectivity")

    def all(self) -> list[InterfaceRecord]:
        """Return every interface.

        Raises:
            ClassificationError: If enumeration fails.
        """
        try:
            return self._enumerator.list_interfaces()
        except EnumerationError as e:
            raise ClassificationError(str(e)) from e

    def active(self) -> list[InterfaceRecord]:
        """Return interfaces that are up and not loopback, in enumeration order.

        Raises:
            ClassificationError: If enumeration fails.
        """
        return [record for record in self.all() if record.is_active]

    def internet_connected(self) -> list[InterfaceRecord]:
        """Return active interfaces if the host can reach the internet.

        The reachability probe runs at most once per call and is skipped when
        there is no active interface.

        Raises:
            ClassificationError: If enumeration fails.
        """
        active = self.active()
        if not active:
            return []

        if not self._prober.is_internet_reachable():
            self._log.info(
                f"Host is offline; none of {len(active)} active interfaces connected"
            )
            return []
        return active


def list_active_interfaces() -> list[InterfaceRecord]:
    """List interfaces that are up and not loopback.

    Raises:
        ClassificationError: If enumeration fails.
    """
    return ConnectivityClassifier().active()


def list_internet_connected_interfaces() -> list[InterfaceRecord]:
    """List active interfaces when the host has internet reachability.

    Reachability targets come from the ``NETPATH_REACHABILITY_*`` variables.

    Raises:
        ClassificationError: If enumeration fails or the reachability
            variables are malformed.
    """
    try:
        config = EndpointConfig.reachability_from_env()
    except (EnvVarError, ValueError) as e:
        raise ClassificationError(f"Invalid reachability configuration: {e}") from e

    classifier = ConnectivityClassifier(prober=ReachabilityProber.from_config(config))
    return classifier.internet_connected()
