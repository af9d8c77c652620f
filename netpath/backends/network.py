"""Network backend - enumerates interfaces using psutil and socket."""

from __future__ import annotations

import ipaddress
import socket
from typing import Any

import psutil

from netpath.errors import EnumerationError
from netpath.models.constants import LOOPBACK_NAME_PREFIXES
from netpath.models.network_models import InterfaceRecord
from netpath.utils.logger import Logger


class InterfaceEnumerator:
    """Lists the host's network interfaces with addressing and status.

    Every call re-reads OS state; nothing is cached between calls.
    """

    def list_interfaces(self) -> list[InterfaceRecord]:
        """Enumerate every interface the OS reports, in OS order.

        Returns
        -------
            List of InterfaceRecord, one per adapter.

        Raises
        ------
            EnumerationError: If the platform query fails for any reason.
        """
        log = Logger.get_quiet("backends.network")
        try:
            addrs = psutil.net_if_addrs()
            stats = psutil.net_if_stats()
        except Exception as e:
            # psutil surfaces driver and permission faults as arbitrary errors
            log.error(f"Interface enumeration failed: {e!r}")
            raise EnumerationError(f"Failed to retrieve network interfaces: {e}") from e

        try:
            interfaces = self._build_records(addrs, stats)
        except Exception as e:
            log.error(f"Interface data could not be interpreted: {e!r}")
            raise EnumerationError(f"Failed to retrieve network interfaces: {e}") from e

        log.debug(f"Enumerated {len(interfaces)} network interfaces")
        return interfaces

    def link_speeds(self) -> dict[str, int]:
        """Return the negotiated link speed in Mbps for interfaces that report one.

        psutil reports 0 when the speed is unknown; those interfaces are left out.

        Raises
        ------
            EnumerationError: If the platform query fails.
        """
        try:
            stats = psutil.net_if_stats()
        except Exception as e:
            Logger.get_quiet("backends.network").error(
                f"Reading interface stats failed: {e!r}"
            )
            raise EnumerationError(f"Failed to retrieve network interfaces: {e}") from e

        return {
            name: int(if_stats.speed)
            for name, if_stats in stats.items()
            if getattr(if_stats, "speed", 0) > 0
        }

    @classmethod
    def _build_records(
        cls, addrs: dict[str, list[Any]], stats: dict[str, Any]
    ) -> list[InterfaceRecord]:
        """Merge psutil address and stats tables into InterfaceRecords."""
        names = list(addrs)
        names.extend(name for name in stats if name not in addrs)

        records = []
        for interface_name in names:
            if not interface_name:
                continue

            if_stats = stats.get(interface_name)
            ip_addresses = cls._ip_addresses(addrs.get(interface_name, []))

            records.append(
                InterfaceRecord(
                    name=interface_name,
                    description="",
                    is_up=bool(if_stats.isup) if if_stats else False,
                    is_loopback=cls._is_loopback(
                        interface_name, if_stats, ip_addresses
                    ),
                    ip_addresses=ip_addresses,
                )
            )

        return records

    @staticmethod
    def _ip_addresses(interface_addrs: list[Any]) -> list[str]:
        """Return IPv4 addresses followed by IPv6 addresses."""
        ipv4_addrs = []
        ipv6_addrs = []
        for addr in interface_addrs:
            if addr.family == socket.AF_INET:
                ipv4_addrs.append(addr.address)
            elif addr.family == socket.AF_INET6:
                # Drop the zone index psutil appends to link-local addresses
                ipv6_addrs.append(addr.address.split("%", 1)[0])
        return ipv4_addrs + ipv6_addrs

    @staticmethod
    def _is_loopback(name: str, if_stats: Any, ip_addresses: list[str]) -> bool:
        """Decide loopback status from flags, then addresses, then name."""
        flags = getattr(if_stats, "flags", "") if if_stats else ""
        if flags:
            return "loopback" in flags.split(",")

        if ip_addresses:
            return all(is_loopback_address(ip) for ip in ip_addresses)

        return name.startswith(LOOPBACK_NAME_PREFIXES)


def is_loopback_address(ip_address: str) -> bool:
    """Check if an IP address is loopback (127.0.0.0/8 or ::1).

    Args:
        ip_address: IPv4 or IPv6 address text.

    Returns
    -------
        True for loopback addresses, False for anything else or unparsable text.
    """
    try:
        return ipaddress.ip_address(ip_address).is_loopback
    except ValueError:
        return False


def list_interfaces() -> list[InterfaceRecord]:
    """Enumerate all network interfaces on the host.

    Raises
    ------
        EnumerationError: If the platform query fails.
    """
    return InterfaceEnumerator().list_interfaces()
