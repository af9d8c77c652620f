"""Interfaces command - lists interfaces and their connectivity class."""

from __future__ import annotations

import json

from netpath.backends.network import InterfaceEnumerator
from netpath.backends.reachability import ReachabilityProber
from netpath.config import EndpointConfig
from netpath.connectivity import ConnectivityClassifier
from netpath.models.network_models import InterfaceRecord

SCOPES = ("all", "active", "connected")

_SCOPE_TITLES = {
    "all": "Network Interfaces",
    "active": "Active Network Interfaces",
    "connected": "Internet-Connected Network Interfaces",
}


def run_interfaces(
    scope: str = "all", as_json: bool = False, config: EndpointConfig | None = None
) -> list[InterfaceRecord]:
    """List interfaces for a scope and print them.

    Args:
        scope: "all", "active" or "connected".
        as_json: Print a JSON array instead of the text view.
        config: Reachability configuration, used only for "connected".
            Read from the NETPATH_REACHABILITY_* variables if omitted.

    Returns
    -------
        The listed records.

    Raises
    ------
        ClassificationError: If enumeration fails.
    """
    if scope not in SCOPES:
        raise ValueError(f"scope must be one of {SCOPES}, got '{scope}'")

    enumerator = InterfaceEnumerator()
    if scope == "connected":
        config = config or EndpointConfig.reachability_from_env()
        classifier = ConnectivityClassifier(
            enumerator=enumerator, prober=ReachabilityProber.from_config(config)
        )
        records = classifier.internet_connected()
    elif scope == "active":
        records = ConnectivityClassifier(enumerator=enumerator).active()
    else:
        records = ConnectivityClassifier(enumerator=enumerator).all()

    if as_json:
        print(json.dumps([record.model_dump() for record in records], indent=2))
    else:
        link_speeds = enumerator.link_speeds() if records else {}
        print(format_interfaces(records, _SCOPE_TITLES[scope], link_speeds))

    return records


def format_interfaces(
    records: list[InterfaceRecord],
    title: str,
    link_speeds: dict[str, int] | None = None,
) -> str:
    """Render interface records as an indented text block.

    Args:
        records: Interfaces to show.
        title: Heading line.
        link_speeds: Optional negotiated link speed in Mbps per interface name.
    """
    link_speeds = link_speeds or {}
    lines = [f"{title}:"]
    if not records:
        lines.append("  None found")
        return "\n".join(lines)

    for record in records:
        state = "up" if record.is_up else "down"
        kind = ", loopback" if record.is_loopback else ""
        lines.append(f"  {record.name} ({state}{kind})")
        if record.description:
            lines.append(f"    Description:  {record.description}")
        if record.ip_addresses:
            lines.append(f"    Addresses:    {', '.join(record.ip_addresses)}")
        else:
            lines.append("    Addresses:    none")
        if record.name in link_speeds:
            lines.append(f"    Link speed:   {link_speeds[record.name]} Mbps")

    return "\n".join(lines)


def run_reachable(config: EndpointConfig | None = None) -> bool:
    """Print whether the host can reach the internet."""
    config = config or EndpointConfig.reachability_from_env()
    reachable = ReachabilityProber.from_config(config).is_internet_reachable()
    targets = ", ".join(str(target) for target in config.reachability_targets)
    if reachable:
        print(f"Internet reachable (probed {targets})")
    else:
        print(f"Internet unreachable (no response from {targets})")
    return reachable
