"""Rates command - samples per-interface receive/transmit rates."""

from __future__ import annotations

import json

from netpath.backends.throughput import InterfaceRateSampler
from netpath.models.network_models import InterfaceSpeedData


def run_rates(
    interface_name: str | None = None, interval: float = 1.0, as_json: bool = False
) -> list[InterfaceSpeedData]:
    """Sample RX/TX rates over one interval and print them.

    Args:
        interface_name: Only sample this interface. All interfaces if None.
        interval: Sampling window in seconds.
        as_json: Print JSON instead of the text table.

    Raises:
        InterfaceNotFoundError: If interface_name does not exist.
        EnumerationError: If OS counters cannot be read.
    """
    sampler = InterfaceRateSampler(interval=interval)
    if interface_name:
        samples = [sampler.sample(interface_name)]
    else:
        samples = sampler.sample_all()

    if as_json:
        print(json.dumps([sample.model_dump() for sample in samples], indent=2))
        return samples

    print(f"Interface Rates ({interval:g}s window):")
    if not samples:
        print("  No interface counters available")
    width = max((len(s.interface_name) for s in samples), default=0)
    for sample in samples:
        print(
            f"  {sample.interface_name:<{width}}  "
            f"RX {sample.rx_speed:8.2f} Mbps  TX {sample.tx_speed:8.2f} Mbps"
        )
    return samples
