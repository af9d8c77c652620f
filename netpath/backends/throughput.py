"""Per-interface receive/transmit rate sampling from OS byte counters."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

import psutil

from netpath.errors import EnumerationError, InterfaceNotFoundError
from netpath.models.constants import (
    BITS_PER_BYTE,
    BITS_PER_MEGABIT,
    DEFAULT_RATE_INTERVAL,
)
from netpath.models.network_models import InterfaceSpeedData
from netpath.utils.logger import Logger


def _rate_mbps(before: int, after: int, interval: float) -> float:
    """Convert a byte counter delta to Mbps; wrapped counters read as 0.0."""
    delta = after - before
    if delta <= 0:
        return 0.0
    return (delta * BITS_PER_BYTE) / (interval * BITS_PER_MEGABIT)


class InterfaceRateSampler:
    """Samples interface byte counters twice and reports the rate between them."""

    def __init__(
        self,
        interval: float = DEFAULT_RATE_INTERVAL,
        sleep: Callable[[float], None] | None = None,
        clock: Callable[[], float] | None = None,
        timer: Callable[[], float] | None = None,
    ) -> None:
        """Create a sampler.

        Args:
            interval: Seconds between the two counter snapshots. Must be positive.
            sleep: Blocking wait between snapshots.
            clock: Wall clock used for the sample timestamp.
            timer: Monotonic timer measuring the actual gap between snapshots.
        """
        if interval <= 0:
            raise ValueError("interval must be greater than zero")
        self.interval = interval
        self._sleep = sleep or time.sleep
        self._clock = clock or time.time
        self._timer = timer or time.perf_counter

    def sample_all(self) -> list[InterfaceSpeedData]:
        """Measure RX/TX rates of every interface over one interval.

        Raises:
            EnumerationError: If the OS counters cannot be read.
        """
        before, started = self._snapshot()
        return self._rates_since(before, started)

    def sample(self, interface_name: str) -> InterfaceSpeedData:
        """Measure RX/TX rates of a single interface.

        Raises:
            InterfaceNotFoundError: If the interface has no counters.
            EnumerationError: If the OS counters cannot be read.
        """
        before, started = self._snapshot()
        if interface_name not in before:
            raise InterfaceNotFoundError(interface_name)

        for data in self._rates_since(before, started, only=interface_name):
            return data

        # Interface disappeared during the window
        raise InterfaceNotFoundError(interface_name)

    def _snapshot(self) -> tuple[dict[str, Any], float]:
        counters = self._counters()
        return counters, self._timer()

    def _rates_since(
        self, before: dict[str, Any], started: float, only: str | None = None
    ) -> list[InterfaceSpeedData]:
        """Wait one interval, snapshot again and convert the deltas to rates."""
        self._sleep(self.interval)
        after, finished = self._snapshot()
        timestamp = int(self._clock())

        elapsed = finished - started
        if elapsed <= 0:
            # Coarse timers can report no gap at all
            elapsed = self.interval

        samples = []
        for name, first in before.items():
            if only is not None and name != only:
                continue
            second = after.get(name)
            if second is None:
                continue
            samples.append(
                InterfaceSpeedData(
                    interface_name=name,
                    rx_speed=_rate_mbps(first.bytes_recv, second.bytes_recv, elapsed),
                    tx_speed=_rate_mbps(first.bytes_sent, second.bytes_sent, elapsed),
                    timestamp=timestamp,
                )
            )
        return samples

    @staticmethod
    def _counters() -> dict[str, Any]:
        try:
            counters: dict[str, Any] = psutil.net_io_counters(pernic=True)
        except Exception as e:
            Logger.get_quiet("backends.throughput").error(
                f"Reading interface counters failed: {e!r}"
            )
            raise EnumerationError(f"Failed to read interface counters: {e}") from e
        return counters


def get_interface_speed_data(
    interface_name: str, interval: float = DEFAULT_RATE_INTERVAL
) -> InterfaceSpeedData:
    """Sample the receive/transmit rate of one interface.

    Raises:
        InterfaceNotFoundError: If the interface does not exist.
        EnumerationError: If the OS counters cannot be read.
    """
    return InterfaceRateSampler(interval=interval).sample(interface_name)
