"""Host-wide internet reachability check using plain TCP connects."""

from __future__ import annotations

import socket
import time
from collections.abc import Sequence

from netpath.config import EndpointConfig, ReachabilityTarget
from netpath.utils.logger import Logger


class ReachabilityProber:
    """Best-effort TCP connect probe against well-known endpoints.

    The probe is host-wide: it goes out over whatever route the OS picks and
    says nothing about any particular interface.
    """

    def __init__(
        self,
        targets: Sequence[ReachabilityTarget] | None = None,
        timeout: float | None = None,
    ) -> None:
        """Create a prober.

        Args:
            targets: Endpoints tried in order. Defaults to the configured
                public DNS resolvers on port 53.
            timeout: Per-target connect timeout in seconds.
        """
        defaults = EndpointConfig()
        if targets is None:
            targets = defaults.reachability_targets
        self.targets = list(targets)
        self.timeout = timeout if timeout is not None else defaults.reachability_timeout
        if self.timeout <= 0:
            raise ValueError("timeout must be greater than zero")

    @classmethod
    def from_config(cls, config: EndpointConfig) -> ReachabilityProber:
        """Build a prober from an EndpointConfig."""
        return cls(
            targets=config.reachability_targets, timeout=config.reachability_timeout
        )

    def is_internet_reachable(self) -> bool:
        """Return True as soon as one target accepts a TCP connection.

        Worst case blocks for ``len(targets) * timeout`` seconds.
        """
        log = Logger.get_quiet("backends.reachability")
        for target in self.targets:
            start = time.perf_counter()
            try:
                with socket.create_connection(
                    (target.host, target.port), timeout=self.timeout
                ):
                    pass
            except OSError as e:
                log.debug(f"Reachability probe to {target} failed: {e!r}")
                continue

            elapsed_ms = (time.perf_counter() - start) * 1000
            log.debug(f"Connected to {target} in {elapsed_ms:.1f} ms")
            return True

        log.info("No reachability target accepted a connection")
        return False


def is_internet_reachable() -> bool:
    """Check host-wide internet reachability with the configured endpoints."""
    prober = ReachabilityProber.from_config(EndpointConfig.reachability_from_env())
    return prober.is_internet_reachable()
