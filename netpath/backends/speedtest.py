"""Link performance tester: ping latency, download and upload throughput.

Each sub-probe is a single HTTP request against a configured endpoint with
its own timeout and its own session. A failed sub-probe never aborts the
test; it is recorded as a failed ProbeOutcome and reported as 0.0 in the
final SpeedTestResult.
"""

from __future__ import annotations

import socket
import threading
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

import requests

from netpath.config import EndpointConfig
from netpath.errors import TestError
from netpath.models.constants import (
    BITS_PER_BYTE,
    BITS_PER_MEGABIT,
    DOWNLOAD_CHUNK_BYTES,
    ProbeKind,
    ProbeStatus,
)
from netpath.models.network_models import SpeedTestResult
from netpath.utils.logger import Logger


class MeasurementError(Exception):
    """A transfer finished but produced no trustworthy measurement."""

    pass


def throughput_mbps(num_bytes: int, duration_seconds: float) -> float:
    """Convert a transfer size and duration to megabits per second.

    Raises:
        MeasurementError: If the duration is zero or negative.
    """
    if duration_seconds <= 0:
        raise MeasurementError(
            f"Transfer of {num_bytes} bytes took {duration_seconds}s, "
            "too fast to measure"
        )
    return (num_bytes * BITS_PER_BYTE) / (duration_seconds * BITS_PER_MEGABIT)


@dataclass(frozen=True)
class ProbeOutcome:
    """Result of one sub-probe: a measured value or a failure reason."""

    kind: ProbeKind
    status: ProbeStatus
    value: float | None = None
    reason: str | None = None

    @classmethod
    def succeeded(cls, kind: ProbeKind, value: float) -> ProbeOutcome:
        return cls(kind=kind, status=ProbeStatus.SUCCEEDED, value=value)

    @classmethod
    def failed(cls, kind: ProbeKind, reason: str) -> ProbeOutcome:
        return cls(kind=kind, status=ProbeStatus.FAILED, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status == ProbeStatus.SUCCEEDED

    def value_or_zero(self) -> float:
        """Collapse the outcome to the reported metric value."""
        if self.ok and self.value is not None:
            return max(self.value, 0.0)
        return 0.0

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation of the outcome."""
        return {
            "kind": str(self.kind),
            "status": str(self.status),
            "value": self.value,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class SpeedTestReport:
    """All three sub-probe outcomes of one speed test run."""

    timestamp: int
    ping: ProbeOutcome
    download: ProbeOutcome
    upload: ProbeOutcome

    def to_result(self) -> SpeedTestResult:
        """Build the public result, failed metrics becoming 0.0."""
        return SpeedTestResult(
            download_speed=self.download.value_or_zero(),
            upload_speed=self.upload.value_or_zero(),
            ping=self.ping.value_or_zero(),
            timestamp=self.timestamp,
        )

    def failed_probes(self) -> list[ProbeKind]:
        return [o.kind for o in (self.ping, self.download, self.upload) if not o.ok]

    def to_dict(self) -> dict[str, Any]:
        """Return the collapsed result plus per-probe detail."""
        return {
            "result": self.to_result().model_dump(),
            "probes": [o.to_dict() for o in (self.ping, self.download, self.upload)],
        }


def _shutdown_connection(response: Any) -> None:
    """Unblock a pending body read by shutting down the response socket."""
    connection = getattr(getattr(response, "raw", None), "connection", None)
    sock = getattr(connection, "sock", None)
    if sock is None:
        return
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError:
        # Already closed by the reader
        return


class SpeedTester:
    """Runs ping, download and upload sub-probes against fixed endpoints."""

    def __init__(
        self,
        endpoints: EndpointConfig | None = None,
        session_factory: Callable[[], requests.Session] = requests.Session,
        clock: Callable[[], float] = time.time,
        timer: Callable[[], float] = time.perf_counter,
    ) -> None:
        """Create a tester.

        Args:
            endpoints: Probe URLs, timeouts and upload size.
            session_factory: Creates one HTTP session per sub-probe.
            clock: Wall clock used for the result timestamp.
            timer: Monotonic timer used for durations.
        """
        self.endpoints = endpoints or EndpointConfig()
        self._session_factory = session_factory
        self._clock = clock
        self._timer = timer
        self._log = Logger.get_quiet("backends.speedtest")

    # -------------------------------------------------------------------------
    # Sub-probes
    # -------------------------------------------------------------------------

    def measure_ping(self) -> ProbeOutcome:
        """Time one GET to the ping endpoint, in milliseconds."""
        return self._attempt(ProbeKind.PING, self._ping)

    def measure_download(self) -> ProbeOutcome:
        """Measure download throughput in Mbps from one GET."""
        return self._attempt(ProbeKind.DOWNLOAD, self._download)

    def measure_upload(self) -> ProbeOutcome:
        """Measure upload throughput in Mbps from one POST."""
        return self._attempt(ProbeKind.UPLOAD, self._upload)

    def _ping(self) -> float:
        url = self.endpoints.url_for(ProbeKind.PING)
        timeout = self.endpoints.timeout_for(ProbeKind.PING)

        with self._session_factory() as session:
            start = self._timer()
            deadline = start + timeout
            with session.get(url, stream=True, timeout=timeout) as response:
                response.raise_for_status()
                self._read_body(response, deadline, ProbeKind.PING)
            elapsed = self._timer() - start

        return max(elapsed, 0.0) * 1000

    def _download(self) -> float:
        url = self.endpoints.url_for(ProbeKind.DOWNLOAD)
        timeout = self.endpoints.timeout_for(ProbeKind.DOWNLOAD)

        with self._session_factory() as session:
            start = self._timer()
            deadline = start + timeout
            with session.get(url, stream=True, timeout=timeout) as response:
                response.raise_for_status()
                received = self._read_body(response, deadline, ProbeKind.DOWNLOAD)
            duration = self._timer() - start

        if received == 0:
            raise MeasurementError("Download endpoint returned an empty body")
        return throughput_mbps(received, duration)

    def _upload(self) -> float:
        url = self.endpoints.url_for(ProbeKind.UPLOAD)
        timeout = self.endpoints.timeout_for(ProbeKind.UPLOAD)
        payload = bytes(self.endpoints.upload_bytes)

        with self._session_factory() as session:
            start = self._timer()
            deadline = start + timeout
            with session.post(
                url, data=payload, stream=True, timeout=timeout
            ) as response:
                response.raise_for_status()
                self._read_body(response, deadline, ProbeKind.UPLOAD)
            duration = self._timer() - start

        return throughput_mbps(len(payload), duration)

    def _read_body(self, response: Any, deadline: float, kind: ProbeKind) -> int:
        """Drain a streamed response body, giving up once the deadline passes.

        The requests ``timeout`` only bounds each socket read, so a server
        trickling bytes could otherwise hold the probe open indefinitely. A
        watchdog shuts the connection down when the deadline is reached.

        Raises:
            requests.Timeout: If the sub-probe outlives its timeout.
        """
        self._check_deadline(deadline, kind)
        watchdog = threading.Timer(
            max(deadline - self._timer(), 0.0), _shutdown_connection, args=(response,)
        )
        watchdog.daemon = True
        watchdog.start()

        received = 0
        try:
            for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_BYTES):
                received += len(chunk)
                self._check_deadline(deadline, kind)
        except requests.RequestException as e:
            if self._timer() >= deadline:
                raise self._timeout_error(kind) from e
            raise
        finally:
            watchdog.cancel()
        # A watchdog shutdown can end the body early without an error
        self._check_deadline(deadline, kind)
        return received

    def _check_deadline(self, deadline: float, kind: ProbeKind) -> None:
        if self._timer() >= deadline:
            raise self._timeout_error(kind)

    def _timeout_error(self, kind: ProbeKind) -> requests.Timeout:
        timeout = self.endpoints.timeout_for(kind)
        return requests.Timeout(f"{kind} probe exceeded its {timeout:g}s timeout")

    def _attempt(self, kind: ProbeKind, probe: Callable[[], float]) -> ProbeOutcome:
        """Run one sub-probe, converting network and timing faults to a failure."""
        try:
            value = probe()
        except (requests.RequestException, MeasurementError) as e:
            self._log.warning(f"{kind} probe failed: {e}")
            return ProbeOutcome.failed(kind, str(e) or type(e).__name__)

        self._log.debug(f"{kind} probe succeeded: {value:.3f}")
        return ProbeOutcome.succeeded(kind, value)

    # -------------------------------------------------------------------------
    # Full test
    # -------------------------------------------------------------------------

    def run_report(self, parallel: bool = False) -> SpeedTestReport:
        """Run all three sub-probes and keep their individual outcomes.

        Args:
            parallel: Run the sub-probes concurrently instead of one after
                another. Each still uses its own session and timeout.

        Raises:
            TestError: If the wall clock cannot be read.
        """
        timestamp = self._timestamp()

        if parallel:
            with ThreadPoolExecutor(
                max_workers=3, thread_name_prefix="speedtest"
            ) as pool:
                ping = pool.submit(self.measure_ping)
                download = pool.submit(self.measure_download)
                upload = pool.submit(self.measure_upload)
                report = SpeedTestReport(
                    timestamp=timestamp,
                    ping=ping.result(),
                    download=download.result(),
                    upload=upload.result(),
                )
        else:
            report = SpeedTestReport(
                timestamp=timestamp,
                ping=self.measure_ping(),
                download=self.measure_download(),
                upload=self.measure_upload(),
            )

        failed = report.failed_probes()
        if failed:
            failed_names = ", ".join(failed)
            self._log.info(f"Speed test finished with failed probes: {failed_names}")
        return report

    def run(self, parallel: bool = False) -> SpeedTestResult:
        """Run a speed test and return the collapsed result.

        Raises:
            TestError: If the wall clock cannot be read.
        """
        return self.run_report(parallel=parallel).to_result()

    def _timestamp(self) -> int:
        try:
            now = self._clock()
        except (OSError, OverflowError, ValueError) as e:
            raise TestError(f"Failed to read system time: {e}") from e

        if now < 0:
            raise TestError("System time is before the Unix epoch")
        return int(now)


def run_speed_test(parallel: bool = False) -> SpeedTestResult:
    """Run a speed test against the configured endpoints.

    Raises:
        TestError: If the wall clock cannot be read.
    """
    return SpeedTester(EndpointConfig.from_env()).run(parallel=parallel)
