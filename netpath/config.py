"""Endpoint configuration for reachability and speed test probes.

Endpoints are data, not inline constants, so tests and deployments can point
the probes at local servers:

    config = EndpointConfig(ping_url="http://127.0.0.1:8000/ping")
    config = EndpointConfig.from_env()   # NETPATH_* overrides
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from netpath.models.constants import (
    DEFAULT_DOWNLOAD_TIMEOUT,
    DEFAULT_DOWNLOAD_URL,
    DEFAULT_PING_TIMEOUT,
    DEFAULT_PING_URL,
    DEFAULT_REACHABILITY_TARGETS,
    DEFAULT_REACHABILITY_TIMEOUT,
    DEFAULT_UPLOAD_BYTES,
    DEFAULT_UPLOAD_TIMEOUT,
    DEFAULT_UPLOAD_URL,
    ProbeKind,
)
from netpath.utils.env import EnvVarTypeError, get_env


class ReachabilityTarget(BaseModel):
    """TCP endpoint used as a proxy for internet reachability."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(..., min_length=1, description="IP address or hostname")
    port: int = Field(..., ge=1, le=65535, description="TCP port")

    @classmethod
    def parse(cls, value: str) -> ReachabilityTarget:
        """Parse ``host:port`` (``[v6addr]:port`` for IPv6 literals).

        Raises:
            ValueError: If the string has no port, or an IPv6 literal is
                not bracketed.
        """
        host, sep, port = value.strip().rpartition(":")
        if not sep or not host:
            raise ValueError(f"Expected host:port, got '{value}'")
        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]
        elif ":" in host:
            raise ValueError(f"IPv6 literal must be bracketed, got '{value}'")
        return cls(host=host, port=int(port))

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


def _default_targets() -> list[ReachabilityTarget]:
    return [
        ReachabilityTarget(host=host, port=port)
        for host, port in DEFAULT_REACHABILITY_TARGETS
    ]


class EndpointConfig(BaseModel):
    """Remote endpoints and per-probe timeouts."""

    model_config = ConfigDict(frozen=True)

    reachability_targets: list[ReachabilityTarget] = Field(
        default_factory=_default_targets,
        min_length=1,
        description="Endpoints tried in order by the reachability probe",
    )
    reachability_timeout: float = Field(
        DEFAULT_REACHABILITY_TIMEOUT, gt=0, description="Per-target connect timeout"
    )
    ping_url: str = Field(DEFAULT_PING_URL, description="Lightweight GET endpoint")
    download_url: str = Field(
        DEFAULT_DOWNLOAD_URL, description="GET endpoint serving about 1 MiB"
    )
    upload_url: str = Field(DEFAULT_UPLOAD_URL, description="POST echo endpoint")
    ping_timeout: float = Field(DEFAULT_PING_TIMEOUT, gt=0)
    download_timeout: float = Field(DEFAULT_DOWNLOAD_TIMEOUT, gt=0)
    upload_timeout: float = Field(DEFAULT_UPLOAD_TIMEOUT, gt=0)
    upload_bytes: int = Field(
        DEFAULT_UPLOAD_BYTES, gt=0, description="Size of the zero-filled upload body"
    )

    def url_for(self, kind: ProbeKind) -> str:
        """Return the URL used by an HTTP probe kind."""
        urls = {
            ProbeKind.PING: self.ping_url,
            ProbeKind.DOWNLOAD: self.download_url,
            ProbeKind.UPLOAD: self.upload_url,
        }
        if kind not in urls:
            raise ValueError(f"{kind} is not an HTTP probe")
        return urls[kind]

    def timeout_for(self, kind: ProbeKind) -> float:
        """Return the bounded timeout, in seconds, for a probe kind."""
        timeouts = {
            ProbeKind.REACHABILITY: self.reachability_timeout,
            ProbeKind.PING: self.ping_timeout,
            ProbeKind.DOWNLOAD: self.download_timeout,
            ProbeKind.UPLOAD: self.upload_timeout,
        }
        return timeouts[kind]

    @classmethod
    def from_env(cls) -> EndpointConfig:
        """Build a config from defaults plus ``NETPATH_*`` overrides.

        Raises:
            EnvVarTypeError: If a numeric or target variable cannot be parsed.
            pydantic.ValidationError: If a parsed value is out of range.
        """
        overrides = _reachability_overrides()
        for field, as_type in (
            ("ping_url", str),
            ("download_url", str),
            ("upload_url", str),
            ("ping_timeout", float),
            ("download_timeout", float),
            ("upload_timeout", float),
            ("upload_bytes", int),
        ):
            value = get_env(f"NETPATH_{field.upper()}", as_type=as_type, log=True)
            if value is not None:
                overrides[field] = value

        return cls(**overrides)

    @classmethod
    def reachability_from_env(cls) -> EndpointConfig:
        """Build a config that only reads the ``NETPATH_REACHABILITY_*`` overrides.

        Speed test variables are ignored, so a malformed one cannot break
        callers that only probe reachability.
        """
        return cls(**_reachability_overrides())


def _reachability_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}

    raw_targets = get_env("NETPATH_REACHABILITY_TARGETS", as_type=list, log=True)
    if raw_targets:
        try:
            overrides["reachability_targets"] = [
                ReachabilityTarget.parse(item) for item in raw_targets
            ]
        except ValueError as e:
            raise EnvVarTypeError(
                "NETPATH_REACHABILITY_TARGETS", ",".join(raw_targets), list
            ) from e

    timeout = get_env("NETPATH_REACHABILITY_TIMEOUT", as_type=float, log=True)
    if timeout is not None:
        overrides["reachability_timeout"] = timeout
    return overrides
