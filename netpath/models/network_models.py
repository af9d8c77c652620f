"""Pydantic models for network interfaces and path measurements."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class InterfaceRecord(BaseModel):
    """One network adapter as reported by a single enumeration pass."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="OS interface name (e.g. 'eth0')")
    description: str = Field(
        "", description="Human-readable adapter description (may be empty)"
    )
    is_up: bool = Field(..., description="Whether the interface is currently up")
    is_loopback: bool = Field(..., description="Whether this is a loopback interface")
    ip_addresses: list[str] = Field(
        default_factory=list,
        description="Bound addresses, IPv4 first then IPv6",
    )

    @property
    def is_active(self) -> bool:
        """Up and not loopback."""
        return self.is_up and not self.is_loopback


class SpeedTestResult(BaseModel):
    """Point-in-time speed test sample.

    A metric of 0.0 means its sub-probe failed.
    """

    model_config = ConfigDict(frozen=True)

    download_speed: float = Field(..., ge=0, description="Download throughput in Mbps")
    upload_speed: float = Field(..., ge=0, description="Upload throughput in Mbps")
    ping: float = Field(..., ge=0, description="HTTP round trip in milliseconds")
    timestamp: int = Field(..., ge=0, description="Unix time the test started")


class InterfaceSpeedData(BaseModel):
    """Receive/transmit rates of one interface over a sampling window."""

    model_config = ConfigDict(frozen=True)

    interface_name: str = Field(..., min_length=1, description="OS interface name")
    rx_speed: float = Field(..., ge=0, description="Receive rate in Mbps")
    tx_speed: float = Field(..., ge=0, description="Transmit rate in Mbps")
    timestamp: int = Field(..., ge=0, description="Unix time the window closed")
