"""Pydantic models for structured output."""

from netpath.models.constants import ProbeKind, ProbeStatus
from netpath.models.network_models import (
    InterfaceRecord,
    InterfaceSpeedData,
    SpeedTestResult,
)

__all__ = [
    "InterfaceRecord",
    "InterfaceSpeedData",
    "ProbeKind",
    "ProbeStatus",
    "SpeedTestResult",
]
