"""Data models for fwmon."""

from fwmon.models.device import DeviceRecord
from fwmon.models.report import (
    CheckOutcome,
    ComparisonResult,
    Diagnosis,
    OutdatedDevice,
    ReferenceEntry,
    ReportPayload,
)

__all__ = [
    "CheckOutcome",
    "ComparisonResult",
    "DeviceRecord",
    "Diagnosis",
    "OutdatedDevice",
    "ReferenceEntry",
    "ReportPayload",
]
