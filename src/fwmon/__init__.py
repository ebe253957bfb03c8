"""fwmon - find devices running firmware older than the reference list."""

from __future__ import annotations

from importlib.metadata import version

from .config import Settings, get_settings
from .core import compare_versions, format_report, is_lower, reconcile
from .errors import (
    EmptyReferenceError,
    FwmonError,
    MalformedVersionWarning,
    NotificationError,
    SourceUnavailableError,
)
from .models import DeviceRecord, OutdatedDevice, ReportPayload
from .storage import RecordStore, open_store

__all__ = [
    "DeviceRecord",
    "EmptyReferenceError",
    "FwmonError",
    "MalformedVersionWarning",
    "NotificationError",
    "OutdatedDevice",
    "RecordStore",
    "ReportPayload",
    "Settings",
    "SourceUnavailableError",
    "__version__",
    "compare_versions",
    "format_report",
    "get_settings",
    "is_lower",
    "open_store",
    "reconcile",
]

__version__ = version("fwmon")
