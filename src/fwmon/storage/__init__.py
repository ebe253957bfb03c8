from __future__ import annotations

from .records import RECORDS_FILE, DeviceRecordSource, RecordStore, open_store

__all__ = ["RECORDS_FILE", "DeviceRecordSource", "RecordStore", "open_store"]
