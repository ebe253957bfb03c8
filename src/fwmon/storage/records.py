from __future__ import annotations

import asyncio
import json
import logging
import threading
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from fwmon.config import Settings, data_dir_from_settings
from fwmon.errors import SourceUnavailableError
from fwmon.models import DeviceRecord

logger = logging.getLogger(__name__)

RECORDS_FILE = "records.json"


class DeviceRecordSource(Protocol):
    async def fetch_records(self) -> list[DeviceRecord]: ...


class RecordStore:
    """Device records kept as a JSON list, one entry per serial."""

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._records_path = data_dir / RECORDS_FILE
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._data_dir

    @property
    def records_path(self) -> Path:
        return self._records_path

    def init(self, force: bool = False) -> bool:
        """Create the data dir and an empty store; True if the file was written."""
        self._data_dir.mkdir(parents=True, exist_ok=True)
        if self._records_path.exists() and not force:
            return False
        self._write([])
        return True

    def load_records(self) -> list[DeviceRecord]:
        with self._lock:
            return self._read()

    async def fetch_records(self) -> list[DeviceRecord]:
        records = await asyncio.to_thread(self.load_records)
        logger.debug("Loaded %d record(s) from %s", len(records), self._records_path)
        return records

    def upsert(self, serial: str, firmware: str | None, date: str | None) -> bool:
        """Overwrite the record for ``serial`` or append it; True if appended."""
        record = DeviceRecord(serial=serial, firmware=firmware, date=date)
        entry = record.model_dump(mode="json")
        with self._lock:
            # entries that fail validation are written back untouched
            items = self._read_raw()
            for index, existing in enumerate(items):
                if isinstance(existing, dict) and existing.get("serial") == serial:
                    items[index] = entry
                    created = False
                    break
            else:
                items.append(entry)
                created = True
            self._write(items)

        logger.info(
            "%s record %s (firmware=%s)",
            "Added" if created else "Updated",
            serial,
            firmware,
        )
        return created

    def _read_raw(self) -> list[object]:
        if not self._records_path.exists():
            return []

        try:
            with self._records_path.open("r") as handle:
                data = json.load(handle)
        except OSError as exc:
            raise SourceUnavailableError(
                f"Cannot read records file: {self._records_path}\n{exc}"
            ) from exc
        except json.JSONDecodeError as exc:
            raise SourceUnavailableError(
                f"Invalid JSON in records file: {self._records_path}\n{exc}"
            ) from exc

        if not isinstance(data, list):
            raise SourceUnavailableError(
                f"Records file must hold a list: {self._records_path}"
            )
        return data

    def _read(self) -> list[DeviceRecord]:
        records: list[DeviceRecord] = []
        for index, item in enumerate(self._read_raw()):
            try:
                records.append(DeviceRecord.model_validate(item))
            except ValidationError as exc:
                logger.warning(
                    "Skipping invalid record #%d in %s: %s",
                    index,
                    self._records_path,
                    exc.errors(include_url=False)[0]["msg"],
                )
        return records

    def _write(self, items: list[object]) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        tmp_path = self._records_path.with_suffix(".json.tmp")
        with tmp_path.open("w") as handle:
            json.dump(items, handle, indent=2)
        tmp_path.replace(self._records_path)


def open_store(settings: Settings, data_dir: Path | None = None) -> RecordStore:
    store = RecordStore(data_dir or data_dir_from_settings(settings))
    store.init()
    return store
