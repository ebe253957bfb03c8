from __future__ import annotations

import asyncio
import json

import pytest

from fwmon.config import DatabaseConfig, Settings
from fwmon.errors import SourceUnavailableError
from fwmon.storage import RecordStore, open_store


def test_init_creates_empty_store(tmp_path):
    store = RecordStore(tmp_path / "data")

    assert store.init() is True
    assert store.init() is False
    assert json.loads(store.records_path.read_text()) == []
    assert store.load_records() == []


def test_missing_file_reads_as_empty(tmp_path):
    assert RecordStore(tmp_path).load_records() == []


def test_upsert_overwrites_by_serial_and_appends_new(tmp_path):
    store = RecordStore(tmp_path)

    assert store.upsert("SN001", "1.0", "2024-01-01") is True
    assert store.upsert("SN002", "2.0", "2024-01-01") is True
    assert store.upsert("SN001", "1.1", "2024-02-01") is False

    records = store.load_records()
    assert [(r.serial, r.firmware, r.date) for r in records] == [
        ("SN001", "1.1", "2024-02-01"),
        ("SN002", "2.0", "2024-01-01"),
    ]


def test_invalid_json_raises_source_unavailable(tmp_path):
    store = RecordStore(tmp_path)
    store.records_path.write_text("{not json")

    with pytest.raises(SourceUnavailableError):
        store.load_records()


def test_non_list_payload_raises_source_unavailable(tmp_path):
    store = RecordStore(tmp_path)
    store.records_path.write_text(json.dumps({"serial": "A"}))

    with pytest.raises(SourceUnavailableError):
        store.load_records()


def test_extra_fields_in_store_are_ignored(tmp_path):
    store = RecordStore(tmp_path)
    store.records_path.write_text(
        json.dumps([{"serial": "A", "firmware": "1.0", "date": "d", "model": "x"}])
    )

    (record,) = store.load_records()
    assert record.current_version == "1.0"
    assert record.last_check == "d"


def test_fetch_records_and_open_store(tmp_path):
    settings = Settings(database=DatabaseConfig(path=str(tmp_path / "db")))
    store = open_store(settings)
    store.upsert("A", "1.0", None)

    records = asyncio.run(store.fetch_records())

    assert store.records_path.exists()
    assert [r.serial for r in records] == ["A"]


def test_records_failing_validation_are_skipped(tmp_path):
    store = RecordStore(tmp_path)
    store.records_path.write_text(
        json.dumps(
            [
                {"serial": "SN001", "firmware": "3.1.9", "date": "d1"},
                {"firmware": "1.0", "date": "d2"},
                "not-a-record",
                {"serial": "SN002", "firmware": "1.0.5"},
            ]
        )
    )

    records = store.load_records()

    assert [r.serial for r in records] == ["SN001", "SN002"]


def test_upsert_keeps_entries_that_fail_validation(tmp_path):
    store = RecordStore(tmp_path)
    store.records_path.write_text(
        json.dumps([{"firmware": "1.0"}, {"serial": "SN001", "firmware": "1.0"}])
    )

    assert store.upsert("SN001", "1.1", "d2") is False

    stored = json.loads(store.records_path.read_text())
    assert stored == [
        {"firmware": "1.0"},
        {"serial": "SN001", "firmware": "1.1", "date": "d2"},
    ]
