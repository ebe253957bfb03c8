from __future__ import annotations

import pytest

from fwmon.core.reference import build_reference_table, read_reference_rows
from fwmon.errors import EmptyReferenceError, SourceUnavailableError


def test_duplicate_serial_keeps_last_version():
    rows = [
        {"serial": "S1", "expected_version": "1.0"},
        {"serial": "S1", "expected_version": "2.0"},
    ]
    assert build_reference_table(rows) == {"S1": "2.0"}


def test_fields_are_trimmed_and_blank_rows_skipped():
    rows = [
        {"serial": "  S1 ", "expected_version": " 3.2.0\t"},
        {"serial": "", "expected_version": "1.0"},
        {"serial": "S2", "expected_version": "   "},
        {"serial": None, "expected_version": None},
        ("S3", "1.0.5"),
    ]
    assert build_reference_table(rows) == {"S1": "3.2.0", "S3": "1.0.5"}


def test_empty_reference_raises():
    with pytest.raises(EmptyReferenceError):
        build_reference_table([])

    with pytest.raises(EmptyReferenceError):
        build_reference_table([{"serial": " ", "expected_version": "1.0"}])


def test_build_consumes_generator():
    rows = ((f"S{i}", f"1.{i}") for i in range(3))
    assert build_reference_table(rows) == {"S0": "1.0", "S1": "1.1", "S2": "1.2"}


def test_read_reference_rows_from_csv(write_reference):
    path = write_reference([("SN001", "3.2.0"), ("SN002", "")])

    rows = list(read_reference_rows(path))

    assert rows == [
        {"serial": "SN001", "expected_version": "3.2.0"},
        {"serial": "SN002", "expected_version": ""},
    ]
    assert build_reference_table(rows) == {"SN001": "3.2.0"}


def test_read_reference_rows_handles_bom_and_custom_columns(tmp_path):
    path = tmp_path / "ref.csv"
    path.write_text("\ufeffserial,fw\nA1,1.0\n", encoding="utf-8")

    rows = list(
        read_reference_rows(
            path, delimiter=",", serial_column="serial", version_column="fw"
        )
    )

    assert rows == [{"serial": "A1", "expected_version": "1.0"}]


def test_missing_reference_file_raises(tmp_path):
    with pytest.raises(SourceUnavailableError):
        list(read_reference_rows(tmp_path / "missing.csv"))
