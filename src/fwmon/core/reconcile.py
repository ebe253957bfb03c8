from __future__ import annotations

from collections.abc import Mapping, Sequence

from fwmon.core.version import is_lower
from fwmon.models import ComparisonResult, DeviceRecord, Diagnosis, OutdatedDevice


def classify(record: DeviceRecord, reference: Mapping[str, str]) -> ComparisonResult:
    expected = reference.get(record.serial)
    if expected is None:
        return ComparisonResult.UNKNOWN
    if is_lower(record.current_version, expected):
        return ComparisonResult.OUTDATED
    return ComparisonResult.UP_TO_DATE


def reconcile(
    records: Sequence[DeviceRecord], reference: Mapping[str, str]
) -> list[OutdatedDevice]:
    """Return the records whose firmware is older than the reference version.

    Input order is preserved. Serials missing from ``reference`` are skipped.
    """
    outdated: list[OutdatedDevice] = []
    for record in records:
        if classify(record, reference) is not ComparisonResult.OUTDATED:
            continue
        outdated.append(
            OutdatedDevice(
                serial=record.serial,
                current_version=record.current_version,
                expected_version=reference[record.serial],
                last_check=record.last_check,
            )
        )
    return outdated


def diagnose(
    records: Sequence[DeviceRecord], reference: Mapping[str, str]
) -> Diagnosis | None:
    if not records:
        return None
    sample = records[0]
    return Diagnosis(
        serial=sample.serial,
        current_version=sample.current_version,
        expected_version=reference.get(sample.serial),
        result=classify(sample, reference),
    )
