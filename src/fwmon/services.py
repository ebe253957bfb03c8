"""Firmware check pipeline."""

from __future__ import annotations

import asyncio
import logging
import warnings
from datetime import datetime, timezone
from typing import Protocol

from fwmon.config import Settings
from fwmon.core import build_reference_table, diagnose, format_report, reconcile
from fwmon.core.reference import load_reference
from fwmon.errors import MalformedVersionWarning
from fwmon.models import CheckOutcome, ComparisonResult, Diagnosis, ReportPayload
from fwmon.storage import DeviceRecordSource

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def send(self, payload: ReportPayload) -> None: ...


def log_diagnosis(diagnosis: Diagnosis) -> None:
    logger.info("First record: serial=%s", diagnosis.serial)
    logger.info("  stored firmware:    %s", diagnosis.current_version)
    if diagnosis.result is ComparisonResult.UNKNOWN:
        logger.info("  reference version:  not found (serial not in reference)")
        return
    logger.info("  reference version:  %s", diagnosis.expected_version)
    logger.info("  comparison result:  %s", diagnosis.result.value)


async def run_check(
    settings: Settings,
    source: DeviceRecordSource,
    notifier: Notifier | None = None,
    dry_run: bool = False,
) -> CheckOutcome:
    """Reconcile stored device records against the reference file.

    Both inputs are fetched concurrently and fully materialised before
    comparison. Any fetch error propagates and no report is sent. The notifier
    is only called when at least one device is outdated and ``dry_run`` is off.
    """
    rows, records = await asyncio.gather(
        load_reference(settings), source.fetch_records()
    )
    reference = build_reference_table(rows)
    logger.info("Loaded %d reference entries", len(reference))
    logger.info("Found %d device record(s)", len(records))

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", MalformedVersionWarning)
        outdated = reconcile(records, reference)
    malformed = [
        str(w.message)
        for w in caught
        if issubclass(w.category, MalformedVersionWarning)
    ]
    for message in malformed:
        logger.warning(message)

    payload = format_report(outdated, generated_at=datetime.now(timezone.utc))
    outcome = CheckOutcome(
        reference_count=len(reference),
        record_count=len(records),
        outdated=outdated,
        payload=payload,
        warnings=malformed,
    )

    if not outdated:
        logger.info("No device needs a firmware update")
        outcome.diagnosis = diagnose(records, reference)
        if outcome.diagnosis is not None:
            log_diagnosis(outcome.diagnosis)
        else:
            logger.info("Record store is empty")
        return outcome

    logger.info("%d device(s) are outdated", len(outdated))
    if dry_run or notifier is None:
        logger.info("Skipping notification")
        return outcome

    await asyncio.to_thread(notifier.send, payload)
    outcome.notified = True
    return outcome
