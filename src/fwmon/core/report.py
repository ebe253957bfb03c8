from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from fwmon.models import OutdatedDevice, ReportPayload


def format_report(
    outdated: Sequence[OutdatedDevice], generated_at: datetime | None = None
) -> ReportPayload:
    entries = tuple(device.as_entry() for device in outdated)
    return ReportPayload(count=len(entries), entries=entries, generated_at=generated_at)
