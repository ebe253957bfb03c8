from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

ReportEntry = tuple[str, str | None, str, str | None]


class ComparisonResult(str, Enum):
    OUTDATED = "outdated"
    UP_TO_DATE = "up_to_date"
    UNKNOWN = "unknown"


class ReferenceEntry(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    serial: str
    expected_version: str


class OutdatedDevice(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    serial: str
    current_version: str | None
    expected_version: str
    last_check: str | None = None

    def as_entry(self) -> ReportEntry:
        return (
            self.serial,
            self.current_version,
            self.expected_version,
            self.last_check,
        )


class ReportPayload(BaseModel):
    """Data handed to the notifier: a count and one row per outdated device."""

    model_config = {"frozen": True, "extra": "forbid"}

    count: int = Field(ge=0)
    entries: tuple[ReportEntry, ...] = ()
    generated_at: datetime | None = None


@dataclass(frozen=True)
class Diagnosis:
    """How the first stored record compared, for operators troubleshooting."""

    serial: str
    current_version: str | None
    expected_version: str | None
    result: ComparisonResult


@dataclass
class CheckOutcome:
    reference_count: int
    record_count: int
    outdated: list[OutdatedDevice]
    payload: ReportPayload
    notified: bool = False
    diagnosis: Diagnosis | None = None
    warnings: list[str] = field(default_factory=list)
