from __future__ import annotations

from pydantic import BaseModel


class DeviceRecord(BaseModel):
    """A device as last reported to the record store."""

    model_config = {"frozen": True, "extra": "ignore"}

    serial: str
    firmware: str | None = None
    date: str | None = None

    @property
    def current_version(self) -> str | None:
        return self.firmware

    @property
    def last_check(self) -> str | None:
        return self.date
