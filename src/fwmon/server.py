"""HTTP endpoint that devices (or a collector) use to report their firmware.

Example:
    >>> app = create_app(store)
    >>> uvicorn.run(app, host="127.0.0.1", port=3000)
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from fwmon.errors import SourceUnavailableError
from fwmon.storage import RecordStore

logger = logging.getLogger(__name__)


class SaveRequest(BaseModel):
    """Single record upsert, keyed by serial."""

    serial: str = Field(..., description="Device serial number")
    firmware: str | None = Field(None, description="Installed firmware version")
    date: str | None = Field(None, description="When the firmware was read")

    @field_validator("serial")
    @classmethod
    def _serial_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("serial must not be blank")
        return value


class SaveResponse(BaseModel):
    success: bool
    message: str
    created: bool = False


class HealthResponse(BaseModel):
    status: str
    records: int


def create_app(store: RecordStore) -> FastAPI:
    app = FastAPI(title="fwmon", description="Firmware record collector")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse | JSONResponse:
        try:
            records = store.load_records()
        except SourceUnavailableError as exc:
            logger.error("Record store unreadable: %s", exc)
            return JSONResponse(
                status_code=500,
                content={"success": False, "message": "Failed to read record store"},
            )
        return HealthResponse(status="ok", records=len(records))

    @app.post("/save", response_model=SaveResponse)
    def save(body: SaveRequest) -> SaveResponse | JSONResponse:
        try:
            created = store.upsert(body.serial, body.firmware, body.date)
        except (OSError, SourceUnavailableError) as exc:
            logger.error("Failed to save record %s: %s", body.serial, exc)
            return JSONResponse(
                status_code=500,
                content={"success": False, "message": "Failed to write record store"},
            )

        message = "Record created" if created else "Record updated"
        return SaveResponse(success=True, message=message, created=created)

    return app
