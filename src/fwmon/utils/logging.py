from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from typing import Literal

import coloredlogs  # type: ignore[import]

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]

LOGLEVEL_ENV_VARS = ("FWMON_LOGLEVEL", "LOGLEVEL")

DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# uvicorn's access log repeats every POST /save from the collectors
NOISY_LOGGERS = ("uvicorn.access", "multipart")


def resolve_level(level: str | None = None) -> str:
    if level:
        return level.upper()
    for name in LOGLEVEL_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value.upper()
    return "INFO"


def setup_logging(
    level: LogLevel | None = None, quiet: Iterable[str] = NOISY_LOGGERS
) -> None:
    resolved = resolve_level(level)

    coloredlogs.install(
        level=resolved,
        fmt=DEFAULT_FORMAT,
        datefmt=DEFAULT_DATE_FORMAT,
    )

    if resolved != "DEBUG":
        for name in quiet:
            logging.getLogger(name).setLevel(logging.WARNING)
