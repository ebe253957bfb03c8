from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta

from fwmon.config import ScheduleConfig

logger = logging.getLogger(__name__)

WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


def describe(config: ScheduleConfig) -> str:
    return f"{WEEKDAYS[config.weekday]}s at {config.hour:02d}:{config.minute:02d}"


def next_run(now: datetime, config: ScheduleConfig) -> datetime:
    """First matching weekday/time strictly after ``now``."""
    candidate = now.replace(
        hour=config.hour, minute=config.minute, second=0, microsecond=0
    )
    candidate += timedelta(days=(config.weekday - now.weekday()) % 7)
    if candidate <= now:
        candidate += timedelta(days=7)
    return candidate


async def run_forever(
    job: Callable[[], Awaitable[object]],
    config: ScheduleConfig,
    clock: Callable[[], datetime] = datetime.now,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    max_runs: int | None = None,
) -> None:
    runs = 0
    while max_runs is None or runs < max_runs:
        now = clock()
        due = next_run(now, config)
        logger.info("Next check scheduled for %s", due.isoformat(sep=" "))
        await sleep((due - now).total_seconds())

        try:
            await job()
        except Exception:
            logger.exception("Scheduled check failed")
        runs += 1
