from __future__ import annotations

import asyncio
from datetime import datetime

from fwmon.config import ScheduleConfig
from fwmon.scheduler import describe, next_run, run_forever

FRIDAY_9 = ScheduleConfig(weekday=4, hour=9, minute=0)


def test_next_run_later_same_week():
    # Wednesday
    now = datetime(2024, 5, 1, 14, 30)
    assert next_run(now, FRIDAY_9) == datetime(2024, 5, 3, 9, 0)


def test_next_run_same_day_before_and_after():
    friday_morning = datetime(2024, 5, 3, 8, 59, 59)
    assert next_run(friday_morning, FRIDAY_9) == datetime(2024, 5, 3, 9, 0)

    friday_exact = datetime(2024, 5, 3, 9, 0)
    assert next_run(friday_exact, FRIDAY_9) == datetime(2024, 5, 10, 9, 0)


def test_describe():
    assert describe(FRIDAY_9) == "Fridays at 09:00"


def test_run_forever_sleeps_until_due_and_survives_failures():
    now = datetime(2024, 5, 3, 8, 0)
    slept: list[float] = []
    calls: list[int] = []

    async def fake_sleep(seconds: float) -> None:
        slept.append(seconds)

    async def job() -> None:
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("boom")

    asyncio.run(
        run_forever(job, FRIDAY_9, clock=lambda: now, sleep=fake_sleep, max_runs=2)
    )

    assert slept == [3600.0, 3600.0]
    assert len(calls) == 2
