"""Dotted-numeric firmware version comparison.

Versions are compared segment by segment as integers after stripping anything
that is not a digit or a period, so ``"v1.2.3-beta"`` compares as ``1.2.3``.
Missing trailing segments count as zero (``"1.2" == "1.2.0"``).
"""

from __future__ import annotations

import re
import warnings
from enum import Enum
from itertools import zip_longest

from fwmon.errors import MalformedVersionWarning

_NOISE = re.compile(r"[^0-9.]")


class Ordering(Enum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


def clean_version(value: str) -> str:
    return _NOISE.sub("", value)


def version_segments(value: str) -> list[int]:
    cleaned = clean_version(value)
    if value and not any(ch.isdigit() for ch in cleaned):
        warnings.warn(
            f"Version {value!r} has no numeric segments; comparing as 0",
            MalformedVersionWarning,
            stacklevel=3,
        )
    return [int(part) if part else 0 for part in cleaned.split(".")]


def compare_versions(left: str, right: str) -> Ordering:
    """Three-way comparison of two version strings."""
    pairs = zip_longest(version_segments(left), version_segments(right), fillvalue=0)
    for a, b in pairs:
        if a < b:
            return Ordering.LESS
        if a > b:
            return Ordering.GREATER
    return Ordering.EQUAL


def is_lower(current: str | None, expected: str | None) -> bool:
    """True when ``current`` is strictly older than ``expected``.

    An empty or missing version on either side is never reported as lower.
    """
    if not current or not expected:
        return False
    return compare_versions(current, expected) is Ordering.LESS
