from __future__ import annotations

from .reconcile import classify, diagnose, reconcile
from .reference import build_reference_table, load_reference, read_reference_rows
from .report import format_report
from .version import Ordering, compare_versions, is_lower

__all__ = [
    "Ordering",
    "build_reference_table",
    "classify",
    "compare_versions",
    "diagnose",
    "format_report",
    "is_lower",
    "load_reference",
    "read_reference_rows",
    "reconcile",
]
