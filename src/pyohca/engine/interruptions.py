"""CPR interruption totals."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pyohca.models.interruption import InterruptionInterval, InterruptionRecords
from pyohca.models.report import InterruptionTotals


def total_seconds(intervals: Iterable[InterruptionInterval | Mapping[str, Any]]) -> int:
    """Sum interval durations in seconds.

    Intervals whose end is not after their start contribute zero.  They
    are not errors; the host's form commonly holds half-filled rows.
    """
    total = 0
    for interval in intervals:
        if not isinstance(interval, InterruptionInterval):
            interval = InterruptionInterval.model_validate(interval)
        total += interval.duration_seconds
    return total


def aggregate(records: InterruptionRecords) -> InterruptionTotals:
    return InterruptionTotals(
        before_pads=total_seconds(records.before_pads),
        before_mcpr=total_seconds(records.before_mcpr),
    )
