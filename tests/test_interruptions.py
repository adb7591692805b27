from __future__ import annotations

import pytest

from pyohca.engine.interruptions import aggregate, total_seconds
from pyohca.ingestion.normalize import parse_mmss
from pyohca.models.interruption import InterruptionInterval, InterruptionRecords


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("1106", 666),
        ("0000", 0),
        ("0130", 90),
        ("106", 0),
        ("01060", 0),
        ("12a4", 0),
        ("", 0),
        (None, 0),
    ],
)
def test_parse_mmss(value: str | None, expected: int) -> None:
    assert parse_mmss(value) == expected


def test_total_seconds_skips_reversed_intervals() -> None:
    intervals = [{"start": "1106", "end": "1130"}, {"start": "1200", "end": "1150"}]
    assert total_seconds(intervals) == 24


def test_total_seconds_ignores_blank_slots() -> None:
    intervals = [
        InterruptionInterval(start="0010", end="0025"),
        InterruptionInterval(),
        InterruptionInterval(start="0100", end=""),
    ]
    assert total_seconds(intervals) == 15


def test_total_seconds_of_nothing_is_zero() -> None:
    assert total_seconds([]) == 0


def test_aggregate_sums_each_section() -> None:
    records = InterruptionRecords.model_validate(
        {
            "beforePads": [{"start": "0010", "end": "0020"}],
            "beforeMcpr": [{"start": "0100", "end": "0115"}, {"start": "0130", "end": "0135"}],
        }
    )
    totals = aggregate(records)

    assert totals.before_pads == 10
    assert totals.before_mcpr == 20


def test_default_records_have_empty_slots() -> None:
    records = InterruptionRecords()

    assert len(records.before_pads) == 5
    assert len(records.before_mcpr) == 10
    assert aggregate(records).before_pads == 0


def test_reason_missing_only_for_filled_rows() -> None:
    assert InterruptionInterval(start="0010", end="0020").is_reason_missing is True
    assert InterruptionInterval(start="0010", end="0020", reason="1. Pulse check").is_reason_missing is False
    assert InterruptionInterval(start="0010").is_reason_missing is False
