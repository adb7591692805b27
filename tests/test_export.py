from __future__ import annotations

import json
from datetime import datetime
from typing import Any

import pytest

from pyohca import build_submission_payload, evaluate_case, format_duration, format_time, load_case, render_summary
from pyohca.models.report import DurationMetric


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, "--"),
        (0, "0s"),
        (45, "45s"),
        (60, "1m00s"),
        (125, "2m05s"),
        (-10, "-10s"),
        (-125, "-2m05s"),
        (DurationMetric.of(90), "1m30s"),
        (DurationMetric.not_performed(), "--"),
    ],
)
def test_format_duration(value: int | DurationMetric | None, expected: str) -> None:
    assert format_duration(value) == expected


def test_format_time() -> None:
    assert format_time(datetime(2024, 5, 1, 9, 5, 7)) == "09:05:07"
    assert format_time(None) == "--:--:--"


# ------------------------------------------------------------------
# Submission payload
# ------------------------------------------------------------------


def test_payload_sections(case_record: dict[str, Any]) -> None:
    snapshot = load_case(case_record)
    payload = build_submission_payload(snapshot, evaluate_case(snapshot))

    assert payload["basicInfo"]["caseId"] == "C-0042"
    assert payload["technical"]["endoAttempts"] == 1
    assert payload["rawTimes"]["found"] == "2024-05-01T09:58:05"
    assert payload["correctedTimes"]["ohca"] == "10:00:00"
    assert payload["correctedTimes"]["aedOff"] == "10:10:00"
    assert payload["interruptions"] == {"pads": 10, "mcpr": 20}

    metrics = payload["metrics"]
    assert metrics["cprDelay"] == 10
    assert metrics["bvmTime"] == 120
    assert metrics["ccf"] == "83.3%"
    assert metrics["overallCcf"] == "96.3%"
    assert metrics["postMcprComp"] == 420
    assert metrics["isMcprNA"] is False

    json.dumps(payload)


def test_payload_not_performed_text(case_record: dict[str, Any]) -> None:
    case_record["timeRecords"]["firstVentilation"] = {"emt1": "N/A"}
    case_record["timeRecords"]["airway"] = {"emt1": "N/A"}
    snapshot = load_case(case_record)
    payload = build_submission_payload(snapshot, evaluate_case(snapshot))

    assert payload["metrics"]["bvmTime"] == "BVM not performed"
    assert payload["metrics"]["airwayTime"] == "no advanced airway"
    assert payload["metrics"]["isVentNA"] is True
    assert payload["rawTimes"]["vent"] == ""
    assert payload["correctedTimes"]["vent"] == ""


def test_payload_raw_time_prefers_first_observer(case_record: dict[str, Any]) -> None:
    case_record["timeRecords"]["contact"] = {"emt1": "", "emt2": "2024-05-01T09:59:00", "emt3": "2024-05-01T09:59:30"}
    snapshot = load_case(case_record)
    payload = build_submission_payload(snapshot, evaluate_case(snapshot))

    assert payload["rawTimes"]["contact"] == "2024-05-01T09:59:00"


# ------------------------------------------------------------------
# Text summary
# ------------------------------------------------------------------


def test_summary(case_record: dict[str, Any]) -> None:
    snapshot = load_case(case_record)
    summary = render_summary(snapshot, evaluate_case(snapshot))

    assert summary.startswith("[OHCA quality review]")
    assert "Crew: Lin, Wu" in summary
    assert "Initial AED rhythm: VF" in summary
    assert "Time to first BVM: 2m00s" in summary
    assert "Manual CCF: 83.3%" in summary
    assert "Before MCPR: 20s" in summary
    assert summary.endswith("Good team work.")


def test_summary_marks_skipped_procedures(case_record: dict[str, Any]) -> None:
    case_record["timeRecords"]["airway"] = {"emt1": "N/A"}
    snapshot = load_case(case_record)
    summary = render_summary(snapshot, evaluate_case(snapshot))

    assert "Time to advanced airway: no advanced airway" in summary
