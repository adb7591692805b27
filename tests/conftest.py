from __future__ import annotations

from typing import Any

import pytest


def _case_record() -> dict[str, Any]:
    """A complete, consistent case.

    emt1's device runs 5 s ahead of the AED; emt2 has no calibration.
    Corrected timeline (AED clock) on 2024-05-01::

        found 09:58:00  contact 09:59:00  OHCA 10:00:00  CPR 10:00:10
        power on 10:00:30  pads 10:01:00  first shock 10:01:30
        BVM 10:02:00  MCPR 10:03:00  airway 10:05:00  med 10:06:00
        AED off 10:10:00  ROSC 10:10:00
    """
    return {
        "calibration": {
            "emt1": {"keyTime": "2024-05-01T10:00:05", "aedTime": "2024-05-01T10:00:00"},
            "emt2": {"keyTime": "", "aedTime": ""},
        },
        "timeRecords": {
            "found": {"emt1": "2024-05-01T09:58:05"},
            "contact": {"emt1": "2024-05-01T09:59:05"},
            "ohcaJudgment": {"emt1": "2024-05-01T10:00:05"},
            "cprStart": {"emt1": "2024-05-01T10:00:15"},
            "powerOn": "2024-05-01T10:00:30",
            "padsOn": {"emt1": "2024-05-01T10:01:05"},
            "firstVentilation": {"emt1": "2024-05-01T10:02:05"},
            "mcprSetup": {"emt1": "2024-05-01T10:03:05"},
            "firstMed": {"emt1": "2024-05-01T10:06:05"},
            "airway": {"emt1": "2024-05-01T10:05:05"},
            "aedOff": "2024-05-01T10:10:00",
            "rosc": {"emt1": "2024-05-01T10:10:05"},
            "firstShock": "2024-05-01T10:01:30",
        },
        "interruptionRecords": {
            "beforePads": [{"id": "0", "start": "0010", "end": "0020", "reason": "2. AED setup"}],
            "beforeMcpr": [
                {"id": "0", "start": "0100", "end": "0115", "reason": "3. AED analysis"},
                {"id": "1", "start": "0130", "end": "0135", "reason": "1. Pulse check"},
            ],
        },
        "basicInfo": {
            "reviewer": "R. Chen",
            "caseId": "C-0042",
            "date": "2024-05-01",
            "unit": "Station 7",
            "member1": "Lin",
            "member2": "Wu",
            "memo": "Good team work.",
        },
        "technicalInfo": {
            "initialRhythm": "VF",
            "endoAttempts": "1",
            "airwayDevice": "i-gel",
            "aedPadCorrect": "yes",
        },
    }


@pytest.fixture
def case_record() -> dict[str, Any]:
    return _case_record()
