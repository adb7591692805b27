"""Case snapshot: everything the reviewer entered for one resuscitation."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from pyohca.ingestion.normalize import safe_str
from pyohca.models._base import OhcaBaseModel
from pyohca.models.calibration import CalibrationRecord
from pyohca.models.interruption import InterruptionRecords
from pyohca.models.observation import TimeRecords


class BasicInfo(OhcaBaseModel):
    reviewer: str = ""
    battalion: str = ""
    case_id: str = ""
    date: str = ""
    """Incident date (``YYYY-MM-DD``); anchors bare time-of-day readings."""
    unit: str = ""
    ohca_type: str = ""
    notification_time: str = ""
    member1: str = ""
    member2: str = ""
    member3: str = ""
    member4: str = ""
    member5: str = ""
    member6: str = ""
    memo: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return safe_str(value)

    @property
    def members(self) -> list[str]:
        """Non-empty crew member names in slot order."""
        slots = (self.member1, self.member2, self.member3, self.member4, self.member5, self.member6)
        return [member for member in slots if member]


class TechnicalInfo(OhcaBaseModel):
    check_pulse: str = ""
    use_compressor: str = ""
    initial_rhythm: str = ""
    endo_attempts: int = 0
    airway_device: str = ""
    etco2_used: str = ""
    etco2_value: str = ""
    iv_operator: str = ""
    io_operator: str = ""
    endo_operator: str = ""
    team_leader: str = ""
    aed_pad_correct: str = ""

    @field_validator("endo_attempts", mode="before")
    @classmethod
    def _coerce_attempts(cls, value: Any) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0


class CaseSnapshot(OhcaBaseModel):
    """Immutable snapshot of one case record, the engine's only input."""

    calibration: CalibrationRecord = Field(default_factory=CalibrationRecord)
    time_records: TimeRecords = Field(default_factory=TimeRecords)
    interruption_records: InterruptionRecords = Field(default_factory=InterruptionRecords)
    basic_info: BasicInfo = Field(default_factory=BasicInfo)
    technical_info: TechnicalInfo = Field(default_factory=TechnicalInfo)
