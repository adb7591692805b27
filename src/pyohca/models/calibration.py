"""Per-observer clock calibration pairs."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, ValidationInfo, field_validator

from pyohca.ingestion.normalize import parse_instant
from pyohca.models._base import OhcaBaseModel, anchor_date_from
from pyohca.models.events import Observer


class CalibrationPair(OhcaBaseModel):
    """A rescuer's device time paired with the AED time of the same moment."""

    key_time: datetime | None = None
    """Timestamp shown on the rescuer's recording device."""

    aed_time: datetime | None = None
    """Timestamp shown on the AED for the same real event."""

    @field_validator("key_time", "aed_time", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any, info: ValidationInfo) -> datetime | None:
        return parse_instant(value, anchor_date=anchor_date_from(info))

    @property
    def is_complete(self) -> bool:
        return self.key_time is not None and self.aed_time is not None


class CalibrationRecord(OhcaBaseModel):
    emt1: CalibrationPair = Field(default_factory=CalibrationPair)
    emt2: CalibrationPair = Field(default_factory=CalibrationPair)
    emt3: CalibrationPair = Field(default_factory=CalibrationPair)

    def pair(self, observer: Observer) -> CalibrationPair:
        return getattr(self, observer.value)
