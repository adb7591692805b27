"""CPR interruption intervals."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import Field, field_validator

from pyohca._constants import BEFORE_MCPR_SLOTS, BEFORE_PADS_SLOTS
from pyohca.ingestion.normalize import is_mmss, parse_mmss, safe_str
from pyohca.models._base import OhcaBaseModel


class InterruptionSection(enum.StrEnum):
    BEFORE_PADS = "beforePads"
    BEFORE_MCPR = "beforeMcpr"


class InterruptionInterval(OhcaBaseModel):
    """One hands-off period, bounded by ``MMSS`` codes read off the video."""

    id: str = ""
    start: str = ""
    end: str = ""
    reason: str = ""

    @field_validator("id", "start", "end", "reason", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return safe_str(value)

    @property
    def start_seconds(self) -> int:
        return parse_mmss(self.start)

    @property
    def end_seconds(self) -> int:
        return parse_mmss(self.end)

    @property
    def duration_seconds(self) -> int:
        """Elapsed seconds; reversed or malformed intervals count as zero."""
        return max(self.end_seconds - self.start_seconds, 0)

    @property
    def is_filled(self) -> bool:
        return is_mmss(self.start) and is_mmss(self.end)

    @property
    def is_reason_missing(self) -> bool:
        return self.is_filled and not self.reason


def _empty_slots(count: int) -> tuple[InterruptionInterval, ...]:
    return tuple(InterruptionInterval(id=str(index)) for index in range(count))


class InterruptionRecords(OhcaBaseModel):
    before_pads: tuple[InterruptionInterval, ...] = Field(default_factory=lambda: _empty_slots(BEFORE_PADS_SLOTS))
    before_mcpr: tuple[InterruptionInterval, ...] = Field(default_factory=lambda: _empty_slots(BEFORE_MCPR_SLOTS))

    def section(self, section: InterruptionSection) -> tuple[InterruptionInterval, ...]:
        if section is InterruptionSection.BEFORE_PADS:
            return self.before_pads
        return self.before_mcpr
