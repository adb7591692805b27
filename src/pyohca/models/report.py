"""Metrics report returned to the host for display and submission."""

from __future__ import annotations

import enum
from datetime import datetime

from pydantic import Field

from pyohca._constants import CCF_INSUFFICIENT_DATA, CCF_TIME_ERROR
from pyohca.models._base import OhcaBaseModel
from pyohca.models.events import EventKey, Observer
from pyohca.models.interruption import InterruptionSection

# ------------------------------------------------------------------
# Metric values
# ------------------------------------------------------------------


class MetricStatus(enum.StrEnum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    NOT_PERFORMED = "not_performed"


class DurationMetric(OhcaBaseModel):
    """A signed duration in whole seconds, or the reason there is none."""

    status: MetricStatus = MetricStatus.UNAVAILABLE
    seconds: int | None = None

    @classmethod
    def of(cls, seconds: int | None) -> DurationMetric:
        if seconds is None:
            return cls(status=MetricStatus.UNAVAILABLE)
        return cls(status=MetricStatus.AVAILABLE, seconds=seconds)

    @classmethod
    def not_performed(cls) -> DurationMetric:
        return cls(status=MetricStatus.NOT_PERFORMED)

    @property
    def is_available(self) -> bool:
        return self.status is MetricStatus.AVAILABLE

    @property
    def is_negative(self) -> bool:
        return self.seconds is not None and self.seconds < 0


class FractionStatus(enum.StrEnum):
    AVAILABLE = "available"
    INSUFFICIENT_DATA = "insufficient_data"
    TIME_ERROR = "time_error"


class CompressionFraction(OhcaBaseModel):
    """Chest-compression fraction as a percentage."""

    status: FractionStatus = FractionStatus.INSUFFICIENT_DATA
    percent: float | None = None

    @property
    def display(self) -> str:
        if self.status is FractionStatus.TIME_ERROR:
            return CCF_TIME_ERROR
        if self.percent is None:
            return CCF_INSUFFICIENT_DATA
        return f"{self.percent:.1f}%"


# ------------------------------------------------------------------
# Validation issues
# ------------------------------------------------------------------


class IssueKind(enum.StrEnum):
    ORDER_VIOLATION = "order_violation"
    MISSING_REQUIRED = "missing_required"
    INVALID_TIMESTAMP = "invalid_timestamp"
    NEGATIVE_DURATION = "negative_duration"
    MISSING_INTERRUPTION_REASON = "missing_interruption_reason"


class ValidationIssue(OhcaBaseModel):
    """A flag for the reviewer; never blocks metric computation."""

    kind: IssueKind
    message: str
    event: EventKey | None = None
    observer: Observer | None = None
    """``None`` for direct AED readings and event-level issues."""
    metric: str | None = None
    section: InterruptionSection | None = None
    index: int | None = None


# ------------------------------------------------------------------
# Report
# ------------------------------------------------------------------


class InterruptionTotals(OhcaBaseModel):
    before_pads: int = 0
    before_mcpr: int = 0


class ProcedureFlags(OhcaBaseModel):
    """Events the crew explicitly marked as not performed."""

    skipped_events: tuple[EventKey, ...] = ()

    @classmethod
    def from_skipped(cls, skipped: frozenset[EventKey]) -> ProcedureFlags:
        return cls(skipped_events=tuple(event for event in EventKey if event in skipped))

    def is_skipped(self, event: EventKey) -> bool:
        return event in self.skipped_events

    @property
    def mcpr_not_performed(self) -> bool:
        return self.is_skipped(EventKey.MCPR_SETUP)

    @property
    def ventilation_not_performed(self) -> bool:
        return self.is_skipped(EventKey.FIRST_VENTILATION)

    @property
    def airway_not_performed(self) -> bool:
        return self.is_skipped(EventKey.AIRWAY)


class MetricsReport(OhcaBaseModel):
    """Everything derived from one case snapshot.

    Recomputed in full on every evaluation; identical snapshots give
    identical reports.
    """

    corrected_times: dict[EventKey, datetime | None] = Field(default_factory=dict)
    calibration_offsets_ms: dict[Observer, int | None] = Field(default_factory=dict)
    interruptions: InterruptionTotals = Field(default_factory=InterruptionTotals)
    flags: ProcedureFlags = Field(default_factory=ProcedureFlags)

    cpr_delay: DurationMetric = Field(default_factory=DurationMetric)
    """OHCA recognized -> CPR start."""
    pads_delay: DurationMetric = Field(default_factory=DurationMetric)
    """OHCA recognized -> pads on."""
    ventilation_delay: DurationMetric = Field(default_factory=DurationMetric)
    """OHCA recognized -> first ventilation."""
    airway_delay: DurationMetric = Field(default_factory=DurationMetric)
    """OHCA recognized -> advanced airway."""
    medication_delay: DurationMetric = Field(default_factory=DurationMetric)
    """OHCA recognized -> first medication."""

    pre_aed_compression: DurationMetric = Field(default_factory=DurationMetric)
    pre_mcpr_compression: DurationMetric = Field(default_factory=DurationMetric)
    post_mcpr_compression: DurationMetric = Field(default_factory=DurationMetric)
    total_duration: DurationMetric = Field(default_factory=DurationMetric)
    """Manual CCF denominator: OHCA recognized -> MCPR setup (or AED off)."""
    overall_duration: DurationMetric = Field(default_factory=DurationMetric)
    """Overall CCF denominator: pads on -> AED off."""

    manual_ccf: CompressionFraction = Field(default_factory=CompressionFraction)
    overall_ccf: CompressionFraction = Field(default_factory=CompressionFraction)

    issues: tuple[ValidationIssue, ...] = ()

    def issues_for(self, event: EventKey, observer: Observer | None = None) -> list[ValidationIssue]:
        return [
            issue
            for issue in self.issues
            if issue.event is event and (observer is None or issue.observer is observer)
        ]

    def has_violation(self, event: EventKey, observer: Observer | None = None) -> bool:
        return any(issue.kind is IssueKind.ORDER_VIOLATION for issue in self.issues_for(event, observer))
