"""Data models for OHCA case records and metrics reports."""

from pyohca.models._base import OhcaBaseModel
from pyohca.models.calibration import CalibrationPair, CalibrationRecord
from pyohca.models.case import BasicInfo, CaseSnapshot, TechnicalInfo
from pyohca.models.events import (
    DIRECT_EVENTS,
    EVENT_LABELS,
    OBSERVER_PRIORITY,
    REQUIRED_EVENTS,
    EventKey,
    Observer,
)
from pyohca.models.interruption import InterruptionInterval, InterruptionRecords, InterruptionSection
from pyohca.models.observation import (
    DirectObservation,
    MultiObserverObservation,
    Observation,
    ObservationState,
    Reading,
    TimeRecords,
)
from pyohca.models.report import (
    CompressionFraction,
    DurationMetric,
    FractionStatus,
    InterruptionTotals,
    IssueKind,
    MetricsReport,
    MetricStatus,
    ProcedureFlags,
    ValidationIssue,
)

__all__ = [
    "BasicInfo",
    "CalibrationPair",
    "CalibrationRecord",
    "CaseSnapshot",
    "CompressionFraction",
    "DIRECT_EVENTS",
    "DirectObservation",
    "DurationMetric",
    "EVENT_LABELS",
    "EventKey",
    "FractionStatus",
    "InterruptionInterval",
    "InterruptionRecords",
    "InterruptionSection",
    "InterruptionTotals",
    "IssueKind",
    "MetricStatus",
    "MetricsReport",
    "MultiObserverObservation",
    "OBSERVER_PRIORITY",
    "Observation",
    "ObservationState",
    "Observer",
    "OhcaBaseModel",
    "ProcedureFlags",
    "REQUIRED_EVENTS",
    "Reading",
    "TechnicalInfo",
    "TimeRecords",
    "ValidationIssue",
]
