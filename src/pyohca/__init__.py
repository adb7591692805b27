"""pyohca - Clock reconciliation and CPR quality metrics for OHCA case review."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyohca")
except PackageNotFoundError:
    __version__ = "0+local"
from pyohca.config import EngineConfig, MissingOffsetPolicy
from pyohca.engine.calibration import CalibrationStore
from pyohca.engine.chronology import ChronologyValidator, PrecedenceRule, RuleKind
from pyohca.engine.interruptions import total_seconds
from pyohca.engine.metrics import MetricsCalculator, safe_duration
from pyohca.engine.pipeline import evaluate_case
from pyohca.engine.resolver import TimestampResolver
from pyohca.exceptions import OhcaConfigError, OhcaError, OhcaSnapshotError
from pyohca.export import build_submission_payload, format_duration, format_time, render_summary
from pyohca.ingestion.case import load_case
from pyohca.models import (
    CaseSnapshot,
    CompressionFraction,
    DirectObservation,
    DurationMetric,
    EventKey,
    FractionStatus,
    IssueKind,
    MetricsReport,
    MetricStatus,
    MultiObserverObservation,
    Observer,
    ObservationState,
    Reading,
    ValidationIssue,
)

__all__ = [
    "__version__",
    "CalibrationStore",
    "CaseSnapshot",
    "ChronologyValidator",
    "CompressionFraction",
    "DirectObservation",
    "DurationMetric",
    "EngineConfig",
    "EventKey",
    "FractionStatus",
    "IssueKind",
    "MetricStatus",
    "MetricsCalculator",
    "MetricsReport",
    "MissingOffsetPolicy",
    "MultiObserverObservation",
    "ObservationState",
    "Observer",
    "OhcaConfigError",
    "OhcaError",
    "OhcaSnapshotError",
    "PrecedenceRule",
    "Reading",
    "RuleKind",
    "TimestampResolver",
    "ValidationIssue",
    "build_submission_payload",
    "evaluate_case",
    "format_duration",
    "format_time",
    "load_case",
    "render_summary",
    "safe_duration",
    "total_seconds",
]
