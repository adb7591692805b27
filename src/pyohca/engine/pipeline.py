"""End-to-end evaluation of one case snapshot.

Data flow::

    calibration -> CalibrationStore offsets
    time records -> TimestampResolver -> corrected instants
    corrected instants -> ChronologyValidator -> ordering flags
    interruption lists -> totals
    instants + totals + flags -> MetricsCalculator -> MetricsReport
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pyohca.config import EngineConfig
from pyohca.engine.calibration import CalibrationStore
from pyohca.engine.chronology import ChronologyValidator
from pyohca.engine.interruptions import aggregate
from pyohca.engine.metrics import MetricsCalculator
from pyohca.engine.resolver import TimestampResolver
from pyohca.ingestion.case import load_case
from pyohca.models.case import CaseSnapshot
from pyohca.models.events import EVENT_LABELS, REQUIRED_EVENTS, EventKey, Observer
from pyohca.models.interruption import InterruptionSection
from pyohca.models.observation import DirectObservation, MultiObserverObservation
from pyohca.models.report import IssueKind, MetricsReport, ProcedureFlags, ValidationIssue

_logger = logging.getLogger(__name__)


def evaluate_case(case: CaseSnapshot | Mapping[str, Any], config: EngineConfig | None = None) -> MetricsReport:
    """Compute the metrics report for a case.

    *case* may be a :class:`CaseSnapshot` or the host's raw record, which
    is loaded with :func:`pyohca.ingestion.case.load_case`.
    """
    config = config or EngineConfig()
    snapshot = case if isinstance(case, CaseSnapshot) else load_case(case, config)

    calibration = CalibrationStore(snapshot.calibration)
    resolver = TimestampResolver(calibration, missing_offset_policy=config.missing_offset_policy)
    instants = resolver.resolve_all(snapshot.time_records)
    skipped = snapshot.time_records.skipped_events()
    flags = ProcedureFlags.from_skipped(skipped)

    validator = ChronologyValidator(instants, skipped=skipped, rosc_tolerance_ms=config.rosc_tolerance_ms)
    calculator = MetricsCalculator(rollover_threshold_s=config.rollover_threshold_s)
    report = calculator.compute(instants, aggregate(snapshot.interruption_records), flags)

    issues = [
        *timeline_issues(snapshot, calibration, validator),
        *missing_required_issues(instants, skipped),
        *interruption_reason_issues(snapshot),
        *report.issues,
    ]
    _logger.debug(
        "Evaluated case: %d resolved events, %d issues, manual CCF %s",
        sum(1 for instant in instants.values() if instant is not None),
        len(issues),
        report.manual_ccf.display,
    )
    return report.model_copy(update={"calibration_offsets_ms": calibration.offsets(), "issues": tuple(issues)})


def timeline_issues(
    snapshot: CaseSnapshot,
    calibration: CalibrationStore,
    validator: ChronologyValidator,
) -> list[ValidationIssue]:
    """Flag unparsable readings and ordering violations, per observer.

    Each recorded reading is checked with its own observer's calibration.
    Readings from observers without a complete calibration pair are not
    checked.
    """
    issues: list[ValidationIssue] = []
    for event, observation in snapshot.time_records.items():
        match observation:
            case DirectObservation(reading=reading):
                if reading.is_invalid:
                    issues.append(_invalid_timestamp(event, None, reading.raw))
                issues.extend(_order_issues(validator, event, None, reading.instant))
            case MultiObserverObservation():
                for observer, reading in observation.readings():
                    if reading.is_invalid:
                        issues.append(_invalid_timestamp(event, observer, reading.raw))
                    if reading.instant is None:
                        continue
                    candidate = calibration.to_reference(observer, reading.instant)
                    issues.extend(_order_issues(validator, event, observer, candidate))
    return issues


def missing_required_issues(
    instants: Mapping[EventKey, datetime | None],
    skipped: frozenset[EventKey],
) -> list[ValidationIssue]:
    return [
        ValidationIssue(
            kind=IssueKind.MISSING_REQUIRED,
            event=event,
            message=f"{EVENT_LABELS[event]} is required",
        )
        for event in REQUIRED_EVENTS
        if instants.get(event) is None and event not in skipped
    ]


def interruption_reason_issues(snapshot: CaseSnapshot) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for section in InterruptionSection:
        for index, interval in enumerate(snapshot.interruption_records.section(section)):
            if interval.is_reason_missing:
                issues.append(
                    ValidationIssue(
                        kind=IssueKind.MISSING_INTERRUPTION_REASON,
                        section=section,
                        index=index,
                        message=f"{section} interruption {index + 1} ({interval.start}-{interval.end}) has no reason",
                    )
                )
    return issues


def _invalid_timestamp(event: EventKey, observer: Observer | None, raw: str) -> ValidationIssue:
    return ValidationIssue(
        kind=IssueKind.INVALID_TIMESTAMP,
        event=event,
        observer=observer,
        message=f"{EVENT_LABELS[event]}: {raw!r} is not a timestamp",
    )


def _order_issues(
    validator: ChronologyValidator,
    event: EventKey,
    observer: Observer | None,
    candidate: datetime | None,
) -> list[ValidationIssue]:
    return [
        ValidationIssue(
            kind=IssueKind.ORDER_VIOLATION,
            event=event,
            observer=observer,
            message=rule.describe(),
        )
        for rule in validator.broken_rules(event, candidate)
    ]
