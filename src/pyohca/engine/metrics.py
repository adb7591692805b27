"""Delays, compression times and chest-compression fractions."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from datetime import datetime

from pyohca._constants import ROLLOVER_THRESHOLD_SECONDS, SECONDS_PER_DAY
from pyohca.ingestion.normalize import parse_instant
from pyohca.models.events import EventKey
from pyohca.models.report import (
    CompressionFraction,
    DurationMetric,
    FractionStatus,
    InterruptionTotals,
    IssueKind,
    MetricsReport,
    ProcedureFlags,
    ValidationIssue,
)

_DURATION_FIELDS: tuple[str, ...] = (
    "cpr_delay",
    "pads_delay",
    "ventilation_delay",
    "airway_delay",
    "medication_delay",
    "pre_aed_compression",
    "pre_mcpr_compression",
    "post_mcpr_compression",
    "total_duration",
    "overall_duration",
)


def safe_duration(
    start: datetime | str | None,
    end: datetime | str | None,
    *,
    rollover_threshold_s: int = ROLLOVER_THRESHOLD_SECONDS,
) -> int | None:
    """Whole seconds from *start* to *end*, correcting unflagged midnight crossings.

    A difference more negative than ``-rollover_threshold_s`` gets one day
    added.  The result is floored.  Returns ``None`` if either endpoint is
    missing or unparsable; string endpoints share the same anchor date.
    """
    start_at = parse_instant(start)
    end_at = parse_instant(end)
    if start_at is None or end_at is None:
        return None
    diff = (end_at - start_at).total_seconds()
    if diff < -rollover_threshold_s:
        diff += SECONDS_PER_DAY
    return math.floor(diff)


def subtract_interruptions(metric: DurationMetric, interruption_seconds: int) -> DurationMetric:
    if not metric.is_available or metric.seconds is None:
        return metric
    return DurationMetric.of(metric.seconds - interruption_seconds)


def compression_fraction(terms: Sequence[DurationMetric], denominator: DurationMetric) -> CompressionFraction:
    """Sum of *terms* over *denominator*, as a percentage.

    A non-positive denominator is a ``TIME_ERROR``; any unavailable input
    otherwise means ``INSUFFICIENT_DATA``.
    """
    denominator_seconds = denominator.seconds if denominator.is_available else None
    if denominator_seconds is not None and all(term.is_available for term in terms) and denominator_seconds > 0:
        compressing = sum(term.seconds or 0 for term in terms)
        return CompressionFraction(status=FractionStatus.AVAILABLE, percent=compressing / denominator_seconds * 100)
    if denominator_seconds is not None and denominator_seconds <= 0:
        return CompressionFraction(status=FractionStatus.TIME_ERROR)
    return CompressionFraction(status=FractionStatus.INSUFFICIENT_DATA)


class MetricsCalculator:
    """Turn corrected instants and interruption totals into a metrics report."""

    def __init__(self, *, rollover_threshold_s: int = ROLLOVER_THRESHOLD_SECONDS) -> None:
        self._rollover_threshold_s = rollover_threshold_s

    def span(
        self,
        instants: Mapping[EventKey, datetime | None],
        flags: ProcedureFlags,
        start: EventKey,
        end: EventKey,
    ) -> DurationMetric:
        """Duration between two events; ``NOT_PERFORMED`` if either was skipped."""
        if flags.is_skipped(start) or flags.is_skipped(end):
            return DurationMetric.not_performed()
        seconds = safe_duration(
            instants.get(start),
            instants.get(end),
            rollover_threshold_s=self._rollover_threshold_s,
        )
        return DurationMetric.of(seconds)

    def compute(
        self,
        instants: Mapping[EventKey, datetime | None],
        interruptions: InterruptionTotals,
        flags: ProcedureFlags,
    ) -> MetricsReport:
        def span(start: EventKey, end: EventKey) -> DurationMetric:
            return self.span(instants, flags, start, end)

        judgment = EventKey.OHCA_JUDGMENT
        mcpr_skipped = flags.mcpr_not_performed
        # Without MCPR, manual compressions run until the AED is switched off.
        compression_end = EventKey.AED_OFF if mcpr_skipped else EventKey.MCPR_SETUP

        pre_aed = subtract_interruptions(span(judgment, EventKey.PADS_ON), interruptions.before_pads)
        pre_mcpr = subtract_interruptions(span(EventKey.PADS_ON, compression_end), interruptions.before_mcpr)
        post_mcpr = DurationMetric.not_performed() if mcpr_skipped else span(EventKey.MCPR_SETUP, EventKey.AED_OFF)
        total = span(judgment, compression_end)
        overall = span(EventKey.PADS_ON, EventKey.AED_OFF)
        overall_terms = (pre_mcpr,) if mcpr_skipped else (pre_mcpr, post_mcpr)

        report = MetricsReport(
            corrected_times={event: instants.get(event) for event in EventKey},
            interruptions=interruptions,
            flags=flags,
            cpr_delay=span(judgment, EventKey.CPR_START),
            pads_delay=span(judgment, EventKey.PADS_ON),
            ventilation_delay=span(judgment, EventKey.FIRST_VENTILATION),
            airway_delay=span(judgment, EventKey.AIRWAY),
            medication_delay=span(judgment, EventKey.FIRST_MED),
            pre_aed_compression=pre_aed,
            pre_mcpr_compression=pre_mcpr,
            post_mcpr_compression=post_mcpr,
            total_duration=total,
            overall_duration=overall,
            manual_ccf=compression_fraction((pre_aed, pre_mcpr), total),
            overall_ccf=compression_fraction(overall_terms, overall),
        )
        return report.model_copy(update={"issues": tuple(negative_duration_issues(report))})


def negative_duration_issues(report: MetricsReport) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for name in _DURATION_FIELDS:
        metric: DurationMetric = getattr(report, name)
        if metric.is_negative:
            issues.append(
                ValidationIssue(
                    kind=IssueKind.NEGATIVE_DURATION,
                    metric=name,
                    message=f"{name} is negative ({metric.seconds} s)",
                )
            )
    return issues
