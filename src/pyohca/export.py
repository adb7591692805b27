"""Report export: display formatting, submission payload and text summary.

Nothing here performs I/O.  The host posts the payload to its collector
and copies the summary wherever it likes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pyohca._constants import (
    AIRWAY_NOT_PERFORMED,
    EMPTY_DURATION,
    EMPTY_TIME,
    NOT_APPLICABLE,
    VENTILATION_NOT_PERFORMED,
)
from pyohca.models.case import CaseSnapshot
from pyohca.models.events import EventKey
from pyohca.models.observation import DirectObservation, MultiObserverObservation
from pyohca.models.report import DurationMetric, MetricsReport, MetricStatus

# Payload key -> event, in the collector's column order.
_RAW_TIME_KEYS: dict[str, EventKey] = {
    "found": EventKey.FOUND,
    "contact": EventKey.CONTACT,
    "ohca": EventKey.OHCA_JUDGMENT,
    "cpr": EventKey.CPR_START,
    "pads": EventKey.PADS_ON,
    "vent": EventKey.FIRST_VENTILATION,
    "mcpr": EventKey.MCPR_SETUP,
    "airway": EventKey.AIRWAY,
    "med": EventKey.FIRST_MED,
    "rosc": EventKey.ROSC,
}

_CORRECTED_TIME_KEYS: dict[str, EventKey] = {
    "ohca": EventKey.OHCA_JUDGMENT,
    "cpr": EventKey.CPR_START,
    "pads": EventKey.PADS_ON,
    "vent": EventKey.FIRST_VENTILATION,
    "mcpr": EventKey.MCPR_SETUP,
    "airway": EventKey.AIRWAY,
    "med": EventKey.FIRST_MED,
    "aedOff": EventKey.AED_OFF,
}


def format_duration(value: int | DurationMetric | None) -> str:
    """Render seconds as ``"45s"`` or ``"2m05s"``; ``"--"`` when unknown."""
    if isinstance(value, DurationMetric):
        value = value.seconds
    if value is None:
        return EMPTY_DURATION
    sign = "-" if value < 0 else ""
    magnitude = abs(value)
    if magnitude < 60:
        return f"{sign}{magnitude}s"
    minutes, seconds = divmod(magnitude, 60)
    return f"{sign}{minutes}m{seconds:02d}s"


def format_time(instant: datetime | None) -> str:
    if instant is None:
        return EMPTY_TIME
    return instant.strftime("%H:%M:%S")


def first_raw_value(observation: DirectObservation | MultiObserverObservation) -> str:
    """The raw value the crew typed, preferring emt1; ``N/A`` and blanks are skipped."""
    match observation:
        case DirectObservation(reading=reading):
            return reading.raw
        case MultiObserverObservation():
            for _, reading in observation.readings():
                if reading.raw and reading.raw != NOT_APPLICABLE:
                    return reading.raw
    return ""


def _metric_value(metric: DurationMetric, not_performed_text: str = "") -> int | str:
    if metric.status is MetricStatus.NOT_PERFORMED and not_performed_text:
        return not_performed_text
    return metric.seconds if metric.seconds is not None else ""


def build_submission_payload(snapshot: CaseSnapshot, report: MetricsReport) -> dict[str, Any]:
    """Build the JSON-ready dict the host submits to its case collector."""
    records = snapshot.time_records
    return {
        "basicInfo": snapshot.basic_info.model_dump(by_alias=True),
        "rawTimes": {key: first_raw_value(records.get(event)) for key, event in _RAW_TIME_KEYS.items()},
        "correctedTimes": {
            key: _corrected_time(report.corrected_times.get(event)) for key, event in _CORRECTED_TIME_KEYS.items()
        },
        "metrics": {
            "cprDelay": _metric_value(report.cpr_delay),
            "padsDelay": _metric_value(report.pads_delay),
            "bvmTime": _metric_value(report.ventilation_delay, VENTILATION_NOT_PERFORMED),
            "airwayTime": _metric_value(report.airway_delay, AIRWAY_NOT_PERFORMED),
            "medDelay": _metric_value(report.medication_delay),
            "ccf": report.manual_ccf.display,
            "overallCcf": report.overall_ccf.display,
            "preAedComp": report.pre_aed_compression.seconds,
            "preMcprComp": report.pre_mcpr_compression.seconds,
            "postMcprComp": report.post_mcpr_compression.seconds,
            "isMcprNA": report.flags.mcpr_not_performed,
            "isVentNA": report.flags.ventilation_not_performed,
            "isAirwayNA": report.flags.airway_not_performed,
        },
        "technical": snapshot.technical_info.model_dump(by_alias=True),
        "interruptions": {
            "pads": report.interruptions.before_pads,
            "mcpr": report.interruptions.before_mcpr,
        },
    }


def _corrected_time(instant: datetime | None) -> str:
    return format_time(instant) if instant is not None else ""


def _with_fallback(value: str) -> str:
    return value or EMPTY_DURATION


def render_summary(snapshot: CaseSnapshot, report: MetricsReport) -> str:
    """Plain-text QC summary for pasting into the crew's chat thread."""
    basic = snapshot.basic_info
    technical = snapshot.technical_info
    ventilation = (
        VENTILATION_NOT_PERFORMED if report.flags.ventilation_not_performed else format_duration(report.ventilation_delay)
    )
    airway = AIRWAY_NOT_PERFORMED if report.flags.airway_not_performed else format_duration(report.airway_delay)

    lines = [
        "[OHCA quality review]",
        "",
        f"Crew: {', '.join(basic.members)}",
        "",
        f"Initial AED rhythm: {technical.initial_rhythm or 'not recorded'}",
        "",
        "Time metrics:",
        f"OHCA recognized -> CPR start: {format_duration(report.cpr_delay)}",
        f"OHCA recognized -> pads on: {format_duration(report.pads_delay)}",
        f"Time to first BVM: {ventilation}",
        f"Time to advanced airway: {airway}",
        f"Time to first medication: {format_duration(report.medication_delay)}",
        "",
        "CPR interruptions:",
        f"Before pads: {format_duration(report.interruptions.before_pads)}",
        f"Before MCPR: {format_duration(report.interruptions.before_mcpr)}",
        "",
        "CCF:",
        f"Manual CCF: {report.manual_ccf.display}",
        f"Overall CCF: {report.overall_ccf.display}",
        "",
        "Technical checklist:",
        f"AED pad placement correct: {_with_fallback(technical.aed_pad_correct)}",
        f"Carotid pulse checked: {_with_fallback(technical.check_pulse)}",
        f"Compression device used: {_with_fallback(technical.use_compressor)}",
        f"Intubation attempts: {technical.endo_attempts}",
        f"Advanced airway device: {_with_fallback(technical.airway_device)}",
        f"ETCO2 placed: {_with_fallback(technical.etco2_used)}",
        "",
        "Reviewer notes:",
        basic.memo or "none",
    ]
    return "\n".join(lines)
