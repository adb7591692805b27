#!/usr/bin/env python3
"""Evaluate one saved OHCA case record.

Reads the host's case record (the same JSON object the review form keeps
in local storage), reconciles the observers' clocks, and prints the
corrected timeline, metrics and validation flags.

Usage
-----
::

    python scripts/review_case.py case.json

Options::

    --json               Output the full metrics report as JSON
    --payload            Output the collector submission payload as JSON
    --summary            Output the plain-text QC summary
    --output FILE        Write output to FILE instead of stdout
    --policy zero|reject Override OHCA_MISSING_OFFSET_POLICY
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyohca import (  # noqa: E402
    EngineConfig,
    EventKey,
    MetricsReport,
    MetricStatus,
    OhcaError,
    build_submission_payload,
    evaluate_case,
    format_duration,
    format_time,
    load_case,
    render_summary,
)
from pyohca.models.events import EVENT_LABELS  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _format_report(report: MetricsReport) -> str:
    out: list[str] = []
    out.append(_section("CALIBRATION OFFSETS"))
    for observer, offset in report.calibration_offsets_ms.items():
        shown = "--" if offset is None else f"{offset / 1000:+.1f} s"
        out.append(f"  {observer:<6}: {shown}")

    out.append(_section("CORRECTED TIMELINE (AED clock)"))
    for event in EventKey:
        marker = " (not performed)" if report.flags.is_skipped(event) else ""
        out.append(f"  {EVENT_LABELS[event]:<20}: {format_time(report.corrected_times.get(event))}{marker}")

    out.append(_section("METRICS"))
    rows = (
        ("OHCA -> CPR", report.cpr_delay),
        ("OHCA -> pads", report.pads_delay),
        ("OHCA -> first BVM", report.ventilation_delay),
        ("OHCA -> airway", report.airway_delay),
        ("OHCA -> medication", report.medication_delay),
        ("Compression pre-AED", report.pre_aed_compression),
        ("Compression pre-MCPR", report.pre_mcpr_compression),
        ("Compression post-MCPR", report.post_mcpr_compression),
    )
    for label, metric in rows:
        shown = "not performed" if metric.status is MetricStatus.NOT_PERFORMED else format_duration(metric)
        out.append(f"  {label:<22}: {shown}")
    out.append(f"  {'Interruptions pre-pads':<22}: {format_duration(report.interruptions.before_pads)}")
    out.append(f"  {'Interruptions pre-MCPR':<22}: {format_duration(report.interruptions.before_mcpr)}")
    out.append(f"  {'Manual CCF':<22}: {report.manual_ccf.display}")
    out.append(f"  {'Overall CCF':<22}: {report.overall_ccf.display}")

    out.append(_section(f"VALIDATION ({len(report.issues)} issues)"))
    for issue in report.issues:
        where = "/".join(str(part) for part in (issue.event, issue.observer) if part is not None)
        out.append(f"  [{issue.kind}] {where + ': ' if where else ''}{issue.message}")
    return "\n".join(out)


def main() -> int:
    parser = argparse.ArgumentParser(description="Reconcile clocks and compute CPR metrics for one OHCA case.")
    parser.add_argument("case", help="Case record JSON file")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--json", action="store_true", dest="json_mode", help="Output the metrics report as JSON")
    mode.add_argument("--payload", action="store_true", help="Output the submission payload as JSON")
    mode.add_argument("--summary", action="store_true", help="Output the plain-text QC summary")
    parser.add_argument("--output", "-o", help="Write output to FILE instead of stdout")
    parser.add_argument("--policy", choices=["zero", "reject"], help="Missing calibration offset policy")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.policy:
        overrides["missing_offset_policy"] = args.policy

    try:
        config = EngineConfig.from_env(**overrides)
        raw = json.loads(Path(args.case).read_text(encoding="utf-8"))
        snapshot = load_case(raw, config)
    except (OSError, json.JSONDecodeError, OhcaError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    report = evaluate_case(snapshot, config)

    if args.json_mode:
        text = report.model_dump_json(by_alias=True, indent=2)
    elif args.payload:
        text = json.dumps(build_submission_payload(snapshot, report), indent=2, ensure_ascii=False)
    elif args.summary:
        text = render_summary(snapshot, report)
    else:
        text = _format_report(report)

    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        print(f"Written to {args.output}", file=sys.stderr)
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
