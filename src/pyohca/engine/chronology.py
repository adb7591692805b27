"""Chronological ordering rules for resuscitation events.

The rules form a fixed precedence graph.  A rule whose other endpoint is
unresolved is vacuously satisfied: missing data is reported by the
completeness check, not here.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta

from pyohca._constants import ROSC_TOLERANCE_MS
from pyohca.models.events import EventKey


class RuleKind(enum.StrEnum):
    AFTER = "after"
    BEFORE = "before"
    EQUAL = "equal"


@dataclass(frozen=True, slots=True)
class PrecedenceRule:
    """``event`` must be AFTER / BEFORE / EQUAL to ``other``.

    When ``other`` was explicitly skipped and a ``fallback`` is given, the
    rule compares against ``fallback`` instead.
    """

    event: EventKey
    kind: RuleKind
    other: EventKey
    fallback: EventKey | None = None

    def describe(self) -> str:
        return f"{self.event} must be {self.kind} {self.other}"


DEFAULT_RULES: tuple[PrecedenceRule, ...] = (
    PrecedenceRule(EventKey.CONTACT, RuleKind.AFTER, EventKey.FOUND),
    PrecedenceRule(EventKey.OHCA_JUDGMENT, RuleKind.AFTER, EventKey.CONTACT),
    PrecedenceRule(EventKey.CPR_START, RuleKind.AFTER, EventKey.OHCA_JUDGMENT),
    PrecedenceRule(EventKey.POWER_ON, RuleKind.AFTER, EventKey.OHCA_JUDGMENT),
    PrecedenceRule(EventKey.PADS_ON, RuleKind.AFTER, EventKey.POWER_ON),
    PrecedenceRule(EventKey.FIRST_VENTILATION, RuleKind.AFTER, EventKey.OHCA_JUDGMENT),
    PrecedenceRule(EventKey.AIRWAY, RuleKind.AFTER, EventKey.OHCA_JUDGMENT),
    PrecedenceRule(EventKey.MCPR_SETUP, RuleKind.AFTER, EventKey.CPR_START),
    PrecedenceRule(EventKey.FIRST_MED, RuleKind.AFTER, EventKey.OHCA_JUDGMENT),
    PrecedenceRule(EventKey.AED_OFF, RuleKind.AFTER, EventKey.MCPR_SETUP, fallback=EventKey.PADS_ON),
    PrecedenceRule(EventKey.ROSC, RuleKind.EQUAL, EventKey.AED_OFF),
    PrecedenceRule(EventKey.FIRST_SHOCK, RuleKind.AFTER, EventKey.PADS_ON),
    PrecedenceRule(EventKey.FIRST_SHOCK, RuleKind.BEFORE, EventKey.AED_OFF),
)


class ChronologyValidator:
    """Check candidate instants against the resolved timeline of a case."""

    def __init__(
        self,
        instants: Mapping[EventKey, datetime | None],
        *,
        skipped: frozenset[EventKey] = frozenset(),
        rosc_tolerance_ms: int = ROSC_TOLERANCE_MS,
        rules: tuple[PrecedenceRule, ...] = DEFAULT_RULES,
    ) -> None:
        self._instants = dict(instants)
        self._skipped = skipped
        self._tolerance = timedelta(milliseconds=rosc_tolerance_ms)
        self._rules = rules

    def rules_for(self, event: EventKey) -> list[PrecedenceRule]:
        return [rule for rule in self._rules if rule.event is event]

    def broken_rules(self, event: EventKey, candidate: datetime | None) -> list[PrecedenceRule]:
        if candidate is None:
            return []
        return [rule for rule in self.rules_for(event) if not self._satisfied(rule, candidate)]

    def is_violation(self, event: EventKey, candidate: datetime | None) -> bool:
        return bool(self.broken_rules(event, candidate))

    def violations(self) -> list[EventKey]:
        """Events whose own resolved instant breaks a rule."""
        return [event for event in EventKey if self.is_violation(event, self._instants.get(event))]

    def _satisfied(self, rule: PrecedenceRule, candidate: datetime) -> bool:
        other_key = rule.other
        if rule.fallback is not None and other_key in self._skipped:
            other_key = rule.fallback
        other = self._instants.get(other_key)
        if other is None:
            return True

        if rule.kind is RuleKind.AFTER:
            return candidate > other
        if rule.kind is RuleKind.BEFORE:
            return candidate < other
        return abs(candidate - other) < self._tolerance
