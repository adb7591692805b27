"""Resuscitation event and observer vocabulary."""

from __future__ import annotations

import enum


class EventKey(enum.StrEnum):
    """Timed resuscitation events, valued by the host's record keys."""

    FOUND = "found"
    CONTACT = "contact"
    OHCA_JUDGMENT = "ohcaJudgment"
    CPR_START = "cprStart"
    POWER_ON = "powerOn"
    PADS_ON = "padsOn"
    FIRST_VENTILATION = "firstVentilation"
    MCPR_SETUP = "mcprSetup"
    FIRST_MED = "firstMed"
    AIRWAY = "airway"
    AED_OFF = "aedOff"
    ROSC = "rosc"
    FIRST_SHOCK = "firstShock"


class Observer(enum.StrEnum):
    """Rescuer whose personal recording device produced a reading."""

    EMT1 = "emt1"
    EMT2 = "emt2"
    EMT3 = "emt3"


OBSERVER_PRIORITY: tuple[Observer, ...] = (Observer.EMT1, Observer.EMT2, Observer.EMT3)
"""Resolution order for multi-observer events."""

DIRECT_EVENTS: frozenset[EventKey] = frozenset({EventKey.POWER_ON, EventKey.AED_OFF, EventKey.FIRST_SHOCK})
"""Events read straight off the AED clock; never calibrated."""

REQUIRED_EVENTS: tuple[EventKey, ...] = (
    EventKey.FOUND,
    EventKey.CONTACT,
    EventKey.OHCA_JUDGMENT,
    EventKey.CPR_START,
    EventKey.POWER_ON,
    EventKey.PADS_ON,
    EventKey.FIRST_VENTILATION,
    EventKey.MCPR_SETUP,
    EventKey.FIRST_MED,
    EventKey.AED_OFF,
)

EVENT_LABELS: dict[EventKey, str] = {
    EventKey.FOUND: "Patient found",
    EventKey.CONTACT: "Patient contact",
    EventKey.OHCA_JUDGMENT: "OHCA recognized",
    EventKey.CPR_START: "CPR start",
    EventKey.POWER_ON: "AED power on",
    EventKey.PADS_ON: "Pads on",
    EventKey.FIRST_VENTILATION: "First ventilation",
    EventKey.MCPR_SETUP: "MCPR setup",
    EventKey.FIRST_MED: "First medication",
    EventKey.AIRWAY: "Advanced airway",
    EventKey.AED_OFF: "AED power off",
    EventKey.ROSC: "ROSC",
    EventKey.FIRST_SHOCK: "First shock",
}
