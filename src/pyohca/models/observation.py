"""Raw event observations.

A single recorded value is a :class:`Reading` with a three-valued state:

* ``UNSET``    -- nothing usable entered yet (empty, missing or unparsable)
* ``SKIPPED``  -- the host's ``N/A`` sentinel: the procedure was not performed
* ``RECORDED`` -- a parsed instant

An event is observed either directly on the AED clock
(:class:`DirectObservation`) or by up to three rescuers on their own
devices (:class:`MultiObserverObservation`).  The two variants form a
discriminated union on ``kind``.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import Field, ValidationInfo, model_validator
from pydantic.alias_generators import to_camel, to_snake

from pyohca.ingestion.normalize import is_not_applicable, parse_instant, safe_str
from pyohca.models._base import OhcaBaseModel, anchor_date_from
from pyohca.models.events import DIRECT_EVENTS, OBSERVER_PRIORITY, EventKey, Observer


class ObservationState(enum.StrEnum):
    UNSET = "unset"
    SKIPPED = "skipped"
    RECORDED = "recorded"


class Reading(OhcaBaseModel):
    """One raw value as typed into the case record."""

    state: ObservationState = ObservationState.UNSET
    instant: datetime | None = None
    raw: str = ""

    @model_validator(mode="before")
    @classmethod
    def _parse_raw_value(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, (dict, Reading)):
            return value
        raw = value.isoformat() if isinstance(value, datetime) else safe_str(value)
        if is_not_applicable(raw):
            return {"state": ObservationState.SKIPPED, "raw": raw}
        instant = parse_instant(value, anchor_date=anchor_date_from(info))
        if instant is None:
            return {"state": ObservationState.UNSET, "raw": raw}
        return {"state": ObservationState.RECORDED, "instant": instant, "raw": raw}

    @property
    def is_recorded(self) -> bool:
        return self.state is ObservationState.RECORDED

    @property
    def is_skipped(self) -> bool:
        return self.state is ObservationState.SKIPPED

    @property
    def is_invalid(self) -> bool:
        """Something was typed in but it is not a timestamp."""
        return self.state is ObservationState.UNSET and bool(self.raw)


class DirectObservation(OhcaBaseModel):
    """Event read off the AED clock; exempt from calibration."""

    kind: Literal["direct"] = "direct"
    reading: Reading = Field(default_factory=Reading)

    @property
    def is_skipped(self) -> bool:
        return self.reading.is_skipped


class MultiObserverObservation(OhcaBaseModel):
    """Event recorded by up to three rescuers on their own devices."""

    kind: Literal["multi"] = "multi"
    emt1: Reading = Field(default_factory=Reading)
    emt2: Reading = Field(default_factory=Reading)
    emt3: Reading = Field(default_factory=Reading)

    def reading(self, observer: Observer) -> Reading:
        return getattr(self, observer.value)

    def readings(self) -> Iterator[tuple[Observer, Reading]]:
        """Yield ``(observer, reading)`` pairs in priority order."""
        for observer in OBSERVER_PRIORITY:
            yield observer, self.reading(observer)

    @property
    def is_skipped(self) -> bool:
        """Any observer marking ``N/A`` skips the whole event."""
        return any(reading.is_skipped for _, reading in self.readings())


Observation = Annotated[DirectObservation | MultiObserverObservation, Field(discriminator="kind")]


def coerce_observation(value: Any, *, direct: bool) -> Any:
    """Map the host's untagged shape onto the variant its event requires.

    Direct events read a single AED value; an observer dict given for one
    contributes its first non-empty raw value, uncalibrated.  Multi-observer
    events given a bare value treat it as emt1's reading.
    """
    kind = "direct" if direct else "multi"
    if isinstance(value, (DirectObservation, MultiObserverObservation)):
        tagged = value.kind
    elif isinstance(value, dict) and "kind" in value:
        tagged = value["kind"]
    else:
        tagged = None
    if tagged is not None:
        if tagged != kind:
            raise ValueError(f"expected a {kind} observation, got {tagged!r}")
        return value

    if not direct:
        if isinstance(value, dict):
            return {"kind": kind, **value}
        return {"kind": kind, OBSERVER_PRIORITY[0].value: value}

    if isinstance(value, dict):
        if "reading" in value:
            return {"kind": kind, **value}
        raws = (safe_str(value.get(observer.value)) for observer in OBSERVER_PRIORITY)
        value = next((raw for raw in raws if raw), "")
    return {"kind": kind, "reading": value}


def _event_for(key: str) -> EventKey | None:
    for candidate in (key, to_camel(key)):
        try:
            return EventKey(candidate)
        except ValueError:
            continue
    return None


class TimeRecords(OhcaBaseModel):
    """Raw observations for every timed event of a case."""

    found: Observation = Field(default_factory=MultiObserverObservation)
    contact: Observation = Field(default_factory=MultiObserverObservation)
    ohca_judgment: Observation = Field(default_factory=MultiObserverObservation)
    cpr_start: Observation = Field(default_factory=MultiObserverObservation)
    power_on: Observation = Field(default_factory=DirectObservation)
    pads_on: Observation = Field(default_factory=MultiObserverObservation)
    first_ventilation: Observation = Field(default_factory=MultiObserverObservation)
    mcpr_setup: Observation = Field(default_factory=MultiObserverObservation)
    first_med: Observation = Field(default_factory=MultiObserverObservation)
    airway: Observation = Field(default_factory=MultiObserverObservation)
    aed_off: Observation = Field(default_factory=DirectObservation)
    rosc: Observation = Field(default_factory=MultiObserverObservation)
    first_shock: Observation = Field(default_factory=DirectObservation)

    @model_validator(mode="before")
    @classmethod
    def _tag_observations(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        tagged: dict[str, Any] = {}
        for key, value in values.items():
            event = _event_for(key)
            if value is None or event is None:
                continue
            tagged[key] = coerce_observation(value, direct=event in DIRECT_EVENTS)
        return tagged

    def get(self, event: EventKey) -> DirectObservation | MultiObserverObservation:
        return getattr(self, to_snake(event.value))

    def items(self) -> Iterator[tuple[EventKey, DirectObservation | MultiObserverObservation]]:
        for event in EventKey:
            yield event, self.get(event)

    def skipped_events(self) -> frozenset[EventKey]:
        return frozenset(event for event, observation in self.items() if observation.is_skipped)
