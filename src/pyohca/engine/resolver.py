"""Resolve raw observations into corrected AED-clock instants."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from pyohca.config import MissingOffsetPolicy
from pyohca.engine.calibration import CalibrationStore
from pyohca.models.events import EventKey, Observer
from pyohca.models.observation import DirectObservation, MultiObserverObservation, TimeRecords

_logger = logging.getLogger(__name__)


class TimestampResolver:
    """Pick and correct one instant per event.

    Multi-observer events take the first recorded reading in priority
    order (emt1, emt2, emt3) and subtract that observer's clock offset.
    A ``N/A`` from any observer short-circuits the event to ``None``.
    """

    def __init__(
        self,
        calibration: CalibrationStore,
        *,
        missing_offset_policy: MissingOffsetPolicy = MissingOffsetPolicy.ZERO,
    ) -> None:
        self._calibration = calibration
        self._missing_offset_policy = missing_offset_policy

    def resolve(self, observation: DirectObservation | MultiObserverObservation) -> datetime | None:
        match observation:
            case DirectObservation(reading=reading):
                return reading.instant if reading.is_recorded else None
            case MultiObserverObservation():
                if observation.is_skipped:
                    return None
                for observer, reading in observation.readings():
                    if reading.is_recorded and reading.instant is not None:
                        return self._correct(observer, reading.instant)
                return None
        raise TypeError(f"unsupported observation type {type(observation).__name__}")

    def resolve_all(self, records: TimeRecords) -> dict[EventKey, datetime | None]:
        return {event: self.resolve(observation) for event, observation in records.items()}

    def _correct(self, observer: Observer, instant: datetime) -> datetime | None:
        offset = self._calibration.offset_ms(observer)
        if offset is not None:
            return instant - timedelta(milliseconds=offset)

        if self._missing_offset_policy is MissingOffsetPolicy.REJECT and observer is not Observer.EMT1:
            _logger.debug("No calibration for %s; rejecting reading under reject policy", observer)
            return None
        _logger.debug("No calibration for %s; using zero offset", observer)
        return instant
