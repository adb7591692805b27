"""Per-observer clock offsets derived from calibration pairs."""

from __future__ import annotations

from datetime import datetime, timedelta

from pyohca.models.calibration import CalibrationRecord
from pyohca.models.events import OBSERVER_PRIORITY, Observer

_ONE_MS = timedelta(milliseconds=1)


class CalibrationStore:
    """Read-only view over a case's calibration record.

    Offsets are recomputed on every call from the current pair, so a
    store never goes stale relative to the record it wraps.
    """

    def __init__(self, record: CalibrationRecord) -> None:
        self._record = record

    def offset_ms(self, observer: Observer) -> int | None:
        """Return ``key_time - aed_time`` in milliseconds.

        ``None`` when either side of the pair is unset or unparsable.
        """
        pair = self._record.pair(observer)
        if pair.key_time is None or pair.aed_time is None:
            return None
        return (pair.key_time - pair.aed_time) // _ONE_MS

    def offsets(self) -> dict[Observer, int | None]:
        return {observer: self.offset_ms(observer) for observer in OBSERVER_PRIORITY}

    def is_calibrated(self, observer: Observer) -> bool:
        return self.offset_ms(observer) is not None

    def to_reference(self, observer: Observer, instant: datetime) -> datetime | None:
        """Shift a device *instant* onto the AED clock.

        Returns ``None`` when *observer* has no complete calibration pair.
        """
        offset = self.offset_ms(observer)
        if offset is None:
            return None
        return instant - timedelta(milliseconds=offset)
