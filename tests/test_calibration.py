from __future__ import annotations

from datetime import datetime

from pyohca.engine.calibration import CalibrationStore
from pyohca.models.calibration import CalibrationRecord
from pyohca.models.events import Observer


def _store(**pairs: dict[str, str]) -> CalibrationStore:
    return CalibrationStore(CalibrationRecord.model_validate(pairs))


def test_offset_is_key_minus_reference_in_ms() -> None:
    store = _store(emt1={"keyTime": "2024-05-01T10:00:05", "aedTime": "2024-05-01T10:00:00"})
    assert store.offset_ms(Observer.EMT1) == 5_000


def test_offset_can_be_negative_and_sub_second() -> None:
    store = _store(emt2={"keyTime": "2024-05-01T09:59:58.250", "aedTime": "2024-05-01T10:00:00"})
    assert store.offset_ms(Observer.EMT2) == -1_750


def test_offset_none_when_either_side_missing() -> None:
    store = _store(
        emt1={"keyTime": "2024-05-01T10:00:05", "aedTime": ""},
        emt2={"keyTime": "", "aedTime": "2024-05-01T10:00:00"},
    )
    assert store.offset_ms(Observer.EMT1) is None
    assert store.offset_ms(Observer.EMT2) is None
    assert store.offset_ms(Observer.EMT3) is None


def test_offset_none_when_unparsable() -> None:
    store = _store(emt1={"keyTime": "yesterday", "aedTime": "2024-05-01T10:00:00"})
    assert store.offset_ms(Observer.EMT1) is None
    assert store.is_calibrated(Observer.EMT1) is False


def test_offsets_cover_every_observer() -> None:
    store = _store(emt3={"keyTime": "2024-05-01T10:01:00", "aedTime": "2024-05-01T10:00:00"})
    assert store.offsets() == {Observer.EMT1: None, Observer.EMT2: None, Observer.EMT3: 60_000}


def test_offset_follows_the_record_it_wraps() -> None:
    record = CalibrationRecord.model_validate({"emt1": {"keyTime": "2024-05-01T10:00:05", "aedTime": "2024-05-01T10:00:00"}})
    edited = record.model_copy(update={"emt1": record.emt1.model_copy(update={"aed_time": datetime(2024, 5, 1, 10, 0, 3)})})

    assert CalibrationStore(record).offset_ms(Observer.EMT1) == 5_000
    assert CalibrationStore(edited).offset_ms(Observer.EMT1) == 2_000


def test_to_reference_subtracts_offset() -> None:
    store = _store(emt1={"keyTime": "2024-05-01T10:00:05", "aedTime": "2024-05-01T10:00:00"})
    assert store.to_reference(Observer.EMT1, datetime(2024, 5, 1, 10, 5, 5)) == datetime(2024, 5, 1, 10, 5, 0)
    assert store.to_reference(Observer.EMT2, datetime(2024, 5, 1, 10, 5, 5)) is None


def test_offset_compares_zoned_readings_as_instants() -> None:
    store = _store(emt1={"keyTime": "2024-05-01T18:00:05+08:00", "aedTime": "2024-05-01T10:00:00Z"})
    assert store.offset_ms(Observer.EMT1) == 5_000
