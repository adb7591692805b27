from __future__ import annotations

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from pyohca import EngineConfig, OhcaSnapshotError, load_case
from pyohca.models import (
    CaseSnapshot,
    DirectObservation,
    EventKey,
    MultiObserverObservation,
    ObservationState,
    Observer,
    Reading,
)


class TestReading:
    def test_not_applicable_is_skipped(self) -> None:
        reading = Reading.model_validate("N/A")
        assert reading.state is ObservationState.SKIPPED
        assert reading.is_skipped is True
        assert reading.instant is None

    def test_empty_is_unset_and_not_invalid(self) -> None:
        reading = Reading.model_validate("")
        assert reading.state is ObservationState.UNSET
        assert reading.is_invalid is False

    def test_garbage_is_unset_and_invalid(self) -> None:
        reading = Reading.model_validate("ten o'clock")
        assert reading.state is ObservationState.UNSET
        assert reading.is_invalid is True
        assert reading.raw == "ten o'clock"

    def test_iso_instant_is_recorded(self) -> None:
        reading = Reading.model_validate("2024-05-01T10:00:05Z")
        assert reading.is_recorded is True
        assert reading.instant == datetime(2024, 5, 1, 10, 0, 5)

    def test_bare_time_uses_context_anchor(self) -> None:
        reading = Reading.model_validate("10:00:05", context={"anchor_date": date(2024, 5, 1)})
        assert reading.instant == datetime(2024, 5, 1, 10, 0, 5)


class TestTimeRecords:
    def test_string_values_become_direct_observations(self) -> None:
        snapshot = load_case({"timeRecords": {"aedOff": "2024-05-01T10:10:00"}})
        assert isinstance(snapshot.time_records.aed_off, DirectObservation)
        assert snapshot.time_records.aed_off.reading.is_recorded is True

    def test_observer_dicts_become_multi_observations(self) -> None:
        snapshot = load_case({"timeRecords": {"padsOn": {"emt1": "", "emt2": "2024-05-01T10:01:00"}}})
        pads = snapshot.time_records.get(EventKey.PADS_ON)

        assert isinstance(pads, MultiObserverObservation)
        assert pads.reading(Observer.EMT2).is_recorded is True
        assert [observer for observer, _ in pads.readings()] == [Observer.EMT1, Observer.EMT2, Observer.EMT3]

    def test_direct_event_given_observer_dict_stays_direct(self) -> None:
        snapshot = load_case({"timeRecords": {"aedOff": {"emt1": "", "emt2": "2024-05-01T10:10:00"}}})
        aed_off = snapshot.time_records.get(EventKey.AED_OFF)

        assert isinstance(aed_off, DirectObservation)
        assert aed_off.reading.raw == "2024-05-01T10:10:00"

    def test_multi_event_given_bare_value_reads_as_first_observer(self) -> None:
        snapshot = load_case({"timeRecords": {"pads_on": "2024-05-01T10:01:05"}})
        pads = snapshot.time_records.get(EventKey.PADS_ON)

        assert isinstance(pads, MultiObserverObservation)
        assert pads.reading(Observer.EMT1).instant == datetime(2024, 5, 1, 10, 1, 5)

    def test_explicit_kind_must_match_event(self) -> None:
        with pytest.raises(OhcaSnapshotError):
            load_case({"timeRecords": {"firstShock": {"kind": "multi", "emt1": "2024-05-01T10:01:30"}}})

    def test_missing_events_take_their_default_shape(self) -> None:
        records = CaseSnapshot().time_records

        assert isinstance(records.power_on, DirectObservation)
        assert isinstance(records.found, MultiObserverObservation)
        assert len(dict(records.items())) == len(EventKey)

    def test_skipped_events(self) -> None:
        snapshot = load_case(
            {
                "timeRecords": {
                    "mcprSetup": {"emt1": "N/A"},
                    "airway": {"emt1": "", "emt3": "N/A"},
                    "firstVentilation": {"emt1": "2024-05-01T10:02:00"},
                }
            }
        )
        assert snapshot.time_records.skipped_events() == frozenset({EventKey.MCPR_SETUP, EventKey.AIRWAY})


class TestLoadCase:
    def test_bare_times_anchor_to_incident_date(self) -> None:
        snapshot = load_case(
            {
                "basicInfo": {"date": "2024-05-01"},
                "calibration": {"emt1": {"keyTime": "10:00:05", "aedTime": "10:00:00"}},
                "timeRecords": {"ohcaJudgment": {"emt1": "10:00:05"}},
            }
        )

        assert snapshot.calibration.emt1.key_time == datetime(2024, 5, 1, 10, 0, 5)
        assert snapshot.time_records.ohca_judgment.emt1.instant == datetime(2024, 5, 1, 10, 0, 5)

    def test_config_anchor_used_without_incident_date(self) -> None:
        config = EngineConfig(anchor_date=date(2023, 12, 31))
        snapshot = load_case({"timeRecords": {"aedOff": "23:59:59"}}, config)

        assert snapshot.time_records.aed_off.reading.instant == datetime(2023, 12, 31, 23, 59, 59)

    def test_epoch_anchor_without_any_date(self) -> None:
        snapshot = load_case({"timeRecords": {"aedOff": "08:15"}})
        assert snapshot.time_records.aed_off.reading.instant == datetime(1970, 1, 1, 8, 15)

    def test_basic_and_technical_info(self) -> None:
        snapshot = load_case(
            {
                "basicInfo": {"caseId": " C-1 ", "member1": "Lin", "member3": "Wu", "unknownField": "x"},
                "technicalInfo": {"endoAttempts": "two", "initialRhythm": None},
            }
        )

        assert snapshot.basic_info.case_id == "C-1"
        assert snapshot.basic_info.members == ["Lin", "Wu"]
        assert snapshot.technical_info.endo_attempts == 0
        assert snapshot.technical_info.initial_rhythm == ""

    def test_snapshot_passes_through(self) -> None:
        snapshot = CaseSnapshot()
        assert load_case(snapshot) is snapshot

    def test_non_mapping_raises(self) -> None:
        with pytest.raises(OhcaSnapshotError, match="mapping"):
            load_case(["not", "a", "case"])  # type: ignore[arg-type]

    def test_bad_structure_raises_with_details(self) -> None:
        with pytest.raises(OhcaSnapshotError) as exc_info:
            load_case({"interruptionRecords": {"beforePads": 5}})

        assert exc_info.value.errors
        assert "beforePads" in exc_info.value.errors[0]["loc"]

    def test_snapshot_is_frozen(self) -> None:
        snapshot = CaseSnapshot()
        with pytest.raises(ValidationError):
            snapshot.basic_info = snapshot.basic_info  # type: ignore[misc]
