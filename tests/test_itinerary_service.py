"""Tests for save validation, edit dispatch and session storage."""

import pytest

from tourdesk.api.errors import (
    IncompleteDayError,
    IndexOutOfRangeError,
    InvalidCoordinateError,
    InvalidPayloadError,
    UnknownOperationError,
)
from tourdesk.api.models import Coordinate, Itinerary, ItineraryDay
from tourdesk.api.services.itinerary_editor import ItineraryEditor
from tourdesk.api.services.itinerary_service import ItineraryService


def test_validate_for_save_accepts_complete_itinerary(nairobi_payload):
    ItineraryService.validate_for_save(Itinerary.from_payload(nairobi_payload))


def test_validate_for_save_rejects_placeholder_and_missing_start(nairobi_payload):
    itinerary = Itinerary.from_payload(nairobi_payload + [{"day": 3}])
    itinerary = ItineraryEditor.add_day(itinerary)

    with pytest.raises(IncompleteDayError) as excinfo:
        ItineraryService.validate_for_save(itinerary)

    assert excinfo.value.positions == [2, 3]
    assert excinfo.value.day_numbers == [3, 4]
    assert "Day 3, Day 4" in str(excinfo.value)


def test_apply_operation_set_start():
    itinerary = ItineraryService.apply_operation(Itinerary(), "add_day")
    itinerary = ItineraryService.apply_operation(
        itinerary, "set_start", {"index": 0, "location": {"latitude": -1.29, "longitude": 36.82}}
    )

    assert itinerary[0].start == Coordinate(-1.29, 36.82)


def test_apply_operation_move_and_description():
    itinerary = Itinerary([ItineraryDay(1), ItineraryDay(2)])

    itinerary = ItineraryService.apply_operation(
        itinerary, "move_day", {"from_index": 1, "to_index": 0})
    itinerary = ItineraryService.apply_operation(
        itinerary, "set_description", {"index": 0, "description": "Moved"})

    assert itinerary.day_numbers() == [2, 1]
    assert itinerary[0].description == "Moved"


def test_apply_operation_unknown_name():
    with pytest.raises(UnknownOperationError):
        ItineraryService.apply_operation(Itinerary(), "teleport")


@pytest.mark.parametrize(
    "op, params, error",
    [
        ("remove_day", {}, InvalidPayloadError),
        ("remove_day", {"index": "0"}, InvalidPayloadError),
        ("remove_day", {"index": 4}, IndexOutOfRangeError),
        ("set_end", {"index": 0}, InvalidPayloadError),
        ("set_end", {"index": 0, "location": {"latitude": 100, "longitude": 0}},
         InvalidCoordinateError),
    ],
)
def test_apply_operation_bad_params(op, params, error):
    itinerary = Itinerary([ItineraryDay(1, start=Coordinate(0, 0))])
    with pytest.raises(error):
        ItineraryService.apply_operation(itinerary, op, params)


def test_apply_operation_rejects_non_object_params():
    with pytest.raises(InvalidPayloadError):
        ItineraryService.apply_operation(Itinerary(), "add_day", ["index", 0])


def test_session_round_trip(app, nairobi_payload):
    itinerary = Itinerary.from_payload(nairobi_payload)

    with app.test_request_context("/"):
        assert len(ItineraryService.get_from_session()) == 0
        ItineraryService.store_in_session(itinerary)
        assert ItineraryService.get_from_session() == itinerary
        ItineraryService.clear_session()
        assert len(ItineraryService.get_from_session()) == 0


def test_summarize():
    itinerary = Itinerary([
        ItineraryDay(1, "Nairobi", Coordinate(0, 0)),
        ItineraryDay(2),
    ])

    assert ItineraryService.summarize(itinerary) == (
        "Day 1: Nairobi\nDay 2: No description (start location missing)"
    )
    assert ItineraryService.summarize(Itinerary()) == "No days planned yet."
