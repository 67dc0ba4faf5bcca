# tourdesk/api/services/itinerary_editor.py
"""Copy-on-write editing operations over an Itinerary."""

import logging
from dataclasses import replace
from typing import Callable, List

from tourdesk.api.errors import IndexOutOfRangeError
from tourdesk.api.models import Coordinate, Itinerary, ItineraryDay

logger = logging.getLogger(__name__)

# Start given to a freshly added day until the operator picks a real location.
PLACEHOLDER_START = Coordinate(0.0, 0.0)


def _check_index(itinerary: Itinerary, index: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(itinerary):
        raise IndexOutOfRangeError(index, len(itinerary))


def _replace_day(
    itinerary: Itinerary, index: int, change: Callable[[ItineraryDay], ItineraryDay]
) -> Itinerary:
    _check_index(itinerary, index)
    days: List[ItineraryDay] = list(itinerary)
    days[index] = change(days[index])
    return Itinerary(tuple(days))


class ItineraryEditor:
    """Pure editing operations; every call returns a new Itinerary."""

    @staticmethod
    def add_day(itinerary: Itinerary) -> Itinerary:
        """Append a day numbered one past the highest existing day number."""
        numbers = itinerary.day_numbers()
        next_number = max(numbers) + 1 if numbers else 1
        new_day = ItineraryDay(day=next_number, description="", start=PLACEHOLDER_START)
        logger.debug(f"Adding day {next_number}")
        return Itinerary(itinerary.days + (new_day,))

    @staticmethod
    def remove_day(itinerary: Itinerary, index: int) -> Itinerary:
        _check_index(itinerary, index)
        logger.debug(f"Removing day at position {index}")
        return Itinerary(itinerary.days[:index] + itinerary.days[index + 1:])

    @staticmethod
    def set_description(itinerary: Itinerary, index: int, text: str) -> Itinerary:
        logger.debug(f"Setting description of position {index}")
        return _replace_day(itinerary, index, lambda d: replace(d, description=text or ""))

    @staticmethod
    def set_start(itinerary: Itinerary, index: int, coordinate: Coordinate) -> Itinerary:
        logger.debug(f"Setting start of position {index} to {coordinate}")
        return _replace_day(itinerary, index, lambda d: replace(d, start=coordinate))

    @staticmethod
    def set_end(itinerary: Itinerary, index: int, coordinate: Coordinate) -> Itinerary:
        logger.debug(f"Setting end of position {index} to {coordinate}")
        return _replace_day(itinerary, index, lambda d: replace(d, end=coordinate))

    @staticmethod
    def clear_end(itinerary: Itinerary, index: int) -> Itinerary:
        logger.debug(f"Clearing end of position {index}")
        return _replace_day(itinerary, index, lambda d: replace(d, end=None))

    @staticmethod
    def add_end_location(itinerary: Itinerary, index: int) -> Itinerary:
        """Give a day an end location equal to its start, if it has none.

        The new end coincides with the start, so nothing extra is drawn until
        the operator moves it.
        """

        def _add(day: ItineraryDay) -> ItineraryDay:
            if day.end is not None:
                return day
            return replace(day, end=day.start or PLACEHOLDER_START)

        logger.debug(f"Adding end location to position {index}")
        return _replace_day(itinerary, index, _add)

    @staticmethod
    def move_day(itinerary: Itinerary, from_index: int, to_index: int) -> Itinerary:
        """Move a day to another position; day numbers travel with their day."""
        _check_index(itinerary, from_index)
        _check_index(itinerary, to_index)
        days = list(itinerary)
        days.insert(to_index, days.pop(from_index))
        logger.debug(f"Moved day from position {from_index} to {to_index}")
        return Itinerary(tuple(days))

    @staticmethod
    def renumber(itinerary: Itinerary) -> Itinerary:
        """Relabel days 1..n in list order."""
        logger.debug(f"Renumbering {len(itinerary)} day(s)")
        return Itinerary(
            tuple(replace(d, day=position + 1) for position, d in enumerate(itinerary))
        )


__all__ = ["ItineraryEditor", "PLACEHOLDER_START"]
