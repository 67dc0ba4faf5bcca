# tourdesk/api/errors.py
"""Exceptions raised by the itinerary model and editor."""

from __future__ import annotations

from typing import Sequence


class ItineraryError(Exception):
    """Base class for every itinerary-related failure."""


class InvalidCoordinateError(ItineraryError, ValueError):
    """A latitude/longitude pair that is non-numeric, non-finite or out of range."""


class InvalidPayloadError(ItineraryError, ValueError):
    """An itinerary payload that does not have the expected JSON shape."""


class UnknownOperationError(ItineraryError, ValueError):
    """An editor operation name that is not registered."""


class IndexOutOfRangeError(ItineraryError, IndexError):
    """An editor operation targeted a day position that does not exist."""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(
            f"Day index {index} is out of range for an itinerary of {length} day(s)"
        )


class IncompleteDayError(ItineraryError, ValueError):
    """One or more days still lack a real start location at save time."""

    def __init__(self, positions: Sequence[int], day_numbers: Sequence[int]):
        self.positions = list(positions)
        self.day_numbers = list(day_numbers)
        labels = ", ".join(f"Day {n}" for n in self.day_numbers)
        super().__init__(f"Start location missing for: {labels}")


__all__ = [
    "ItineraryError",
    "InvalidCoordinateError",
    "InvalidPayloadError",
    "UnknownOperationError",
    "IndexOutOfRangeError",
    "IncompleteDayError",
]
