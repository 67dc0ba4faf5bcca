"""Shared data structures for package itineraries.

A package itinerary is a day-by-day travel plan. Each day has a start
location and, optionally, an end location. All three types here are
immutable values; editing always produces a new value (see
``tourdesk.api.services.itinerary_editor``).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from tourdesk.api.errors import InvalidCoordinateError, InvalidPayloadError


@dataclass(frozen=True)
class Coordinate:
    """A validated (latitude, longitude) pair."""

    latitude: float
    longitude: float

    def __post_init__(self):
        lat = _to_float(self.latitude, "latitude")
        lon = _to_float(self.longitude, "longitude")
        if not -90.0 <= lat <= 90.0:
            raise InvalidCoordinateError(f"Latitude {lat} outside [-90, 90]")
        if not -180.0 <= lon <= 180.0:
            raise InvalidCoordinateError(f"Longitude {lon} outside [-180, 180]")
        object.__setattr__(self, "latitude", lat)
        object.__setattr__(self, "longitude", lon)

    @classmethod
    def make(cls, latitude: Any, longitude: Any) -> "Coordinate":
        """Build a coordinate, raising InvalidCoordinateError on bad input."""
        return cls(latitude, longitude)

    @staticmethod
    def equals(a: "Coordinate", b: "Coordinate") -> bool:
        # Exact float comparison; see RouteDeriver for a pluggable tolerance.
        return a.latitude == b.latitude and a.longitude == b.longitude

    def as_pair(self) -> List[float]:
        return [self.latitude, self.longitude]

    def to_dict(self) -> Dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}


def _to_float(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise InvalidCoordinateError(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidCoordinateError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise InvalidCoordinateError(f"{name} must be finite, got {value!r}")
    return number


@dataclass(frozen=True)
class ItineraryDay:
    """One day of travel.

    ``start`` is ``None`` only for days that arrived without a usable start
    location; those are hidden on the map and refused at save time.
    """

    day: int  # 1-based label shown to the operator
    description: str = ""
    start: Optional[Coordinate] = None
    end: Optional[Coordinate] = None

    def __post_init__(self):
        if isinstance(self.day, bool) or not isinstance(self.day, int) or self.day < 1:
            raise ValueError(f"Day number must be a positive integer, got {self.day!r}")
        if self.description is None:
            object.__setattr__(self, "description", "")

    @property
    def has_start(self) -> bool:
        return self.start is not None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "day": self.day,
            "description": self.description,
            "start_location": self.start.to_dict() if self.start else None,
        }
        if self.end is not None:
            data["end_location"] = self.end.to_dict()
        return data


@dataclass(frozen=True)
class Itinerary:
    """An ordered sequence of days; order is list position, not ``day``."""

    days: Tuple[ItineraryDay, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "days", tuple(self.days))

    def __len__(self) -> int:
        return len(self.days)

    def __iter__(self) -> Iterator[ItineraryDay]:
        return iter(self.days)

    def __getitem__(self, index: int) -> ItineraryDay:
        return self.days[index]

    def day_numbers(self) -> List[int]:
        return [d.day for d in self.days]

    @classmethod
    def from_payload(cls, payload: Any) -> "Itinerary":
        """Build an itinerary from the JSON shape used by the package editor.

        Each entry looks like::

            {"day": 1, "description": "...",
             "start_location": {"latitude": -1.29, "longitude": 36.82},
             "end_location": {"latitude": -1.30, "longitude": 36.90}}
        """
        if payload is None:
            return cls()
        if not isinstance(payload, list):
            raise InvalidPayloadError("Itinerary must be a list of day objects")

        days = []
        for position, raw in enumerate(payload):
            if not isinstance(raw, dict):
                raise InvalidPayloadError(f"Itinerary entry {position} is not an object")
            day_number = _parse_day_number(raw.get("day"), position)
            description = raw.get("description")
            if description is None:
                description = ""
            days.append(
                ItineraryDay(
                    day=day_number,
                    description=str(description),
                    start=_parse_location(raw.get("start_location")),
                    end=_parse_location(raw.get("end_location")),
                )
            )
        return cls(tuple(days))

    def to_payload(self) -> List[Dict[str, Any]]:
        return [d.to_dict() for d in self.days]


def _parse_day_number(raw: Any, position: int) -> int:
    """Read a day label; a missing one falls back to the 1-based position."""
    if raw is None:
        return position + 1
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        raise InvalidPayloadError(f"Itinerary entry {position} has a non-integer day {raw!r}")
    try:
        number = int(raw)
    except (TypeError, ValueError, OverflowError):
        raise InvalidPayloadError(
            f"Itinerary entry {position} has a non-integer day {raw!r}"
        ) from None
    if number < 1:
        raise InvalidPayloadError(f"Itinerary entry {position} has day {number}")
    return number


def _parse_location(raw: Any) -> Optional[Coordinate]:
    """Return a Coordinate, or None when the location is absent or blank."""
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise InvalidPayloadError(f"Location must be an object, got {raw!r}")
    lat = raw.get("latitude")
    lon = raw.get("longitude")
    if lat in (None, "") or lon in (None, ""):
        return None
    return Coordinate.make(lat, lon)


__all__ = ["Coordinate", "ItineraryDay", "Itinerary"]
