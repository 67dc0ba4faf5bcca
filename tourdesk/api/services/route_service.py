# tourdesk/api/services/route_service.py
"""Derive map geometry (markers, segments, viewport) from an itinerary."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from tourdesk.api.models import Coordinate, Itinerary, ItineraryDay

logger = logging.getLogger(__name__)

SamePoint = Callable[[Coordinate, Coordinate], bool]


class MarkerRole(str, Enum):
    START = "start"
    END = "end"


class SegmentKind(str, Enum):
    INTRA_DAY_ROUTE = "intra_day_route"
    INTER_DAY_CONNECTOR = "inter_day_connector"


@dataclass(frozen=True)
class Marker:
    position: Coordinate
    day: int
    description: str
    role: MarkerRole

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position.as_pair(),
            "day": self.day,
            "description": self.description,
            "role": self.role.value,
        }


@dataclass(frozen=True)
class Segment:
    start: Coordinate
    end: Coordinate
    kind: SegmentKind
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "coordinates": [self.start.as_pair(), self.end.as_pair()],
            "kind": self.kind.value,
            "label": self.label,
        }


@dataclass(frozen=True)
class BoundingBox:
    south: float
    west: float
    north: float
    east: float

    @classmethod
    def around(cls, points: List[Coordinate]) -> "BoundingBox":
        lats = [p.latitude for p in points]
        lngs = [p.longitude for p in points]
        return cls(south=min(lats), west=min(lngs), north=max(lats), east=max(lngs))

    def to_dict(self) -> Dict[str, float]:
        return {
            "south": self.south,
            "west": self.west,
            "north": self.north,
            "east": self.east,
        }


@dataclass(frozen=True)
class Viewport:
    """Exact bounds of every marker plus the focal point used for centering.

    Visual padding is left to the renderer.
    """

    bounds: BoundingBox
    focus: Coordinate

    def to_dict(self) -> Dict[str, Any]:
        return {"bounds": self.bounds.to_dict(), "focus": self.focus.as_pair()}


@dataclass(frozen=True)
class RouteGeometry:
    markers: Tuple[Marker, ...]
    segments: Tuple[Segment, ...]
    viewport: Optional[Viewport]

    @property
    def is_empty(self) -> bool:
        return not self.markers

    def to_dict(self) -> Dict[str, Any]:
        return {
            "markers": [m.to_dict() for m in self.markers],
            "segments": [s.to_dict() for s in self.segments],
            "viewport": self.viewport.to_dict() if self.viewport else None,
        }


def exact_match(a: Coordinate, b: Coordinate) -> bool:
    """Default "same point" test: exact float equality."""
    return Coordinate.equals(a, b)


def tolerance_match(epsilon: float) -> SamePoint:
    """Build a "same point" test that accepts differences up to ``epsilon`` degrees."""
    if epsilon < 0:
        raise ValueError("epsilon must be non-negative")

    def _match(a: Coordinate, b: Coordinate) -> bool:
        return (
            abs(a.latitude - b.latitude) <= epsilon
            and abs(a.longitude - b.longitude) <= epsilon
        )

    return _match


class RouteDeriver:
    """Turns an itinerary into render-ready map geometry.

    The walk is over raw list positions: a day without a start draws nothing,
    and the day before it gets no connector either, since its successor has no
    start to connect to.
    """

    def __init__(self, same_point: SamePoint = exact_match):
        self.same_point = same_point

    def distinct_end(self, day: ItineraryDay) -> Optional[Coordinate]:
        """Return the day's end only when it differs from its start."""
        if day.start is None or day.end is None:
            return None
        if self.same_point(day.end, day.start):
            return None
        return day.end

    def derive(self, itinerary: Itinerary) -> RouteGeometry:
        days = list(itinerary)
        markers: List[Marker] = []
        segments: List[Segment] = []
        skipped = 0

        for index, day in enumerate(days):
            if day.start is None:
                skipped += 1
                continue

            markers.append(Marker(day.start, day.day, day.description, MarkerRole.START))

            end = self.distinct_end(day)
            if end is not None:
                markers.append(Marker(end, day.day, day.description, MarkerRole.END))
                segments.append(
                    Segment(day.start, end, SegmentKind.INTRA_DAY_ROUTE, f"Day {day.day}")
                )

            if index + 1 < len(days):
                next_day = days[index + 1]
                exit_point = end if end is not None else day.start
                if next_day.start is not None and not self.same_point(exit_point, next_day.start):
                    segments.append(
                        Segment(
                            exit_point,
                            next_day.start,
                            SegmentKind.INTER_DAY_CONNECTOR,
                            f"Day {day.day} to Day {next_day.day}",
                        )
                    )

        if skipped:
            logger.debug(f"Skipped {skipped} day(s) without a start location")

        return RouteGeometry(
            markers=tuple(markers),
            segments=tuple(segments),
            viewport=self.viewport_for(markers),
        )

    @staticmethod
    def viewport_for(markers: List[Marker]) -> Optional[Viewport]:
        points = [m.position for m in markers]
        if not points:
            return None
        return Viewport(bounds=BoundingBox.around(points), focus=points[len(points) // 2])


_default_deriver = RouteDeriver()


def derive_route(itinerary: Itinerary) -> RouteGeometry:
    """Derive geometry with exact "same point" matching."""
    return _default_deriver.derive(itinerary)


__all__ = [
    "MarkerRole",
    "SegmentKind",
    "Marker",
    "Segment",
    "BoundingBox",
    "Viewport",
    "RouteGeometry",
    "RouteDeriver",
    "exact_match",
    "tolerance_match",
    "derive_route",
]
