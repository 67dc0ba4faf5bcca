# tourdesk/api/geocoding.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Protocol

import googlemaps

from tourdesk.api.config import get_geocoding_config, get_google_maps_config
from tourdesk.api.errors import InvalidCoordinateError
from tourdesk.api.models import Coordinate

logger = logging.getLogger(__name__)

_gmaps: googlemaps.Client | None = None


@dataclass(frozen=True)
class LocationCandidate:
    """One search hit offered to the operator when picking a location."""

    coordinate: Coordinate
    display_name: str

    def to_dict(self) -> Dict[str, Any]:
        return {**self.coordinate.to_dict(), "display_name": self.display_name}


class LocationResolver(Protocol):
    """What the editor needs from a geocoder."""

    def search(self, query: str) -> List[LocationCandidate]:
        ...

    def resolve_click(self, event: Mapping[str, Any]) -> Coordinate:
        ...


def _get_client() -> googlemaps.Client | None:
    """Return a cached googlemaps.Client instance."""
    global _gmaps
    if _gmaps is None:
        try:
            cfg = get_google_maps_config()
            api_key = cfg.get("api_key", "")
            if not api_key:
                logger.error("No Google Maps API key found in config")
                return None
            logger.info(f"Initializing Google Maps client with key: {api_key[:10]}...")
            _gmaps = googlemaps.Client(key=api_key)
        except Exception as e:
            logger.error(f"Failed to initialize Google Maps client: {e}")
            return None
    return _gmaps


def coordinate_from_event(event: Mapping[str, Any]) -> Coordinate:
    """Read a map click/drag position in either ``lat/lng`` or ``latitude/longitude`` form."""
    if not isinstance(event, Mapping):
        raise InvalidCoordinateError(f"Map event must be an object, got {event!r}")
    if "lat" in event or "lng" in event:
        return Coordinate.make(event.get("lat"), event.get("lng"))
    return Coordinate.make(event.get("latitude"), event.get("longitude"))


def describe_location(coordinate: Coordinate, label: str = "") -> str:
    """Label for a picked location, falling back to its coordinates."""
    if label and label.strip():
        return label.strip()
    return f"Lat: {coordinate.latitude:.6f}, Lng: {coordinate.longitude:.6f}"


class GoogleLocationResolver:
    """LocationResolver backed by the Google Geocoding API."""

    def __init__(self, client: googlemaps.Client | None = None, limit: int | None = None,
                 language: str | None = None):
        cfg = get_geocoding_config()
        self._client = client
        self.limit = limit if limit is not None else cfg["result_limit"]
        self.language = language or cfg["language"]

    @property
    def client(self) -> googlemaps.Client | None:
        return self._client if self._client is not None else _get_client()

    def search(self, query: str) -> List[LocationCandidate]:
        """Resolve free text to candidate coordinates, best match first.

        Never raises for lookup failures; the picker simply shows no results.
        """
        if not query or not query.strip():
            return []

        client = self.client
        if client is None:
            logger.error("No Google Maps client available")
            return []

        try:
            logger.debug(f"Geocoding query: {query}")
            results = client.geocode(query.strip(), language=self.language)
        except Exception as e:
            logger.error(f"Geocoding error for '{query}': {e}")
            return []

        candidates = []
        for result in results or []:
            try:
                loc = result["geometry"]["location"]
                coordinate = Coordinate.make(loc["lat"], loc["lng"])
            except (KeyError, TypeError, InvalidCoordinateError) as e:
                logger.warning(f"Ignoring malformed geocode result for '{query}': {e}")
                continue
            name = result.get("formatted_address") or describe_location(coordinate)
            candidates.append(LocationCandidate(coordinate, name))
            if len(candidates) >= self.limit:
                break

        if not candidates:
            logger.warning(f"No results found for query: {query}")
        return candidates

    def resolve_click(self, event: Mapping[str, Any]) -> Coordinate:
        return coordinate_from_event(event)


__all__ = [
    "LocationCandidate",
    "LocationResolver",
    "GoogleLocationResolver",
    "coordinate_from_event",
    "describe_location",
]
