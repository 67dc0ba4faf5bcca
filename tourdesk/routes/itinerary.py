# tourdesk/routes/itinerary.py
"""Itinerary routes and blueprint configuration."""

import logging

from flask import Blueprint, jsonify, request

from tourdesk.api.config import get_google_maps_config, get_map_defaults
from tourdesk.api.errors import (
    IncompleteDayError,
    IndexOutOfRangeError,
    ItineraryError,
    InvalidPayloadError,
)
from tourdesk.api.geocoding import GoogleLocationResolver, describe_location
from tourdesk.api.models import Itinerary
from tourdesk.api.services.itinerary_service import ItineraryService
from tourdesk.api.services.map_service import MapService
from tourdesk.api.services.route_service import derive_route

logger = logging.getLogger(__name__)


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidPayloadError("Request body must be a JSON object")
    return data


def _map_for(itinerary):
    return MapService.build_map_payload(derive_route(itinerary), get_map_defaults())


def create_itinerary_blueprint(resolver=None):
    """Create and configure the itinerary blueprint.

    Args:
        resolver: LocationResolver used for location search; defaults to
            the Google geocoder

    Returns:
        Configured Flask Blueprint
    """
    resolver = resolver or GoogleLocationResolver()

    itinerary_bp = Blueprint("itinerary", __name__, url_prefix="/tourdesk")

    @itinerary_bp.errorhandler(ItineraryError)
    def handle_itinerary_error(exc):
        if isinstance(exc, IncompleteDayError):
            return jsonify({
                "error": str(exc),
                "incomplete_days": exc.day_numbers,
                "positions": exc.positions,
            }), 422
        status = 404 if isinstance(exc, IndexOutOfRangeError) else 400
        logger.info(f"Rejected {request.method} {request.path}: {exc}")
        return jsonify({"error": str(exc)}), status

    @itinerary_bp.route("/api/config")
    def api_config():
        """Return map defaults for the frontend."""
        config = get_google_maps_config()
        return jsonify({
            "map": get_map_defaults(),
            "geocoding_configured": bool(config.get("api_key")),
        })

    @itinerary_bp.route("/api/itinerary/route", methods=["POST"])
    def api_route():
        """Derive markers, segments and viewport for an itinerary."""
        itinerary = Itinerary.from_payload(_json_body().get("itinerary"))
        return jsonify(_map_for(itinerary))

    @itinerary_bp.route("/api/itinerary/edit", methods=["POST"])
    def api_edit():
        """Apply one editor operation and return the new state."""
        data = _json_body()
        itinerary = Itinerary.from_payload(data.get("itinerary"))
        op = data.get("op")
        if not isinstance(op, str):
            raise InvalidPayloadError("'op' must be a string")
        edited = ItineraryService.apply_operation(itinerary, op, data.get("params"))
        return jsonify({"itinerary": edited.to_payload(), "map": _map_for(edited)})

    @itinerary_bp.route("/api/itinerary/validate", methods=["POST"])
    def api_validate():
        """Check that every day has a real start location."""
        itinerary = Itinerary.from_payload(_json_body().get("itinerary"))
        ItineraryService.validate_for_save(itinerary)
        return jsonify({"valid": True, "days": len(itinerary)})

    @itinerary_bp.route("/api/itinerary/session", methods=["GET", "POST", "DELETE"])
    def api_session():
        """Read, replace or clear the session-held working itinerary."""
        if request.method == "POST":
            itinerary = Itinerary.from_payload(_json_body().get("itinerary"))
            ItineraryService.store_in_session(itinerary)
        elif request.method == "DELETE":
            ItineraryService.clear_session()
            itinerary = Itinerary()
        else:
            itinerary = ItineraryService.get_from_session()
        return jsonify({
            "itinerary": itinerary.to_payload(),
            "summary": ItineraryService.summarize(itinerary),
            "map": _map_for(itinerary),
        })

    @itinerary_bp.route("/api/locations/search")
    def api_location_search():
        """Free-text location search for the location picker."""
        query = request.args.get("q", "")
        candidates = resolver.search(query)
        return jsonify({"query": query, "results": [c.to_dict() for c in candidates]})

    @itinerary_bp.route("/api/locations/click", methods=["POST"])
    def api_location_click():
        """Turn a map click into a validated coordinate."""
        data = _json_body()
        coordinate = resolver.resolve_click(data)
        return jsonify({
            **coordinate.to_dict(),
            "address": describe_location(coordinate, str(data.get("address") or "")),
        })

    @itinerary_bp.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok", "service": "tourdesk"})

    return itinerary_bp


__all__ = ['create_itinerary_blueprint']
