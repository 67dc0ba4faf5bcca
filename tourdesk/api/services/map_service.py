# tourdesk/api/services/map_service.py
"""Service layer for map-related operations."""

import logging
from typing import Dict, Any, Optional

from tourdesk.api.config import get_map_defaults
from tourdesk.api.models import Coordinate
from tourdesk.api.services.route_service import Marker, RouteGeometry

logger = logging.getLogger(__name__)


class MapService:
    """Turns derived route geometry into what the map widget draws."""

    @staticmethod
    def format_coordinates(coordinate: Coordinate) -> str:
        return f"{coordinate.latitude:.6f}, {coordinate.longitude:.6f}"

    @staticmethod
    def format_marker_tooltip(marker: Marker) -> str:
        """Format the hover text for a day marker.

        Args:
            marker: Start or end marker

        Returns:
            Text such as ``"Day 2 (End): Lake Naivasha"``
        """
        role = marker.role.value.title()
        return f"Day {marker.day} ({role}): {marker.description or 'No description'}"

    @staticmethod
    def build_map_payload(geometry: RouteGeometry,
                          defaults: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Build the render-ready payload for the itinerary map.

        Args:
            geometry: Output of the route deriver
            defaults: Map defaults; read from config when omitted

        Returns:
            Dictionary with markers, segments and a ``view`` block. When the
            itinerary has nothing to show, the view falls back to the
            configured default center and zoom.
        """
        defaults = defaults or get_map_defaults()

        markers = []
        for marker in geometry.markers:
            data = marker.to_dict()
            data["tooltip"] = MapService.format_marker_tooltip(marker)
            data["caption"] = MapService.format_coordinates(marker.position)
            markers.append(data)

        if geometry.viewport is None:
            view = {
                "center": list(defaults["center"]),
                "zoom": defaults["zoom"],
                "bounds": None,
            }
        else:
            view = {
                "center": geometry.viewport.focus.as_pair(),
                "zoom": defaults["zoom"],
                "bounds": geometry.viewport.bounds.to_dict(),
                "fit_padding": defaults["fit_padding"],
                "max_zoom": defaults["max_zoom"],
            }

        logger.debug(
            f"Map payload: {len(markers)} markers, {len(geometry.segments)} segments"
        )
        return {
            "markers": markers,
            "segments": [s.to_dict() for s in geometry.segments],
            "viewport": geometry.viewport.to_dict() if geometry.viewport else None,
            "view": view,
        }


# Export for use in other modules
__all__ = ['MapService']
