# tourdesk/routes/websocket/editor.py
"""WebSocket handlers that keep the map preview in step with the editor form."""

import logging
import time

from tourdesk.api.config import get_map_defaults
from tourdesk.api.errors import InvalidPayloadError, ItineraryError
from tourdesk.api.models import Itinerary
from tourdesk.api.services.itinerary_service import ItineraryService
from tourdesk.api.services.map_service import MapService
from tourdesk.api.services.route_service import derive_route

from .base import BaseWebSocketHandler

logger = logging.getLogger(__name__)


class EditorHandler(BaseWebSocketHandler):
    """Handles itinerary edit events and pushes the recomputed route."""

    def emit_route(self, itinerary):
        geometry = derive_route(itinerary)
        self.emit_to_client('route_updated', {
            'itinerary': itinerary.to_payload(),
            'map': MapService.build_map_payload(geometry, get_map_defaults()),
            'timestamp': time.time(),
        })

    def register_handlers(self):
        """Register editor event handlers."""

        @self.socketio.on('load_itinerary', namespace=self.namespace)
        def handle_load_itinerary(data=None):
            """Replace the working itinerary with the one sent by the form."""
            try:
                if not isinstance(data, dict):
                    raise InvalidPayloadError("Expected an object with an 'itinerary' list")
                itinerary = Itinerary.from_payload(data.get('itinerary'))
                ItineraryService.store_in_session(itinerary)
                self.log_event('load_itinerary', {'days': len(itinerary)})
                self.emit_route(itinerary)
            except ItineraryError as exc:
                self.handle_error(exc, 'load_itinerary')

        @self.socketio.on('edit_itinerary', namespace=self.namespace)
        def handle_edit_itinerary(data=None):
            """Apply one editor operation to the working itinerary."""
            try:
                if not isinstance(data, dict) or not isinstance(data.get('op'), str):
                    raise InvalidPayloadError("Expected an object with an 'op' string")
                current = ItineraryService.get_from_session()
                edited = ItineraryService.apply_operation(current, data['op'], data.get('params'))
                ItineraryService.store_in_session(edited)
                self.log_event('edit_itinerary', {'op': data['op']})
                self.emit_route(edited)
            except ItineraryError as exc:
                self.handle_error(exc, 'edit_itinerary')

        @self.socketio.on('get_route', namespace=self.namespace)
        def handle_get_route(data=None):
            """Re-send the route for the current working itinerary."""
            try:
                self.emit_route(ItineraryService.get_from_session())
            except ItineraryError as exc:
                self.handle_error(exc, 'get_route')
