# tourdesk/routes/websocket/base.py
"""Shared plumbing for the live itinerary editor channel."""

import logging
from flask import request, session
from flask_socketio import emit

from tourdesk.api.services.itinerary_service import SESSION_KEY

logger = logging.getLogger(__name__)

NAMESPACE = "/tourdesk/ws"


class BaseWebSocketHandler:
    """Emits to the editor tab that sent the event and reports its failures."""

    def __init__(self, socketio, namespace=NAMESPACE):
        self.socketio = socketio
        self.namespace = namespace

    def emit_to_client(self, event, data, room=None):
        """Send ``event`` back to the calling editor, or to ``room`` if given."""
        try:
            if room:
                self.socketio.emit(event, data, to=room, namespace=self.namespace)
            else:
                emit(event, data, namespace=self.namespace)
        except Exception as e:
            logger.error(f"Failed to emit {event} to editor {request.sid}: {e}")

    def editor_context(self):
        """Connection id plus the size of the itinerary held for it."""
        days = session.get(SESSION_KEY) or []
        return f"editor={request.sid} days={len(days)}"

    def log_event(self, event_name, data=None):
        if data:
            logger.info(f"[WS] {event_name} {self.editor_context()} {data}")
        else:
            logger.info(f"[WS] {event_name} {self.editor_context()}")

    def handle_error(self, error, event_name=""):
        """Report a rejected edit; the stored itinerary is left as it was."""
        logger.warning(
            f"[WS] {event_name} rejected for {self.editor_context()}: "
            f"{type(error).__name__}: {error}"
        )
        self.emit_to_client('error', {
            'message': str(error),
            'event': event_name,
            'type': type(error).__name__,
        })
