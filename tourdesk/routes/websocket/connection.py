# tourdesk/routes/websocket/connection.py
"""WebSocket connection and disconnection handlers."""

import time
import logging
from flask import request

from .base import BaseWebSocketHandler

logger = logging.getLogger(__name__)


class ConnectionHandler(BaseWebSocketHandler):
    """Handles WebSocket connection lifecycle events."""

    def register_handlers(self):
        """Register connection-related event handlers."""

        @self.socketio.on('connect', namespace=self.namespace)
        def handle_connect(auth=None):
            """Handle WebSocket connection from the package editor."""
            self.log_event('connect')
            self.emit_to_client('connected', {
                'sid': request.sid,
                'status': 'connected',
            })

        @self.socketio.on('disconnect', namespace=self.namespace)
        def handle_disconnect(*args):
            self.log_event('disconnect')

        @self.socketio.on('ping', namespace=self.namespace)
        def handle_ping():
            """Handle ping for connection testing."""
            self.emit_to_client('pong', {'timestamp': time.time()})
