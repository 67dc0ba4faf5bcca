"""
Tourdesk – main application entry point

* Flask app serving the itinerary JSON API under `/tourdesk`.
* Socket.IO namespace `/tourdesk/ws` pushes the recomputed route to the
  package editor while the operator edits days.
"""

import os
import logging

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from dotenv import load_dotenv

from tourdesk.api.config import get_port, get_websocket_config
from tourdesk.routes import create_itinerary_blueprint, register_websocket_handlers, NAMESPACE

# --------------------------------------------------------------------------- #
# Environment & logging
# --------------------------------------------------------------------------- #
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(resolver=None):
    """Build the Flask app and its Socket.IO server.

    Args:
        resolver: Optional LocationResolver for location search

    Returns:
        Tuple of (app, socketio)
    """
    app = Flask(__name__)

    flask_secret_key = os.getenv("FLASK_SECRET_KEY") or os.urandom(32).hex()
    if "FLASK_SECRET_KEY" not in os.environ:
        logger.warning("No FLASK_SECRET_KEY found. Generated a temporary key.")
    app.secret_key = flask_secret_key

    app.config.update(
        SESSION_COOKIE_SECURE=False,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
        PERMANENT_SESSION_LIFETIME=86400,
    )

    # CORS for the admin console front-end
    CORS(app, origins="*", supports_credentials=True)

    ws_config = get_websocket_config()
    socketio = SocketIO(
        app,
        cors_allowed_origins=ws_config["cors_allowed_origins"],
        ping_interval=ws_config["ping_interval"],
        ping_timeout=ws_config["ping_timeout"],
        async_mode="threading",
        logger=False,
        engineio_logger=False,
    )
    logger.info("Socket.IO initialised (async_mode=threading)")

    app.register_blueprint(create_itinerary_blueprint(resolver))
    register_websocket_handlers(socketio)

    @app.route("/debug")
    def debug():
        """Simple JSON health endpoint."""
        return {
            "status": "ok",
            "socketio_initialized": True,
            "endpoints": {
                "health": "/tourdesk/health",
                "websocket_namespace": NAMESPACE,
            },
        }

    return app, socketio


app, socketio = create_app()

# --------------------------------------------------------------------------- #
# Local development runner ( `python main.py` )
# --------------------------------------------------------------------------- #
if __name__ == "__main__":
    port = get_port()
    logger.info("Starting tourdesk on http://localhost:%d", port)
    socketio.run(app, host="0.0.0.0", port=port, debug=False, allow_unsafe_werkzeug=True)

__all__ = ["app", "socketio", "create_app"]
