# tourdesk/routes/__init__.py
from tourdesk.routes.itinerary import create_itinerary_blueprint
from tourdesk.routes.websocket import register_websocket_handlers, NAMESPACE

__all__ = ['create_itinerary_blueprint', 'register_websocket_handlers', 'NAMESPACE']
