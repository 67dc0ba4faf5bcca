# api/config.py
"""Configuration management for the tourdesk API."""
import os
from dotenv import load_dotenv

load_dotenv()

# Nairobi; used when an itinerary has nothing to show on the map.
DEFAULT_MAP_CENTER = (-1.2921, 36.8219)


def _env_number(name, default, cast=float):
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a {cast.__name__}, got {raw!r}") from None


def get_google_maps_config():
    """Get Google Maps configuration."""
    return {
        "api_key": os.getenv("GOOGLE_MAPS_API_KEY", ""),
        "client_id": os.getenv("maps_client_id", ""),
        "client_secret": os.getenv("maps_client_secret", "")
    }


def get_port():
    """Get port configuration."""
    return int(os.getenv("PORT", 5000))


def get_map_defaults():
    """Get map framing defaults for the itinerary preview."""
    return {
        "center": [
            _env_number("MAP_DEFAULT_LAT", DEFAULT_MAP_CENTER[0]),
            _env_number("MAP_DEFAULT_LNG", DEFAULT_MAP_CENTER[1]),
        ],
        "zoom": _env_number("MAP_DEFAULT_ZOOM", 6, int),
        # padding and max zoom are passed through to the renderer's fit-bounds
        "fit_padding": _env_number("MAP_FIT_PADDING", 20, int),
        "max_zoom": _env_number("MAP_MAX_ZOOM", 12, int),
    }


def get_geocoding_config():
    """Get location search configuration."""
    return {
        "result_limit": _env_number("GEOCODE_RESULT_LIMIT", 5, int),
        "language": os.getenv("GEOCODE_LANGUAGE", "en"),
    }


def get_websocket_config():
    """Get WebSocket configuration."""
    return {
        "ping_interval": _env_number("WEBSOCKET_PING_INTERVAL", 25, int),
        "ping_timeout": _env_number("WEBSOCKET_PING_TIMEOUT", 60, int),
        "cors_allowed_origins": os.getenv("WEBSOCKET_CORS_ORIGINS", "*").split(",")
    }
