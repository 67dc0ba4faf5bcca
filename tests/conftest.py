"""Pytest fixtures for the tourdesk app and its collaborators."""

import os
import sys

import pytest

# Ensure project root is on sys.path so that `import main` resolves.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

os.environ.setdefault("FLASK_SECRET_KEY", "test-secret")

from tourdesk.api.geocoding import LocationCandidate, coordinate_from_event  # noqa: E402
from tourdesk.api.models import Coordinate  # noqa: E402


class FakeResolver:
    """In-memory LocationResolver returning canned search results."""

    def __init__(self, places=None):
        self.places = places or {
            "nairobi": [LocationCandidate(Coordinate(-1.2921, 36.8219), "Nairobi, Kenya")],
            "maasai mara": [
                LocationCandidate(Coordinate(-1.4061, 35.0117), "Maasai Mara National Reserve"),
                LocationCandidate(Coordinate(-1.5, 35.1), "Mara North Conservancy"),
            ],
        }
        self.queries = []

    def search(self, query):
        self.queries.append(query)
        return list(self.places.get(query.strip().lower(), []))

    def resolve_click(self, event):
        return coordinate_from_event(event)


@pytest.fixture
def resolver():
    return FakeResolver()


@pytest.fixture
def app_and_socketio(resolver):
    from main import create_app

    app, socketio = create_app(resolver=resolver)
    app.config.update(TESTING=True)
    return app, socketio


@pytest.fixture
def app(app_and_socketio):
    return app_and_socketio[0]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def nairobi_payload():
    """Two-day safari where day 2 starts where day 1 ends."""
    return [
        {
            "day": 1,
            "description": "Nairobi to Athi River",
            "start_location": {"latitude": -1.29, "longitude": 36.82},
            "end_location": {"latitude": -1.30, "longitude": 36.90},
        },
        {
            "day": 2,
            "description": "Game drive",
            "start_location": {"latitude": -1.30, "longitude": 36.90},
        },
    ]
