"""Tourdesk – itinerary editing and route visualisation backend."""

__version__ = "0.1.0"
