# tourdesk/api/services/itinerary_service.py
"""Service layer for itinerary validation, editing dispatch and session storage."""

import logging
from typing import Dict, Any, Optional, Callable
from flask import session

from tourdesk.api.errors import (
    IncompleteDayError,
    InvalidPayloadError,
    UnknownOperationError,
)
from tourdesk.api.models import Coordinate, Itinerary
from tourdesk.api.services.itinerary_editor import ItineraryEditor, PLACEHOLDER_START

logger = logging.getLogger(__name__)

SESSION_KEY = 'current_itinerary'


def _index(params: Dict[str, Any], name: str = 'index') -> int:
    value = params.get(name)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidPayloadError(f"'{name}' must be an integer, got {value!r}")
    return value


def _coordinate(params: Dict[str, Any], name: str = 'location') -> Coordinate:
    value = params.get(name)
    if not isinstance(value, dict):
        raise InvalidPayloadError(f"'{name}' must be an object with latitude and longitude")
    return Coordinate.make(value.get('latitude'), value.get('longitude'))


# Maps an operation name to a callable taking (itinerary, params).
OPERATIONS: Dict[str, Callable[[Itinerary, Dict[str, Any]], Itinerary]] = {
    'add_day': lambda it, p: ItineraryEditor.add_day(it),
    'remove_day': lambda it, p: ItineraryEditor.remove_day(it, _index(p)),
    'set_description': lambda it, p: ItineraryEditor.set_description(
        it, _index(p), str(p.get('description') or '')),
    'set_start': lambda it, p: ItineraryEditor.set_start(it, _index(p), _coordinate(p)),
    'set_end': lambda it, p: ItineraryEditor.set_end(it, _index(p), _coordinate(p)),
    'clear_end': lambda it, p: ItineraryEditor.clear_end(it, _index(p)),
    'add_end_location': lambda it, p: ItineraryEditor.add_end_location(it, _index(p)),
    'move_day': lambda it, p: ItineraryEditor.move_day(
        it, _index(p, 'from_index'), _index(p, 'to_index')),
    'renumber': lambda it, p: ItineraryEditor.renumber(it),
}


class ItineraryService:
    """Handles itinerary validation, edit dispatch and session management."""

    @staticmethod
    def validate_for_save(itinerary: Itinerary) -> None:
        """Reject itineraries with days that have no real start location.

        Args:
            itinerary: Itinerary about to be persisted

        Raises:
            IncompleteDayError: If any start is unset or still the placeholder
        """
        positions = [
            i for i, day in enumerate(itinerary)
            if day.start is None or day.start == PLACEHOLDER_START
        ]
        if positions:
            numbers = [itinerary[i].day for i in positions]
            logger.info(f"Itinerary incomplete, days without start: {numbers}")
            raise IncompleteDayError(positions, numbers)

    @staticmethod
    def apply_operation(itinerary: Itinerary, op: str,
                        params: Optional[Dict[str, Any]] = None) -> Itinerary:
        """Apply a named editor operation.

        Args:
            itinerary: Current itinerary
            op: Operation name, e.g. ``"set_start"``
            params: Operation arguments (``index``, ``location``, ...)

        Returns:
            The edited itinerary

        Raises:
            UnknownOperationError: If ``op`` is not a known operation
        """
        handler = OPERATIONS.get(op)
        if handler is None:
            raise UnknownOperationError(f"Unknown itinerary operation: {op!r}")
        params = params or {}
        if not isinstance(params, dict):
            raise InvalidPayloadError("'params' must be an object")
        logger.debug(f"Applying {op} with {params}")
        return handler(itinerary, params)

    @staticmethod
    def store_in_session(itinerary: Itinerary) -> None:
        """Store the working itinerary in the Flask session."""
        session[SESSION_KEY] = itinerary.to_payload()
        session.modified = True
        logger.debug(f"Stored itinerary with {len(itinerary)} day(s) in session")

    @staticmethod
    def get_from_session() -> Itinerary:
        """Get the working itinerary from the session (empty if none)."""
        return Itinerary.from_payload(session.get(SESSION_KEY))

    @staticmethod
    def clear_session() -> None:
        """Clear itinerary data from session."""
        session.pop(SESSION_KEY, None)
        session.modified = True
        logger.debug("Cleared itinerary from session")

    @staticmethod
    def summarize(itinerary: Itinerary) -> str:
        """Format a plain-text, one line per day overview."""
        if not len(itinerary):
            return "No days planned yet."
        lines = []
        for day in itinerary:
            line = f"Day {day.day}: {day.description or 'No description'}"
            if day.start is None:
                line += " (start location missing)"
            lines.append(line)
        return "\n".join(lines)


__all__ = ['ItineraryService', 'OPERATIONS']
