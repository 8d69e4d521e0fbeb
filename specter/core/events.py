"""\
Events
======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, September 07 2026
Last updated on: Monday, September 21 2026

This module catalogues the events known to this framework. Method call
events are dispatched to listeners around every call made through a
subject, the remaining ones are only recorded in audit logs.
"""

from __future__ import annotations

import typing as t
from enum import Enum
from typing import Final

__all__ = [
    "AFTER_METHOD_CALL",
    "BEFORE_METHOD_CALL",
    "ERROR_EVENTS",
    "EVENTS",
    "EventCategory",
    "EventSeverity",
    "METHOD_CALL_EVENTS",
]

BEFORE_METHOD_CALL: Final[str] = "beforeMethodCall"
AFTER_METHOD_CALL: Final[str] = "afterMethodCall"


class EventCategory(Enum):
    """Event classification for audit trail organisation."""

    OPERATION = "operation"
    ERROR = "error"


class EventSeverity(Enum):
    """Event severity levels for filtering."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


METHOD_CALL_EVENTS: Final[dict[str, dict[str, t.Any]]] = {
    BEFORE_METHOD_CALL: {
        "category": EventCategory.OPERATION,
        "severity": EventSeverity.DEBUG,
        "description": "Method about to be called on the subject",
    },
    AFTER_METHOD_CALL: {
        "category": EventCategory.OPERATION,
        "severity": EventSeverity.DEBUG,
        "description": "Method call on the subject returned",
    },
}

ERROR_EVENTS: Final[dict[str, dict[str, t.Any]]] = {
    "listener_error": {
        "category": EventCategory.ERROR,
        "severity": EventSeverity.WARNING,
        "description": "Listener raised while handling an event",
    },
}

EVENTS: Final[dict[str, dict[str, t.Any]]] = {
    **METHOD_CALL_EVENTS,
    **ERROR_EVENTS,
}
