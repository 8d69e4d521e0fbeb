"""\
Base Tools
==========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, September 07 2026
Last updated on: Saturday, October 03 2026

Base components.

This module provides foundational classes and utilities shared by the
wrapper and its collaborators: a mixin for concise, introspectable
representations, an in-memory audit log for notable events, and the
example node that identifies the example a subject belongs to.
"""

from __future__ import annotations

import time
import typing as t
from collections.abc import Iterator
from collections.abc import Sequence
from uuid import uuid4

from specter.core.events import EVENTS
from specter.core.events import EventCategory
from specter.core.events import EventSeverity

__all__: Sequence[str] = [
    "AuditLog",
    "ExampleNode",
    "Observable",
    "shorten",
]

_AttributeStream = Iterator[tuple[str, t.Any]]
_StateInfoDict = dict[str, t.Any]

# NOTE(xames3): These limits are used to prevent excessive output in
# representations and error messages. Subjects often hold large
# collections and they should never flood a failure report.
_SEQUENCE_LIMIT: t.Final[int] = 5
_DICTIONARY_LIMIT: t.Final[int] = 3
_STRING_LIMIT: t.Final[int] = 60

_SEVERITY_LEVEL_MAP: dict[EventSeverity, int] = {
    EventSeverity.DEBUG: 0,
    EventSeverity.INFO: 1,
    EventSeverity.WARNING: 2,
    EventSeverity.ERROR: 3,
    EventSeverity.CRITICAL: 4,
}


def shorten(value: t.Any) -> str:
    """Format value for string representation.

    Long strings are truncated, and large sequences and dictionaries
    show their type and length rather than their full contents.

    :param value: The value to format.
    :return: A formatted string representation of the value.
    """
    if isinstance(value, str) and len(value) > _STRING_LIMIT:
        return repr(f"{value[:_STRING_LIMIT - 3]}...")
    elif (
        isinstance(value, (list, tuple, set, frozenset))
        and len(value) > _SEQUENCE_LIMIT
    ):
        return f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict) and len(value) > _DICTIONARY_LIMIT:
        return f"dict({len(value)} items)"
    return repr(value)


class Observable:
    """Provide observable behaviour for derived classes.

    This class serves as a foundational mixin class for the objects that
    need to expose their internal state in a consistent and controlled
    manner. It offers formatting and string representation features for
    derived classes, making it straightforward to inspect and debug them
    while a specification runs.

    .. note::

        This class uses `__slots__` to reduce memory usage and only
        includes the `__weakref__` slot to allow weak references.
    """

    __slots__: tuple[str, ...] = ("__weakref__",)

    def __inspect_attrs__(self) -> _AttributeStream:
        """Inspect and yield public attributes of the instance.

        Derived classes override this to choose what they show.

        :yield: An iterator yielding tuples of attribute names and their
            corresponding values.
        """
        attrs = getattr(self, "__dict__", {}).keys()
        for attr in attrs:
            value = getattr(self, attr)
            if not attr.startswith("_") and value is not None:
                yield attr, value

    def _format(self, value: t.Any) -> str:
        """Format value, replacing circular references."""
        if value is self:
            return f"<circular-{type(self).__name__}>"
        return shorten(value)

    def __repr__(self) -> str:
        """Return a string representation of the instance."""
        attrs = [
            f"{name}={self._format(value)}"
            for name, value in self.__inspect_attrs__()
        ]
        return f"{type(self).__name__}({', '.join(attrs)})"


class AuditLog(Observable):
    """Record and query notable events for auditing.

    This class maintains a chronological record of significant events
    such as listener failures. Each event is stored with a timestamp,
    category, severity level, and custom metadata. Category and severity
    default to the ones declared in `specter.core.events.EVENTS`.

    .. code-block:: python

        audit = AuditLog()
        audit.record_event(
            "listener_error",
            component="EventDispatcher",
            listener="Recorder",
        )
        errors = audit.get_events(severity=EventSeverity.WARNING)
    """

    __slots__: tuple[str, ...] = ("_entries",)

    def __init__(self) -> None:
        """Initialise a new audit logging instance."""
        self._entries: list[_StateInfoDict] = []

    def __inspect_attrs__(self) -> _AttributeStream:
        """Yield audit loggers's attributes for introspection."""
        yield "entries", len(self._entries)
        if self._entries:
            yield "latest", self._entries[-1].get("event", "unknown")

    def __len__(self) -> int:
        """Return the number of audit entries."""
        return len(self._entries)

    def __bool__(self) -> bool:
        """Check if the audit log contains any entries."""
        return bool(self._entries)

    def __iter__(self) -> Iterator[_StateInfoDict]:
        """Iterate over audit entries."""
        return iter(self._entries)

    def record_event(
        self,
        event: str,
        *,
        component: str,
        category: EventCategory | None = None,
        severity: EventSeverity | None = None,
        **metadata: t.Any,
    ) -> None:
        """Record an audit event.

        :param event: Type or name of the event.
        :param component: Component that generated the event.
        :param category: The event category for filtering, defaults
            to `None`.
        :param severity: The event severity level, defaults to `None`.
        """
        e = EVENTS.get(event, {})
        entry = {
            "event": event,
            "event_id": str(uuid4())[:8],
            "timestamp": time.time(),
            "component": component,
            "category": category or e.get("category", EventCategory.ERROR),
            "severity": severity or e.get("severity", EventSeverity.INFO),
            "description": e.get("description", f"Unknown event: {event}"),
            **metadata,
        }
        self._entries.append(entry)

    def get_events(
        self,
        event: str | None = None,
        component: str | None = None,
        category: EventCategory | None = None,
        severity: EventSeverity | None = None,
        limit: int | None = None,
    ) -> list[_StateInfoDict]:
        """Get filtered audit events.

        Filters are combined with `AND` logic. The severity filter is a
        minimum level. The limit applies to the most recent events after
        filtering.

        :return: A list of matching events (audit entries).
        """
        filtered = self._entries
        if event:
            filtered = [e for e in filtered if e.get("event") == event]
        if component:
            filtered = [c for c in filtered if c.get("component") == component]
        if category:
            filtered = [c for c in filtered if c.get("category") == category]
        if severity:
            level = _SEVERITY_LEVEL_MAP[severity]
            filtered = [
                entry
                for entry in filtered
                if _SEVERITY_LEVEL_MAP.get(entry.get("severity"), 0) >= level
            ]
        if limit:
            filtered = filtered[-limit:]
        return list(filtered)

    @property
    def entries(self) -> list[_StateInfoDict]:
        """Get a copy of all the recorded events."""
        return self._entries.copy()


class ExampleNode(Observable):
    """Identify the example a subject is being specified in.

    The test runner owns the real example and suite model. The wrapper
    only needs something stable to hand to the listeners with every
    method call notification, so this node carries the example title,
    the title of its parent suite and free-form metadata.

    :param title: Human-readable example title.
    :param suite: Title of the suite the example belongs to, defaults
        to `None`.
    :param metadata: Additional metadata for this example, defaults
        to `None`.

    .. code-block:: python

        example = ExampleNode(
            "it adds two numbers",
            suite="Calculator",
            function="it_adds_two_numbers",
        )
        example["function"]
    """

    __slots__: tuple[str, ...] = (
        "_title",
        "_suite",
        "_id",
        "_timestamp",
        "_metadata",
    )

    def __init__(
        self,
        title: str,
        *,
        suite: str | None = None,
        **metadata: t.Any,
    ) -> None:
        """Initialise an example node instance."""
        self._title = title
        self._suite = suite
        self._metadata = metadata
        self._id = str(uuid4())[:8]
        self._timestamp = time.time()

    def __inspect_attrs__(self) -> _AttributeStream:
        """Yield the example's attributes for introspection."""
        yield "title", self._title
        yield "id", self._id
        if self._suite:
            yield "suite", self._suite

    def __getitem__(self, key: str) -> t.Any:
        """Get a metadata value by key."""
        return self._metadata[key]

    def __contains__(self, key: str) -> bool:
        """Check if a metadata key exists."""
        return key in self._metadata

    @property
    def title(self) -> str:
        """Get the human-readable title of the example."""
        return self._title

    @property
    def suite(self) -> str | None:
        """Get the title of the parent suite."""
        return self._suite

    @property
    def id(self) -> str:
        """Get the unique identifier of the example."""
        return self._id

    @property
    def timestamp(self) -> float:
        """Get the creation timestamp of the example."""
        return self._timestamp

    @property
    def metadata(self) -> _StateInfoDict:
        """Get a copy of the example's metadata."""
        return self._metadata.copy()
