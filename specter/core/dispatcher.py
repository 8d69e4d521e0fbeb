"""\
Event dispatching
=================

Author: Akshay Mestry <xa@mes3.dev>
Created on: Wednesday, September 09 2026
Last updated on: Saturday, October 03 2026

This module provides the synchronous event dispatcher that notifies
listeners around every method call made through a subject, together
with the event payload and the listener base class.
"""

from __future__ import annotations

import typing as t
from abc import ABC
from abc import abstractmethod

from specter.core.base import AuditLog
from specter.core.base import ExampleNode
from specter.core.base import Observable
from specter.core.events import METHOD_CALL_EVENTS
from specter.utils.logging import get_logger
from specter.utils.reflection import qualified_name

__all__: list[str] = [
    "EventDispatcher",
    "Listener",
    "LoggingListener",
    "MethodCallEvent",
]

logger = get_logger(__name__)


class MethodCallEvent(Observable):
    """Payload describing a method call made through a subject.

    :param example: The example the call belongs to.
    :param subject: The resolved subject the method is called on.
    :param method: Name of the method.
    :param arguments: Unwrapped arguments of the call.
    """

    __slots__: tuple[str, ...] = ("_example", "_subject", "_method", "_args")

    def __init__(
        self,
        example: ExampleNode | None,
        subject: t.Any,
        method: str,
        arguments: t.Sequence[t.Any] = (),
    ) -> None:
        """Initialise a method call event."""
        self._example = example
        self._subject = subject
        self._method = method
        self._args = tuple(arguments)

    def __inspect_attrs__(self) -> t.Iterator[tuple[str, t.Any]]:
        """Yield the event's attributes for introspection."""
        yield "subject", qualified_name(self._subject)
        yield "method", self._method
        yield "arguments", self._args

    @property
    def example(self) -> ExampleNode | None:
        """Get the example the call belongs to."""
        return self._example

    @property
    def subject(self) -> t.Any:
        """Get the subject the method is called on."""
        return self._subject

    @property
    def method(self) -> str:
        """Get the name of the called method."""
        return self._method

    @property
    def arguments(self) -> tuple[t.Any, ...]:
        """Get the arguments of the call."""
        return self._args


class Listener(Observable, ABC):
    """Receive method call notifications from a dispatcher.

    :param name: Name for the listener, defaults to `None`.
    :param events: Set of event names to observe, defaults to `None`
        which observes every event.
    :param active: Whether the listener is active and should receive
        events, defaults to `True`.

    .. code-block:: python

        class Recorder(Listener):
            def __init__(self):
                super().__init__(events={"afterMethodCall"})
                self.calls = []

            def __call__(self, name, event):
                self.calls.append(event.method)
    """

    __slots__: tuple[str, ...] = ("_name", "_events", "_active")

    def __init__(
        self,
        *,
        name: str | None = None,
        events: set[str] | None = None,
        active: bool = True,
    ) -> None:
        """Initialise a listener with name and events to observe."""
        self._name = name or type(self).__name__
        self._events = events or set()
        self._active = active

    def __inspect_attrs__(self) -> t.Iterator[tuple[str, t.Any]]:
        """Yield listener's attributes for introspection."""
        yield "name", self._name
        yield "active", self._active
        if self._events:
            yield "events", sorted(self._events)

    def observes(self, name: str) -> bool:
        """Check if this listener should receive the named event."""
        return self._active and (not self._events or name in self._events)

    @abstractmethod
    def __call__(self, name: str, event: MethodCallEvent) -> None:
        """Handle a dispatched event.

        :param name: The name of the event being dispatched.
        :param event: The method call payload.

        .. note::

            Errors raised here are recorded by the dispatcher and do not
            reach the subject's caller.
        """
        raise NotImplementedError("Subclasses must implement __call__ method")

    @property
    def name(self) -> str:
        """Get the name of the listener."""
        return self._name

    @property
    def events(self) -> set[str]:
        """Get the set of events the listener observes."""
        return self._events

    @property
    def active(self) -> bool:
        """Check if the listener is active."""
        return self._active

    @active.setter
    def active(self, value: bool) -> None:
        self._active = value


class LoggingListener(Listener):
    """Log every method call made through a subject."""

    def __call__(self, name: str, event: MethodCallEvent) -> None:
        """Log the event at debug level."""
        logger.debug(
            f"{name}: {qualified_name(event.subject)}.{event.method}()",
            extra={
                "example": event.example.title if event.example else None,
                "arguments": len(event.arguments),
            },
        )


class EventDispatcher(Observable):
    """Dispatch events to registered listeners, synchronously.

    Listeners are notified in registration order and the dispatcher
    returns once all of them have run. A failing listener is logged and
    recorded in the audit log, and the remaining listeners still run.

    :param listeners: Listeners to register, defaults to `None`.

    .. code-block:: python

        dispatcher = EventDispatcher([LoggingListener()])
        dispatcher.dispatch(event, "beforeMethodCall")
    """

    __slots__: tuple[str, ...] = ("_listeners", "_audit")

    def __init__(self, listeners: t.Iterable[Listener] | None = None) -> None:
        """Initialise the dispatcher."""
        self._listeners: list[Listener] = []
        self._audit = AuditLog()
        for listener in listeners or ():
            self.add_listener(listener)

    def __inspect_attrs__(self) -> t.Iterator[tuple[str, t.Any]]:
        """Yield dispatcher's attributes for introspection."""
        yield "listeners", [listener.name for listener in self._listeners]

    def add_listener(self, listener: Listener) -> None:
        """Register a listener.

        :param listener: The listener to add.
        :raises TypeError: If the provided object is not a Listener.
        """
        if not isinstance(listener, Listener):
            raise TypeError("Expected Listener instance")
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Unregister a listener if it is registered."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def dispatch(self, event: MethodCallEvent, name: str) -> MethodCallEvent:
        """Notify the listeners observing the named event.

        :param event: The payload to hand to the listeners.
        :param name: The event name, one of `beforeMethodCall` or
            `afterMethodCall`.
        :return: The dispatched payload.
        :raises ValueError: If the event name is not a method call
            event.
        """
        if name not in METHOD_CALL_EVENTS:
            raise ValueError(f"Unknown method call event: {name!r}")
        for listener in list(self._listeners):
            if not listener.observes(name):
                continue
            try:
                listener(name, event)
            except Exception as error:
                logger.warning(
                    f"Listener {listener.name!r} failed on {name!r}: {error}",
                    exc_info=True,
                )
                self._audit.record_event(
                    "listener_error",
                    component=type(self).__name__,
                    listener=listener.name,
                    dispatched=name,
                    error=str(error),
                )
        return event

    @property
    def listeners(self) -> list[Listener]:
        """Get a copy of the registered listeners."""
        return self._listeners.copy()

    @property
    def audit(self) -> AuditLog:
        """Get the audit log of the dispatcher."""
        return self._audit
