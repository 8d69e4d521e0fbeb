"""\
Wrapper
=======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Friday, September 11 2026
Last updated on: Saturday, October 03 2026

This module provides the wrapper that turns values into subjects. It
holds everything a caller needs for one example, so every subject it
creates, including those wrapping call results, shares the same
example, dispatcher, inspector and tracer.
"""

from __future__ import annotations

import typing as t

from specter.core.dispatcher import EventDispatcher
from specter.core.exceptions import ExceptionFactory
from specter.core.factory import ObjectFactory
from specter.wrapper.caller import Caller
from specter.wrapper.subject import Subject
from specter.wrapper.wrapped import WrappedObject

if t.TYPE_CHECKING:
    from opentelemetry.trace import Tracer

    from specter.core.base import ExampleNode
    from specter.core.inspector import AccessInspector

__all__: tuple[str, ...] = ("Wrapper",)


class Wrapper:
    """Create subjects for an example.

    :param example: The example the subjects belong to.
    :param access_inspector: Inspector deciding which members of the
        subjects can be called, read and written.
    :param dispatcher: Dispatcher notified around method calls, defaults
        to a dispatcher without listeners.
    :param exceptions: Factory of the typed exceptions, defaults to a
        new `ExceptionFactory`.
    :param tracer: OpenTelemetry tracer recording method calls, defaults
        to `None`.

    .. code-block:: python

        wrapper = Wrapper(ExampleNode("it adds"), inspector)
        calculator = wrapper.describe("shop.Calculator", 2)
        calculator.add(2, 3).get_wrapped_object()
    """

    def __init__(
        self,
        example: ExampleNode | None,
        access_inspector: AccessInspector,
        *,
        dispatcher: EventDispatcher | None = None,
        exceptions: ExceptionFactory | None = None,
        tracer: Tracer | None = None,
    ) -> None:
        """Initialise the wrapper."""
        self.example = example
        self.access_inspector = access_inspector
        self.dispatcher = dispatcher or EventDispatcher()
        self.exceptions = exceptions or ExceptionFactory()
        self.factory = ObjectFactory(self.exceptions)
        self.tracer = tracer

    def wrap(self, value: t.Any = None) -> Subject:
        """Wrap any value, including `None`, into a subject."""
        return self.subject(WrappedObject.from_instance(value))

    def describe(
        self,
        class_name: str,
        *arguments: t.Any,
        factory_method: t.Any = None,
    ) -> Subject:
        """Create a subject that is built on first use.

        :param class_name: Dotted import path of the subject's class.
        :param arguments: Constructor, or named constructor, arguments.
        :param factory_method: Named constructor, defaults to `None`.
        :return: An unresolved subject.
        """
        return self.subject(
            WrappedObject(
                class_name=class_name,
                arguments=arguments,
                factory_method=factory_method,
            )
        )

    def subject(self, wrapped: WrappedObject) -> Subject:
        """Create the subject handle for a descriptor."""
        caller = Caller(
            wrapped,
            self.example,
            self.dispatcher,
            self.exceptions,
            self,
            self.access_inspector,
            factory=self.factory,
            tracer=self.tracer,
        )
        return Subject(wrapped, caller)
