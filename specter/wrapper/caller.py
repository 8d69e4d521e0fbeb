"""\
Caller
======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Friday, September 11 2026
Last updated on: Saturday, October 03 2026

This module provides the caller, the single entry point through which a
subject is resolved, called, read and written.

The caller builds the subject lazily on first use, asks the access
inspector before touching any member, notifies listeners around every
method call and wraps results so they can be used as subjects in turn.
Failures are classified once into the typed exceptions from
`specter.core.exceptions` and raised. Anything raised by the subject's
own code propagates untouched.
"""

from __future__ import annotations

import logging
import typing as t

from opentelemetry import trace

from specter.core.dispatcher import MethodCallEvent
from specter.core.events import AFTER_METHOD_CALL
from specter.core.events import BEFORE_METHOD_CALL
from specter.core.factory import ObjectFactory
from specter.utils.logging import get_logger
from specter.utils.logging import perf_logger
from specter.utils.reflection import declares_constructor
from specter.utils.reflection import has_member
from specter.utils.reflection import is_object
from specter.utils.reflection import locate
from specter.utils.reflection import qualified_name
from specter.utils.reflection import static_member
from specter.wrapper.unwrapper import Unwrapper

if t.TYPE_CHECKING:
    from specter.core.base import ExampleNode
    from specter.core.dispatcher import EventDispatcher
    from specter.core.exceptions import ExceptionFactory
    from specter.core.exceptions import MethodNotFoundError
    from specter.core.exceptions import MethodNotVisibleError
    from specter.core.inspector import AccessInspector
    from specter.wrapper.subject import Subject
    from specter.wrapper.wrapped import WrappedObject
    from specter.wrapper.wrapper import Wrapper

__all__: tuple[str, ...] = ("Caller",)

logger = get_logger(__name__)

_CONSTRUCTOR: t.Final[str] = "__init__"


class Caller:
    """Perform operations on a lazily resolved subject.

    :param wrapped_object: The descriptor of the subject.
    :param example: The example the subject belongs to.
    :param dispatcher: Dispatcher notified around method calls.
    :param exceptions: Factory of the typed exceptions.
    :param wrapper: Wrapper applied to call results and property
        values.
    :param access_inspector: Inspector deciding which members can be
        called, read and written.
    :param factory: Factory used for named constructors, defaults to an
        `ObjectFactory` sharing the exception factory.
    :param tracer: OpenTelemetry tracer recording method calls, defaults
        to the tracer of the globally configured provider.

    .. code-block:: python

        caller = Caller(
            WrappedObject(class_name="shop.Money", arguments=(10, "EUR")),
            example,
            dispatcher,
            ExceptionFactory(),
            wrapper,
            inspector,
        )
        caller.call("add", [5]).get_wrapped_object()
    """

    def __init__(
        self,
        wrapped_object: WrappedObject,
        example: ExampleNode | None,
        dispatcher: EventDispatcher,
        exceptions: ExceptionFactory,
        wrapper: Wrapper,
        access_inspector: AccessInspector,
        *,
        factory: ObjectFactory | None = None,
        tracer: trace.Tracer | None = None,
    ) -> None:
        """Initialise the caller."""
        self._wrapped = wrapped_object
        self._example = example
        self._dispatcher = dispatcher
        self._exceptions = exceptions
        self._wrapper = wrapper
        self._access_inspector = access_inspector
        self._factory = factory or ObjectFactory(exceptions)
        self._tracer = tracer or trace.get_tracer(__name__)
        self._unwrapper = Unwrapper()

    def call(self, method: str, arguments: t.Sequence[t.Any] = ()) -> Subject:
        """Call a method on the subject.

        :param method: Name of the method.
        :param arguments: Positional arguments, subject handles among
            them are unwrapped first, defaults to an empty tuple.
        :return: The result of the call, wrapped.
        :raises CallingMethodOnNonObjectError: If the subject is not an
            object.
        :raises MethodNotFoundError: If the method does not exist.
        :raises MethodNotVisibleError: If the method exists but cannot
            be called from outside.
        """
        subject = self.resolve()
        if not is_object(subject):
            raise self._exceptions.calling_method_on_non_object(method)
        arguments = self._unwrapper.unwrap_all(arguments)
        if self._access_inspector.is_method_callable(subject, method):
            return self._invoke_and_wrap(subject, method, arguments)
        raise self._method_not_found(subject, method, arguments)

    def set(self, property: str, value: t.Any = None) -> None:
        """Assign a property of the subject.

        :param property: Name of the property.
        :param value: The value, unwrapped before the assignment,
            defaults to `None`.
        :raises SettingPropertyOnNonObjectError: If the subject is not
            an object.
        :raises PropertyNotFoundError: If the property is not writable.
        """
        subject = self.resolve()
        if not is_object(subject):
            raise self._exceptions.setting_property_on_non_object(property)
        value = self._unwrapper.unwrap_one(value)
        if self._access_inspector.is_property_writable(subject, property):
            setattr(subject, property, value)
            return
        raise self._property_not_found(subject, property)

    def get(self, property: str) -> t.Any:
        """Read a property of the subject or a constant of its class.

        All-uppercase names are looked up as class constants first. A
        defined constant is returned as is, without resolving the
        subject.

        :param property: Name of the property or constant.
        :return: The raw constant, or the property value wrapped.
        :raises AccessingPropertyOnNonObjectError: If the subject is not
            an object.
        :raises PropertyNotFoundError: If the property is not readable.
        """
        if self.looking_for_constant(property) and self.constant_defined(
            property
        ):
            return getattr(locate(self._wrapped.class_name), property)
        subject = self.resolve()
        if not is_object(subject):
            raise self._exceptions.getting_property_on_non_object(property)
        if self._access_inspector.is_property_readable(subject, property):
            return self._wrapper.wrap(getattr(subject, property))
        raise self._property_not_found(subject, property)

    def resolve(self) -> t.Any:
        """Return the live subject, building it on first use.

        :return: The subject instance, or the raw value of a subject
            that is not backed by a class.
        :raises ClassNotFoundError: If the subject's class cannot be
            located.
        :raises NamedConstructorNotFoundError: If the named constructor
            is missing from the class.
        :raises MethodNotFoundError: If constructor arguments are given
            to a class without a constructor.
        """
        wrapped = self._wrapped
        if wrapped.instantiated:
            return wrapped.instance
        class_name = wrapped.class_name
        if class_name is None or not isinstance(class_name, str):
            return wrapped.instance
        klass = locate(class_name)
        if klass is None:
            raise self._exceptions.class_not_found(class_name)
        if is_object(wrapped.instance):
            return wrapped.resolved_with(wrapped.instance)
        instance = self._instantiate(klass)
        logger.debug(
            f"Instantiated subject {class_name!r}",
            extra={"arguments": len(wrapped.arguments)},
        )
        return wrapped.resolved_with(instance)

    def method_callable(self, subject: t.Any, method: str) -> bool:
        """Check if the access inspector allows calling the method."""
        return self._access_inspector.is_method_callable(subject, method)

    def looking_for_constant(self, property: str) -> bool:
        """Check if a name should be looked up as a class constant."""
        return (
            self._wrapped.class_name is not None
            and property == property.upper()
        )

    def constant_defined(self, property: str) -> bool:
        """Check if the subject's class defines a constant by this name.

        A constant is any plain class attribute, routines, properties
        and other descriptors are not constants.
        """
        class_name = self._wrapped.class_name
        klass = locate(class_name) if isinstance(class_name, str) else None
        if klass is None or not has_member(klass, property):
            return False
        return not hasattr(type(static_member(klass, property)), "__get__")

    @perf_logger(failure_level=logging.DEBUG)
    def _instantiate(self, klass: type) -> t.Any:
        """Build a new instance of the subject's class."""
        if self._wrapped.factory_method is not None:
            return self._new_with_factory_method(klass)
        if self._wrapped.arguments:
            return self._new_with_arguments(klass)
        return klass()

    def _new_with_arguments(self, klass: type) -> t.Any:
        """Build the instance through the class' own constructor."""
        arguments = self._wrapped.arguments
        if not declares_constructor(klass):
            raise self._exceptions.method_not_found(
                self._wrapped.class_name,
                _CONSTRUCTOR,
                arguments,
            )
        return klass(*arguments)

    def _new_with_factory_method(self, klass: type) -> t.Any:
        """Build the instance through its named constructor."""
        method = self._wrapped.factory_method
        arguments = self._wrapped.arguments
        if isinstance(method, str):
            if not has_member(klass, method):
                raise self._exceptions.named_constructor_not_found(
                    self._wrapped.class_name,
                    method,
                    arguments,
                )
            method = (klass, method)
        return self._factory.instantiate_from_callable(method, arguments)

    def _invoke_and_wrap(
        self,
        subject: t.Any,
        method: str,
        arguments: list[t.Any],
    ) -> Subject:
        """Call the method between notifications and wrap the result."""
        self._dispatcher.dispatch(
            MethodCallEvent(self._example, subject, method, arguments),
            BEFORE_METHOD_CALL,
        )
        class_name = self._class_name(subject)
        with self._tracer.start_as_current_span(
            f"{class_name}.{method}",
            attributes={
                "specter.class": class_name,
                "specter.method": method,
                "specter.arguments": len(arguments),
            },
        ):
            value = getattr(subject, method)(*arguments)
        self._dispatcher.dispatch(
            MethodCallEvent(self._example, subject, method, arguments),
            AFTER_METHOD_CALL,
        )
        return self._wrapper.wrap(value)

    def _class_name(self, subject: t.Any) -> str:
        """Return the class name reported for the subject."""
        return self._wrapped.class_name or qualified_name(subject)

    def _method_not_found(
        self,
        subject: t.Any,
        method: str,
        arguments: list[t.Any],
    ) -> MethodNotFoundError | MethodNotVisibleError:
        """Classify a method that cannot be called."""
        class_name = self._class_name(subject)
        if not has_member(subject, method):
            return self._exceptions.method_not_found(
                class_name, method, arguments
            )
        return self._exceptions.method_not_visible(
            class_name, method, arguments
        )

    def _property_not_found(self, subject: t.Any, property: str) -> Exception:
        """Build the error for a property that cannot be accessed."""
        return self._exceptions.property_not_found(
            subject,
            property,
            self._wrapped.class_name,
        )
