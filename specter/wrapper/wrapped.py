"""\
Wrapped object
==============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Thursday, September 10 2026
Last updated on: Saturday, October 03 2026

This module provides the descriptor of a subject under specification.
It records what the subject is and how to build it, so the actual
construction can be deferred until the subject is first used.
"""

from __future__ import annotations

import enum
import typing as t

from specter.core.base import Observable
from specter.core.error import LifecycleError
from specter.utils.reflection import is_object
from specter.utils.reflection import qualified_name

__all__: tuple[str, ...] = ("SubjectState", "WrappedObject")


class SubjectState(enum.StrEnum):
    """Lifecycle states of a subject.

    A subject starts unresolved and is resolved exactly once, when its
    live instance is first needed. It never goes back.
    """

    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"


class WrappedObject(Observable):
    """Describe a subject and hold its instance once resolved.

    :param instance: A pre-seeded instance or raw value, defaults to
        `None`.
    :param class_name: Dotted import path of the subject's class,
        defaults to `None` for raw values.
    :param arguments: Positional constructor arguments, defaults to an
        empty tuple.
    :param factory_method: Named constructor used instead of the class'
        own constructor. Either the name of an attribute of the class,
        a `(target, name)` pair, or any callable, defaults to `None`.
    :param instantiated: Whether the instance is already resolved,
        defaults to `False`.

    .. note::

        The class name and the factory method are fixed at creation.
        Only the instance and the state change, once, through
        :meth:`resolved_with`.

    .. code-block:: python

        wrapped = WrappedObject(
            class_name="shop.Money",
            arguments=(10, "EUR"),
        )
        wrapped.instantiated  # False until the subject is first used
    """

    __slots__: tuple[str, ...] = (
        "_instance",
        "_class_name",
        "_arguments",
        "_factory_method",
        "_state",
    )

    def __init__(
        self,
        instance: t.Any = None,
        *,
        class_name: str | None = None,
        arguments: t.Sequence[t.Any] = (),
        factory_method: t.Any = None,
        instantiated: bool = False,
    ) -> None:
        """Initialise the subject descriptor."""
        self._instance = instance
        self._class_name = class_name
        self._arguments = tuple(arguments)
        self._factory_method = factory_method
        self._state = (
            SubjectState.RESOLVED if instantiated else SubjectState.UNRESOLVED
        )

    @classmethod
    def from_instance(cls, value: t.Any) -> WrappedObject:
        """Describe a value that already exists.

        Objects are described by their class and start resolved. Raw
        values carry no class name and are passed through as they are.

        :param value: Any value, including `None`.
        :return: A descriptor for the value.
        """
        if is_object(value):
            return cls(
                value,
                class_name=qualified_name(value),
                instantiated=True,
            )
        return cls(value)

    def __inspect_attrs__(self) -> t.Iterator[tuple[str, t.Any]]:
        """Yield the descriptor's attributes for introspection."""
        if self._class_name:
            yield "class_name", self._class_name
        yield "state", self._state.value
        if self._arguments:
            yield "arguments", self._arguments
        if self._factory_method is not None:
            yield "factory_method", self._factory_method

    def resolved_with(self, instance: t.Any) -> t.Any:
        """Store the live instance and mark the subject resolved.

        :param instance: The live instance of the subject.
        :return: The stored instance.
        :raises LifecycleError: If the subject is already resolved.
        """
        if self._state is SubjectState.RESOLVED:
            raise LifecycleError(
                f"subject {self._class_name!r} is already resolved"
            )
        self._instance = instance
        self._state = SubjectState.RESOLVED
        return instance

    @property
    def instance(self) -> t.Any:
        """Get the current instance, or raw value, of the subject."""
        return self._instance

    @property
    def class_name(self) -> str | None:
        """Get the dotted import path of the subject's class."""
        return self._class_name

    @property
    def arguments(self) -> tuple[t.Any, ...]:
        """Get the constructor arguments."""
        return self._arguments

    @property
    def factory_method(self) -> t.Any:
        """Get the named constructor, if any."""
        return self._factory_method

    @property
    def state(self) -> SubjectState:
        """Get the lifecycle state of the subject."""
        return self._state

    @property
    def instantiated(self) -> bool:
        """Check if the subject has been resolved."""
        return self._state is SubjectState.RESOLVED
