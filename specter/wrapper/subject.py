"""\
Subject
=======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Thursday, September 10 2026
Last updated on: Saturday, October 03 2026

This module provides the handle that specifications hold instead of the
subject itself. Attribute access on the handle is routed through a
`Caller`, so every method call, property read and property write is
checked, observed and its result wrapped again.
"""

from __future__ import annotations

import functools
import typing as t

from specter.utils.reflection import is_object
from specter.utils.reflection import is_routine

if t.TYPE_CHECKING:
    from specter.wrapper.caller import Caller
    from specter.wrapper.wrapped import WrappedObject

__all__: tuple[str, ...] = ("Subject",)

_OWN_ATTRIBUTES: t.Final[frozenset[str]] = frozenset(("_caller", "_wrapped"))


class Subject:
    """Proxy handle around a subject under specification.

    Reading an attribute returns a bound method reference when the
    subject's class defines a routine of that name, or when the access
    inspector reports the member as callable, for example methods
    served by `__getattr__`. Other names read the property. Assigning
    an attribute sets the property on the subject. Dunder names are
    never proxied.

    .. note::

        `PropertyNotFoundError` is an `AttributeError`, so `hasattr`
        and `getattr` with a default work on object subjects. Reading
        any property of a non-object subject raises
        `AccessingPropertyOnNonObjectError`, which is not one.

    :param wrapped: The descriptor of the subject.
    :param caller: The caller that performs operations on it.

    .. code-block:: python

        calculator = wrapper.wrap(Calculator())
        total = calculator.add(2, 3)        # Subject wrapping 5
        total.get_wrapped_object()          # 5
        calculator.precision = 2            # checked property write
    """

    __slots__: tuple[str, ...] = tuple(_OWN_ATTRIBUTES)

    def __init__(self, wrapped: WrappedObject, caller: Caller) -> None:
        """Initialise the subject handle."""
        object.__setattr__(self, "_wrapped", wrapped)
        object.__setattr__(self, "_caller", caller)

    def call_on_wrapped_object(self, method: str, *arguments: t.Any) -> Subject:
        """Call a method on the subject and return the wrapped result."""
        return self._caller.call(method, arguments)

    def get_from_wrapped_object(self, property: str) -> t.Any:
        """Read a property, or class constant, of the subject."""
        return self._caller.get(property)

    def set_to_wrapped_object(self, property: str, value: t.Any) -> None:
        """Assign a property of the subject."""
        self._caller.set(property, value)

    def get_wrapped_object(self) -> t.Any:
        """Resolve and return the subject itself."""
        return self._caller.resolve()

    def __getattr__(self, name: str) -> t.Any:
        """Route an attribute read to a method reference or property."""
        if name in _OWN_ATTRIBUTES or (
            name.startswith("__") and name.endswith("__")
        ):
            raise AttributeError(name)
        caller = self._caller
        if caller.looking_for_constant(name) and caller.constant_defined(name):
            return caller.get(name)
        subject = caller.resolve()
        if is_object(subject) and (
            is_routine(subject, name) or caller.method_callable(subject, name)
        ):
            return functools.partial(self.call_on_wrapped_object, name)
        return caller.get(name)

    def __setattr__(self, name: str, value: t.Any) -> None:
        """Route an attribute write to the subject."""
        if name in _OWN_ATTRIBUTES:
            raise AttributeError(f"cannot reassign {name!r} of a subject")
        self._caller.set(name, value)

    def __repr__(self) -> str:
        """Return a string representation of the handle."""
        return f"{type(self).__name__}({self._wrapped!r})"
