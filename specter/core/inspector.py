"""\
Access inspection
=================

Author: Akshay Mestry <xa@mes3.dev>
Created on: Tuesday, September 08 2026
Last updated on: Tuesday, September 08 2026

This module defines the contract the wrapper relies on to decide whether
a member of a subject may be called, read or written. The wrapper trusts
the answers completely and carries no visibility rules of its own.
"""

from __future__ import annotations

import typing as t
from abc import ABC
from abc import abstractmethod

from specter.core.base import Observable

__all__: list[str] = ["AccessInspector"]


class AccessInspector(Observable, ABC):
    """Answer capability questions about members of an object.

    Implementations are expected to honour the visibility conventions of
    the objects they inspect, such as non-public underscore prefixed
    names, properties without setters, and dynamic attribute hooks like
    `__getattr__` and `__setattr__`.

    :param name: Name for the inspector, defaults to `None`.

    .. code-block:: python

        class PublicOnly(AccessInspector):
            def is_method_callable(self, target, name):
                return not name.startswith("_") and callable(
                    getattr(target, name, None)
                )

            def is_property_readable(self, target, name):
                return not name.startswith("_") and hasattr(target, name)

            def is_property_writable(self, target, name):
                return not name.startswith("_")
    """

    __slots__: tuple[str, ...] = ("_name",)

    def __init__(self, *, name: str | None = None) -> None:
        """Initialise an access inspector."""
        self._name = name or type(self).__name__

    def __inspect_attrs__(self) -> t.Iterator[tuple[str, t.Any]]:
        """Yield inspector's attributes for introspection."""
        yield "name", self._name

    @abstractmethod
    def is_method_callable(self, target: t.Any, name: str) -> bool:
        """Check if method `name` can be called on target from outside.

        :param target: The resolved subject.
        :param name: The method name.
        :return: `True` if the method is callable, `False` otherwise.
        """
        raise NotImplementedError(
            "Subclasses must implement is_method_callable method"
        )

    @abstractmethod
    def is_property_readable(self, target: t.Any, name: str) -> bool:
        """Check if property `name` can be read from target."""
        raise NotImplementedError(
            "Subclasses must implement is_property_readable method"
        )

    @abstractmethod
    def is_property_writable(self, target: t.Any, name: str) -> bool:
        """Check if property `name` can be assigned on target."""
        raise NotImplementedError(
            "Subclasses must implement is_property_writable method"
        )

    @property
    def name(self) -> str:
        """Get the name of the inspector."""
        return self._name
