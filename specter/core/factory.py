"""\
Object factory
==============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Tuesday, September 08 2026
Last updated on: Saturday, October 03 2026

This module provides the factory used when a subject is built through a
named constructor rather than its class' own constructor.
"""

from __future__ import annotations

import importlib
import typing as t

from specter.core.exceptions import ExceptionFactory
from specter.utils.logging import get_logger
from specter.utils.reflection import is_object
from specter.utils.reflection import locate
from specter.utils.reflection import qualified_name

__all__: list[str] = ["ObjectFactory"]

logger = get_logger(__name__)

_Factory = t.Callable[..., t.Any] | tuple[t.Any, str] | str


class ObjectFactory:
    """Instantiate objects through callables.

    A factory can be given as any callable, as a `(target, name)` pair
    where target is a class or the dotted import path of one, or as the
    dotted import path of the callable itself, for example
    `package.module.Money.from_string`.

    :param exceptions: Exception factory used to report factories that
        return raw values, defaults to `None`.
    """

    def __init__(self, exceptions: ExceptionFactory | None = None) -> None:
        """Initialise the object factory."""
        self.exceptions = exceptions or ExceptionFactory()

    def instantiate_from_callable(
        self,
        factory: _Factory,
        arguments: t.Sequence[t.Any] = (),
    ) -> t.Any:
        """Call the factory with arguments and return the object.

        :param factory: The factory reference.
        :param arguments: Positional arguments for the factory, defaults
            to an empty tuple.
        :return: The object built by the factory.
        :raises FactoryDoesNotReturnObjectError: If the factory returns
            a raw value.
        :raises TypeError: If the factory reference is not callable.

        .. note::

            Failures raised by the factory itself are not translated,
            they belong to the subject under specification.
        """
        class_name, method, function = self._resolve(factory)
        logger.debug(
            f"Instantiating through factory {method!r}",
            extra={"class_name": class_name, "arguments": len(arguments)},
        )
        instance = function(*arguments)
        if not is_object(instance):
            raise self.exceptions.factory_does_not_return_object(
                class_name,
                method,
                instance,
                arguments,
            )
        return instance

    def _resolve(
        self,
        factory: _Factory,
    ) -> tuple[str | None, str, t.Callable[..., t.Any]]:
        """Turn a factory reference into class name, name and callable."""
        if isinstance(factory, tuple):
            target, name = factory
            if isinstance(target, str):
                klass = locate(target)
                if klass is None:
                    raise self.exceptions.class_not_found(target)
                target = klass
            function = getattr(target, name)
            return qualified_name(target), name, function
        if isinstance(factory, str):
            owner, _, name = factory.rpartition(".")
            klass = locate(owner)
            if klass is not None:
                return self._resolve((klass, name))
            function = self._locate_function(owner, name)
            if function is None:
                raise TypeError(f"{factory!r} is not a known callable")
            return None, factory, function
        if not callable(factory):
            raise TypeError(f"{factory!r} is not callable")
        owner = getattr(factory, "__self__", None)
        class_name = (
            qualified_name(owner) if isinstance(owner, type) else None
        )
        return class_name, getattr(factory, "__name__", repr(factory)), factory

    @staticmethod
    def _locate_function(
        module: str,
        name: str,
    ) -> t.Callable[..., t.Any] | None:
        """Locate a module level function."""
        try:
            function = getattr(importlib.import_module(module), name, None)
        except (ImportError, ValueError):
            return None
        return function if callable(function) else None
