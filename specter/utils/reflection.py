"""\
Reflection
==========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, September 07 2026
Last updated on: Saturday, October 03 2026

This module provides the small reflection helpers the wrapper relies on
to tell objects from raw values, to turn dotted import paths into
classes, and to look at class members without triggering descriptors or
dynamic attribute hooks.
"""

from __future__ import annotations

import importlib
import inspect
import typing as t

__all__: tuple[str, ...] = (
    "RAW_TYPES",
    "declares_constructor",
    "has_member",
    "is_object",
    "is_routine",
    "locate",
    "qualified_name",
    "static_member",
)

# NOTE(xames3): Builtin values that behave like scalars or plain
# collections are not treated as objects. Only the exact types count,
# instances of user subclasses such as named tuples are objects. Subjects holding one of these
# can be passed around and compared but cannot have methods called on
# them through the wrapper.
RAW_TYPES: t.Final[tuple[type, ...]] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    list,
    tuple,
    dict,
    set,
    frozenset,
)

_MISSING: t.Final[object] = object()


def is_object(value: t.Any) -> bool:
    """Check whether the value is an object rather than a raw value."""
    return value is not None and type(value) not in RAW_TYPES


def qualified_name(value: t.Any) -> str:
    """Return the dotted import path of a class or of an object's class.

    :param value: A class or an instance of one.
    :return: Dotted path in `module.QualName` form. Builtins are
        returned without their module prefix.
    """
    klass = value if isinstance(value, type) else type(value)
    if klass.__module__ == "builtins":
        return klass.__qualname__
    return f"{klass.__module__}.{klass.__qualname__}"


def locate(path: str) -> type | None:
    """Locate a class by its dotted import path.

    The longest importable module prefix is imported first and the
    remaining segments are resolved as attributes, so nested classes
    such as `package.module.Outer.Inner` are supported.

    :param path: Dotted import path of the class.
    :return: The class if found, otherwise `None`.
    """
    if not path or not isinstance(path, str):
        return None
    parts = path.split(".")
    if len(parts) == 1:
        parts = ["builtins", *parts]
    for index in range(len(parts) - 1, 0, -1):
        try:
            target: t.Any = importlib.import_module(".".join(parts[:index]))
        except (ImportError, ValueError, TypeError):
            continue
        for attribute in parts[index:]:
            target = getattr(target, attribute, _MISSING)
            if target is _MISSING:
                return None
        return target if isinstance(target, type) else None
    return None


def static_member(target: t.Any, name: str) -> t.Any:
    """Fetch a member without invoking descriptors or `__getattr__`.

    :param target: Class or instance to look into.
    :param name: Member name.
    :return: The raw member, or `None` if it is not defined.
    """
    member = inspect.getattr_static(target, name, _MISSING)
    return None if member is _MISSING else member


def has_member(target: t.Any, name: str) -> bool:
    """Check if a member is statically defined on the target."""
    return inspect.getattr_static(target, name, _MISSING) is not _MISSING


def is_routine(target: t.Any, name: str) -> bool:
    """Check if the class of target defines a routine with this name."""
    klass = target if isinstance(target, type) else type(target)
    member = static_member(klass, name)
    return inspect.isroutine(member) or isinstance(
        member, (classmethod, staticmethod)
    )


def declares_constructor(klass: type) -> bool:
    """Check if a class declares its own constructor.

    A class that inherits both `__init__` and `__new__` from `object`
    does not accept constructor arguments.
    """
    return (
        klass.__init__ is not object.__init__
        or klass.__new__ is not object.__new__
    )
