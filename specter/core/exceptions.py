"""\
Exception
=========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, September 07 2026
Last updated on: Saturday, October 03 2026

This module defines the typed exceptions raised when an operation on a
subject cannot be carried out, along with the factory that builds them.

The taxonomy is closed. Every exception carries the kind of failure, the
class name of the subject, the member that was involved and the argument
list of the attempted call, which is enough for a reporter to render a
diagnostic without going back to the subject.
"""

from __future__ import annotations

import enum
import typing as t

from specter.core.base import shorten
from specter.core.error import BaseError
from specter.core.error import FractureError
from specter.core.error import SubjectError
from specter.utils.reflection import qualified_name

__all__: list[str] = [
    "AccessingPropertyOnNonObjectError",
    "CallingMethodOnNonObjectError",
    "ClassNotFoundError",
    "ErrorKind",
    "ExceptionFactory",
    "FactoryDoesNotReturnObjectError",
    "MethodNotFoundError",
    "MethodNotVisibleError",
    "NamedConstructorNotFoundError",
    "PropertyNotFoundError",
    "SettingPropertyOnNonObjectError",
    "SpecterException",
]


class ErrorKind(enum.StrEnum):
    """Kinds of failures the wrapper can report."""

    CLASS_NOT_FOUND = "class_not_found"
    METHOD_NOT_FOUND = "method_not_found"
    METHOD_NOT_VISIBLE = "method_not_visible"
    NAMED_CONSTRUCTOR_NOT_FOUND = "named_constructor_not_found"
    FACTORY_DOES_NOT_RETURN_OBJECT = "factory_does_not_return_object"
    PROPERTY_NOT_FOUND = "property_not_found"
    CALLING_METHOD_ON_NON_OBJECT = "calling_method_on_non_object"
    ACCESSING_PROPERTY_ON_NON_OBJECT = "accessing_property_on_non_object"
    SETTING_PROPERTY_ON_NON_OBJECT = "setting_property_on_non_object"


class SpecterException(BaseError):
    """Base exception class for all typed wrapper exceptions.

    :param message: The error message to be displayed.
    :param class_name: Class name of the subject, defaults to `None`.
    :param member: Method or property involved, defaults to `None`.
    :param arguments: Arguments of the attempted operation, defaults
        to `None`.
    :var kind: The `ErrorKind` this exception class reports.
    """

    kind: t.ClassVar[ErrorKind]

    def __init__(
        self,
        message: str,
        *,
        class_name: str | None = None,
        member: str | None = None,
        arguments: t.Sequence[t.Any] | None = None,
    ) -> None:
        """Initialise the exception with a message and its context."""
        super().__init__(message)
        self.message = message
        self.class_name = class_name
        self.member = member
        self.arguments = list(arguments or [])

    def __repr__(self) -> str:
        """Return a string representation of the exception."""
        return (
            f"<{type(self).__name__}(kind={self.kind.value!r}, "
            f"class_name={self.class_name!r}, member={self.member!r}, "
            f"arguments={shorten(self.arguments)})>"
        )


class ClassNotFoundError(SpecterException, FractureError):
    """Raised when the subject's class cannot be located."""

    kind = ErrorKind.CLASS_NOT_FOUND


class MethodNotFoundError(SpecterException, FractureError):
    """Raised when a method does not exist on the subject's class."""

    kind = ErrorKind.METHOD_NOT_FOUND


class MethodNotVisibleError(SpecterException, FractureError):
    """Raised when a method exists but is not accessible."""

    kind = ErrorKind.METHOD_NOT_VISIBLE


class NamedConstructorNotFoundError(SpecterException, FractureError):
    """Raised when the factory method is missing from the class."""

    kind = ErrorKind.NAMED_CONSTRUCTOR_NOT_FOUND


class FactoryDoesNotReturnObjectError(SpecterException, FractureError):
    """Raised when a factory returns a raw value instead of an object."""

    kind = ErrorKind.FACTORY_DOES_NOT_RETURN_OBJECT


class PropertyNotFoundError(SpecterException, FractureError, AttributeError):
    """Raised when a property is missing or not accessible.

    It is also an `AttributeError`, so `hasattr` and `getattr` with a
    default behave as usual on subjects.
    """

    kind = ErrorKind.PROPERTY_NOT_FOUND


class CallingMethodOnNonObjectError(SpecterException, SubjectError):
    """Raised when calling a method on a subject that is not an object."""

    kind = ErrorKind.CALLING_METHOD_ON_NON_OBJECT


class AccessingPropertyOnNonObjectError(SpecterException, SubjectError):
    """Raised when reading a property of a non-object subject."""

    kind = ErrorKind.ACCESSING_PROPERTY_ON_NON_OBJECT


class SettingPropertyOnNonObjectError(SpecterException, SubjectError):
    """Raised when writing a property of a non-object subject."""

    kind = ErrorKind.SETTING_PROPERTY_ON_NON_OBJECT


def _present(class_name: str | None, member: str, call: bool = True) -> str:
    """Render a member reference such as `Calculator.add()`."""
    reference = f"{class_name}.{member}" if class_name else member
    return f"`{reference}()`" if call else f"`{reference}`"


class ExceptionFactory:
    """Build typed exceptions with rendered diagnostic messages.

    Every method returns the exception rather than raising it, so the
    caller decides where the traceback starts.

    .. code-block:: python

        exceptions = ExceptionFactory()
        raise exceptions.method_not_found("app.Calculator", "add", [1, 2])
    """

    def class_not_found(self, class_name: str) -> ClassNotFoundError:
        """Return an error for a class that cannot be located."""
        return ClassNotFoundError(
            f"Class `{class_name}` does not exist.",
            class_name=class_name,
        )

    def method_not_found(
        self,
        class_name: str | None,
        method: str,
        arguments: t.Sequence[t.Any] | None = None,
    ) -> MethodNotFoundError:
        """Return an error for a method absent from the class."""
        return MethodNotFoundError(
            f"Method {_present(class_name, method)} not found.",
            class_name=class_name,
            member=method,
            arguments=arguments,
        )

    def method_not_visible(
        self,
        class_name: str | None,
        method: str,
        arguments: t.Sequence[t.Any] | None = None,
    ) -> MethodNotVisibleError:
        """Return an error for a method that exists but is not public."""
        return MethodNotVisibleError(
            f"Method {_present(class_name, method)} not visible.",
            class_name=class_name,
            member=method,
            arguments=arguments,
        )

    def named_constructor_not_found(
        self,
        class_name: str,
        method: str,
        arguments: t.Sequence[t.Any] | None = None,
    ) -> NamedConstructorNotFoundError:
        """Return an error for a factory method absent from the class."""
        return NamedConstructorNotFoundError(
            f"Named constructor {_present(class_name, method)} not found.",
            class_name=class_name,
            member=method,
            arguments=arguments,
        )

    def factory_does_not_return_object(
        self,
        class_name: str | None,
        method: str,
        returned: t.Any,
        arguments: t.Sequence[t.Any] | None = None,
    ) -> FactoryDoesNotReturnObjectError:
        """Return an error for a factory that produced a raw value."""
        return FactoryDoesNotReturnObjectError(
            f"The method {_present(class_name, method)} did not return an "
            f"object, returned {shorten(returned)} instead.",
            class_name=class_name,
            member=method,
            arguments=arguments,
        )

    def property_not_found(
        self,
        subject: t.Any,
        property: str,
        class_name: str | None = None,
    ) -> PropertyNotFoundError:
        """Return an error for a missing or inaccessible property.

        :param subject: The resolved subject, used to derive the class
            name when the descriptor does not carry one.
        :param property: The property that was accessed.
        :param class_name: Class name of the subject, defaults to
            `None`.
        """
        name = class_name or qualified_name(subject)
        return PropertyNotFoundError(
            f"Property {_present(name, property, call=False)} not found.",
            class_name=name,
            member=property,
        )

    def calling_method_on_non_object(
        self,
        method: str,
    ) -> CallingMethodOnNonObjectError:
        """Return an error for a method call on a raw value."""
        return CallingMethodOnNonObjectError(
            f"Call to a member function {_present(None, method)} on a "
            "non-object.",
            member=method,
        )

    def getting_property_on_non_object(
        self,
        property: str,
    ) -> AccessingPropertyOnNonObjectError:
        """Return an error for reading a property of a raw value."""
        return AccessingPropertyOnNonObjectError(
            f"Getting property {_present(None, property, call=False)} on a "
            "non-object.",
            member=property,
        )

    def setting_property_on_non_object(
        self,
        property: str,
    ) -> SettingPropertyOnNonObjectError:
        """Return an error for writing a property of a raw value."""
        return SettingPropertyOnNonObjectError(
            f"Setting property {_present(None, property, call=False)} on a "
            "non-object.",
            member=property,
        )
