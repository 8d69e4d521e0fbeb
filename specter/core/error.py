"""\
Error and warnings
==================

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, September 07 2026
Last updated on: Monday, September 14 2026

This module provides the error categories used throughout this
framework. Concrete, context-carrying errors raised by the wrapper live
in `specter.core.exceptions` and derive from these categories.
"""

from __future__ import annotations


__all__: tuple[str, ...] = (
    "BaseError",
    "ConfigValidationError",
    "FractureError",
    "LifecycleError",
    "SubjectError",
    "ValidationError",
)

Error = Exception


class BaseError(Error):
    """Base error class for all exceptions."""


class FractureError(BaseError):
    """Errors related to incomplete code of the subject under test."""


class SubjectError(BaseError):
    """Errors related to operations on a subject that is not an object."""


class LifecycleError(BaseError):
    """Errors related to an invalid subject lifecycle transition."""


class ValidationError(BaseError):
    """Errors related to validation check failure."""


class ConfigValidationError(ValidationError):
    """Errors related to configuration validation failure."""
