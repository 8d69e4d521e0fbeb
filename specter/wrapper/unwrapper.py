"""\
Unwrapper
=========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Thursday, September 10 2026
Last updated on: Thursday, September 10 2026

This module strips subject handles from values before they reach the
real subject, so proxies never leak into the code under specification.
"""

from __future__ import annotations

import typing as t

from specter.wrapper.subject import Subject

__all__: tuple[str, ...] = ("Unwrapper",)


class Unwrapper:
    """Replace subject handles with the values they wrap.

    Plain lists, tuples and dictionary values are unwrapped recursively,
    any other value is passed through unchanged.
    """

    def unwrap_all(self, arguments: t.Iterable[t.Any]) -> list[t.Any]:
        """Unwrap every value of a sequence."""
        return [self.unwrap_one(argument) for argument in arguments]

    def unwrap_one(self, value: t.Any) -> t.Any:
        """Unwrap a single value."""
        if isinstance(value, Subject):
            return value.get_wrapped_object()
        if type(value) is list:
            return self.unwrap_all(value)
        if type(value) is tuple:
            return tuple(self.unwrap_all(value))
        if type(value) is dict:
            return {key: self.unwrap_one(item) for key, item in value.items()}
        return value
