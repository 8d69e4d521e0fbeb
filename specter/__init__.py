"""\
Specter
=======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, September 07 2026
Last updated on: Sunday, October 18 2026

Subjects for behaviour driven specifications.

This package (specter) lets a specification talk to the object it
describes before that object exists. A subject is described by its class
and constructor arguments, built the first time it is used, and every
method call, property read and property write on it goes through a
caller that checks accessibility, notifies listeners and wraps results
so they can be specified in turn. Failures are reported as typed
exceptions that name the class, member and arguments involved.
"""

from __future__ import annotations

from .core import *
from .utils import *
from .wrapper import *


__all__: tuple[str, ...] = ("__version__",)
__all__ += core.__all__
__all__ += utils.__all__
__all__ += wrapper.__all__

__version__: str = "18.10.2026"
