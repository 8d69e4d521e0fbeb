"""\
Core
====

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, September 07 2026
Last updated on: Saturday, October 03 2026

This module acts as an entry point for combining various core objects
and configurations used throughout this framework.
"""

from __future__ import annotations

from .base import *
from .config import *
from .dispatcher import *
from .error import *
from .events import *
from .exceptions import *
from .factory import *
from .inspector import *


__all__: tuple[str, ...] = (
    tuple(base.__all__)
    + config.__all__
    + tuple(dispatcher.__all__)
    + error.__all__
    + tuple(events.__all__)
    + tuple(exceptions.__all__)
    + tuple(factory.__all__)
    + tuple(inspector.__all__)
)
