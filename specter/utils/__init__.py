"""\
Utilities
=========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, September 07 2026
Last updated on: Monday, September 07 2026

This module acts as an entry point for combining various utilities used
throughout the framework. The OpenTelemetry helpers are imported from
`specter.utils.opentelemetry` directly.
"""

from __future__ import annotations

from .logging import *
from .reflection import *


__all__: tuple[str, ...] = tuple(logging.__all__) + reflection.__all__
