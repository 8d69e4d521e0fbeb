"""\
Wrapper
=======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Friday, September 11 2026
Last updated on: Friday, September 11 2026

This module acts as an entry point for the objects that wrap subjects
under specification and mediate every operation on them.
"""

from __future__ import annotations

from .caller import *
from .subject import *
from .unwrapper import *
from .wrapped import *
from .wrapper import *


__all__: tuple[str, ...] = (
    caller.__all__
    + subject.__all__
    + unwrapper.__all__
    + wrapped.__all__
    + wrapper.__all__
)
