"""
Filter Definitions and Registration

A filter is a pure function (x, y, options) -> float. Registering one
wraps it in a FilterDef that records its option family, how its output
wraps, and the extent its bucket span divides. Registration mistakes are
programmer errors and raise at import time.
"""

import math
from dataclasses import dataclass, is_dataclass
from typing import Callable

from .options import build_options


# How a filter's output is kept inside [0, bucket_count)
WRAP_NONE = "none"          # bounded and non-negative on the raster
WRAP_INTERNAL = "internal"  # filter applies the modulo itself
WRAP_CALLER = "caller"      # signed output, the raster builder wraps it

WRAP_MODES = (WRAP_NONE, WRAP_INTERNAL, WRAP_CALLER)


class FilterRegistrationError(Exception):
    """Raised when a filter table is built with an invalid entry."""


@dataclass(frozen=True)
class FilterDef:
    name: str
    fn: Callable
    options_cls: type
    wraps: str = WRAP_NONE
    extent: float = 360.0
    description: str = ""

    def __call__(self, x, y, options=None):
        return self.fn(x, y, self.options(options))

    def options(self, options=None):
        return build_options(self.options_cls, options)

    def bucket_count(self, options=None):
        """Modulus used when wrapping this filter's output."""
        opts = self.options(options)
        if opts.thickness:
            return max(1, math.ceil(self.extent / opts.thickness))
        return opts.number


def register_filter(registry, name, fn, options_cls, wraps=WRAP_NONE,
                    extent=360.0, description=""):
    """Validate and add one filter to `registry` (an ordered dict)."""
    if not isinstance(name, str) or not name:
        raise FilterRegistrationError(f"Filter name must be a non-empty string: {name!r}")
    if name in registry:
        raise FilterRegistrationError(f"Duplicate filter name: {name}")
    if not callable(fn):
        raise FilterRegistrationError(f"Filter {name} is not callable")
    if not (isinstance(options_cls, type) and is_dataclass(options_cls)):
        raise FilterRegistrationError(f"Filter {name} needs a dataclass option family")
    if wraps not in WRAP_MODES:
        raise FilterRegistrationError(f"Filter {name} has unknown wrap mode {wraps!r}")
    if not (extent > 0):
        raise FilterRegistrationError(f"Filter {name} needs a positive extent")
    registry[name] = FilterDef(name, fn, options_cls, wraps, float(extent), description)
    return registry[name]
