"""
Filter Option Families

Each filter accepts exactly one option dataclass. The UI keeps a single
untyped option bag for whatever filter is selected; `options_for` turns
that bag into the family the filter expects and drops everything else.
"""

import logging
import math
from dataclasses import dataclass, fields, asdict
from typing import Optional

from .geometry import Point, resolve_origin


logger = logging.getLogger(__name__)


def _coerce_number(value, default):
    """Bucket counts are positive integers; anything else falls back."""
    try:
        num = float(value)
    except (TypeError, ValueError):
        num = float("nan")
    if not math.isfinite(num) or round(num) < 1:
        logger.warning("Invalid bucket count %r, using %d", value, default)
        return default
    return int(round(num))


def _coerce_thickness(value):
    if value is None:
        return None
    try:
        thickness = float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid thickness %r, ignoring", value)
        return None
    if not math.isfinite(thickness) or thickness < 0:
        logger.warning("Invalid thickness %r, ignoring", value)
        return None
    # 0 means "not set"
    return thickness or None


def _coerce_float(name, value, default):
    try:
        num = float(value)
    except (TypeError, ValueError):
        num = float("nan")
    if not math.isfinite(num):
        logger.warning("Invalid %s %r, using %s", name, value, default)
        return default
    return num


@dataclass(frozen=True)
class BandOptions:
    """Straight or wavy bands along an axis or diagonal."""

    number: int = 16
    thickness: Optional[float] = None

    def __post_init__(self):
        default = type(self).__dataclass_fields__["number"].default
        object.__setattr__(self, "number", _coerce_number(self.number, default))
        object.__setattr__(self, "thickness", _coerce_thickness(self.thickness))
        for f in fields(self):
            if f.name in ("number", "thickness", "origin"):
                continue
            value = _coerce_float(f.name, getattr(self, f.name), f.default)
            object.__setattr__(self, f.name, value)
        if "origin" in self.__dataclass_fields__ and self.origin is not None:
            object.__setattr__(self, "origin", resolve_origin(self.origin))

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class CircleOptions(BandOptions):
    """Concentric rings around an origin."""

    number: int = 8
    origin: Optional[Point] = None


@dataclass(frozen=True)
class WavyCircleOptions(CircleOptions):
    """Rings whose radius oscillates with the polar angle."""

    frequency: float = 10
    amplitude: float = 1
    phase: float = 0

    def __post_init__(self):
        super().__post_init__()
        # A negative ripple can push ring radii below zero
        if self.amplitude < 0:
            logger.warning("Negative amplitude %r, using 0", self.amplitude)
            object.__setattr__(self, "amplitude", 0.0)


@dataclass(frozen=True)
class PolarOptions(BandOptions):
    """Angular sectors around an origin."""

    origin: Optional[Point] = None
    phase: float = 0


OPTION_FAMILIES = (BandOptions, CircleOptions, WavyCircleOptions, PolarOptions)


def numeric_fields(options_cls):
    """Names of the slider-editable fields of an option family."""
    return [f.name for f in fields(options_cls) if f.name not in ("thickness", "origin")]


def build_options(options_cls, options=None):
    """Coerce `options` (None, dict bag, or any family instance) to `options_cls`."""
    if options is None:
        return options_cls()
    if type(options) is options_cls:
        return options
    if not isinstance(options, dict):
        options = {f.name: getattr(options, f.name) for f in fields(options)}
    accepted = {f.name for f in fields(options_cls)}
    kwargs = {k: v for k, v in options.items() if k in accepted and v is not None}
    return options_cls(**kwargs)
