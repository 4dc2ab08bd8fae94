"""
Pixel Filter Library

Every filter maps a pixel coordinate plus its option family to a real
"bucket coordinate": which of N bands, rings or sectors the pixel falls
into, plus the fractional position inside it. Filters are pure numpy
expressions, so the same function evaluates one pixel or a whole grid.

Patterns:
    circles / wavyCircles     - rings around the origin
    beams / wavyBeams         - angular sectors around the origin
    diagonals* / wavyDiagonals* - bands along either diagonal
    horizontals / verticals   - axis-aligned bands (plain and wavy)
    spiral                    - Archimedean spiral banding
    circlyBeams               - sectors bent by a wave of squared distance
"""

import math

import numpy as np

from .filter_base import (
    FilterDef, register_filter,
    WRAP_NONE, WRAP_INTERNAL, WRAP_CALLER,
)
from .geometry import (
    WIDTH, HEIGHT, DIAGONAL,
    distance, polar_angle, to_degrees, to_radians, wave, wrap, span, in_bounds,
)
from .options import BandOptions, CircleOptions, WavyCircleOptions, PolarOptions


# Constants of the wavy band filters: wave(val, ref, amp, freq)
BAND_WAVE_AMP = 5
BAND_WAVE_FREQ = 0.2
BEAM_WAVE_AMP = 3
BEAM_WAVE_FREQ = 0.2
CIRCLY_WAVE_AMP = 10

RANDOM_FILTER_OPTIONS = {"thickness": 15}


def _sectors(deg, options):
    """Divide a degree value into angular sectors, wrapping at 360."""
    if options.thickness:
        return wrap(deg / options.thickness, 360 / options.thickness)
    return wrap(deg / (360 / options.number), options.number)


def _ring_span(options):
    if options.thickness:
        return options.thickness / 2
    return WIDTH / options.number / 2


# --- Radial ---

def circles(x, y, options):
    return distance(x, y, options.origin) / _ring_span(options)


def wavy_circles(x, y, options):
    dist = distance(x, y, options.origin) / _ring_span(options)
    phi = polar_angle(x, y, options.origin) + to_radians(options.phase)
    return dist + (np.sin(phi * options.frequency) + 1) * dist / 10 * options.amplitude


# --- Angular ---

def beams(x, y, options):
    phi = polar_angle(x, y, options.origin) + math.pi
    return _sectors(to_degrees(phi) + options.phase, options)


def wavy_beams(x, y, options):
    dist = distance(x, y, options.origin)
    deg = to_degrees(polar_angle(x, y, options.origin)) + options.phase
    return _sectors(wave(deg, dist, BEAM_WAVE_AMP, BEAM_WAVE_FREQ), options)


def spiral(x, y, options):
    dist = distance(x, y, options.origin)
    phi = polar_angle(x, y, options.origin) + math.pi + to_radians(options.phase)
    beam = to_degrees(phi)
    if options.thickness:
        num = 360 / options.thickness
    else:
        num = options.number
    return wrap(num * (beam + dist) / 360, num)


def circly_beams(x, y, options):
    dist = distance(x, y, options.origin)
    deg = to_degrees(polar_angle(x, y, options.origin) + math.pi)
    if options.thickness:
        wavy = wave(deg + 360 / options.thickness, dist * dist,
                    BEAM_WAVE_AMP, BEAM_WAVE_FREQ)
    else:
        wavy = wave(deg + options.number, dist * dist,
                    CIRCLY_WAVE_AMP, BEAM_WAVE_FREQ)
    return _sectors(wavy, options)


# --- Linear bands ---

def diagonals_bt(x, y, options):
    return (x + y) / span(DIAGONAL, options.number, options.thickness)


def wavy_diagonals_bt(x, y, options):
    val = wave(x + y, x - y, BAND_WAVE_AMP, BAND_WAVE_FREQ)
    return val / span(DIAGONAL, options.number, options.thickness)


def diagonals_tb(x, y, options):
    return (x - y) / span(DIAGONAL, options.number, options.thickness)


def wavy_diagonals_tb(x, y, options):
    val = wave(x - y, x + y, BAND_WAVE_AMP, BAND_WAVE_FREQ)
    return val / span(DIAGONAL, options.number, options.thickness)


def horizontals(x, y, options):
    return y / span(HEIGHT, options.number, options.thickness)


def wavy_horizontals(x, y, options):
    val = wave(y, x, BAND_WAVE_AMP, BAND_WAVE_FREQ)
    return val / span(HEIGHT, options.number, options.thickness)


def verticals(x, y, options):
    return x / span(WIDTH, options.number, options.thickness)


def wavy_verticals(x, y, options):
    val = wave(x, y, BAND_WAVE_AMP, BAND_WAVE_FREQ)
    return val / span(WIDTH, options.number, options.thickness)


# Registry of all filters, in display order
FILTERS = {}

for _name, _fn, _opts, _wraps, _extent, _desc in [
    ("circles", circles, CircleOptions, WRAP_NONE, WIDTH,
     "Concentric rings"),
    ("wavyCircles", wavy_circles, WavyCircleOptions, WRAP_NONE, WIDTH,
     "Rings with an angular ripple"),
    ("beams", beams, PolarOptions, WRAP_INTERNAL, 360,
     "Angular sectors"),
    ("wavyBeams", wavy_beams, PolarOptions, WRAP_INTERNAL, 360,
     "Sectors rippled by distance"),
    ("diagonalsBT", diagonals_bt, BandOptions, WRAP_NONE, DIAGONAL,
     "Bottom-to-top diagonal bands"),
    ("wavyDiagonalsBT", wavy_diagonals_bt, BandOptions, WRAP_NONE, DIAGONAL,
     "Wavy bottom-to-top diagonal bands"),
    ("diagonalsTB", diagonals_tb, BandOptions, WRAP_CALLER, DIAGONAL,
     "Top-to-bottom diagonal bands"),
    ("wavyDiagonalsTB", wavy_diagonals_tb, BandOptions, WRAP_CALLER, DIAGONAL,
     "Wavy top-to-bottom diagonal bands"),
    ("horizontals", horizontals, BandOptions, WRAP_NONE, HEIGHT,
     "Horizontal bands"),
    ("wavyHorizontals", wavy_horizontals, BandOptions, WRAP_NONE, HEIGHT,
     "Wavy horizontal bands"),
    ("verticals", verticals, BandOptions, WRAP_NONE, WIDTH,
     "Vertical bands"),
    ("wavyVerticals", wavy_verticals, BandOptions, WRAP_NONE, WIDTH,
     "Wavy vertical bands"),
    ("spiral", spiral, PolarOptions, WRAP_INTERNAL, 360,
     "Archimedean spiral"),
    ("circlyBeams", circly_beams, PolarOptions, WRAP_INTERNAL, 360,
     "Sectors bent by a wave of squared distance"),
]:
    register_filter(FILTERS, _name, _fn, _opts, _wraps, _extent, _desc)

FILTER_ORDER = list(FILTERS.keys())

_BY_FUNCTION = {fdef.fn: fdef for fdef in FILTERS.values()}


def list_filters():
    """Return [(name, fn)] in display order."""
    return [(name, FILTERS[name].fn) for name in FILTER_ORDER]


def get_filter(filter_ref):
    """Look up a FilterDef by name, registered function, or FilterDef."""
    if isinstance(filter_ref, FilterDef):
        return filter_ref
    if callable(filter_ref) and filter_ref in _BY_FUNCTION:
        return _BY_FUNCTION[filter_ref]
    try:
        return FILTERS[filter_ref]
    except (KeyError, TypeError):
        raise KeyError(
            f"Unknown filter {filter_ref!r}; choose from: {', '.join(FILTER_ORDER)}"
        ) from None


def options_for(filter_ref, **bag):
    """Build the option family of a filter from an untyped option bag."""
    return get_filter(filter_ref).options(bag)


def evaluate(filter_ref, x, y, options=None):
    """Bucket coordinate of one pixel, always a valid palette key.

    Signed filters are wrapped into [0, bucket_count). Off-raster pixels
    raise ValueError.
    """
    if not in_bounds(x, y):
        raise ValueError(
            f"Pixel ({x!r}, {y!r}) is outside the {WIDTH}x{HEIGHT} raster"
        )
    fdef = get_filter(filter_ref)
    opts = fdef.options(options)
    value = float(fdef.fn(float(x), float(y), opts))
    if fdef.wraps == WRAP_CALLER:
        value = wrap(value, fdef.bucket_count(opts))
    return value


def random_filter(x, y, rng=None):
    """Evaluate a uniformly chosen filter with a fixed thickness."""
    if rng is None:
        rng = np.random.default_rng()
    name = FILTER_ORDER[int(rng.integers(len(FILTER_ORDER)))]
    return evaluate(name, x, y, RANDOM_FILTER_OPTIONS)
