"""
Raster Geometry Helpers

Fixed raster dimensions plus the small set of polar / wave primitives
that every filter is built from. All helpers are numpy ufunc based, so
they accept scalars or equally shaped arrays interchangeably.
"""

import math
from typing import NamedTuple

import numpy as np


WIDTH = 350
HEIGHT = 350

# Twice the corner-to-corner length of the raster
DIAGONAL = math.sqrt(2 * (WIDTH * WIDTH + HEIGHT * HEIGHT))


class Point(NamedTuple):
    x: float
    y: float


CENTER = Point(WIDTH / 2, HEIGHT / 2)


def resolve_origin(origin):
    """Return `origin` as a Point, defaulting to the raster center."""
    if origin is None:
        return CENTER
    if isinstance(origin, dict):
        return Point(float(origin["x"]), float(origin["y"]))
    return Point(float(origin[0]), float(origin[1]))


def distance(x, y, origin=None):
    """Euclidean distance from origin."""
    cx, cy = resolve_origin(origin)
    dx = x - cx
    dy = y - cy
    return np.sqrt(dx * dx + dy * dy)


def polar_angle(x, y, origin=None):
    """Polar angle in radians, in [-pi, pi].

    Arguments are passed to atan2 as (x, y), not (y, x): angle 0 points
    along +y, which fixes the orientation of every radial pattern.
    """
    cx, cy = resolve_origin(origin)
    return np.arctan2(x - cx, y - cy)


def to_degrees(phi):
    return phi / (math.pi * 2) * 360


def to_radians(deg):
    return deg / 360 * math.pi * 2


def wave(val, ref, amp=1.0, freq=1.0, phase=0.0):
    """Offset `val` by a non-negative sine wave keyed on `ref`."""
    return val + (np.sin(freq * ref + phase) + 1) * amp


def wrap(value, modulus):
    """Floored modulo into [0, modulus).

    np.mod can return exactly `modulus` for tiny negative inputs; those
    are folded back to 0.
    """
    w = np.mod(value, modulus)
    w = np.where(w >= modulus, w - modulus, w)
    if np.ndim(w) == 0:
        return float(w)
    return w


def span(extent, number, thickness=None):
    """Width of one bucket along an axis of length `extent`."""
    if thickness:
        return thickness
    return extent / number


def in_bounds(x, y):
    """True when (x, y) is a finite pixel coordinate on the raster."""
    try:
        fx = float(x)
        fy = float(y)
    except (TypeError, ValueError):
        return False
    if not (math.isfinite(fx) and math.isfinite(fy)):
        return False
    return 0 <= fx < WIDTH and 0 <= fy < HEIGHT


def pixel_grid():
    """Return (xx, yy) float64 coordinate grids of shape (HEIGHT, WIDTH)."""
    xs = np.arange(WIDTH, dtype=np.float64)
    ys = np.arange(HEIGHT, dtype=np.float64)
    return np.meshgrid(xs, ys)
