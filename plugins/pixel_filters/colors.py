"""
Colors for Bucket Palettes

An immutable RGB Color with the small amount of arithmetic the lerp path
needs, a `#rrggbb` hex codec that never raises, and an injectable random
color source. Array helpers at the bottom work on (N, 3) uint8 lookup
tables the same way the raster builder consumes them.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable

import numpy as np


logger = logging.getLogger(__name__)

_HEX_PAIR = re.compile(r"^[0-9a-fA-F]{2}$")


@dataclass(frozen=True)
class Color:
    """RGB triple. Stored palette colors hold integer channels in [0, 255];
    results of + - * are short-lived and may leave that range."""

    r: float
    g: float
    b: float

    def __add__(self, other):
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __sub__(self, other):
        return Color(self.r - other.r, self.g - other.g, self.b - other.b)

    def __mul__(self, scalar):
        return Color(self.r * scalar, self.g * scalar, self.b * scalar)

    __rmul__ = __mul__

    def as_tuple(self):
        return (self.r, self.g, self.b)

    def rounded(self):
        """Nearest integer color, clamped to [0, 255]."""
        return Color(*(int(min(255, max(0, round(c)))) for c in self.as_tuple()))

    def to_hex(self):
        """Encode as a lowercase, zero-padded `#rrggbb` string."""
        r, g, b = self.rounded().as_tuple()
        return f"#{r:02x}{g:02x}{b:02x}"

    @classmethod
    def from_hex(cls, text):
        """Decode `#rrggbb`. Unparseable channels decode as 0."""
        if not isinstance(text, str):
            logger.warning("Color.from_hex expected a string, got %r", text)
            text = ""
        body = text[1:] if text.startswith("#") else text
        pairs = [body[i * 2:i * 2 + 2] for i in range(3)]
        valid = [bool(_HEX_PAIR.match(pair)) for pair in pairs]
        if len(body) != 6 or not text.startswith("#") or not all(valid):
            logger.warning("Malformed hex color %r", text)
        return cls(*(int(pair, 16) if ok else 0 for pair, ok in zip(pairs, valid)))

    @classmethod
    def random(cls, rng=None):
        """Uniformly random color (each channel 0-255 inclusive)."""
        if rng is None:
            rng = np.random.default_rng()
        r, g, b = rng.integers(0, 256, size=3)
        return cls(int(r), int(g), int(b))

    def __str__(self):
        return self.to_hex()


Color.BLACK = Color(0, 0, 0)

ColorSource = Callable[[], Color]


def make_color_source(seed=None):
    """Return a ColorSource drawing from its own numpy Generator.

    Passing a seed makes palette allocation reproducible.
    """
    rng = np.random.default_rng(seed)

    def source():
        return Color.random(rng)

    return source


def lerp(a, b, t):
    """Blend from `a` toward `b` by weight t in [0, 1]."""
    return a + (b - a) * t


# --- Array helpers ---

def colors_to_lut(colors):
    """Stack Colors into an (N, 3) uint8 lookup table."""
    lut = np.zeros((len(colors), 3), dtype=np.uint8)
    for i, c in enumerate(colors):
        lut[i] = c.rounded().as_tuple()
    return lut


def lerp_lut(lo_rgb, hi_rgb, t):
    """Per-pixel lerp of two (..., 3) uint8 color fields.

    `t` has the shape of the fields minus the channel axis. Results are
    rounded to the nearest integer, so every channel stays between its
    two endpoints.
    """
    lo = lo_rgb.astype(np.float64)
    hi = hi_rgb.astype(np.float64)
    blended = lo + (hi - lo) * np.asarray(t, dtype=np.float64)[..., np.newaxis]
    return np.clip(np.rint(blended), 0, 255).astype(np.uint8)
