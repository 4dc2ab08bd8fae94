"""
Bucket Palette

Sparse, lazily populated mapping from integer bucket index to Color.
Palettes are immutable values: every resolve-or-allocate returns the
color together with the palette that contains it, so a caller threads
one lineage forward explicitly instead of sharing a mutable table.

Usage:
    palette = Palette.empty()
    color, palette = palette.resolve(3.7)      # allocates bucket 3
    again, palette = palette.resolve(3.2)      # same color, same palette
"""

import math
from collections.abc import Mapping

import numpy as np

from .colors import Color, lerp, make_color_source


def _bucket_key(index):
    try:
        value = float(index)
    except (TypeError, ValueError):
        raise ValueError(f"Bucket index must be a number, got {index!r}") from None
    if not math.isfinite(value):
        raise ValueError(f"Bucket index must be finite, got {index!r}")
    key = math.floor(value)
    if key < 0:
        raise ValueError(f"Bucket index must be non-negative, got {index!r}")
    return key


def _default_source(source):
    return source if source is not None else make_color_source()


class Palette(Mapping):
    """Immutable bucket -> Color mapping."""

    __slots__ = ("_colors",)

    def __init__(self, colors=None):
        items = {}
        for key, color in dict(colors or {}).items():
            if not isinstance(color, Color):
                color = Color.from_hex(color) if isinstance(color, str) else Color(*color)
            items[_bucket_key(key)] = color
        self._colors = items

    @classmethod
    def empty(cls):
        return cls()

    @classmethod
    def _wrap(cls, colors):
        palette = cls.__new__(cls)
        palette._colors = colors
        return palette

    # Mapping protocol

    def __getitem__(self, index):
        return self._colors[_bucket_key(index)]

    def __iter__(self):
        return iter(sorted(self._colors))

    def __len__(self):
        return len(self._colors)

    def __contains__(self, index):
        try:
            return _bucket_key(index) in self._colors
        except ValueError:
            return False

    def __eq__(self, other):
        if isinstance(other, Palette):
            return self._colors == other._colors
        return NotImplemented

    def __hash__(self):
        return hash(frozenset(self._colors.items()))

    def __repr__(self):
        body = ", ".join(f"{k}: {self._colors[k].to_hex()}" for k in sorted(self._colors))
        return f"Palette({{{body}}})"

    # Resolution

    def with_color(self, index, color):
        """Return a copy with bucket `index` set to `color`."""
        colors = dict(self._colors)
        colors[_bucket_key(index)] = color
        return Palette._wrap(colors)

    def resolve(self, index, source=None):
        """Return (color, palette) for the bucket floor(index).

        An unseen bucket gets a color from `source` and the returned
        palette records it; a known bucket returns this palette unchanged.
        """
        key = _bucket_key(index)
        color = self._colors.get(key)
        if color is not None:
            return color, self
        color = _default_source(source)()
        return color, self.with_color(key, color)

    def resolve_lerp(self, index, source=None, modulus=None):
        """Return (color, palette) blended between floor and ceil buckets.

        The blend weight t = index - floor(index) leans toward the ceiling
        bucket. With `modulus`, both buckets wrap, so the bucket above the
        last one is bucket 0. Whole-number indices return the resolved
        color exactly.
        """
        value = float(index)
        if not math.isfinite(value):
            raise ValueError(f"Bucket index must be finite, got {index!r}")
        lo = math.floor(value)
        hi = math.ceil(value)
        t = value - lo
        if modulus is not None:
            lo = lo % modulus
            hi = hi % modulus
        source = _default_source(source)
        lo_color, palette = self.resolve(lo, source)
        hi_color, palette = palette.resolve(hi, source)
        if t == 0:
            return lo_color, palette
        return lerp(lo_color, hi_color, t).rounded(), palette

    def resolve_many(self, buckets, source=None):
        """Vectorized resolve of an integer bucket array.

        Returns (rgb, palette) where rgb has the shape of `buckets` plus a
        trailing channel axis. Unseen buckets are allocated in the order
        they first appear in `buckets` (flattened, row-major).
        """
        buckets = np.asarray(buckets)
        if buckets.size and int(buckets.min()) < 0:
            raise ValueError("Bucket indices must be non-negative")
        uniq, first = np.unique(buckets.ravel(), return_index=True)
        colors = self._colors
        missing = [int(uniq[i]) for i in np.argsort(first) if int(uniq[i]) not in colors]
        palette = self
        if missing:
            source = _default_source(source)
            colors = dict(colors)
            for key in missing:
                colors[key] = source()
            palette = Palette._wrap(colors)

        lut = np.zeros((len(uniq), 3), dtype=np.uint8)
        for i, key in enumerate(uniq):
            lut[i] = colors[int(key)].rounded().as_tuple()
        positions = np.searchsorted(uniq, buckets)
        return lut[positions], palette

    # Interchange with a UI color picker

    def to_hex_dict(self):
        return {k: self._colors[k].to_hex() for k in sorted(self._colors)}

    @classmethod
    def from_hex_dict(cls, data):
        return cls({int(k): Color.from_hex(v) for k, v in data.items()})
