"""
FilterSession: sandbox state for one filter view

Owns the palette lineage of a single sandbox view together with the
selected filter, its option bag, the lerp flag and the color picked for
painting buckets. Every render threads the palette through one
build_raster call and keeps the result, so colors stay stable across
frames and option edits.

Usage:
    from pixel_filters.session import FilterSession
    session = FilterSession("wavyCircles", seed=7)
    raster = session.render()          # (H, W, 3) uint8
    session.pick_color("#ff0000")
    session.assign_color_at(175, 175)  # paint the bucket under the center
"""

import math

from .colors import Color, make_color_source
from .filters import get_filter, evaluate
from .palette import Palette
from .presets import SANDBOX_DEFAULTS, get_preset, get_slider_defs
from .raster import build_raster


class FilterSession:
    """Single-writer owner of one palette lineage.

    Args:
        filter_name: Initially selected filter
        options: Option bag (merged over the sandbox defaults)
        interpolate: Lerp between neighboring buckets when rendering
        seed: Seed for palette allocation, None for fresh randomness
    """

    def __init__(self, filter_name="wavyCircles", options=None,
                 interpolate=False, seed=None):
        self.filter = get_filter(filter_name)
        self.option_bag = dict(SANDBOX_DEFAULTS)
        if options:
            self.option_bag.update(options)
        self.interpolate = bool(interpolate)
        self.picked_color = Color.BLACK
        self.frame_count = 0
        self._source = make_color_source(seed)
        self._palette = Palette.empty()

    @classmethod
    def from_preset(cls, key, seed=None):
        preset = get_preset(key)
        if preset is None:
            raise KeyError(f"Unknown preset {key!r}")
        return cls(preset["filter"], preset["options"],
                   interpolate=preset.get("interpolate", False), seed=seed)

    # -----------------------------------------------------------------------
    # State
    # -----------------------------------------------------------------------

    @property
    def palette(self):
        return self._palette

    @property
    def filter_name(self):
        return self.filter.name

    @property
    def options(self):
        """Typed options of the current filter."""
        return self.filter.options(self.option_bag)

    def select_filter(self, name):
        self.filter = get_filter(name)

    def update_options(self, **changes):
        """Merge changes into the option bag and return the typed options."""
        self.option_bag.update(changes)
        return self.options

    def set_interpolate(self, flag):
        self.interpolate = bool(flag)

    def pick_color(self, color):
        """Set the paint color from a Color or a `#rrggbb` string."""
        if not isinstance(color, Color):
            color = Color.from_hex(color)
        self.picked_color = color
        return color

    def reset_palette(self):
        self._palette = Palette.empty()

    def slider_defs(self):
        return get_slider_defs(self.filter.name)

    # -----------------------------------------------------------------------
    # Rendering
    # -----------------------------------------------------------------------

    def render(self):
        """Build one frame and keep the extended palette."""
        raster, self._palette = build_raster(
            self.filter, self.options, self._palette,
            interpolate=self.interpolate, source=self._source,
        )
        self.frame_count += 1
        return raster

    def frames(self, count=None):
        """Yield one raster per animation tick.

        Each tick is an independent build; closing the generator cancels
        the animation without leaving partial state behind.
        """
        produced = 0
        while count is None or produced < count:
            yield self.render()
            produced += 1

    def bucket_at(self, x, y):
        """Integer bucket under a pixel. Off-raster pixels raise ValueError."""
        return math.floor(evaluate(self.filter, x, y, self.options))

    def assign_color_at(self, x, y, color=None):
        """Paint the bucket under (x, y) with `color` (or the picked color)."""
        if color is not None:
            self.pick_color(color)
        bucket = self.bucket_at(x, y)
        self._palette = self._palette.with_color(bucket, self.picked_color)
        return bucket
