"""Parametric pixel filters with lazily allocated bucket palettes."""

from .colors import Color, make_color_source
from .filters import FILTERS, FILTER_ORDER, list_filters, get_filter, options_for, evaluate, random_filter
from .geometry import WIDTH, HEIGHT, Point
from .palette import Palette
from .raster import build_raster, bucket_field, bucket_indices, to_rgba, render_gallery
from .session import FilterSession

__all__ = [
    "Color", "make_color_source",
    "FILTERS", "FILTER_ORDER", "list_filters", "get_filter", "options_for",
    "evaluate", "random_filter",
    "WIDTH", "HEIGHT", "Point",
    "Palette",
    "build_raster", "bucket_field", "bucket_indices", "to_rgba", "render_gallery",
    "FilterSession",
]
