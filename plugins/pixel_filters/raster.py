"""
Raster Builder

Evaluates a filter over the whole WIDTH x HEIGHT grid and turns the
bucket field into colors, either by direct bucket lookup or by lerping
between the floor and ceiling buckets of every pixel.

Usage:
    raster, palette = build_raster("wavyCircles", {"number": 8})
    rgba = to_rgba(raster)      # (H, W, 4) uint8, alpha 255
"""

import logging
import time

import numpy as np

from .colors import Color, lerp_lut
from .filter_base import WRAP_CALLER, WRAP_NONE
from .filters import get_filter, FILTER_ORDER
from .geometry import WIDTH, HEIGHT, pixel_grid, wrap
from .palette import Palette
from .presets import GALLERY_DEFAULTS


logger = logging.getLogger(__name__)


def bucket_field(filter_ref, options=None):
    """Continuous bucket coordinate of every pixel, shape (HEIGHT, WIDTH).

    Filters with signed output are wrapped into [0, bucket_count) here.
    """
    fdef = get_filter(filter_ref)
    opts = fdef.options(options)
    xx, yy = pixel_grid()
    field = np.asarray(fdef.fn(xx, yy, opts), dtype=np.float64)
    if fdef.wraps == WRAP_CALLER:
        field = wrap(field, fdef.bucket_count(opts))
    if not np.all(np.isfinite(field)):
        raise ValueError(f"Filter {fdef.name} produced non-finite bucket indices")
    return field


def bucket_indices(filter_ref, options=None):
    """Integer bucket of every pixel: the pattern geometry without colors."""
    return np.floor(bucket_field(filter_ref, options)).astype(np.int64)


def build_raster(filter_ref, options=None, palette=None, interpolate=False,
                 source=None):
    """Render one frame.

    Args:
        filter_ref: Filter name, registered function, or FilterDef
        options: Option dataclass, dict bag, or None for defaults
        palette: Palette to resolve against (empty when None)
        interpolate: Lerp between floor/ceil buckets instead of flooring
        source: ColorSource used for buckets seen for the first time

    Returns:
        (raster, palette): raster is (HEIGHT, WIDTH, 3) uint8, palette is
        the input palette plus any newly allocated buckets
    """
    t0 = time.perf_counter()
    fdef = get_filter(filter_ref)
    opts = fdef.options(options)
    if palette is None:
        palette = Palette.empty()
    before = len(palette)

    field = bucket_field(fdef, opts)
    lo = np.floor(field)

    if not interpolate:
        raster, palette = palette.resolve_many(lo.astype(np.int64), source)
    else:
        t = field - lo
        hi = np.ceil(field)
        if fdef.wraps != WRAP_NONE:
            modulus = fdef.bucket_count(opts)
            lo = np.mod(lo, modulus)
            hi = np.mod(hi, modulus)
        # Interleave so each pixel discovers its floor bucket before its ceiling
        pairs = np.stack([lo, hi], axis=-1).astype(np.int64)
        rgb, palette = palette.resolve_many(pairs, source)
        raster = lerp_lut(rgb[..., 0, :], rgb[..., 1, :], t)

    logger.debug("%s: %d new buckets, %.1f ms", fdef.name,
                 len(palette) - before, (time.perf_counter() - t0) * 1000)
    return raster, palette


def to_rgba(raster):
    """Append a fully opaque alpha channel."""
    alpha = np.full(raster.shape[:2] + (1,), 255, dtype=np.uint8)
    return np.concatenate([raster.astype(np.uint8), alpha], axis=2)


def to_rgba_bytes(raster):
    """Flat 4-bytes-per-pixel row-major buffer, ready for a canvas write."""
    return to_rgba(raster).tobytes()


def color_at(raster, x, y):
    r, g, b = raster[int(y), int(x)]
    return Color(int(r), int(g), int(b))


def render_gallery(options=None, interpolate=False, palette=None, source=None):
    """Render every filter in display order, threading one palette.

    Returns ([(name, raster), ...], palette).
    """
    if options is None:
        options = GALLERY_DEFAULTS
    items = []
    for name in FILTER_ORDER:
        raster, palette = build_raster(name, options, palette, interpolate, source)
        items.append((name, raster))
    return items, palette


def contact_sheet(items, columns=4, gap=4, background=Color.BLACK):
    """Tile rasters into one in-memory PIL image.

    Args:
        items: list of rasters or (name, raster) pairs
        columns: Tiles per row
        gap: Pixels between tiles
    """
    from PIL import Image

    rasters = [item[1] if isinstance(item, tuple) else item for item in items]
    if not rasters:
        raise ValueError("contact_sheet needs at least one raster")
    columns = max(1, min(columns, len(rasters)))
    rows = (len(rasters) + columns - 1) // columns
    sheet_w = columns * WIDTH + (columns - 1) * gap
    sheet_h = rows * HEIGHT + (rows - 1) * gap
    sheet = Image.new("RGB", (sheet_w, sheet_h), background.rounded().as_tuple())
    for i, raster in enumerate(rasters):
        row, col = divmod(i, columns)
        tile = Image.fromarray(np.ascontiguousarray(raster, dtype=np.uint8))
        sheet.paste(tile, (col * (WIDTH + gap), row * (HEIGHT + gap)))
    return sheet
