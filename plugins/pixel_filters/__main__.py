"""
Pixel Filters - Headless Entry Point

Usage:
    python -m pixel_filters [filter|preset|gallery] [options]

Examples:
    python -m pixel_filters
    python -m pixel_filters spiral --number 24 --lerp
    python -m pixel_filters vortex --frames 48
    python -m pixel_filters wavyCircles --origin 100,120 --show
    python -m pixel_filters gallery --lerp --show

Options:
    --number N       Bucket count
    --thickness T    Fixed bucket width in pixels/degrees (overrides --number)
    --frequency F    Ripple frequency (wavyCircles)
    --amplitude A    Ripple amplitude (wavyCircles)
    --phase P        Angle offset in degrees
    --origin X,Y     Pattern center (default: raster center)
    --lerp           Blend between neighboring buckets
    --seed S         Seed palette allocation
    --frames N       Render N animation ticks and report timing
    --show           Open the result in the system image viewer
    --verbose        Debug logging
    --list           List filters and presets

Nothing is written to disk.
"""

import logging
import sys
import time

import numpy as np
from PIL import Image

from .colors import make_color_source
from .filters import FILTERS, FILTER_ORDER, get_filter
from .geometry import WIDTH, HEIGHT, Point
from .presets import FRAME_INTERVAL, GALLERY_DEFAULTS, PRESET_ORDER, get_preset, list_presets
from .raster import bucket_indices, contact_sheet, render_gallery
from .session import FilterSession


_FLOAT_OPTIONS = {
    "--number": "number",
    "--thickness": "thickness",
    "--frequency": "frequency",
    "--amplitude": "amplitude",
    "--phase": "phase",
}


def print_listing():
    print("\nAvailable filters:")
    for name in FILTER_ORDER:
        fdef = FILTERS[name]
        print(f"    {name:18s} {fdef.options_cls.__name__:18s} {fdef.description}")
    print("\nAvailable presets:")
    for key, name, desc in list_presets():
        print(f"    {key:18s} {name:18s} {desc}")
    print()


def run_gallery(options, interpolate, seed, show):
    options = options or GALLERY_DEFAULTS
    t0 = time.perf_counter()
    items, palette = render_gallery(options, interpolate=interpolate,
                                    source=make_color_source(seed))
    elapsed = (time.perf_counter() - t0) * 1000
    print(f"Gallery: {len(items)} filters @ {WIDTH}x{HEIGHT} in {elapsed:.0f} ms")
    for name, _ in items:
        buckets = np.unique(bucket_indices(name, options)).size
        print(f"    {name:18s} {buckets:4d} buckets")
    print(f"  Shared palette: {len(palette)} colors")
    if show:
        contact_sheet(items).show(title="pixel filters gallery")


def run_session(session, frames, show):
    print(f"Filter: {session.filter_name} ({'lerp' if session.interpolate else 'flat'})")
    print(f"  Options: {session.options}")
    t0 = time.perf_counter()
    raster = None
    for raster in session.frames(max(1, frames)):
        pass
    elapsed = (time.perf_counter() - t0) * 1000
    n = session.frame_count
    buckets = np.unique(bucket_indices(session.filter, session.options)).size
    print(f"  Rendered {n} frame(s) in {elapsed:.0f} ms ({elapsed / n:.1f} ms/frame)")
    budget = FRAME_INTERVAL * 1000
    status = "ok" if elapsed / n <= budget else "over budget"
    print(f"  Frame budget: {budget:.1f} ms ({status})")
    print(f"  Distinct buckets: {buckets}")
    print(f"  Palette size: {len(session.palette)}")
    if show:
        Image.fromarray(raster).show(title=session.filter_name)


def main(argv=None):
    target = "ripple"
    options = {}
    interpolate = None
    seed = None
    frames = 1
    show = False
    verbose = False

    args = sys.argv[1:] if argv is None else list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in _FLOAT_OPTIONS and i + 1 < len(args):
            options[_FLOAT_OPTIONS[arg]] = float(args[i + 1])
            i += 2
        elif arg == "--origin" and i + 1 < len(args):
            parts = args[i + 1].split(",")
            options["origin"] = Point(float(parts[0]), float(parts[1]))
            i += 2
        elif arg == "--seed" and i + 1 < len(args):
            seed = int(args[i + 1])
            i += 2
        elif arg == "--frames" and i + 1 < len(args):
            frames = int(args[i + 1])
            i += 2
        elif arg == "--lerp":
            interpolate = True
            i += 1
        elif arg == "--show":
            show = True
            i += 1
        elif arg == "--verbose":
            verbose = True
            i += 1
        elif arg == "--list":
            print_listing()
            return 0
        elif arg in ("--help", "-h"):
            print(__doc__)
            return 0
        elif arg in FILTERS or arg in PRESET_ORDER or arg == "gallery":
            target = arg
            i += 1
        else:
            print(f"Unknown argument: {arg}")
            print("Use --list to see available filters and presets")
            return 2

    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if target == "gallery":
        run_gallery(options, bool(interpolate), seed, show)
        return 0

    preset = get_preset(target)
    if preset is not None:
        session = FilterSession.from_preset(target, seed=seed)
        session.update_options(**options)
    else:
        session = FilterSession(get_filter(target).name, options, seed=seed)
    if interpolate is not None:
        session.set_interpolate(interpolate)
    run_session(session, frames, show)
    return 0


if __name__ == "__main__":
    sys.exit(main())
