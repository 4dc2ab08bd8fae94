"""
Filter Presets and Option Constraints

Default option bags for the sandbox and the gallery, slider ranges for
every numeric option, and a handful of named sandbox starting points.
The "filter" field of a preset determines which filter is selected.
"""

from dataclasses import fields

from .filters import get_filter
from .geometry import CENTER
from .options import numeric_fields


# Slider ranges, keyed by option name
OPTION_CONSTRAINTS = {
    "number": {"min": 1, "max": 100, "step": 1},
    "phase": {"min": 0, "max": 360, "step": 1},
}
DEFAULT_CONSTRAINT = {"min": 0, "max": 30, "step": 1}

OPTION_LABELS = {
    "number": "Buckets",
    "frequency": "Frequency",
    "amplitude": "Amplitude",
    "phase": "Phase (deg)",
}

SANDBOX_DEFAULTS = {
    "number": 16,
    "frequency": 5,
    "amplitude": 1,
    "phase": 0,
    "origin": CENTER,
}

GALLERY_DEFAULTS = {"number": 16}

# Animation tick of the sandbox view
FRAMES_PER_SECOND = 24
FRAME_INTERVAL = 1.0 / FRAMES_PER_SECOND


PRESETS = {
    "ripple": {
        "filter": "wavyCircles",
        "name": "Ripple",
        "description": "Sandbox start: rings with a five-lobed ripple",
        "options": dict(SANDBOX_DEFAULTS),
        "interpolate": False,
    },
    "flower": {
        "filter": "wavyCircles",
        "name": "Flower",
        "description": "Deep petals, few rings",
        "options": {"number": 6, "frequency": 8, "amplitude": 4, "phase": 0},
        "interpolate": False,
    },
    "glow_rings": {
        "filter": "circles",
        "name": "Glow Rings",
        "description": "Concentric rings blended into a soft gradient",
        "options": {"number": 12},
        "interpolate": True,
    },
    "pinwheel": {
        "filter": "beams",
        "name": "Pinwheel",
        "description": "Sixteen hard-edged sectors",
        "options": {"number": 16, "phase": 0},
        "interpolate": False,
    },
    "sunburst": {
        "filter": "wavyBeams",
        "name": "Sunburst",
        "description": "Rippled sectors with smooth color falloff",
        "options": {"number": 16, "phase": 0},
        "interpolate": True,
    },
    "vortex": {
        "filter": "spiral",
        "name": "Vortex",
        "description": "Tight spiral arms",
        "options": {"number": 24, "phase": 0},
        "interpolate": False,
    },
    "weave": {
        "filter": "wavyDiagonalsTB",
        "name": "Weave",
        "description": "Wavy diagonal ribbons",
        "options": {"number": 16},
        "interpolate": False,
    },
    "curtain": {
        "filter": "wavyVerticals",
        "name": "Curtain",
        "description": "Wavy vertical folds",
        "options": {"number": 10},
        "interpolate": True,
    },
    "starfield": {
        "filter": "circlyBeams",
        "name": "Starfield",
        "description": "Sectors shattered by a squared-distance wave",
        "options": {"number": 16},
        "interpolate": False,
    },
}

PRESET_ORDER = list(PRESETS.keys())


def get_constraint(key):
    return OPTION_CONSTRAINTS.get(key, DEFAULT_CONSTRAINT)


def get_preset(name):
    """Get a preset by name. Returns None if not found."""
    return PRESETS.get(name)


def list_presets(filter_name=None):
    """Return list of (key, name, description) for presets.
    If filter_name is specified, only presets for that filter."""
    return [(k, PRESETS[k]["name"], PRESETS[k]["description"])
            for k in PRESET_ORDER
            if filter_name is None or PRESETS[k]["filter"] == filter_name]


def get_slider_defs(filter_name):
    """Slider definitions for the numeric options of a filter.

    Each entry is a dict:
        {"key": "number", "label": "Buckets", "min": 1, "max": 100,
         "step": 1, "default": 16}
    """
    options_cls = get_filter(filter_name).options_cls
    defaults = {f.name: f.default for f in fields(options_cls)}
    defs = []
    for key in numeric_fields(options_cls):
        entry = {"key": key, "label": OPTION_LABELS.get(key, key)}
        entry.update(get_constraint(key))
        entry["default"] = defaults[key]
        defs.append(entry)
    return defs
