#!/usr/bin/env python3
"""
Tests for the filter library.

Verifies:
1. Registry order and lookup
2. Every filter is deterministic and agrees between scalar and grid evaluation
3. Pattern orientation (angle 0 along +y) and wraparound
4. Option coercion for invalid bucket counts
5. Bounds checking and registration errors
"""

import math
from dataclasses import dataclass

import numpy as np
import pytest

from pixel_filters.colors import make_color_source
from pixel_filters.filter_base import FilterRegistrationError, register_filter
from pixel_filters.filters import (
    FILTERS, FILTER_ORDER, list_filters, get_filter, options_for,
    evaluate, random_filter, wavy_circles,
)
from pixel_filters.geometry import WIDTH, HEIGHT, polar_angle, wrap, pixel_grid
from pixel_filters.options import BandOptions, WavyCircleOptions, PolarOptions
from pixel_filters.palette import Palette
from pixel_filters.raster import bucket_field, build_raster


EXPECTED_ORDER = [
    "circles", "wavyCircles", "beams", "wavyBeams",
    "diagonalsBT", "wavyDiagonalsBT", "diagonalsTB", "wavyDiagonalsTB",
    "horizontals", "wavyHorizontals", "verticals", "wavyVerticals",
    "spiral", "circlyBeams",
]

SAMPLE_PIXELS = [(0, 0), (175, 175), (349, 0), (0, 349), (349, 349), (12, 301), (200, 37)]


def test_registry_order_is_stable():
    assert FILTER_ORDER == EXPECTED_ORDER
    assert [name for name, _ in list_filters()] == EXPECTED_ORDER
    for name, fn in list_filters():
        assert FILTERS[name].fn is fn


def test_get_filter_by_name_function_and_def():
    fdef = get_filter("wavyCircles")
    assert get_filter(wavy_circles) is fdef
    assert get_filter(fdef) is fdef
    with pytest.raises(KeyError, match="Unknown filter"):
        get_filter("notAFilter")


@pytest.mark.parametrize("name", EXPECTED_ORDER)
def test_filters_are_deterministic(name):
    opts = options_for(name, number=16, frequency=5, amplitude=1, phase=30)
    for x, y in SAMPLE_PIXELS:
        assert evaluate(name, x, y, opts) == evaluate(name, x, y, opts)


@pytest.mark.parametrize("name", EXPECTED_ORDER)
def test_grid_matches_scalar_evaluation(name):
    fdef = get_filter(name)
    opts = fdef.options({"number": 12})
    grid = bucket_field(fdef, opts)
    assert grid.shape == (HEIGHT, WIDTH)
    for x, y in SAMPLE_PIXELS:
        assert math.isclose(grid[y, x], evaluate(name, x, y, opts), rel_tol=1e-12, abs_tol=1e-9)


def test_angle_zero_points_along_positive_y():
    assert polar_angle(175, 260) == 0.0
    assert polar_angle(260, 175) == pytest.approx(math.pi / 2)


def test_beams_orientation_and_wrap():
    opts = PolarOptions(number=16)
    # Straight down from the center: phi = 0 + pi -> 180 degrees -> sector 8
    assert evaluate("beams", 175, 300, opts) == 8.0
    # Straight up: phi = pi + pi -> 360 degrees -> wraps to sector 0
    assert evaluate("beams", 175, 50, opts) == 0.0


@pytest.mark.parametrize("name", ["beams", "wavyBeams", "spiral", "circlyBeams"])
def test_polar_filters_stay_in_range(name):
    fdef = get_filter(name)
    opts = fdef.options({"number": 16, "phase": 45})
    xx, yy = pixel_grid()
    grid = fdef.fn(xx, yy, opts)
    assert grid.min() >= 0
    assert grid.max() < 16


def test_signed_filters_are_wrapped_by_evaluate():
    fdef = get_filter("diagonalsTB")
    opts = fdef.options({"number": 16})
    raw = fdef.fn(0.0, 100.0, opts)
    assert raw < 0
    value = evaluate("diagonalsTB", 0, 100, opts)
    assert value == pytest.approx(wrap(raw, 16))
    assert 0 <= value < 16
    color, palette = Palette.empty().resolve(value, make_color_source(1))
    assert math.floor(value) in palette


def test_wavy_circles_center_is_bucket_zero():
    opts = WavyCircleOptions(number=8, frequency=10, phase=0, amplitude=1)
    assert evaluate("wavyCircles", 175, 175, opts) == 0.0


def test_wavy_circles_formula():
    x, y = 60.0, 250.0
    opts = WavyCircleOptions(number=8, frequency=10, phase=90, amplitude=2)
    dist = math.hypot(x - 175, y - 175) / (350 / 8 / 2)
    phi = math.atan2(x - 175, y - 175) + math.pi / 2
    expected = dist + (math.sin(phi * 10) + 1) * dist / 10 * 2
    assert evaluate("wavyCircles", x, y, opts) == pytest.approx(expected, rel=1e-12)


def test_linear_band_spans():
    assert evaluate("verticals", 35, 0, BandOptions(number=10)) == 1.0
    assert evaluate("horizontals", 0, 175, BandOptions(number=2)) == 1.0
    assert evaluate("horizontals", 0, 175, BandOptions(thickness=25)) == 7.0


def test_origin_moves_the_pattern():
    moved = options_for("circles", origin=(100, 120))
    assert evaluate("circles", 100, 120, moved) == 0.0
    assert evaluate("circles", 100, 120) > 0


@pytest.mark.parametrize("bad", [0, -3, float("nan"), "many"])
def test_invalid_number_is_coerced(bad, caplog):
    with caplog.at_level("WARNING"):
        opts = BandOptions(number=bad)
    assert opts.number == 16
    assert "Invalid bucket count" in caplog.text
    assert WavyCircleOptions(number=bad).number == 8


def test_negative_amplitude_is_clamped(caplog):
    with caplog.at_level("WARNING"):
        opts = WavyCircleOptions(number=8, amplitude=-20)
    assert opts.amplitude == 0
    assert "Negative amplitude" in caplog.text
    raster, palette = build_raster("wavyCircles", {"number": 8, "amplitude": -20},
                                   source=make_color_source(5))
    assert raster.shape == (HEIGHT, WIDTH, 3)
    assert min(palette) >= 0


def test_number_is_rounded_to_int():
    assert PolarOptions(number=7.6).number == 8
    assert isinstance(PolarOptions(number=3.0).number, int)


def test_negative_thickness_is_ignored():
    assert BandOptions(thickness=-5).thickness is None
    assert BandOptions(thickness=0).thickness is None
    assert BandOptions(thickness=12).thickness == 12.0


@pytest.mark.parametrize("name", EXPECTED_ORDER)
def test_single_bucket_never_divides_by_zero(name):
    fdef = get_filter(name)
    xx, yy = pixel_grid()
    grid = fdef.fn(xx, yy, fdef.options({"number": 1}))
    assert np.all(np.isfinite(grid))


def test_options_for_drops_foreign_keys():
    opts = options_for("horizontals", number=4, frequency=9, origin=(1, 2))
    assert opts == BandOptions(number=4)


@pytest.mark.parametrize("x,y", [(-1, 0), (WIDTH, 0), (0, HEIGHT), (float("nan"), 3), ("a", 1)])
def test_out_of_range_pixels_raise(x, y):
    with pytest.raises(ValueError):
        evaluate("circles", x, y)


def test_random_filter_is_seedable():
    a = random_filter(10, 20, np.random.default_rng(99))
    b = random_filter(10, 20, np.random.default_rng(99))
    assert a == b
    assert math.isfinite(a)


def test_registration_errors():
    registry = {}
    register_filter(registry, "one", lambda x, y, o: x, BandOptions)
    with pytest.raises(FilterRegistrationError):
        register_filter(registry, "one", lambda x, y, o: x, BandOptions)
    with pytest.raises(FilterRegistrationError):
        register_filter(registry, "two", 42, BandOptions)
    with pytest.raises(FilterRegistrationError):
        register_filter(registry, "three", lambda x, y, o: x, dict)
    with pytest.raises(FilterRegistrationError):
        register_filter(registry, "four", lambda x, y, o: x, BandOptions, wraps="sometimes")


def test_custom_option_family_registers():
    @dataclass(frozen=True)
    class Plain:
        number: int = 3
        thickness: float = None

    registry = {}
    fdef = register_filter(registry, "plain", lambda x, y, o: x / o.number, Plain)
    assert fdef(6.0, 0.0) == 2.0


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))
