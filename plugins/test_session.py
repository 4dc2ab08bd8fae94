#!/usr/bin/env python3
"""
Tests for FilterSession and the headless entry point.

Verifies:
1. Palette stability across animation frames
2. Painting a bucket changes only that bucket
3. Option edits are coerced per filter family
4. Presets, slider definitions and CLI wiring
"""

import numpy as np
import pytest

from pixel_filters.__main__ import main
from pixel_filters.colors import Color
from pixel_filters.presets import PRESETS, PRESET_ORDER, get_slider_defs, list_presets
from pixel_filters.raster import bucket_indices
from pixel_filters.session import FilterSession


def test_frames_are_stable():
    session = FilterSession("wavyCircles", seed=1)
    frames = list(session.frames(3))
    assert len(frames) == 3
    assert session.frame_count == 3
    assert all(np.array_equal(frames[0], f) for f in frames[1:])


def test_frames_can_be_cancelled():
    session = FilterSession("spiral", seed=2)
    ticks = session.frames()
    next(ticks)
    next(ticks)
    ticks.close()
    assert session.frame_count == 2


def test_assign_color_at_paints_one_bucket():
    session = FilterSession("wavyCircles", {"number": 8}, seed=3)
    before = session.render()
    bucket = session.assign_color_at(175, 175, "#ff0000")
    assert bucket == 0
    after = session.render()

    assert tuple(after[175, 175]) == (255, 0, 0)
    assert session.palette[0] == Color(255, 0, 0)
    mask = bucket_indices(session.filter, session.options) == 0
    assert np.all(after[mask] == [255, 0, 0])
    assert np.array_equal(before[~mask], after[~mask])


def test_assign_color_on_wrapped_filter():
    session = FilterSession("diagonalsTB", {"number": 16}, seed=4)
    session.render()
    bucket = session.assign_color_at(0, 349, Color(1, 2, 3))
    assert 0 <= bucket < 16
    raster = session.render()
    assert tuple(raster[349, 0]) == (1, 2, 3)


def test_assign_out_of_range_raises():
    session = FilterSession(seed=5)
    with pytest.raises(ValueError):
        session.assign_color_at(350, 10)
    with pytest.raises(ValueError):
        session.assign_color_at(-1, 10)


def test_invalid_picked_color_falls_back():
    session = FilterSession(seed=6)
    assert session.pick_color("#nothex") == Color(0, 0, 0)
    assert session.pick_color("#00ff00") == Color(0, 255, 0)


def test_update_options_coerces_per_family():
    session = FilterSession("wavyCircles", seed=7)
    assert session.options.number == 16
    assert session.update_options(number=0).number == 8
    session.select_filter("beams")
    assert session.options.number == 16
    assert session.update_options(number=5, phase=90).phase == 90


def test_select_unknown_filter_raises():
    session = FilterSession(seed=8)
    with pytest.raises(KeyError):
        session.select_filter("nope")


def test_palette_survives_filter_switch():
    session = FilterSession("horizontals", {"number": 16}, seed=9)
    session.render()
    horizontal_palette = session.palette
    session.select_filter("verticals")
    session.render()
    assert session.palette is horizontal_palette
    session.reset_palette()
    assert len(session.palette) == 0


def test_presets_are_valid():
    for key in PRESET_ORDER:
        session = FilterSession.from_preset(key, seed=10)
        assert session.filter_name == PRESETS[key]["filter"]
        assert session.interpolate == PRESETS[key]["interpolate"]
    assert len(list_presets()) == len(PRESET_ORDER)
    assert list_presets("spiral") == [("vortex", "Vortex", PRESETS["vortex"]["description"])]
    with pytest.raises(KeyError):
        FilterSession.from_preset("missing")


def test_slider_defs():
    defs = {d["key"]: d for d in get_slider_defs("wavyCircles")}
    assert list(defs) == ["number", "frequency", "amplitude", "phase"]
    assert defs["number"]["min"] == 1 and defs["number"]["max"] == 100
    assert defs["phase"]["max"] == 360
    assert defs["frequency"]["default"] == 10
    assert [d["key"] for d in FilterSession("horizontals").slider_defs()] == ["number"]


def test_cli_list(capsys):
    assert main(["--list"]) == 0
    out = capsys.readouterr().out
    assert "wavyCircles" in out
    assert "vortex" in out


def test_cli_headless_render(capsys):
    assert main(["spiral", "--number", "24", "--seed", "3", "--frames", "2"]) == 0
    out = capsys.readouterr().out
    assert "Filter: spiral" in out
    assert "Distinct buckets: 24" in out
    assert "Palette size: 24" in out


def test_cli_negative_amplitude_renders(capsys):
    assert main(["wavyCircles", "--amplitude", "-20", "--seed", "4"]) == 0
    assert "Palette size" in capsys.readouterr().out


def test_cli_gallery(capsys):
    assert main(["gallery", "--seed", "1"]) == 0
    assert "Gallery: 14 filters" in capsys.readouterr().out


def test_cli_unknown_argument(capsys):
    assert main(["--bogus"]) == 2
    assert "Unknown argument" in capsys.readouterr().out


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))
