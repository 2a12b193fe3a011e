"""Tests for doughnut/config.py geometry and doughnut/mapper.py value mapping."""
import pytest
from shared import GeometryError, RadialGradient
from doughnut.config import compute_geometry, js_round, clamp_scale
from doughnut.constants import (
    INNER, OUTER, OVERSHOOT_COLOR, INVALID_GREY, INVALID_GREY_CLEAR, INVALID_WHITE,
)
from doughnut.dimensions import Valid, INVALID
from doughnut.mapper import map_level, valid_gradient


# --- geometry ---

class TestGeometry640:
    def test_ring_radii(self, geo):
        assert geo.line_size == 16 and geo.margin == 150
        assert abs(geo.section - 61.25) < 1e-12
        assert abs(geo.out_inner - 122.5) < 1e-12
        assert abs(geo.in_donut - 122.5) < 1e-12
        assert abs(geo.out_donut - 183.75) < 1e-12
        assert abs(geo.mid_donut - 153.125) < 1e-12
        assert abs(geo.in_outer - 183.75) < 1e-12
        assert abs(geo.out_outer - 275.625) < 1e-12
        assert abs(geo.extra_donut - 313.625) < 1e-12

    def test_centre_and_tip(self, geo):
        assert geo.center == (320, 320)
        assert geo.in_inner == 10

    def test_text_radii(self, geo):
        assert abs(geo.text_inner - 153.125) < 1e-12
        assert abs(geo.text_outer - 263.625) < 1e-12

    def test_band_scales(self, geo):
        assert abs(geo.band_scale(INNER) - 1.125) < 1e-12
        assert abs(geo.band_scale(OUTER) - 0.91875) < 1e-12
        assert abs(geo.ring_scale - 0.30625) < 1e-12

    def test_unknown_band(self, geo):
        with pytest.raises(ValueError, match="Unknown band"):
            geo.band_span("middle")


def test_wide_ring_shrinks_bands():
    g = compute_geometry(640, scale=1.5)
    assert abs(g.ring - 91.875) < 1e-12
    assert abs(g.out_inner - 107.1875) < 1e-12
    assert abs(g.out_donut - 199.0625) < 1e-12
    assert abs(g.out_outer - 267.96875) < 1e-12


@pytest.mark.parametrize("scale", [0.4, 1.6, float("nan"), None])
def test_out_of_range_scale_resets(scale):
    assert clamp_scale(scale) == 1.0


def test_custom_tip_radius():
    assert compute_geometry(640, tip_radius=0).in_inner == 0


def test_non_positive_size():
    with pytest.raises(GeometryError, match="positive"):
        compute_geometry(0)


@pytest.mark.parametrize("x, expected", [(2.5, 3), (-2.5, -2), (37.5, 38), (15.99, 16)])
def test_js_round(x, expected):
    assert js_round(x) == expected


# --- mapper: inner band ---

class TestInnerBand:
    def test_zero_collapses_on_ring_edge(self, geo):
        w = map_level(Valid(0), INNER, geo)
        assert abs(w.inner - 122.5) < 1e-12 and abs(w.outer - 122.5) < 1e-12

    def test_full_reaches_tip(self, geo):
        w = map_level(Valid(100), INNER, geo)
        assert abs(w.inner - 10) < 1e-12
        assert abs(w.outer - 122.5) < 1e-12

    def test_half(self, geo):
        assert abs(map_level(Valid(50), INNER, geo).inner - 66.25) < 1e-12

    def test_monotone(self, geo):
        radii = [map_level(Valid(v), INNER, geo).inner for v in range(0, 101)]
        assert all(a >= b for a, b in zip(radii, radii[1:]))

    def test_valid_fill_is_global_gradient(self, geo):
        assert map_level(Valid(30), INNER, geo).fill == valid_gradient(geo)

    def test_negative_overshoots_into_ring(self, geo):
        w = map_level(Valid(-40), INNER, geo)
        assert abs(w.inner - 122.5) < 1e-12
        assert abs(w.outer - 134.75) < 1e-12
        assert w.fill == OVERSHOOT_COLOR

    def test_invalid_covers_band(self, geo):
        w = map_level(INVALID, INNER, geo)
        assert (w.inner, w.outer) == (10, 122.5)
        assert isinstance(w.fill, RadialGradient)
        assert (w.fill.r0, w.fill.r1) == (10, 122.5)
        assert w.fill.stops == ((0.0, INVALID_WHITE), (1.0, INVALID_GREY))


# --- mapper: outer band ---

class TestOuterBand:
    def test_grows_from_ring(self, geo):
        w = map_level(Valid(100), OUTER, geo)
        assert abs(w.inner - 183.75) < 1e-12
        assert abs(w.outer - 275.625) < 1e-12

    def test_capped_at_half_width(self, geo):
        assert map_level(Valid(150), OUTER, geo).outer == 320

    def test_monotone_and_bounded(self, geo):
        radii = [map_level(Valid(v), OUTER, geo).outer for v in range(0, 151)]
        assert all(a <= b for a, b in zip(radii, radii[1:]))
        assert max(radii) <= geo.middle_x

    def test_negative_retracts_inward(self, geo):
        w = map_level(Valid(-100), OUTER, geo)
        assert abs(w.inner - 153.125) < 1e-12
        assert abs(w.outer - 183.75) < 1e-12
        assert w.fill == OVERSHOOT_COLOR

    def test_invalid_grey_at_ring_edge(self, geo):
        w = map_level(INVALID, OUTER, geo)
        assert (w.inner, w.outer) == (183.75, 275.625)
        assert w.fill.stops[0] == (0.0, INVALID_GREY)
        assert w.fill.stops[1][1] == INVALID_GREY_CLEAR
        assert abs(w.fill.stops[1][0] - 0.7) < 1e-12


def test_radii_never_negative():
    g = compute_geometry(40)
    w = map_level(Valid(-100), OUTER, g)
    assert w.inner >= 0 and w.outer >= 0


def test_valid_gradient_spans_overshoot_zone(geo):
    g = valid_gradient(geo)
    assert (g.r0, g.r1) == (geo.out_outer, geo.extra_donut)
    assert (g.cx, g.cy) == geo.center
