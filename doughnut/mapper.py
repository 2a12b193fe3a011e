"""Value-to-geometry mapping: a level value becomes a radius pair and a fill."""
from typing import NamedTuple

from shared import RadialGradient, Fill
from doughnut.config import ChartGeometry
from doughnut.constants import (
    INNER, NORMAL_CEILING, GRADIENT_SHIFT,
    VALID_GRADIENT_START, VALID_GRADIENT_END, OVERSHOOT_COLOR,
    INVALID_GREY, INVALID_GREY_CLEAR, INVALID_WHITE,
)
from doughnut.dimensions import Invalid, Value


class WedgeRadii(NamedTuple):
    inner: float
    outer: float
    fill: Fill


def valid_gradient(geo: ChartGeometry) -> RadialGradient:
    """Pink-to-white fade from the outer band edge to the overshoot limit."""
    return RadialGradient(geo.middle_x, geo.middle_y, geo.out_outer, geo.extra_donut,
                          ((0.0, VALID_GRADIENT_START), (1.0, VALID_GRADIENT_END)))


def invalid_gradient(band: str, geo: ChartGeometry) -> RadialGradient:
    """Grey marks the edge nearest the ring: outer edge of the inner band,
    inner edge of the outer band."""
    lo, hi = geo.band_span(band)
    if band == INNER:
        stops = ((0.0, INVALID_WHITE), (1.0, INVALID_GREY))
    else:
        stops = ((0.0, INVALID_GREY), (1.0 - GRADIENT_SHIFT, INVALID_GREY_CLEAR))
    return RadialGradient(geo.middle_x, geo.middle_y, lo, hi, stops)


def map_level(value: Value, band: str, geo: ChartGeometry) -> WedgeRadii:
    """Radius pair and fill of one level in *band*.

    Inner band: v=0 collapses onto the ring edge, v=100 reaches the tip
    radius.  Outer band: grows outward from the ring edge, capped at the
    canvas half width.  Negative values overshoot into the ring with a flat
    fill.  Invalid values cover the whole band.
    """
    lo, hi = geo.band_span(band)
    scale = geo.band_scale(band)
    if isinstance(value, Invalid):
        inner, outer, fill = lo, hi, invalid_gradient(band, geo)
    else:
        v = value.number
        if band == INNER:
            if v < 0:
                inner, outer, fill = hi, hi - v*geo.ring_scale, OVERSHOOT_COLOR
            else:
                inner = lo + (NORMAL_CEILING - min(v, NORMAL_CEILING))*scale
                outer, fill = hi, valid_gradient(geo)
        else:
            if v < 0:
                inner, outer, fill = lo + v*geo.ring_scale, lo, OVERSHOOT_COLOR
            else:
                inner = lo
                outer = min(lo + v*scale, geo.middle_x)
                fill = valid_gradient(geo)
    return WedgeRadii(max(0.0, inner), max(0.0, outer), fill)
