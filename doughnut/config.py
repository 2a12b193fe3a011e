"""Chart geometry derived from the canvas size, and presentation options.

All radii scale with the canvas so a 640px chart and a 1280px chart look
the same.  The ring (the band between the inner and outer dimensions) can
be widened or narrowed by a scale factor in [0.5, 1.5].
"""
import logging
import math
from typing import NamedTuple

from doughnut.constants import (
    INNER, OUTER, REFERENCE_SIZE, TIP_RADIUS, MIN_SCALE, MAX_SCALE,
    NORMAL_CEILING, INNER_VISUAL_GAP, OUTER_VISUAL_GAP, LEVEL_OVERLAP, FONT_FAMILY,
)
from shared import GeometryError

log = logging.getLogger(__name__)


def js_round(x: float) -> int:
    """Round half up (2.5 -> 3, -2.5 -> -2), not banker's rounding."""
    return math.floor(x + 0.5)


class ChartGeometry(NamedTuple):
    size: float
    middle_x: float; middle_y: float
    line_size: float                   # width of each dark-blue edge ring
    margin: float
    section: float
    ring: float                        # radial width of the ring
    in_inner: float; out_inner: float  # inner band: tip radius .. ring edge
    in_donut: float; out_donut: float; mid_donut: float
    in_outer: float; out_outer: float  # outer band
    extra_donut: float                 # overshoot limit
    text_size: float
    text_inner: float; text_outer: float

    @property
    def center(self) -> tuple[float, float]:
        return (self.middle_x, self.middle_y)

    def band_span(self, band: str) -> tuple[float, float]:
        """(min, max) radius of a band."""
        if band == INNER: return (self.in_inner, self.out_inner)
        if band == OUTER: return (self.in_outer, self.out_outer)
        raise ValueError(f"Unknown band: {band!r}")

    def band_scale(self, band: str) -> float:
        """Pixels per logical unit across a band."""
        lo, hi = self.band_span(band)
        return (hi - lo) / NORMAL_CEILING

    @property
    def ring_scale(self) -> float:
        """Pixels per logical unit used for negative overshoot into the ring."""
        return (self.ring / 2) / NORMAL_CEILING


def clamp_scale(scale: float) -> float:
    if scale is None or not math.isfinite(scale) or not MIN_SCALE <= scale <= MAX_SCALE:
        log.debug("ring scale %r out of range, using 1.0", scale)
        return 1.0
    return scale


def compute_geometry(size: float, scale: float = 1.0, text_size: float = 12.0,
                     tip_radius: float = TIP_RADIUS) -> ChartGeometry:
    """Geometry of a square chart of side *size* pixels."""
    if not size > 0:
        raise GeometryError(f"Chart size must be positive: {size}")
    scale = clamp_scale(scale)
    fudge = size / REFERENCE_SIZE
    middle = size / 2
    line_size = js_round(16 * fudge)
    margin = js_round(150 * fudge)
    section = (size - margin) / 8
    ring = section * scale
    overlap = (ring - section) / 2

    out_inner = 2*section - overlap
    in_donut = out_inner
    out_donut = in_donut + ring
    mid_donut = (in_donut + out_donut) / 2
    in_outer = out_donut
    out_outer = in_outer + (section - overlap) * 1.5
    extra_donut = out_outer + js_round(37.5 * fudge)

    return ChartGeometry(
        size=size, middle_x=middle, middle_y=middle,
        line_size=line_size, margin=margin, section=section, ring=ring,
        in_inner=tip_radius, out_inner=out_inner,
        in_donut=in_donut, out_donut=out_donut, mid_donut=mid_donut,
        in_outer=in_outer, out_outer=out_outer, extra_donut=extra_donut,
        text_size=text_size,
        text_inner=out_inner + section/2, text_outer=out_outer - text_size,
    )


class ChartOptions(NamedTuple):
    show_labels: bool = True
    show_gridlines: bool = False
    inner_gap_px: float = INNER_VISUAL_GAP
    outer_gap_px: float = OUTER_VISUAL_GAP
    level_overlap: float = LEVEL_OVERLAP
    corridor_label_offset: float = 0.0   # vertical nudge of corridor labels, x text size
    font_family: str = FONT_FAMILY
