"""Wedge paths: the drawn shape of each level plus its pointer hit region.

Drawn shapes carry the cosmetic gap and overlap; inner-band wedges taper
toward a point on the tip circle.  Hit regions span the level's gap-free
slice over the band's full radius range, so a collapsed wedge can still be
picked.
"""
import logging
import math
from typing import NamedTuple

from shared import GeometryError, Path, polar, line_circle_isect_forward
from doughnut.config import ChartGeometry
from doughnut.constants import (
    INNER, ZERO_RADIUS_TOL, INNER_RADIUS_TOL, ANGLE_EPS, HALF_ANGLE_EPS,
    INNER_VISUAL_GAP, OUTER_VISUAL_GAP, LEVEL_OVERLAP, FULL_TURN,
)
from doughnut.dimensions import Dimension
from doughnut.layout import LevelSlice, angular_gap, layout_band
from doughnut.mapper import WedgeRadii, map_level

log = logging.getLogger(__name__)


class Wedge(NamedTuple):
    band: str
    dim: int; level: int
    radii: WedgeRadii
    slice: LevelSlice
    path: Path | None    # None when the wedge is visually empty
    hit_path: Path


def hit_path(geo: ChartGeometry, band: str, sl: LevelSlice) -> Path:
    """Annular sector over the band's full span and the gap-free slice."""
    lo, hi = geo.band_span(band)
    r_min = max(0.0, lo); r_max = max(r_min, hi)
    if sl.hit_start >= sl.hit_end - ANGLE_EPS:
        return Path()
    return Path.annular_sector(geo.middle_x, geo.middle_y, r_max, r_min, sl.hit_start, sl.hit_end)


def is_visible(radii: WedgeRadii) -> bool:
    return radii.outer >= ZERO_RADIUS_TOL and abs(radii.outer - radii.inner) >= ZERO_RADIUS_TOL


def wedge_path(geo: ChartGeometry, radii: WedgeRadii, sl: LevelSlice, n_levels: int) -> Path | None:
    """Drawn outline of one level, or None when there is nothing to draw."""
    if not is_visible(radii) or sl.draw_start >= sl.draw_end - ANGLE_EPS:
        return None
    cx, cy = geo.center
    r_out, r_in = radii.outer, radii.inner
    ds, de = sl.draw_start, sl.draw_end
    path = Path().arc(cx, cy, r_out, ds, de)

    is_inner = r_out <= geo.out_inner + INNER_RADIUS_TOL
    full_turn = de - ds >= FULL_TURN - ANGLE_EPS   # a full ring has no side edges
    if not (is_inner and r_in > ZERO_RADIUS_TOL) or full_turn:
        return path.arc(cx, cy, r_in, de, ds, ccw=True).close()

    # Hybrid tip: outermost edges aim at the tip point on the level's bisector,
    # interior edges stay radial.
    tip = polar(cx, cy, geo.in_inner, sl.bisector)
    try:
        if sl.level == 0:
            p_start = line_circle_isect_forward(polar(cx, cy, r_out, ds), tip, geo.center, r_in)
        else:
            p_start = polar(cx, cy, r_in, ds)
        if sl.level == n_levels - 1:
            p_end = line_circle_isect_forward(polar(cx, cy, r_out, de), tip, geo.center, r_in)
        else:
            p_end = polar(cx, cy, r_in, de)
    except GeometryError as e:
        log.warning("hybrid tip failed for dimension %d level %d: %s", sl.dim, sl.level, e)
        return path.arc(cx, cy, r_in, de, ds, ccw=True).close()

    a_start = math.atan2(p_start[1]-cy, p_start[0]-cx)
    a_end = math.atan2(p_end[1]-cy, p_end[0]-cx)
    path.line_to(*p_end)
    if abs(a_end - a_start) > HALF_ANGLE_EPS:
        path.arc(cx, cy, r_in, a_end, a_start, ccw=True)
    else:
        path.line_to(*p_start)
    return path.close()


def band_gap(geo: ChartGeometry, band: str, n: int, inner_gap_px: float = INNER_VISUAL_GAP,
             outer_gap_px: float = OUTER_VISUAL_GAP) -> float:
    """Dimension gap for a band, measured at the tip radius (inner) or ring edge (outer)."""
    if band == INNER:
        return angular_gap(n, inner_gap_px, geo.in_inner)
    return angular_gap(n, outer_gap_px, geo.in_outer)


def build_band(geo: ChartGeometry, band: str, dims: list[Dimension],
               inner_gap_px: float = INNER_VISUAL_GAP, outer_gap_px: float = OUTER_VISUAL_GAP,
               overlap: float = LEVEL_OVERLAP) -> list[list[Wedge]]:
    """All wedges of a band, indexed [dimension][level]."""
    geo.band_span(band)  # rejects unknown bands
    dims = list(dims)
    gap = band_gap(geo, band, len(dims), inner_gap_px, outer_gap_px)
    slices = layout_band([len(d.levels) for d in dims], gap, overlap)
    result = []
    for dim, dim_slice in zip(dims, slices):
        row = []
        for lvl, sl in zip(dim.levels, dim_slice.levels):
            radii = map_level(lvl.value, band, geo)
            row.append(Wedge(band, sl.dim, sl.level, radii, sl,
                             wedge_path(geo, radii, sl, len(dim.levels)),
                             hit_path(geo, band, sl)))
        result.append(row)
    return result
