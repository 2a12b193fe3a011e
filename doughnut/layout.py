"""Angular layout of dimensions and levels around one band.

Every dimension gets an equal share of the full turn.  A gap is carved out
of each share (half on each side), the remaining drawable span is split
equally between the dimension's levels, and adjacent levels overlap by a
small angle so anti-aliasing leaves no seam.  Hit slices ignore both the
gap and the overlap.
"""
import logging
from typing import NamedTuple

import numpy as np

from doughnut.constants import (
    FALLBACK_ANGULAR_GAP, MAX_GAP_FRACTION, LEVEL_OVERLAP, START_ANGLE, FULL_TURN,
)

log = logging.getLogger(__name__)


class LevelSlice(NamedTuple):
    dim: int; level: int
    start: float; end: float            # equal split of the drawable span
    draw_start: float; draw_end: float  # with inter-level overlap
    hit_start: float; hit_end: float    # equal split of the full share

    @property
    def bisector(self) -> float:
        return (self.start + self.end) / 2


class DimensionSlice(NamedTuple):
    index: int
    start: float; end: float                    # full share
    drawable_start: float; drawable_end: float  # share minus gap
    levels: list[LevelSlice]

    @property
    def center(self) -> float:
        return (self.start + self.end) / 2


def angular_gap(n: int, pixel_gap: float, ref_radius: float) -> float:
    """Angle whose arc at *ref_radius* is *pixel_gap* long, limited to half a share."""
    if n <= 1:
        return 0.0
    gap = pixel_gap / ref_radius if ref_radius > 1 else FALLBACK_ANGULAR_GAP
    share = FULL_TURN / n
    return max(0.0, min(gap, share * MAX_GAP_FRACTION))


def share_edges(n: int, start: float = START_ANGLE, total: float = FULL_TURN) -> np.ndarray:
    """n+1 dimension boundaries; the last is exactly start + total."""
    return np.linspace(start, start + total, n + 1)


def layout_band(level_counts: list[int], gap: float, overlap: float = LEVEL_OVERLAP,
                start: float = START_ANGLE, total: float = FULL_TURN) -> list[DimensionSlice]:
    """Slices for a band whose dimension i holds level_counts[i] levels."""
    n = len(level_counts)
    if n == 0:
        return []
    edges = share_edges(n, start, total)
    dims = []
    for i, m in enumerate(level_counts):
        d0, d1 = float(edges[i]), float(edges[i+1])
        lo = d0 + gap/2; hi = d1 - gap/2
        span = max(0.0, hi - lo)
        hit_edges = np.linspace(d0, d1, m + 1) if m else []
        levels = []
        for j in range(m):
            s = lo + j*span/m; e = s + span/m
            ds = s - overlap/2 if j > 0 else s
            de = e + overlap/2 if j < m - 1 else e
            ds = max(ds, lo); de = min(de, hi)
            levels.append(LevelSlice(i, j, s, e, ds, de,
                                     float(hit_edges[j]), float(hit_edges[j+1])))
        dims.append(DimensionSlice(i, d0, d1, lo, hi, levels))
    log.debug("laid out %d dimensions, gap %.4f rad", n, gap)
    return dims
