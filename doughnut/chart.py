"""Doughnut chart engine: data, drawing and pointer interaction.

Every mutation recomputes and redraws both bands in full.  Hit regions are
kept from the last redraw and answer pointer queries until the next one.
"""
import logging
import math
from typing import NamedTuple

from shared import Path
from doughnut.config import ChartGeometry, ChartOptions, compute_geometry
from doughnut.constants import (
    INNER, OUTER, BANDS, TIP_RADIUS, ZERO_RADIUS_TOL, FULL_TURN, NORMAL_CEILING,
    BACKGROUND, DONUT_FROSTING, DONUT_FILLING,
    GRIDLINE_VALUES, GRIDLINE_COLOR, GRIDLINE_WIDTH, GRIDLINE_DASH,
    SELECTION_COLOR, SELECTION_WIDTH,
    LABEL_COLOR, CORRIDOR_LABEL_COLOR, CORRIDOR_BOTTOM_TEXT, CORRIDOR_INNER_TEXT,
    CORRIDOR_OUTER_TEXT, CORRIDOR_BOTTOM_SCALE, CORRIDOR_TOP_SCALE, CORRIDOR_MIN_SIZE,
    FORMAT_WARNING, NONE_TEXT,
)
from doughnut.dimensions import Dimension, DimensionStore, Level, Value
from doughnut.sink import PresentationSink
from doughnut.text import draw_curved_text
from doughnut.wedges import Wedge, build_band

log = logging.getLogger(__name__)


class HitInfo(NamedTuple):
    band: str
    dim: int; level: int
    dimension: Dimension
    path: Path

    @property
    def record(self) -> Level:
        return self.dimension.levels[self.level]

    def same_slot(self, other: "HitInfo | None") -> bool:
        return (other is not None and self.band == other.band
                and self.dim == other.dim and self.level == other.level)

    def describe(self) -> str:
        """e.g. "income (measure: male) = 76"."""
        lvl = self.record
        text = self.dimension.name
        if lvl.label: text += f" (measure: {lvl.label})"
        return f"{text} = {lvl.value}"


class SelectedDimension(NamedTuple):
    band: str
    name: str
    value: Value
    label: str


def describe(info: HitInfo | None) -> str:
    return info.describe() if info else NONE_TEXT


class Doughnut:
    """Two-band doughnut chart drawn onto *canvas*."""

    def __init__(self, canvas, scale: float = 1.0, text_size: float = 12.0,
                 tip_radius: float = TIP_RADIUS, options: ChartOptions = ChartOptions(),
                 sink: PresentationSink | None = None):
        self.canvas = canvas
        self.geo: ChartGeometry = compute_geometry(canvas.width, scale, text_size, tip_radius)
        self.options = options
        self.sink = sink or PresentationSink()
        self.stores = {band: DimensionStore(band) for band in BANDS}
        self.wedges: dict[str, list[list[Wedge]]] = {band: [] for band in BANDS}
        self.selected: HitInfo | None = None
        self.hovered: HitInfo | None = None
        self.update()

    def store(self, band: str) -> DimensionStore:
        if band not in self.stores:
            raise ValueError(f"Unknown band: {band!r}")
        return self.stores[band]

    @property
    def inner(self) -> DimensionStore:
        return self.stores[INNER]

    @property
    def outer(self) -> DimensionStore:
        return self.stores[OUTER]

    # ============================================================
    # Data operations
    # ============================================================
    def add_dimension(self, band: str, name: str, value, label: str = ""):
        self.store(band).add_level(name, value, label)
        self._mutated()

    def delete_level(self, band: str, dim: int, level: int):
        self.store(band).delete_level(dim, level)
        self._mutated()

    def delete_selected_dimension(self):
        """Delete the selected level; no-op without a selection."""
        if self.selected is None:
            return
        sel = self.selected
        self.store(sel.band).delete_level(sel.dim, sel.level)
        self._mutated()

    def get_selected_dimension(self) -> SelectedDimension | None:
        if self.selected is None:
            return None
        lvl = self.selected.record
        return SelectedDimension(self.selected.band, self.selected.dimension.name,
                                 lvl.value, lvl.label)

    def delete_last_dimension(self, band: str):
        self.store(band).delete_last_dimension()
        self._mutated()

    def clear(self):
        for s in self.stores.values():
            s.clear()
        self._mutated()

    def is_empty(self) -> bool:
        return all(len(s) == 0 for s in self.stores.values())

    def import_text(self, text: str, skip_header: bool = False) -> int:
        """Merge delimited rows into both bands; returns the malformed row count."""
        errors = self.inner.merge_from_delimited_text(text, skip_header)
        self.outer.merge_from_delimited_text(text, skip_header)  # same rows, same count
        if errors:
            log.warning("import: %d malformed rows", errors)
            self.sink.warn(FORMAT_WARNING)
        self._mutated()
        return errors

    def export_text(self) -> str:
        """Inner rows then outer rows, no header."""
        parts = [t for t in (self.inner.to_delimited_text(), self.outer.to_delimited_text()) if t]
        return "\n".join(parts)

    def summary(self, band: str) -> str:
        return self.store(band).summary()

    def set_labels_visible(self, visible: bool):
        self.options = self.options._replace(show_labels=bool(visible))
        self.update()

    def set_gridlines_visible(self, visible: bool):
        self.options = self.options._replace(show_gridlines=bool(visible))
        self.update()

    def _mutated(self):
        self.selected = None
        self.hovered = None
        self.sink.show_hover(NONE_TEXT)
        self.sink.show_selection(NONE_TEXT)
        self.update()

    # ============================================================
    # Pointer interaction
    # ============================================================
    def hit_test(self, x: float, y: float) -> HitInfo | None:
        """First hit region containing (x, y); inner band before outer."""
        for band in (INNER, OUTER):
            dims = self.stores[band].dimensions
            for row in self.wedges[band]:
                for w in row:
                    if self.canvas.is_point_in_path(w.hit_path, x, y):
                        return HitInfo(band, w.dim, w.level, dims[w.dim], w.hit_path)
        return None

    def pointer_move(self, x: float, y: float) -> HitInfo | None:
        self.hovered = self.hit_test(x, y)
        self._report()
        return self.hovered

    def pointer_click(self, x: float, y: float) -> HitInfo | None:
        """Select the level under the pointer; clicking it again deselects."""
        hit = self.hit_test(x, y)
        self.hovered = hit
        if hit is not None:
            self.selected = None if hit.same_slot(self.selected) else hit
            self.update()
        self._report()
        return self.selected

    def _report(self):
        self.sink.show_hover(describe(self.hovered))
        self.sink.show_selection(describe(self.selected))

    # ============================================================
    # Drawing
    # ============================================================
    def update(self):
        """Recompute every wedge and redraw the whole chart."""
        for band in BANDS:
            self.sink.show_summary(band, self.summary(band))
        self.sink.show_export(self.export_text())

        opts = self.options
        for band in BANDS:
            self.wedges[band] = build_band(self.geo, band, self.stores[band].dimensions,
                                           opts.inner_gap_px, opts.outer_gap_px, opts.level_overlap)
        self._resolve_selection()

        c = self.canvas
        c.clear(BACKGROUND)
        self._draw_base()
        if opts.show_gridlines:
            self._draw_gridlines()
        self._draw_wedges(OUTER)
        self._draw_wedges(INNER)
        if opts.show_labels:
            self._draw_labels()
        if self.selected is not None:
            c.stroke_path(self.selected.path, SELECTION_COLOR, SELECTION_WIDTH)
        log.debug("redraw: %d inner, %d outer dimensions", len(self.inner), len(self.outer))

    def _resolve_selection(self):
        """Point the selection at the freshly built hit region, or drop it."""
        sel = self.selected
        if sel is None:
            return
        rows = self.wedges[sel.band]
        if sel.dim < len(rows) and sel.level < len(rows[sel.dim]):
            dims = self.stores[sel.band].dimensions
            self.selected = sel._replace(dimension=dims[sel.dim],
                                         path=rows[sel.dim][sel.level].hit_path)
        else:
            self.selected = None

    def _draw_base(self):
        """Safe-limits ring as four stacked discs, largest first."""
        g = self.geo; c = self.canvas
        cx, cy = g.center
        c.fill_circle(cx, cy, g.out_donut, DONUT_FROSTING)
        c.fill_circle(cx, cy, g.out_donut - g.line_size, DONUT_FILLING)
        c.fill_circle(cx, cy, g.in_donut + g.line_size, DONUT_FROSTING)
        c.fill_circle(cx, cy, g.in_donut, BACKGROUND)

    def gridline_radii(self) -> list[float]:
        """Inner band lines measured inward from the ring, outer band lines outward."""
        g = self.geo
        inner_scale = (g.out_inner - g.in_inner) / NORMAL_CEILING
        outer_scale = (g.out_outer - g.in_outer) / NORMAL_CEILING
        radii = [g.out_inner - v*inner_scale for v in GRIDLINE_VALUES
                 if g.out_inner - v*inner_scale >= g.in_inner - ZERO_RADIUS_TOL]
        radii += [g.in_outer + v*outer_scale for v in GRIDLINE_VALUES
                  if g.in_outer + v*outer_scale <= g.out_outer + ZERO_RADIUS_TOL]
        return radii

    def _draw_gridlines(self):
        cx, cy = self.geo.center
        for r in self.gridline_radii():
            self.canvas.stroke_circle(cx, cy, r, GRIDLINE_COLOR, GRIDLINE_WIDTH, GRIDLINE_DASH)

    def _draw_wedges(self, band: str):
        for row in self.wedges[band]:
            for w in row:
                if w.path is not None:
                    self.canvas.fill_path(w.path, w.radii.fill)

    def _draw_labels(self):
        g = self.geo; c = self.canvas
        ts = g.text_size
        small = max(CORRIDOR_MIN_SIZE, ts * CORRIDOR_TOP_SCALE)
        nudge = self.options.corridor_label_offset * ts / 2
        light_edge = g.out_donut - g.line_size
        inner_edge = g.in_donut + g.line_size

        draw_curved_text(c, CORRIDOR_BOTTOM_TEXT, (inner_edge + light_edge)/2, math.pi/2,
                         CORRIDOR_LABEL_COLOR, ts * CORRIDOR_BOTTOM_SCALE, g.center)
        draw_curved_text(c, CORRIDOR_INNER_TEXT, (g.in_donut + inner_edge)/2 - nudge, 3*math.pi/2,
                         CORRIDOR_LABEL_COLOR, small, g.center)
        draw_curved_text(c, CORRIDOR_OUTER_TEXT, (light_edge + g.out_donut)/2 - nudge, 3*math.pi/2,
                         CORRIDOR_LABEL_COLOR, small, g.center)

        # Dimension names at the centre of each equal share
        inner_r = max(ts, g.in_donut - ts)
        outer_r = g.in_outer + (g.out_outer - g.in_outer)/2
        for band, radius in ((INNER, inner_r), (OUTER, outer_r)):
            dims = self.stores[band].dimensions
            if not dims: continue
            share = FULL_TURN / len(dims)
            for i, dim in enumerate(dims):
                draw_curved_text(c, dim.name, radius, (i*share + share/2) % FULL_TURN,
                                 LABEL_COLOR, ts, g.center)
