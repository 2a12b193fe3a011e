"""Closed path built from lines and circular arcs.

A Path records canvas-style commands so a drawing backend can render it
natively (SVG) or from its flattened polygons (raster), and so the same
object answers point-in-path queries.
"""
import math
from .types import Point, MoveTo, LineTo, Arc, Close, PathCmd
from .geometry import TWO_PI, arc_sweep, arc_poly, point_in_poly

ARC_STEP = math.pi / 90   # max flattening step along an arc (2 degrees)


class Path:
    def __init__(self):
        self.cmds: list[PathCmd] = []

    def __repr__(self):
        return f"Path({len(self.cmds)} cmds)"

    # --- building ---

    def move_to(self, x: float, y: float) -> "Path":
        self.cmds.append(MoveTo(x, y)); return self

    def line_to(self, x: float, y: float) -> "Path":
        self.cmds.append(LineTo(x, y)); return self

    def arc(self, cx: float, cy: float, r: float, start: float, end: float,
            ccw: bool = False) -> "Path":
        """Arc around (cx, cy); joined to the current point by a straight line."""
        self.cmds.append(Arc(cx, cy, r, start, end, ccw)); return self

    def close(self) -> "Path":
        self.cmds.append(Close()); return self

    @classmethod
    def annular_sector(cls, cx: float, cy: float, r_outer: float, r_inner: float,
                       start: float, end: float) -> "Path":
        """Outer arc forward, inner arc backward, closed."""
        return (cls().arc(cx, cy, r_outer, start, end)
                .arc(cx, cy, r_inner, end, start, ccw=True).close())

    @classmethod
    def circle(cls, cx: float, cy: float, r: float) -> "Path":
        return cls().arc(cx, cy, r, 0.0, TWO_PI).close()

    # --- queries ---

    def is_empty(self) -> bool:
        return not self.cmds

    def subpaths(self) -> list[tuple[list[Point], bool]]:
        """Flatten into (points, closed) runs; arcs become polylines."""
        runs: list[tuple[list[Point], bool]] = []
        pts: list[Point] = []
        for cmd in self.cmds:
            if isinstance(cmd, MoveTo):
                if len(pts) > 1: runs.append((pts, False))
                pts = [(cmd.x, cmd.y)]
            elif isinstance(cmd, LineTo):
                pts.append((cmd.x, cmd.y))
            elif isinstance(cmd, Arc):
                sweep = arc_sweep(cmd.start, cmd.end, cmd.ccw)
                n = max(2, math.ceil(abs(sweep) / ARC_STEP))
                arc_pts = arc_poly(cmd.cx, cmd.cy, cmd.r, cmd.start, cmd.start + sweep, n)
                if pts and _same(pts[-1], arc_pts[0]):
                    arc_pts = arc_pts[1:]
                pts.extend(arc_pts)
            else:
                if len(pts) > 1: runs.append((pts, True))
                pts = pts[:1]  # current point returns to the subpath start
        if len(pts) > 1: runs.append((pts, False))
        return runs

    def polygons(self) -> list[list[Point]]:
        """Every run treated as implicitly closed, as a fill would."""
        return [pts for pts, _ in self.subpaths() if len(pts) > 2]

    def contains(self, x: float, y: float) -> bool:
        """Point-in-path test (even-odd)."""
        return point_in_poly(self.polygons(), (x, y))


def _same(a: Point, b: Point, eps: float = 1e-9) -> bool:
    return abs(a[0]-b[0]) < eps and abs(a[1]-b[1]) < eps
