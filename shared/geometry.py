"""Pure geometry functions: angles, arcs, line-circle intersection, polygons.

Angles are radians in screen orientation (y grows downward), so an
increasing angle turns clockwise on screen, matching canvas arcs.
"""
import math
from .types import Point

TWO_PI = 2 * math.pi

# ============================================================
# Error Type
# ============================================================
class GeometryError(ValueError):
    """Raised for impossible geometry operations."""

# ============================================================
# Angle Utilities
# ============================================================
def polar(cx: float, cy: float, r: float, a: float) -> Point:
    """Point at radius r and angle a around (cx, cy)."""
    return (cx + r*math.cos(a), cy + r*math.sin(a))

def normalize_angle(a: float) -> float:
    """Angle folded into [0, 2*pi)."""
    a = a % TWO_PI
    if a < 0: a += TWO_PI
    return a

def arc_sweep(start: float, end: float, ccw: bool) -> float:
    """Signed sweep of a canvas-style arc from *start* to *end*.

    Positive for increasing angle (ccw=False), negative otherwise.  A span of
    2*pi or more in the travel direction is a full circle.
    """
    if not ccw:
        if end - start >= TWO_PI:
            return TWO_PI
        return (end - start) % TWO_PI
    if start - end >= TWO_PI:
        return -TWO_PI
    return -((start - end) % TWO_PI)

def arc_poly(cx: float, cy: float, r: float, sa: float, ea: float, n: int = 60) -> list[Point]:
    """Generate n+1 points along a circular arc from angle sa to ea (radians)."""
    return [(cx+r*math.cos(sa+(ea-sa)*i/n), cy+r*math.sin(sa+(ea-sa)*i/n))
            for i in range(n+1)]

# ============================================================
# Intersections
# ============================================================
def line_circle_isect_forward(p1: Point, p2: Point, c: Point, r: float,
                              tol: float = 1e-6) -> Point:
    """First intersection of the ray p1 -> p2 with the circle (c, r).

    Line parametrised as p1 + t*(p2-p1); returns the point with the smallest
    t >= -tol.  Raises GeometryError when the line is degenerate, misses the
    circle, or only meets it behind p1.
    """
    vx = p2[0]-p1[0]; vy = p2[1]-p1[1]
    dx = p1[0]-c[0]; dy = p1[1]-c[1]
    A = vx**2+vy**2; B = 2*(dx*vx+dy*vy); C = dx**2+dy**2-r**2
    if A == 0:
        raise GeometryError("Zero-length direction: p1 == p2")
    disc = B**2-4*A*C
    if disc < 0:
        raise GeometryError(f"Line misses circle: disc={disc:.6f}")
    sq = math.sqrt(disc)
    t1 = (-B+sq)/(2*A); t2 = (-B-sq)/(2*A)
    candidates = [t for t in (t1, t2) if t >= -tol]
    if not candidates:
        raise GeometryError(f"No forward intersection: t1={t1}, t2={t2}")
    t = min(candidates)
    return (p1[0]+t*vx, p1[1]+t*vy)

# ============================================================
# Polygon Utilities
# ============================================================
def horiz_isects(poly: list[Point], y_val: float) -> list[float]:
    """x values where the polygon boundary crosses a given y."""
    r = []
    for i in range(len(poly)):
        j = (i+1)%len(poly); y1, y2 = poly[i][1], poly[j][1]
        if (y1 <= y_val < y2) or (y2 <= y_val < y1):
            t = (y_val-y1)/(y2-y1); r.append(poly[i][0]+t*(poly[j][0]-poly[i][0]))
    return r

def point_in_poly(polys: list[list[Point]], p: Point) -> bool:
    """Even-odd containment of p in the union of closed polygons."""
    crossings = 0
    for poly in polys:
        crossings += sum(1 for x in horiz_isects(poly, p[1]) if x < p[0])
    return crossings % 2 == 1
