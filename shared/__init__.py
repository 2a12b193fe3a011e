"""Shared types, pure geometry, and closed-path utilities."""

from .types import Point, MoveTo, LineTo, Arc, Close, PathCmd, RadialGradient, Fill
from .geometry import (
    GeometryError,
    TWO_PI, polar, normalize_angle, arc_sweep, arc_poly,
    line_circle_isect_forward,
    horiz_isects, point_in_poly,
)
from .path import Path
