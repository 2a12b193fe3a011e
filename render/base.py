"""Drawing surface interface shared by the vector and raster backends.

The chart engine only calls the methods below, so it never knows whether
it is producing an SVG document or a bitmap.  The transform stack is kept
here as 3x3 affine matrices; backends read the current matrix when they
emit a primitive.
"""
import math
from abc import ABC, abstractmethod

import numpy as np

from shared import Path, RadialGradient, Fill, Point
from render.fonts import TextMeasurer


class Canvas(ABC):
    def __init__(self, width: int, height: int, font_family: str = "Arial, sans-serif",
                 measurer: TextMeasurer | None = None):
        self.width = width
        self.height = height
        self.font_family = font_family
        self.font_size = 12.0
        self.measurer = measurer or TextMeasurer(font_family)
        self._stack = [np.eye(3)]

    # --- transform stack ---

    @property
    def matrix(self) -> np.ndarray:
        return self._stack[-1]

    def save(self):
        self._stack.append(self._stack[-1].copy())

    def restore(self):
        if len(self._stack) > 1:
            self._stack.pop()

    def translate(self, x: float, y: float):
        self._stack[-1] = self._stack[-1] @ np.array([[1, 0, x], [0, 1, y], [0, 0, 1]], float)

    def rotate(self, angle: float):
        c, s = math.cos(angle), math.sin(angle)
        self._stack[-1] = self._stack[-1] @ np.array([[c, -s, 0], [s, c, 0], [0, 0, 1]], float)

    def apply(self, x: float, y: float) -> Point:
        """User-space point in device coordinates."""
        m = self._stack[-1]
        return (m[0, 0]*x + m[0, 1]*y + m[0, 2], m[1, 0]*x + m[1, 1]*y + m[1, 2])

    def rotation(self) -> float:
        """Rotation angle of the current transform."""
        m = self._stack[-1]
        return math.atan2(m[1, 0], m[0, 0])

    def is_identity(self) -> bool:
        return np.allclose(self._stack[-1], np.eye(3))

    # --- text ---

    def set_font(self, size: float):
        self.font_size = size

    def measure_text(self, text: str) -> float:
        return self.measurer.width(text, self.font_size)

    # --- shapes built on fill_path ---

    def radial_gradient(self, cx: float, cy: float, r0: float, r1: float,
                        stops) -> RadialGradient:
        return RadialGradient(cx, cy, r0, r1, tuple(stops))

    def fill_sector(self, cx: float, cy: float, r_outer: float, r_inner: float,
                    start: float, end: float, fill: Fill):
        self.fill_path(Path.annular_sector(cx, cy, r_outer, r_inner, start, end), fill)

    def fill_circle(self, cx: float, cy: float, r: float, fill: Fill):
        self.fill_path(Path.circle(cx, cy, r), fill)

    def stroke_circle(self, cx: float, cy: float, r: float, color: str, width: float = 1.0,
                      dash: tuple[float, ...] | None = None):
        self.stroke_path(Path.circle(cx, cy, r), color, width, dash)

    def is_point_in_path(self, path: Path, x: float, y: float) -> bool:
        return path.contains(x, y)

    # --- backend primitives ---

    @abstractmethod
    def clear(self, color: str): ...

    @abstractmethod
    def fill_path(self, path: Path, fill: Fill): ...

    @abstractmethod
    def stroke_path(self, path: Path, color: str, width: float = 1.0,
                    dash: tuple[float, ...] | None = None): ...

    @abstractmethod
    def fill_text(self, text: str, x: float, y: float, color: str):
        """Draw *text* centred on (x, y) under the current transform."""

    @abstractmethod
    def write(self, filename: str): ...
