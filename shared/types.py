"""Shared type definitions for the doughnut chart engine."""
from typing import NamedTuple

Point = tuple[float, float]

class MoveTo(NamedTuple):
    x: float; y: float

class LineTo(NamedTuple):
    x: float; y: float

class Arc(NamedTuple):
    cx: float; cy: float; r: float
    start: float; end: float
    ccw: bool  # True = decreasing angle (canvas "anticlockwise")

class Close(NamedTuple):
    pass

PathCmd = MoveTo | LineTo | Arc | Close

class RadialGradient(NamedTuple):
    """Concentric radial gradient; stops are (offset in [0, 1], colour)."""
    cx: float; cy: float
    r0: float; r1: float
    stops: tuple[tuple[float, str], ...]

Fill = str | RadialGradient
