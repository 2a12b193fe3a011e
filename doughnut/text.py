"""Text laid out character by character along a circular arc.

On the bottom half of the circle glyphs are turned to read upright and the
string is reversed, so it still reads left to right after the flip.
"""
import math
from typing import Callable, NamedTuple

from shared import Point, polar, normalize_angle
from doughnut.constants import ANGLE_EPS

Measure = Callable[[str], float]


class Glyph(NamedTuple):
    char: str
    x: float; y: float
    angle: float      # placement angle around the centre
    rotation: float   # glyph rotation about (x, y)


def is_bottom_half(angle: float) -> bool:
    a = normalize_angle(angle)
    return ANGLE_EPS < a < math.pi - ANGLE_EPS


def layout_curved_text(text: str, radius: float, center_angle: float, measure: Measure,
                       cx: float = 0.0, cy: float = 0.0) -> list[Glyph]:
    """Glyph positions for *text* centred on *center_angle* at *radius*.

    Each character consumes its own measured width as arc length, so the
    running angle advances unevenly with the font's advance widths.
    """
    if not text or radius <= 0:
        return []
    bottom = is_bottom_half(center_angle)
    offset = -math.pi/2 if bottom else math.pi/2
    chars = text[::-1] if bottom else text

    total = measure(chars) / radius
    angle = center_angle - total/2
    glyphs = []
    for ch in chars:
        step = measure(ch) / radius
        a = angle + step/2
        x, y = polar(cx, cy, radius, a)
        glyphs.append(Glyph(ch, x, y, a, a + offset))
        angle += step
    return glyphs


def draw_curved_text(canvas, text: str, radius: float, center_angle: float,
                     color: str, font_size: float, center: Point | None = None) -> list[Glyph]:
    """Place each glyph with its own save/translate/rotate/draw/restore.

    The arc is centred on *center*, or on the middle of the canvas when omitted.
    """
    canvas.set_font(font_size)
    cx, cy = center if center is not None else (canvas.width/2, canvas.height/2)
    glyphs = layout_curved_text(text, radius, center_angle, canvas.measure_text, cx, cy)
    for g in glyphs:
        canvas.save()
        canvas.translate(g.x, g.y)
        canvas.rotate(g.rotation)
        canvas.fill_text(g.char, 0, 0, color)
        canvas.restore()
    return glyphs
