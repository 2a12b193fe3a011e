"""Raster backend: draws onto a Pillow RGBA image.

Paths are flattened to polygons and filled through a coverage mask;
radial gradients are evaluated per pixel with numpy.
"""
import math

import numpy as np
from PIL import Image, ImageDraw

from shared import Path, RadialGradient, Fill, Point
from render.base import Canvas
from render.colors import to_rgba


def dash_segments(points: list[Point], dash: tuple[float, ...]) -> list[list[Point]]:
    """Split a polyline into the "on" runs of a repeating dash pattern."""
    if not dash or sum(dash) <= 0:
        return [points]
    runs: list[list[Point]] = []
    idx, left, on = 0, dash[0], True
    cur = [points[0]] if points else []
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        seg = math.hypot(x1-x0, y1-y0); pos = 0.0
        while seg - pos > left:
            pos += left
            p = (x0 + (x1-x0)*pos/seg, y0 + (y1-y0)*pos/seg)
            if on:
                cur.append(p); runs.append(cur)
            else:
                cur = [p]
            on = not on
            idx = (idx + 1) % len(dash); left = dash[idx]
        left -= seg - pos
        if on: cur.append((x1, y1))
    if on and len(cur) > 1:
        runs.append(cur)
    return runs


class RasterCanvas(Canvas):
    def __init__(self, width: int, height: int, **kw):
        super().__init__(width, height, **kw)
        self.image = Image.new("RGBA", (width, height), "white")

    def _device(self, pts: list[Point]) -> list[Point]:
        return [self.apply(x, y) for x, y in pts]

    def _mask(self, path: Path) -> np.ndarray:
        """Even-odd coverage of the path's polygons as a bool array."""
        cover = np.zeros((self.height, self.width), bool)
        for poly in path.polygons():
            m = Image.new("L", (self.width, self.height), 0)
            ImageDraw.Draw(m).polygon(self._device(poly), fill=255)
            cover ^= np.asarray(m) > 0
        return cover

    def _gradient_pixels(self, g: RadialGradient) -> np.ndarray:
        """RGBA float array of the gradient evaluated at every pixel centre."""
        inv = np.linalg.inv(self.matrix)
        yy, xx = np.mgrid[0:self.height, 0:self.width] + 0.5
        ux = inv[0, 0]*xx + inv[0, 1]*yy + inv[0, 2]
        uy = inv[1, 0]*xx + inv[1, 1]*yy + inv[1, 2]
        r = np.hypot(ux - g.cx, uy - g.cy)
        span = g.r1 - g.r0
        t = np.clip((r - g.r0) / span, 0, 1) if span else (r >= g.r1).astype(float)
        offsets = [off for off, _ in g.stops]
        colors = np.array([to_rgba(c) for _, c in g.stops], float)
        return np.stack([np.interp(t, offsets, colors[:, k]) for k in range(4)], axis=-1)

    def _composite(self, layer: Image.Image, left: int = 0, top: int = 0):
        """Alpha-composite *layer* at (left, top), clipped to the image."""
        x0, y0 = max(0, left), max(0, top)
        x1 = min(self.width, left + layer.width); y1 = min(self.height, top + layer.height)
        if x1 <= x0 or y1 <= y0: return
        part = layer.crop((x0 - left, y0 - top, x1 - left, y1 - top))
        self.image.alpha_composite(part, dest=(x0, y0))

    def clear(self, color: str):
        self.image = Image.new("RGBA", (self.width, self.height), to_rgba(color))

    def fill_path(self, path: Path, fill: Fill):
        cover = self._mask(path)
        if not cover.any(): return
        if isinstance(fill, RadialGradient):
            px = self._gradient_pixels(fill)
        else:
            px = np.empty((self.height, self.width, 4)); px[...] = to_rgba(fill)
        px[..., 3] *= cover
        self._composite(Image.fromarray(px.round().astype(np.uint8), "RGBA"))

    def stroke_path(self, path: Path, color: str, width: float = 1.0, dash=None):
        layer = Image.new("RGBA", (self.width, self.height), (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        rgba = to_rgba(color)
        w = max(1, round(width))
        for pts, closed in path.subpaths():
            pts = self._device(pts)
            if closed: pts = pts + [pts[0]]
            for run in dash_segments(pts, dash):
                draw.line(run, fill=rgba, width=w, joint="curve")
        self._composite(layer)

    def fill_text(self, text: str, x: float, y: float, color: str):
        font = self.measurer.font(self.font_size)
        l, t, r, b = font.getbbox(text, anchor="mm")
        hw = math.ceil(max(-l, r)) + 1; hh = math.ceil(max(-t, b)) + 1
        glyph = Image.new("RGBA", (2*hw, 2*hh), (0, 0, 0, 0))
        ImageDraw.Draw(glyph).text((hw, hh), text, font=font, fill=to_rgba(color), anchor="mm")
        glyph = glyph.rotate(-math.degrees(self.rotation()), resample=Image.Resampling.BICUBIC, expand=True)
        dx, dy = self.apply(x, y)
        self._composite(glyph, round(dx - glyph.width/2), round(dy - glyph.height/2))

    def write(self, filename: str):
        self.image.convert("RGB").save(filename)
