"""Vector backend: serialises drawing calls to an SVG document."""
import html
import math

from shared import Path, RadialGradient, Fill, MoveTo, LineTo, Arc, TWO_PI, polar, arc_sweep
from render.base import Canvas
from render.colors import svg_color


def _f(v: float) -> str:
    return f"{v:.2f}"


def path_data(path: Path) -> str:
    """SVG "d" attribute for a canvas-style path; full circles become two half arcs."""
    d = []
    cur = start = None
    for cmd in path.cmds:
        if isinstance(cmd, MoveTo):
            cur = start = (cmd.x, cmd.y); d.append(f"M{_f(cmd.x)} {_f(cmd.y)}")
        elif isinstance(cmd, LineTo):
            if cur is None:
                start = (cmd.x, cmd.y); d.append(f"M{_f(cmd.x)} {_f(cmd.y)}")
            else:
                d.append(f"L{_f(cmd.x)} {_f(cmd.y)}")
            cur = (cmd.x, cmd.y)
        elif isinstance(cmd, Arc):
            p0 = polar(cmd.cx, cmd.cy, cmd.r, cmd.start)
            if cur is None:
                start = p0; d.append(f"M{_f(p0[0])} {_f(p0[1])}")
            else:
                d.append(f"L{_f(p0[0])} {_f(p0[1])}")
            sweep = arc_sweep(cmd.start, cmd.end, cmd.ccw)
            flag = 1 if sweep > 0 else 0
            r = _f(cmd.r)
            if abs(sweep) >= TWO_PI - 1e-9:
                mid = polar(cmd.cx, cmd.cy, cmd.r, cmd.start + sweep/2)
                d.append(f"A{r} {r} 0 0 {flag} {_f(mid[0])} {_f(mid[1])}")
                d.append(f"A{r} {r} 0 0 {flag} {_f(p0[0])} {_f(p0[1])}")
                cur = p0
            elif sweep != 0:
                p1 = polar(cmd.cx, cmd.cy, cmd.r, cmd.start + sweep)
                large = 1 if abs(sweep) > math.pi else 0
                d.append(f"A{r} {r} 0 {large} {flag} {_f(p1[0])} {_f(p1[1])}")
                cur = p1
            else:
                cur = p0
        else:
            d.append("Z"); cur = start
    return " ".join(d)


class SvgCanvas(Canvas):
    """Collects SVG elements; gradients go to <defs>."""

    def __init__(self, width: int, height: int, **kw):
        super().__init__(width, height, **kw)
        self.defs: list[str] = []
        self.out: list[str] = []

    def _transform_attr(self) -> str:
        if self.is_identity():
            return ""
        m = self.matrix
        vals = " ".join(f"{v:.4f}" for v in (m[0, 0], m[1, 0], m[0, 1], m[1, 1], m[0, 2], m[1, 2]))
        return f' transform="matrix({vals})"'

    def _gradient(self, g: RadialGradient) -> str:
        """Emit a userSpaceOnUse gradient, remapping stops from [r0, r1] onto [0, r1]."""
        gid = f"g{len(self.defs)}"
        stops = []
        for off, color in g.stops:
            rgb, alpha = svg_color(color)
            pos = (g.r0 + off*(g.r1 - g.r0)) / g.r1 if g.r1 > 0 else off
            stops.append(f'<stop offset="{min(max(pos, 0.0), 1.0):.4f}" stop-color="{rgb}"'
                         f' stop-opacity="{alpha:.3f}"/>')
        self.defs.append(f'<radialGradient id="{gid}" gradientUnits="userSpaceOnUse"'
                         f' cx="{_f(g.cx)}" cy="{_f(g.cy)}" r="{_f(g.r1)}">'
                         + "".join(stops) + "</radialGradient>")
        return f"url(#{gid})"

    def _paint(self, fill: Fill) -> str:
        if isinstance(fill, RadialGradient):
            return f'fill="{self._gradient(fill)}"'
        rgb, alpha = svg_color(fill)
        return f'fill="{rgb}"' + (f' fill-opacity="{alpha:.3f}"' if alpha < 1 else "")

    def clear(self, color: str):
        self.defs = []
        self.out = []
        rgb, _ = svg_color(color)
        self.out.append(f'<rect x="0" y="0" width="{self.width}" height="{self.height}" fill="{rgb}"/>')

    def fill_path(self, path: Path, fill: Fill):
        if path.is_empty(): return
        self.out.append(f'<path d="{path_data(path)}" {self._paint(fill)}'
                        f' fill-rule="evenodd"{self._transform_attr()}/>')

    def stroke_path(self, path: Path, color: str, width: float = 1.0, dash=None):
        if path.is_empty(): return
        rgb, alpha = svg_color(color)
        dash_attr = f' stroke-dasharray="{",".join(str(v) for v in dash)}"' if dash else ""
        op = f' stroke-opacity="{alpha:.3f}"' if alpha < 1 else ""
        self.out.append(f'<path d="{path_data(path)}" fill="none" stroke="{rgb}"{op}'
                        f' stroke-width="{width}"{dash_attr}{self._transform_attr()}/>')

    def fill_text(self, text: str, x: float, y: float, color: str):
        rgb, _ = svg_color(color)
        family = html.escape(self.font_family, quote=True)
        self.out.append(f'<text x="{_f(x)}" y="{_f(y)}" text-anchor="middle"'
                        f' dominant-baseline="middle" font-family="{family}"'
                        f' font-size="{self.font_size:g}" fill="{rgb}"{self._transform_attr()}>'
                        f'{html.escape(text)}</text>')

    def to_svg(self) -> str:
        head = (f'<svg xmlns="http://www.w3.org/2000/svg" width="{self.width}" height="{self.height}"'
                f' viewBox="0 0 {self.width} {self.height}">')
        defs = ["<defs>" + "".join(self.defs) + "</defs>"] if self.defs else []
        return "\n".join([head] + defs + self.out + ["</svg>"]) + "\n"

    def write(self, filename: str):
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.to_svg())
