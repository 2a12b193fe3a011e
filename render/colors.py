"""CSS colour strings to RGBA tuples, via Pillow's colour parser."""
from PIL import ImageColor

RGBA = tuple[int, int, int, int]


def to_rgba(color: str) -> RGBA:
    return ImageColor.getcolor(color, "RGBA")


def svg_color(color: str) -> tuple[str, float]:
    """(rgb(...) string, opacity) for attributes that reject rgba()."""
    r, g, b, a = to_rgba(color)
    return f"rgb({r},{g},{b})", a / 255
