"""Text measurement with Pillow fonts, cached per pixel size."""
import logging

from PIL import ImageFont

log = logging.getLogger(__name__)

# Tried in order before Pillow's built-in font
FONT_CANDIDATES = {
    "arial": ["Arial.ttf", "arial.ttf", "LiberationSans-Regular.ttf", "DejaVuSans.ttf"],
    "sans-serif": ["DejaVuSans.ttf", "LiberationSans-Regular.ttf", "Arial.ttf"],
}
CHAR_WIDTH = 0.55   # average advance as a fraction of the font size


def heuristic_width(text: str, size: float) -> float:
    return len(text) * size * CHAR_WIDTH


def family_candidates(family: str) -> list[str]:
    """Font files for a CSS-style family list such as "Arial, sans-serif"."""
    names = []
    for fam in family.split(","):
        fam = fam.strip().strip("'\"").lower()
        for name in FONT_CANDIDATES.get(fam, [fam + ".ttf"]):
            if name not in names: names.append(name)
    return names


class TextMeasurer:
    """Widths of strings in *family*; heuristic widths when use_fonts is False."""

    def __init__(self, family: str = "Arial, sans-serif", use_fonts: bool = True):
        self.family = family
        self.use_fonts = use_fonts
        self._cache: dict[int, ImageFont.ImageFont | ImageFont.FreeTypeFont] = {}

    def font(self, size: float):
        key = max(1, round(size))
        if key in self._cache:
            return self._cache[key]
        font = None
        for candidate in family_candidates(self.family):
            try:
                font = ImageFont.truetype(candidate, key)
                break
            except OSError:
                continue
        if font is None:
            log.debug("no TrueType font for %r, using Pillow default", self.family)
            font = ImageFont.load_default(key)
        self._cache[key] = font
        return font

    def width(self, text: str, size: float) -> float:
        if not self.use_fonts:
            return heuristic_width(text, size)
        return float(self.font(size).getlength(text))
