"""Drawing backends: SVG document and Pillow bitmap."""

from .base import Canvas
from .fonts import TextMeasurer
from .svg import SvgCanvas
from .raster import RasterCanvas
