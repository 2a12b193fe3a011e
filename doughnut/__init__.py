"""Two-band doughnut chart: data model, geometry, curved labels and the chart engine."""

from .constants import INNER, OUTER, BANDS
from .config import ChartGeometry, ChartOptions, compute_geometry
from .dimensions import (
    DimensionIndexError, Valid, Invalid, INVALID, parse_value,
    Level, Dimension, DimensionStore,
)
from .mapper import WedgeRadii, map_level
from .layout import LevelSlice, DimensionSlice, angular_gap, layout_band
from .wedges import Wedge, build_band
from .text import Glyph, layout_curved_text, draw_curved_text, is_bottom_half
from .sink import PresentationSink, LoggingSink
from .chart import Doughnut, HitInfo, SelectedDimension
