"""Named constants for the doughnut chart.

Radii and gaps are in canvas pixels, angles in radians, values in the
logical 0-100 scale unless noted.
"""
import math

# Bands
INNER = "inner"
OUTER = "outer"
BANDS = (INNER, OUTER)

# Logical value range
VALUE_FLOOR = -100                # below this a value is invalid
NORMAL_CEILING = 100              # inner band maximum / logical full scale
OVERSHOOT_CEILING = 150           # outer band maximum (overshoot allowed)
BAND_CEILINGS = {INNER: NORMAL_CEILING, OUTER: OVERSHOOT_CEILING}

# Geometry reference (layout was tuned on a 640px canvas)
REFERENCE_SIZE = 640.0
TIP_RADIUS = 10.0                 # radius where an inner value of 100 converges
MIN_SCALE = 0.5
MAX_SCALE = 1.5

# Tolerances
ZERO_RADIUS_TOL = 0.1             # radial extent below this is not drawn
INNER_RADIUS_TOL = 0.1            # slack when classifying a wedge as inner
ANGLE_EPS = 1e-9
HALF_ANGLE_EPS = 1e-6             # inner tip arc shorter than this becomes a line

# Angular layout
INNER_VISUAL_GAP = 0.4            # px of arc between inner dimensions at the tip radius
OUTER_VISUAL_GAP = 8.0            # px of arc between outer dimensions at the outer band edge
FALLBACK_ANGULAR_GAP = 0.04       # used when the reference radius is <= 1px
MAX_GAP_FRACTION = 0.5            # gap never exceeds half a dimension's share
LEVEL_OVERLAP = 0.05              # symmetric overlap between adjacent levels
START_ANGLE = 0.0                 # 3 o'clock, increasing clockwise on screen
FULL_TURN = 2 * math.pi

# Colours
DONUT_FROSTING = "rgb(3, 134, 173)"      # dark blue edge rings
DONUT_FILLING = "rgb(126, 208, 247)"     # light blue safe zone
BACKGROUND = "rgb(255, 255, 255)"
VALID_GRADIENT_START = "rgb(251, 138, 152)"
VALID_GRADIENT_END = "rgb(255, 255, 255)"
OVERSHOOT_COLOR = "rgb(255, 255, 255)"
INVALID_GREY = "rgb(211, 211, 211)"
INVALID_GREY_CLEAR = "rgba(211, 211, 211, 0)"
INVALID_WHITE = "rgb(255, 255, 255)"
GRADIENT_SHIFT = 0.3              # outer invalid gradient fades out by 1 - shift

# Gridlines
GRIDLINE_VALUES = (25, 50, 75, 100)
GRIDLINE_COLOR = "#cccccc"
GRIDLINE_WIDTH = 0.5
GRIDLINE_DASH = (3, 4)

# Selection
SELECTION_COLOR = "#fb8a98"
SELECTION_WIDTH = 1.5

# Labels
LABEL_COLOR = "#484848"
CORRIDOR_LABEL_COLOR = "white"
CORRIDOR_BOTTOM_TEXT = "Sustainable quality care for all"
CORRIDOR_INNER_TEXT = "HEALTHCARE FOUNDATION"
CORRIDOR_OUTER_TEXT = "ECOLOGICAL CEILING"
CORRIDOR_BOTTOM_SCALE = 1.1       # x text size
CORRIDOR_TOP_SCALE = 0.9          # x text size
CORRIDOR_MIN_SIZE = 8
FONT_FAMILY = "Arial, sans-serif"

# Import/export
FIELD_SEPARATOR = ","
SEPARATOR_STANDIN = ";"         # replaces the separator inside stored names and labels
ROW_FIELDS = 4
INVALID_TEXT = "NaN"
FORMAT_WARNING = (
    "Format errors\n"
    "Expects rows with 4 cols: type, name, value, sub-label\n"
    "   outer, climate change, 76,\n"
    "   inner, food, 20, imports\n"
    "   inner, food, 56, exports"
)
NONE_TEXT = "None"
