"""Shared test fixtures for doughnut chart tests."""
import pytest
from doughnut import compute_geometry, Doughnut, PresentationSink
from render import SvgCanvas, TextMeasurer

CHAR_W = 6.0   # fixed advance used by the `measure` fixture


class RecordingSink(PresentationSink):
    """Keeps everything the engine reports."""

    def __init__(self):
        self.hover = []; self.selection = []
        self.summaries = {}; self.exports = []; self.warnings = []

    def show_hover(self, text): self.hover.append(text)
    def show_selection(self, text): self.selection.append(text)
    def show_summary(self, band, text): self.summaries[band] = text
    def show_export(self, text): self.exports.append(text)
    def warn(self, message): self.warnings.append(message)


@pytest.fixture(scope="session")
def geo():
    """Geometry of the reference 640px chart."""
    return compute_geometry(640)


@pytest.fixture(scope="session")
def measure():
    return lambda s: CHAR_W * len(s)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def svg_canvas():
    """640px SVG canvas with font-independent text widths."""
    return SvgCanvas(640, 640, measurer=TextMeasurer(use_fonts=False))


@pytest.fixture
def chart(svg_canvas, sink):
    return Doughnut(svg_canvas, sink=sink)
