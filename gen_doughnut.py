"""Render a doughnut chart from a delimited-text data file.

Rows are band,name,value,label (e.g. "inner,food,20,imports").  Each output
path is rendered by extension: .svg as a vector document, anything else
(.png, .jpg, ...) as a bitmap.
"""
import argparse
import logging
import os
import sys

from doughnut import Doughnut, ChartOptions, LoggingSink, INNER, OUTER
from doughnut.logging_config import setup_logging
from render import SvgCanvas, RasterCanvas

RASTER_LABEL_OFFSET = 0.15   # bitmap text sits slightly high on the ring


class ConsoleSink(LoggingSink):
    """Logs chart reports; format warnings go straight to stderr."""

    def warn(self, message: str):
        print(message, file=sys.stderr)


def parse_point(text: str) -> tuple[float, float]:
    try:
        x, y = (float(v) for v in text.split(","))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected X,Y, got {text!r}") from e
    return (x, y)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Render a two-band doughnut chart to SVG and/or PNG.")
    ap.add_argument("data", help="Input file of band,name,value,label rows")
    ap.add_argument("-o", "--out", action="append", required=True,
                    help="Output file (.svg or bitmap); may be repeated")
    ap.add_argument("--size", type=int, default=640, help="Canvas side in pixels (default: 640)")
    ap.add_argument("--scale", type=float, default=1.0, help="Ring width scale, 0.5-1.5 (default: 1.0)")
    ap.add_argument("--text-size", type=float, default=12.0, help="Label font size (default: 12)")
    ap.add_argument("--skip-header", action="store_true", help="Ignore the first row of the input")
    ap.add_argument("--no-labels", action="store_true", help="Omit curved labels")
    ap.add_argument("--gridlines", action="store_true", help="Draw dashed gridlines")
    ap.add_argument("--select", type=parse_point, metavar="X,Y",
                    help="Select the level under this canvas point")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def render(data: str, out_path: str, args) -> Doughnut:
    """Build the chart for *data* onto a canvas chosen by out_path's extension."""
    is_svg = os.path.splitext(out_path)[1].lower() == ".svg"
    canvas = SvgCanvas(args.size, args.size) if is_svg else RasterCanvas(args.size, args.size)
    options = ChartOptions(show_labels=not args.no_labels, show_gridlines=args.gridlines,
                           corridor_label_offset=0.0 if is_svg else RASTER_LABEL_OFFSET)
    chart = Doughnut(canvas, scale=args.scale, text_size=args.text_size,
                     options=options, sink=ConsoleSink())
    errors = chart.import_text(data, skip_header=args.skip_header)
    if args.select:
        chart.pointer_click(*args.select)
    canvas.write(out_path)
    print(f"wrote {out_path}" + (f" ({errors} malformed rows)" if errors else ""))
    return chart


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)
    with open(args.data, encoding="utf-8") as f:
        data = f.read()

    chart = None
    for out_path in args.out:
        chart = render(data, out_path, args)

    print(f"Inner: {chart.summary(INNER)}")
    print(f"Outer: {chart.summary(OUTER)}")
    sel = chart.get_selected_dimension()
    if sel:
        print(f"Selected: {sel.band} {sel.name} = {sel.value}" + (f" ({sel.label})" if sel.label else ""))
    return 0


if __name__ == "__main__":
    sys.exit(main())
