"""Presentation sink: where the chart engine sends its text output.

The engine never touches application state directly; it calls a sink.  The
base class ignores everything, so callers override only what they show.
"""
import logging

log = logging.getLogger(__name__)


class PresentationSink:
    def show_hover(self, text: str):
        pass

    def show_selection(self, text: str):
        pass

    def show_summary(self, band: str, text: str):
        pass

    def show_export(self, text: str):
        pass

    def warn(self, message: str):
        pass


class LoggingSink(PresentationSink):
    """Sink that forwards everything to the log."""

    def show_hover(self, text: str):
        log.debug("hover: %s", text)

    def show_selection(self, text: str):
        log.info("selected: %s", text)

    def show_summary(self, band: str, text: str):
        log.info("%s: %s", band, text)

    def warn(self, message: str):
        log.warning("%s", message)
