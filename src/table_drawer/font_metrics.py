"""Font measurement used by the table layout."""

from typing import Protocol

from reportlab.pdfbase import pdfmetrics


class FontMetrics(Protocol):
    """Answers line-height and string-width questions for a font at a size."""

    def line_height(self, font_name: str, font_size: float) -> float:
        ...

    def string_width(self, text: str, font_name: str, font_size: float) -> float:
        ...


class ReportLabFontMetrics:
    """Font metrics backed by ReportLab's registered fonts.

    Line height is the font ascent scaled to the requested size, so the
    first baseline of a cell sits one ascent below its top edge.
    """

    def line_height(self, font_name: str, font_size: float) -> float:
        return pdfmetrics.getAscent(font_name) * font_size / 1000.0

    def string_width(self, text: str, font_name: str, font_size: float) -> float:
        return pdfmetrics.stringWidth(text, font_name, font_size)


DEFAULT_METRICS = ReportLabFontMetrics()
