"""Drawing surfaces the table drawer emits primitives to.

All coordinates are in PDF page space: origin at the lower-left corner,
y increasing upward.
"""

from dataclasses import dataclass
from typing import Any, List, Protocol, Tuple

from reportlab.lib.colors import Color, black
from reportlab.pdfgen import canvas


class SurfaceError(IOError):
    """A drawing primitive could not be executed by the surface."""


class DrawingSurface(Protocol):
    """Primitive drawing operations with mutable color and line-width state."""

    def set_fill_color(self, color: Color) -> None:
        ...

    def set_stroke_color(self, color: Color) -> None:
        ...

    def set_line_width(self, width: float) -> None:
        ...

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        ...

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        ...

    def draw_text(
        self, text: str, font_name: str, font_size: float, color: Color, x: float, y: float
    ) -> None:
        ...

    def draw_image(self, image: Any, x: float, y: float, width: float, height: float) -> None:
        ...


class CanvasSurface:
    """DrawingSurface backed by a ReportLab canvas."""

    def __init__(self, c: canvas.Canvas):
        self.canvas = c
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self):
        if self._closed:
            raise SurfaceError("Cannot draw on a surface whose canvas has been saved")

    def set_fill_color(self, color: Color) -> None:
        self._check_open()
        self.canvas.setFillColor(color)

    def set_stroke_color(self, color: Color) -> None:
        self._check_open()
        self.canvas.setStrokeColor(color)

    def set_line_width(self, width: float) -> None:
        self._check_open()
        self.canvas.setLineWidth(width)

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        self._check_open()
        self.canvas.rect(x, y, width, height, stroke=0, fill=1)

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._check_open()
        path = self.canvas.beginPath()
        path.moveTo(x1, y1)
        path.lineTo(x2, y2)
        self.canvas.drawPath(path, stroke=1, fill=0)

    def draw_text(
        self, text: str, font_name: str, font_size: float, color: Color, x: float, y: float
    ) -> None:
        self._check_open()
        text_obj = self.canvas.beginText()
        text_obj.setFont(font_name, font_size)
        text_obj.setFillColor(color)
        text_obj.setTextOrigin(x, y)
        text_obj.textOut(text)
        self.canvas.drawText(text_obj)

    def draw_image(self, image: Any, x: float, y: float, width: float, height: float) -> None:
        self._check_open()
        self.canvas.drawImage(
            image,
            x,
            y,
            width=width,
            height=height,
            mask=None,
            preserveAspectRatio=False,
            anchor="sw",
        )

    def save(self) -> None:
        """Finish the page and write the PDF; the surface is unusable afterwards."""
        self._check_open()
        self.canvas.save()
        self._closed = True


@dataclass(frozen=True)
class DrawCall:
    """One recorded drawing primitive."""
    name: str
    args: Tuple[Any, ...]

    def to_dict(self) -> dict:
        return {"name": self.name, "args": [_jsonable(a) for a in self.args]}


def _jsonable(value: Any) -> Any:
    if isinstance(value, Color):
        return value.hexval()
    if isinstance(value, (str, int, float)) or value is None:
        return value
    return repr(value)


class RecordingSurface:
    """DrawingSurface that records calls instead of drawing.

    Tracks the current fill color, stroke color and line width the same way a
    real canvas would, so recorded sequences can be inspected for state.
    """

    def __init__(self):
        self.calls: List[DrawCall] = []
        self.fill_color: Color = black
        self.stroke_color: Color = black
        self.line_width: float = 1.0

    def _record(self, name: str, *args: Any):
        self.calls.append(DrawCall(name, tuple(args)))

    def set_fill_color(self, color: Color) -> None:
        self.fill_color = color
        self._record("set_fill_color", color)

    def set_stroke_color(self, color: Color) -> None:
        self.stroke_color = color
        self._record("set_stroke_color", color)

    def set_line_width(self, width: float) -> None:
        self.line_width = width
        self._record("set_line_width", width)

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        self._record("fill_rect", x, y, width, height)

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._record("stroke_line", x1, y1, x2, y2)

    def draw_text(
        self, text: str, font_name: str, font_size: float, color: Color, x: float, y: float
    ) -> None:
        self._record("draw_text", text, font_name, font_size, color, x, y)

    def draw_image(self, image: Any, x: float, y: float, width: float, height: float) -> None:
        self._record("draw_image", image, x, y, width, height)

    def calls_named(self, name: str) -> List[DrawCall]:
        return [call for call in self.calls if call.name == name]
