"""Layout engine computing cell, text, image and border geometry for a table."""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from reportlab.lib.colors import Color, black

from .font_metrics import FontMetrics, DEFAULT_METRICS
from .table_model import Cell, HorizontalAlignment, Table, VerticalAlignment
from .text_wrap import wrap_text


DEFAULT_BORDER_COLOR = black


@dataclass(frozen=True)
class CellPlacement:
    """Where a cell sits on the page."""
    row_index: int
    col_index: int
    x: float
    y: float  # Bottom of the row, in PDF coordinates
    width: float
    row_height: float
    cell: Cell
    row_border_color: Optional[Color] = None

    @property
    def bbox(self) -> Tuple[float, float, float, float]:
        """Bounding box as (x0, y0, x1, y1)."""
        return (self.x, self.y, self.x + self.width, self.y + self.row_height)


@dataclass(frozen=True)
class TextLinePlacement:
    """One line of text with its baseline origin."""
    text: str
    x: float
    y: float
    width: float


@dataclass(frozen=True)
class ImagePlacement:
    """Lower-left corner and size of an image."""
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class BorderSegment:
    """A single stroked border line."""
    side: str  # "top", "bottom", "left" or "right"
    x1: float
    y1: float
    x2: float
    y2: float
    width: float
    color: Color


def row_border_color(placement: CellPlacement) -> Color:
    """Border color of the cell's row, black when the row sets none."""
    if placement.row_border_color is not None:
        return placement.row_border_color
    return DEFAULT_BORDER_COLOR


def vertical_start_offset(cell: Cell, row_height: float) -> float:
    """
    Offset from the row bottom at which the first line of text starts.

    Alignment only moves text when the cell is shorter than its row.
    """
    offset = row_height - cell.padding_top
    if row_height > cell.height:
        if cell.vertical_alignment == VerticalAlignment.MIDDLE:
            offset = row_height / 2 + (cell.height - cell.padding_bottom - cell.padding_top) / 2
        elif cell.vertical_alignment == VerticalAlignment.BOTTOM:
            offset = cell.height - cell.padding_top
    return offset


def horizontal_offset(cell: Cell, cell_width: float, text_width: float) -> float:
    """Offset from the cell's left edge at which a line of the given width starts."""
    if cell.horizontal_alignment == HorizontalAlignment.RIGHT:
        return cell_width - (text_width + cell.padding_right)
    if cell.horizontal_alignment == HorizontalAlignment.CENTER:
        return (cell_width - text_width) / 2
    return cell.padding_left


class LayoutEngine:
    """Computes geometry for a table drawn with its top-left at an origin."""

    def __init__(
        self,
        table: Table,
        origin_x: float,
        origin_y: float,
        metrics: Optional[FontMetrics] = None,
    ):
        self.table = table
        self.origin_x = origin_x
        self.origin_y = origin_y
        self.metrics = metrics or DEFAULT_METRICS
        self._placements: Optional[List[CellPlacement]] = None

    @property
    def table_start_y(self) -> float:
        """Top of the first row: one default-font line below the origin."""
        return self.origin_y - self.metrics.line_height(self.table.font_name, self.table.font_size)

    def compute_cell_placements(self) -> List[CellPlacement]:
        """
        Compute positions for all cells, top-to-bottom and left-to-right.

        The result is cached; both drawing passes share it.
        """
        if self._placements is not None:
            return self._placements

        placements = []
        y = self.table_start_y

        for row_idx, row in enumerate(self.table.rows):
            x = self.origin_x
            y -= row.height
            column_index = 0

            for cell in row.cells:
                width = self.table.span_width(column_index, cell.span)
                placements.append(CellPlacement(
                    row_index=row_idx,
                    col_index=column_index,
                    x=x,
                    y=y,
                    width=width,
                    row_height=row.height,
                    cell=cell,
                    row_border_color=row.border_color,
                ))
                x += width
                column_index += cell.span

        self._placements = placements
        return placements

    def layout_text(self, placement: CellPlacement) -> List[TextLinePlacement]:
        """Wrap and position every line of a text cell."""
        cell = placement.cell
        text = cell.text
        font_name = text.font_name or self.table.font_name
        font_size = text.font_size or self.table.font_size

        max_width = placement.width - cell.horizontal_padding
        if self.table.word_break:
            lines = wrap_text(text.text, font_name, font_size, max_width, self.metrics)
        else:
            lines = [text.text]

        line_height = self.metrics.line_height(font_name, font_size)
        y = placement.y + vertical_start_offset(cell, placement.row_height)

        result = []
        for i, line in enumerate(lines):
            y -= line_height + (line_height * text.line_spacing if i > 0 else 0.0)
            text_width = self.metrics.string_width(line, font_name, font_size)
            x = placement.x + horizontal_offset(cell, placement.width, text_width)
            result.append(TextLinePlacement(text=line, x=x, y=y, width=text_width))
        return result

    def place_image(self, placement: CellPlacement) -> ImagePlacement:
        """Center the fitted image in the cell's padded box."""
        cell = placement.cell
        fit_width = cell.image.fit_width
        fit_height = cell.image.fit_height

        x = (
            placement.x
            + (placement.width - cell.padding_left - cell.padding_right) / 2
            + cell.padding_left
            - fit_width / 2
        )
        y = (
            placement.y
            + (cell.height - cell.padding_top - cell.padding_bottom) / 2
            + cell.padding_bottom
            - fit_height / 2
        )
        return ImagePlacement(x=x, y=y, width=fit_width, height=fit_height)

    def border_segments(self, placement: CellPlacement) -> List[BorderSegment]:
        """
        Border lines for a cell in top, bottom, left, right order.

        Horizontal lines reach half a vertical border width past each end
        (and vice versa) so corners close without gaps. Sides with zero width
        produce no segment.
        """
        cell = placement.cell
        color = cell.border_color if cell.border_color is not None else row_border_color(placement)
        x0 = placement.x
        x1 = placement.x + placement.width
        y0 = placement.y
        y1 = placement.y + placement.row_height

        segments = []

        correction_left = cell.border_width_left / 2 if cell.has_border_left else 0.0
        correction_right = cell.border_width_right / 2 if cell.has_border_right else 0.0
        if cell.has_border_top:
            segments.append(BorderSegment(
                "top", x0 - correction_left, y1, x1 + correction_right, y1,
                cell.border_width_top, color,
            ))
        if cell.has_border_bottom:
            segments.append(BorderSegment(
                "bottom", x0 - correction_left, y0, x1 + correction_right, y0,
                cell.border_width_bottom, color,
            ))

        correction_top = cell.border_width_top / 2 if cell.has_border_top else 0.0
        correction_bottom = cell.border_width_bottom / 2 if cell.has_border_bottom else 0.0
        if cell.has_border_left:
            segments.append(BorderSegment(
                "left", x0, y0 - correction_bottom, x0, y1 + correction_top,
                cell.border_width_left, color,
            ))
        if cell.has_border_right:
            segments.append(BorderSegment(
                "right", x1, y0 - correction_bottom, x1, y1 + correction_top,
                cell.border_width_right, color,
            ))

        return segments

    def get_table_bbox(self) -> Tuple[float, float, float, float]:
        """Bounding box for the whole table as (x0, y0, x1, y1)."""
        top = self.table_start_y
        return (
            self.origin_x,
            top - self.table.height,
            self.origin_x + self.table.width,
            top,
        )
