"""Draws a laid-out table onto a drawing surface."""

import logging
from typing import Optional

from reportlab.lib.colors import black

from .font_metrics import FontMetrics, DEFAULT_METRICS
from .layout_engine import CellPlacement, LayoutEngine, row_border_color
from .surface import DrawingSurface
from .table_model import CellKind, Table


logger = logging.getLogger(__name__)


class TableDrawer:
    """Renders a table in two passes: backgrounds and content, then borders.

    Borders go last so they always sit on top of cell backgrounds. Errors
    raised by the surface propagate as-is; whatever was drawn before the
    failure stays drawn.
    """

    def __init__(self, table: Table, metrics: Optional[FontMetrics] = None):
        self.table = table
        self.metrics = metrics or DEFAULT_METRICS

    def draw(self, surface: DrawingSurface, origin_x: float, origin_y: float) -> None:
        """Draw the table with its top-left corner at (origin_x, origin_y)."""
        layout = LayoutEngine(self.table, origin_x, origin_y, self.metrics)
        placements = layout.compute_cell_placements()

        logger.debug(
            "Drawing table: %d rows, %d columns, %d cells at (%.2f, %.2f)",
            len(self.table.rows), self.table.number_of_columns, len(placements),
            origin_x, origin_y,
        )

        for placement in placements:
            self._draw_background_and_content(surface, layout, placement)

        logger.debug("Backgrounds and content done, drawing borders")

        for placement in placements:
            self._draw_borders(surface, layout, placement)

    def _draw_background_and_content(
        self,
        surface: DrawingSurface,
        layout: LayoutEngine,
        placement: CellPlacement,
    ):
        cell = placement.cell

        if cell.has_background_color:
            surface.set_fill_color(cell.background_color)
            surface.fill_rect(placement.x, placement.y, placement.width, placement.row_height)
            surface.set_fill_color(black)

        if cell.kind == CellKind.TEXT:
            self._draw_cell_text(surface, layout, placement)
        elif cell.kind == CellKind.IMAGE:
            self._draw_cell_image(surface, layout, placement)

    def _draw_cell_text(self, surface: DrawingSurface, layout: LayoutEngine, placement: CellPlacement):
        text = placement.cell.text
        font_name = text.font_name or self.table.font_name
        font_size = text.font_size or self.table.font_size

        for line in layout.layout_text(placement):
            surface.draw_text(line.text, font_name, font_size, text.text_color, line.x, line.y)

    def _draw_cell_image(self, surface: DrawingSurface, layout: LayoutEngine, placement: CellPlacement):
        image_placement = layout.place_image(placement)
        surface.draw_image(
            placement.cell.image.image,
            image_placement.x,
            image_placement.y,
            image_placement.width,
            image_placement.height,
        )

    def _draw_borders(self, surface: DrawingSurface, layout: LayoutEngine, placement: CellPlacement):
        reset_color = row_border_color(placement)

        for segment in layout.border_segments(placement):
            surface.set_line_width(segment.width)
            surface.set_stroke_color(segment.color)
            surface.stroke_line(segment.x1, segment.y1, segment.x2, segment.y2)
            surface.set_stroke_color(reset_color)


def draw_table(
    surface: DrawingSurface,
    table: Table,
    origin_x: float,
    origin_y: float,
    metrics: Optional[FontMetrics] = None,
) -> None:
    """Draw a table onto a surface with its top-left at the given origin."""
    TableDrawer(table, metrics).draw(surface, origin_x, origin_y)
