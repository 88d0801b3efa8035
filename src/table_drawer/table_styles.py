"""Named visual style profiles for tables."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple
from reportlab.lib.colors import Color, black, gray, white, HexColor


class GridStyle(Enum):
    """Which cell borders a style draws."""
    FULL_GRID = "full_grid"           # All horizontal + vertical lines
    HORIZONTAL_ONLY = "horizontal"     # Only horizontal lines
    MINIMAL = "minimal"                # Table top, header separator, table bottom
    ALTERNATING_ROWS = "alternating"   # Zebra striping, no vertical lines
    BOX_BORDERS = "box_borders"        # Outer border + header separator


@dataclass
class TableStyle:
    """Visual style profile applied when building a table."""
    name: str
    font_family: str  # Base font name (Helvetica, Times-Roman, Courier)
    font_size: int
    header_font_size: int
    grid_style: GridStyle
    grid_line_width: float
    grid_color: Color
    header_bg_color: Optional[Color]
    header_text_color: Color
    alternating_row_color: Optional[Color]  # Used when grid_style is ALTERNATING_ROWS
    cell_padding: float


TABLE_STYLES: Dict[str, TableStyle] = {
    "LEDGER": TableStyle(
        name="LEDGER",
        font_family="Courier",
        font_size=8,
        header_font_size=9,
        grid_style=GridStyle.FULL_GRID,
        grid_line_width=0.75,
        grid_color=black,
        header_bg_color=HexColor("#D0D0D0"),
        header_text_color=black,
        alternating_row_color=None,
        cell_padding=2.0,
    ),
    "CLEAN": TableStyle(
        name="CLEAN",
        font_family="Helvetica",
        font_size=9,
        header_font_size=10,
        grid_style=GridStyle.HORIZONTAL_ONLY,
        grid_line_width=0.5,
        grid_color=gray,
        header_bg_color=HexColor("#E8E8E8"),
        header_text_color=black,
        alternating_row_color=None,
        cell_padding=3.0,
    ),
    "BOXED": TableStyle(
        name="BOXED",
        font_family="Times-Roman",
        font_size=9,
        header_font_size=10,
        grid_style=GridStyle.BOX_BORDERS,
        grid_line_width=1.0,
        grid_color=black,
        header_bg_color=HexColor("#F0F0F0"),
        header_text_color=black,
        alternating_row_color=None,
        cell_padding=3.0,
    ),
    "STRIPED": TableStyle(
        name="STRIPED",
        font_family="Helvetica",
        font_size=9,
        header_font_size=10,
        grid_style=GridStyle.ALTERNATING_ROWS,
        grid_line_width=0.5,
        grid_color=gray,
        header_bg_color=HexColor("#2C5282"),  # Dark blue
        header_text_color=white,
        alternating_row_color=HexColor("#F0F4F8"),
        cell_padding=4.0,
    ),
    "MINIMAL": TableStyle(
        name="MINIMAL",
        font_family="Helvetica",
        font_size=9,
        header_font_size=10,
        grid_style=GridStyle.MINIMAL,
        grid_line_width=0.5,
        grid_color=HexColor("#CCCCCC"),
        header_bg_color=None,
        header_text_color=black,
        alternating_row_color=None,
        cell_padding=3.0,
    ),
}


def get_table_style(style_name: str) -> TableStyle:
    """Get a table style by name (case-insensitive)."""
    key = style_name.upper()
    if key not in TABLE_STYLES:
        raise ValueError(
            f"Unknown table style: {style_name}, expected one of {sorted(TABLE_STYLES)}"
        )
    return TABLE_STYLES[key]


def get_bold_font(font_family: str) -> str:
    """Get the bold variant of a font family."""
    if font_family == "Times-Roman":
        return "Times-Bold"
    elif font_family == "Courier":
        return "Courier-Bold"
    else:
        return f"{font_family}-Bold"


def border_widths_for(
    style: TableStyle,
    row_index: int,
    col_index: int,
    span: int,
    n_rows: int,
    n_cols: int,
) -> Tuple[float, float, float, float]:
    """
    Border widths (top, right, bottom, left) for a cell at a grid position.

    Row 0 is the header row. Each shared edge is owned by exactly one cell:
    horizontal lines by the cell below them (plus the last row's bottom),
    vertical lines by the cell to their right (plus the last column's right).
    """
    w = style.grid_line_width
    first_row = row_index == 0
    last_row = row_index == n_rows - 1
    first_col = col_index == 0
    last_col = col_index + span >= n_cols

    if style.grid_style == GridStyle.FULL_GRID:
        return (w, w if last_col else 0.0, w if last_row else 0.0, w)

    if style.grid_style in (GridStyle.HORIZONTAL_ONLY, GridStyle.ALTERNATING_ROWS):
        return (w, 0.0, w if last_row else 0.0, 0.0)

    if style.grid_style == GridStyle.MINIMAL:
        top = w if first_row or row_index == 1 else 0.0
        return (top, 0.0, w if last_row else 0.0, 0.0)

    # BOX_BORDERS: outer frame plus header separator
    top = w if first_row or row_index == 1 else 0.0
    return (
        top,
        w if last_col else 0.0,
        w if last_row else 0.0,
        w if first_col else 0.0,
    )


def row_background_for(style: TableStyle, row_index: int) -> Optional[Color]:
    """Background fill for a row: header color for row 0, zebra stripes for striped styles."""
    if row_index == 0:
        return style.header_bg_color
    if style.grid_style == GridStyle.ALTERNATING_ROWS and row_index % 2 == 0:
        return style.alternating_row_color
    return None
