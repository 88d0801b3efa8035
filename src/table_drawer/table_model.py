"""Table, row and cell models plus the functions that build them."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from reportlab.lib.colors import Color, black

from .font_metrics import FontMetrics, DEFAULT_METRICS
from .images import compute_fit_size, image_size
from .text_wrap import wrap_text


DEFAULT_FONT_NAME = "Helvetica"
DEFAULT_FONT_SIZE = 10
DEFAULT_LINE_SPACING = 1.0


class HorizontalAlignment(Enum):
    """Horizontal placement of cell content."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VerticalAlignment(Enum):
    """Vertical placement of cell content within its row."""
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class CellKind(Enum):
    """What a cell holds."""
    TEXT = "text"
    IMAGE = "image"


@dataclass(frozen=True)
class TextContent:
    """Text held by a text cell."""
    text: str
    font_name: Optional[str] = None  # None = table default
    font_size: Optional[float] = None  # None = table default
    line_spacing: float = DEFAULT_LINE_SPACING  # Extra gap per line, as a fraction of line height
    text_color: Color = black


@dataclass(frozen=True)
class ImageContent:
    """Image held by an image cell, with its natural and fitted sizes."""
    image: Any
    image_width: float
    image_height: float
    scale: float = 1.0
    fit_width: float = 0.0
    fit_height: float = 0.0


@dataclass(frozen=True)
class Cell:
    """One table cell: shared layout attributes plus text or image content."""
    kind: CellKind
    span: int = 1
    height: float = 0.0  # Content height + vertical padding, filled in by make_table
    padding_top: float = 0.0
    padding_right: float = 0.0
    padding_bottom: float = 0.0
    padding_left: float = 0.0
    background_color: Optional[Color] = None
    border_color: Optional[Color] = None  # None = row border color
    border_width_top: float = 0.0
    border_width_right: float = 0.0
    border_width_bottom: float = 0.0
    border_width_left: float = 0.0
    horizontal_alignment: HorizontalAlignment = HorizontalAlignment.LEFT
    vertical_alignment: VerticalAlignment = VerticalAlignment.TOP
    text: Optional[TextContent] = None
    image: Optional[ImageContent] = None

    @property
    def has_background_color(self) -> bool:
        return self.background_color is not None

    @property
    def has_border_top(self) -> bool:
        return self.border_width_top > 0

    @property
    def has_border_right(self) -> bool:
        return self.border_width_right > 0

    @property
    def has_border_bottom(self) -> bool:
        return self.border_width_bottom > 0

    @property
    def has_border_left(self) -> bool:
        return self.border_width_left > 0

    @property
    def horizontal_padding(self) -> float:
        return self.padding_left + self.padding_right

    @property
    def vertical_padding(self) -> float:
        return self.padding_top + self.padding_bottom


@dataclass(frozen=True)
class Row:
    """An ordered run of cells sharing one height."""
    cells: Tuple[Cell, ...]
    height: float = 0.0
    border_color: Optional[Color] = None


@dataclass(frozen=True)
class Table:
    """Rows plus the column widths they are laid out against."""
    rows: Tuple[Row, ...]
    column_widths: Tuple[float, ...]
    font_name: str = DEFAULT_FONT_NAME
    font_size: float = DEFAULT_FONT_SIZE
    word_break: bool = True

    @property
    def number_of_columns(self) -> int:
        return len(self.column_widths)

    @property
    def width(self) -> float:
        return sum(self.column_widths)

    @property
    def height(self) -> float:
        return sum(row.height for row in self.rows)

    def span_width(self, column_index: int, span: int) -> float:
        """Width available to a cell starting at column_index and covering span columns."""
        return sum(self.column_widths[column_index:column_index + span])


def compute_column_widths(ratios: Sequence[float], total_width: float) -> List[float]:
    """
    Compute absolute column widths from proportional weights.

    Weights need not sum to 1.0; they are normalized. The last column takes
    whatever is left so the widths add up to total_width exactly.
    """
    total_ratio = sum(ratios)
    if not ratios or total_ratio <= 0:
        raise ValueError(f"Column ratios must sum to a positive number, got {list(ratios)}")

    widths = [ratio / total_ratio * total_width for ratio in ratios]
    widths[-1] = total_width - sum(widths[:-1])
    return widths


def _layout_fields(
    span: int = 1,
    padding: Optional[float] = None,
    padding_top: float = 0.0,
    padding_right: float = 0.0,
    padding_bottom: float = 0.0,
    padding_left: float = 0.0,
    border_width: Optional[float] = None,
    border_width_top: float = 0.0,
    border_width_right: float = 0.0,
    border_width_bottom: float = 0.0,
    border_width_left: float = 0.0,
    background_color: Optional[Color] = None,
    border_color: Optional[Color] = None,
    horizontal_alignment: HorizontalAlignment = HorizontalAlignment.LEFT,
    vertical_alignment: VerticalAlignment = VerticalAlignment.TOP,
) -> Dict[str, Any]:
    """Expand the padding/border_width shorthands and validate the result."""
    if padding is not None:
        padding_top = padding_right = padding_bottom = padding_left = padding
    if border_width is not None:
        border_width_top = border_width_right = border_width_bottom = border_width_left = border_width

    fields = {
        "span": span,
        "padding_top": padding_top,
        "padding_right": padding_right,
        "padding_bottom": padding_bottom,
        "padding_left": padding_left,
        "border_width_top": border_width_top,
        "border_width_right": border_width_right,
        "border_width_bottom": border_width_bottom,
        "border_width_left": border_width_left,
        "background_color": background_color,
        "border_color": border_color,
        "horizontal_alignment": horizontal_alignment,
        "vertical_alignment": vertical_alignment,
    }

    if span < 1:
        raise ValueError(f"Cell span must be at least 1, got {span}")
    for name, value in fields.items():
        if name.startswith(("padding_", "border_width_")) and value < 0:
            raise ValueError(f"Cell {name} must not be negative, got {value}")

    return fields


def text_cell(
    text: str,
    font_name: Optional[str] = None,
    font_size: Optional[float] = None,
    line_spacing: float = DEFAULT_LINE_SPACING,
    text_color: Color = black,
    **layout,
) -> Cell:
    """
    Build a text cell.

    Layout keywords are the Cell fields (span, padding_*, border_width_*,
    colors, alignments) plus the shorthands ``padding`` and ``border_width``
    which set all four sides at once. Height is derived later by make_table.
    """
    content = TextContent(
        text=text,
        font_name=font_name,
        font_size=font_size,
        line_spacing=line_spacing,
        text_color=text_color,
    )
    return Cell(kind=CellKind.TEXT, text=content, **_layout_fields(**layout))


def image_cell(
    image: Any,
    scale: float = 1.0,
    image_width: Optional[float] = None,
    image_height: Optional[float] = None,
    **layout,
) -> Cell:
    """
    Build an image cell.

    The natural image size is read from the ImageReader unless given. The fit
    size is derived later by make_table once the cell width is known.
    """
    if image_width is None or image_height is None:
        image_width, image_height = image_size(image)

    content = ImageContent(
        image=image,
        image_width=image_width,
        image_height=image_height,
        scale=scale,
    )
    return Cell(kind=CellKind.IMAGE, image=content, **_layout_fields(**layout))


def make_row(
    cells: Sequence[Cell],
    height: float = 0.0,
    border_color: Optional[Color] = None,
) -> Row:
    """Build a row; its height is raised to the tallest cell by make_table."""
    return Row(cells=tuple(cells), height=height, border_color=border_color)


def text_height(
    text: TextContent,
    max_width: float,
    word_break: bool,
    metrics: FontMetrics,
) -> float:
    """Height of the laid-out text, excluding padding."""
    if word_break:
        lines = wrap_text(text.text, text.font_name, text.font_size, max_width, metrics)
    else:
        lines = [text.text]

    line_height = metrics.line_height(text.font_name, text.font_size)
    return len(lines) * line_height + (len(lines) - 1) * line_height * text.line_spacing


def _resolve_cell(
    cell: Cell,
    cell_width: float,
    font_name: str,
    font_size: float,
    word_break: bool,
    metrics: FontMetrics,
) -> Cell:
    """Fill in table-level font defaults and derive the cell height."""
    max_width = cell_width - cell.horizontal_padding

    if cell.kind == CellKind.TEXT:
        content = replace(
            cell.text,
            font_name=cell.text.font_name or font_name,
            font_size=cell.text.font_size or font_size,
        )
        height = text_height(content, max_width, word_break, metrics) + cell.vertical_padding
        return replace(cell, text=content, height=height)

    if cell.kind == CellKind.IMAGE:
        fit_width, fit_height = compute_fit_size(
            cell.image.image_width,
            cell.image.image_height,
            max_width,
            scale=cell.image.scale,
        )
        content = replace(cell.image, fit_width=fit_width, fit_height=fit_height)
        return replace(cell, image=content, height=fit_height + cell.vertical_padding)

    raise ValueError(f"Unknown cell kind: {cell.kind}")


def make_table(
    rows: Sequence[Row],
    column_widths: Sequence[float],
    font_name: str = DEFAULT_FONT_NAME,
    font_size: float = DEFAULT_FONT_SIZE,
    word_break: bool = True,
    metrics: Optional[FontMetrics] = None,
) -> Table:
    """
    Build a fully resolved table.

    Every cell gets the table font where it sets none, and its height is
    derived from its content at its spanned width. Each row's height becomes
    the larger of its requested height and its tallest cell.

    Raises:
        ValueError: If a row's spans do not add up to the column count.
    """
    metrics = metrics or DEFAULT_METRICS
    column_widths = tuple(column_widths)
    n_cols = len(column_widths)

    resolved_rows = []
    for row_idx, row in enumerate(rows):
        total_span = sum(cell.span for cell in row.cells)
        if total_span != n_cols:
            raise ValueError(
                f"Row {row_idx} spans {total_span} columns, table has {n_cols}"
            )

        cells = []
        column_index = 0
        for cell in row.cells:
            cell_width = sum(column_widths[column_index:column_index + cell.span])
            cells.append(_resolve_cell(cell, cell_width, font_name, font_size, word_break, metrics))
            column_index += cell.span

        tallest = max((cell.height for cell in cells), default=0.0)
        resolved_rows.append(replace(row, cells=tuple(cells), height=max(row.height, tallest)))

    return Table(
        rows=tuple(resolved_rows),
        column_widths=column_widths,
        font_name=font_name,
        font_size=font_size,
        word_break=word_break,
    )
