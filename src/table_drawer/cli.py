"""Command-line demo that draws a sample table to a PDF."""

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

import numpy as np
import PIL.Image
from faker import Faker
from reportlab.lib.colors import black
from reportlab.lib.pagesizes import LETTER, landscape
from reportlab.pdfgen import canvas

from .config import DrawerConfig, load_config
from .font_metrics import DEFAULT_METRICS
from .images import open_image
from .surface import CanvasSurface, RecordingSurface
from .table_drawer import TableDrawer
from .table_model import (
    Cell, HorizontalAlignment, Row, Table, VerticalAlignment,
    compute_column_widths, image_cell, make_row, make_table, text_cell,
)
from .table_styles import (
    TableStyle, border_widths_for, get_bold_font, get_table_style, row_background_for,
)


logger = logging.getLogger(__name__)

HEADERS = ["Date", "Description", "Qty", "Amount"]


def _styled_cell(
    cell_text: str,
    style: TableStyle,
    config: DrawerConfig,
    row_index: int,
    col_index: int,
    n_rows: int,
    n_cols: int,
    span: int = 1,
    alignment: HorizontalAlignment = HorizontalAlignment.LEFT,
) -> Cell:
    """Build a text cell carrying the style's borders, fills and fonts for its position."""
    top, right, bottom, left = border_widths_for(style, row_index, col_index, span, n_rows, n_cols)
    is_header = row_index == 0
    font_family = config.font_name or style.font_family

    return text_cell(
        cell_text,
        font_name=get_bold_font(font_family) if is_header else font_family,
        font_size=style.header_font_size if is_header else None,
        line_spacing=config.line_spacing,
        text_color=style.header_text_color if is_header else black,
        span=span,
        padding=style.cell_padding,
        border_width_top=top,
        border_width_right=right,
        border_width_bottom=bottom,
        border_width_left=left,
        border_color=style.grid_color,
        background_color=row_background_for(style, row_index),
        horizontal_alignment=alignment,
        vertical_alignment=VerticalAlignment.MIDDLE,
    )


def build_sample_table(config: DrawerConfig, width: float, rng: np.random.Generator) -> Table:
    """
    Build an invoice-like table: header, generated line items, a total row
    spanning the first three columns, and a footer holding a small image.
    """
    style = get_table_style(config.table_style)
    fake = Faker()
    fake.seed_instance(int(rng.integers(0, 2**31)))

    n_cols = len(HEADERS)
    n_rows = config.rows + 3  # header + items + total + footer
    alignments = [
        HorizontalAlignment.LEFT,
        HorizontalAlignment.LEFT,
        HorizontalAlignment.CENTER,
        HorizontalAlignment.RIGHT,
    ]

    rows: List[Row] = [make_row([
        _styled_cell(header, style, config, 0, col_idx, n_rows, n_cols, alignment=alignments[col_idx])
        for col_idx, header in enumerate(HEADERS)
    ])]

    total = 0.0
    for row_idx in range(1, config.rows + 1):
        qty = int(rng.integers(1, 20))
        amount = float(rng.uniform(5, 500)) * qty
        total += amount
        values = [
            fake.date_this_year().strftime("%m/%d/%y"),
            fake.sentence(nb_words=int(rng.integers(3, 14))).rstrip("."),
            str(qty),
            f"{amount:,.2f}",
        ]
        rows.append(make_row([
            _styled_cell(value, style, config, row_idx, col_idx, n_rows, n_cols, alignment=alignments[col_idx])
            for col_idx, value in enumerate(values)
        ], border_color=config.border_rgb))

    total_idx = config.rows + 1
    rows.append(make_row([
        _styled_cell("TOTAL", style, config, total_idx, 0, n_rows, n_cols, span=3,
                     alignment=HorizontalAlignment.RIGHT),
        _styled_cell(f"{total:,.2f}", style, config, total_idx, 3, n_rows, n_cols,
                     alignment=HorizontalAlignment.RIGHT),
    ], border_color=config.border_rgb))

    swatch_rgb = tuple(int(channel * 255) for channel in style.grid_color.rgb())
    swatch = PIL.Image.new("RGB", (48, 16), color=swatch_rgb)
    top, right, bottom, left = border_widths_for(style, n_rows - 1, 0, n_cols, n_rows, n_cols)
    rows.append(make_row([
        image_cell(
            open_image(swatch),
            span=n_cols,
            padding=style.cell_padding,
            border_width_top=top,
            border_width_right=right,
            border_width_bottom=bottom,
            border_width_left=left,
            border_color=style.grid_color,
        ),
    ], border_color=config.border_rgb))

    return make_table(
        rows,
        compute_column_widths(config.column_ratios, width),
        font_name=config.font_name or style.font_family,
        font_size=config.font_size or style.font_size,
        word_break=config.word_break,
        metrics=DEFAULT_METRICS,
    )


def render_sample(config: DrawerConfig, out_path: Optional[Path], dump_calls: bool = False) -> dict:
    """
    Draw the sample table onto a PDF page, or record the calls when dump_calls is set.

    Returns summary statistics.
    """
    pagesize = landscape(LETTER) if config.orientation == "landscape" else LETTER
    page_width, page_height = pagesize
    width = page_width - 2 * config.margin

    rng = np.random.default_rng(config.seed)
    table = build_sample_table(config, width, rng)
    drawer = TableDrawer(table, DEFAULT_METRICS)

    if dump_calls:
        surface = RecordingSurface()
        drawer.draw(surface, config.margin, page_height - config.margin)
        print(json.dumps([call.to_dict() for call in surface.calls], indent=2))
        n_calls = len(surface.calls)
    else:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        surface = CanvasSurface(canvas.Canvas(str(out_path), pagesize=pagesize))
        drawer.draw(surface, config.margin, page_height - config.margin)
        surface.save()
        n_calls = None
        logger.info("Wrote %s", out_path)

    return {
        "rows": len(table.rows),
        "columns": table.number_of_columns,
        "table_height": table.height,
        "draw_calls": n_calls,
    }


def main(argv: Optional[List[str]] = None):
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Draw a sample table to a PDF page",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=Path("out/table.pdf"),
        help="Output PDF path",
    )
    parser.add_argument(
        "--rows",
        type=int,
        help="Number of line-item rows (overrides config)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed (overrides config)",
    )
    parser.add_argument(
        "--style",
        help="Table style name (overrides config)",
    )
    parser.add_argument(
        "--dump-calls",
        action="store_true",
        help="Print the drawing calls as JSON instead of writing a PDF",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Load config
    config = load_config(args.config)

    # Override with CLI args
    if args.rows is not None:
        config.rows = args.rows
    if args.seed is not None:
        config.seed = args.seed
    if args.style:
        config.table_style = args.style

    stats = render_sample(config, args.out, dump_calls=args.dump_calls)

    if not args.dump_calls:
        print(f"Wrote {args.out}")
        print(f"  Rows: {stats['rows']}")
        print(f"  Columns: {stats['columns']}")
        print(f"  Table height: {stats['table_height']:.1f} pt")

    return stats


if __name__ == "__main__":
    main()
