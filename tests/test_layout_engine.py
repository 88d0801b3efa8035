import pytest
from reportlab.lib.colors import black, blue, red

from table_drawer.layout_engine import (
    LayoutEngine,
    horizontal_offset,
    vertical_start_offset,
)
from table_drawer.table_model import (
    Cell,
    CellKind,
    HorizontalAlignment,
    ImageContent,
    Row,
    Table,
    TextContent,
    VerticalAlignment,
)


#============================================
def make_text_cell(text: str = "Hi", **kwargs) -> Cell:
    """
    Build a resolved text cell directly, bypassing make_table.
    """
    line_spacing = kwargs.pop("line_spacing", 1.0)
    content = TextContent(text=text, font_name="Helvetica", font_size=10, line_spacing=line_spacing)
    return Cell(kind=CellKind.TEXT, text=content, **kwargs)


#============================================
@pytest.mark.parametrize(
    "alignment, expected",
    [
        (VerticalAlignment.TOP, 100),
        (VerticalAlignment.MIDDLE, 70),
        (VerticalAlignment.BOTTOM, 40),
    ],
)
def test_vertical_start_offset(alignment, expected) -> None:
    """
    Row 100, cell 40, no padding: TOP 100, MIDDLE 100/2 + 40/2, BOTTOM 40.
    """
    cell = make_text_cell(height=40, vertical_alignment=alignment)
    assert vertical_start_offset(cell, 100) == expected


#============================================
def test_vertical_alignment_ignored_when_cell_fills_row() -> None:
    """
    A cell as tall as its row always starts at the top.
    """
    cell = make_text_cell(height=30, padding_top=4, vertical_alignment=VerticalAlignment.BOTTOM)
    assert vertical_start_offset(cell, 30) == 26


#============================================
def test_vertical_start_offset_with_padding() -> None:
    """
    MIDDLE and BOTTOM account for padding.
    """
    middle = make_text_cell(
        height=40, padding_top=5, padding_bottom=3, vertical_alignment=VerticalAlignment.MIDDLE
    )
    bottom = make_text_cell(
        height=40, padding_top=5, padding_bottom=3, vertical_alignment=VerticalAlignment.BOTTOM
    )
    assert vertical_start_offset(middle, 100) == 50 + (40 - 3 - 5) / 2
    assert vertical_start_offset(bottom, 100) == 35


#============================================
def test_horizontal_offset() -> None:
    """
    Cell 200 wide, text 50 wide, right padding 10.
    """
    right = make_text_cell(padding_right=10, horizontal_alignment=HorizontalAlignment.RIGHT)
    center = make_text_cell(padding_right=10, horizontal_alignment=HorizontalAlignment.CENTER)
    left = make_text_cell(padding_left=7, horizontal_alignment=HorizontalAlignment.LEFT)

    assert horizontal_offset(right, 200, 50) == 140
    assert horizontal_offset(center, 200, 50) == 75
    assert horizontal_offset(left, 200, 50) == 7


#============================================
def test_cell_placements(metrics) -> None:
    """
    Rows stack downward from one line below the origin; columns advance by span.
    """
    rows = (
        Row(cells=(make_text_cell(span=2), make_text_cell()), height=20),
        Row(cells=(make_text_cell(), make_text_cell(), make_text_cell()), height=30, border_color=red),
    )
    table = Table(rows=rows, column_widths=(100.0, 50.0, 25.0))
    engine = LayoutEngine(table, 10, 500, metrics)

    assert engine.table_start_y == 490
    placements = engine.compute_cell_placements()

    assert [(p.row_index, p.col_index) for p in placements] == [
        (0, 0), (0, 2), (1, 0), (1, 1), (1, 2),
    ]
    assert [p.x for p in placements] == [10, 160, 10, 110, 160]
    assert [p.width for p in placements] == [150, 25, 100, 50, 25]
    assert [p.y for p in placements] == [470, 470, 440, 440, 440]
    assert placements[0].bbox == (10, 470, 160, 490)
    assert placements[3].row_border_color is red

    # Cached
    assert engine.compute_cell_placements() is placements


#============================================
def test_layout_text_lines_and_spacing(metrics) -> None:
    """
    The first line drops one line height, later lines add the spacing too.
    """
    cell = make_text_cell("aaaa bbbb cccc", height=25, line_spacing=0.5)
    table = Table(rows=(Row(cells=(cell,), height=30),), column_widths=(50.0,))
    engine = LayoutEngine(table, 0, 100, metrics)

    placement = engine.compute_cell_placements()[0]
    assert placement.y == 60

    lines = engine.layout_text(placement)
    assert [line.text for line in lines] == ["aaaa bbbb", "cccc"]
    assert [line.y for line in lines] == [80, 65]
    assert [line.x for line in lines] == [0, 0]
    assert [line.width for line in lines] == [45, 20]


#============================================
def test_layout_text_aligns_each_line_independently(metrics) -> None:
    """
    Right alignment uses each line's own measured width.
    """
    cell = make_text_cell(
        "aaaa bbbb cccc",
        height=25,
        padding_right=2,
        horizontal_alignment=HorizontalAlignment.RIGHT,
    )
    table = Table(rows=(Row(cells=(cell,), height=30),), column_widths=(52.0,))
    engine = LayoutEngine(table, 0, 100, metrics)

    lines = engine.layout_text(engine.compute_cell_placements()[0])
    assert [line.x for line in lines] == [52 - (45 + 2), 52 - (20 + 2)]


#============================================
def test_layout_text_without_word_break(metrics) -> None:
    """
    With word break off the raw text is one line, even if it overflows.
    """
    cell = make_text_cell("aaaa bbbb cccc", height=10)
    table = Table(rows=(Row(cells=(cell,), height=10),), column_widths=(20.0,), word_break=False)
    engine = LayoutEngine(table, 0, 100, metrics)

    lines = engine.layout_text(engine.compute_cell_placements()[0])
    assert [line.text for line in lines] == ["aaaa bbbb cccc"]


#============================================
def test_place_image_centers_in_padded_box(metrics) -> None:
    """
    The fitted image is centered inside the cell minus its padding.
    """
    content = ImageContent(image="img", image_width=200, image_height=100, fit_width=80, fit_height=40)
    cell = Cell(kind=CellKind.IMAGE, image=content, height=60, padding_top=10,
                padding_right=10, padding_bottom=10, padding_left=10)
    table = Table(rows=(Row(cells=(cell,), height=60),), column_widths=(100.0,))
    engine = LayoutEngine(table, 0, 200, metrics)

    placement = engine.compute_cell_placements()[0]
    assert placement.y == 130

    image = engine.place_image(placement)
    assert (image.x, image.y, image.width, image.height) == (10, 140, 80, 40)


#============================================
def test_border_segments_extend_by_half_adjoining_width(metrics) -> None:
    """
    With 2 pt borders all round, every segment reaches 1 pt past the corner.
    """
    cell = make_text_cell(
        border_width_top=2, border_width_right=2, border_width_bottom=2, border_width_left=2,
    )
    table = Table(rows=(Row(cells=(cell,), height=20),), column_widths=(100.0,))
    engine = LayoutEngine(table, 50, 110, metrics)

    placement = engine.compute_cell_placements()[0]
    segments = engine.border_segments(placement)

    assert [s.side for s in segments] == ["top", "bottom", "left", "right"]
    top, bottom, left, right = segments
    assert (top.x1, top.y1, top.x2, top.y2) == (49, 100, 151, 100)
    assert (bottom.x1, bottom.y1, bottom.x2, bottom.y2) == (49, 80, 151, 80)
    assert (left.x1, left.y1, left.x2, left.y2) == (50, 79, 50, 101)
    assert (right.x1, right.y1, right.x2, right.y2) == (150, 79, 150, 101)
    assert all(s.width == 2 for s in segments)


#============================================
def test_border_segments_without_adjoining_borders(metrics) -> None:
    """
    Missing perpendicular borders leave the segment at the nominal edge.
    """
    cell = make_text_cell(border_width_top=2, border_width_right=3)
    table = Table(rows=(Row(cells=(cell,), height=20),), column_widths=(100.0,))
    engine = LayoutEngine(table, 0, 110, metrics)

    top, right = engine.border_segments(engine.compute_cell_placements()[0])
    assert (top.side, top.x1, top.x2) == ("top", 0, 101.5)
    assert (right.side, right.y1, right.y2) == ("right", 80, 101)


#============================================
def test_zero_width_borders_produce_no_segments(metrics) -> None:
    """
    A cell without borders has nothing to stroke.
    """
    table = Table(rows=(Row(cells=(make_text_cell(),), height=20),), column_widths=(100.0,))
    engine = LayoutEngine(table, 0, 110, metrics)
    assert engine.border_segments(engine.compute_cell_placements()[0]) == []


#============================================
def test_border_color_fallbacks(metrics) -> None:
    """
    Cell color wins, then the row color, then black.
    """
    rows = (
        Row(cells=(make_text_cell(border_width_top=1, border_color=blue),), height=10, border_color=red),
        Row(cells=(make_text_cell(border_width_top=1),), height=10, border_color=red),
        Row(cells=(make_text_cell(border_width_top=1),), height=10),
    )
    table = Table(rows=rows, column_widths=(100.0,))
    engine = LayoutEngine(table, 0, 110, metrics)

    colors = [engine.border_segments(p)[0].color for p in engine.compute_cell_placements()]
    assert colors == [blue, red, black]


#============================================
def test_table_bbox(metrics) -> None:
    """
    Table box spans the column widths and the summed row heights.
    """
    rows = (
        Row(cells=(make_text_cell(),), height=20),
        Row(cells=(make_text_cell(),), height=15),
    )
    table = Table(rows=rows, column_widths=(80.0,))
    engine = LayoutEngine(table, 30, 300, metrics)
    assert engine.get_table_bbox() == (30, 255, 110, 290)
