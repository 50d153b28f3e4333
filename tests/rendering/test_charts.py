"""Tests for turning chart layouts into draw operations."""
from __future__ import annotations

from src.reporting.demographics import NO_DATA_LABEL
from src.reporting.models import ChartDatum, FrequencyResult
from src.rendering.charts import (
    PLACEHOLDER_FILL,
    draw_horizontal_bars,
    draw_pie,
    draw_stacked_bar,
    text_color_for,
)
from src.rendering.document import PageSurface, PathOp, RectOp
from src.rendering.geometry import NO_DATA_TEXT, NO_INFORMATION_TEXT, Box, frequency_bar_layout


def _surface():
    surface = PageSurface()
    return surface, surface.new_page(header=False)


def test_text_color_for_background():
    assert text_color_for("#FFC000") == "#000000"
    assert text_color_for("#1E3A8A") == "#FFFFFF"


def test_pie_draws_one_path_per_segment():
    surface, cursor = _surface()
    data = [ChartDatum("A", 2, "#4472C4"), ChartDatum("B", 1, "#ED7D31")]

    draw_pie(surface, cursor, data, (200, 200), 50, "Jornada")

    ops = surface.page(cursor).ops
    assert sum(isinstance(op, PathOp) for op in ops) == 2
    texts = surface.page(cursor).texts()
    assert {"Jornada", "67%", "33%", "A", "B"} <= set(texts)


def test_pie_zero_total_draws_single_message():
    surface, cursor = _surface()

    layout = draw_pie(surface, cursor, [ChartDatum("A", 0, "#000000")], (200, 200), 50, "T")

    assert layout.is_placeholder
    assert surface.page(cursor).texts() == ["T", NO_DATA_TEXT]


def test_pie_message_datum_is_not_charted():
    surface, cursor = _surface()

    draw_pie(surface, cursor, [ChartDatum(NO_DATA_LABEL, 1, "#CCCCCC")], (200, 200), 50, "T")

    assert not any(isinstance(op, PathOp) for op in surface.page(cursor).ops)
    assert NO_DATA_LABEL in surface.page(cursor).texts()


def test_zero_bar_keeps_a_hairline():
    surface, cursor = _surface()
    data = [ChartDatum("1 año", 0, "#ED7D31"), ChartDatum("2 años", 4, "#A5A5A5")]

    draw_horizontal_bars(surface, cursor, data, Box(0, 0, 300, 150), "Años")

    bars = [op for op in surface.page(cursor).ops if isinstance(op, RectOp)]
    assert bars[0].width == 1.0
    assert "4" in surface.page(cursor).texts()


def test_stacked_placeholder():
    surface, cursor = _surface()

    draw_stacked_bar(surface, cursor, frequency_bar_layout(FrequencyResult.no_data(), Box(0, 0, 200, 20)))

    ops = surface.page(cursor).ops
    assert ops[0].paint.fill == PLACEHOLDER_FILL
    assert surface.page(cursor).texts() == [NO_INFORMATION_TEXT]
