"""Unit tests for rendering.geometry (no PDF backend involved)."""
from __future__ import annotations

import math

import pytest

from src.reporting.models import ChartDatum, FrequencyResult
from src.rendering.geometry import (
    BAR_LABEL_MARGIN,
    BAR_LABEL_MARGIN_WIDE,
    NO_DATA_TEXT,
    NO_INFORMATION_TEXT,
    Box,
    LegendSpec,
    frequency_bar_layout,
    horizontal_bar_layout,
    legend_grid,
    pie_layout,
    stacked_bar_layout,
)


def _data(*values):
    return [ChartDatum(f"L{i}", v, "#000000") for i, v in enumerate(values)]


def _chars(text: str) -> float:
    """Deterministic measure: 5 pt per character."""
    return 5.0 * len(text)


# ---------------------------------------------------------------------------
# Pie
# ---------------------------------------------------------------------------


def test_pie_zero_total_is_placeholder():
    layout = pie_layout(_data(0, 0, 0), (100, 100), 50)

    assert layout.is_placeholder
    assert layout.segments == ()
    assert [label.text for label in layout.labels] == [NO_DATA_TEXT]


def test_pie_segments_cover_full_circle():
    layout = pie_layout(_data(1, 2, 1), (100, 100), 50)

    assert layout.segments[0].start_angle == 0
    assert layout.segments[-1].end_angle == pytest.approx(2 * math.pi)
    assert [s.sweep for s in layout.segments] == pytest.approx([math.pi / 2, math.pi, math.pi / 2])
    # closed path: centre → arc → centre
    first = layout.segments[0].points
    assert first[0] == first[-1] == (100, 100)


def test_pie_labels_only_above_threshold():
    layout = pie_layout(_data(96, 4, 0), (0, 0), 40)

    assert [label.text for label in layout.labels] == ["96%"]
    # zero values produce no segment
    assert len(layout.segments) == 2


def test_pie_label_position_on_bisector():
    layout = pie_layout(_data(1), (0, 0), 100)
    label = layout.labels[0]
    # a single full segment bisects at π
    assert (label.x, label.y) == pytest.approx((-65.0, 0.0), abs=1e-6)


def test_pie_legend_placements():
    data = _data(1, 1, 1, 1, 1)
    right = pie_layout(data, (100, 100), 50, LegendSpec.right()).legend
    below = pie_layout(data, (100, 100), 50, LegendSpec.below()).legend
    rows = pie_layout(data, (100, 100), 50, LegendSpec.below_rows(2)).legend

    assert {e.box.x for e in right} == {170}
    assert len({e.box.y for e in right}) == 5
    assert {e.box.y for e in below} == {160}
    assert len({e.box.y for e in rows}) == 2


def test_legend_grid_distributes_evenly():
    entries = legend_grid(_data(1, 1, 1, 1, 1), (0, 0), 2)
    per_row = [sum(1 for e in entries if e.box.y == y) for y in sorted({e.box.y for e in entries})]
    assert per_row == [3, 2]


def test_legend_needs_a_row():
    with pytest.raises(ValueError):
        LegendSpec.below_rows(0)


# ---------------------------------------------------------------------------
# Horizontal bars
# ---------------------------------------------------------------------------


def test_max_bar_spans_plot_width():
    layout = horizontal_bar_layout(_data(3, 12, 6), Box(0, 0, 300, 200), measure=_chars)

    lengths = [bar.length for bar in layout.bars]
    assert max(lengths) == pytest.approx(layout.plot_width)
    assert lengths[0] == pytest.approx(layout.plot_width / 4)


def test_all_zero_bars_have_zero_length():
    layout = horizontal_bar_layout(_data(0, 0), Box(0, 0, 300, 200), measure=_chars)
    assert [bar.length for bar in layout.bars] == [0, 0]


def test_bar_thickness_is_capped():
    few = horizontal_bar_layout(_data(1, 2), Box(0, 0, 300, 200), measure=_chars)
    many = horizontal_bar_layout(_data(*range(1, 13)), Box(0, 0, 300, 200), measure=_chars)

    assert few.bars[0].thickness == 15
    plot_h = 200 - 35 - 30
    assert many.bars[0].thickness == pytest.approx((plot_h - 11 * 5) / 12)


def test_wide_labels_widen_margin():
    short = horizontal_bar_layout(_data(1), Box(0, 0, 300, 200), measure=_chars)
    wide = horizontal_bar_layout(
        [ChartDatum("Otros docentes", 1, "#000")], Box(0, 0, 300, 200), measure=_chars
    )

    assert short.plot.x == BAR_LABEL_MARGIN
    assert wide.plot.x == BAR_LABEL_MARGIN_WIDE


# ---------------------------------------------------------------------------
# Stacked bars
# ---------------------------------------------------------------------------


def test_stacked_all_zero_is_placeholder():
    layout = stacked_bar_layout(_data(0, 0), Box(0, 0, 200, 20), measure=_chars)

    assert layout.is_placeholder
    assert layout.placeholder.text == NO_INFORMATION_TEXT


def test_stacked_segments_are_contiguous():
    box = Box(10, 0, 200, 20)
    layout = stacked_bar_layout(_data(1, 3), box, measure=_chars)

    first, second = layout.segments
    assert first.x == 10
    assert second.x == pytest.approx(first.x + first.width)
    assert second.x + second.width == pytest.approx(box.right)
    assert second.label.text == "75%"


def test_frequency_bar_layout():
    layout = frequency_bar_layout(FrequencyResult(70, 27, 3), Box(0, 0, 400, 20), measure=_chars)

    widths = [s.width for s in layout.segments]
    assert widths == pytest.approx([280, 108, 12])
    # "3%" is 10 pt wide and fits; labels show the values as given
    assert [s.label.text for s in layout.segments] == ["70%", "27%", "3%"]
    assert [s.datum.color for s in layout.segments] == ["#4472C4", "#FFC000", "#FF0000"]


def test_frequency_bar_skips_label_when_too_narrow():
    layout = frequency_bar_layout(FrequencyResult(98, 2, 0), Box(0, 0, 200, 20), measure=_chars)
    assert [s.label for s in layout.segments][1:] == [None, None]


@pytest.mark.parametrize("result", [FrequencyResult.no_data(), FrequencyResult.zero()])
def test_frequency_bar_placeholder(result):
    assert frequency_bar_layout(result, Box(0, 0, 200, 20)).is_placeholder
