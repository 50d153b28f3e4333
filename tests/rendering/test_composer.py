"""Tests for the page surface and the builder composer."""
from __future__ import annotations

import pytest

from src.rendering.composer import ERROR_PLACEHOLDER_TEXT, BuildContext, PageComposer
from src.rendering.document import (
    CONTENT_BOTTOM,
    CONTENT_TOP,
    NO_PAGE,
    PageSurface,
    RectOp,
    Style,
    TextOp,
)


def _write(text: str):
    def builder(surface, cursor, context):
        cursor = surface.new_page()
        surface.draw(cursor, TextOp(text, 50, cursor.y, Style()))
        return cursor.moved(20)

    builder.__name__ = f"write_{text}"
    return builder


def _explode(surface, cursor, context):
    raise RuntimeError("kaboom")


@pytest.fixture()
def context(store) -> BuildContext:
    return BuildContext(store=store)


def test_builders_run_in_order(context):
    report = PageComposer([_write("one"), _write("two")]).compose(context)

    assert report.page_count == 2
    assert report.pages[0].texts()[-1] == "one"
    assert report.pages[1].texts()[-1] == "two"


def test_builder_failure_becomes_placeholder(context, caplog):
    report = PageComposer([_write("before"), _explode, _write("after")]).compose(context)

    assert report.page_count == 3
    failed = report.pages[1].texts()
    assert ERROR_PLACEHOLDER_TEXT in failed
    assert any("kaboom" in text for text in failed)
    assert report.pages[2].texts()[-1] == "after"
    assert "_explode" in caplog.text


def test_new_page_draws_header():
    surface = PageSurface()
    cursor = surface.new_page()

    assert cursor.page == 0
    assert cursor.y == CONTENT_TOP
    assert isinstance(surface.page(cursor).ops[0], RectOp)

    bare = surface.new_page(header=False)
    assert surface.page(bare).ops == []


def test_ensure_space_breaks_before_drawing():
    surface = PageSurface()
    cursor = surface.new_page().at(CONTENT_BOTTOM - 10)

    assert surface.ensure_space(cursor, 10) is cursor
    moved = surface.ensure_space(cursor, 11)

    assert moved.page == 1
    assert moved.y == CONTENT_TOP
    # nothing was drawn on the old page past its bottom
    assert all(getattr(op, "y", 0) <= CONTENT_BOTTOM for op in surface.report.pages[0].ops)


def test_ensure_space_without_page_opens_one():
    surface = PageSurface()
    cursor = surface.ensure_space(NO_PAGE, 10)
    assert cursor.page == 0


def test_draw_requires_a_page():
    with pytest.raises(RuntimeError):
        PageSurface().draw(NO_PAGE, TextOp("x", 0, 0))
