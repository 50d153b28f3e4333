"""Serialize a :class:`Report` to PDF bytes with reportlab."""
from __future__ import annotations

import io
import logging

from reportlab.lib import colors
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from src.rendering.document import (
    PAGE_HEIGHT,
    PAGE_WIDTH,
    Align,
    DrawOp,
    ImageOp,
    LineOp,
    Paint,
    PathOp,
    RectOp,
    Report,
    TextOp,
)

logger = logging.getLogger(__name__)


def _flip(y: float) -> float:
    """Top-left document y to reportlab's bottom-left y."""
    return PAGE_HEIGHT - y


def _apply_paint(pdf: canvas.Canvas, paint: Paint) -> None:
    if paint.fill:
        pdf.setFillColor(colors.HexColor(paint.fill))
    if paint.stroke:
        pdf.setStrokeColor(colors.HexColor(paint.stroke))
    pdf.setLineWidth(paint.line_width)
    if paint.dash:
        pdf.setDash(list(paint.dash))


def _draw_text(pdf: canvas.Canvas, op: TextOp) -> None:
    style = op.style
    pdf.setFont(style.font, style.size)
    pdf.setFillColor(colors.HexColor(style.color))
    if op.rotation:
        pdf.translate(op.x, _flip(op.y))
        pdf.rotate(op.rotation)
        pdf.drawCentredString(0, -style.size * 0.35, op.text)
        return

    baseline = _flip(op.y + pdfmetrics.getAscent(style.font, style.size))
    if op.width is not None and style.align is Align.CENTER:
        pdf.drawCentredString(op.x + op.width / 2, baseline, op.text)
    elif op.width is not None and style.align is Align.RIGHT:
        pdf.drawRightString(op.x + op.width, baseline, op.text)
    else:
        pdf.drawString(op.x, baseline, op.text)


def _draw_op(pdf: canvas.Canvas, op: DrawOp) -> None:
    pdf.saveState()
    try:
        if isinstance(op, TextOp):
            _draw_text(pdf, op)
        elif isinstance(op, RectOp):
            _apply_paint(pdf, op.paint)
            pdf.rect(
                op.x,
                _flip(op.y + op.height),
                op.width,
                op.height,
                stroke=int(bool(op.paint.stroke)),
                fill=int(bool(op.paint.fill)),
            )
        elif isinstance(op, LineOp):
            _apply_paint(pdf, op.paint)
            pdf.line(op.x1, _flip(op.y1), op.x2, _flip(op.y2))
        elif isinstance(op, PathOp):
            _apply_paint(pdf, op.paint)
            path = pdf.beginPath()
            first, *rest = op.points
            path.moveTo(first[0], _flip(first[1]))
            for x, y in rest:
                path.lineTo(x, _flip(y))
            if op.closed:
                path.close()
            pdf.drawPath(
                path,
                stroke=int(bool(op.paint.stroke)),
                fill=int(bool(op.paint.fill) and op.closed),
            )
        elif isinstance(op, ImageOp):
            pdf.drawImage(
                op.source,
                op.x,
                _flip(op.y + op.height),
                width=op.width,
                height=op.height,
                preserveAspectRatio=True,
                mask="auto",
            )
        else:  # pragma: no cover
            raise TypeError(f"Unsupported draw operation: {type(op).__name__}")
    finally:
        pdf.restoreState()


def write_pdf(report: Report) -> bytes:
    """Return the PDF document for *report* (A4, one PDF page per page)."""
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=(PAGE_WIDTH, PAGE_HEIGHT))
    if report.title:
        pdf.setTitle(report.title)

    for page in report.pages:
        for op in page.ops:
            _draw_op(pdf, op)
        pdf.showPage()
    pdf.save()

    data = buffer.getvalue()
    logger.debug("Wrote PDF: %d pages, %d bytes", report.page_count, len(data))
    return data
