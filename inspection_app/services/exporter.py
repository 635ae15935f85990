from __future__ import annotations

import io
import json
from typing import Any, Dict, List

import pandas as pd
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas as rl_canvas

from inspection_app.core.settings import Settings

CSV_MEDIA_TYPE = "text/csv"
PDF_MEDIA_TYPE = "application/pdf"

MARGIN = 10 * mm
TITLE_FONT = ("Helvetica-Bold", 14)
BODY_FONT = ("Courier", 9)
LINE_HEIGHT = 11


def _records(data: Any) -> List[Dict[str, Any]]:
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list) and all(isinstance(r, dict) for r in data):
        return data
    raise ValueError("Data to export as CSV must be an object or a list of objects")


def _cell(value: Any) -> Any:
    # nested values and booleans are written as JSON literals
    if isinstance(value, (dict, list, bool)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return value


def to_csv(data: Any) -> str:
    """Records → CSV text, columns in order of first appearance."""
    records = _records(data)

    columns: List[str] = []
    for r in records:
        for k in r:
            if k not in columns:
                columns.append(k)

    df = pd.DataFrame(
        [[_cell(r.get(k)) for k in columns] for r in records],
        columns=columns,
        dtype=object,
    )
    return df.to_csv(index=False, lineterminator="\n")


def to_pdf(data: Any, title: str) -> bytes:
    """
    Render a title line and the pretty-printed JSON of ``data``.

    Long lines are wrapped to the page width and the text flows onto new pages.
    Invariant mode keeps the output byte-identical for identical input.
    """
    buf = io.BytesIO()
    page_width, page_height = A4
    c = rl_canvas.Canvas(buf, pagesize=A4, invariant=1)
    c.setTitle(title)

    y = page_height - MARGIN
    c.setFont(*TITLE_FONT)
    c.drawString(MARGIN, y, title)
    y -= 2 * LINE_HEIGHT

    c.setFont(*BODY_FONT)
    # body font is monospaced, so wrapping by character count keeps indentation
    max_chars = max(1, int((page_width - 2 * MARGIN) / stringWidth("M", *BODY_FONT)))
    body = json.dumps(data, indent=2, ensure_ascii=False)

    for source_line in body.split("\n"):
        chunks = [source_line[i:i + max_chars] for i in range(0, len(source_line), max_chars)]
        for line in chunks or [""]:
            if y < MARGIN:
                c.showPage()
                c.setFont(*BODY_FONT)
                y = page_height - MARGIN
            c.drawString(MARGIN, y, line)
            y -= LINE_HEIGHT

    c.showPage()
    c.save()
    return buf.getvalue()


class ReportExporter:
    def __init__(self, settings: Settings):
        self.settings = settings

    def export(self, data: Any, export_type: str):
        """Return ``(body, media_type, filename)`` for a supported export type."""
        if export_type == "csv":
            return to_csv(data), CSV_MEDIA_TYPE, "report.csv"
        if export_type == "pdf":
            return to_pdf(data, self.settings.report_title), PDF_MEDIA_TYPE, "report.pdf"
        raise ValueError(f"Unsupported export type: {export_type}")
