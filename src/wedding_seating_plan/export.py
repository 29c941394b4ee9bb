"""CSV and PDF exports of a seating plan."""
from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import IO, Any, Dict, Iterable, List, Sequence, Union
from xml.sax.saxutils import escape

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table as PdfTable, TableStyle

from .models import ROLE_LABELS, DecisionEvent, Table

CSV_COLUMNS = ["Table Number", "Table Name", "Guest", "Role", "Family"]


def plan_rows(tables: Iterable[Table]) -> List[Dict[str, Union[int, str]]]:
    """One row per seated guest, honor table first."""
    rows = []
    for table in sorted(tables, key=lambda t: t.number):
        for g in table.guests:
            rows.append({
                "Table Number": table.number,
                "Table Name": table.name,
                "Guest": g.full_name,
                "Role": ROLE_LABELS.get(g.role, "Guest"),
                "Family": g.last_name or "",
            })
    return rows


def plan_dataframe(tables: Iterable[Table]) -> pd.DataFrame:
    return pd.DataFrame(plan_rows(tables), columns=CSV_COLUMNS)


def write_csv(tables: Iterable[Table], out: Union[Path, str, IO[str]]) -> None:
    """Write the seating plan as CSV to a path or text buffer."""
    if isinstance(out, (str, Path)):
        out = Path(out)
        out.parent.mkdir(parents=True, exist_ok=True)
        with out.open("w", newline="", encoding="utf-8") as f:
            write_csv(tables, f)
        return
    w = csv.DictWriter(out, fieldnames=CSV_COLUMNS)
    w.writeheader()
    w.writerows(plan_rows(tables))


def csv_bytes(tables: Iterable[Table]) -> bytes:
    buf = io.StringIO()
    write_csv(tables, buf)
    return buf.getvalue().encode("utf-8")


def render_pdf(tables: Sequence[Table], title: str = "Seating Chart") -> bytes:
    """Render every table as a small grid on an A4 page flow."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, title=title)
    styles = getSampleStyleSheet()
    story: List[Any] = [Paragraph(escape(title), styles["Title"]), Spacer(1, 12)]

    for table in sorted(tables, key=lambda t: t.number):
        heading = f"{table.name} ({len(table.guests)}/{table.capacity})"
        story.append(Paragraph(escape(heading), styles["Heading2"]))
        data = [["Guest", "Role"]]
        for g in table.guests:
            data.append([g.full_name, ROLE_LABELS.get(g.role, "Guest")])
        grid = PdfTable(data, repeatRows=1, hAlign="LEFT")
        header_bg = colors.lavender if table.is_honor else colors.lightgrey
        grid.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), header_bg),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 10),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ]))
        story.extend([grid, Spacer(1, 12)])

    doc.build(story)
    return buf.getvalue()


def format_trace(events: Iterable[DecisionEvent]) -> str:
    """Plain text rendering of the placement trace."""
    lines = []
    for i, e in enumerate(events, start=1):
        table = f"table {e.table}" if e.table is not None else "no table"
        line = f"{i:4d}. [{e.outcome}] {' + '.join(e.unit)} -> {table}"
        if e.reason:
            line += f" ({e.reason})"
        lines.append(line)
    return "\n".join(lines)
