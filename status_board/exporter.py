from datetime import datetime
from pathlib import Path
from uuid import uuid4

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.pdfgen import canvas

from status_board.grid_view import CORRIDOR, build_grid
from status_board.layouts import cell_of_seat, seat_map
from status_board.models import OccupantStatus


STATUS_COLORS = {
    OccupantStatus.ONLINE.value: colors.HexColor("#22c55e"),
    OccupantStatus.NEED_HELP.value: colors.HexColor("#ef4444"),
    OccupantStatus.OFFLINE.value: colors.HexColor("#6b7280"),
}


def seat_rows(config, assignments, students):
    """One record per occupiable seat, joined with the student sitting there."""
    by_seat = {s.seat_number: s for s in students}
    rows = []

    for (grid_row, grid_col), seat_number in sorted(seat_map(config, assignments).items(), key=lambda kv: kv[1]):
        student = by_seat.get(seat_number)
        rows.append({
            "seat_number": seat_number,
            "row": grid_row + 1,
            "column": grid_col + 1,
            "email": student.email if student else "",
            "name": (student.name or "") if student else "",
            "status": student.status if student else OccupantStatus.OFFLINE.value,
        })

    return rows


def export_file_path(export_dir: Path, suffix):
    """Per-request file name so overlapping exports never share a path."""
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    return export_dir / f"seat_map_{stamp}_{uuid4().hex[:8]}.{suffix}"


def export_excel(config, assignments, students, export_dir: Path):
    export_dir.mkdir(parents=True, exist_ok=True)
    file_path = export_file_path(export_dir, "xlsx")

    df = pd.DataFrame(seat_rows(config, assignments, students),
                      columns=["seat_number", "row", "column", "email", "name", "status"])
    df.to_excel(file_path, index=False)

    return file_path


def export_pdf(config, assignments, students, export_dir: Path, title=None):
    export_dir.mkdir(parents=True, exist_ok=True)
    file_path = export_file_path(export_dir, "pdf")
    status_by_seat = {s.seat_number: s.status for s in students}

    c = canvas.Canvas(str(file_path), pagesize=landscape(A4))
    width, height = landscape(A4)

    y = height - 50
    c.setFont("Helvetica-Bold", 14)
    c.drawString(50, y, title or config.display_title)
    y -= 20
    c.setFont("Helvetica", 9)
    c.drawString(50, y, "Front of room")
    y -= 10

    corridor = 8
    gap = 4
    cols = config.seats_per_row + len([col for col in config.corridor_after_cols if col < config.seats_per_row - 1])
    rows = config.total_rows + len([row for row in config.corridor_after_rows if row > 0])
    cell = min(40, (width - 100) / max(cols, 1) - gap, (y - 50) / max(rows, 1) - gap)

    for strip in build_grid(config, assignments, status_by_seat):
        if strip["type"] == CORRIDOR:
            y -= corridor
            continue
        y -= cell + gap
        x = 50
        for entry in strip["cells"]:
            if entry["type"] == CORRIDOR:
                x += corridor
                continue
            if entry["seat_number"] is None:
                c.setStrokeColor(colors.lightgrey)
                c.rect(x, y, cell, cell, stroke=1, fill=0)
            else:
                c.setFillColor(STATUS_COLORS.get(entry["status"], STATUS_COLORS["offline"]))
                c.rect(x, y, cell, cell, stroke=0, fill=1)
                c.setFillColor(colors.white)
                c.drawCentredString(x + cell / 2, y + cell / 2 - 3, str(entry["seat_number"]))
            x += cell + gap

    c.save()

    return file_path


def locate(seat_number, config, assignments):
    """Human-readable 1-based position of a seat, or None."""
    cell = cell_of_seat(seat_number, config, assignments)
    if cell is None:
        return None
    return {"seat_number": seat_number, "row": cell[0] + 1, "column": cell[1] + 1}
