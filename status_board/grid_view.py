"""Display grid built from a room snapshot.

Rows come out top to bottom of the screen, i.e. from ``total_rows - 1`` down
to 0. A corridor after row ``r`` sits between the row ``r`` strip and the row
``r - 1`` strip; a corridor after column ``c`` sits between columns ``c`` and
``c + 1`` in every strip.
"""

from status_board.layouts import (
    col_corridor_after,
    row_corridor_after,
    seat_map,
    total_occupiable_seats,
)
from status_board.models import OccupantStatus, RoomConfig


CORRIDOR = "corridor"
ROW = "row"
SEAT = "seat"


def build_grid(config: RoomConfig, assignments=(), status_by_seat=None):
    status_by_seat = status_by_seat or {}
    seats = seat_map(config, assignments)
    strips = []

    for display_row in range(config.total_rows - 1, -1, -1):
        cells = []
        for col in range(config.seats_per_row):
            seat_number = seats.get((display_row, col))
            cells.append({
                "type": SEAT,
                "row": display_row,
                "col": col,
                "seat_number": seat_number,
                "status": status_by_seat.get(seat_number, OccupantStatus.OFFLINE.value) if seat_number else None,
            })
            if col < config.seats_per_row - 1 and col_corridor_after(col, config):
                cells.append({"type": CORRIDOR})

        strips.append({"type": ROW, "row": display_row, "cells": cells})

        if display_row > 0 and row_corridor_after(display_row, config):
            strips.append({"type": CORRIDOR})

    return strips


def status_counts(config: RoomConfig, assignments, statuses):
    """Ready / need-help / absent numbers for the summary bar."""
    statuses = list(statuses)
    online = sum(1 for s in statuses if s == OccupantStatus.ONLINE.value)
    need_help = sum(1 for s in statuses if s == OccupantStatus.NEED_HELP.value)
    total = total_occupiable_seats(config, assignments)

    return {
        "total": total,
        "online": online,
        "need_help": need_help,
        "absent": max(0, total - online - need_help),
    }


def render_text(config: RoomConfig, assignments=(), status_by_seat=None):
    """Plain-text grid, used by the CLI demo."""
    marks = {
        OccupantStatus.ONLINE.value: "+",
        OccupantStatus.NEED_HELP.value: "!",
        OccupantStatus.OFFLINE.value: " ",
    }
    width = len(str(max(config.grid_size, 1))) + 1
    lines = []

    for strip in build_grid(config, assignments, status_by_seat):
        if strip["type"] == CORRIDOR:
            lines.append("")
            continue
        parts = []
        for cell in strip["cells"]:
            if cell["type"] == CORRIDOR:
                parts.append(" |")
            elif cell["seat_number"] is None:
                parts.append("-".rjust(width + 1))
            else:
                parts.append(f"{cell['seat_number']:>{width}}{marks.get(cell['status'], ' ')}")
        lines.append("".join(parts))

    return "\n".join(lines)
