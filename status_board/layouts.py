"""Seat layout resolution.

Maps grid cells to seat numbers for a room, either by a direction formula or
by an explicit list of seat assignments, and implements the editor operations
on that list. Every function here is pure: inputs are never mutated and a new
config or assignment tuple is returned.

Row 0 is the front-most row of the room as stored; screens draw rows from
``total_rows - 1`` down to 0.
"""

import attrs

from status_board.exceptions import LayoutValidationError
from status_board.models import CorridorKind, RoomConfig, SeatAssignment, SeatDirection


def resolve_direction(value):
    """Return the SeatDirection for a stored value, bottom-right if unknown."""
    try:
        return SeatDirection(value)
    except ValueError:
        return SeatDirection.BOTTOM_RIGHT


def _formula_seat_number(row, col, config):
    width = config.seats_per_row
    direction = resolve_direction(config.seat_direction)

    if direction in (SeatDirection.TOP_RIGHT, SeatDirection.TOP_LEFT):
        row_offset = (config.total_rows - 1 - row) * width
    else:
        row_offset = row * width

    if direction in (SeatDirection.BOTTOM_LEFT, SeatDirection.TOP_LEFT):
        return row_offset + col + 1
    return row_offset + (width - col)


def seat_number_at_cell(row, col, config: RoomConfig, assignments=()):
    """Seat number drawn at ``(row, col)``, or None for an empty cell."""
    if config.use_custom_layout:
        for a in assignments:
            if a.grid_row == row and a.grid_col == col:
                return a.seat_number
        return None

    return _formula_seat_number(row, col, config)


def cell_of_seat(seat_number, config: RoomConfig, assignments=()):
    """Reverse of seat_number_at_cell: the ``(row, col)`` holding a seat."""
    if config.use_custom_layout:
        for a in assignments:
            if a.seat_number == seat_number:
                return a.cell
        return None

    if not 1 <= seat_number <= config.grid_size:
        return None

    width = config.seats_per_row
    direction = resolve_direction(config.seat_direction)
    index = seat_number - 1
    row, offset = divmod(index, width)

    if direction in (SeatDirection.TOP_RIGHT, SeatDirection.TOP_LEFT):
        row = config.total_rows - 1 - row
    if direction in (SeatDirection.BOTTOM_LEFT, SeatDirection.TOP_LEFT):
        col = offset
    else:
        col = width - 1 - offset
    return (row, col)


def seat_map(config: RoomConfig, assignments=()):
    """Dict of ``(row, col) -> seat number`` for every occupied cell."""
    if config.use_custom_layout:
        return {a.cell: a.seat_number for a in assignments}

    return {
        (row, col): _formula_seat_number(row, col, config)
        for row in range(config.total_rows)
        for col in range(config.seats_per_row)
    }


def total_occupiable_seats(config: RoomConfig, assignments=()):
    if config.use_custom_layout:
        return len(assignments)
    return config.grid_size


def assign_seat(row, col, seat_number, assignments, label=None):
    """Put ``seat_number`` at ``(row, col)``.

    Whatever held that number or that cell before is dropped first, so the
    result never has two entries for one seat or one cell.
    """
    if seat_number <= 0:
        raise LayoutValidationError(f"Seat number must be positive, got {seat_number}")

    kept = tuple(
        a for a in assignments
        if a.seat_number != seat_number and a.cell != (row, col)
    )
    return kept + (SeatAssignment(seat_number=seat_number, grid_row=row, grid_col=col, label=label),)


def unassign_seat(row, col, assignments):
    return tuple(a for a in assignments if a.cell != (row, col))


def next_seat_number(assignments):
    if not assignments:
        return 1
    return max(a.seat_number for a in assignments) + 1


def auto_fill_sequential(config: RoomConfig):
    """Number every cell front to back, right to left within a row."""
    assignments = []
    seat_number = 1

    for row in range(config.total_rows):
        for col in range(config.seats_per_row - 1, -1, -1):
            assignments.append(SeatAssignment(seat_number=seat_number, grid_row=row, grid_col=col))
            seat_number += 1

    return tuple(assignments)


def clear_seats():
    return ()


def _corridor_bound(kind, config):
    if kind == CorridorKind.ROW:
        return config.total_rows
    return config.seats_per_row


def validate_corridor_index(kind, index, config: RoomConfig):
    kind = CorridorKind(kind)
    bound = _corridor_bound(kind, config)
    if not 0 <= index < bound - 1:
        raise LayoutValidationError(
            f"Corridor after {kind.value} {index} is out of range [0, {bound - 1})"
        )
    return kind


def toggle_corridor(kind, index, config: RoomConfig):
    """Add the corridor after ``index`` if missing, remove it if present."""
    kind = validate_corridor_index(kind, index, config)

    if kind == CorridorKind.ROW:
        return attrs.evolve(config, corridor_after_rows=config.corridor_after_rows ^ {index})
    return attrs.evolve(config, corridor_after_cols=config.corridor_after_cols ^ {index})


def clear_corridors(config: RoomConfig):
    return attrs.evolve(config, corridor_after_rows=frozenset(), corridor_after_cols=frozenset())


def row_corridor_after(row, config: RoomConfig):
    return row in config.corridor_after_rows


def col_corridor_after(col, config: RoomConfig):
    return col in config.corridor_after_cols


def validate_config(config: RoomConfig):
    if config.seats_per_row < 1 or config.total_rows < 1:
        raise LayoutValidationError("Room needs at least one row and one seat per row")
    for index in config.corridor_after_rows:
        validate_corridor_index(CorridorKind.ROW, index, config)
    for index in config.corridor_after_cols:
        validate_corridor_index(CorridorKind.COL, index, config)


def validate_cell(row, col, config: RoomConfig):
    if not (0 <= row < config.total_rows and 0 <= col < config.seats_per_row):
        raise LayoutValidationError(f"Cell ({row}, {col}) is outside the room grid")


def drop_outside_grid(config: RoomConfig, assignments):
    """Keep only assignments whose cell still exists after a resize."""
    return tuple(
        a for a in assignments
        if 0 <= a.grid_row < config.total_rows and 0 <= a.grid_col < config.seats_per_row
    )


def validate_assignments(config: RoomConfig, assignments):
    """Reject a full assignment list that breaks the grid or uniqueness rules."""
    seen_numbers = set()
    seen_cells = set()

    for a in assignments:
        if a.seat_number <= 0:
            raise LayoutValidationError(f"Seat number must be positive, got {a.seat_number}")
        validate_cell(a.grid_row, a.grid_col, config)
        if a.seat_number in seen_numbers:
            raise LayoutValidationError(f"Seat number {a.seat_number} is assigned twice")
        if a.cell in seen_cells:
            raise LayoutValidationError(f"Cell ({a.grid_row}, {a.grid_col}) is assigned twice")
        seen_numbers.add(a.seat_number)
        seen_cells.add(a.cell)


class SequentialNumbering:
    """Seat number the editor suggests for the next click."""

    def __init__(self, assignments=()):
        self.suggested = next_seat_number(assignments)

    def take(self):
        number = self.suggested
        self.suggested += 1
        return number

    def manual(self, seat_number):
        self.suggested = seat_number + 1
        return seat_number
