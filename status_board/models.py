from enum import Enum

import attrs


class SeatDirection(str, Enum):
    BOTTOM_RIGHT = "bottom-right-horizontal"
    BOTTOM_LEFT = "bottom-left-horizontal"
    TOP_RIGHT = "top-right-horizontal"
    TOP_LEFT = "top-left-horizontal"


class OccupantStatus(str, Enum):
    OFFLINE = "offline"
    ONLINE = "online"
    NEED_HELP = "need-help"


class CorridorKind(str, Enum):
    ROW = "row"
    COL = "col"


def _to_corridor_set(values):
    return frozenset(int(v) for v in (values or ()))


@attrs.define(frozen=True)
class RoomConfig:
    """Room grid settings.

    ``seat_direction`` is kept as the raw stored string so that an unknown
    value survives a load/save cycle; the resolver decides how to read it.
    """

    seats_per_row: int = 10
    total_rows: int = 5
    seat_direction: str = SeatDirection.BOTTOM_RIGHT.value
    use_custom_layout: bool = False
    corridor_after_rows: frozenset = attrs.field(factory=frozenset, converter=_to_corridor_set)
    corridor_after_cols: frozenset = attrs.field(factory=frozenset, converter=_to_corridor_set)
    display_title: str = "Bootcamp Status"

    @property
    def grid_size(self):
        return self.seats_per_row * self.total_rows


@attrs.define(frozen=True)
class SeatAssignment:
    seat_number: int
    grid_row: int
    grid_col: int
    label: str | None = None

    @property
    def cell(self):
        return (self.grid_row, self.grid_col)
