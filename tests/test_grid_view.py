import pytest

from status_board.grid_view import CORRIDOR, ROW, build_grid, render_text, status_counts
from status_board.layouts import auto_fill_sequential
from status_board.models import RoomConfig, SeatAssignment


def strip_rows(grid):
    return [strip["row"] if strip["type"] == ROW else CORRIDOR for strip in grid]


@pytest.mark.unit
class TestBuildGrid:
    def test_rows_come_out_highest_first(self):
        grid = build_grid(RoomConfig(seats_per_row=2, total_rows=3))

        assert strip_rows(grid) == [2, 1, 0]

    def test_row_corridor_sits_between_row_and_row_below(self):
        config = RoomConfig(seats_per_row=2, total_rows=4, corridor_after_rows=[2])

        assert strip_rows(build_grid(config)) == [3, 2, CORRIDOR, 1, 0]

    def test_corridor_after_row_zero_draws_nothing(self):
        config = RoomConfig(seats_per_row=2, total_rows=3, corridor_after_rows=[0])

        assert strip_rows(build_grid(config)) == [2, 1, 0]

    def test_column_corridor_in_every_strip(self):
        config = RoomConfig(seats_per_row=3, total_rows=2, corridor_after_cols=[0])

        for strip in build_grid(config):
            kinds = [cell["type"] for cell in strip["cells"]]
            assert kinds == ["seat", CORRIDOR, "seat", "seat"]

    def test_statuses_default_to_offline(self):
        config = RoomConfig(seats_per_row=2, total_rows=1)

        cells = build_grid(config, status_by_seat={1: "need-help"})[0]["cells"]

        assert [(c["seat_number"], c["status"]) for c in cells] == [(2, "offline"), (1, "need-help")]

    def test_custom_layout_leaves_gaps(self):
        config = RoomConfig(seats_per_row=2, total_rows=1, use_custom_layout=True)
        assignments = (SeatAssignment(seat_number=5, grid_row=0, grid_col=1),)

        cells = build_grid(config, assignments)[0]["cells"]

        assert cells[0]["seat_number"] is None
        assert cells[0]["status"] is None
        assert cells[1]["seat_number"] == 5


@pytest.mark.unit
class TestStatusCounts:
    def test_formula_mode(self):
        config = RoomConfig(seats_per_row=10, total_rows=5)

        counts = status_counts(config, (), ["online", "online", "need-help", "offline"])

        assert counts == {"total": 50, "online": 2, "need_help": 1, "absent": 47}

    def test_custom_mode_counts_assigned_seats(self):
        config = RoomConfig(seats_per_row=3, total_rows=2, use_custom_layout=True)
        assignments = auto_fill_sequential(config)[:4]

        counts = status_counts(config, assignments, ["online"])

        assert counts["total"] == 4
        assert counts["absent"] == 3

    def test_absent_never_negative(self):
        config = RoomConfig(seats_per_row=1, total_rows=1, use_custom_layout=True)

        assert status_counts(config, (), ["online", "online"])["absent"] == 0


def test_render_text_marks_corridors_and_status():
    config = RoomConfig(seats_per_row=2, total_rows=2, corridor_after_cols=[0], corridor_after_rows=[1])

    lines = render_text(config, status_by_seat={1: "online"}).split("\n")

    assert len(lines) == 3
    assert lines[1] == ""
    assert " |" in lines[0]
    assert lines[2].endswith("1+")
