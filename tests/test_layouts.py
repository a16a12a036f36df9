"""
Unit tests for seat layout resolution and the seat editor operations
"""

import pytest

from status_board import layouts
from status_board.exceptions import LayoutValidationError
from status_board.models import RoomConfig, SeatAssignment, SeatDirection


ALL_DIRECTIONS = [d.value for d in SeatDirection]


@pytest.mark.unit
class TestFormulaSeatNumbers:
    """Seat numbers derived from grid position and direction"""

    @pytest.mark.parametrize("direction", ALL_DIRECTIONS)
    @pytest.mark.parametrize("seats_per_row,total_rows", [(10, 5), (3, 2), (1, 1), (4, 7)])
    def test_every_direction_is_a_bijection(self, direction, seats_per_row, total_rows):
        """
        Given: a room in formula mode
        When: numbering every cell
        Then: each number in [1, W*R] appears exactly once
        """
        config = RoomConfig(seats_per_row=seats_per_row, total_rows=total_rows, seat_direction=direction)

        numbers = [
            layouts.seat_number_at_cell(row, col, config)
            for row in range(total_rows)
            for col in range(seats_per_row)
        ]

        assert sorted(numbers) == list(range(1, seats_per_row * total_rows + 1))

    def test_bottom_right_examples(self):
        config = RoomConfig(seats_per_row=10, total_rows=5, seat_direction="bottom-right-horizontal")

        assert layouts.seat_number_at_cell(0, 0, config) == 10
        assert layouts.seat_number_at_cell(0, 9, config) == 1
        assert layouts.seat_number_at_cell(4, 0, config) == 50

    def test_other_directions(self):
        base = dict(seats_per_row=10, total_rows=5)

        bottom_left = RoomConfig(seat_direction="bottom-left-horizontal", **base)
        top_right = RoomConfig(seat_direction="top-right-horizontal", **base)
        top_left = RoomConfig(seat_direction="top-left-horizontal", **base)

        assert layouts.seat_number_at_cell(0, 0, bottom_left) == 1
        assert layouts.seat_number_at_cell(4, 9, top_right) == 1
        assert layouts.seat_number_at_cell(0, 0, top_right) == 50
        assert layouts.seat_number_at_cell(4, 0, top_left) == 1
        assert layouts.seat_number_at_cell(0, 9, top_left) == 50

    def test_unknown_direction_falls_back_to_bottom_right(self):
        odd = RoomConfig(seats_per_row=4, total_rows=3, seat_direction="diagonal")
        default = RoomConfig(seats_per_row=4, total_rows=3)

        for row in range(3):
            for col in range(4):
                assert layouts.seat_number_at_cell(row, col, odd) == layouts.seat_number_at_cell(row, col, default)

    @pytest.mark.parametrize("direction", ALL_DIRECTIONS + ["unknown"])
    def test_cell_of_seat_inverts_seat_number_at_cell(self, direction):
        config = RoomConfig(seats_per_row=5, total_rows=4, seat_direction=direction)

        for row in range(4):
            for col in range(5):
                seat = layouts.seat_number_at_cell(row, col, config)
                assert layouts.cell_of_seat(seat, config) == (row, col)

    def test_cell_of_seat_out_of_range(self):
        config = RoomConfig(seats_per_row=5, total_rows=4)

        assert layouts.cell_of_seat(0, config) is None
        assert layouts.cell_of_seat(21, config) is None


@pytest.mark.unit
class TestCustomLayout:
    @pytest.fixture
    def config(self):
        return RoomConfig(seats_per_row=10, total_rows=5, use_custom_layout=True)

    def test_lookup_uses_assignments(self, config):
        assignments = (SeatAssignment(seat_number=12, grid_row=2, grid_col=3),)

        assert layouts.seat_number_at_cell(2, 3, config, assignments) == 12
        assert layouts.seat_number_at_cell(0, 0, config, assignments) is None
        assert layouts.cell_of_seat(12, config, assignments) == (2, 3)
        assert layouts.cell_of_seat(13, config, assignments) is None

    def test_total_counts_only_assigned_seats(self, config):
        assignments = (
            SeatAssignment(seat_number=1, grid_row=0, grid_col=0),
            SeatAssignment(seat_number=2, grid_row=0, grid_col=1),
        )

        assert layouts.total_occupiable_seats(config, assignments) == 2
        assert layouts.total_occupiable_seats(config, ()) == 0

    def test_formula_total_ignores_assignments(self):
        config = RoomConfig(seats_per_row=10, total_rows=5)
        assignments = (SeatAssignment(seat_number=1, grid_row=0, grid_col=0),)

        assert layouts.total_occupiable_seats(config, assignments) == 50
        assert layouts.total_occupiable_seats(config, ()) == 50


@pytest.mark.unit
class TestSeatEditing:
    def test_assign_same_number_twice_keeps_only_latest_cell(self):
        """
        Given: seat 7 assigned to (1,1)
        When: seat 7 is assigned to (2,2)
        Then: exactly one entry for seat 7 remains, at (2,2)
        """
        assignments = layouts.assign_seat(1, 1, 7, ())
        assignments = layouts.assign_seat(2, 2, 7, assignments)

        sevens = [a for a in assignments if a.seat_number == 7]
        assert len(sevens) == 1
        assert sevens[0].cell == (2, 2)

    def test_assign_to_occupied_cell_replaces_occupant(self):
        assignments = layouts.assign_seat(0, 0, 3, ())
        assignments = layouts.assign_seat(0, 0, 4, assignments)

        assert assignments == (SeatAssignment(seat_number=4, grid_row=0, grid_col=0),)

    def test_assign_does_not_mutate_input(self):
        original = (SeatAssignment(seat_number=1, grid_row=0, grid_col=0),)
        layouts.assign_seat(0, 0, 2, original)

        assert original == (SeatAssignment(seat_number=1, grid_row=0, grid_col=0),)

    @pytest.mark.parametrize("seat_number", [0, -3])
    def test_assign_rejects_non_positive_number(self, seat_number):
        with pytest.raises(LayoutValidationError):
            layouts.assign_seat(0, 0, seat_number, ())

    def test_unassign(self):
        assignments = layouts.assign_seat(1, 2, 5, ())

        assert layouts.unassign_seat(1, 2, assignments) == ()
        assert layouts.unassign_seat(0, 0, assignments) == assignments

    def test_next_seat_number(self):
        assert layouts.next_seat_number(()) == 1
        assignments = (
            SeatAssignment(seat_number=4, grid_row=0, grid_col=0),
            SeatAssignment(seat_number=9, grid_row=0, grid_col=1),
        )
        assert layouts.next_seat_number(assignments) == 10

    def test_sequential_numbering(self):
        numbering = layouts.SequentialNumbering(())

        assert numbering.take() == 1
        assert numbering.take() == 2
        assert numbering.manual(20) == 20
        assert numbering.suggested == 21
        assert numbering.take() == 21

    def test_auto_fill_sequential(self):
        config = RoomConfig(seats_per_row=3, total_rows=2)

        placed = {a.cell: a.seat_number for a in layouts.auto_fill_sequential(config)}

        assert placed == {
            (0, 2): 1, (0, 1): 2, (0, 0): 3,
            (1, 2): 4, (1, 1): 5, (1, 0): 6,
        }

    def test_auto_fill_matches_bottom_right_formula(self):
        formula = RoomConfig(seats_per_row=4, total_rows=3)
        custom = RoomConfig(seats_per_row=4, total_rows=3, use_custom_layout=True)
        assignments = layouts.auto_fill_sequential(custom)

        assert layouts.seat_map(custom, assignments) == layouts.seat_map(formula)

    def test_clear_seats(self):
        assert layouts.clear_seats() == ()


@pytest.mark.unit
class TestCorridors:
    @pytest.fixture
    def config(self):
        return RoomConfig(seats_per_row=10, total_rows=5)

    def test_toggle_is_its_own_inverse(self, config):
        once = layouts.toggle_corridor("row", 2, config)
        twice = layouts.toggle_corridor("row", 2, once)

        assert once.corridor_after_rows == frozenset({2})
        assert twice.corridor_after_rows == config.corridor_after_rows

    def test_toggle_column(self, config):
        updated = layouts.toggle_corridor("col", 4, config)

        assert layouts.col_corridor_after(4, updated)
        assert not layouts.row_corridor_after(4, updated)
        assert config.corridor_after_cols == frozenset()

    @pytest.mark.parametrize("kind,index", [("col", 9), ("row", 4), ("row", -1), ("col", 10)])
    def test_out_of_range_is_rejected(self, config, kind, index):
        with pytest.raises(LayoutValidationError):
            layouts.toggle_corridor(kind, index, config)

    def test_first_indexes_are_valid(self, config):
        updated = layouts.toggle_corridor("row", 0, config)
        updated = layouts.toggle_corridor("col", 0, updated)

        assert updated.corridor_after_rows == frozenset({0})
        assert updated.corridor_after_cols == frozenset({0})

    def test_unknown_kind(self, config):
        with pytest.raises(ValueError):
            layouts.toggle_corridor("diagonal", 1, config)

    def test_clear_corridors(self, config):
        config = layouts.toggle_corridor("row", 1, config)
        config = layouts.toggle_corridor("col", 1, config)

        cleared = layouts.clear_corridors(config)

        assert cleared.corridor_after_rows == frozenset()
        assert cleared.corridor_after_cols == frozenset()

    def test_duplicates_collapse(self):
        config = RoomConfig(corridor_after_rows=[1, 1, 2])

        assert config.corridor_after_rows == frozenset({1, 2})


@pytest.mark.unit
class TestValidation:
    def test_validate_assignments_rejects_duplicates_and_outside_cells(self):
        config = RoomConfig(seats_per_row=3, total_rows=2)

        with pytest.raises(LayoutValidationError):
            layouts.validate_assignments(config, (
                SeatAssignment(seat_number=1, grid_row=0, grid_col=0),
                SeatAssignment(seat_number=1, grid_row=0, grid_col=1),
            ))
        with pytest.raises(LayoutValidationError):
            layouts.validate_assignments(config, (
                SeatAssignment(seat_number=1, grid_row=0, grid_col=0),
                SeatAssignment(seat_number=2, grid_row=0, grid_col=0),
            ))
        with pytest.raises(LayoutValidationError):
            layouts.validate_assignments(config, (SeatAssignment(seat_number=1, grid_row=2, grid_col=0),))

    def test_drop_outside_grid(self):
        big = RoomConfig(seats_per_row=4, total_rows=3, use_custom_layout=True)
        small = RoomConfig(seats_per_row=2, total_rows=2, use_custom_layout=True)

        kept = layouts.drop_outside_grid(small, layouts.auto_fill_sequential(big))

        assert sorted(a.cell for a in kept) == [(0, 0), (0, 1), (1, 0), (1, 1)]
        layouts.validate_assignments(small, kept)

    def test_validate_config_checks_corridors(self):
        with pytest.raises(LayoutValidationError):
            layouts.validate_config(RoomConfig(seats_per_row=3, total_rows=2, corridor_after_cols=[2]))

        layouts.validate_config(RoomConfig(seats_per_row=3, total_rows=2, corridor_after_cols=[1]))
