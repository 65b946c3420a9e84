import pytest

import constants as const
from grid_core import (
    InvalidDimensionError,
    RectangularGrid,
    are_adjacent,
    cell_coords,
    cell_index,
    neighbour_id,
)


def test_coords_round_trip_uses_length_as_row_size():
    assert cell_coords(7, 5) == (2, 1)
    assert cell_index(2, 1, 5) == 7


def test_interior_cell_has_four_neighbours():
    # 3 rows x 4 columns, cell 5 is (1, 1)
    assert neighbour_id(5, const.DIR_UP, 3, 4) == 1
    assert neighbour_id(5, const.DIR_DOWN, 3, 4) == 9
    assert neighbour_id(5, const.DIR_LEFT, 3, 4) == 4
    assert neighbour_id(5, const.DIR_RIGHT, 3, 4) == 6


def test_corners_have_two_invalid_directions():
    width, length = 3, 4
    assert neighbour_id(0, const.DIR_UP, width, length) is None
    assert neighbour_id(0, const.DIR_LEFT, width, length) is None
    assert neighbour_id(0, const.DIR_DOWN, width, length) == 4
    assert neighbour_id(0, const.DIR_RIGHT, width, length) == 1

    last = width * length - 1
    assert neighbour_id(last, const.DIR_DOWN, width, length) is None
    assert neighbour_id(last, const.DIR_RIGHT, width, length) is None
    assert neighbour_id(last, const.DIR_UP, width, length) == last - length
    assert neighbour_id(last, const.DIR_LEFT, width, length) == last - 1


def test_row_ends_do_not_wrap():
    # Cell 3 is the end of row 0; cell 4 starts row 1
    assert neighbour_id(3, const.DIR_RIGHT, 3, 4) is None
    assert neighbour_id(4, const.DIR_LEFT, 3, 4) is None
    assert not are_adjacent(3, 4, 4)
    assert are_adjacent(3, 7, 4)


def test_single_row_grid_has_no_vertical_neighbours():
    assert neighbour_id(2, const.DIR_UP, 1, 5) is None
    assert neighbour_id(2, const.DIR_DOWN, 1, 5) is None


def test_unknown_direction_raises():
    with pytest.raises(ValueError):
        neighbour_id(0, "NORTH", 2, 2)


@pytest.mark.parametrize("width,length", [(0, 5), (5, 0), (-1, 3), (0, 0)])
def test_grid_rejects_non_positive_dimensions(width, length):
    with pytest.raises(InvalidDimensionError):
        RectangularGrid(width, length)


def test_invalid_dimension_is_a_value_error():
    assert issubclass(InvalidDimensionError, ValueError)


def test_grid_cells_start_unconnected():
    grid = RectangularGrid(2, 3)
    assert grid.size() == 6
    assert grid.first_unconnected().id == 0
    assert not grid.all_connected()
    assert all(c.next_id is None for c in grid.get_all_cells())
    assert grid.target_cell is None


def test_grid_lookup_helpers():
    grid = RectangularGrid(2, 3)
    assert grid.get_cell(5).coords == (2, 1)
    assert grid.get_cell(6) is None
    assert grid.get_cell_at(1, 1).id == 4
    assert grid.get_cell_at(3, 0) is None
    assert sorted(grid.neighbours(0)) == [1, 3]


def test_connected_cell_link_is_frozen():
    grid = RectangularGrid(1, 2)
    cell = grid.cells[0]
    cell.set_next(1)
    cell.set_next(1)
    cell.mark_connected()
    assert cell.is_connected()
    with pytest.raises(RuntimeError):
        cell.set_next(None)
    assert cell.next_id == 1


def test_reset_clears_tree_state():
    grid = RectangularGrid(1, 2)
    grid.cells[0].set_next(1)
    grid.cells[0].mark_connected()
    grid.target_id = 1
    grid.edges.append((0, 1))
    grid.reset()
    assert grid.target_id is None
    assert grid.edges == []
    assert grid.cells[0].status == const.STATUS_UNCONNECTED
    assert grid.cells[0].next_id is None
