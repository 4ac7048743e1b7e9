import pytest

from lavender.components.grid import Grid
from lavender.constants import EMPTY
from lavender.errors import InvalidCoordinate
from lavender.systems.board_ops import (
    connected_region,
    find_all_regions,
    find_region,
    has_any_valid_move,
    is_adjacent,
)

L_SHAPE = [
    [0, 1, 2, 3],
    [0, 2, 3, 1],
    [0, 0, 1, 2],
    [3, 1, 2, 3],
]


def test_region_follows_four_connected_cells():
    grid = Grid.from_rows(L_SHAPE)
    assert find_region(grid, 0, 0) == {(0, 0), (1, 0), (2, 0), (2, 1)}
    # Any seed inside the region yields the same region.
    assert find_region(grid, 2, 1) == find_region(grid, 0, 0)


def test_diagonal_neighbours_do_not_connect():
    grid = Grid.from_rows([
        [1, 0, 1],
        [0, 1, 0],
        [1, 0, 1],
    ])
    assert connected_region(grid, 1, 1) == {(1, 1)}
    assert find_region(grid, 1, 1) == set()
    assert not has_any_valid_move(grid)


def test_pairs_are_not_matches():
    grid = Grid.from_rows([
        [2, 2, 0],
        [1, 0, 1],
        [0, 1, 3],
    ])
    assert connected_region(grid, 0, 0) == {(0, 0), (0, 1)}
    assert find_region(grid, 0, 0) == set()
    assert not has_any_valid_move(grid)


def test_region_may_exceed_a_straight_line():
    grid = Grid.from_rows([
        [1, 1, 1],
        [1, 0, 1],
        [1, 1, 1],
    ])
    assert len(find_region(grid, 0, 0)) == 8
    assert find_region(grid, 1, 1) == set()


def test_detection_is_idempotent():
    grid = Grid.from_rows(L_SHAPE)
    before = grid.snapshot()
    first = find_region(grid, 2, 0)
    second = find_region(grid, 2, 0)
    assert first == second
    assert grid.snapshot() == before


def test_has_any_valid_move_and_all_regions():
    grid = Grid.from_rows(L_SHAPE)
    assert has_any_valid_move(grid)
    regions = find_all_regions(grid)
    assert regions == [{(0, 0), (1, 0), (2, 0), (2, 1)}]


def test_empty_seed_has_no_region():
    grid = Grid.from_rows([
        [EMPTY, EMPTY, EMPTY],
        [0, 1, 2],
        [1, 2, 0],
    ])
    assert find_region(grid, 0, 0) == set()
    assert not has_any_valid_move(grid)


def test_large_single_colour_board_does_not_recurse():
    size = 120
    grid = Grid(size=size, cells=[[0] * size for _ in range(size)])
    assert len(find_region(grid, 0, 0)) == size * size


@pytest.mark.parametrize("row,col", [(-1, 0), (0, 4), (4, 4)])
def test_out_of_bounds_seed_raises(row, col):
    grid = Grid.from_rows(L_SHAPE)
    with pytest.raises(InvalidCoordinate):
        find_region(grid, row, col)


def test_is_adjacent():
    assert is_adjacent((0, 0), (0, 1))
    assert is_adjacent((0, 0), (1, 0))
    assert not is_adjacent((0, 0), (1, 1))
    assert not is_adjacent((0, 0), (2, 0))
    assert not is_adjacent((0, 0), (0, 0))
