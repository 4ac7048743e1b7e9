import random

from lavender.events.bus import EventBus
from lavender.world import create_world
from lavender.systems.board import BoardSystem
from lavender.components.board import Board
from lavender.components.grid import Grid
from lavender.components.palette import Palette
from lavender.components.reshuffle_state import ReshuffleState
from lavender.constants import EMPTY


def test_board_component_exists():
    bus = EventBus(); world = create_world(bus, rng=random.Random(3))
    BoardSystem(world, bus, 6, 5)
    boards = list(world.get_component(Board))
    assert boards, 'Board component missing'
    ent, comp = boards[0]
    assert comp.size == 6 and comp.palette_size == 5
    grid = world.component_for_entity(ent, Grid)
    assert grid.size == 6
    assert len(world.component_for_entity(ent, Palette)) == 5
    assert world.has_component(ent, ReshuffleState)


def test_fresh_board_has_no_empty_cells_and_tags_in_palette():
    bus = EventBus(); world = create_world(bus, rng=random.Random(5))
    board = BoardSystem(world, bus)
    for row, col in board.grid.positions():
        tag = board.cell_at(row, col)
        assert tag != EMPTY
        assert 0 <= tag < 4


def test_palette_names_and_colors():
    palette = Palette.lavender(6)
    assert palette.name_for(0) == "lavender"
    assert palette.color_for(1) == "#8A2BE2"
    assert palette.name_for(5) == "lavender_5"
    assert list(palette.tags()) == [0, 1, 2, 3, 4, 5]
