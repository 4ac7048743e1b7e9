import random

import pytest

from lavender.components.game_state import GameMode
from lavender.config import EngineConfig
from lavender.engine import HarvestEngine
from lavender.errors import InvalidCoordinate
from lavender.systems.board_ops import find_region, has_any_valid_move
from tests.helpers import load_grid, make_engine


def test_new_game_always_has_a_move():
    engine = make_engine(seed=5)
    assert has_any_valid_move(engine.grid)
    for _ in range(5):
        grid = engine.new_game()
        assert has_any_valid_move(grid)
        assert grid.empty_positions() == []


def test_new_game_can_resize_board_and_palette():
    engine = make_engine()
    grid = engine.new_game(board_size=6, palette_size=5)
    assert grid.size == 6
    assert engine.config.board_size == 6
    assert engine.board_system.board.palette_size == 5
    assert len(engine.board_system.palette) == 5
    assert all(0 <= engine.cell_at(r, c) < 5 for r, c in grid.positions())
    assert has_any_valid_move(grid)


def test_new_game_resets_round():
    engine = make_engine()
    engine.start_round()
    engine.session.score = 90
    engine.new_game()
    assert engine.mode is GameMode.READY
    assert engine.session.score == 0


def test_seeded_engines_are_reproducible():
    first = HarvestEngine(rng=random.Random(2024))
    second = HarvestEngine(rng=random.Random(2024))
    assert first.grid.snapshot() == second.grid.snapshot()


def test_engines_are_independent():
    first = make_engine(seed=1)
    second = make_engine(seed=1)
    before = second.grid.snapshot()
    load_grid(first, [[(row + col) % 4 for col in range(8)] for row in range(8)])
    first.new_game(board_size=5)
    assert second.grid.snapshot() == before
    assert second.grid.size == 8
    assert first.grid is not second.grid
    assert first.world is not second.world


def test_cell_at_rejects_out_of_bounds():
    engine = make_engine()
    with pytest.raises(InvalidCoordinate):
        engine.cell_at(8, 0)


def test_hint_points_at_a_harvestable_region():
    engine = make_engine(seed=9)
    hint = engine.hint()
    assert len(hint) >= 3
    row, col = hint[0]
    assert set(hint) == find_region(engine.grid, row, col)


@pytest.mark.parametrize("kwargs", [
    {"board_size": 2},
    {"palette_size": 1},
    {"round_seconds": 0},
    {"reshuffle_attempts": -1},
])
def test_invalid_config_is_rejected(kwargs):
    with pytest.raises(ValueError):
        EngineConfig(**kwargs)


def test_with_board_keeps_round_settings():
    config = EngineConfig(round_seconds=30, reshuffle_attempts=3)
    resized = config.with_board(board_size=6)
    assert resized == EngineConfig(board_size=6, round_seconds=30, reshuffle_attempts=3)
    assert config.board_size == 8
