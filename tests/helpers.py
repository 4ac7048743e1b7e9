from __future__ import annotations

import random
from typing import List, Sequence, Tuple

from lavender.components.grid import Grid
from lavender.config import EngineConfig
from lavender.engine import HarvestEngine
from lavender.systems.board import BoardSystem

Position = Tuple[int, int]


def make_engine(seed: int = 1234, **config) -> HarvestEngine:
    """Build a seeded engine; keyword arguments go to EngineConfig."""
    return HarvestEngine(EngineConfig(**config), rng=random.Random(seed))


def load_grid(target: HarvestEngine | BoardSystem, rows: Sequence[Sequence[int]]) -> Grid:
    """Overwrite the live board with a hand-written layout and return the live grid."""
    board_system = target.board_system if isinstance(target, HarvestEngine) else target
    grid = board_system.grid
    grid.replace(Grid.from_rows([list(row) for row in rows]))
    return grid


def no_move_grid(size: int, palette_size: int = 2, rng: random.Random | None = None) -> Grid:
    """Checkerboard layout: no two orthogonal neighbours share a tag, so no move exists."""
    return Grid(size=size, cells=[[(row + col) % 2 for col in range(size)] for row in range(size)])


def straight_runs(grid: Grid, length: int = 3) -> List[List[Position]]:
    """Every horizontal or vertical window of ``length`` cells sharing one tag."""
    runs: List[List[Position]] = []
    for row in range(grid.size):
        for col in range(grid.size):
            tag = grid.get(row, col)
            horizontal = [(row, col + k) for k in range(length)]
            vertical = [(row + k, col) for k in range(length)]
            for run in (horizontal, vertical):
                if all(grid.in_bounds(r, c) and grid.get(r, c) == tag for r, c in run):
                    runs.append(run)
    return runs
