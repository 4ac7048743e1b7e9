from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Set, Tuple

from esper import World

from lavender.components.board import Board
from lavender.components.grid import Grid
from lavender.components.reshuffle_state import ReshufflePhase, ReshuffleState
from lavender.constants import EMPTY, GENERATION_PASS_LIMIT, MIN_CHAIN, RESHUFFLE_ATTEMPTS
from lavender.errors import InvalidCoordinate

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
GridGenerator = Callable[[int, int, random.Random], Grid]

_NEIGHBOUR_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    tag: int


@dataclass(slots=True)
class RepairOutcome:
    """What the validity guarantee had to do to leave at least one move on the board."""
    reshuffled: bool = False
    forced: bool = False
    attempts: int = 0
    forced_positions: List[Position] = field(default_factory=list)


@dataclass(slots=True)
class CollapseResult:
    moves: List[GravityMove]
    new_cells: List[Position]
    repair: RepairOutcome


# ---------------------------------------------------------------------------
# World lookups
# ---------------------------------------------------------------------------

def get_board_entity(world: World) -> int:
    for entity, _ in world.get_component(Board):
        return entity
    raise RuntimeError("Board entity not found")


def get_grid(world: World) -> Grid:
    return world.component_for_entity(get_board_entity(world), Grid)


def world_rng(world: World) -> random.Random:
    candidate = getattr(world, "random", None)
    if isinstance(candidate, random.Random):
        return candidate
    rng = random.Random()
    setattr(world, "random", rng)
    return rng


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

def generate_grid(
    size: int,
    palette_size: int,
    rng: random.Random,
    *,
    pass_limit: int = GENERATION_PASS_LIMIT,
) -> Grid:
    """Fill a fresh board with random tags and scrub every starting region of three or more."""
    grid = Grid(size=size, cells=[[rng.randrange(palette_size) for _ in range(size)] for _ in range(size)])
    remove_initial_matches(grid, palette_size, rng, pass_limit=pass_limit)
    return grid


def remove_initial_matches(
    grid: Grid,
    palette_size: int,
    rng: random.Random,
    *,
    pass_limit: int = GENERATION_PASS_LIMIT,
) -> int:
    """Re-roll cells that sit in a region of three or more until a full pass finds none.

    Cells are checked in row-major order against the board as it is at that
    moment, so a re-roll earlier in the pass is visible to later checks.
    Returns the number of passes made.
    """
    passes = 0
    while passes < pass_limit:
        passes += 1
        changed = False
        for row, col in grid.positions():
            if find_region(grid, row, col):
                grid.set(row, col, rng.randrange(palette_size))
                changed = True
        if not changed:
            return passes
    logger.warning("Starting matches still present after %d re-roll passes", pass_limit)
    return passes


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------

def is_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return (abs(ar - br) == 1 and ac == bc) or (abs(ac - bc) == 1 and ar == br)


def connected_region(grid: Grid, row: int, col: int) -> Set[Position]:
    """Every cell 4-connected to (row, col) that shares its tag, regardless of size."""
    if not grid.in_bounds(row, col):
        raise InvalidCoordinate(f"({row}, {col}) is outside the {grid.size}x{grid.size} board", (row, col))
    tag = grid.get(row, col)
    if tag == EMPTY:
        return set()
    visited: Set[Position] = set()
    stack: List[Position] = [(row, col)]
    while stack:
        r, c = stack.pop()
        if (r, c) in visited:
            continue
        if not grid.in_bounds(r, c) or grid.get(r, c) != tag:
            continue
        visited.add((r, c))
        for dr, dc in _NEIGHBOUR_OFFSETS:
            nxt = (r + dr, c + dc)
            if nxt not in visited:
                stack.append(nxt)
    return visited


def find_region(grid: Grid, row: int, col: int) -> Set[Position]:
    """Connected same-tag region seeded at (row, col), or an empty set when it is smaller than a match."""
    region = connected_region(grid, row, col)
    return region if len(region) >= MIN_CHAIN else set()


def has_any_valid_move(grid: Grid) -> bool:
    seen: Set[Position] = set()
    for row, col in grid.positions():
        if (row, col) in seen:
            continue
        region = connected_region(grid, row, col)
        if len(region) >= MIN_CHAIN:
            return True
        seen |= region
    return False


def find_all_regions(grid: Grid) -> List[Set[Position]]:
    """Each distinct region of three or more, ordered by its top-left-most cell."""
    seen: Set[Position] = set()
    regions: List[Set[Position]] = []
    for row, col in grid.positions():
        if (row, col) in seen:
            continue
        region = connected_region(grid, row, col)
        seen |= region
        if len(region) >= MIN_CHAIN:
            regions.append(region)
    return regions


# ---------------------------------------------------------------------------
# Removal, gravity and refill
# ---------------------------------------------------------------------------

def clear_cells(grid: Grid, positions: Iterable[Position]) -> List[Position]:
    positions = list(positions)
    for row, col in positions:
        if not grid.in_bounds(row, col):
            raise InvalidCoordinate(f"({row}, {col}) is outside the {grid.size}x{grid.size} board", (row, col))
    cleared: List[Position] = []
    for row, col in positions:
        if grid.get(row, col) == EMPTY:
            continue
        grid.set(row, col, EMPTY)
        cleared.append((row, col))
    return cleared


def apply_gravity(grid: Grid) -> List[GravityMove]:
    """Compact each column downward, keeping survivors in their top-to-bottom order."""
    moves: List[GravityMove] = []
    for col in range(grid.size):
        write_row = grid.size - 1
        for row in range(grid.size - 1, -1, -1):
            tag = grid.get(row, col)
            if tag == EMPTY:
                continue
            if write_row != row:
                grid.set(write_row, col, tag)
                grid.set(row, col, EMPTY)
                moves.append(GravityMove(source=(row, col), target=(write_row, col), tag=tag))
            write_row -= 1
    return moves


def refill_empty_cells(grid: Grid, palette_size: int, rng: random.Random) -> List[Position]:
    spawned: List[Position] = []
    for row, col in grid.positions():
        if grid.get(row, col) != EMPTY:
            continue
        grid.set(row, col, rng.randrange(palette_size))
        spawned.append((row, col))
    return spawned


def remove_and_collapse(
    grid: Grid,
    positions: Iterable[Position],
    palette_size: int,
    rng: random.Random,
    *,
    attempts: int = RESHUFFLE_ATTEMPTS,
    generator: GridGenerator = generate_grid,
    state: ReshuffleState | None = None,
) -> CollapseResult:
    """Clear positions, drop survivors, refill from the palette and restore a valid move.

    Regions formed by the refill are left on the board for the player; they
    are never cleared automatically.
    """
    clear_cells(grid, positions)
    moves = apply_gravity(grid)
    new_cells = refill_empty_cells(grid, palette_size, rng)
    repair = ensure_valid_move(grid, palette_size, rng, attempts=attempts, generator=generator, state=state)
    return CollapseResult(moves=moves, new_cells=new_cells, repair=repair)


# ---------------------------------------------------------------------------
# Validity guarantee
# ---------------------------------------------------------------------------

def ensure_valid_move(
    grid: Grid,
    palette_size: int,
    rng: random.Random,
    *,
    attempts: int = RESHUFFLE_ATTEMPTS,
    generator: GridGenerator = generate_grid,
    state: ReshuffleState | None = None,
) -> RepairOutcome:
    if has_any_valid_move(grid):
        if state is not None:
            state.phase = ReshufflePhase.STABLE
            state.last_attempts = 0
        return RepairOutcome()
    return reshuffle_repair(grid, palette_size, rng, attempts=attempts, generator=generator, state=state)


def reshuffle_repair(
    grid: Grid,
    palette_size: int,
    rng: random.Random,
    *,
    attempts: int = RESHUFFLE_ATTEMPTS,
    generator: GridGenerator = generate_grid,
    state: ReshuffleState | None = None,
) -> RepairOutcome:
    """Regenerate the board until it offers a move, falling back to a forced three-in-a-row.

    One regeneration plus up to ``attempts`` retries are made; the grid is
    overwritten in place so holders of the Grid component see the new board.
    When a ReshuffleState is given it walks STABLE -> RESHUFFLING -> STABLE or
    FORCED_FIX alongside the repair.
    """
    if state is not None:
        state.phase = ReshufflePhase.RESHUFFLING
        state.total_reshuffles += 1
    outcome = RepairOutcome(reshuffled=True)
    for _ in range(attempts + 1):
        outcome.attempts += 1
        grid.replace(generator(grid.size, palette_size, rng))
        if has_any_valid_move(grid):
            logger.info("Board reshuffled after %d regeneration(s)", outcome.attempts)
            _settle(state, outcome)
            return outcome
    outcome.forced = True
    outcome.forced_positions = force_valid_move(grid, palette_size, rng)
    logger.info(
        "No valid move after %d regenerations; forced a run at %s",
        outcome.attempts,
        outcome.forced_positions,
    )
    _settle(state, outcome)
    return outcome


def _settle(state: ReshuffleState | None, outcome: RepairOutcome) -> None:
    if state is None:
        return
    state.last_attempts = outcome.attempts
    if outcome.forced:
        state.total_forced += 1
        state.phase = ReshufflePhase.FORCED_FIX
    else:
        state.phase = ReshufflePhase.STABLE


def force_valid_move(grid: Grid, palette_size: int, rng: random.Random) -> List[Position]:
    """Write three same-tag cells in a straight line, horizontal when it fits from the drawn start."""
    row = rng.randrange(grid.size)
    col = rng.randrange(grid.size)
    tag = rng.randrange(palette_size)
    if col + MIN_CHAIN - 1 < grid.size:
        positions = [(row, col + offset) for offset in range(MIN_CHAIN)]
    else:
        row = min(row, grid.size - MIN_CHAIN)
        positions = [(row + offset, col) for offset in range(MIN_CHAIN)]
    for r, c in positions:
        grid.set(r, c, tag)
    return positions
