from typing import Tuple

from lavender.components.grid import Grid
from lavender.components.selection import Selection
from lavender.constants import EMPTY, MIN_CHAIN
from lavender.errors import (
    DuplicateCoordinate,
    InvalidCoordinate,
    NonAdjacentExtension,
    SubThresholdCommit,
    TagMismatch,
)
from lavender.systems.board_ops import is_adjacent

Position = Tuple[int, int]


def _require_in_bounds(grid: Grid, position: Position) -> None:
    row, col = position
    if not grid.in_bounds(row, col):
        raise InvalidCoordinate(f"{position} is outside the {grid.size}x{grid.size} board", position)


def start_selection(grid: Grid, position: Position) -> Selection:
    """Begin a new chain at position."""
    _require_in_bounds(grid, position)
    tag = grid.get(*position)
    if tag == EMPTY:
        raise InvalidCoordinate(f"{position} holds no lavender", position)
    return Selection(positions=(tuple(position),), tag=tag)


def extend_selection(grid: Grid, selection: Selection, candidate: Position) -> Selection:
    """Return selection with candidate appended, or raise the reason it cannot be.

    An empty selection is started at candidate. The grid and the given
    selection are never modified.
    """
    candidate = tuple(candidate)
    if not selection.positions:
        return start_selection(grid, candidate)
    _require_in_bounds(grid, candidate)
    tail = selection.tail
    if not is_adjacent(tail, candidate):
        raise NonAdjacentExtension(f"{candidate} is not next to {tail}", candidate)
    if grid.get(*candidate) != grid.get(*tail):
        raise TagMismatch(f"{candidate} does not match the colour of {tail}", candidate)
    if candidate in selection:
        raise DuplicateCoordinate(f"{candidate} is already in the chain", candidate)
    return selection.appended(candidate)


def validate_commit(grid: Grid, selection: Selection) -> None:
    """Check a traced chain is still harvestable on grid before it is removed."""
    if len(selection) < MIN_CHAIN:
        raise SubThresholdCommit(f"a chain needs at least {MIN_CHAIN} cells, got {len(selection)}")
    for position in selection.positions:
        _require_in_bounds(grid, position)
    tags = {grid.get(*position) for position in selection.positions}
    if len(tags) != 1:
        raise TagMismatch("chain cells no longer share one colour")
    if len(set(selection.positions)) != len(selection.positions):
        raise DuplicateCoordinate("chain visits a cell twice")
    for previous, current in zip(selection.positions, selection.positions[1:]):
        if not is_adjacent(previous, current):
            raise NonAdjacentExtension(f"{current} is not next to {previous}", current)
