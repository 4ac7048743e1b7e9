import logging
import random
from typing import Iterable, Tuple

from esper import World

from lavender.components.board import Board
from lavender.components.grid import Grid
from lavender.components.palette import Palette
from lavender.components.reshuffle_state import ReshuffleState
from lavender.constants import BOARD_SIZE, MIN_CHAIN, PALETTE_SIZE, RESHUFFLE_ATTEMPTS
from lavender.errors import InvalidCoordinate
from lavender.events.bus import (
    EventBus,
    EVENT_BOARD_GENERATED,
    EVENT_BOARD_RESHUFFLED,
    EVENT_GRAVITY_APPLIED,
    EVENT_REFILL_COMPLETED,
)
from lavender.systems.board_ops import (
    CollapseResult,
    GridGenerator,
    RepairOutcome,
    ensure_valid_move,
    generate_grid,
    remove_and_collapse,
    world_rng,
)

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class BoardSystem:
    """Owns the board entity and every mutation of its grid.

    Creates a single board entity carrying Board, Grid, Palette and
    ReshuffleState. Every public mutation finishes with at least one
    harvestable region on the board and announces reshuffles on the bus.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        size: int = BOARD_SIZE,
        palette_size: int = PALETTE_SIZE,
        *,
        rng: random.Random | None = None,
        reshuffle_attempts: int = RESHUFFLE_ATTEMPTS,
        generator: GridGenerator = generate_grid,
    ):
        if size < MIN_CHAIN:
            raise ValueError(f"board size must be at least {MIN_CHAIN}, got {size}")
        if palette_size < 2:
            raise ValueError(f"palette size must be at least 2, got {palette_size}")
        self.world = world
        self.event_bus = event_bus
        self.rng = rng or world_rng(world)
        self.reshuffle_attempts = reshuffle_attempts
        self.generator = generator
        self.board_entity = self.world.create_entity(
            Board(size=size, palette_size=palette_size),
            Grid(size=size),
            Palette.lavender(palette_size),
            ReshuffleState(),
        )
        self.new_board(reason="initial")

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    @property
    def grid(self) -> Grid:
        return self.world.component_for_entity(self.board_entity, Grid)

    @property
    def palette(self) -> Palette:
        return self.world.component_for_entity(self.board_entity, Palette)

    @property
    def reshuffle_state(self) -> ReshuffleState:
        return self.world.component_for_entity(self.board_entity, ReshuffleState)

    def cell_at(self, row: int, col: int) -> int:
        grid = self.grid
        if not grid.in_bounds(row, col):
            raise InvalidCoordinate(f"({row}, {col}) is outside the {grid.size}x{grid.size} board", (row, col))
        return grid.get(row, col)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def new_board(
        self,
        size: int | None = None,
        palette_size: int | None = None,
        *,
        reason: str = "new_game",
    ) -> Grid:
        """Generate a fresh board, optionally resizing it, and guarantee a valid move."""
        board = self.board
        if size is not None and size != board.size:
            if size < MIN_CHAIN:
                raise ValueError(f"board size must be at least {MIN_CHAIN}, got {size}")
            board.size = size
            self.world.add_component(self.board_entity, Grid(size=size))
        if palette_size is not None and palette_size != board.palette_size:
            if palette_size < 2:
                raise ValueError(f"palette size must be at least 2, got {palette_size}")
            board.palette_size = palette_size
            self.world.add_component(self.board_entity, Palette.lavender(palette_size))
        grid = self.grid
        grid.replace(self.generator(board.size, board.palette_size, self.rng))
        repair = ensure_valid_move(
            grid,
            board.palette_size,
            self.rng,
            attempts=self.reshuffle_attempts,
            generator=self.generator,
            state=self.reshuffle_state,
        )
        logger.debug("New %dx%d board (%s), reshuffled=%s", board.size, board.size, reason, repair.reshuffled)
        self.event_bus.emit(
            EVENT_BOARD_GENERATED,
            size=board.size,
            palette_size=board.palette_size,
            reshuffled=repair.reshuffled,
            reason=reason,
        )
        self._announce_repair(repair, reason=reason)
        return grid

    def collapse(self, positions: Iterable[Position]) -> CollapseResult:
        """Remove positions, let the columns fall, refill and repair the board."""
        board = self.board
        result = remove_and_collapse(
            self.grid,
            positions,
            board.palette_size,
            self.rng,
            attempts=self.reshuffle_attempts,
            generator=self.generator,
            state=self.reshuffle_state,
        )
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=result.moves)
        if result.new_cells:
            self.event_bus.emit(EVENT_REFILL_COMPLETED, new_cells=result.new_cells)
        self._announce_repair(result.repair, reason="no_moves")
        return result

    def _announce_repair(self, repair: RepairOutcome, *, reason: str) -> None:
        if not repair.reshuffled:
            return
        # Fresh boards have every region scrubbed, so a forced fix there is routine.
        if repair.forced and reason == "no_moves":
            logger.warning("Harvest left no move; forced a run at %s", repair.forced_positions)
        self.event_bus.emit(
            EVENT_BOARD_RESHUFFLED,
            attempts=repair.attempts,
            forced=repair.forced,
            forced_positions=list(repair.forced_positions),
            reason=reason,
        )
