"""Headless entry point for the Lavender Harvest board engine.

Sets up the ECS world, event bus and systems, and exposes the calls a
presentation layer makes. Several engines can run side by side; each owns its
own world, bus and random source.
"""
from __future__ import annotations

import random
from typing import List, Tuple

from lavender.components.game_state import GameMode
from lavender.components.grid import Grid
from lavender.components.harvest_session import HarvestSession
from lavender.components.selection import Selection
from lavender.config import EngineConfig
from lavender.events.bus import EventBus, EVENT_TICK
from lavender.systems.board import BoardSystem
from lavender.systems.board_ops import GridGenerator, find_all_regions, generate_grid
from lavender.systems.harvest_system import CommitResult, HarvestSystem
from lavender.systems.selection_ops import extend_selection, start_selection
from lavender.systems.selection_system import SelectionSystem
from lavender.systems.session_system import SessionSystem
from lavender.utils.game_state import get_game_mode, get_or_create_session, set_game_mode
from lavender.world import create_world

Position = Tuple[int, int]


class HarvestEngine:
    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        rng: random.Random | None = None,
        event_bus: EventBus | None = None,
        generator: GridGenerator = generate_grid,
    ):
        self.config = config or EngineConfig()
        self.event_bus = event_bus or EventBus()
        self.world = create_world(self.event_bus, config=self.config, rng=rng)

        # Board systems
        self.board_system = BoardSystem(
            self.world,
            self.event_bus,
            self.config.board_size,
            self.config.palette_size,
            reshuffle_attempts=self.config.reshuffle_attempts,
            generator=generator,
        )
        self.harvest_system = HarvestSystem(self.world, self.event_bus, self.board_system)

        # Input and round systems
        self.selection_system = SelectionSystem(self.world, self.event_bus)
        self.session_system = SessionSystem(
            self.world,
            self.event_bus,
            self.board_system,
            round_seconds=self.config.round_seconds,
        )

    # ------------------------------------------------------------------
    # Board interface
    # ------------------------------------------------------------------

    @property
    def grid(self) -> Grid:
        return self.board_system.grid

    def new_game(self, board_size: int | None = None, palette_size: int | None = None) -> Grid:
        """Start over on a fresh board; the round returns to READY with a zero score."""
        self.config = self.config.with_board(board_size, palette_size)
        self.selection_system.clear(reason="new_game")
        grid = self.board_system.new_board(self.config.board_size, self.config.palette_size, reason="new_game")
        get_or_create_session(self.world).reset(self.config.round_seconds)
        set_game_mode(self.world, self.event_bus, GameMode.READY)
        return grid

    def start_selection(self, position: Position) -> Selection:
        return start_selection(self.grid, position)

    def extend_selection(self, selection: Selection, candidate: Position) -> Selection:
        return extend_selection(self.grid, selection, candidate)

    def commit_selection(self, selection: Selection) -> CommitResult:
        return self.harvest_system.commit(selection)

    def cell_at(self, row: int, col: int) -> int:
        return self.board_system.cell_at(row, col)

    def hint(self) -> List[Position]:
        """Cells of one harvestable region, largest first, for highlighting."""
        regions = find_all_regions(self.grid)
        if not regions:
            return []
        return sorted(max(regions, key=len))

    # ------------------------------------------------------------------
    # Round interface
    # ------------------------------------------------------------------

    @property
    def session(self) -> HarvestSession:
        return get_or_create_session(self.world)

    @property
    def mode(self) -> GameMode | None:
        return get_game_mode(self.world)

    def start_round(self) -> None:
        self.session_system.start_round()

    def tick(self, dt: float) -> None:
        self.event_bus.emit(EVENT_TICK, dt=dt)

    def toggle_pause(self) -> None:
        self.session_system.toggle_pause()

    def restart(self) -> None:
        self.session_system.restart()

    def quit_round(self) -> None:
        self.session_system.quit_round()
