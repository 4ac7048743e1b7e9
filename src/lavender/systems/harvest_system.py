import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from esper import World

from lavender.components.grid import Grid
from lavender.components.selection import Selection
from lavender.errors import SelectionRejected
from lavender.events.bus import (
    EventBus,
    EVENT_HARVEST_COMPLETED,
    EVENT_HARVEST_REQUEST,
    EVENT_SELECTION_REJECTED,
)
from lavender.systems.board import BoardSystem
from lavender.systems.board_ops import GravityMove
from lavender.systems.scoring import ComboTier, combo_tier, score_for_chain
from lavender.systems.selection_ops import validate_commit

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


@dataclass(slots=True)
class CommitResult:
    """Everything the presentation layer needs after a harvest.

    grid is a copy of the board after collapse, refill and any reshuffle.
    """
    removed_coords: List[Position]
    score_delta: int
    tier: ComboTier
    tag: int
    reshuffled: bool
    forced_fix: bool
    grid: Grid
    gravity_moves: List[GravityMove] = field(default_factory=list)
    new_cells: List[Position] = field(default_factory=list)


class HarvestSystem:
    """Commits traced chains: validates, scores, removes and reports.

    Only the cells the player actually traced are removed, never the wider
    connected region they belong to.
    """

    def __init__(self, world: World, event_bus: EventBus, board_system: BoardSystem):
        self.world = world
        self.event_bus = event_bus
        self.board_system = board_system
        self.event_bus.subscribe(EVENT_HARVEST_REQUEST, self.on_harvest_request)

    def on_harvest_request(self, sender, **kwargs):
        selection = kwargs.get('selection')
        if selection is None:
            return
        try:
            self.commit(selection)
        except SelectionRejected as exc:
            self.event_bus.emit(EVENT_SELECTION_REJECTED, position=exc.position, reason=exc.reason)

    def commit(self, selection: Selection) -> CommitResult:
        grid = self.board_system.grid
        validate_commit(grid, selection)
        length = len(selection)
        tag = grid.get(*selection.positions[0])
        score_delta = score_for_chain(length)
        tier = combo_tier(length)
        removed = list(selection.positions)
        collapse = self.board_system.collapse(removed)
        result = CommitResult(
            removed_coords=removed,
            score_delta=score_delta,
            tier=tier,
            tag=tag,
            reshuffled=collapse.repair.reshuffled,
            forced_fix=collapse.repair.forced,
            grid=self.board_system.grid.copy(),
            gravity_moves=collapse.moves,
            new_cells=collapse.new_cells,
        )
        logger.debug("Harvested %d cells for %d points", length, score_delta)
        self.event_bus.emit(EVENT_HARVEST_COMPLETED, result=result)
        return result
