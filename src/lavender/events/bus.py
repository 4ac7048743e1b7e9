import logging
from typing import Dict

from blinker import Signal

logger = logging.getLogger(__name__)


class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems alive even when nobody holds the system.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            logger.debug("emit %s %s", name, sorted(payload))
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float (seconds)


# ============================================================================
# INPUT
# ============================================================================
EVENT_CELL_PRESSED = "cell_pressed"                # payload: row, col
EVENT_CELL_ENTERED = "cell_entered"                # payload: row, col
EVENT_POINTER_RELEASED = "pointer_released"        # payload: None
EVENT_POINTER_LEFT = "pointer_left"                # payload: None


# ============================================================================
# SELECTION
# ============================================================================
EVENT_SELECTION_STARTED = "selection_started"      # payload: position=(r,c), tag=int
EVENT_SELECTION_EXTENDED = "selection_extended"    # payload: position=(r,c), length=int
EVENT_SELECTION_REJECTED = "selection_rejected"    # payload: position=(r,c)|None, reason=str
EVENT_SELECTION_CLEARED = "selection_cleared"      # payload: reason=str, length=int


# ============================================================================
# BOARD
# ============================================================================
EVENT_BOARD_GENERATED = "board_generated"          # payload: size=int, palette_size=int, reshuffled=bool
EVENT_HARVEST_REQUEST = "harvest_request"          # payload: selection=Selection
EVENT_HARVEST_COMPLETED = "harvest_completed"      # payload: result=CommitResult
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=[GravityMove,...]
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_cells=[(r,c),...]
EVENT_BOARD_RESHUFFLED = "board_reshuffled"        # payload: attempts=int, forced=bool, reason=str


# ============================================================================
# SESSION & GAME FLOW
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int, tier=ComboTier
EVENT_TIMER_CHANGED = "timer_changed"              # payload: time_left=int
EVENT_GAME_MODE_CHANGED = "game_mode_changed"      # payload: previous_mode=GameMode|None, new_mode=GameMode
EVENT_GAME_OVER = "game_over"                      # payload: score=int, rating=HarvestRating, harvests=int
EVENT_ROUND_START_REQUEST = "round_start_request"  # payload: None
EVENT_PAUSE_TOGGLE_REQUEST = "pause_toggle_request"  # payload: None
EVENT_RESTART_REQUEST = "restart_request"          # payload: None
EVENT_QUIT_REQUEST = "quit_request"                # payload: None
