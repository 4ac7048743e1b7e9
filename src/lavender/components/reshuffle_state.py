from dataclasses import dataclass
from enum import Enum, auto


class ReshufflePhase(Enum):
    STABLE = auto()
    RESHUFFLING = auto()
    FORCED_FIX = auto()


@dataclass(slots=True)
class ReshuffleState:
    """Tracks the board's reshuffle repair state machine.

    phase settles back to STABLE after a successful regeneration, or remains
    FORCED_FIX when the last repair had to construct a move directly.
    """
    phase: ReshufflePhase = ReshufflePhase.STABLE
    last_attempts: int = 0
    total_reshuffles: int = 0
    total_forced: int = 0
