import math
from dataclasses import dataclass

from lavender.constants import ROUND_SECONDS

@dataclass(slots=True)
class HarvestSession:
    """Score and timer for one timed round.

    time_left is kept as float seconds; presentation reads whole seconds via ``seconds_left``.
    """
    score: int = 0
    time_left: float = float(ROUND_SECONDS)
    harvests: int = 0
    longest_chain: int = 0

    @property
    def seconds_left(self) -> int:
        return max(0, math.ceil(self.time_left))

    def reset(self, round_seconds: int) -> None:
        self.score = 0
        self.time_left = float(round_seconds)
        self.harvests = 0
        self.longest_chain = 0
