"""Engine error taxonomy.

Every selection rejection is local and non-fatal: the grid and the selection
are left exactly as they were before the offending call.
"""
from typing import Optional, Tuple

Position = Tuple[int, int]


class EngineError(Exception):
    """Base class for all board engine errors."""


class SelectionRejected(EngineError):
    reason = "rejected"

    def __init__(self, message: str, position: Optional[Position] = None):
        super().__init__(message)
        self.position = position


class InvalidCoordinate(SelectionRejected):
    reason = "invalid_coordinate"


class NonAdjacentExtension(SelectionRejected):
    reason = "non_adjacent"


class TagMismatch(SelectionRejected):
    reason = "tag_mismatch"


class DuplicateCoordinate(SelectionRejected):
    reason = "duplicate"


class SubThresholdCommit(SelectionRejected):
    reason = "sub_threshold"


class NotPlaying(SelectionRejected):
    reason = "not_playing"
