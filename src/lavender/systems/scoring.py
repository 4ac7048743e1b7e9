from enum import Enum

from lavender.constants import (
    BASE_SCORE,
    COMBO_CHAIN_LENGTH,
    MAX_COMBO_MULTIPLIER,
    MEGA_COMBO_CHAIN_LENGTH,
    MIN_CHAIN,
    RATING_DECENT,
    RATING_EXCELLENT,
    RATING_GOOD,
)
from lavender.errors import SubThresholdCommit


class ComboTier(Enum):
    CONNECTIONS = "connections"
    COMBO = "combo"
    MEGA_COMBO = "mega_combo"


class HarvestRating(Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    DECENT = "decent"
    KEEP_TRYING = "keep_trying"


def _require_chain(length: int) -> None:
    if length < MIN_CHAIN:
        raise SubThresholdCommit(f"a chain needs at least {MIN_CHAIN} cells, got {length}")


def score_for_chain(length: int) -> int:
    """Points for harvesting a chain: base * length * (1 + combo * 0.5), combo capped at five.

    Computed in integers; ``base * length * combo / 2`` is always whole because base is even.
    """
    _require_chain(length)
    combo = min(length - 2, MAX_COMBO_MULTIPLIER)
    return BASE_SCORE * length * (2 + combo) // 2


def combo_tier(length: int) -> ComboTier:
    _require_chain(length)
    if length >= MEGA_COMBO_CHAIN_LENGTH:
        return ComboTier.MEGA_COMBO
    if length >= COMBO_CHAIN_LENGTH:
        return ComboTier.COMBO
    return ComboTier.CONNECTIONS


def harvest_rating(score: int) -> HarvestRating:
    if score >= RATING_EXCELLENT:
        return HarvestRating.EXCELLENT
    if score >= RATING_GOOD:
        return HarvestRating.GOOD
    if score >= RATING_DECENT:
        return HarvestRating.DECENT
    return HarvestRating.KEEP_TRYING
