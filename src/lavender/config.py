from dataclasses import dataclass

from lavender.constants import BOARD_SIZE, MIN_CHAIN, PALETTE_SIZE, RESHUFFLE_ATTEMPTS, ROUND_SECONDS


@dataclass(slots=True, frozen=True)
class EngineConfig:
    """Explicit engine configuration supplied by the caller.

    board_size: side length N of the square board.
    palette_size: number K of distinct lavender varieties.
    round_seconds: length of a timed harvest round.
    reshuffle_attempts: full-board regenerations tried before the forced fix.
    """
    board_size: int = BOARD_SIZE
    palette_size: int = PALETTE_SIZE
    round_seconds: int = ROUND_SECONDS
    reshuffle_attempts: int = RESHUFFLE_ATTEMPTS

    def __post_init__(self) -> None:
        if self.board_size < MIN_CHAIN:
            raise ValueError(f"board_size must be at least {MIN_CHAIN}, got {self.board_size}")
        if self.palette_size < 2:
            raise ValueError(f"palette_size must be at least 2, got {self.palette_size}")
        if self.round_seconds <= 0:
            raise ValueError(f"round_seconds must be positive, got {self.round_seconds}")
        if self.reshuffle_attempts < 0:
            raise ValueError(f"reshuffle_attempts must not be negative, got {self.reshuffle_attempts}")

    def with_board(self, board_size: int | None = None, palette_size: int | None = None) -> "EngineConfig":
        return EngineConfig(
            board_size=self.board_size if board_size is None else board_size,
            palette_size=self.palette_size if palette_size is None else palette_size,
            round_seconds=self.round_seconds,
            reshuffle_attempts=self.reshuffle_attempts,
        )
