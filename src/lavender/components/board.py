from dataclasses import dataclass

@dataclass(slots=True)
class Board:
    size: int
    palette_size: int
