from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from lavender.constants import EMPTY

Position = Tuple[int, int]


@dataclass(slots=True)
class Grid:
    """Square matrix of cell tags, row-major with row 0 on top.

    Cells hold a palette index in ``[0, palette_size)`` or ``EMPTY`` while a
    collapse is in progress.
    """
    size: int
    cells: List[List[int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[EMPTY] * self.size for _ in range(self.size)]
        elif len(self.cells) != self.size or any(len(row) != self.size for row in self.cells):
            raise ValueError(f"cells must be a {self.size}x{self.size} matrix")

    @classmethod
    def from_rows(cls, rows: List[List[int]]) -> "Grid":
        return cls(size=len(rows), cells=[list(row) for row in rows])

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, row: int, col: int) -> int:
        return self.cells[row][col]

    def set(self, row: int, col: int, tag: int) -> None:
        self.cells[row][col] = tag

    def positions(self) -> Iterator[Position]:
        for row in range(self.size):
            for col in range(self.size):
                yield row, col

    def column(self, col: int) -> List[int]:
        return [self.cells[row][col] for row in range(self.size)]

    def empty_positions(self) -> List[Position]:
        return [pos for pos in self.positions() if self.cells[pos[0]][pos[1]] == EMPTY]

    def replace(self, other: "Grid") -> None:
        """Overwrite this grid in place with the contents of another of the same size."""
        if other.size != self.size:
            raise ValueError(f"cannot replace a {self.size}x{self.size} grid with {other.size}x{other.size}")
        for row in range(self.size):
            self.cells[row][:] = other.cells[row]

    def copy(self) -> "Grid":
        return Grid(size=self.size, cells=[list(row) for row in self.cells])

    def snapshot(self) -> Tuple[Tuple[int, ...], ...]:
        return tuple(tuple(row) for row in self.cells)
