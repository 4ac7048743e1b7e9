from dataclasses import dataclass
from typing import Optional, Tuple

from lavender.constants import MIN_CHAIN

Position = Tuple[int, int]


@dataclass(slots=True, frozen=True)
class Selection:
    """Player-traced chain of coordinates.

    Immutable: extending returns a new Selection so a rejected extension can
    never leave a half-updated chain behind. ``tag`` is the tag shared by every
    accepted cell, or None for the empty selection.
    """
    positions: Tuple[Position, ...] = ()
    tag: Optional[int] = None

    def __len__(self) -> int:
        return len(self.positions)

    def __contains__(self, position: object) -> bool:
        return position in self.positions

    @property
    def tail(self) -> Optional[Position]:
        return self.positions[-1] if self.positions else None

    @property
    def committable(self) -> bool:
        return len(self.positions) >= MIN_CHAIN

    def appended(self, position: Position) -> "Selection":
        return Selection(positions=self.positions + (position,), tag=self.tag)


@dataclass(slots=True)
class ActiveSelection:
    """Singleton component holding the selection currently being traced, if any.

    ``dragging`` is set while the pointer is held down after a press.
    """
    selection: Optional[Selection] = None
    dragging: bool = False
