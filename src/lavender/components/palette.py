from dataclasses import dataclass
from typing import List, Tuple

from lavender.constants import LAVENDER_VARIETIES


@dataclass(slots=True, frozen=True)
class Palette:
    """Display names and colours of the lavender varieties on the board.

    Stored on the board entity next to the Board and Grid components. A cell's
    tag is an index into ``names``/``colors``; the palette never changes for
    the lifetime of a game.
    """
    names: Tuple[str, ...]
    colors: Tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.names) != len(self.colors):
            raise ValueError("palette names and colors must have the same length")
        if len(set(self.names)) != len(self.names):
            raise ValueError("palette names must be distinct")

    @classmethod
    def lavender(cls, size: int) -> "Palette":
        """Build a palette of ``size`` varieties, extending the canonical four with numbered extras."""
        names: List[str] = []
        colors: List[str] = []
        for index in range(size):
            if index < len(LAVENDER_VARIETIES):
                name, color = LAVENDER_VARIETIES[index]
            else:
                name, color = f"lavender_{index}", LAVENDER_VARIETIES[index % len(LAVENDER_VARIETIES)][1]
            names.append(name)
            colors.append(color)
        return cls(names=tuple(names), colors=tuple(colors))

    def __len__(self) -> int:
        return len(self.names)

    def tags(self) -> range:
        return range(len(self.names))

    def name_for(self, tag: int) -> str:
        return self.names[tag]

    def color_for(self, tag: int) -> str:
        return self.colors[tag]
