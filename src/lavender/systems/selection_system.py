from typing import Optional

from esper import World

from lavender.components.game_state import GameMode
from lavender.components.selection import ActiveSelection, Selection
from lavender.errors import NotPlaying, SelectionRejected
from lavender.events.bus import (
    EventBus,
    EVENT_CELL_ENTERED,
    EVENT_BOARD_GENERATED,
    EVENT_BOARD_RESHUFFLED,
    EVENT_CELL_PRESSED,
    EVENT_GAME_MODE_CHANGED,
    EVENT_HARVEST_REQUEST,
    EVENT_POINTER_LEFT,
    EVENT_POINTER_RELEASED,
    EVENT_SELECTION_CLEARED,
    EVENT_SELECTION_EXTENDED,
    EVENT_SELECTION_REJECTED,
    EVENT_SELECTION_STARTED,
)
from lavender.systems.board_ops import get_grid
from lavender.systems.selection_ops import extend_selection, start_selection
from lavender.utils.game_state import get_game_mode


class SelectionSystem:
    """Turns pointer events into a traced chain.

    Logic:
      - EVENT_CELL_PRESSED starts a new chain at the pressed cell and begins a drag.
      - EVENT_CELL_ENTERED extends the chain while dragging; illegal cells are
        dropped and reported via EVENT_SELECTION_REJECTED. Hovering without a
        press and re-entering the last traced cell are ignored.
      - EVENT_POINTER_RELEASED requests a harvest when the chain is long enough
        and clears it either way.
      - EVENT_POINTER_LEFT abandons the chain.
      - A regenerated or reshuffled board drops the chain.
    Input is only accepted while the round is PLAYING.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_CELL_PRESSED, self.on_cell_pressed)
        self.event_bus.subscribe(EVENT_CELL_ENTERED, self.on_cell_entered)
        self.event_bus.subscribe(EVENT_POINTER_RELEASED, self.on_pointer_released)
        self.event_bus.subscribe(EVENT_POINTER_LEFT, self.on_pointer_left)
        self.event_bus.subscribe(EVENT_GAME_MODE_CHANGED, self.on_game_mode_changed)
        self.event_bus.subscribe(EVENT_BOARD_GENERATED, self.on_board_replaced)
        self.event_bus.subscribe(EVENT_BOARD_RESHUFFLED, self.on_board_replaced)

    @property
    def selection(self) -> Optional[Selection]:
        return self._active().selection

    def _active(self) -> ActiveSelection:
        for _, active in self.world.get_component(ActiveSelection):
            return active
        self.world.create_entity(ActiveSelection())
        return list(self.world.get_component(ActiveSelection))[0][1]

    def _require_playing(self, position) -> None:
        if get_game_mode(self.world) != GameMode.PLAYING:
            raise NotPlaying("the round is not running", position)

    def on_cell_pressed(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        self._start((row, col))

    def on_cell_entered(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        active = self._active()
        if not active.dragging or active.selection is None:
            return
        position = (row, col)
        if position == active.selection.tail:
            return
        try:
            self._require_playing(position)
            extended = extend_selection(get_grid(self.world), active.selection, position)
        except SelectionRejected as exc:
            self.event_bus.emit(EVENT_SELECTION_REJECTED, position=position, reason=exc.reason)
            return
        active.selection = extended
        self.event_bus.emit(EVENT_SELECTION_EXTENDED, position=position, length=len(extended))

    def on_pointer_released(self, sender, **kwargs):
        active = self._active()
        active.dragging = False
        selection = active.selection
        if selection is None:
            return
        if selection.committable and get_game_mode(self.world) == GameMode.PLAYING:
            self.clear(reason="committed")
            self.event_bus.emit(EVENT_HARVEST_REQUEST, selection=selection)
        else:
            self.clear(reason="too_short")

    def on_pointer_left(self, sender, **kwargs):
        self.clear(reason="pointer_left")

    def on_game_mode_changed(self, sender, **kwargs):
        if kwargs.get('new_mode') != GameMode.PLAYING:
            self.clear(reason="mode_changed")

    def on_board_replaced(self, sender, **kwargs):
        self.clear(reason="board_replaced")

    def clear(self, reason: str) -> None:
        active = self._active()
        active.dragging = False
        if active.selection is None:
            return
        length = len(active.selection)
        active.selection = None
        self.event_bus.emit(EVENT_SELECTION_CLEARED, reason=reason, length=length)

    def _start(self, position) -> None:
        active = self._active()
        try:
            self._require_playing(position)
            selection = start_selection(get_grid(self.world), position)
        except SelectionRejected as exc:
            self.event_bus.emit(EVENT_SELECTION_REJECTED, position=position, reason=exc.reason)
            return
        if active.selection is not None:
            self.clear(reason="restarted")
        active.selection = selection
        active.dragging = True
        self.event_bus.emit(EVENT_SELECTION_STARTED, position=position, tag=selection.tag)
