"""Timed harvest round: score, countdown, pause and game over."""
from __future__ import annotations

import logging

from esper import World

from lavender.components.game_state import GameMode
from lavender.components.harvest_session import HarvestSession
from lavender.constants import ROUND_SECONDS
from lavender.events.bus import (
    EventBus,
    EVENT_GAME_OVER,
    EVENT_HARVEST_COMPLETED,
    EVENT_PAUSE_TOGGLE_REQUEST,
    EVENT_QUIT_REQUEST,
    EVENT_RESTART_REQUEST,
    EVENT_ROUND_START_REQUEST,
    EVENT_SCORE_CHANGED,
    EVENT_TICK,
    EVENT_TIMER_CHANGED,
)
from lavender.systems.board import BoardSystem
from lavender.systems.scoring import harvest_rating
from lavender.utils.game_state import get_game_mode, get_or_create_session, set_game_mode

logger = logging.getLogger(__name__)


class SessionSystem:
    """Runs the sixty-second round around the board.

    The countdown only advances on EVENT_TICK while PLAYING; pausing freezes
    it. Harvest scores are added to the session as they complete.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        board_system: BoardSystem,
        *,
        round_seconds: int = ROUND_SECONDS,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.board_system = board_system
        self.round_seconds = round_seconds

        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_HARVEST_COMPLETED, self.on_harvest_completed)
        self.event_bus.subscribe(EVENT_ROUND_START_REQUEST, self._on_round_start_request)
        self.event_bus.subscribe(EVENT_PAUSE_TOGGLE_REQUEST, self._on_pause_toggle_request)
        self.event_bus.subscribe(EVENT_RESTART_REQUEST, self._on_restart_request)
        self.event_bus.subscribe(EVENT_QUIT_REQUEST, self._on_quit_request)

    @property
    def session(self) -> HarvestSession:
        return get_or_create_session(self.world)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_round_start_request(self, sender, **payload) -> None:
        self.start_round()

    def _on_pause_toggle_request(self, sender, **payload) -> None:
        self.toggle_pause()

    def _on_restart_request(self, sender, **payload) -> None:
        self.restart()

    def _on_quit_request(self, sender, **payload) -> None:
        self.quit_round()

    def on_tick(self, sender, **kwargs) -> None:
        dt = kwargs.get('dt', 0.0)
        if dt <= 0 or get_game_mode(self.world) != GameMode.PLAYING:
            return
        session = self.session
        before = session.seconds_left
        session.time_left = max(0.0, session.time_left - dt)
        after = session.seconds_left
        if after != before:
            self.event_bus.emit(EVENT_TIMER_CHANGED, time_left=after)
        if session.time_left <= 0:
            self.end_round()

    def on_harvest_completed(self, sender, **kwargs) -> None:
        result = kwargs.get('result')
        if result is None:
            return
        session = self.session
        session.score += result.score_delta
        session.harvests += 1
        session.longest_chain = max(session.longest_chain, len(result.removed_coords))
        self.event_bus.emit(
            EVENT_SCORE_CHANGED,
            score=session.score,
            delta=result.score_delta,
            tier=result.tier,
        )

    # ------------------------------------------------------------------
    # Round flow
    # ------------------------------------------------------------------

    def start_round(self) -> None:
        session = self.session
        session.reset(self.round_seconds)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=0, delta=0, tier=None)
        self.event_bus.emit(EVENT_TIMER_CHANGED, time_left=session.seconds_left)
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)

    def toggle_pause(self) -> None:
        mode = get_game_mode(self.world)
        if mode == GameMode.PLAYING:
            set_game_mode(self.world, self.event_bus, GameMode.PAUSED)
        elif mode == GameMode.PAUSED:
            set_game_mode(self.world, self.event_bus, GameMode.PLAYING)

    def end_round(self) -> None:
        session = self.session
        rating = harvest_rating(session.score)
        set_game_mode(self.world, self.event_bus, GameMode.GAME_OVER)
        logger.info("Round over: %d points from %d harvests (%s)", session.score, session.harvests, rating.value)
        self.event_bus.emit(
            EVENT_GAME_OVER,
            score=session.score,
            rating=rating,
            harvests=session.harvests,
            longest_chain=session.longest_chain,
        )

    def restart(self) -> None:
        self.board_system.new_board(reason="restart")
        self.start_round()

    def quit_round(self) -> None:
        set_game_mode(self.world, self.event_bus, GameMode.READY)
