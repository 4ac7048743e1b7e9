from lavender.components.game_state import GameMode
from lavender.events.bus import (
    EVENT_GAME_MODE_CHANGED,
    EVENT_GAME_OVER,
    EVENT_PAUSE_TOGGLE_REQUEST,
    EVENT_RESTART_REQUEST,
    EVENT_ROUND_START_REQUEST,
    EVENT_TICK,
    EVENT_TIMER_CHANGED,
)
from lavender.systems.board_ops import has_any_valid_move
from lavender.systems.scoring import HarvestRating
from tests.helpers import make_engine


def drive_ticks(bus, count=60, dt=1.0):
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)


def test_round_starts_ready_then_plays():
    engine = make_engine()
    assert engine.mode is GameMode.READY
    modes: list[GameMode] = []
    engine.event_bus.subscribe(EVENT_GAME_MODE_CHANGED, lambda sender, **payload: modes.append(payload["new_mode"]))
    engine.event_bus.emit(EVENT_ROUND_START_REQUEST)
    assert engine.mode is GameMode.PLAYING
    assert modes == [GameMode.PLAYING]
    assert engine.session.seconds_left == 60


def test_timer_counts_down_whole_seconds():
    engine = make_engine()
    engine.start_round()
    timer: list[int] = []
    engine.event_bus.subscribe(EVENT_TIMER_CHANGED, lambda sender, **payload: timer.append(payload["time_left"]))
    drive_ticks(engine.event_bus, count=10, dt=0.5)
    assert timer == [59, 58, 57, 56, 55]
    assert engine.session.seconds_left == 55


def test_timer_does_not_run_before_round_or_while_paused():
    engine = make_engine()
    drive_ticks(engine.event_bus, count=5)
    assert engine.session.seconds_left == 60
    engine.start_round()
    drive_ticks(engine.event_bus, count=5)
    engine.event_bus.emit(EVENT_PAUSE_TOGGLE_REQUEST)
    assert engine.mode is GameMode.PAUSED
    drive_ticks(engine.event_bus, count=20)
    assert engine.session.seconds_left == 55
    engine.toggle_pause()
    assert engine.mode is GameMode.PLAYING


def test_round_ends_at_zero_with_rating():
    engine = make_engine(round_seconds=3)
    engine.start_round()
    engine.session.score = 520
    over: list[dict] = []
    engine.event_bus.subscribe(EVENT_GAME_OVER, lambda sender, **payload: over.append(payload))
    drive_ticks(engine.event_bus, count=10)
    assert engine.mode is GameMode.GAME_OVER
    assert len(over) == 1
    assert over[0]["score"] == 520
    assert over[0]["rating"] is HarvestRating.GOOD
    # Pause has no effect once the round is over.
    engine.toggle_pause()
    assert engine.mode is GameMode.GAME_OVER


def test_restart_resets_score_timer_and_board():
    engine = make_engine()
    engine.start_round()
    engine.session.score = 300
    drive_ticks(engine.event_bus, count=30)
    before = engine.grid.snapshot()
    engine.event_bus.emit(EVENT_RESTART_REQUEST)
    assert engine.mode is GameMode.PLAYING
    assert engine.session.score == 0
    assert engine.session.seconds_left == 60
    assert engine.grid.snapshot() != before
    assert has_any_valid_move(engine.grid)


def test_quit_returns_to_ready():
    engine = make_engine()
    engine.start_round()
    engine.quit_round()
    assert engine.mode is GameMode.READY
