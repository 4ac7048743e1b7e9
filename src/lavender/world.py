import random

from esper import World

from lavender.components.game_state import GameMode, GameState
from lavender.components.harvest_session import HarvestSession
from lavender.components.selection import ActiveSelection
from lavender.config import EngineConfig
from lavender.events.bus import EventBus


def create_world(
    event_bus: EventBus,
    initial_mode: GameMode = GameMode.READY,
    *,
    config: EngineConfig | None = None,
    rng: random.Random | None = None,
) -> World:
    """Create the ECS world holding round-level singletons.

    The board entity itself is created by BoardSystem. ``world.random`` is the
    single random source shared by generation, refill and reshuffle.
    """
    config = config or EngineConfig()
    world = World()
    setattr(world, "random", rng or random.Random())

    # Round-level singletons share one entity.
    world.create_entity(
        GameState(mode=initial_mode),
        HarvestSession(time_left=float(config.round_seconds)),
        ActiveSelection(),
    )
    return world
