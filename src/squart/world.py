import random

from esper import World

from squart.components.game_state import GameMode, GameState
from squart.events.bus import EventBus


def create_world(
    event_bus: EventBus,
    initial_mode: GameMode = GameMode.FREE_PLAY,
    *,
    rng: random.Random | None = None,
) -> World:
    """Create the ECS world with its session resource.

    ``world.random`` feeds unseeded board generation so a host can make whole
    sessions reproducible by passing a seeded ``random.Random``.
    """
    world = World()
    setattr(world, "random", rng or random.Random())

    state_entity = world.create_entity()
    world.add_component(state_entity, GameState(mode=initial_mode))
    return world
