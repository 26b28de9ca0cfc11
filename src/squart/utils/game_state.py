from __future__ import annotations

from esper import World

from squart.components.game_state import GameState


def get_game_state(world: World) -> GameState:
    """Return the session GameState, creating it if the world has none."""
    for _, state in world.get_component(GameState):
        return state
    state = GameState()
    world.create_entity(state)
    return state
