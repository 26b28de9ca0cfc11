"""Session state resource describing what the current board is for."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class GameMode(Enum):
    FREE_PLAY = auto()
    CAMPAIGN = auto()


@dataclass(slots=True)
class GameState:
    """Singleton component storing the session mode and the running mission."""
    mode: GameMode = GameMode.FREE_PLAY
    active_city_id: Optional[str] = None
    active_neighborhood_id: Optional[str] = None

    def clear_mission(self) -> None:
        self.mode = GameMode.FREE_PLAY
        self.active_city_id = None
        self.active_neighborhood_id = None
