from __future__ import annotations

import json
from pathlib import Path

from esper import World

from squart.components.campaign_progress import CampaignProgress, NeighborhoodStatus
from squart.components.game_state import GameMode
from squart.components.orientation import Orientation
from squart.constants import CAMPAIGN_SAVE_VERSION, CAMPAIGN_STORAGE_KEY
from squart.events.bus import (
    EVENT_BOARD_GENERATE_REQUEST,
    EVENT_CAMPAIGN_PROGRESS_CHANGED,
    EVENT_EXTRA_MISSION_UNLOCKED,
    EVENT_GAME_FINISHED,
    EVENT_MISSION_STARTED,
    EventBus,
)
from squart.factories.campaign import get_mission_spec
from squart.systems.campaign_ops import (
    campaign_view,
    complete_neighborhood,
    default_progress,
    find_neighborhood,
    progress_from_blob,
    progress_to_blob,
)
from squart.utils.game_state import get_game_state
from squart.utils.logger import get_logger


LOGGER = get_logger(__name__)


class CampaignProgressSystem:
    """Tracks and persists campaign unlocks and mission results across sessions."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        save_path: Path | None = None,
        load_existing: bool = True,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._save_path = Path(save_path) if save_path is not None else self._default_save_path()
        self._progress_entity = self._ensure_progress_entity()

        self.event_bus.subscribe(EVENT_BOARD_GENERATE_REQUEST, self._on_generate_request)
        self.event_bus.subscribe(EVENT_GAME_FINISHED, self._on_game_finished)

        if load_existing:
            self.load_progress()
        else:
            self.reset_progress()

    @staticmethod
    def _default_save_path() -> Path:
        return Path(__file__).resolve().parents[3] / "data" / "campaign_progress.json"

    @property
    def save_path(self) -> Path:
        return self._save_path

    def _ensure_progress_entity(self) -> int:
        existing = list(self.world.get_component(CampaignProgress))
        if existing:
            return existing[0][0]
        return self.world.create_entity(default_progress())

    def progress(self) -> CampaignProgress:
        return self.world.component_for_entity(self._progress_entity, CampaignProgress)

    def _replace_progress(self, progress: CampaignProgress) -> None:
        self.world.add_component(self._progress_entity, progress)

    # Persistence --------------------------------------------------------

    def load_progress(self) -> None:
        try:
            with self._save_path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            self._replace_progress(default_progress())
            self.save_progress()
            return
        except json.JSONDecodeError:
            LOGGER.warning("Unable to parse campaign progress in %s, falling back to defaults", self._save_path)
            self._replace_progress(default_progress())
            self.save_progress()
            return

        if (
            not isinstance(payload, dict)
            or payload.get("version") != CAMPAIGN_SAVE_VERSION
            or payload.get("key") != CAMPAIGN_STORAGE_KEY
        ):
            LOGGER.warning("Ignoring campaign progress in %s with unknown format", self._save_path)
            self._replace_progress(default_progress())
            self.save_progress()
            return
        self._replace_progress(progress_from_blob(payload.get("progress")))

    def reset_progress(self) -> None:
        self._replace_progress(default_progress())
        get_game_state(self.world).clear_mission()
        self.save_progress()

    def save_progress(self) -> None:
        self._save_path.parent.mkdir(parents=True, exist_ok=True)
        with self._save_path.open("w", encoding="utf-8") as handle:
            json.dump({
                "version": CAMPAIGN_SAVE_VERSION,
                "key": CAMPAIGN_STORAGE_KEY,
                "progress": progress_to_blob(self.progress()),
            }, handle, indent=2)

    # Commands -----------------------------------------------------------

    def state(self) -> dict:
        return campaign_view(self.progress())

    def start_mission(self, city_id: str, neighborhood_id: str, *, seed: str | None = None) -> bool:
        """Begin a campaign board; refuses unknown or still-locked missions."""
        spec = get_mission_spec(city_id, neighborhood_id)
        found = find_neighborhood(self.progress(), city_id, neighborhood_id)
        if spec is None or found is None:
            LOGGER.warning("Unknown mission %s/%s", city_id, neighborhood_id)
            return False
        _, hood = found
        if hood["status"] == NeighborhoodStatus.LOCKED.value:
            LOGGER.info("Mission %s/%s is still locked", city_id, neighborhood_id)
            return False

        state = get_game_state(self.world)
        state.mode = GameMode.CAMPAIGN
        state.active_city_id = city_id
        state.active_neighborhood_id = neighborhood_id
        self.event_bus.emit(EVENT_MISSION_STARTED, city_id=city_id, neighborhood_id=neighborhood_id)
        self.event_bus.emit(
            EVENT_BOARD_GENERATE_REQUEST,
            config=spec.generation_config(seed),
            balanced=True,
            mission=(city_id, neighborhood_id),
        )
        return True

    def complete_mission(
        self,
        city_id: str,
        neighborhood_id: str,
        winner: Orientation | str | None,
    ) -> None:
        winner = Orientation(winner) if winner else None
        progress = self.progress()
        was_unlocked = progress.extra_mission.unlocked
        complete_neighborhood(progress, city_id, neighborhood_id, winner)
        self.save_progress()
        self.event_bus.emit(
            EVENT_CAMPAIGN_PROGRESS_CHANGED,
            city_id=city_id,
            neighborhood_id=neighborhood_id,
            winner=winner,
        )
        if progress.extra_mission.unlocked != was_unlocked:
            self.event_bus.emit(EVENT_EXTRA_MISSION_UNLOCKED, unlocked=progress.extra_mission.unlocked)

    # Event handlers -----------------------------------------------------

    def _on_generate_request(self, sender, **payload) -> None:
        state = get_game_state(self.world)
        if state.mode is not GameMode.CAMPAIGN:
            return
        active = (state.active_city_id, state.active_neighborhood_id)
        if payload.get("mission") != active:
            # Any other board abandons the running mission.
            LOGGER.info("Mission %s/%s abandoned for a new board", *active)
            state.clear_mission()

    def _on_game_finished(self, sender, **payload) -> None:
        state = get_game_state(self.world)
        if state.mode is not GameMode.CAMPAIGN or state.active_city_id is None:
            return
        city_id = state.active_city_id
        neighborhood_id = state.active_neighborhood_id
        mission = payload.get("mission")
        if mission is None or tuple(mission) != (city_id, neighborhood_id):
            return
        state.clear_mission()
        self.complete_mission(city_id, neighborhood_id, payload.get("winner"))
