"""Campaign progression rules.

Every function takes the whole :class:`CampaignProgress` value and updates it
in place, so callers read-modify-write the blob as a single unit. ``cities``
defaults to the shipped campaign and only needs overriding in tools/tests.
"""
from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple

from squart.components.campaign_progress import (
    CampaignProgress,
    CityOutcome,
    CityProgress,
    ExtraMissionProgress,
    NeighborhoodStatus,
)
from squart.components.orientation import Orientation
from squart.factories.campaign import EXTRA_CITY_ID, EXTRA_MISSION, CitySpec, MissionSpec, all_city_specs

Cities = Optional[Sequence[CitySpec]]


def _cities(cities: Cities) -> Sequence[CitySpec]:
    return all_city_specs() if cities is None else cities


def _coerce_winner(winner) -> Optional[Orientation]:
    if not winner:
        return None
    try:
        return Orientation(winner)
    except ValueError:
        return None


def determine_city_winner(horizontal: int, vertical: int) -> Optional[CityOutcome]:
    if horizontal == 0 and vertical == 0:
        return None
    if horizontal == vertical:
        return CityOutcome.TIE
    return CityOutcome.HORIZONTAL if horizontal > vertical else CityOutcome.VERTICAL


def update_extra_mission(progress: CampaignProgress, horizontal_cities: int, vertical_cities: int) -> None:
    """Offer the extra mission while the city tally is a non-zero tie.

    A completed extra mission is left alone whatever the tally says.
    """
    extra = progress.extra_mission
    campaign_draw = horizontal_cities == vertical_cities and (horizontal_cities + vertical_cities) > 0
    if extra.status is NeighborhoodStatus.COMPLETED:
        if campaign_draw:
            extra.unlocked = True
        return
    if campaign_draw:
        extra.unlocked = True
        extra.status = NeighborhoodStatus.AVAILABLE
    else:
        extra.unlocked = False
        extra.status = NeighborhoodStatus.LOCKED
    extra.winner = None


def enforce_sequential_unlocks(progress: CampaignProgress, cities: Cities = None) -> CampaignProgress:
    """Normalize ``progress`` against the campaign layout.

    Unlocks every city whose predecessors are all complete, opens the first
    neighborhood of each unlocked city, drops results of neighborhoods that
    are not completed and recomputes city winners and the extra mission.
    """
    previous_completed = True
    horizontal_cities = 0
    vertical_cities = 0
    for city in _cities(cities):
        city_progress = progress.cities.setdefault(city.id, CityProgress())
        if previous_completed:
            city_progress.unlocked = True

        all_completed = True
        horizontal = 0
        vertical = 0
        for index, hood in enumerate(city.neighborhoods):
            status = city_progress.neighborhoods.get(hood.id)
            if status is None:
                status = (
                    NeighborhoodStatus.AVAILABLE
                    if city_progress.unlocked and index == 0
                    else NeighborhoodStatus.LOCKED
                )
            elif city_progress.unlocked and index == 0 and status is NeighborhoodStatus.LOCKED:
                status = NeighborhoodStatus.AVAILABLE
            city_progress.neighborhoods[hood.id] = status

            if status is NeighborhoodStatus.COMPLETED:
                winner = city_progress.neighborhood_results.get(hood.id)
                if winner is Orientation.HORIZONTAL:
                    horizontal += 1
                elif winner is Orientation.VERTICAL:
                    vertical += 1
            else:
                city_progress.neighborhood_results.pop(hood.id, None)
                all_completed = False

        if all_completed:
            city_progress.completed = True
        city_progress.city_winner = determine_city_winner(horizontal, vertical) if city_progress.completed else None
        if city_progress.city_winner is CityOutcome.HORIZONTAL:
            horizontal_cities += 1
        elif city_progress.city_winner is CityOutcome.VERTICAL:
            vertical_cities += 1
        previous_completed = previous_completed and city_progress.completed

    update_extra_mission(progress, horizontal_cities, vertical_cities)
    return progress


def default_progress(cities: Cities = None) -> CampaignProgress:
    return enforce_sequential_unlocks(CampaignProgress(), cities)


def unlock_next_neighborhood(
    progress: CampaignProgress,
    city_id: str,
    neighborhood_id: str,
    cities: Cities = None,
) -> None:
    """Open whatever follows ``neighborhood_id``.

    The next neighborhood of the same city goes LOCKED to AVAILABLE; after the
    last one the city is marked complete and the next city is unlocked.
    """
    ordered = list(_cities(cities))
    city_index = next((i for i, city in enumerate(ordered) if city.id == city_id), None)
    if city_index is None:
        return
    city = ordered[city_index]
    hood_ids = city.neighborhood_ids()
    if neighborhood_id not in hood_ids:
        return
    city_progress = progress.cities.setdefault(city.id, CityProgress())
    position = hood_ids.index(neighborhood_id)
    if position + 1 < len(hood_ids):
        next_id = hood_ids[position + 1]
        if city_progress.neighborhoods.get(next_id, NeighborhoodStatus.LOCKED) is NeighborhoodStatus.LOCKED:
            city_progress.neighborhoods[next_id] = NeighborhoodStatus.AVAILABLE
        return

    city_progress.completed = True
    if city_index + 1 < len(ordered):
        next_city = progress.cities.setdefault(ordered[city_index + 1].id, CityProgress())
        next_city.unlocked = True


def set_neighborhood_status(
    progress: CampaignProgress,
    city_id: str,
    neighborhood_id: str,
    status: NeighborhoodStatus | str,
    winner: Orientation | str | None = None,
    cities: Cities = None,
) -> CampaignProgress:
    """Write one neighborhood status and re-normalize.

    ``EXTRA_CITY_ID`` addresses the extra mission. Unknown cities and
    neighborhoods leave ``progress`` untouched.
    """
    status = NeighborhoodStatus(status)
    winner = _coerce_winner(winner)
    enforce_sequential_unlocks(progress, cities)

    if city_id == EXTRA_CITY_ID:
        extra = progress.extra_mission
        extra.status = status
        extra.winner = winner if status is NeighborhoodStatus.COMPLETED else None
        return enforce_sequential_unlocks(progress, cities)

    city = next((item for item in _cities(cities) if item.id == city_id), None)
    if city is None or city.get_neighborhood(neighborhood_id) is None:
        return progress

    city_progress = progress.cities[city_id]
    city_progress.neighborhoods[neighborhood_id] = status
    if status is NeighborhoodStatus.COMPLETED and winner is not None:
        city_progress.neighborhood_results[neighborhood_id] = winner
    else:
        # Draws are recorded without a winner.
        city_progress.neighborhood_results.pop(neighborhood_id, None)
    if status is NeighborhoodStatus.COMPLETED:
        unlock_next_neighborhood(progress, city_id, neighborhood_id, cities)
    return enforce_sequential_unlocks(progress, cities)


def complete_neighborhood(
    progress: CampaignProgress,
    city_id: str,
    neighborhood_id: str,
    winner: Orientation | str | None,
    cities: Cities = None,
) -> CampaignProgress:
    return set_neighborhood_status(
        progress, city_id, neighborhood_id, NeighborhoodStatus.COMPLETED, winner, cities
    )


# Read models -------------------------------------------------------------

def _mission_view(spec: MissionSpec, status: NeighborhoodStatus, winner: Optional[Orientation]) -> dict:
    return {
        "id": spec.id,
        "name": spec.name,
        "intro": spec.intro,
        "description": spec.description,
        "rows": spec.rows,
        "cols": spec.cols,
        "inactive_percentage": spec.inactive_percentage,
        "recommended_seed": spec.recommended_seed,
        "status": status.value,
        "winner": winner.value if winner else None,
    }


def _extra_view(extra: ExtraMissionProgress) -> dict:
    view = _mission_view(EXTRA_MISSION, extra.status, extra.winner)
    view["unlocked"] = extra.unlocked
    return view


def campaign_view(progress: CampaignProgress, cities: Cities = None) -> dict:
    """JSON-able campaign state merged with the static mission content."""
    city_views = []
    for city in _cities(cities):
        city_progress = progress.cities.get(city.id) or CityProgress()
        hoods = [
            _mission_view(
                hood,
                city_progress.neighborhoods.get(hood.id, NeighborhoodStatus.LOCKED),
                city_progress.neighborhood_results.get(hood.id),
            )
            for hood in city.neighborhoods
        ]
        city_views.append({
            "id": city.id,
            "name": city.name,
            "description": city.description,
            "unlocked": city_progress.unlocked,
            "completed": city_progress.completed,
            "city_winner": city_progress.city_winner.value if city_progress.city_winner else None,
            "neighborhoods": hoods,
            "completed_count": sum(1 for hood in hoods if hood["status"] == NeighborhoodStatus.COMPLETED.value),
            "available_count": sum(1 for hood in hoods if hood["status"] == NeighborhoodStatus.AVAILABLE.value),
            "total_count": len(hoods),
        })
    return {"cities": city_views, "extra_mission": _extra_view(progress.extra_mission)}


def find_neighborhood(
    progress: CampaignProgress,
    city_id: str,
    neighborhood_id: str,
    cities: Cities = None,
) -> Tuple[dict, dict] | None:
    """Return ``(city_view, neighborhood_view)`` or None when either id is unknown."""
    if city_id == EXTRA_CITY_ID:
        if neighborhood_id != EXTRA_MISSION.id:
            return None
        mission = _extra_view(progress.extra_mission)
        city = {
            "id": EXTRA_CITY_ID,
            "name": EXTRA_MISSION.name,
            "description": EXTRA_MISSION.description,
            "completed": mission["status"] == NeighborhoodStatus.COMPLETED.value,
            "city_winner": mission["winner"],
            "neighborhoods": [mission],
        }
        return city, mission
    for city in campaign_view(progress, cities)["cities"]:
        if city["id"] != city_id:
            continue
        for hood in city["neighborhoods"]:
            if hood["id"] == neighborhood_id:
                return city, hood
        return None
    return None


# Persistence blob ----------------------------------------------------------

def progress_to_blob(progress: CampaignProgress) -> Dict[str, dict]:
    blob: Dict[str, dict] = {}
    for city_id, city_progress in progress.cities.items():
        blob[city_id] = {
            "unlocked": city_progress.unlocked,
            "completed": city_progress.completed,
            "cityWinner": city_progress.city_winner.value if city_progress.city_winner else None,
            "neighborhoods": {key: status.value for key, status in city_progress.neighborhoods.items()},
            "neighborhoodResults": {key: winner.value for key, winner in city_progress.neighborhood_results.items()},
        }
    extra = progress.extra_mission
    blob["extraMission"] = {
        "unlocked": extra.unlocked,
        "status": extra.status.value,
        "winner": extra.winner.value if extra.winner else None,
    }
    return blob


def _parse_status(value) -> Optional[NeighborhoodStatus]:
    try:
        return NeighborhoodStatus(value)
    except ValueError:
        return None


def progress_from_blob(blob, cities: Cities = None) -> CampaignProgress:
    """Rebuild progress from a stored blob, skipping entries it cannot read."""
    progress = CampaignProgress()
    if not isinstance(blob, dict):
        return enforce_sequential_unlocks(progress, cities)

    for city_id, payload in blob.items():
        if city_id == "extraMission" or not isinstance(payload, dict):
            continue
        city_progress = CityProgress(
            unlocked=bool(payload.get("unlocked", False)),
            completed=bool(payload.get("completed", False)),
        )
        for hood_id, raw_status in (payload.get("neighborhoods") or {}).items():
            status = _parse_status(raw_status)
            if status is not None:
                city_progress.neighborhoods[hood_id] = status
        for hood_id, raw_winner in (payload.get("neighborhoodResults") or {}).items():
            winner = _coerce_winner(raw_winner)
            if winner is not None:
                city_progress.neighborhood_results[hood_id] = winner
        progress.cities[city_id] = city_progress

    extra_payload = blob.get("extraMission")
    if isinstance(extra_payload, dict):
        progress.extra_mission = ExtraMissionProgress(
            unlocked=bool(extra_payload.get("unlocked", False)),
            status=_parse_status(extra_payload.get("status")) or NeighborhoodStatus.LOCKED,
            winner=_coerce_winner(extra_payload.get("winner")),
        )
    return enforce_sequential_unlocks(progress, cities)
