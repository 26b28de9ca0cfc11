"""Static campaign content: cities, their neighborhoods and the extra mission."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Sequence

from squart.components.layout_mask import LayoutMask
from squart.systems.board_generator import GenerationConfig

EXTRA_CITY_ID = "__extra__mission__"


@dataclass(frozen=True)
class MissionSpec:
    id: str
    name: str
    intro: str
    rows: int
    cols: int
    inactive_percentage: float
    mask: Optional[LayoutMask]
    recommended_seed: Optional[str] = None
    description: str = ""

    def generation_config(self, seed: Optional[str] = None) -> GenerationConfig:
        """Board request for this mission; falls back to the recommended seed."""
        return GenerationConfig(
            rows=self.rows,
            cols=self.cols,
            seed=seed if seed is not None else self.recommended_seed,
            inactive_percentage=self.inactive_percentage,
            mask=self.mask,
        )


@dataclass(frozen=True)
class CitySpec:
    id: str
    name: str
    description: str
    neighborhoods: Sequence[MissionSpec]

    def neighborhood_ids(self) -> list[str]:
        return [hood.id for hood in self.neighborhoods]

    def get_neighborhood(self, neighborhood_id: str) -> MissionSpec | None:
        for hood in self.neighborhoods:
            if hood.id == neighborhood_id:
                return hood
        return None


# Masks -----------------------------------------------------------------

def _aurora_core(row: int, col: int) -> bool:
    if (row < 2 and (col < 2 or col > 9)) or (row > 7 and (col < 2 or col > 9)):
        return True
    if col in (0, 11) and 3 <= row <= 6:
        return True
    return row == 4 and col in (5, 6)


def _aurora_docks(row: int, col: int) -> bool:
    if (row <= 1 and (col < 3 or col > 10)) or (row >= 10 and (col < 3 or col > 10)):
        return True
    if (col <= 1 or col >= 12) and 3 <= row <= 8:
        return True
    return row == 5 and 4 <= col <= 9


def _aurora_zenith(row: int, col: int) -> bool:
    if row in (0, 8) and (col < 4 or col > 10):
        return True
    if col in (0, 14) and 2 <= row <= 6:
        return True
    if (col < 2 and row < 2) or (col > 12 and row > 6):
        return True
    return row in (3, 5) and col in (3, 11)


def _haven_gardens(row: int, col: int) -> bool:
    if (row <= 1 and (col <= 2 or col >= 8)) or (row >= 9 and (col <= 2 or col >= 8)):
        return True
    if (col <= 1 or col >= 9) and 3 <= row <= 7:
        return True
    return abs(row - 5) <= 1 and abs(col - 5) <= 1


def _haven_canals(row: int, col: int) -> bool:
    if (row <= 1 and (col <= 1 or col >= 8)) or (row >= 11 and (col <= 1 or col >= 8)):
        return True
    if col in (3, 6) and row % 2 == 0:
        return True
    return row == 6 and col in (0, 9)


def _frontier_outpost(row: int, col: int) -> bool:
    if (col < 2 and row < 3) or (col > 13 and row > 4):
        return True
    if row in (0, 7) and (col < 4 or col > 11):
        return True
    return row in (3, 4) and col % 5 == 2


def _frontier_spires(row: int, col: int) -> bool:
    if (row <= 1 and col <= 1) or (row >= 8 and col >= 8):
        return True
    if (row >= 8 and col <= 1) or (row <= 1 and col >= 8):
        return True
    if abs(row - 4.5) <= 1 and abs(col - 4.5) <= 1:
        return True
    if row in (0, 9) and (col < 3 or col > 6):
        return True
    return col in (0, 9) and (row < 3 or row > 6)


def _frontier_veins(row: int, col: int) -> bool:
    if (row <= 1 and (col <= 1 or col >= 7)) or (row >= 12 and (col <= 1 or col >= 7)):
        return True
    if col in (2, 6) and 2 <= row <= 11 and row % 3 == 0:
        return True
    return row in (6, 7) and col == 4


def _final_showdown(row: int, col: int) -> bool:
    border = row in (0, 11) or col in (0, 11)
    central_void = 4 <= row <= 7 and 4 <= col <= 7
    diagonals = abs(row - col) == 5 or abs(row + col - 11) == 5
    return border or central_void or diagonals


def _mission(
    mission_id: str,
    name: str,
    intro: str,
    rows: int,
    cols: int,
    inactive_percentage: float,
    predicate: Callable[[int, int], bool],
    recommended_seed: str,
    description: str = "",
) -> MissionSpec:
    return MissionSpec(
        id=mission_id,
        name=name,
        intro=intro,
        rows=rows,
        cols=cols,
        inactive_percentage=inactive_percentage,
        mask=LayoutMask.from_predicate(rows, cols, predicate),
        recommended_seed=recommended_seed,
        description=description,
    )


# Cities ----------------------------------------------------------------

_CITY_SPECS: Sequence[CitySpec] = (
    CitySpec(
        id="neo-aurora",
        name="Neo Aurora",
        description="Rain-soaked neon avenues where rooftops connect like a maze.",
        neighborhoods=(
            _mission("aurora-core", "Core District",
                     "Secure the elevated plazas that power the skyline.",
                     10, 12, 22, _aurora_core, "aurora-core-01"),
            _mission("aurora-docks", "Dockside Web",
                     "Navigate the shipping cranes that slice through the harbor.",
                     12, 14, 28, _aurora_docks, "aurora-docks-02"),
            _mission("aurora-zenith", "Zenith Canopy",
                     "Sky bridges carve a lattice between mirrored towers.",
                     9, 15, 25, _aurora_zenith, "aurora-zenith-03"),
        ),
    ),
    CitySpec(
        id="solstice-haven",
        name="Solstice Haven",
        description="Gilded canals and terraced gardens steeped in dusk light.",
        neighborhoods=(
            _mission("haven-gardens", "Hanging Gardens",
                     "Guard the terraced plazas before the sun sets.",
                     11, 11, 18, _haven_gardens, "haven-gardens-01"),
            _mission("haven-canals", "Canal Labyrinth",
                     "Bridges and conduits partition the flow of movement.",
                     13, 10, 24, _haven_canals, "haven-water-03"),
        ),
    ),
    CitySpec(
        id="astral-frontier",
        name="Astral Frontier",
        description="Experimental colony clusters above the desert strata.",
        neighborhoods=(
            _mission("frontier-outpost", "Outpost Array",
                     "Radiant sensors detect every misplaced move.",
                     8, 16, 26, _frontier_outpost, "frontier-outpost-05"),
            _mission("frontier-spires", "Crystal Spires",
                     "Shards of glass obstruct sightlines across the dunes.",
                     10, 10, 30, _frontier_spires, "frontier-spires-07"),
            _mission("frontier-veins", "Auric Veins",
                     "Mine shafts open and collapse, sealing access routes.",
                     14, 9, 27, _frontier_veins, "frontier-veins-09"),
        ),
    ),
)

_CITY_INDEX: Mapping[str, CitySpec] = {city.id: city for city in _CITY_SPECS}

EXTRA_MISSION = _mission(
    "final-showdown",
    "Final Showdown",
    "Both sides are evenly matched. One last clash will decide the fate of the skyline.",
    12,
    12,
    24,
    _final_showdown,
    "final-showdown-01",
    description="A decisive duel offered when the campaign ends in a draw.",
)


def all_city_specs() -> Sequence[CitySpec]:
    """Cities in unlock order."""
    return _CITY_SPECS


def get_city_spec(city_id: str) -> CitySpec | None:
    return _CITY_INDEX.get(city_id)


def get_mission_spec(city_id: str, neighborhood_id: str) -> MissionSpec | None:
    if city_id == EXTRA_CITY_ID:
        return EXTRA_MISSION if neighborhood_id == EXTRA_MISSION.id else None
    city = get_city_spec(city_id)
    if city is None:
        return None
    return city.get_neighborhood(neighborhood_id)
