from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from squart.components.orientation import Orientation


class NeighborhoodStatus(str, Enum):
    LOCKED = "locked"
    AVAILABLE = "available"
    COMPLETED = "completed"


class CityOutcome(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    TIE = "tie"


@dataclass(slots=True)
class CityProgress:
    unlocked: bool = False
    # Never reset back to False once set.
    completed: bool = False
    city_winner: Optional[CityOutcome] = None
    neighborhoods: Dict[str, NeighborhoodStatus] = field(default_factory=dict)
    neighborhood_results: Dict[str, Orientation] = field(default_factory=dict)


@dataclass(slots=True)
class ExtraMissionProgress:
    unlocked: bool = False
    status: NeighborhoodStatus = NeighborhoodStatus.LOCKED
    winner: Optional[Orientation] = None


@dataclass(slots=True)
class CampaignProgress:
    """Campaign progress that persists across sessions, keyed by city id."""

    cities: Dict[str, CityProgress] = field(default_factory=dict)
    extra_mission: ExtraMissionProgress = field(default_factory=ExtraMissionProgress)
