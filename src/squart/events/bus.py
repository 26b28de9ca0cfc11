from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# BOARD LIFECYCLE
# ============================================================================
EVENT_BOARD_GENERATE_REQUEST = "board_generate_request"  # payload: config=GenerationConfig, balanced=bool, mission=(city_id, neighborhood_id)|None
EVENT_BOARD_GENERATED = "board_generated"                # payload: snapshot=dict, attempts=int, diff=int, mission


# ============================================================================
# PLACEMENT & TURNS
# ============================================================================
EVENT_CELL_CLICK = "cell_click"                          # payload: row, col
EVENT_DOMINO_PLACED = "domino_placed"                    # payload: orientation, positions=[(r,c),(r,c)]
EVENT_PLACEMENT_REJECTED = "placement_rejected"          # payload: row, col, orientation
EVENT_TURN_ADVANCED = "turn_advanced"                    # payload: previous_player, current_player
EVENT_GAME_FINISHED = "game_finished"                    # payload: winner=Orientation|None, placements=int, mission


# ============================================================================
# CAMPAIGN
# ============================================================================
EVENT_MISSION_STARTED = "mission_started"                        # payload: city_id, neighborhood_id
EVENT_CAMPAIGN_PROGRESS_CHANGED = "campaign_progress_changed"    # payload: city_id, neighborhood_id, winner
EVENT_EXTRA_MISSION_UNLOCKED = "extra_mission_unlocked"          # payload: unlocked=bool
