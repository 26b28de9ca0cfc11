import random

from squart.components.board import Board
from squart.components.layout_mask import LayoutMask
from squart.components.orientation import Orientation
from squart.events.bus import (
    EventBus,
    EVENT_BOARD_GENERATE_REQUEST,
    EVENT_BOARD_GENERATED,
    EVENT_CELL_CLICK,
    EVENT_DOMINO_PLACED,
    EVENT_GAME_FINISHED,
    EVENT_PLACEMENT_REJECTED,
    EVENT_TURN_ADVANCED,
)
from squart.systems.board_generator import GenerationConfig
from squart.systems.board_system import BoardSystem
from squart.world import create_world


def _recorder(bus, *names):
    events = []
    for name in names:
        bus.subscribe(name, lambda sender, _name=name, **payload: events.append((_name, payload)))
    return events


def _setup(rng=None):
    bus = EventBus()
    world = create_world(bus, rng=rng)
    system = BoardSystem(world, bus)
    return world, bus, system


def test_generate_request_builds_board_and_publishes_snapshot():
    world, bus, system = _setup()
    events = _recorder(bus, EVENT_BOARD_GENERATED)

    bus.emit(
        EVENT_BOARD_GENERATE_REQUEST,
        config=GenerationConfig(rows=5, cols=5, seed="test", inactive_percentage=0),
    )

    assert system.has_board
    (name, payload), = events
    assert payload["attempts"] == 1
    assert payload["diff"] == 0
    assert payload["snapshot"]["moves"] == {"horizontal": 20, "vertical": 20}
    assert payload["snapshot"]["seed"] == "test"


def test_generate_request_without_config_uses_defaults():
    world, bus, system = _setup(rng=random.Random(3))
    bus.emit(EVENT_BOARD_GENERATE_REQUEST)

    snapshot = system.snapshot()
    assert (snapshot["rows"], snapshot["cols"]) == (10, 10)


def test_new_board_replaces_previous_one():
    world, bus, system = _setup()
    system.generate(GenerationConfig(rows=5, cols=5, seed="a"))
    entity = system.board_entity
    system.generate(GenerationConfig(rows=6, cols=8, seed="b"))

    assert system.board_entity == entity
    board = world.component_for_entity(entity, Board)
    assert (board.rows, board.cols) == (6, 8)
    assert len(list(world.get_component(Board))) == 1


def test_snapshot_is_detached_from_live_board():
    world, bus, system = _setup()
    system.generate(GenerationConfig(rows=5, cols=5, seed="test", inactive_percentage=0))

    snapshot = system.snapshot()
    snapshot["cells"][0][0]["occupied_by"] = "horizontal"
    snapshot["placements"].append({"orientation": "horizontal", "positions": [[0, 0], [0, 1]]})

    assert system.snapshot()["placements"] == []
    assert system.snapshot()["cells"][0][0]["occupied_by"] is None


def test_cell_click_places_domino_and_advances_turn():
    world, bus, system = _setup()
    system.generate(GenerationConfig(rows=5, cols=5, seed="test", inactive_percentage=0))
    events = _recorder(bus, EVENT_DOMINO_PLACED, EVENT_TURN_ADVANCED, EVENT_GAME_FINISHED)

    bus.emit(EVENT_CELL_CLICK, row=0, col=0)

    assert [name for name, _ in events] == [EVENT_DOMINO_PLACED, EVENT_TURN_ADVANCED]
    placed = events[0][1]
    assert placed["orientation"] is Orientation.HORIZONTAL
    assert placed["positions"] == [(0, 0), (0, 1)]
    advanced = events[1][1]
    assert advanced["previous_player"] is Orientation.HORIZONTAL
    assert advanced["current_player"] is Orientation.VERTICAL
    assert system.snapshot()["current_player"] == "vertical"


def test_illegal_click_is_rejected():
    world, bus, system = _setup()
    system.generate(GenerationConfig(rows=5, cols=5, seed="test", inactive_percentage=0))
    events = _recorder(bus, EVENT_PLACEMENT_REJECTED, EVENT_DOMINO_PLACED)

    bus.emit(EVENT_CELL_CLICK, row=0, col=4)

    assert events == [
        (EVENT_PLACEMENT_REJECTED, {"row": 0, "col": 4, "orientation": Orientation.HORIZONTAL}),
    ]
    assert system.snapshot()["placements"] == []


def test_blocking_move_finishes_game():
    world, bus, system = _setup()
    mask = LayoutMask.allow([(0, 0), (0, 1), (0, 2)])
    system.generate(GenerationConfig(rows=5, cols=5, seed="strip", inactive_percentage=0, mask=mask))
    events = _recorder(bus, EVENT_TURN_ADVANCED, EVENT_GAME_FINISHED)

    placement = system.place(0, 0)

    assert placement is not None
    assert events == [(EVENT_GAME_FINISHED, {"winner": Orientation.HORIZONTAL, "placements": 1, "mission": None})]
    assert system.snapshot()["status"] == "finished"
    assert system.place(0, 1) is None


def test_board_settled_at_creation_reports_finish():
    world, bus, system = _setup()
    events = _recorder(bus, EVENT_BOARD_GENERATED, EVENT_GAME_FINISHED)
    mask = LayoutMask.allow([(0, 0), (1, 0)])

    system.generate(GenerationConfig(rows=5, cols=5, seed="column", inactive_percentage=0, mask=mask))

    assert [name for name, _ in events] == [EVENT_BOARD_GENERATED, EVENT_GAME_FINISHED]
    assert events[1][1] == {"winner": Orientation.VERTICAL, "placements": 0, "mission": None}


def test_clicks_before_any_board_are_ignored():
    world, bus, system = _setup()
    events = _recorder(bus, EVENT_PLACEMENT_REJECTED, EVENT_DOMINO_PLACED)

    bus.emit(EVENT_CELL_CLICK, row=0, col=0)

    assert events == []
    assert system.snapshot() is None
    assert not system.has_board


def test_unbalanced_generation_makes_a_single_attempt():
    world, bus, system = _setup(rng=random.Random(11))
    events = _recorder(bus, EVENT_BOARD_GENERATED)

    system.generate(GenerationConfig(rows=5, cols=7, inactive_percentage=0), balanced=False)

    assert events[0][1]["attempts"] == 1
    assert events[0][1]["diff"] == 2


def test_mission_tag_is_carried_to_finish():
    world, bus, system = _setup()
    events = _recorder(bus, EVENT_BOARD_GENERATED, EVENT_GAME_FINISHED)
    mask = LayoutMask.allow([(0, 0), (0, 1), (0, 2)])

    system.generate(
        GenerationConfig(rows=5, cols=5, seed="strip", inactive_percentage=0, mask=mask),
        mission=("neo-aurora", "aurora-core"),
    )
    system.place(0, 0)

    assert events[0][1]["mission"] == ("neo-aurora", "aurora-core")
    assert events[1] == (
        EVENT_GAME_FINISHED,
        {"winner": Orientation.HORIZONTAL, "placements": 1, "mission": ("neo-aurora", "aurora-core")},
    )

    system.generate(GenerationConfig(rows=5, cols=5, seed="free"))
    assert system.mission is None
