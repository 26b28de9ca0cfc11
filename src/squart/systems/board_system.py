from __future__ import annotations

import random
from typing import Optional, Tuple

from esper import World

from squart.components.board import Board, Placement
from squart.constants import FAIRNESS_ACCEPTABLE_DIFF, FAIRNESS_MAX_ATTEMPTS
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
from squart.systems.board_ops import board_snapshot
from squart.systems.fairness import generate_balanced_board
from squart.systems.turn_ops import place_domino
from squart.utils.logger import get_logger


LOGGER = get_logger(__name__)


class BoardSystem:
    """Sole owner of the live board.

    Generation requests replace the board component wholesale; cell clicks
    are interpreted as placements for the current player. Other systems and
    hosts only ever see snapshots.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        rng: random.Random | None = None,
        max_attempts: int = FAIRNESS_MAX_ATTEMPTS,
        acceptable_diff: int = FAIRNESS_ACCEPTABLE_DIFF,
    ):
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None)
        self.max_attempts = max_attempts
        self.acceptable_diff = acceptable_diff
        self.board_entity: Optional[int] = None
        # Campaign mission the current board was generated for, if any.
        self.mission: Optional[Tuple[str, str]] = None
        self.event_bus.subscribe(EVENT_BOARD_GENERATE_REQUEST, self.on_generate_request)
        self.event_bus.subscribe(EVENT_CELL_CLICK, self.on_cell_click)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_generate_request(self, sender, **payload):
        config = payload.get("config")
        if config is None:
            config = GenerationConfig()
        self.generate(config, balanced=payload.get("balanced", True), mission=payload.get("mission"))

    def on_cell_click(self, sender, **payload):
        row = payload.get("row")
        col = payload.get("col")
        if row is None or col is None:
            return
        self.place(row, col)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def generate(
        self,
        config: GenerationConfig,
        *,
        balanced: bool = True,
        mission: Optional[Tuple[str, str]] = None,
    ) -> dict:
        if balanced:
            result = generate_balanced_board(
                config,
                rng=self._rng,
                max_attempts=self.max_attempts,
                acceptable_diff=self.acceptable_diff,
            )
        else:
            result = generate_balanced_board(config, rng=self._rng, max_attempts=1)
        self._store(result.board)
        self.mission = tuple(mission) if mission is not None else None
        snapshot = board_snapshot(result.board)
        self.event_bus.emit(
            EVENT_BOARD_GENERATED,
            snapshot=snapshot,
            attempts=result.attempts,
            diff=result.diff,
            mission=self.mission,
        )
        if not result.board.is_active:
            # Settled at creation: one side has no move, or neither does.
            self.event_bus.emit(
                EVENT_GAME_FINISHED,
                winner=result.board.winner,
                placements=0,
                mission=self.mission,
            )
        return snapshot

    def place(self, row: int, col: int) -> Placement | None:
        board = self._board()
        if board is None:
            return None
        mover = board.current_player
        placement = place_domino(board, (row, col))
        if placement is None:
            LOGGER.debug("Rejected placement at (%s,%s) for %s", row, col, mover)
            self.event_bus.emit(EVENT_PLACEMENT_REJECTED, row=row, col=col, orientation=mover)
            return None
        self.event_bus.emit(
            EVENT_DOMINO_PLACED,
            orientation=placement.orientation,
            positions=list(placement.positions),
        )
        if board.is_active:
            self.event_bus.emit(
                EVENT_TURN_ADVANCED,
                previous_player=mover,
                current_player=board.current_player,
            )
        else:
            self.event_bus.emit(
                EVENT_GAME_FINISHED,
                winner=board.winner,
                placements=len(board.placements),
                mission=self.mission,
            )
        return placement

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def has_board(self) -> bool:
        return self._board() is not None

    def snapshot(self) -> dict | None:
        board = self._board()
        if board is None:
            return None
        return board_snapshot(board)

    def _store(self, board: Board) -> None:
        if self.board_entity is None:
            self.board_entity = self.world.create_entity(board)
        else:
            # add_component replaces the previous Board on the same entity.
            self.world.add_component(self.board_entity, board)

    def _board(self) -> Board | None:
        if self.board_entity is None:
            return None
        try:
            return self.world.component_for_entity(self.board_entity, Board)
        except KeyError:
            return None
