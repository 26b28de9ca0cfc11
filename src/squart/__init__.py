"""Squart: two-player domino tiling on generated boards."""

from squart.components.board import Board, Cell, Placement
from squart.components.layout_mask import LayoutMask
from squart.components.orientation import GameStatus, Orientation
from squart.exceptions import (
    BoardGenerationError,
    InvalidDimensions,
    InvalidPercentage,
    MaskExcludesAllCells,
    SquartError,
)
from squart.systems.board_generator import GenerationConfig, generate, generate_board
from squart.systems.board_ops import (
    board_snapshot,
    can_place,
    count_available_moves,
    has_available_move,
    resolve_coverage,
)
from squart.systems.fairness import BalancedBoard, generate_balanced_board
from squart.systems.turn_ops import place_domino

__version__ = "0.1.0"

__all__ = [
    "BalancedBoard",
    "Board",
    "BoardGenerationError",
    "Cell",
    "GameStatus",
    "GenerationConfig",
    "InvalidDimensions",
    "InvalidPercentage",
    "LayoutMask",
    "MaskExcludesAllCells",
    "Orientation",
    "Placement",
    "SquartError",
    "board_snapshot",
    "can_place",
    "count_available_moves",
    "generate",
    "generate_board",
    "generate_balanced_board",
    "has_available_move",
    "place_domino",
    "resolve_coverage",
]
