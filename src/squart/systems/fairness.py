"""Move-balanced board selection.

Unseeded requests are rejection-sampled: boards are generated until the
horizontal/vertical move counts differ by at most ``acceptable_diff``, and
the closest candidate is kept when the attempt budget runs out. A seeded
request is generated exactly once because reproducibility wins over balance.
"""
from __future__ import annotations

import random
from dataclasses import dataclass

from squart.components.board import Board
from squart.components.orientation import Orientation
from squart.constants import FAIRNESS_ACCEPTABLE_DIFF, FAIRNESS_MAX_ATTEMPTS
from squart.systems.board_generator import GenerationConfig, generate_board
from squart.systems.board_ops import count_available_moves
from squart.utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass(slots=True)
class BalancedBoard:
    board: Board
    horizontal_moves: int
    vertical_moves: int
    diff: int
    attempts: int


def _measure(board: Board, attempts: int) -> BalancedBoard:
    horizontal = count_available_moves(board, Orientation.HORIZONTAL)
    vertical = count_available_moves(board, Orientation.VERTICAL)
    return BalancedBoard(
        board=board,
        horizontal_moves=horizontal,
        vertical_moves=vertical,
        diff=abs(horizontal - vertical),
        attempts=attempts,
    )


def generate_balanced_board(
    config: GenerationConfig,
    *,
    rng: random.Random | None = None,
    max_attempts: int = FAIRNESS_MAX_ATTEMPTS,
    acceptable_diff: int = FAIRNESS_ACCEPTABLE_DIFF,
) -> BalancedBoard:
    if config.is_seeded:
        result = _measure(generate_board(config, rng=rng), attempts=1)
        LOGGER.debug("Seeded board %r kept with move diff %s", config.seed, result.diff)
        return result

    budget = max(1, max_attempts)
    best = candidate = _measure(generate_board(config, rng=rng), attempts=1)
    while candidate.diff > acceptable_diff and candidate.attempts < budget:
        candidate = _measure(generate_board(config, rng=rng), attempts=candidate.attempts + 1)
        if candidate.diff < best.diff:
            best = candidate

    if candidate.diff <= acceptable_diff:
        LOGGER.info(
            "Balanced board found on attempt %s/%s (H=%s V=%s)",
            candidate.attempts,
            budget,
            candidate.horizontal_moves,
            candidate.vertical_moves,
        )
        return candidate

    best.attempts = budget
    LOGGER.info(
        "No board within diff %s after %s attempts; keeping best diff %s",
        acceptable_diff,
        best.attempts,
        best.diff,
    )
    return best
