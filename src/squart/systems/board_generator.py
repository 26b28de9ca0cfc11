"""Board generation: mask resolution, inactive squares and initial status."""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from squart.components.board import Board, Cell, Position
from squart.components.layout_mask import LayoutMask
from squart.components.orientation import GameStatus, Orientation
from squart.constants import (
    DEFAULT_COLS,
    DEFAULT_MAX_INACTIVE_RATIO,
    DEFAULT_MIN_INACTIVE_RATIO,
    DEFAULT_ROWS,
    MAX_BOARD_SIZE,
    MAX_CUSTOM_INACTIVE_PERCENTAGE,
    MIN_BOARD_SIZE,
)
from squart.exceptions import InvalidDimensions, InvalidPercentage, MaskExcludesAllCells
from squart.systems.turn_ops import evaluate_game_status
from squart.utils.logger import get_logger
from squart.utils.random_source import RandomFn, create_random


LOGGER = get_logger(__name__)


def _coerce_dimension(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _coerce_percentage(value: object) -> float:
    if isinstance(value, bool):
        raise InvalidPercentage(f"Invalid inactive percentage: {value!r}")
    try:
        numeric = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidPercentage(f"Invalid inactive percentage: {value!r}") from exc
    if math.isnan(numeric):
        raise InvalidPercentage(f"Invalid inactive percentage: {value!r}")
    return numeric


@dataclass(frozen=True)
class GenerationConfig:
    """Validated generation request.

    Raises :class:`InvalidDimensions` or :class:`InvalidPercentage` on
    construction instead of coercing bad input silently.
    """

    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    seed: Optional[str] = None
    inactive_percentage: Optional[float] = None
    mask: Optional[LayoutMask] = None
    min_size: int = MIN_BOARD_SIZE
    max_size: int = MAX_BOARD_SIZE

    def __post_init__(self) -> None:
        rows = _coerce_dimension(self.rows)
        cols = _coerce_dimension(self.cols)
        if rows is None or cols is None:
            raise InvalidDimensions(
                f"Board dimensions must be integers, got {self.rows!r}x{self.cols!r}"
            )
        if not (self.min_size <= rows <= self.max_size and self.min_size <= cols <= self.max_size):
            raise InvalidDimensions(
                f"Board dimensions must be within {self.min_size}-{self.max_size}, got {rows}x{cols}"
            )
        object.__setattr__(self, "rows", rows)
        object.__setattr__(self, "cols", cols)
        if self.seed is not None:
            object.__setattr__(self, "seed", str(self.seed))
        if self.inactive_percentage is not None:
            object.__setattr__(self, "inactive_percentage", _coerce_percentage(self.inactive_percentage))

    @property
    def is_seeded(self) -> bool:
        return self.seed is not None


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def determine_inactive_count(
    playable: int,
    random_fn: RandomFn,
    percentage_override: Optional[float] = None,
    *,
    min_ratio: float = DEFAULT_MIN_INACTIVE_RATIO,
    max_ratio: float = DEFAULT_MAX_INACTIVE_RATIO,
    max_percentage: float = MAX_CUSTOM_INACTIVE_PERCENTAGE,
) -> Tuple[int, Optional[float]]:
    """Return ``(inactive_count, requested_percentage)`` for ``playable`` cells.

    The random stream is consumed only when no override is given.
    """
    if percentage_override is not None:
        clamped = min(max(percentage_override, 0.0), float(max_percentage))
        count = _round_half_up((clamped / 100) * playable)
        return min(playable, max(0, count)), clamped

    lower = math.ceil(playable * min_ratio)
    upper = math.floor(playable * max_ratio)
    if lower <= upper:
        return int(random_fn() * (upper - lower + 1)) + lower, None

    fallback = max(1, min(playable - 2, lower))
    return min(playable, fallback), None


def shuffle_in_place(items: List[Position], random_fn: RandomFn) -> List[Position]:
    """Durstenfeld shuffle driven by ``random_fn``."""
    for i in range(len(items) - 1, 0, -1):
        j = int(random_fn() * (i + 1))
        items[i], items[j] = items[j], items[i]
    return items


def generate_board(config: GenerationConfig, *, rng: random.Random | None = None) -> Board:
    """Build a complete board for ``config``.

    ``rng`` only feeds unseeded requests; a seeded config always draws from
    its own reproducible stream.
    """
    if config.seed is not None:
        random_fn = create_random(config.seed)
    elif rng is not None:
        random_fn = rng.random
    else:
        random_fn = create_random(None)

    rows, cols = config.rows, config.cols
    mask = config.mask
    void_grid = mask.void_grid(rows, cols) if mask is not None and not mask.is_empty else None

    cells: List[List[Cell]] = []
    playable_positions: List[Position] = []
    for r in range(rows):
        row_cells: List[Cell] = []
        for c in range(cols):
            is_void = bool(void_grid and void_grid[r][c])
            row_cells.append(Cell(row=r, col=c, is_void=is_void))
            if not is_void:
                playable_positions.append((r, c))
        cells.append(row_cells)

    playable = len(playable_positions)
    total = rows * cols
    if playable == 0:
        raise MaskExcludesAllCells(f"Layout mask leaves no playable cells on a {rows}x{cols} board")

    inactive_count, requested = determine_inactive_count(playable, random_fn, config.inactive_percentage)

    shuffle_in_place(playable_positions, random_fn)
    inactive_squares = playable_positions[:inactive_count]
    for r, c in inactive_squares:
        cells[r][c].is_inactive = True

    board = Board(
        rows=rows,
        cols=cols,
        cells=cells,
        seed=config.seed,
        inactive_count=inactive_count,
        actual_inactive_percentage=(inactive_count / playable) * 100,
        requested_inactive_percentage=requested,
        playable_square_count=playable,
        total_square_count=total,
        void_count=total - playable,
        inactive_squares=list(inactive_squares),
        current_player=Orientation.HORIZONTAL,
        status=GameStatus.ACTIVE,
    )
    evaluate_game_status(board)
    LOGGER.debug(
        "Generated %sx%s board seed=%r playable=%s inactive=%s status=%s",
        rows,
        cols,
        config.seed,
        playable,
        inactive_count,
        board.status.value,
    )
    return board


def generate(
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLS,
    seed: Optional[str] = None,
    inactive_percentage: Optional[float] = None,
    mask: Optional[LayoutMask] = None,
    *,
    rng: random.Random | None = None,
) -> Board:
    """Keyword-argument front door for :func:`generate_board`."""
    config = GenerationConfig(
        rows=rows,
        cols=cols,
        seed=seed,
        inactive_percentage=inactive_percentage,
        mask=mask,
    )
    return generate_board(config, rng=rng)
