"""Balance statistics over many generated boards.

Sweeps (rows, cols, inactive percentage) combinations through the board
generator and the move counter, one board per integer seed, and ranks the
combinations by how evenly they split moves between the two orientations.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from squart.components.orientation import Orientation
from squart.systems.board_generator import GenerationConfig, generate_board
from squart.systems.board_ops import count_available_moves
from squart.utils.logger import get_logger

LOGGER = get_logger(__name__)

ROW_RANGE: Tuple[int, int] = (5, 12)
COL_RANGE: Tuple[int, int] = (5, 12)
PERCENTAGES: Sequence[float] = (0, 5, 10, 12, 15, 17, 18, 19, 20, 25, 30, 35, 40)
SEED_COUNT = 50


@dataclass(slots=True)
class CombinationRecord:
    rows: int
    cols: int
    inactive_percentage: float
    average_horizontal: float
    average_vertical: float
    zero_diff_rate: float
    average_abs_diff: float

    def format_line(self) -> str:
        return " | ".join([
            f"{self.rows}×{self.cols}",
            f"inactive {self.inactive_percentage:g}%",
            f"avg|Δ|={self.average_abs_diff:.2f}",
            f"zero {self.zero_diff_rate * 100:.0f}%",
            f"H={self.average_horizontal:.1f}",
            f"V={self.average_vertical:.1f}",
        ])


def move_samples(rows: int, cols: int, inactive_percentage: float, seed_count: int = SEED_COUNT) -> np.ndarray:
    """``(seed_count, 2)`` array of horizontal/vertical move counts for seeds 0..n-1."""
    samples = np.zeros((seed_count, 2), dtype=np.int64)
    for seed in range(seed_count):
        board = generate_board(
            GenerationConfig(rows=rows, cols=cols, seed=str(seed), inactive_percentage=inactive_percentage)
        )
        samples[seed, 0] = count_available_moves(board, Orientation.HORIZONTAL)
        samples[seed, 1] = count_available_moves(board, Orientation.VERTICAL)
    return samples


def analyze_combination(
    rows: int,
    cols: int,
    inactive_percentage: float,
    seed_count: int = SEED_COUNT,
) -> CombinationRecord:
    samples = move_samples(rows, cols, inactive_percentage, seed_count)
    diffs = samples[:, 0] - samples[:, 1]
    return CombinationRecord(
        rows=rows,
        cols=cols,
        inactive_percentage=inactive_percentage,
        average_horizontal=float(samples[:, 0].mean()),
        average_vertical=float(samples[:, 1].mean()),
        zero_diff_rate=float(np.count_nonzero(diffs == 0) / seed_count),
        average_abs_diff=float(np.abs(diffs).mean()),
    )


def _inclusive(bounds: Tuple[int, int]) -> Iterable[int]:
    low, high = bounds
    return range(low, high + 1)


def run_analysis(
    row_range: Tuple[int, int] = ROW_RANGE,
    col_range: Tuple[int, int] = COL_RANGE,
    percentages: Sequence[float] = PERCENTAGES,
    seed_count: int = SEED_COUNT,
) -> List[CombinationRecord]:
    """Every combination, best balanced first."""
    results: List[CombinationRecord] = []
    for rows in _inclusive(row_range):
        for cols in _inclusive(col_range):
            for percentage in percentages:
                results.append(analyze_combination(rows, cols, percentage, seed_count))
        LOGGER.debug("Analysed %s rows", rows)
    results.sort(key=lambda record: (record.average_abs_diff, -record.zero_diff_rate))
    return results


def diff_matrix(
    results: Sequence[CombinationRecord],
    inactive_percentage: float,
    row_range: Tuple[int, int] = ROW_RANGE,
    col_range: Tuple[int, int] = COL_RANGE,
) -> np.ndarray:
    """Average |diff| per (rows, cols) cell for one percentage; NaN where missing."""
    row_low, row_high = row_range
    col_low, col_high = col_range
    matrix = np.full((row_high - row_low + 1, col_high - col_low + 1), np.nan)
    for record in results:
        if record.inactive_percentage != inactive_percentage:
            continue
        if row_low <= record.rows <= row_high and col_low <= record.cols <= col_high:
            matrix[record.rows - row_low, record.cols - col_low] = record.average_abs_diff
    return matrix
