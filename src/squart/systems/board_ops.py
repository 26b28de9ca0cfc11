"""Placement geometry and legal-move queries.

Everything here is a pure query over a :class:`Board`; nothing mutates it.
"""
from __future__ import annotations

from typing import Dict, Iterator, List, Sequence, Tuple

from squart.components.board import Board, Position
from squart.components.orientation import Orientation

Coverage = Tuple[Position, Position]


def resolve_coverage(board: Board, anchor: Position, orientation: Orientation) -> Coverage | None:
    """Return the two cells a domino anchored at ``anchor`` covers, or None if it leaves the grid."""
    if anchor is None:
        return None
    try:
        row, col = anchor
    except (TypeError, ValueError):
        return None
    if isinstance(row, bool) or isinstance(col, bool):
        return None
    if not isinstance(row, int) or not isinstance(col, int):
        return None
    try:
        offsets = Orientation(orientation).offsets
    except ValueError:
        return None
    (dr0, dc0), (dr1, dc1) = offsets
    first = (row + dr0, col + dc0)
    second = (row + dr1, col + dc1)
    if board.contains(*first) and board.contains(*second):
        return first, second
    return None


def can_place(board: Board, positions: Sequence[Position] | None) -> bool:
    """True iff every position is an open cell (not void, inactive or occupied)."""
    if not positions:
        return False
    for row, col in positions:
        cell = board.cell(row, col)
        if cell is None or not cell.is_open():
            return False
    return True


def _iterate_coverages(board: Board, orientation: Orientation) -> Iterator[Tuple[Position, Coverage]]:
    for row in range(board.rows):
        for col in range(board.cols):
            if board.cells[row][col].is_void:
                continue
            coverage = resolve_coverage(board, (row, col), orientation)
            if coverage is not None:
                yield (row, col), coverage


def has_available_move(board: Board, orientation: Orientation) -> bool:
    """Short-circuit scan for any legal placement; always False once the game is over."""
    if board is None or not board.is_active:
        return False
    return any(can_place(board, coverage) for _, coverage in _iterate_coverages(board, orientation))


def count_available_moves(board: Board, orientation: Orientation) -> int:
    if board is None:
        return 0
    return sum(1 for _, coverage in _iterate_coverages(board, orientation) if can_place(board, coverage))


def available_moves(board: Board, orientation: Orientation) -> List[Position]:
    """Anchors of every legal placement in row-major order."""
    return [anchor for anchor, coverage in _iterate_coverages(board, orientation) if can_place(board, coverage)]


def move_counts(board: Board) -> Dict[Orientation, int]:
    return {orientation: count_available_moves(board, orientation) for orientation in Orientation}


def move_difference(board: Board) -> int:
    counts = move_counts(board)
    return abs(counts[Orientation.HORIZONTAL] - counts[Orientation.VERTICAL])


def board_snapshot(board: Board) -> dict:
    """JSON-able copy of ``board`` with per-orientation move counts."""
    counts = move_counts(board)
    return {
        "rows": board.rows,
        "cols": board.cols,
        "seed": board.seed,
        "inactive_count": board.inactive_count,
        "actual_inactive_percentage": board.actual_inactive_percentage,
        "requested_inactive_percentage": board.requested_inactive_percentage,
        "playable_square_count": board.playable_square_count,
        "total_square_count": board.total_square_count,
        "void_count": board.void_count,
        "status": board.status.value,
        "current_player": board.current_player.value if board.current_player else None,
        "winner": board.winner.value if board.winner else None,
        "moves": {orientation.value: count for orientation, count in counts.items()},
        "placements": [
            {
                "orientation": placement.orientation.value,
                "positions": [list(position) for position in placement.positions],
            }
            for placement in board.placements
        ],
        "cells": [
            [
                {
                    "row": cell.row,
                    "col": cell.col,
                    "is_inactive": cell.is_inactive,
                    "is_void": cell.is_void,
                    "occupied_by": cell.occupied_by.value if cell.occupied_by else None,
                }
                for cell in row
            ]
            for row in board.cells
        ],
    }

