from __future__ import annotations

from typing import Sequence

from squart.components.board import Board, Cell
from squart.components.orientation import GameStatus, Orientation


def board_from_rows(
    rows: Sequence[str],
    *,
    current_player: Orientation = Orientation.HORIZONTAL,
) -> Board:
    """Build a board from a picture: ``.`` open, ``#`` inactive, ``x`` void."""

    cells = []
    inactive = []
    void_count = 0
    for r, line in enumerate(rows):
        row_cells = []
        for c, symbol in enumerate(line):
            cell = Cell(row=r, col=c, is_inactive=symbol == "#", is_void=symbol == "x")
            if cell.is_inactive:
                inactive.append((r, c))
            if cell.is_void:
                void_count += 1
            row_cells.append(cell)
        cells.append(row_cells)
    total = len(rows) * len(rows[0])
    playable = total - void_count
    return Board(
        rows=len(rows),
        cols=len(rows[0]),
        cells=cells,
        inactive_count=len(inactive),
        actual_inactive_percentage=(len(inactive) / playable * 100) if playable else 0.0,
        playable_square_count=playable,
        total_square_count=total,
        void_count=void_count,
        inactive_squares=inactive,
        current_player=current_player,
        status=GameStatus.ACTIVE,
    )


def open_board(rows: int, cols: int) -> Board:
    """Fully open board; horizontal minus vertical moves equals ``cols - rows``."""

    return board_from_rows(["." * cols] * rows)
