"""Turn and game-status transitions.

Status only ever moves from ACTIVE to FINISHED; ``current_player`` is cleared
once the game ends.
"""
from __future__ import annotations

from squart.components.board import Board, Placement, Position
from squart.components.orientation import GameStatus, Orientation
from squart.systems.board_ops import can_place, has_available_move, resolve_coverage


def _finish(board: Board, winner: Orientation | None) -> None:
    board.status = GameStatus.FINISHED
    board.winner = winner
    board.current_player = None


def evaluate_game_status(board: Board) -> Board:
    """Settle a freshly generated board.

    The player to move keeps the turn if they can move. Otherwise the
    opponent wins outright when they still have a move, and the game is a
    draw when neither side can ever place a domino.
    """
    if board is None or not board.is_active:
        return board
    current = board.current_player
    if current is not None and has_available_move(board, current):
        return board
    opponent = current.opponent if current is not None else None
    if opponent is not None and has_available_move(board, opponent):
        _finish(board, opponent)
        return board
    _finish(board, None)
    return board


def advance_turn(board: Board, mover: Orientation) -> None:
    opponent = mover.opponent
    if not has_available_move(board, opponent):
        _finish(board, mover)
        return
    board.current_player = opponent


def place_domino(
    board: Board,
    anchor: Position,
    orientation: Orientation | None = None,
) -> Placement | None:
    """Place the current player's domino at ``anchor``.

    Returns the new :class:`Placement`, or None (leaving the board untouched)
    when the game is over, it is not ``orientation``'s turn, the domino
    leaves the grid, or a covered cell is not open.
    """
    if board is None or not board.is_active:
        return None
    if orientation is None:
        orientation = board.current_player
    if orientation is None or orientation != board.current_player:
        return None
    orientation = Orientation(orientation)
    positions = resolve_coverage(board, anchor, orientation)
    if positions is None or not can_place(board, positions):
        return None

    for row, col in positions:
        board.cells[row][col].occupied_by = orientation
    placement = Placement(orientation=orientation, positions=positions)
    board.placements.append(placement)
    advance_turn(board, orientation)
    return placement
