from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from squart.components.orientation import GameStatus, Orientation

Position = Tuple[int, int]


@dataclass(slots=True)
class Cell:
    """One square of the grid.

    States are exclusive in priority order: void, inactive, occupied, open.
    """

    row: int
    col: int
    is_inactive: bool = False
    is_void: bool = False
    occupied_by: Optional[Orientation] = None

    def is_open(self) -> bool:
        return not self.is_void and not self.is_inactive and self.occupied_by is None


@dataclass(slots=True)
class Placement:
    orientation: Orientation
    positions: Tuple[Position, Position]


@dataclass(slots=True)
class Board:
    """Complete game board, built whole by the generator.

    Only the turn functions in ``squart.systems.turn_ops`` mutate it.
    """

    rows: int
    cols: int
    cells: List[List[Cell]]
    seed: Optional[str] = None
    inactive_count: int = 0
    actual_inactive_percentage: float = 0.0
    requested_inactive_percentage: Optional[float] = None
    playable_square_count: int = 0
    total_square_count: int = 0
    void_count: int = 0
    inactive_squares: List[Position] = field(default_factory=list)
    placements: List[Placement] = field(default_factory=list)
    current_player: Optional[Orientation] = Orientation.HORIZONTAL
    status: GameStatus = GameStatus.ACTIVE
    winner: Optional[Orientation] = None

    def cell(self, row: int, col: int) -> Optional[Cell]:
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return self.cells[row][col]
        return None

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    @property
    def is_active(self) -> bool:
        return self.status is GameStatus.ACTIVE

    @property
    def occupied_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell.occupied_by is not None)
