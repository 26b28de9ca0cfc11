from __future__ import annotations

from enum import Enum


class Orientation(str, Enum):
    """Domino shape and player identity at the same time."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def opponent(self) -> "Orientation":
        if self is Orientation.HORIZONTAL:
            return Orientation.VERTICAL
        return Orientation.HORIZONTAL

    @property
    def offsets(self) -> tuple[tuple[int, int], tuple[int, int]]:
        """Cells covered relative to the anchor."""
        if self is Orientation.HORIZONTAL:
            return ((0, 0), (0, 1))
        return ((0, 0), (1, 0))


class GameStatus(str, Enum):
    ACTIVE = "active"
    FINISHED = "finished"
