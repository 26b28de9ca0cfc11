"""Exception hierarchy for board generation."""


class SquartError(Exception):
    """Base exception for the game core."""


class BoardGenerationError(SquartError, ValueError):
    """Raised when a generation request cannot produce a board."""


class InvalidDimensions(BoardGenerationError):
    """Rows or columns are not integers within the supported range."""


class InvalidPercentage(BoardGenerationError):
    """The inactive percentage override is not a number."""


class MaskExcludesAllCells(BoardGenerationError):
    """The layout mask leaves no playable cell on the board."""
