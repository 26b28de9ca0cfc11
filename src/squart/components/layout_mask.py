from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable, List, Optional, Tuple

from squart.constants import MASK_STRIDE

Position = Tuple[int, int]


def pack(row: int, col: int) -> int:
    return row * MASK_STRIDE + col


def unpack(key: int) -> Position:
    return divmod(key, MASK_STRIDE)


def _pack_all(coords: Iterable[Position]) -> FrozenSet[int]:
    packed = set()
    for row, col in coords:
        if row < 0 or col < 0 or col >= MASK_STRIDE:
            # Cannot lie on any board; ignored like other out-of-grid coordinates.
            continue
        packed.add(pack(row, col))
    return frozenset(packed)


@dataclass(frozen=True, slots=True)
class LayoutMask:
    """Allow-list or block-list of coordinates shaping the playable area.

    A non-empty ``allowed`` set takes precedence; an empty one falls back to
    ``blocked``. With both empty the mask has no effect.
    """

    allowed: FrozenSet[int] = frozenset()
    blocked: FrozenSet[int] = frozenset()

    @classmethod
    def allow(cls, coords: Iterable[Position]) -> "LayoutMask":
        return cls(allowed=_pack_all(coords))

    @classmethod
    def block(cls, coords: Iterable[Position]) -> "LayoutMask":
        return cls(blocked=_pack_all(coords))

    @classmethod
    def from_predicate(
        cls,
        rows: int,
        cols: int,
        predicate: Callable[[int, int], bool],
        *,
        allow: bool = False,
    ) -> "LayoutMask":
        """Collect every ``(row, col)`` of a rows x cols rectangle matching ``predicate``."""
        coords = [(r, c) for r in range(rows) for c in range(cols) if predicate(r, c)]
        return cls.allow(coords) if allow else cls.block(coords)

    @property
    def is_empty(self) -> bool:
        return not self.allowed and not self.blocked

    def is_void(self, row: int, col: int) -> bool:
        key = pack(row, col)
        if self.allowed:
            return key not in self.allowed
        if self.blocked:
            return key in self.blocked
        return False

    def void_grid(self, rows: int, cols: int) -> List[List[bool]]:
        """Boolean grid marking which cells the mask removes."""
        return [[self.is_void(r, c) for c in range(cols)] for r in range(rows)]

    def to_jsonable(self) -> dict:
        return {
            "allowed": sorted(list(unpack(key)) for key in self.allowed),
            "blocked": sorted(list(unpack(key)) for key in self.blocked),
        }

    @classmethod
    def from_jsonable(cls, payload: Optional[dict]) -> Optional["LayoutMask"]:
        if not payload:
            return None
        allowed = _pack_all(tuple(item) for item in payload.get("allowed", []))
        blocked = _pack_all(tuple(item) for item in payload.get("blocked", []))
        return cls(allowed=allowed, blocked=blocked)
