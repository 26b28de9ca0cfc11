"""Deterministic pseudo-random streams for board generation.

A seed string is folded into 32-bit state with the cyrb128 avalanche hash and
expanded with the mulberry32 permutation. The arithmetic is kept to unsigned
32-bit words, so a given seed yields the same sequence on every platform.
"""
from __future__ import annotations

import random
from typing import Callable, Tuple

RandomFn = Callable[[], float]

_MASK32 = 0xFFFFFFFF
_TWO_POW_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


def cyrb128(text: str) -> Tuple[int, int, int, int]:
    """Hash ``text`` into four unsigned 32-bit words."""
    h1, h2, h3, h4 = 1779033703, 3144134277, 1013904242, 2773480762
    encoded = text.encode("utf-16-le")
    for index in range(0, len(encoded), 2):
        # One UTF-16 code unit at a time.
        k = encoded[index] | (encoded[index + 1] << 8)
        h1 = h2 ^ _imul(h1 ^ k, 597399067)
        h2 = h3 ^ _imul(h2 ^ k, 2869860233)
        h3 = h4 ^ _imul(h3 ^ k, 951274213)
        h4 = h1 ^ _imul(h4 ^ k, 2716044179)
    h1 = _imul(h3 ^ (h1 >> 18), 597399067)
    h2 = _imul(h4 ^ (h2 >> 22), 2869860233)
    h3 = _imul(h1 ^ (h3 >> 17), 951274213)
    h4 = _imul(h2 ^ (h4 >> 19), 2716044179)
    return (h1 ^ h2 ^ h3 ^ h4) & _MASK32, (h2 ^ h1) & _MASK32, (h3 ^ h1) & _MASK32, (h4 ^ h1) & _MASK32


class Mulberry32:
    """32-bit state generator returning floats in ``[0, 1)``."""

    __slots__ = ("state",)

    def __init__(self, state: int) -> None:
        self.state = state & _MASK32

    def next_uint32(self) -> int:
        self.state = (self.state + 0x6D2B79F5) & _MASK32
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return (t ^ (t >> 14)) & _MASK32

    def random(self) -> float:
        return self.next_uint32() / _TWO_POW_32

    __call__ = random


def create_random(seed: object | None = None) -> RandomFn:
    """Return a ``() -> float`` stream for ``seed``.

    ``None`` gives a non-reproducible stream backed by system entropy. Any
    other value is converted with ``str`` first, so ``7`` and ``"7"`` share a
    sequence.
    """
    if seed is None:
        return random.Random().random
    state = cyrb128(str(seed))[0]
    return Mulberry32(state).random
