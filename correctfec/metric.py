"""Distance metrics between code outputs and received symbols."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from itertools import islice

SOFT_MAX = 0xFF
DISTANCE_MAX = 0xFFFF


class SoftMeasurement(enum.Enum):
    """How soft symbols are compared against hard output bits."""

    LINEAR = enum.auto()
    QUADRATIC = enum.auto()


def popcount(x: int) -> int:
    """Number of set bits in the unsigned 32-bit value of ``x``."""
    return bin(x & 0xFFFFFFFF).count("1")


def hamming_distance(x: int, y: int) -> int:
    """Hamming distance between two bit strings."""
    return popcount(x ^ y)


def _soft_symbols(hard_x: int, soft: Iterable[int], length: int):
    for value in islice(soft, length):
        yield value, (SOFT_MAX if hard_x & 1 else 0)
        hard_x >>= 1


def soft_distance_linear(hard_x: int, soft: Iterable[int], length: int) -> int:
    """Sum of absolute differences between soft symbols and the bits of ``hard_x``."""
    total = sum(abs(value - expected) for value, expected in _soft_symbols(hard_x, soft, length))
    return total & DISTANCE_MAX


def soft_distance_quadratic(hard_x: int, soft: Iterable[int], length: int) -> int:
    """Squared euclidean distance, kept to 16 bits and divided by 8."""
    total = sum((value - expected) ** 2 for value, expected in _soft_symbols(hard_x, soft, length))
    return (total & DISTANCE_MAX) >> 3