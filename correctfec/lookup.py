"""Output tables for a convolutional code and the pair lookup built from them."""

from __future__ import annotations

from collections.abc import Sequence

from correctfec.metric import popcount


def fill_table(rate: int, order: int, poly: Sequence[int]) -> tuple[int, ...]:
    """Return the encoder output for every shift register state.

    The first polynomial gives the least significant output bit.
    """
    if len(poly) < rate:
        raise ValueError(f"expected {rate} polynomials, got {len(poly)}")
    polys = [p & 0xFFFF for p in poly[:rate]]
    return tuple(
        sum((popcount(state & p) & 1) << j for j, p in enumerate(polys))
        for state in range(1 << order)
    )


class PairLookup:
    """Shared distances for pairs of states that differ only in their newest bit.

    Key 0 is never assigned; ``outputs[key]`` holds the concatenated output of
    the odd state (high part) and the even state (low part).
    """

    def __init__(self, rate: int, order: int, table: Sequence[int]) -> None:
        if order < 1:
            raise ValueError("order must be at least 1")
        self.output_width = rate
        self.output_mask = (1 << rate) - 1
        self.outputs: list[int] = [0]
        key_of: dict[int, int] = {}
        keys = []
        for i in range(1 << (order - 1)):
            out = (table[2 * i + 1] << rate) | table[2 * i]
            key = key_of.get(out)
            if key is None:
                key = len(self.outputs)
                key_of[out] = key
                self.outputs.append(out)
            keys.append(key)
        self.keys = tuple(keys)
        self.distances: list[int] = [0] * len(self.outputs)

    @property
    def outputs_len(self) -> int:
        return len(self.outputs)

    def fill_distance(self, distances: Sequence[int]) -> None:
        """Pack the distances of each output pair as ``high << 16 | low``."""
        for key, out in enumerate(self.outputs[1:], start=1):
            low = distances[out & self.output_mask]
            high = distances[out >> self.output_width]
            self.distances[key] = ((high << 16) | low) & 0xFFFFFFFF