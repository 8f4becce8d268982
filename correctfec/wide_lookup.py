"""Lookups that share distances across groups of four or eight states."""

from __future__ import annotations

from collections.abc import Sequence

_DISTANCE_MASK = 0xFFFF


def oct_lookup_find_key(outputs: Sequence[int], out: int, num_keys: int) -> int:
    """Return the key in ``1..num_keys-1`` whose output equals ``out``, or 0."""
    for key in range(1, num_keys):
        if outputs[key] == out:
            return key
    return 0


class QuadLookup:
    """Distances for groups of four consecutive states.

    ``outputs[key]`` holds the outputs of states ``4i .. 4i+3`` packed
    ``rate`` bits apart, the first state lowest. Key 0 is never assigned.
    """

    def __init__(self, rate: int, order: int, table: Sequence[int]) -> None:
        if order < 2:
            raise ValueError("order must be at least 2")
        self.output_width = rate
        self.output_mask = (1 << rate) - 1
        self.outputs: list[int] = [0]
        key_of: dict[int, int] = {}
        keys = []
        for i in range(1 << (order - 2)):
            out = 0
            for state in reversed(range(4 * i, 4 * i + 4)):
                out = (out << rate) | table[state]
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
        """Pack the four distances of each group into 16-bit fields, first state lowest."""
        for key, out in enumerate(self.outputs[1:], start=1):
            packed = 0
            for slot in range(4):
                index = (out >> (slot * self.output_width)) & self.output_mask
                packed |= (distances[index] & _DISTANCE_MASK) << (16 * slot)
            self.distances[key] = packed


class OctLookup:
    """Distances for groups of eight consecutive states.

    ``keys[i]`` is twice the group key of states ``8i .. 8i+7``; the distances
    of that group sit in ``distances[4 * keys[i] : 4 * keys[i] + 8]`` in state
    order. ``outputs[key]`` holds the eight outputs one byte apart, the first
    state in the lowest byte. Key 0 is never assigned.
    """

    def __init__(self, rate: int, order: int, table: Sequence[int]) -> None:
        if order < 3:
            raise ValueError("order must be at least 3")
        self.output_width = rate
        self.output_mask = (1 << rate) - 1
        short_outs: list[int] = [0]
        self.outputs: list[int] = [0]
        keys = []
        for i in range(1 << (order - 3)):
            group = table[8 * i : 8 * i + 8]
            out = 0
            for value in reversed(group):
                out = (out << rate) | value
            key = oct_lookup_find_key(short_outs, out, len(short_outs))
            if not key:
                expanded = 0
                for value in reversed(group):
                    expanded = (expanded << 8) | value
                key = len(short_outs)
                short_outs.append(out)
                self.outputs.append(expanded)
            keys.append(key * 2)
        self.keys = tuple(keys)
        self.distances: list[int] = [0] * (8 * len(self.outputs))

    @property
    def outputs_len(self) -> int:
        return len(self.outputs)

    def fill_distance(self, distances: Sequence[int]) -> None:
        """Store the eight 16-bit distances of every group."""
        for key, out in enumerate(self.outputs[1:], start=1):
            base = 8 * key
            for slot in range(8):
                index = (out >> (8 * slot)) & 0xFF
                self.distances[base + slot] = distances[index] & _DISTANCE_MASK