"""Convolutional decoder that updates eight shift register states per lookup."""

from __future__ import annotations

from collections.abc import Sequence

from correctfec.convolutional import ConvolutionalCode, ConvolutionalError
from correctfec.metric import DISTANCE_MAX, SOFT_MAX
from correctfec.wide_lookup import OctLookup

_GROUP = 8
_MIN_WIDE_ORDER = 6


def _signed16(value: int) -> int:
    return value - 0x10000 if value & 0x8000 else value


class WideConvolutionalCode(ConvolutionalCode):
    """A convolutional code whose decoder works on groups of eight states.

    Each group of eight successor states shares one entry of an
    :class:`OctLookup`. Path errors are compared as signed 16-bit values, so
    renormalization happens twice as often as in :class:`ConvolutionalCode`,
    and decoded bits are released in longer bursts.
    """

    def __init__(self, rate: int, order: int, poly: Sequence[int]) -> None:
        super().__init__(rate, order, poly)
        if order < _MIN_WIDE_ORDER:
            raise ConvolutionalError(
                f"order must be at least {_MIN_WIDE_ORDER} for the wide decoder, got {order}"
            )
        self.oct_lookup: OctLookup | None = None

    def _decoder_settings(self) -> tuple[int, int, int]:
        max_error_per_input = self.rate * SOFT_MAX
        renormalize_interval = (DISTANCE_MAX // 2) // max_error_per_input
        return 5 * self.order, 100 * self.order, renormalize_interval

    def _init_decoder(self) -> None:
        super()._init_decoder()
        self.oct_lookup = OctLookup(self.rate, self.order, self.table)

    def decode(self, encoded: bytes, num_encoded_bits: int) -> bytes:
        """Hard-decision decode of ``num_encoded_bits`` bits of ``encoded``."""
        return super().decode(encoded, num_encoded_bits)

    def decode_soft(self, encoded: Sequence[int], num_encoded_bits: int) -> bytes:
        """Soft-decision decode; symbols map 0 to 0, 1 to 255 and erasures to 128."""
        return super().decode_soft(encoded, num_encoded_bits)

    def _decode_inner(self, sets: int, soft: bytes | None) -> None:
        """Add-compare-select over every state, eight successors at a time."""
        highbit = 1 << (self.order - 1)
        highbase = highbit >> 1
        oct_highbase = highbase >> 2
        history_buffer = self.history_buffer
        oct_lookup = self.oct_lookup
        keys = oct_lookup.keys
        for i in range(self.order - 1, sets - self.order + 1):
            oct_lookup.fill_distance(self._slice_distances(i, soft))
            group_distances = oct_lookup.distances
            read_errors = self.errors.read_errors
            write_errors = self.errors.write_errors
            history = history_buffer.get_slice()

            for group in range(highbit // _GROUP):
                low = _GROUP * group
                base = low >> 1
                low_dist_base = 4 * keys[group]
                high_dist_base = 4 * keys[oct_highbase + group]
                for slot in range(_GROUP):
                    ancestor = base + (slot >> 1)
                    low_error = (
                        group_distances[low_dist_base + slot] + read_errors[ancestor]
                    ) & DISTANCE_MAX
                    high_error = (
                        group_distances[high_dist_base + slot]
                        + read_errors[highbase + ancestor]
                    ) & DISTANCE_MAX
                    least = min(low_error, high_error)
                    state = low + slot
                    write_errors[state] = least
                    history[state] = 1 if _signed16(low_error) > _signed16(least) else 0

            history_buffer.process(write_errors, self._writer)
            self.errors.swap()