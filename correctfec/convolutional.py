"""Convolutional encoder and Viterbi decoder."""

from __future__ import annotations

from collections.abc import Sequence

from correctfec.bits import BitReader, BitWriter
from correctfec.error_buffer import ErrorBuffer
from correctfec.history_buffer import HistoryBuffer
from correctfec.lookup import PairLookup, fill_table
from correctfec.metric import (
    DISTANCE_MAX,
    SOFT_MAX,
    SoftMeasurement,
    hamming_distance,
    soft_distance_linear,
    soft_distance_quadratic,
)

_SHIFT_REGISTER_BITS = 32


class ConvolutionalError(ValueError):
    """Raised for invalid code parameters or undecodable input."""


def _bytes_for_bits(num_bits: int) -> int:
    return (num_bits + 7) // 8


class ConvolutionalCode:
    """A rate ``1/rate`` convolutional code with constraint length ``order``.

    ``poly`` holds one generator polynomial per output bit; the first
    polynomial produces the first bit written for each input bit.
    """

    def __init__(self, rate: int, order: int, poly: Sequence[int]) -> None:
        if order > _SHIFT_REGISTER_BITS:
            raise ConvolutionalError(
                f"order must not exceed {_SHIFT_REGISTER_BITS}, got {order}"
            )
        if order < 2:
            raise ConvolutionalError(f"order must be at least 2, got {order}")
        if rate < 2:
            raise ConvolutionalError(f"rate must be 2 or greater, got {rate}")
        if len(poly) < rate:
            raise ConvolutionalError(f"expected {rate} polynomials, got {len(poly)}")
        self.rate = rate
        self.order = order
        self.numstates = 1 << order
        self.table = fill_table(rate, order, poly)
        self.soft_measurement = SoftMeasurement.LINEAR

        self.pair_lookup: PairLookup | None = None
        self.history_buffer: HistoryBuffer | None = None
        self.errors: ErrorBuffer | None = None
        self._reader: BitReader | None = None
        self._writer = BitWriter()

    # encoding

    def encode_len(self, msg_len: int) -> int:
        """Number of encoded bits produced for a message of ``msg_len`` bytes."""
        return self.rate * (8 * msg_len + self.order + 1)

    def encode(self, msg: bytes) -> bytes:
        """Encode ``msg``, flushing the shift register with zeros at the end."""
        msg = bytes(msg)
        shiftmask = (1 << self.order) - 1
        writer = BitWriter(_bytes_for_bits(self.encode_len(len(msg))))
        reader = BitReader(msg)
        register = 0
        for _ in range(8 * len(msg)):
            register = ((register << 1) | reader.read(1)) & shiftmask
            writer.write(self.table[register], self.rate)
        for _ in range(self.order + 1):
            register = (register << 1) & shiftmask
            writer.write(self.table[register], self.rate)
        writer.flush_byte()
        return writer.getvalue()

    # decoding

    def _decoder_settings(self) -> tuple[int, int, int]:
        """Minimum traceback, traceback group length and renormalize interval."""
        max_error_per_input = self.rate * SOFT_MAX
        return 5 * self.order, 15 * self.order, DISTANCE_MAX // max_error_per_input

    def _init_decoder(self) -> None:
        min_traceback, traceback_length, renormalize_interval = self._decoder_settings()
        self.pair_lookup = PairLookup(self.rate, self.order, self.table)
        self.history_buffer = HistoryBuffer(
            min_traceback,
            traceback_length,
            renormalize_interval,
            self.numstates // 2,
            1 << (self.order - 1),
        )
        self.errors = ErrorBuffer(self.numstates)

    def _check_length(self, num_encoded_bits: int, available: int) -> None:
        if num_encoded_bits < 0 or num_encoded_bits % self.rate:
            raise ConvolutionalError(
                "encoded length of message must be a multiple of rate"
            )
        if num_encoded_bits // self.rate < self.order - 1:
            raise ConvolutionalError("too few encoded bits to decode")
        if available < 0:
            raise ConvolutionalError("encoded data is shorter than num_encoded_bits")

    def decode(self, encoded: bytes, num_encoded_bits: int) -> bytes:
        """Hard-decision decode of ``num_encoded_bits`` bits of ``encoded``."""
        num_bytes = _bytes_for_bits(num_encoded_bits)
        self._check_length(num_encoded_bits, len(encoded) - num_bytes)
        self._reader = BitReader(bytes(encoded[:num_bytes]))
        try:
            return self._decode(num_encoded_bits, num_bytes, None)
        finally:
            self._reader = None

    def decode_soft(self, encoded: Sequence[int], num_encoded_bits: int) -> bytes:
        """Soft-decision decode; symbols map 0 to 0, 1 to 255 and erasures to 128."""
        self._check_length(num_encoded_bits, len(encoded) - num_encoded_bits)
        soft = bytes(encoded[:num_encoded_bits])
        return self._decode(num_encoded_bits, _bytes_for_bits(num_encoded_bits), soft)

    def _decode(self, num_encoded_bits: int, num_encoded_bytes: int, soft: bytes | None) -> bytes:
        if self.history_buffer is None:
            self._init_decoder()
        sets = num_encoded_bits // self.rate
        self._writer.reconfigure(num_encoded_bytes)
        self.errors.reset()
        self.history_buffer.reset()

        self._decode_warmup(sets, soft)
        self._decode_inner(sets, soft)
        self._decode_tail(sets, soft)

        self.history_buffer.flush(self._writer)
        return self._writer.getvalue()

    def _slice_distances(self, index: int, soft: bytes | None) -> list[int]:
        """Distance from every possible output to the symbols of one time slice."""
        outputs = range(1 << self.rate)
        if soft is None:
            received = self._reader.read(self.rate)
            return [hamming_distance(out, received) for out in outputs]
        symbols = soft[index * self.rate : (index + 1) * self.rate]
        if self.soft_measurement is SoftMeasurement.LINEAR:
            metric = soft_distance_linear
        else:
            metric = soft_distance_quadratic
        return [metric(out, symbols, self.rate) for out in outputs]

    def _decode_warmup(self, sets: int, soft: bytes | None) -> None:
        """Build error metrics while the shift register fills from zero."""
        for i in range(min(self.order - 1, sets)):
            distances = self._slice_distances(i, soft)
            read_errors = self.errors.read_errors
            write_errors = self.errors.write_errors
            for state in range(1 << (i + 1)):
                dist = distances[self.table[state]]
                write_errors[state] = (dist + read_errors[state >> 1]) & DISTANCE_MAX
            self.errors.swap()

    def _decode_inner(self, sets: int, soft: bytes | None) -> None:
        """Run the full add-compare-select over every state."""
        highbit = 1 << (self.order - 1)
        highbase = highbit >> 1
        history_buffer = self.history_buffer
        pair_lookup = self.pair_lookup
        for i in range(self.order - 1, sets - self.order + 1):
            pair_lookup.fill_distance(self._slice_distances(i, soft))
            keys = pair_lookup.keys
            pair_distances = pair_lookup.distances
            read_errors = self.errors.read_errors
            write_errors = self.errors.write_errors
            history = history_buffer.get_slice()

            for successor in range(0, highbit, 2):
                base = successor >> 1
                low_concat = pair_distances[keys[base]]
                high_concat = pair_distances[keys[highbase + base]]
                low_past = read_errors[base]
                high_past = read_errors[highbase + base]
                for state, shift in ((successor, 0), (successor + 1, 16)):
                    low_error = (((low_concat >> shift) & 0xFFFF) + low_past) & DISTANCE_MAX
                    high_error = (((high_concat >> shift) & 0xFFFF) + high_past) & DISTANCE_MAX
                    if low_error <= high_error:
                        write_errors[state] = low_error
                        history[state] = 0
                    else:
                        write_errors[state] = high_error
                        history[state] = 1

            history_buffer.process(write_errors, self._writer)
            self.errors.swap()

    def _decode_tail(self, sets: int, soft: bytes | None) -> None:
        """Finish decoding while the encoder flushed zeros into the register."""
        highbit = 1 << (self.order - 1)
        highbase = highbit >> 1
        table = self.table
        for i in range(sets - self.order + 1, sets):
            read_errors = self.errors.read_errors
            write_errors = self.errors.write_errors
            history = self.history_buffer.get_slice()
            distances = self._slice_distances(i, soft)

            skip = 1 << (self.order - (sets - i))
            for low in range(0, highbit, skip):
                base = low >> 1
                low_error = (distances[table[low]] + read_errors[base]) & DISTANCE_MAX
                high_error = (
                    distances[table[low + highbit]] + read_errors[highbase + base]
                ) & DISTANCE_MAX
                if low_error < high_error:
                    write_errors[low] = low_error
                    history[low] = 0
                else:
                    write_errors[low] = high_error
                    history[low] = 1

            self.history_buffer.process_skip(write_errors, self._writer, skip)
            self.errors.swap()