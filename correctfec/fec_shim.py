"""Viterbi decoders with a block-update / chainback interface.

Four fixed codes are offered: rate 1/2 with constraint lengths 7 and 9,
rate 1/3 with constraint length 9 and rate 1/6 with constraint length 15.
Their polynomials are the widely used ones, so data encoded elsewhere with
these codes can be decoded here and the other way round.
"""

from __future__ import annotations

from collections.abc import Sequence

from correctfec.convolutional import ConvolutionalCode, ConvolutionalError
from correctfec.metric import popcount

V27POLYA = 0o155
V27POLYB = 0o117

V29POLYA = 0o657
V29POLYB = 0o435

V39POLYA = 0o755
V39POLYB = 0o633
V39POLYC = 0o447

V615POLYA = 0o42631
V615POLYB = 0o47245
V615POLYC = 0o56507
V615POLYD = 0o73363
V615POLYE = 0o77267
V615POLYF = 0o64537

R12K7_POLYNOMIAL = (V27POLYA, V27POLYB)
R12K9_POLYNOMIAL = (V29POLYA, V29POLYB)
R13K9_POLYNOMIAL = (V39POLYA, V39POLYB, V39POLYC)
R16K15_POLYNOMIAL = (V615POLYA, V615POLYB, V615POLYC, V615POLYD, V615POLYE, V615POLYF)


def parity(x: int) -> int:
    """Parity (0 or 1) of the unsigned 32-bit value of ``x``."""
    return popcount(x) & 1


def _bytes_for_bits(num_bits: int) -> int:
    return (num_bits + 7) // 8


class Viterbi:
    """Decoder that collects decoded bytes in a buffer and hands them out on request.

    :meth:`update_blk` decodes a block of soft symbols and appends the whole
    bytes it yields to the buffer, never writing past its end;
    :meth:`chainback` reads decoded bytes back out in order.
    """

    def __init__(self, num_decoded_bits: int, rate: int, order: int, poly: Sequence[int]) -> None:
        if num_decoded_bits < 0:
            raise ValueError(f"number of decoded bits must not be negative, got {num_decoded_bits}")
        self.rate = rate
        self.order = order
        self.conv = ConvolutionalCode(rate, order, poly)
        self._buffer = bytearray(_bytes_for_bits(num_decoded_bits))
        self._read_pos = 0
        self._write_pos = 0

    @property
    def capacity(self) -> int:
        """Size of the decoded-byte buffer."""
        return len(self._buffer)

    def init(self) -> None:
        """Discard all decoded bytes and start filling the buffer from its beginning."""
        self._read_pos = 0
        self._write_pos = 0

    def update_blk(self, encoded_soft: Sequence[int], num_encoded_groups: int) -> None:
        """Decode ``num_encoded_groups`` groups of ``rate`` soft symbols.

        The block is expected to end with ``order - 1`` groups produced by
        flushing the encoder with zeros. If the buffer cannot hold all decoded
        bits, trailing groups are dropped so that it is filled exactly.
        """
        if num_encoded_groups < self.order - 1:
            raise ValueError(
                f"need at least {self.order - 1} encoded groups, got {num_encoded_groups}"
            )
        rem_bits = 8 * (len(self._buffer) - self._write_pos)
        n_write_bits = num_encoded_groups - (self.order - 1)
        if n_write_bits > rem_bits:
            reduction = n_write_bits - rem_bits
            num_encoded_groups -= reduction
            n_write_bits -= reduction

        n_write_bytes = n_write_bits // 8
        if n_write_bytes == 0:
            return
        decoded = self.conv.decode_soft(encoded_soft, num_encoded_groups * self.rate)
        chunk = decoded[:n_write_bytes]
        if len(chunk) != n_write_bytes:
            raise ConvolutionalError("decoder produced fewer bytes than expected")
        self._buffer[self._write_pos : self._write_pos + n_write_bytes] = chunk
        self._write_pos += n_write_bytes

    def chainback(self, num_decoded_bits: int) -> bytes:
        """Return up to ``num_decoded_bits`` decoded bits, rounded up to whole bytes.

        Fewer bytes are returned when fewer have been decoded and not yet read.
        """
        if num_decoded_bits < 0:
            raise ValueError(f"number of decoded bits must not be negative, got {num_decoded_bits}")
        rem_bits = 8 * (self._write_pos - self._read_pos)
        num_decoded_bits = min(num_decoded_bits, rem_bits)
        num_bytes = _bytes_for_bits(num_decoded_bits)
        out = bytes(self._buffer[self._read_pos : self._read_pos + num_bytes])
        self._read_pos += num_bytes
        return out


def create_viterbi27(num_decoded_bits: int) -> Viterbi:
    """Decoder for the rate 1/2, constraint length 7 code."""
    return Viterbi(num_decoded_bits, 2, 7, R12K7_POLYNOMIAL)


def create_viterbi29(num_decoded_bits: int) -> Viterbi:
    """Decoder for the rate 1/2, constraint length 9 code."""
    return Viterbi(num_decoded_bits, 2, 9, R12K9_POLYNOMIAL)


def create_viterbi39(num_decoded_bits: int) -> Viterbi:
    """Decoder for the rate 1/3, constraint length 9 code."""
    return Viterbi(num_decoded_bits, 3, 9, R13K9_POLYNOMIAL)


def create_viterbi615(num_decoded_bits: int) -> Viterbi:
    """Decoder for the rate 1/6, constraint length 15 code."""
    return Viterbi(num_decoded_bits, 6, 15, R16K15_POLYNOMIAL)