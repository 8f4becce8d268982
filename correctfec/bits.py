"""Bit-level writer and reader used by the convolutional coder."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

_REVERSE_TABLE = tuple(int(f"{value:08b}"[::-1], 2) for value in range(256))


def reverse_byte(b: int) -> int:
    """Return the byte ``b`` with its bit order reversed."""
    if not 0 <= b <= 0xFF:
        raise ValueError(f"byte value out of range: {b}")
    return _REVERSE_TABLE[b]


class BitWriter:
    """Packs bits into bytes, most significant bit first.

    ``size`` is the capacity in bytes; ``None`` means unbounded.
    """

    def __init__(self, size: int | None = None) -> None:
        self.reconfigure(size)

    def reconfigure(self, size: int | None = None) -> None:
        """Discard everything written and start over with a new capacity."""
        self._capacity = size
        self._bytes = bytearray()
        self._pending = 0
        self._pending_len = 0

    @property
    def pending_bits(self) -> int:
        """Number of bits waiting for their byte to be completed."""
        return self._pending_len

    def __len__(self) -> int:
        return len(self._bytes)

    def _emit(self, byte: int) -> None:
        if self._capacity is not None and len(self._bytes) >= self._capacity:
            raise OverflowError(f"bit writer capacity of {self._capacity} bytes exceeded")
        self._bytes.append(byte & 0xFF)

    def write_1(self, val: int) -> None:
        """Write the lowest bit of ``val``."""
        self._pending = (self._pending << 1) | (val & 1)
        self._pending_len += 1
        if self._pending_len == 8:
            self._emit(self._pending)
            self._pending = 0
            self._pending_len = 0

    def write(self, val: int, n: int) -> None:
        """Write the ``n`` lowest bits of the byte ``val``, least significant first."""
        val &= 0xFF
        for _ in range(n):
            self.write_1(val)
            val >>= 1

    def write_bitlist(self, bits: Iterable[int]) -> None:
        """Write a sequence of 0/1 values in order."""
        for bit in bits:
            self.write_1(bit)

    def write_bitlist_reversed(self, bits: Sequence[int]) -> None:
        """Write a sequence of 0/1 values from last to first."""
        for bit in reversed(bits):
            self.write_1(bit)

    def flush_byte(self) -> None:
        """Emit a partially filled byte, padding it on the right.

        The pending bits sit one slot higher than a plain left alignment,
        so the oldest pending bit is shifted out of the emitted byte.
        """
        if self._pending_len:
            self._emit(self._pending << (9 - self._pending_len))
            self._pending = 0
            self._pending_len = 0

    def getvalue(self) -> bytes:
        """Return the completed bytes written so far."""
        return bytes(self._bytes)


class BitReader:
    """Reads bits from a byte string, most significant bit of each byte first."""

    def __init__(self, data: bytes = b"") -> None:
        self.reconfigure(data)

    def reconfigure(self, data: bytes) -> None:
        """Start reading ``data`` from its first bit."""
        self._data = bytes(data)
        self._pos = 0

    @property
    def bits_remaining(self) -> int:
        return 8 * len(self._data) - self._pos

    def read(self, n: int) -> int:
        """Read ``n`` bits (at most 8); the first bit read lands in the lowest bit."""
        if not 0 <= n <= 8:
            raise ValueError(f"can read between 0 and 8 bits at a time, not {n}")
        if n > self.bits_remaining:
            raise EOFError("not enough bits left to read")
        value = 0
        for shift, pos in enumerate(range(self._pos, self._pos + n)):
            bit = (self._data[pos >> 3] >> (7 - (pos & 7))) & 1
            value |= bit << shift
        self._pos += n
        return value