# correctfec

Forward error correction in pure Python, with no dependencies outside the
standard library.

`correctfec` provides:

- **Convolutional codes** (`correctfec.convolutional.ConvolutionalCode`) with a
  Viterbi decoder that accepts either packed hard bits or 8-bit soft symbols.
- An alternative decoder, `correctfec.wide.WideConvolutionalCode`, with the
  same interface, which updates the trellis eight states per lookup.
- **GF(2^8) arithmetic** (`correctfec.field.Field`) through exponent and
  logarithm tables.
- A block-oriented decoder interface (`correctfec.fec_shim`) with
  `create_viterbi27`, `create_viterbi29`, `create_viterbi39` and
  `create_viterbi615`.

## Installation

```
pip install correctfec
```

To run the test suite:

```
pip install "correctfec[test]"
pytest
```

## Convolutional codes

A code is defined by its inverse rate, its order (constraint length, 2 to 32)
and one generator polynomial per output bit:

```python
from correctfec.convolutional import ConvolutionalCode

code = ConvolutionalCode(2, 7, (0o161, 0o127))   # rate 1/2, order 7

message = b"hello, world"
encoded = code.encode(message)                   # packed bytes
num_bits = code.encode_len(len(message))         # length in bits

decoded = code.decode(encoded, num_bits)
assert decoded[: len(message)] == message
```

`encode_len(n)` returns `rate * (8 * n + order + 1)`, the number of encoded
bits; `encode` returns them packed most significant bit first, with the last
byte padded.

Soft decoding takes one value per encoded bit, where `0` is a confident 0,
`255` a confident 1 and `128` an erasure:

```python
soft = bytes(255 if (encoded[i // 8] >> (7 - i % 8)) & 1 else 0
             for i in range(num_bits))
decoded = code.decode_soft(soft, num_bits)
```

`ConvolutionalError` (a `ValueError`) is raised for invalid code parameters,
when the number of encoded bits is not a multiple of the rate, when it covers
fewer than `order - 1` symbol groups, or when the data is shorter than the
stated number of bits. The decoder cannot tell when there were too many errors
to correct; protect the payload with a checksum if you need to detect that.

`WideConvolutionalCode(rate, order, poly)` takes the same arguments (order
must be at least 6) and offers the same `encode`, `encode_len`, `decode` and
`decode_soft`. It renormalizes path errors twice as often and releases decoded
bits in longer bursts than `ConvolutionalCode`.

## Galois field arithmetic

```python
from correctfec.field import Field

gf = Field(0x11D)                     # x^8 + x^4 + x^3 + x^2 + 1
product = gf.mul(0x53, 0xCA)
assert gf.div(product, 0xCA) == 0x53
```

`Field` offers `add`, `sub`, `sum`, `mul`, `div`, `pow` on elements and
`mul_log`, `div_log`, `mul_log_element` on logarithms; the tables are
available as `exp` (512 entries) and `log` (256 entries). Division by zero
returns 0. Arguments outside `0..255` raise `ValueError`.

## Block decoders

`correctfec.fec_shim` wraps four fixed codes whose polynomials are exported as
`R12K7_POLYNOMIAL`, `R12K9_POLYNOMIAL`, `R13K9_POLYNOMIAL` and
`R16K15_POLYNOMIAL` (and individually as `V27POLYA`, `V27POLYB`, …):

```python
from correctfec.fec_shim import create_viterbi27

vit = create_viterbi27(8 * 64)        # buffer for 64 decoded bytes
vit.init()
vit.update_blk(soft_symbols, num_encoded_groups)
data = vit.chainback(8 * 64)          # bytes
```

`update_blk` decodes a block of soft symbols (which must end with the
`order - 1` groups of the encoder's zero flush) and appends the whole decoded
bytes to the buffer, dropping trailing groups rather than overflowing it.
`chainback` returns up to the requested number of bits, rounded up to whole
bytes, from what has been decoded and not yet read. `parity(x)` gives the
parity of a 32-bit value.

## Building blocks

The decoder is assembled from modules that can be used on their own:
`correctfec.bits` (`BitWriter`, `BitReader`, `reverse_byte`),
`correctfec.metric` (`popcount`, `hamming_distance`, `soft_distance_linear`,
`soft_distance_quadratic`, `SoftMeasurement`), `correctfec.lookup`
(`fill_table`, `PairLookup`), `correctfec.wide_lookup` (`QuadLookup`,
`OctLookup`), `correctfec.error_buffer` (`ErrorBuffer`) and
`correctfec.history_buffer` (`HistoryBuffer`).

## What it does not do

- There is no Reed-Solomon encoder or decoder: only the GF(2^8) field
  arithmetic such a code is built on.
- There is no catalogue of standard convolutional polynomials beyond the four
  in `correctfec.fec_shim`; pass your own to `ConvolutionalCode`.
- There is no command-line tool; the package is a library.