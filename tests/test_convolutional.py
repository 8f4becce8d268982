import pytest
from hypothesis import given, settings, strategies as st

from correctfec.convolutional import ConvolutionalCode, ConvolutionalError
from correctfec.lookup import fill_table
from correctfec.metric import SoftMeasurement

R12_K7 = (0o161, 0o127)
R13_K9 = (0o417, 0o627, 0o675)
R12_K9 = (0o767, 0o545)


def _bits(data, count):
    return [(data[pos >> 3] >> (7 - (pos & 7))) & 1 for pos in range(count)]


def _to_soft(data, count):
    return bytes(255 if bit else 0 for bit in _bits(data, count))


def _flip(data, positions):
    out = bytearray(data)
    for pos in positions:
        out[pos >> 3] ^= 0x80 >> (pos & 7)
    return bytes(out)


@pytest.fixture
def code():
    return ConvolutionalCode(2, 7, R12_K7)


def test_encode_len_formula(code):
    assert code.encode_len(2) == 48
    assert code.encode_len(0) == 2 * 8


def test_empty_message_encodes_to_zero_bytes(code):
    assert code.encode(b"") == b"\x00\x00"


def test_encoded_size_matches_encode_len(code):
    msg = b"convolutional"
    encoded = code.encode(msg)
    assert len(encoded) == (code.encode_len(len(msg)) + 7) // 8


def test_table_matches_fill_table(code):
    assert code.table == fill_table(2, 7, R12_K7)
    assert code.numstates == 128


def test_hard_round_trip(code):
    msg = b"The quick brown fox"
    encoded = code.encode(msg)
    assert code.decode(encoded, code.encode_len(len(msg))) == msg


def test_soft_round_trip(code):
    msg = bytes(range(40))
    nbits = code.encode_len(len(msg))
    soft = _to_soft(code.encode(msg), nbits)
    assert code.decode_soft(soft, nbits) == msg


def test_soft_round_trip_quadratic(code):
    code.soft_measurement = SoftMeasurement.QUADRATIC
    msg = b"quadratic metric"
    nbits = code.encode_len(len(msg))
    soft = _to_soft(code.encode(msg), nbits)
    assert code.decode_soft(soft, nbits) == msg


def test_rate_three_order_nine_round_trip():
    code = ConvolutionalCode(3, 9, R13_K9)
    msg = b"\x00\xff\x55\xaa\x12\x34\x56\x78"
    encoded = code.encode(msg)
    nbits = code.encode_len(len(msg))
    assert code.decode(encoded, nbits) == msg
    assert code.decode_soft(_to_soft(encoded, nbits), nbits) == msg


def test_order_nine_rate_two_round_trip():
    code = ConvolutionalCode(2, 9, R12_K9)
    msg = b"order nine"
    assert code.decode(code.encode(msg), code.encode_len(len(msg))) == msg


def test_corrects_scattered_bit_errors(code):
    msg = bytes(range(100, 132))
    nbits = code.encode_len(len(msg))
    corrupted = _flip(code.encode(msg), [40, 100, 160, 220, 300, 400])
    assert code.decode(corrupted, nbits) == msg


def test_soft_tolerates_erasures(code):
    msg = b"erasures are fine"
    nbits = code.encode_len(len(msg))
    soft = bytearray(_to_soft(code.encode(msg), nbits))
    for pos in range(30, nbits - 20, 25):
        soft[pos] = 128
    assert code.decode_soft(bytes(soft), nbits) == msg


def test_soft_tolerates_noise(code):
    msg = b"noisy channel"
    nbits = code.encode_len(len(msg))
    soft = bytes(
        (200 if value else 60) for value in _to_soft(code.encode(msg), nbits)
    )
    assert code.decode_soft(soft, nbits) == msg


def test_decoder_is_reusable(code):
    first = b"first message"
    second = b"another, longer message"
    assert code.decode(code.encode(first), code.encode_len(len(first))) == first
    assert code.decode(code.encode(second), code.encode_len(len(second))) == second
    assert code.decode(code.encode(first), code.encode_len(len(first))) == first


def test_long_message_round_trip(code):
    msg = bytes((i * 37 + 11) & 0xFF for i in range(200))
    assert code.decode(code.encode(msg), code.encode_len(len(msg))) == msg


def test_decode_rejects_length_not_multiple_of_rate(code):
    encoded = code.encode(b"abc")
    with pytest.raises(ConvolutionalError):
        code.decode(encoded, code.encode_len(3) - 1)
    with pytest.raises(ConvolutionalError):
        code.decode_soft(_to_soft(encoded, 40), 39)


def test_decode_rejects_short_input(code):
    encoded = code.encode(b"abc")
    with pytest.raises(ConvolutionalError):
        code.decode(encoded[:-2], code.encode_len(3))
    with pytest.raises(ConvolutionalError):
        code.decode_soft(b"\x00" * 10, code.encode_len(3))


def test_decode_rejects_too_few_bits(code):
    with pytest.raises(ConvolutionalError):
        code.decode(b"\x00", 4)


@pytest.mark.parametrize(
    "rate, order, poly",
    [
        (1, 7, (0o161,)),
        (2, 33, R12_K7),
        (2, 1, R12_K7),
        (3, 7, R12_K7),
    ],
)
def test_invalid_parameters(rate, order, poly):
    with pytest.raises(ConvolutionalError):
        ConvolutionalCode(rate, order, poly)


def test_error_is_value_error():
    with pytest.raises(ValueError):
        ConvolutionalCode(0, 7, R12_K7)