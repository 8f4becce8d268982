from hypothesis import given
from hypothesis import strategies as st

from correctfec.metric import (
    hamming_distance,
    popcount,
    soft_distance_linear,
    soft_distance_quadratic,
)

words = st.integers(0, 0xFFFFFFFF)
lengths = st.integers(1, 6)


def _perfect_soft(hard, length):
    return [255 if (hard >> i) & 1 else 0 for i in range(length)]


@given(words, words)
def test_popcount_inclusion_exclusion(x, y):
    assert popcount(x | y) + popcount(x & y) == popcount(x) + popcount(y)


@given(st.integers(0, 32))
def test_popcount_of_mask(n):
    assert popcount((1 << n) - 1) == n


@given(words)
def test_popcount_of_complement(x):
    assert popcount(x) + popcount(~x & 0xFFFFFFFF) == 32


@given(words, words, words)
def test_hamming_is_a_metric(x, y, z):
    assert hamming_distance(x, x) == 0
    assert hamming_distance(x, y) == hamming_distance(y, x)
    assert hamming_distance(x, z) <= hamming_distance(x, y) + hamming_distance(y, z)


@given(lengths, st.integers(0, 63))
def test_linear_perfect_symbols_have_zero_distance(length, hard):
    hard &= (1 << length) - 1
    assert soft_distance_linear(hard, _perfect_soft(hard, length), length) == 0


@given(lengths, st.integers(0, 63))
def test_quadratic_perfect_symbols_have_zero_distance(length, hard):
    hard &= (1 << length) - 1
    assert soft_distance_quadratic(hard, _perfect_soft(hard, length), length) == 0


@given(st.lists(st.integers(0, 255), min_size=1, max_size=6), st.integers(0, 63))
def test_linear_distance_to_complement_sums_to_full_scale(soft, hard):
    length = len(soft)
    mask = (1 << length) - 1
    hard &= mask
    total = soft_distance_linear(hard, soft, length) + soft_distance_linear(hard ^ mask, soft, length)
    assert total == 255 * length


@given(st.lists(st.integers(0, 255), min_size=1, max_size=6), st.integers(0, 63))
def test_quadratic_is_symmetric_under_inversion(soft, hard):
    length = len(soft)
    mask = (1 << length) - 1
    mirrored = [255 - value for value in soft]
    assert soft_distance_quadratic(hard, soft, length) == soft_distance_quadratic(
        hard ^ mask, mirrored, length
    )


@given(st.lists(st.integers(0, 255), min_size=1, max_size=6), st.integers(0, 255), st.integers(0, 63))
def test_only_length_symbols_are_used(soft, extra, hard):
    length = len(soft)
    longer = soft + [extra]
    assert soft_distance_linear(hard, longer, length) == soft_distance_linear(hard, soft, length)
    assert soft_distance_quadratic(hard, longer, length) == soft_distance_quadratic(hard, soft, length)


@given(st.lists(st.integers(0, 255), min_size=1, max_size=6))
def test_linear_distance_never_exceeds_full_scale(soft):
    length = len(soft)
    assert all(0 <= soft_distance_linear(h, soft, length) <= 255 * length for h in range(1 << length))