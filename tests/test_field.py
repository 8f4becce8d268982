import pytest
from hypothesis import given
from hypothesis import strategies as st

from correctfec.field import Field

FIELD = Field(0x11D)

elements = st.integers(min_value=0, max_value=255)
nonzero = st.integers(min_value=1, max_value=255)
logs = st.integers(min_value=0, max_value=255)


def test_exp_table_starts_with_powers_of_two():
    assert FIELD.exp[:8] == (1, 2, 4, 8, 16, 32, 64, 128)


def test_exp_reduces_by_polynomial():
    assert FIELD.exp[8] == 0x1D


def test_table_sizes():
    assert len(FIELD.exp) == 512
    assert len(FIELD.log) == 256


def test_exp_is_permutation_of_nonzero_elements():
    assert sorted(FIELD.exp[:255]) == list(range(1, 256))


def test_exp_wraps_with_period_255():
    assert FIELD.exp[255:510] == FIELD.exp[:255]


def test_log_of_one_is_255():
    assert FIELD.log[1] == 255


@given(nonzero)
def test_exp_inverts_log(x):
    assert FIELD.exp[FIELD.log[x]] == x


@given(elements, elements)
def test_add_and_sub_are_xor(a, b):
    assert FIELD.add(a, b) == a ^ b
    assert FIELD.sub(a, b) == FIELD.add(a, b)


@given(elements)
def test_sum_parity(e):
    assert FIELD.sum(e, 0) == 0
    assert FIELD.sum(e, 4) == 0
    assert FIELD.sum(e, 3) == e


@given(elements, elements)
def test_mul_commutes(a, b):
    assert FIELD.mul(a, b) == FIELD.mul(b, a)


@given(elements, elements, elements)
def test_mul_distributes_over_add(a, b, c):
    assert FIELD.mul(a, FIELD.add(b, c)) == FIELD.add(FIELD.mul(a, b), FIELD.mul(a, c))


@given(elements)
def test_mul_by_zero_and_one(a):
    assert FIELD.mul(a, 0) == 0
    assert FIELD.mul(0, a) == 0
    assert FIELD.mul(a, 1) == a


@given(elements, nonzero)
def test_div_undoes_mul(a, b):
    assert FIELD.div(FIELD.mul(a, b), b) == a


@given(nonzero)
def test_inverse(a):
    assert FIELD.mul(a, FIELD.div(1, a)) == 1


@given(elements)
def test_div_by_zero_is_zero(a):
    assert FIELD.div(a, 0) == 0
    assert FIELD.div(0, a) == 0


@given(logs, logs)
def test_mul_log_matches_mul(l, r):
    result = FIELD.mul_log(l, r)
    assert 0 <= result <= 255
    assert FIELD.exp[result] == FIELD.mul(FIELD.exp[l], FIELD.exp[r])


@given(logs, logs)
def test_mul_log_element_matches_mul_log(l, r):
    assert FIELD.mul_log_element(l, r) == FIELD.exp[FIELD.mul_log(l, r)]


@given(logs, logs)
def test_div_log_matches_div(l, r):
    result = FIELD.div_log(l, r)
    assert 0 <= result <= 255
    assert FIELD.exp[result] == FIELD.div(FIELD.exp[l], FIELD.exp[r])


@given(nonzero)
def test_pow_matches_repeated_mul(a):
    assert FIELD.pow(a, 3) == FIELD.mul(a, FIELD.mul(a, a))
    assert FIELD.pow(a, 1) == a
    assert FIELD.pow(a, 0) == 1


@given(nonzero)
def test_pow_negative_is_inverse(a):
    assert FIELD.pow(a, -1) == FIELD.div(1, a)


@given(nonzero)
def test_pow_255_is_one(a):
    assert FIELD.pow(a, 255) == 1


@pytest.mark.parametrize("poly", [0x12B, 0x187, 0x1F5])
def test_other_primitive_polynomials_give_fields(poly):
    field = Field(poly)
    assert sorted(field.exp[:255]) == list(range(1, 256))
    assert all(field.mul(a, field.div(1, a)) == 1 for a in range(1, 256))


@pytest.mark.parametrize(
    "call",
    [
        lambda: FIELD.add(256, 1),
        lambda: FIELD.mul(-1, 1),
        lambda: FIELD.div(1, 300),
        lambda: FIELD.mul_log(256, 0),
        lambda: FIELD.pow(256, 2),
        lambda: FIELD.sum(999, 1),
    ],
)
def test_out_of_range_elements_rejected(call):
    with pytest.raises(ValueError):
        call()


def test_polynomial_must_fit_in_16_bits():
    with pytest.raises(ValueError):
        Field(0x10000)