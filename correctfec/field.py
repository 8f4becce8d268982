"""Arithmetic in GF(2^8) through exponent and logarithm tables."""

from __future__ import annotations

_FIELD_SIZE = 256
_ORDER = 255
_EXP_SIZE = 512
_OPERATION_MASK = 0xFFFF


def _check_byte(name: str, value: int) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be in 0..255, got {value}")
    return value


class Field:
    """GF(2^8) generated by the primitive element alpha of ``primitive_poly``.

    ``exp[i]`` is alpha**i for ``i`` in ``0..511``, so sums of two logarithms
    can be looked up without reducing them first. ``log[x]`` is the logarithm
    of the nonzero element ``x``; ``log[1]`` is 255 and ``log[0]`` is 0, which
    has no meaning and is never needed for a nonzero result.
    """

    def __init__(self, primitive_poly: int) -> None:
        if not 0 <= primitive_poly <= _OPERATION_MASK:
            raise ValueError(f"primitive polynomial must fit in 16 bits, got {primitive_poly}")
        self.primitive_poly = primitive_poly
        exp = [1]
        log = [0] * _FIELD_SIZE
        element = 1
        for i in range(1, _EXP_SIZE):
            element = (element * 2) & _OPERATION_MASK
            if element > 0xFF:
                element ^= primitive_poly
            exp.append(element & 0xFF)
            if i < _FIELD_SIZE:
                log[element & 0xFF] = i
        self.exp: tuple[int, ...] = tuple(exp)
        self.log: tuple[int, ...] = tuple(log)

    def add(self, left: int, right: int) -> int:
        """Sum of two elements (bitwise xor)."""
        return _check_byte("left", left) ^ _check_byte("right", right)

    def sub(self, left: int, right: int) -> int:
        """Difference of two elements, the same as their sum."""
        return _check_byte("left", left) ^ _check_byte("right", right)

    def sum(self, elem: int, n: int) -> int:
        """``elem`` added to itself ``n`` times."""
        _check_byte("elem", elem)
        return elem if n % 2 else 0

    def mul(self, left: int, right: int) -> int:
        """Product of two elements."""
        _check_byte("left", left)
        _check_byte("right", right)
        if left == 0 or right == 0:
            return 0
        return self.exp[self.log[left] + self.log[right]]

    def div(self, left: int, right: int) -> int:
        """Quotient of two elements; division by zero yields 0."""
        _check_byte("left", left)
        _check_byte("right", right)
        if left == 0 or right == 0:
            return 0
        return self.exp[_ORDER + self.log[left] - self.log[right]]

    def mul_log(self, left: int, right: int) -> int:
        """Logarithm of the product of the elements with logarithms ``left`` and ``right``."""
        res = _check_byte("left", left) + _check_byte("right", right)
        return res - _ORDER if res > _ORDER else res

    def div_log(self, left: int, right: int) -> int:
        """Logarithm of the quotient of the elements with logarithms ``left`` and ``right``."""
        res = _ORDER + _check_byte("left", left) - _check_byte("right", right)
        return res - _ORDER if res > _ORDER else res

    def mul_log_element(self, left: int, right: int) -> int:
        """Product, as an element, of the elements with logarithms ``left`` and ``right``."""
        return self.exp[_check_byte("left", left) + _check_byte("right", right)]

    def pow(self, elem: int, power: int) -> int:
        """``elem`` raised to an integer ``power``, which may be negative."""
        return self.exp[(self.log[_check_byte("elem", elem)] * power) % _ORDER]