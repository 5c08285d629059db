"""Mutable big-integer register for reusable scratch arithmetic.

BigInt holds a single integer that is overwritten in place by each
operation, so a set of registers can be reused across calculations:

    from estimator.math.bigint import BigInt

    num = BigInt()
    num.set(amount_in).mul(997).mul(reserve_out)
    den = BigInt()
    den.set(reserve_in).mul(1000).add(amount_in * 997)
    out = num.floordiv(den).value   # Raises DivisionByZero if den == 0

Operations accept ints or other registers and return the register itself so
they can be chained. Division by zero raises instead of producing a value.
"""

from __future__ import annotations


class BigIntError(ArithmeticError):
    """Base class for BigInt arithmetic errors."""

    pass


class DivisionByZero(BigIntError):
    """Division by zero."""

    pass


class BigInt:
    """Mutable integer register.

    Attributes:
        value: The current integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int = 0) -> None:
        self._value = _extract_value(value)

    @property
    def value(self) -> int:
        """The current integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"BigInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __int__(self) -> int:
        return self._value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BigInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]  # mutable

    # --- In-place operations ---

    def set(self, other: BigInt | int) -> BigInt:
        """Overwrite the register with other."""
        self._value = _extract_value(other)
        return self

    def reset(self) -> BigInt:
        """Overwrite the register with zero."""
        self._value = 0
        return self

    def add(self, other: BigInt | int) -> BigInt:
        self._value += _extract_value(other)
        return self

    def mul(self, other: BigInt | int) -> BigInt:
        self._value *= _extract_value(other)
        return self

    def floordiv(self, other: BigInt | int) -> BigInt:
        """Floor division in place.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        self._value //= other_val
        return self


def _extract_value(x: BigInt | int) -> int:
    if isinstance(x, BigInt):
        return x._value
    # bool is an int subclass but never a valid amount
    if isinstance(x, bool) or not isinstance(x, int):
        raise TypeError(f"BigInt requires int, got {type(x).__name__}")
    return x
