"""Tests for the BigInt mutable register."""

import pytest

from estimator.math.bigint import BigInt, BigIntError, DivisionByZero


class TestBigIntConstruction:
    """Tests for BigInt construction."""

    def test_default_zero(self):
        """BigInt() starts at zero."""
        assert BigInt().value == 0

    def test_from_int(self):
        """BigInt can be constructed from int."""
        assert BigInt(42).value == 42

    def test_from_bigint(self):
        """BigInt can be constructed from another BigInt."""
        assert BigInt(BigInt(7)).value == 7

    def test_invalid_types_rejected(self):
        """Floats, strings and bools are rejected."""
        with pytest.raises(TypeError):
            BigInt(3.14)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            BigInt("42")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            BigInt(True)


class TestBigIntOperations:
    """Tests for in-place arithmetic."""

    def test_chaining(self):
        """Operations mutate and return the same register."""
        reg = BigInt()
        result = reg.set(100).mul(997).add(1_000_000)
        assert result is reg
        assert reg.value == 1_099_700

    def test_set_overwrites(self):
        """set() replaces the previous value entirely."""
        reg = BigInt(10**50)
        reg.set(3)
        assert reg.value == 3

    def test_operands_may_be_registers(self):
        """Other registers are read by value, not aliased."""
        a = BigInt(6)
        b = BigInt(7)
        a.mul(b)
        b.set(0)
        assert a.value == 42

    def test_floordiv(self):
        """Floor division truncates toward negative infinity like int //."""
        assert BigInt(99_700_000).floordiv(1_099_700).value == 90
        assert BigInt(-7).floordiv(2).value == -4

    def test_division_by_zero_raises(self):
        """Dividing by zero raises DivisionByZero and leaves the value intact."""
        reg = BigInt(5)
        with pytest.raises(DivisionByZero):
            reg.floordiv(0)
        with pytest.raises(DivisionByZero):
            reg.floordiv(BigInt())
        assert reg.value == 5

    def test_error_hierarchy(self):
        """Errors are ArithmeticErrors."""
        assert issubclass(DivisionByZero, BigIntError)
        assert issubclass(BigIntError, ArithmeticError)

    def test_reset(self):
        """reset() zeroes the register."""
        assert BigInt(123).reset().value == 0


class TestBigIntComparison:
    """Tests for equality and conversion."""

    def test_equality(self):
        """Registers compare equal to ints and registers with the same value."""
        assert BigInt(5) == 5
        assert BigInt(5) == BigInt(5)
        assert BigInt(5) != BigInt(6)

    def test_unhashable(self):
        """Mutable registers cannot be dict keys."""
        with pytest.raises(TypeError):
            hash(BigInt(1))

    def test_int_and_str(self):
        """int() and str() expose the value."""
        assert int(BigInt(12)) == 12
        assert str(BigInt(12)) == "12"
        assert repr(BigInt(12)) == "BigInt(12)"
