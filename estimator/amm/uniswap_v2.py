"""UniswapV2 amount-out calculation.

UniswapV2 uses the constant product formula: x * y = k
With a 0.3% fee on input amounts, expressed as 997/1000.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from estimator.constants import DEFAULT_FEE_DENOMINATOR, DEFAULT_FEE_NUMERATOR
from estimator.math.bigint import DivisionByZero
from estimator.math.scratch import ScratchPool
from estimator.models.types import format_amount

logger = structlog.get_logger()


@dataclass(frozen=True)
class FeeConfig:
    """Fee tier as an integer fraction of the input that counts toward the swap.

    The default 997/1000 is the standard UniswapV2 0.3% fee. Other values
    exist only so alternate tiers can be exercised in tests.

    Attributes:
        numerator: Fee-adjusted share of the input (default: 997)
        denominator: Scale of the fraction (default: 1000)
    """

    numerator: int = DEFAULT_FEE_NUMERATOR
    denominator: int = DEFAULT_FEE_DENOMINATOR

    def __post_init__(self) -> None:
        if self.denominator <= 0:
            raise ValueError(f"Fee denominator must be positive: {self.denominator}")
        if not 0 < self.numerator <= self.denominator:
            raise ValueError(
                f"Fee numerator must be in (0, {self.denominator}]: {self.numerator}"
            )

    @property
    def fee_bps(self) -> int:
        """Fee in basis points (30 for 997/1000)."""
        return (self.denominator - self.numerator) * 10000 // self.denominator


# Default configuration instance
DEFAULT_FEE_CONFIG = FeeConfig()


class UniswapV2Calculator:
    """UniswapV2 constant product math.

    Formula: amount_out = (amount_in * 997 * reserve_out) / (reserve_in * 1000 + amount_in * 997)

    Intermediate products are kept in scratch registers taken from a shared
    pool, so one calculator can serve many concurrent requests.
    """

    def __init__(
        self,
        fee: FeeConfig = DEFAULT_FEE_CONFIG,
        scratch_pool: ScratchPool | None = None,
    ) -> None:
        self.fee = fee
        self.scratch_pool = scratch_pool if scratch_pool is not None else ScratchPool()

    def get_amount_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
    ) -> tuple[int, bool]:
        """Calculate output amount using the constant product formula.

        Args:
            amount_in: Input token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool

        Returns:
            (amount_out, True) on success. (0, False) if any input is not
            strictly positive or the floored output is zero.
        """
        if amount_in <= 0 or reserve_in <= 0 or reserve_out <= 0:
            return 0, False

        with self.scratch_pool.acquire() as scratch:
            effective_in = scratch.effective_in.set(amount_in).mul(self.fee.numerator)
            numerator = scratch.numerator.set(effective_in).mul(reserve_out)
            denominator = (
                scratch.denominator.set(reserve_in).mul(self.fee.denominator).add(effective_in)
            )
            try:
                amount_out = numerator.floordiv(denominator).value
            except DivisionByZero:
                return 0, False

        if amount_out <= 0:
            logger.debug(
                "amount_out_rounds_to_zero",
                amount_in=format_amount(amount_in),
                reserve_in=reserve_in,
                reserve_out=reserve_out,
            )
            return 0, False

        return amount_out, True


# Singleton instance
uniswap_v2 = UniswapV2Calculator()


__all__ = [
    "FeeConfig",
    "DEFAULT_FEE_CONFIG",
    "UniswapV2Calculator",
    "uniswap_v2",
]
