"""Value objects for a single swap estimate."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from estimator.errors import InvalidArgument
from estimator.models.types import addresses_equal


@dataclass(frozen=True)
class EstimateRequest:
    """Request to estimate the output of swapping src_amount of src for dst via pool."""

    pool: str
    src: str
    dst: str
    src_amount: int | None


class Orientation(Enum):
    """Direction of a swap relative to the pool's canonical token order."""

    # src is token0, dst is token1
    ZERO_FOR_ONE = "zero_for_one"
    # src is token1, dst is token0
    ONE_FOR_ZERO = "one_for_zero"


@dataclass(frozen=True)
class PairReserves:
    """Reserves of a pair, index-aligned with PairTokens."""

    reserve0: int
    reserve1: int

    def oriented(self, orientation: Orientation) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        if orientation is Orientation.ZERO_FOR_ONE:
            return self.reserve0, self.reserve1
        return self.reserve1, self.reserve0


@dataclass(frozen=True)
class PairTokens:
    """Token addresses of a pair in the order the pool contract reports them."""

    token0: str
    token1: str

    def orient(self, src: str, dst: str) -> Orientation:
        """Determine which canonical side src and dst sit on.

        Comparison is case-insensitive.

        Raises:
            InvalidArgument: If (src, dst) is neither (token0, token1) nor
                (token1, token0)
        """
        if addresses_equal(src, self.token0) and addresses_equal(dst, self.token1):
            return Orientation.ZERO_FOR_ONE
        if addresses_equal(src, self.token1) and addresses_equal(dst, self.token0):
            return Orientation.ONE_FOR_ZERO
        raise InvalidArgument(
            f"src {src} and dst {dst} are not the two tokens of the pool",
            pool_tokens=(self.token0, self.token1),
        )
