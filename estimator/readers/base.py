"""Interface for reading UniswapV2 pair state."""

from typing import Protocol

from estimator.models.estimate import PairReserves, PairTokens


class PairStateReader(Protocol):
    """Protocol for pair state readers.

    Implementations return tokens and reserves in the same canonical order,
    so reserve0 is always the reserve of token0. Deadlines come from the
    caller's enclosing asyncio.timeout scope. Failures are reported as
    PairReadFailed.
    """

    async def tokens(self, pool: str) -> PairTokens:
        """Get (token0, token1) of the pair at pool."""
        ...

    async def reserves(self, pool: str) -> PairReserves:
        """Get (reserve0, reserve1) of the pair at pool."""
        ...
