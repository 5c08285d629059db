"""In-memory pair reader for tests and local runs without RPC."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from estimator.errors import PairReadFailed
from estimator.models.estimate import PairReserves, PairTokens
from estimator.models.types import normalize_address


@dataclass
class MockPair:
    """State of one mocked pair."""

    tokens: PairTokens
    reserves: PairReserves


class MockPairReader:
    """Mock reader serving configured pairs, tracking calls for assertions.

    Usage:
        reader = MockPairReader({
            "0xpool...": MockPair(PairTokens(t0, t1), PairReserves(10_000, 20_000)),
        })

        # Simulate an unreachable pool
        reader.tokens_error = PairReadFailed("connection reset")
    """

    def __init__(
        self,
        pairs: dict[str, MockPair] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.pairs = {normalize_address(pool): pair for pool, pair in (pairs or {}).items()}
        self.delay = delay
        self.tokens_error: Exception | None = None
        self.reserves_error: Exception | None = None
        self.calls: list[tuple[str, str]] = []  # (method, pool)

    def _lookup(self, pool: str) -> MockPair:
        pair = self.pairs.get(normalize_address(pool))
        if pair is None:
            raise PairReadFailed(f"no pair at {pool}")
        return pair

    async def tokens(self, pool: str) -> PairTokens:
        self.calls.append(("tokens", pool))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.tokens_error is not None:
            raise self.tokens_error
        return self._lookup(pool).tokens

    async def reserves(self, pool: str) -> PairReserves:
        self.calls.append(("reserves", pool))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.reserves_error is not None:
            raise self.reserves_error
        return self._lookup(pool).reserves
