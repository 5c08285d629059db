"""Pair reader backed by JSON-RPC eth_call.

Calls the pair contract's token0(), token1() and getReserves() view
functions and decodes the raw return data with eth_abi.
"""

from __future__ import annotations

import asyncio
from typing import Any

import structlog
from eth_abi import decode
from eth_abi.exceptions import DecodingError
from web3 import AsyncHTTPProvider, AsyncWeb3

from estimator.concurrency import join_all
from estimator.constants import (
    DEFAULT_CALL_TIMEOUT,
    GET_RESERVES_SELECTOR,
    GET_RESERVES_TYPES,
    TOKEN0_SELECTOR,
    TOKEN1_SELECTOR,
)
from estimator.errors import PairReadFailed
from estimator.models.estimate import PairReserves, PairTokens
from estimator.models.types import normalize_address

logger = structlog.get_logger()


class Web3PairReader:
    """Reads pair state from a node via AsyncWeb3.

    token0 and token1 are fetched concurrently, each bounded by call_timeout.
    getReserves is a single call bounded by call_timeout. Every outer
    deadline set by the caller still applies.
    """

    def __init__(self, w3: AsyncWeb3 | Any, call_timeout: float = DEFAULT_CALL_TIMEOUT) -> None:
        """Initialize reader.

        Args:
            w3: AsyncWeb3 instance (anything exposing an async eth.call)
            call_timeout: Timeout in seconds for each eth_call
        """
        self.w3 = w3
        self.call_timeout = call_timeout

    @classmethod
    def from_url(cls, rpc_url: str, call_timeout: float = DEFAULT_CALL_TIMEOUT) -> Web3PairReader:
        """Create a reader for an HTTP RPC URL (e.g., "https://eth.llamarpc.com")."""
        return cls(AsyncWeb3(AsyncHTTPProvider(rpc_url)), call_timeout=call_timeout)

    async def _eth_call(self, pool: str, selector: str) -> bytes:
        result = await self.w3.eth.call(
            {"to": AsyncWeb3.to_checksum_address(pool), "data": selector}
        )
        return bytes(result)

    async def _read_token(self, pool: str, selector: str) -> str:
        raw = await self._eth_call(pool, selector)
        (address,) = decode(["address"], raw)
        return normalize_address(address)

    async def tokens(self, pool: str) -> PairTokens:
        """Get token0 and token1 of a pair, fetched concurrently.

        Raises:
            PairReadFailed: If either call fails; the message includes every
                failed call and the cause is the ExceptionGroup of failures
        """
        try:
            token0, token1 = await join_all(
                [
                    ("token0", lambda: self._read_token(pool, TOKEN0_SELECTOR)),
                    ("token1", lambda: self._read_token(pool, TOKEN1_SELECTOR)),
                ],
                timeout=self.call_timeout,
            )
        except ExceptionGroup as group:
            logger.warning("pair_tokens_read_failed", pool=pool, error=str(group))
            raise PairReadFailed(f"failed to get pair tokens: {group.message}") from group

        return PairTokens(token0=token0, token1=token1)

    async def reserves(self, pool: str) -> PairReserves:
        """Get reserve0 and reserve1 of a pair.

        Raises:
            PairReadFailed: If the call fails, times out, or returns data
                that does not decode as getReserves() output
        """
        try:
            async with asyncio.timeout(self.call_timeout):
                raw = await self._eth_call(pool, GET_RESERVES_SELECTOR)
        except TimeoutError as err:
            logger.warning("pair_reserves_timeout", pool=pool, timeout=self.call_timeout)
            raise PairReadFailed(
                f"getReserves: timed out after {self.call_timeout}s"
            ) from err
        except Exception as err:
            logger.warning("pair_reserves_read_failed", pool=pool, error=str(err))
            raise PairReadFailed(f"getReserves: {err}") from err

        try:
            reserve0, reserve1, _ = decode(list(GET_RESERVES_TYPES), raw)
        except DecodingError as err:
            raise PairReadFailed(f"getReserves: cannot decode {len(raw)} bytes: {err}") from err

        return PairReserves(reserve0=int(reserve0), reserve1=int(reserve1))


__all__ = ["Web3PairReader"]
