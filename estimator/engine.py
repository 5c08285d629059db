"""Estimation engine: validates a request, reads pair state and prices the swap.

Flow per request:
    validate -> tokens(pool) -> orientation -> reserves(pool) -> get_amount_out

Every step ends in either the next step or a terminal EngineError; nothing
is retried. Pair state is read fresh for each request.
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

from estimator.amm.uniswap_v2 import UniswapV2Calculator
from estimator.config import ConfigError, Settings, get_settings
from estimator.errors import EngineError, InsufficientLiquidity, PairReadFailed
from estimator.math.scratch import ScratchPool
from estimator.models.estimate import EstimateRequest
from estimator.models.types import format_amount
from estimator.readers.base import PairStateReader
from estimator.readers.web3_reader import Web3PairReader
from estimator.validation import validate_estimate_request

T = TypeVar("T")

logger = structlog.get_logger()


class EstimationEngine:
    """Estimates UniswapV2 swap output from live pair state.

    Args:
        reader: Source of pair tokens and reserves
        calculator: Amount-out calculator. If None, uses the default 0.3% fee.
    """

    def __init__(
        self,
        reader: PairStateReader,
        calculator: UniswapV2Calculator | None = None,
    ) -> None:
        self.reader = reader
        self.calculator = calculator if calculator is not None else UniswapV2Calculator()

    async def estimate(self, request: EstimateRequest, timeout: float | None = None) -> int:
        """Estimate how much dst a swap of src_amount src through pool returns.

        Args:
            request: The estimate request
            timeout: Deadline in seconds for all pair reads, or None

        Returns:
            The output amount (always positive)

        Raises:
            InvalidArgument: Bad request, or src/dst are not the pool's tokens
            PairReadFailed: Tokens or reserves could not be read in time
            InsufficientLiquidity: The swap yields nothing at current reserves
        """
        validate_estimate_request(request)
        assert request.src_amount is not None

        try:
            async with asyncio.timeout(timeout):
                tokens = await self._read("tokens", self.reader.tokens, request.pool)
                orientation = tokens.orient(request.src, request.dst)
                reserves = await self._read("reserves", self.reader.reserves, request.pool)
        except TimeoutError as err:
            logger.warning("estimate_timeout", pool=request.pool, timeout=timeout)
            raise PairReadFailed(f"pair read timed out after {timeout}s") from err

        reserve_in, reserve_out = reserves.oriented(orientation)
        amount_out, ok = self.calculator.get_amount_out(
            request.src_amount, reserve_in, reserve_out
        )
        if not ok:
            amount = format_amount(request.src_amount)
            logger.info(
                "insufficient_liquidity",
                pool=request.pool,
                src_amount=amount,
                reserve_in=reserve_in,
                reserve_out=reserve_out,
            )
            raise InsufficientLiquidity(f"pool {request.pool} cannot return any output for {amount}")

        logger.debug(
            "estimate_computed",
            pool=request.pool,
            orientation=orientation.value,
            src_amount=format_amount(request.src_amount),
            amount_out=amount_out,
        )
        return amount_out

    async def _read(self, what: str, read: Callable[[str], Awaitable[T]], pool: str) -> T:
        """Run a reader call, classifying unexpected failures as PairReadFailed."""
        try:
            result = await read(pool)
        except EngineError:
            raise
        except TimeoutError as err:
            # A reader's own timeout; an expired request deadline arrives as cancellation
            raise PairReadFailed(f"failed to read pair {what}: timed out") from err
        except Exception as err:
            raise PairReadFailed(f"failed to read pair {what}: {err}") from err
        return result


def build_engine(settings: Settings) -> EstimationEngine:
    """Create an engine reading live pair state from settings.rpc_url.

    Raises:
        ConfigError: If no RPC URL is configured
    """
    if not settings.rpc_url:
        raise ConfigError("ESTIMATOR_RPC_URL (or RPC_URL) must be set to read pair state")

    logger.info(
        "engine_configured",
        rpc_url=settings.rpc_url[:50] + "...",
        call_timeout=settings.call_timeout,
        fee_bps=settings.fee.fee_bps,
    )
    reader = Web3PairReader.from_url(settings.rpc_url, call_timeout=settings.call_timeout)
    calculator = UniswapV2Calculator(
        fee=settings.fee,
        scratch_pool=ScratchPool(max_size=settings.scratch_pool_size),
    )
    return EstimationEngine(reader=reader, calculator=calculator)


@functools.cache
def get_default_engine() -> EstimationEngine:
    """Process-wide engine built from environment settings."""
    return build_engine(get_settings())
