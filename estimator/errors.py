"""Error taxonomy for swap estimation.

Every failure the engine reports is an EngineError carrying an ErrorKind, so
the HTTP layer can classify it without parsing messages:

- InvalidArgument: caller-supplied data is wrong (maps to 400)
- InsufficientLiquidity: the pool cannot satisfy the swap (maps to 400)
- PairReadFailed: the pool state could not be read (maps to 502)
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Kinds of estimation failures."""

    INVALID_ARGUMENT = "invalid_argument"
    PAIR_READ_FAILED = "pair_read_failed"
    INSUFFICIENT_LIQUIDITY = "insufficient_liquidity"


class EngineError(Exception):
    """Base error for estimation failures."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgument(EngineError):
    """Request parameters are structurally or semantically invalid.

    When the failure is a pool membership mismatch, ``pool_tokens`` holds the
    pool's actual (token0, token1) for diagnostics.
    """

    kind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, message: str, pool_tokens: tuple[str, str] | None = None) -> None:
        if pool_tokens is not None:
            message = f"{message} (pool tokens: {pool_tokens[0]}, {pool_tokens[1]})"
        super().__init__(message)
        self.pool_tokens = pool_tokens


class PairReadFailed(EngineError):
    """Pair tokens or reserves could not be fetched or decoded."""

    kind = ErrorKind.PAIR_READ_FAILED


class InsufficientLiquidity(EngineError):
    """The formula produced no output for the requested swap."""

    kind = ErrorKind.INSUFFICIENT_LIQUIDITY
