"""Fixed-arity parallel join with error aggregation.

join_all() runs a fixed set of named coroutine factories concurrently, each
under its own timeout, and waits for every one of them. If any call fails
the whole join fails with an ExceptionGroup holding one CallFailed per
failed call, so no failure cause is dropped. There are no partial results.

Timeouts nest: a per-call timeout applies inside whatever asyncio.timeout
scope the caller is running under, so the earlier deadline always wins.
Cancelling the caller cancels every call still in flight.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

import structlog

T = TypeVar("T")

logger = structlog.get_logger()

NamedCall = tuple[str, Callable[[], Awaitable[T]]]


class CallFailed(Exception):
    """One named call of a join failed. The original error is the __cause__."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(f"{name}: {message}")
        self.name = name


async def _run_call(name: str, factory: Callable[[], Awaitable[T]], timeout: float | None) -> T:
    try:
        async with asyncio.timeout(timeout):
            return await factory()
    except TimeoutError as err:
        raise CallFailed(name, f"timed out after {timeout}s") from err
    except Exception as err:
        raise CallFailed(name, str(err) or type(err).__name__) from err


async def join_all(calls: Sequence[NamedCall[T]], timeout: float | None = None) -> list[T]:
    """Run calls concurrently and return their results in call order.

    Args:
        calls: (name, factory) pairs; each factory returns a fresh awaitable
        timeout: Per-call timeout in seconds, or None for no per-call limit

    Returns:
        Results in the same order as calls

    Raises:
        ExceptionGroup: Of CallFailed, if at least one call failed. The group
            message names every failed call and its error.
    """
    outcomes = await asyncio.gather(
        *(_run_call(name, factory, timeout) for name, factory in calls),
        return_exceptions=True,
    )

    failures: list[Exception] = []
    for (name, _), outcome in zip(calls, outcomes, strict=True):
        if isinstance(outcome, CallFailed):
            failures.append(outcome)
        elif isinstance(outcome, BaseException):
            # A call cancelled on its own while the join itself was not
            failure = CallFailed(name, f"aborted: {type(outcome).__name__}")
            failure.__cause__ = outcome
            failures.append(failure)

    if failures:
        message = "; ".join(str(failure) for failure in failures)
        logger.debug("join_failed", failed=len(failures), total=len(calls), errors=message)
        raise ExceptionGroup(message, failures)

    return list(outcomes)  # type: ignore[arg-type]


__all__ = ["CallFailed", "join_all"]
