"""API endpoints for swap estimation."""

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from estimator.config import Settings, get_settings
from estimator.engine import EstimationEngine, get_default_engine
from estimator.errors import EngineError, ErrorKind
from estimator.models.query import parse_estimate_query

logger = structlog.get_logger()

router = APIRouter()

# HTTP status for each engine error kind; anything else is a 500
STATUS_BY_KIND = {
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.INSUFFICIENT_LIQUIDITY: 400,
    ErrorKind.PAIR_READ_FAILED: 502,
}


def get_engine() -> EstimationEngine:
    """Dependency provider for the engine instance.

    Override this in tests to inject an engine with a mock reader:
        app.dependency_overrides[get_engine] = lambda: EstimationEngine(reader=mock_reader)
    """
    return get_default_engine()


@router.get("/estimate", response_class=PlainTextResponse)
async def estimate(
    request: Request,
    engine: EstimationEngine = Depends(get_engine),
    settings: Settings = Depends(get_settings),
) -> PlainTextResponse:
    """Estimate the output of a swap through a UniswapV2 pool.

    Query parameters: pool, src, dst (0x addresses) and src_amount (decimal
    integer string).

    Returns:
        The output amount as a decimal string (text/plain)

    Error Handling:
        - Invalid parameters or tokens not in the pool: 400
        - Swap yields nothing at current reserves: 400
        - Pool state could not be read: 502
        - Anything else: 500 "internal error"
    """
    try:
        query = parse_estimate_query(dict(request.query_params))
        amount_out = await engine.estimate(query.to_request(), timeout=settings.request_timeout)
    except EngineError as err:
        status_code = STATUS_BY_KIND.get(err.kind, 500)
        logger.info(
            "estimate_rejected",
            kind=err.kind.value,
            status_code=status_code,
            error=err.message,
        )
        return PlainTextResponse(err.message, status_code=status_code)
    except Exception:
        logger.exception("estimate_error", query=str(request.query_params))
        return PlainTextResponse("internal error", status_code=500)

    return PlainTextResponse(str(amount_out))
