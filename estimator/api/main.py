"""FastAPI application for the swap estimator.

Note: Rate limiting and TLS are not handled here. They belong to the reverse
proxy in front of the service.
"""

import math
import time

import structlog
import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import PlainTextResponse

from estimator import __version__
from estimator.api.endpoints import router
from estimator.config import Settings, get_settings
from estimator.engine import get_default_engine
from estimator.log import configure_logging

logger = structlog.get_logger()

app = FastAPI(
    title="UniswapV2 swap estimator",
    description="Off-chain output estimates for UniswapV2 swaps",
    version=__version__,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Log each request with its status and duration."""
    start = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "http_request",
        method=request.method,
        path=request.url.path,
        query=str(request.query_params),
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - start) * 1000, 3),
    )
    return response


app.include_router(router)


@app.get("/ping", response_class=PlainTextResponse)
async def ping() -> str:
    """Liveness probe."""
    return "pong"


@app.get("/health")
async def health(settings: Settings = Depends(get_settings)) -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "rpc_configured": bool(settings.rpc_url)}


def run() -> None:
    """Run the estimator API server.

    Configuration is read from ESTIMATOR_* environment variables (see
    estimator.config). uvicorn handles SIGINT/SIGTERM and drains in-flight
    requests for up to ESTIMATOR_GRACEFUL_TIMEOUT seconds.
    """
    settings = get_settings()
    configure_logging(settings.log_level_value, json_output=settings.log_json)

    # Fail at startup rather than on the first request
    get_default_engine()

    logger.info("server_starting", host=settings.host, port=settings.port)
    uvicorn.run(
        "estimator.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        timeout_graceful_shutdown=math.ceil(settings.graceful_timeout),
    )
    logger.info("server_stopped")


if __name__ == "__main__":
    run()
