"""Runtime configuration read from environment variables.

All variables are optional except the RPC URL, which is required only when a
live engine is built:

- ESTIMATOR_RPC_URL (or RPC_URL): JSON-RPC endpoint of the node
- ESTIMATOR_HOST / ESTIMATOR_PORT: bind address (default: 0.0.0.0:1337)
- ESTIMATOR_DEBUG: enable reload and debug logging (default: false)
- ESTIMATOR_LOG_LEVEL: log level name (default: INFO)
- ESTIMATOR_LOG_JSON: render logs as JSON (default: false)
- ESTIMATOR_REQUEST_TIMEOUT: whole-request deadline in seconds (default: 5)
- ESTIMATOR_CALL_TIMEOUT: per RPC call deadline in seconds (default: 5)
- ESTIMATOR_GRACEFUL_TIMEOUT: graceful shutdown timeout in seconds (default: 5)
- ESTIMATOR_FEE_NUMERATOR / ESTIMATOR_FEE_DENOMINATOR: fee tier (default: 997/1000)
- ESTIMATOR_SCRATCH_POOL_SIZE: idle scratch register sets kept (default: 64)
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from estimator.amm.uniswap_v2 import FeeConfig
from estimator.constants import (
    DEFAULT_CALL_TIMEOUT,
    DEFAULT_FEE_DENOMINATOR,
    DEFAULT_FEE_NUMERATOR,
    DEFAULT_GRACEFUL_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SCRATCH_POOL_SIZE,
)

ENV_PREFIX = "ESTIMATOR_"

_TRUE_VALUES = ("true", "1", "yes")


class ConfigError(ValueError):
    """An environment variable holds an invalid value."""

    pass


@dataclass(frozen=True)
class Settings:
    """Service configuration.

    Non-positive timeouts fall back to their defaults.
    """

    rpc_url: str | None = None
    host: str = "0.0.0.0"
    port: int = 1337
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = False
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    call_timeout: float = DEFAULT_CALL_TIMEOUT
    graceful_timeout: float = DEFAULT_GRACEFUL_TIMEOUT
    fee_numerator: int = DEFAULT_FEE_NUMERATOR
    fee_denominator: int = DEFAULT_FEE_DENOMINATOR
    scratch_pool_size: int = DEFAULT_SCRATCH_POOL_SIZE

    @property
    def fee(self) -> FeeConfig:
        return FeeConfig(numerator=self.fee_numerator, denominator=self.fee_denominator)

    @property
    def log_level_value(self) -> int:
        """Numeric logging level; DEBUG whenever debug mode is on."""
        if self.debug:
            return logging.DEBUG
        return logging.getLevelNamesMapping()[self.log_level]

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (for tests)

        Raises:
            ConfigError: If a variable cannot be parsed or is out of range
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> str | None:
            value = env.get(ENV_PREFIX + name)
            return value.strip() if value is not None and value.strip() else None

        log_level = (get("LOG_LEVEL") or cls.log_level).upper()
        if log_level not in logging.getLevelNamesMapping():
            raise ConfigError(f"{ENV_PREFIX}LOG_LEVEL is not a log level: {log_level}")

        settings = cls(
            rpc_url=get("RPC_URL") or env.get("RPC_URL") or None,
            host=get("HOST") or cls.host,
            port=_parse_int("PORT", get("PORT"), cls.port),
            debug=_parse_bool(get("DEBUG")),
            log_level=log_level,
            log_json=_parse_bool(get("LOG_JSON")),
            request_timeout=_parse_timeout(
                "REQUEST_TIMEOUT", get("REQUEST_TIMEOUT"), DEFAULT_REQUEST_TIMEOUT
            ),
            call_timeout=_parse_timeout("CALL_TIMEOUT", get("CALL_TIMEOUT"), DEFAULT_CALL_TIMEOUT),
            graceful_timeout=_parse_timeout(
                "GRACEFUL_TIMEOUT", get("GRACEFUL_TIMEOUT"), DEFAULT_GRACEFUL_TIMEOUT
            ),
            fee_numerator=_parse_int("FEE_NUMERATOR", get("FEE_NUMERATOR"), DEFAULT_FEE_NUMERATOR),
            fee_denominator=_parse_int(
                "FEE_DENOMINATOR", get("FEE_DENOMINATOR"), DEFAULT_FEE_DENOMINATOR
            ),
            scratch_pool_size=_parse_int(
                "SCRATCH_POOL_SIZE", get("SCRATCH_POOL_SIZE"), DEFAULT_SCRATCH_POOL_SIZE
            ),
        )

        if not 0 < settings.port < 65536:
            raise ConfigError(f"{ENV_PREFIX}PORT out of range: {settings.port}")
        if settings.scratch_pool_size < 0:
            raise ConfigError(
                f"{ENV_PREFIX}SCRATCH_POOL_SIZE cannot be negative: {settings.scratch_pool_size}"
            )
        try:
            _ = settings.fee
        except ValueError as err:
            raise ConfigError(f"Invalid fee configuration: {err}") from err

        return settings


def _parse_bool(raw: str | None) -> bool:
    return raw is not None and raw.lower() in _TRUE_VALUES


def _parse_int(name: str, raw: str | None, default: int) -> int:
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as err:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer: {raw!r}") from err


def _parse_timeout(name: str, raw: str | None, default: float) -> float:
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as err:
        raise ConfigError(f"{ENV_PREFIX}{name} must be a number of seconds: {raw!r}") from err
    return value if value > 0 else default


@functools.cache
def get_settings() -> Settings:
    """Process-wide settings, read from the environment once."""
    return Settings.from_env()
