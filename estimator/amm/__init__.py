"""AMM math implementations."""

from estimator.amm.uniswap_v2 import DEFAULT_FEE_CONFIG, FeeConfig, UniswapV2Calculator, uniswap_v2

__all__ = ["FeeConfig", "DEFAULT_FEE_CONFIG", "UniswapV2Calculator", "uniswap_v2"]
