"""Test helpers module for shared test utilities.

- constants: Pool and token addresses
- fakes: Fake AsyncWeb3 for reader tests
"""

from tests.helpers.constants import (
    POOL,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    USDC,
    USDC_WETH_PAIR,
    WETH,
    ZERO,
)
from tests.helpers.fakes import FakeEth, FakeWeb3

__all__ = [
    # Constants
    "POOL",
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_C",
    "WETH",
    "USDC",
    "USDC_WETH_PAIR",
    "ZERO",
    # Fakes
    "FakeEth",
    "FakeWeb3",
]
