"""Pytest configuration and fixtures."""

import pytest

from estimator.amm.uniswap_v2 import UniswapV2Calculator
from estimator.engine import EstimationEngine
from estimator.models.estimate import PairReserves, PairTokens
from estimator.readers.mock import MockPair, MockPairReader
from tests.helpers import POOL, TOKEN_A, TOKEN_B


@pytest.fixture
def calculator() -> UniswapV2Calculator:
    """A calculator with the default 0.3% fee and its own scratch pool."""
    return UniswapV2Calculator()


@pytest.fixture
def pair() -> MockPair:
    """TOKEN_A/TOKEN_B pair with reserves (10_000, 20_000)."""
    return MockPair(
        tokens=PairTokens(token0=TOKEN_A, token1=TOKEN_B),
        reserves=PairReserves(reserve0=10_000, reserve1=20_000),
    )


@pytest.fixture
def mock_reader(pair: MockPair) -> MockPairReader:
    """A mock reader serving the TOKEN_A/TOKEN_B pair at POOL."""
    return MockPairReader({POOL: pair})


@pytest.fixture
def engine(mock_reader: MockPairReader, calculator: UniswapV2Calculator) -> EstimationEngine:
    """An engine reading from the mock reader."""
    return EstimationEngine(reader=mock_reader, calculator=calculator)
