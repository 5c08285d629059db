"""Readers for on-chain pair state."""

from estimator.readers.base import PairStateReader
from estimator.readers.mock import MockPairReader
from estimator.readers.web3_reader import Web3PairReader

__all__ = ["PairStateReader", "MockPairReader", "Web3PairReader"]
