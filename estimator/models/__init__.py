"""Data models for swap estimation."""

from estimator.models.estimate import EstimateRequest, Orientation, PairReserves, PairTokens
from estimator.models.query import EstimateQuery, parse_estimate_query
from estimator.models.types import Address, Amount, normalize_address

__all__ = [
    # Types
    "Address",
    "Amount",
    "normalize_address",
    # Estimate models
    "EstimateRequest",
    "Orientation",
    "PairReserves",
    "PairTokens",
    # HTTP query
    "EstimateQuery",
    "parse_estimate_query",
]
