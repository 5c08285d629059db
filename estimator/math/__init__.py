"""Integer arithmetic helpers for exact AMM math."""

from estimator.math.bigint import BigInt, BigIntError, DivisionByZero
from estimator.math.scratch import Scratch, ScratchPool

__all__ = ["BigInt", "BigIntError", "DivisionByZero", "Scratch", "ScratchPool"]
