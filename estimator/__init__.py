"""UniswapV2 swap estimator - off-chain output estimates from live pool state."""

from estimator.engine import EstimationEngine
from estimator.errors import EngineError, InsufficientLiquidity, InvalidArgument, PairReadFailed
from estimator.models.estimate import EstimateRequest

__version__ = "0.1.0"
__all__ = [
    "EstimationEngine",
    "EstimateRequest",
    "EngineError",
    "InvalidArgument",
    "InsufficientLiquidity",
    "PairReadFailed",
    "__version__",
]
