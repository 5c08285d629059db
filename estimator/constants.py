"""Protocol constants for the swap estimator.

Centralizes well-known addresses, function selectors and default parameters.
"""

# The all-zero address is never a valid pool or token
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# UniswapV2 fee: 0.3% expressed as 997/1000 to keep the math in integers
DEFAULT_FEE_NUMERATOR = 997
DEFAULT_FEE_DENOMINATOR = 1000

# Pair contract function selectors (first 4 bytes of keccak256 of the signature)
TOKEN0_SELECTOR = "0x0dfe1681"  # token0()
TOKEN1_SELECTOR = "0xd21220a7"  # token1()
GET_RESERVES_SELECTOR = "0x0902f1ac"  # getReserves()

# getReserves() returns (uint112 reserve0, uint112 reserve1, uint32 blockTimestampLast)
GET_RESERVES_TYPES = ("uint112", "uint112", "uint32")

# Timeouts in seconds
DEFAULT_REQUEST_TIMEOUT = 5.0
DEFAULT_CALL_TIMEOUT = 5.0
DEFAULT_GRACEFUL_TIMEOUT = 5.0

# Upper bound on idle scratch register sets kept by the calculator
DEFAULT_SCRATCH_POOL_SIZE = 64
