"""Structural checks on an estimate request, run before any I/O."""

from estimator.errors import InvalidArgument
from estimator.models.estimate import EstimateRequest
from estimator.models.types import addresses_equal, is_valid_address, is_zero_address


def validate_estimate_request(request: EstimateRequest) -> None:
    """Validate an estimate request.

    Raises:
        InvalidArgument: If an address is malformed or zero, src equals dst
            (case-insensitively), or src_amount is missing or not positive
    """
    addresses = {"pool": request.pool, "src": request.src, "dst": request.dst}
    for name, address in addresses.items():
        if not is_valid_address(address):
            raise InvalidArgument(f"{name} is not a valid address: {address!r}")
        if is_zero_address(address):
            raise InvalidArgument(f"{name} cannot be the zero address")

    if addresses_equal(request.src, request.dst):
        raise InvalidArgument("destination address cannot be the same as source address")

    amount = request.src_amount
    if amount is None or isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidArgument("source amount is required")
    if amount <= 0:
        raise InvalidArgument("source amount cannot be zero or negative")
