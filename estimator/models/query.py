"""Pydantic model for the /estimate query string."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError

from estimator.errors import InvalidArgument
from estimator.models.estimate import EstimateRequest
from estimator.models.types import Address, Amount

_FIELDS = ("pool", "src", "dst", "src_amount")


def _positive(value: int) -> int:
    if value <= 0:
        raise ValueError("Amount must be positive")
    return value


class EstimateQuery(BaseModel):
    """Query parameters of GET /estimate."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    pool: Address
    src: Address
    dst: Address
    src_amount: Annotated[Amount, AfterValidator(_positive)]

    def to_request(self) -> EstimateRequest:
        return EstimateRequest(
            pool=self.pool,
            src=self.src,
            dst=self.dst,
            src_amount=self.src_amount,
        )


def parse_estimate_query(params: dict[str, str]) -> EstimateQuery:
    """Parse raw query parameters into an EstimateQuery.

    Empty values count as missing.

    Raises:
        InvalidArgument: "missing params", "bad address format" or
            "bad src_amount", checked in that order
    """
    values = {name: params.get(name) or None for name in _FIELDS}
    if any(value is None for value in values.values()):
        raise InvalidArgument("missing params")

    try:
        return EstimateQuery.model_validate(values)
    except ValidationError as err:
        failed = {str(error["loc"][0]) for error in err.errors() if error["loc"]}
        if failed & {"pool", "src", "dst"}:
            raise InvalidArgument("bad address format") from err
        raise InvalidArgument("bad src_amount") from err
