"""Shared type definitions and address helpers."""

import re
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from estimator.constants import ZERO_ADDRESS

_ADDRESS_RE = re.compile(r"0x[a-fA-F0-9]{40}")


def validate_amount(value: Any) -> int:
    """Validate a token amount given as a decimal string or int.

    Amounts are arbitrary precision; only plain ASCII digits are accepted
    for strings (no sign, whitespace, underscores or exponent).

    Args:
        value: Value to validate

    Returns:
        The amount as an int

    Raises:
        ValueError: If value is not a non-negative decimal integer
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be a decimal integer string")

    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Amount cannot be negative: {value}")
        return value

    if not isinstance(value, str):
        raise ValueError(f"Amount must be string or int, got {type(value).__name__}")

    if not value.isascii() or not value.isdigit():
        raise ValueError(f"Amount must be a decimal integer string: '{value}'")

    return _parse_digits(value)


# Below the smallest limit sys.set_int_max_str_digits() accepts (640)
_DIGIT_CHUNK = 512


def _parse_digits(digits: str) -> int:
    """Convert an ASCII digit string of any length to int.

    int() on a str refuses more than sys.get_int_max_str_digits() digits, so
    long strings are split in halves and recombined.
    """
    if len(digits) <= _DIGIT_CHUNK:
        return int(digits)
    split = len(digits) // 2
    high, low = digits[:split], digits[split:]
    return _parse_digits(high) * 10 ** len(low) + _parse_digits(low)


def format_amount(value: int) -> str:
    """Decimal string of an amount for logs and messages.

    Amounts too long for str() are shown by bit length instead.
    """
    try:
        return str(value)
    except ValueError:
        return f"<{value.bit_length()}-bit amount>"


# Ethereum address (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]

# Non-negative arbitrary precision integer, accepted as decimal string
Amount = Annotated[
    int,
    BeforeValidator(validate_amount),
    Field(description="Non-negative integer as decimal string"),
]


def normalize_address(address: str) -> str:
    """Normalize an Ethereum address to lowercase with 0x prefix.

    Does not check validity; use is_valid_address() for that.
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr
    return addr


def addresses_equal(a: str, b: str) -> bool:
    """Case-insensitive address comparison (checksum casing is ignored)."""
    return normalize_address(a) == normalize_address(b)


def is_valid_address(address: str) -> bool:
    """Check if a string is a 0x-prefixed, 40 hex char Ethereum address."""
    if not isinstance(address, str):
        return False
    return _ADDRESS_RE.fullmatch(address) is not None


def is_zero_address(address: str) -> bool:
    """Check if an address is the all-zero address."""
    return normalize_address(address) == ZERO_ADDRESS
