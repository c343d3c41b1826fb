"""Shared type definitions for SDK models.

These annotated types validate wire strings and integer amounts at model
construction time.
"""

import re
from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator, Field

from torch_sdk.constants import QUERY_ID_MAX

# Raw form: "<workchain>:<64 hex chars>"
_RAW_ADDRESS_RE = re.compile(r"^-?\d+:[0-9a-fA-F]{64}$")
# User-friendly form: 36 bytes, base64 or base64url encoded
_FRIENDLY_ADDRESS_RE = re.compile(r"^[A-Za-z0-9_\-+/]{48}$")


def is_valid_address(address: str) -> bool:
    """Check if a string is a TON address in raw or user-friendly form.

    Args:
        address: String to validate

    Returns:
        True if the string matches either address form
    """
    if not isinstance(address, str):
        return False
    return bool(_RAW_ADDRESS_RE.match(address) or _FRIENDLY_ADDRESS_RE.match(address))


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize a TON address for identity comparison.

    Raw addresses are lowercased. User-friendly addresses are case-sensitive
    base64 and are returned unchanged apart from surrounding whitespace.

    Args:
        address: A TON address
        validate: If True, raises ValueError for invalid addresses

    Returns:
        Normalized address string

    Raises:
        ValueError: If validate=True and address is not a valid TON address
    """
    addr = address.strip()
    if _RAW_ADDRESS_RE.match(addr):
        addr = addr.lower()

    if validate and not is_valid_address(addr):
        raise ValueError(f"Invalid address: {address}")

    return addr


def _validate_address(value: str) -> str:
    return normalize_address(value, validate=True)


def _non_negative_int(value: Any, *, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got bool")
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"{name} must be a decimal integer string: '{value}'") from err
    if not isinstance(value, int):
        raise ValueError(f"{name} must be string or int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} cannot be negative: {value}")
    return value


def validate_amount(value: Any) -> int:
    """Validate a token amount (non-negative, arbitrary precision).

    Args:
        value: int or decimal string

    Returns:
        The amount as int

    Raises:
        ValueError: If negative or non-integer
    """
    return _non_negative_int(value, name="Amount")


def validate_query_id(value: Any) -> int:
    """Validate a 64-bit unsigned query id."""
    query_id = _non_negative_int(value, name="QueryId")
    if query_id > QUERY_ID_MAX:
        raise ValueError(f"QueryId overflow: {query_id} > {QUERY_ID_MAX}")
    return query_id


# TON address (raw or user-friendly), normalized
Address = Annotated[str, AfterValidator(_validate_address)]

# Token amount as arbitrary-precision int
Amount = Annotated[
    int,
    BeforeValidator(validate_amount),
    Field(description="Token amount in the asset's smallest unit"),
]

QueryId = Annotated[int, BeforeValidator(validate_query_id)]

# Serialized cell (bag of cells) as hex
BocHex = Annotated[str, Field(pattern=r"^[0-9a-fA-F]*$")]
