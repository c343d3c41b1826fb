"""Slippage engine: minimum-output bounds from a tolerance.

All arithmetic is exact. Tolerances are Decimals in [0, 1]; amounts are
ints. Minimum outputs are rounded down (floor) everywhere, so a bound never
exceeds ``(1 - tolerance) * amount``.

Usage:
    from torch_sdk.slippage import min_amount_out

    min_amount_out(1_000_000, Decimal("0.01"))  # 990000
"""

from __future__ import annotations

import decimal
from collections.abc import Iterable
from decimal import ROUND_FLOOR, Decimal
from typing import Annotated, Any

from pydantic import BeforeValidator

from torch_sdk.models.asset import Allocation

# Enough digits for a 120-bit amount times a tolerance with many decimals
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=100)

_ONE = Decimal(1)


def parse_slippage(value: Any) -> Decimal:
    """Convert a tolerance to Decimal and check it lies in [0, 1].

    Floats go through ``str`` so 0.01 becomes exactly Decimal("0.01").

    Raises:
        ValueError: If the value is not numeric or falls outside [0, 1]
    """
    if isinstance(value, bool):
        raise ValueError("Slippage tolerance must be numeric, got bool")
    if isinstance(value, float):
        value = str(value)
    try:
        tolerance = Decimal(value)
    except (decimal.InvalidOperation, TypeError) as err:
        raise ValueError(f"Slippage tolerance must be numeric: {value!r}") from err
    if not tolerance.is_finite() or tolerance < 0 or tolerance > 1:
        raise ValueError(f"Slippage tolerance must be between 0 and 1, got {value}")
    return tolerance


# Tolerance accepted as str, int, float or Decimal; validated to [0, 1]
SlippageTolerance = Annotated[Decimal, BeforeValidator(parse_slippage)]


def min_amount_out(amount: int, tolerance: Decimal) -> int:
    """Minimum acceptable output: ``floor((1 - tolerance) * amount)``.

    Args:
        amount: Simulated output amount for one hop
        tolerance: Slippage tolerance in [0, 1]

    Returns:
        The floor-rounded minimum; ``amount`` when tolerance is 0 and 0 when it is 1
    """
    tolerance = parse_slippage(tolerance)
    if amount < 0:
        raise ValueError(f"Amount cannot be negative: {amount}")
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        bound = ((_ONE - tolerance) * Decimal(amount)).to_integral_value(rounding=ROUND_FLOOR)
    return int(bound)


def min_amount_outs(amounts: Iterable[int], tolerance: Decimal) -> list[int]:
    """Apply min_amount_out to each hop amount independently."""
    return [min_amount_out(amount, tolerance) for amount in amounts]


def min_allocations(allocations: Iterable[Allocation], tolerance: Decimal) -> list[Allocation]:
    """Apply min_amount_out to each allocation value, keeping the assets."""
    return [
        Allocation(asset=a.asset, value=min_amount_out(a.value, tolerance)) for a in allocations
    ]


__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "SlippageTolerance",
    "parse_slippage",
    "min_amount_out",
    "min_amount_outs",
    "min_allocations",
]
