"""Execution price reporting."""

from __future__ import annotations

import decimal
from decimal import ROUND_HALF_UP, Decimal

from torch_sdk.constants import EXECUTION_PRICE_PRECISION
from torch_sdk.slippage import DECIMAL_HIGH_PREC_CONTEXT


def calculate_execution_price(
    amount_in: int,
    decimals_in: int,
    amount_out: int,
    decimals_out: int,
) -> str:
    """Price paid per unit of output, in whole-token terms.

    Both amounts are scaled by their asset decimals before dividing, so the
    result reads as "amount_in tokens per 1 amount_out token".

    Args:
        amount_in: Input amount in smallest units
        decimals_in: Decimals of the input asset
        amount_out: Output amount in smallest units
        decimals_out: Decimals of the output asset

    Returns:
        Price as a fixed-point string with 9 fractional digits

    Raises:
        ZeroDivisionError: If amount_out is 0
    """
    if amount_out == 0:
        raise ZeroDivisionError("Cannot price a swap with zero output")
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        value_in = Decimal(amount_in).scaleb(-decimals_in)
        value_out = Decimal(amount_out).scaleb(-decimals_out)
        price = (value_in / value_out).quantize(
            Decimal(1).scaleb(-EXECUTION_PRICE_PRECISION), rounding=ROUND_HALF_UP
        )
    return format(price, "f")
