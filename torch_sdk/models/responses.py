"""Quote responses reported back to callers."""

from __future__ import annotations

from typing import Annotated, Literal, TypeAlias

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from torch_sdk.models.asset import Allocation
from torch_sdk.models.simulation import (
    SimulateDepositResult,
    SimulateSwapResult,
    SimulateWithdrawResult,
)
from torch_sdk.models.types import Address, Amount

_RESPONSE_CONFIG = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}


class _SwapQuoteBase(BaseModel):
    routes: list[Address]
    min_amount_out: Amount | None = None
    details: list[SimulateSwapResult]
    execution_price: str = Field(description="Input tokens paid per output token")

    model_config = _RESPONSE_CONFIG


class ExactInQuote(_SwapQuoteBase):
    """``min_amount_out`` is the last hop's bound."""

    mode: Literal["ExactIn"] = "ExactIn"
    amount_out: Amount


class ExactOutQuote(_SwapQuoteBase):
    """``min_amount_out`` is the first hop's bound."""

    mode: Literal["ExactOut"] = "ExactOut"
    amount_in: Amount


SwapQuote: TypeAlias = Annotated[ExactInQuote | ExactOutQuote, Field(discriminator="mode")]


class DepositQuote(BaseModel):
    """Outcome of the last deposit in the chain."""

    lp_token_out: Amount
    min_lp_token_out: Amount | None = None
    lp_total_supply_after: Amount
    details: list[SimulateDepositResult]

    model_config = _RESPONSE_CONFIG


class WithdrawQuote(BaseModel):
    """Amounts from both pools of a chained withdraw, first pool first."""

    amount_outs: list[Allocation]
    min_amount_outs: list[Allocation] = Field(default_factory=list)
    details: list[SimulateWithdrawResult]

    model_config = _RESPONSE_CONFIG
