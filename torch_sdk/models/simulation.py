"""Simulation results returned by the pool simulator.

Virtual-price markers are carried for reporting only; the pipeline never
reads them.
"""

from __future__ import annotations

from typing import Annotated, Literal, TypeAlias

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from torch_sdk.models.types import Amount

_RESULT_CONFIG = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}


class SimulateSwapExactInResult(BaseModel):
    """One hop simulated with a fixed input; ``amount_out`` is computed."""

    mode: Literal["ExactIn"] = "ExactIn"
    amount_out: Amount
    virtual_price_before: Amount = 0
    virtual_price_after: Amount = 0

    model_config = _RESULT_CONFIG


class SimulateSwapExactOutResult(BaseModel):
    """One hop simulated with a fixed output; ``amount_in`` is computed."""

    mode: Literal["ExactOut"] = "ExactOut"
    amount_in: Amount
    virtual_price_before: Amount = 0
    virtual_price_after: Amount = 0

    model_config = _RESULT_CONFIG


SimulateSwapResult: TypeAlias = Annotated[
    SimulateSwapExactInResult | SimulateSwapExactOutResult, Field(discriminator="mode")
]


class SimulateDepositResult(BaseModel):
    lp_token_out: Amount
    lp_total_supply: Amount
    virtual_price_before: Amount = 0
    virtual_price_after: Amount = 0

    model_config = _RESULT_CONFIG


class SimulateWithdrawResult(BaseModel):
    """Amounts paid out by one pool: one per pool asset (Balanced) or one (Single)."""

    amount_outs: list[Amount]
    virtual_price_before: Amount = 0
    virtual_price_after: Amount = 0

    model_config = _RESULT_CONFIG
