"""Request and response bodies of the quote service."""

from __future__ import annotations

from pydantic import BaseModel, Field, RootModel

from torch_sdk.models import DepositIntent, SwapIntent, WithdrawIntent
from torch_sdk.models.types import Address


class SwapIntentBody(RootModel[SwapIntent]):
    """A bare swap intent, dispatched on its ``mode``."""


class SwapPayloadRequest(BaseModel):
    sender: Address
    intent: SwapIntent


class DepositPayloadRequest(BaseModel):
    sender: Address
    intent: DepositIntent


class WithdrawPayloadRequest(BaseModel):
    sender: Address
    intent: WithdrawIntent


class ErrorResponse(BaseModel):
    """Body returned for SDK failures (HTTP 422)."""

    error: str = Field(description="Error class name, e.g. PoolNotFound")
    detail: str
