"""Hop model: one pool-level operation in a multi-pool route."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from torch_sdk.models.asset import Asset
from torch_sdk.models.pool import Pool


class HopAction(str, Enum):
    SWAP = "Swap"
    DEPOSIT = "Deposit"
    WITHDRAW = "Withdraw"


class Hop(BaseModel):
    """A single hop: an action on one pool from ``asset_in`` to ``asset_out``."""

    action: HopAction
    pool: Pool
    asset_in: Asset
    asset_out: Asset

    model_config = {"frozen": True}
