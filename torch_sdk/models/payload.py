"""Call descriptors handed to the contract-call layer.

A multi-hop operation is one top-level call whose ``next`` field nests the
remaining hops (SwapNext may itself carry a further ``next``).
"""

from __future__ import annotations

from typing import Annotated, Literal, TypeAlias

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from torch_sdk.models.asset import Allocation, Asset
from torch_sdk.models.types import Address, Amount, BocHex, QueryId

_PAYLOAD_CONFIG = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}


class SignedRate(BaseModel):
    """Oracle-attested rate payload required by pools that use rates.

    ``signatures`` and ``payload`` are hex strings; one entry per pool chains
    through ``next_signed_rate``.
    """

    signatures: str
    payload: str
    next_signed_rate: SignedRate | None = None

    model_config = _PAYLOAD_CONFIG


class SingleWithdrawConfig(BaseModel):
    mode: Literal["Single"] = "Single"
    asset_out: Asset
    min_amount_out: Amount | None = None

    model_config = _PAYLOAD_CONFIG


class BalancedWithdrawConfig(BaseModel):
    mode: Literal["Balanced"] = "Balanced"
    min_amount_outs: list[Allocation] | None = None

    model_config = _PAYLOAD_CONFIG


WithdrawConfig: TypeAlias = Annotated[
    SingleWithdrawConfig | BalancedWithdrawConfig, Field(discriminator="mode")
]


class SwapNext(BaseModel):
    """Continue by swapping in ``next_pool_address``; may chain further."""

    type: Literal["Swap"] = "Swap"
    next_pool_address: Address
    asset_out: Asset
    min_amount_out: Amount | None = None
    next: NextOp | None = None

    model_config = _PAYLOAD_CONFIG


class WithdrawNext(BaseModel):
    """Continue by withdrawing from a base pool. Always the last link."""

    type: Literal["Withdraw"] = "Withdraw"
    next_pool_address: Address
    config: WithdrawConfig

    model_config = _PAYLOAD_CONFIG


class DepositNext(BaseModel):
    """Continue by depositing the minted LP into a meta pool.

    ``meta_allocation`` is the meta pool's other asset; its value is
    supplied by the caller (0 when only the LP is deposited).
    """

    type: Literal["Deposit"] = "Deposit"
    next_pool_address: Address
    meta_allocation: Allocation
    min_lp_amount: Amount | None = None

    model_config = _PAYLOAD_CONFIG


NextOp: TypeAlias = Annotated[SwapNext | WithdrawNext | DepositNext, Field(discriminator="type")]

SwapNext.model_rebuild()


class _CallBase(BaseModel):
    sender: Address
    target_pool: Address
    query_id: QueryId
    recipient: Address | None = None
    signed_rate: SignedRate | None = None
    fulfill_payload: BocHex | None = None
    reject_payload: BocHex | None = None

    model_config = _PAYLOAD_CONFIG


class SwapCall(_CallBase):
    action: Literal["Swap"] = "Swap"
    asset_in: Asset
    asset_out: Asset
    amount_in: Amount
    min_amount_out: Amount | None = None
    deadline: int | None = None
    next: NextOp | None = None


class DepositCall(_CallBase):
    action: Literal["Deposit"] = "Deposit"
    pool_allocations: list[Allocation]
    min_lp_amount: Amount | None = None
    next: NextOp | None = None


class WithdrawCall(_CallBase):
    action: Literal["Withdraw"] = "Withdraw"
    burn_lp_amount: Amount
    config: WithdrawConfig
    next: NextOp | None = None


CallDescriptor: TypeAlias = Annotated[
    SwapCall | DepositCall | WithdrawCall, Field(discriminator="action")
]
