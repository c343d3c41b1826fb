"""Pydantic models for assets, pools, hops, intents, simulations and payloads."""

from torch_sdk.models.asset import (
    Allocation,
    Asset,
    AssetKind,
    normalize_allocations,
)
from torch_sdk.models.hop import Hop, HopAction
from torch_sdk.models.intents import (
    DepositIntent,
    ExactInIntent,
    ExactOutIntent,
    NextDeposit,
    NextWithdraw,
    SwapIntent,
    SwapMode,
    WithdrawIntent,
    WithdrawMode,
    parse_swap_intent,
)
from torch_sdk.models.payload import (
    BalancedWithdrawConfig,
    CallDescriptor,
    DepositCall,
    DepositNext,
    NextOp,
    SignedRate,
    SingleWithdrawConfig,
    SwapCall,
    SwapNext,
    WithdrawCall,
    WithdrawConfig,
    WithdrawNext,
)
from torch_sdk.models.pool import Pool, PoolInfo, PoolKind
from torch_sdk.models.responses import (
    DepositQuote,
    ExactInQuote,
    ExactOutQuote,
    SwapQuote,
    WithdrawQuote,
)
from torch_sdk.models.simulation import (
    SimulateDepositResult,
    SimulateSwapExactInResult,
    SimulateSwapExactOutResult,
    SimulateSwapResult,
    SimulateWithdrawResult,
)
from torch_sdk.models.types import normalize_address

__all__ = [
    # Assets
    "Asset",
    "AssetKind",
    "Allocation",
    "normalize_allocations",
    "normalize_address",
    # Pools and hops
    "Pool",
    "PoolInfo",
    "PoolKind",
    "Hop",
    "HopAction",
    # Intents
    "SwapIntent",
    "SwapMode",
    "ExactInIntent",
    "ExactOutIntent",
    "DepositIntent",
    "NextDeposit",
    "WithdrawIntent",
    "NextWithdraw",
    "WithdrawMode",
    "parse_swap_intent",
    # Simulation
    "SimulateSwapResult",
    "SimulateSwapExactInResult",
    "SimulateSwapExactOutResult",
    "SimulateDepositResult",
    "SimulateWithdrawResult",
    # Payload
    "NextOp",
    "SwapNext",
    "WithdrawNext",
    "DepositNext",
    "WithdrawConfig",
    "SingleWithdrawConfig",
    "BalancedWithdrawConfig",
    "SignedRate",
    "CallDescriptor",
    "SwapCall",
    "DepositCall",
    "WithdrawCall",
    # Responses
    "SwapQuote",
    "ExactInQuote",
    "ExactOutQuote",
    "DepositQuote",
    "WithdrawQuote",
]
