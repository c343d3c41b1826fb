"""Call descriptor construction.

Module structure:
- composer.py: compose_next, the recursive NextOp chain for hops after the first
- builder.py: first-hop call builders plus deposit/withdraw preparation
- amounts.py: minimum outputs for deposits and withdraws
"""

from torch_sdk.payload.amounts import DepositBounds, WithdrawAmounts, deposit_bounds, withdraw_amounts
from torch_sdk.payload.builder import (
    build_deposit_call,
    build_swap_call,
    build_withdraw_call,
    generate_query_id,
    prepare_deposit_allocations,
    prepare_withdraw_asset,
)
from torch_sdk.payload.composer import compose_next

__all__ = [
    "DepositBounds",
    "WithdrawAmounts",
    "build_deposit_call",
    "build_swap_call",
    "build_withdraw_call",
    "compose_next",
    "deposit_bounds",
    "generate_query_id",
    "prepare_deposit_allocations",
    "prepare_withdraw_asset",
    "withdraw_amounts",
]
