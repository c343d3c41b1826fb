"""Recursive composition of the nested "next operation" chain.

Every hop after the first becomes one ``NextOp`` node. Swap nodes nest
the remainder of the chain; Withdraw and Deposit nodes terminate it.
"""

from __future__ import annotations

from torch_sdk.errors import InvalidWithdrawTarget, MissingMetaAsset
from torch_sdk.models import (
    Allocation,
    DepositNext,
    Hop,
    HopAction,
    NextOp,
    PoolKind,
    SingleWithdrawConfig,
    SwapNext,
    WithdrawNext,
)


def _first(values: list[int] | None) -> int | None:
    if not values:
        return None
    return values[0]


def _tail(values: list[int] | None) -> list[int] | None:
    if values is None:
        return None
    return values[1:]


def compose_next(hops: list[Hop], min_amount_outs: list[int] | None = None) -> NextOp | None:
    """Build the ``next`` structure for the hops following the first one.

    Args:
        hops: Hops after the first, in order
        min_amount_outs: Per-hop minimum outputs aligned with ``hops``, or
                         None when no bound applies

    Returns:
        The head hop's NextOp, or None for an empty chain

    Raises:
        InvalidWithdrawTarget: If a withdraw hop targets a non-base pool
        MissingMetaAsset: If a deposit hop's pool has no base pool
    """
    if not hops:
        return None

    head, rest = hops[0], hops[1:]
    min_out = _first(min_amount_outs)

    if head.action == HopAction.SWAP:
        return SwapNext(
            next_pool_address=head.pool.address,
            asset_out=head.asset_out,
            min_amount_out=min_out,
            next=compose_next(rest, _tail(min_amount_outs)),
        )

    if head.action == HopAction.WITHDRAW:
        if head.pool.kind != PoolKind.BASE:
            raise InvalidWithdrawTarget(
                f"Withdraw hop must target a base pool, got {head.pool.kind.value} pool {head.pool.address}"
            )
        return WithdrawNext(
            next_pool_address=head.pool.address,
            config=SingleWithdrawConfig(asset_out=head.asset_out, min_amount_out=min_out),
        )

    if head.action == HopAction.DEPOSIT:
        base_pool = head.pool.base_pool
        if base_pool is None:
            raise MissingMetaAsset(f"Deposit hop pool {head.pool.address} has no base pool")
        meta_asset = next(
            (asset for asset in head.pool.assets if asset != base_pool.lp_asset),
            None,
        )
        if meta_asset is None:
            raise MissingMetaAsset(f"Meta asset is missing in pool {head.pool.address}")
        return DepositNext(
            next_pool_address=head.pool.address,
            meta_allocation=Allocation(asset=meta_asset, value=0),
            min_lp_amount=min_out,
        )

    raise ValueError(f"Unknown hop action: {head.action}")
