"""Route resolution: ordered pools plus an asset pair into typed hops."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from torch_sdk.errors import NoValidConnection, UndeterminedAction
from torch_sdk.models.hop import Hop, HopAction

if TYPE_CHECKING:
    from torch_sdk.models import Asset, Pool

logger = structlog.get_logger()


def classify_hop_action(pool: Pool, asset_in: Asset, asset_out: Asset) -> HopAction:
    """Decide which operation moves ``asset_in`` to ``asset_out`` in ``pool``.

    - Deposit: member asset in, LP asset out
    - Swap: member asset in, member asset out
    - Withdraw: LP asset in, member asset out

    The LP asset is never a member of its own pool, so at most one rule holds.

    Raises:
        UndeterminedAction: If no rule holds
    """
    lp_asset = pool.lp_asset
    if pool.has_asset(asset_in) and asset_out == lp_asset:
        return HopAction.DEPOSIT
    if pool.has_asset(asset_in) and pool.has_asset(asset_out):
        return HopAction.SWAP
    if asset_in == lp_asset and pool.has_asset(asset_out):
        return HopAction.WITHDRAW
    raise UndeterminedAction(
        f"Unable to determine action in pool {pool.address}: {asset_in.id} -> {asset_out.id}"
    )


def find_connecting_asset(current: Pool, following: Pool, asset_in: Asset) -> Asset:
    """First asset of ``current`` (members in declared order, LP last) that
    differs from ``asset_in`` and also belongs to ``following``.

    Raises:
        NoValidConnection: If the two pools share no such asset
    """
    following_assets = following.assets_with_lp()
    for asset in current.assets_with_lp():
        if asset != asset_in and asset in following_assets:
            return asset
    raise NoValidConnection(
        f"No valid operation found to connect pools {current.address} and {following.address}"
    )


def resolve_hops(pools: list[Pool], asset_in: Asset, asset_out: Asset) -> list[Hop]:
    """Turn an ordered pool chain into hops.

    For each pool except the last, the hop's output is the connecting asset
    into the next pool; the last hop outputs ``asset_out``. Consecutive hops
    are continuous: ``hops[k].asset_out == hops[k + 1].asset_in``.

    Args:
        pools: Pools from the first touched to the last
        asset_in: Asset entering the first pool
        asset_out: Asset leaving the last pool

    Returns:
        One hop per pool

    Raises:
        NoValidConnection: If consecutive pools cannot be bridged
        UndeterminedAction: If a hop cannot be classified
    """
    hops: list[Hop] = []
    current_asset_in = asset_in

    for i, pool in enumerate(pools):
        if i < len(pools) - 1:
            hop_asset_out = find_connecting_asset(pool, pools[i + 1], current_asset_in)
        else:
            hop_asset_out = asset_out

        action = classify_hop_action(pool, current_asset_in, hop_asset_out)
        hops.append(
            Hop(action=action, pool=pool, asset_in=current_asset_in, asset_out=hop_asset_out)
        )
        current_asset_in = hop_asset_out

    logger.debug(
        "hops_resolved",
        asset_in=asset_in.id,
        asset_out=asset_out.id,
        actions=[hop.action.value for hop in hops],
    )
    return hops


__all__ = ["classify_hop_action", "find_connecting_asset", "resolve_hops"]
