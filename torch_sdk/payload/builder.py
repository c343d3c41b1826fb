"""Top-level call descriptors for swaps, deposits and withdraws.

The first hop of a route becomes the call itself; every later hop is
attached through ``compose_next``.
"""

from __future__ import annotations

import secrets

import structlog

from torch_sdk.constants import QUERY_ID_MAX
from torch_sdk.errors import (
    InvalidIntent,
    InvalidWithdrawTarget,
    MissingMetaAllocation,
    MissingMetaAsset,
    NoRoutesFound,
    PoolNotFound,
    WrongMetaAsset,
)
from torch_sdk.models import (
    Allocation,
    Asset,
    BalancedWithdrawConfig,
    DepositCall,
    DepositIntent,
    DepositNext,
    ExactInIntent,
    Hop,
    HopAction,
    Pool,
    PoolKind,
    SignedRate,
    SingleWithdrawConfig,
    SwapCall,
    WithdrawCall,
    WithdrawConfig,
    WithdrawIntent,
    WithdrawNext,
    normalize_allocations,
)
from torch_sdk.payload.composer import compose_next

logger = structlog.get_logger()


def generate_query_id() -> int:
    """Random 64-bit query id for an on-chain message."""
    return secrets.randbelow(QUERY_ID_MAX + 1)


def _query_id(value: int | None) -> int:
    return value if value is not None else generate_query_id()


def build_swap_call(
    sender: str,
    intent: ExactInIntent,
    hops: list[Hop],
    min_amount_outs: list[int] | None,
    signed_rate: SignedRate | None = None,
) -> SwapCall | DepositCall | WithdrawCall:
    """Build the call for the first hop with the rest of the route nested in ``next``.

    ExactOut intents must be converted with ``to_exact_in`` first: the
    on-chain message always spends a fixed input.

    Args:
        sender: Wallet address sending the message
        intent: ExactIn intent pinned to ``hops``
        hops: Resolved hops, first to last
        min_amount_outs: Per-hop minimum outputs, or None
        signed_rate: Oracle rates for pools that use them

    Raises:
        NoRoutesFound: If ``hops`` is empty
    """
    if not hops:
        raise NoRoutesFound("No hops found")

    first, rest = hops[0], hops[1:]
    min_out = min_amount_outs[0] if min_amount_outs else None
    next_op = compose_next(rest, min_amount_outs[1:] if min_amount_outs is not None else None)
    query_id = _query_id(intent.query_id)
    common = {
        "sender": sender,
        "target_pool": first.pool.address,
        "query_id": query_id,
        "recipient": intent.recipient,
        "signed_rate": signed_rate,
    }

    logger.debug(
        "swap_call_built",
        action=first.action.value,
        target_pool=first.pool.address,
        hops=len(hops),
        query_id=query_id,
    )

    if first.action == HopAction.SWAP:
        return SwapCall(
            **common,
            asset_in=first.asset_in,
            asset_out=first.asset_out,
            amount_in=intent.amount_in,
            min_amount_out=min_out,
            deadline=intent.deadline,
            fulfill_payload=intent.fulfill_payload,
            reject_payload=intent.reject_payload,
            next=next_op,
        )

    if first.action == HopAction.DEPOSIT:
        allocations = [
            Allocation(asset=asset, value=intent.amount_in if asset == first.asset_in else 0)
            for asset in first.pool.assets
        ]
        return DepositCall(
            **common,
            pool_allocations=allocations,
            min_lp_amount=min_out,
            fulfill_payload=intent.fulfill_payload,
            reject_payload=intent.reject_payload,
            next=next_op,
        )

    return WithdrawCall(
        **common,
        burn_lp_amount=intent.amount_in,
        config=SingleWithdrawConfig(asset_out=first.asset_out, min_amount_out=min_out),
        next=next_op,
    )


def prepare_deposit_allocations(
    intent: DepositIntent, pools: list[Pool]
) -> tuple[list[Allocation], Allocation | None]:
    """Pool allocations in pool order plus the meta allocation for a chained deposit.

    The meta allocation is the next pool's asset other than this pool's LP
    asset. It comes from ``next_deposit.deposit_amounts`` when given and is
    a zero allocation otherwise.

    Args:
        intent: The deposit intent
        pools: The deposit pool, followed by the next pool when chained

    Returns:
        Tuple of (pool allocations, meta allocation or None)

    Raises:
        InvalidIntent: If an allocation names an asset outside the pool
        PoolNotFound: If the next pool was not supplied
        MissingMetaAsset: If the next pool is not a meta pool over this pool
        WrongMetaAsset: If the given meta allocation names another asset
    """
    pool = pools[0]
    try:
        pool_allocations = normalize_allocations(intent.deposit_amounts, pool.assets)
    except ValueError as exc:
        raise InvalidIntent(str(exc)) from exc

    next_deposit = intent.next_deposit
    if next_deposit is None:
        return pool_allocations, None

    if len(pools) < 2:
        raise PoolNotFound(next_deposit.pool)
    next_pool = pools[1]

    linked = (
        next_pool.base_pool is not None
        and next_pool.base_pool.address == pool.address
        and next_pool.has_asset(pool.lp_asset)
    )
    if not linked:
        raise MissingMetaAsset(
            f"Next pool {next_pool.address} is not a meta pool over {pool.address}"
        )

    meta_asset = next((asset for asset in next_pool.assets if asset != pool.lp_asset), None)
    if meta_asset is None:
        raise MissingMetaAsset(f"Meta asset is missing in next pool {next_pool.address}")

    given = next_deposit.deposit_amounts
    if given is not None and given.asset != meta_asset:
        raise WrongMetaAsset(
            f"Wrong meta asset in next deposit: expected {meta_asset.id}, got {given.asset.id}"
        )
    meta_allocation = given if given is not None else Allocation(asset=meta_asset, value=0)
    return pool_allocations, meta_allocation


def build_deposit_call(
    sender: str,
    intent: DepositIntent,
    pools: list[Pool],
    pool_allocations: list[Allocation],
    meta_allocation: Allocation | None,
    min_lp_amount: int | None = None,
    next_min_lp_amount: int | None = None,
    signed_rate: SignedRate | None = None,
) -> DepositCall:
    """Deposit call, with a chained meta-pool deposit when ``next_deposit`` is set.

    Raises:
        MissingMetaAllocation: If a chained deposit has no meta allocation
    """
    next_op = None
    if intent.next_deposit is not None:
        if meta_allocation is None:
            raise MissingMetaAllocation(
                f"Meta allocation is missing for next pool {intent.next_deposit.pool}"
            )
        next_op = DepositNext(
            next_pool_address=pools[1].address,
            meta_allocation=meta_allocation,
            min_lp_amount=next_min_lp_amount,
        )

    return DepositCall(
        sender=sender,
        target_pool=pools[0].address,
        query_id=_query_id(intent.query_id),
        recipient=intent.recipient,
        signed_rate=signed_rate,
        fulfill_payload=intent.fulfill_payload,
        reject_payload=intent.reject_payload,
        pool_allocations=pool_allocations,
        min_lp_amount=min_lp_amount,
        next=next_op,
    )


def prepare_withdraw_asset(intent: WithdrawIntent, next_pool: Pool | None) -> Asset | None:
    """Asset released by the first pool of a withdraw.

    Single mode with a chained withdraw releases the next pool's LP asset.
    Single mode alone releases ``withdraw_asset``. Balanced mode releases
    every pool asset, so there is no single asset.

    Raises:
        PoolNotFound: If a chained withdraw's next pool was not supplied
    """
    if intent.next_withdraw is not None and next_pool is None:
        raise PoolNotFound(intent.next_withdraw.pool)
    if intent.mode != "Single":
        return None
    if intent.next_withdraw is not None:
        return next_pool.lp_asset
    return intent.withdraw_asset


def _withdraw_config(
    mode: str, asset: Asset | None, min_amount_outs: list[Allocation] | None
) -> WithdrawConfig:
    if mode == "Single":
        if asset is None:
            raise InvalidIntent("Single mode withdraw requires a withdraw asset")
        min_out = min_amount_outs[0].value if min_amount_outs else None
        return SingleWithdrawConfig(asset_out=asset, min_amount_out=min_out)
    return BalancedWithdrawConfig(min_amount_outs=min_amount_outs)


def build_withdraw_call(
    sender: str,
    intent: WithdrawIntent,
    pools: list[Pool],
    withdraw_asset: Asset | None,
    min_amount_outs: list[Allocation] | None = None,
    next_min_amount_outs: list[Allocation] | None = None,
    signed_rate: SignedRate | None = None,
) -> WithdrawCall:
    """Withdraw call, with a chained base-pool withdraw when ``next_withdraw`` is set.

    Raises:
        InvalidWithdrawTarget: If the chained withdraw targets a non-base pool
    """
    next_op = None
    next_withdraw = intent.next_withdraw
    if next_withdraw is not None:
        next_pool = pools[1]
        if next_pool.kind != PoolKind.BASE:
            raise InvalidWithdrawTarget(
                f"Next withdraw must target a base pool, got {next_pool.kind.value} pool {next_pool.address}"
            )
        next_op = WithdrawNext(
            next_pool_address=next_pool.address,
            config=_withdraw_config(
                next_withdraw.mode, next_withdraw.withdraw_asset, next_min_amount_outs
            ),
        )

    return WithdrawCall(
        sender=sender,
        target_pool=pools[0].address,
        query_id=_query_id(intent.query_id),
        recipient=intent.recipient,
        signed_rate=signed_rate,
        burn_lp_amount=intent.burn_lp_amount,
        config=_withdraw_config(intent.mode, withdraw_asset, min_amount_outs),
        next=next_op,
    )
