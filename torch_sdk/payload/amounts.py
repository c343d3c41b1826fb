"""Minimum-output derivation for deposits and withdraws."""

from __future__ import annotations

from dataclasses import dataclass, field

from torch_sdk.errors import MissingMetaAsset, SimulationShapeError
from torch_sdk.models import (
    Allocation,
    Asset,
    DepositIntent,
    Pool,
    SimulateDepositResult,
    SimulateWithdrawResult,
    WithdrawIntent,
)
from torch_sdk.slippage import min_allocations, min_amount_out


@dataclass(frozen=True)
class DepositBounds:
    """Minimum LP amounts for the first deposit and the chained one."""

    min_lp_amount: int | None = None
    next_min_lp_amount: int | None = None


@dataclass(frozen=True)
class WithdrawAmounts:
    """Simulated and minimum outputs of a (possibly chained) withdraw.

    Attributes:
        amount_outs: Assets released by the first pool
        next_amount_outs: Assets released by the next pool, if chained
        min_amount_outs: Slippage floors for ``amount_outs``
        next_min_amount_outs: Slippage floors for ``next_amount_outs``
    """

    amount_outs: list[Allocation] = field(default_factory=list)
    next_amount_outs: list[Allocation] | None = None
    min_amount_outs: list[Allocation] | None = None
    next_min_amount_outs: list[Allocation] | None = None


def deposit_bounds(intent: DepositIntent, results: list[SimulateDepositResult]) -> DepositBounds:
    """Per-pool minimum LP output from deposit simulation results.

    Raises:
        SimulationShapeError: If results are missing for a pool
    """
    if not results:
        raise SimulationShapeError("Simulate deposit result length must be greater than 0")
    if intent.slippage_tolerance is None:
        return DepositBounds()

    min_lp = min_amount_out(results[0].lp_token_out, intent.slippage_tolerance)
    next_min_lp = None
    if intent.next_deposit is not None:
        if len(results) < 2:
            raise SimulationShapeError("Simulate deposit result length must be 2")
        next_min_lp = min_amount_out(results[1].lp_token_out, intent.slippage_tolerance)
    return DepositBounds(min_lp_amount=min_lp, next_min_lp_amount=next_min_lp)


def _released(
    mode: str, pool: Pool, single_asset: Asset | None, amounts: list[int]
) -> list[Allocation]:
    """Pair a withdraw result's amounts with the assets they belong to."""
    if mode == "Balanced":
        if len(amounts) != len(pool.assets):
            raise SimulationShapeError(
                f"In balanced mode, amount out length must match pool assets length ({len(pool.assets)})"
            )
        return Allocation.create_allocations(
            Allocation(asset=asset, value=value) for asset, value in zip(pool.assets, amounts)
        )

    if len(amounts) != 1:
        raise SimulationShapeError("In single mode, amount out length must be 1")
    if single_asset is None:
        raise SimulationShapeError("Single mode withdraw requires a withdraw asset")
    return [Allocation(asset=single_asset, value=amounts[0])]


def withdraw_amounts(
    intent: WithdrawIntent,
    pools: list[Pool],
    withdraw_asset: Asset | None,
    results: list[SimulateWithdrawResult],
) -> WithdrawAmounts:
    """Reconcile withdraw simulation results with the pools they came from.

    Args:
        intent: The withdraw intent
        pools: The withdraw pool, followed by the next pool when chained
        withdraw_asset: Asset released by the first pool in Single mode
        results: One simulation result per pool

    Raises:
        SimulationShapeError: If a result's amount count disagrees with its mode
        MissingMetaAsset: If the first pool does not hold the next pool's LP
    """
    if not results:
        raise SimulationShapeError("Simulate withdraw result length must be greater than 0")

    pool = pools[0]
    tolerance = intent.slippage_tolerance
    amount_outs = _released(intent.mode, pool, withdraw_asset, results[0].amount_outs)
    min_amount_outs = min_allocations(amount_outs, tolerance) if tolerance is not None else None

    next_withdraw = intent.next_withdraw
    if next_withdraw is None or len(pools) < 2:
        return WithdrawAmounts(amount_outs=amount_outs, min_amount_outs=min_amount_outs)

    next_pool = pools[1]
    if not pool.has_asset(next_pool.lp_asset):
        raise MissingMetaAsset(
            f"Pool {pool.address} does not hold the LP asset of next pool {next_pool.address}"
        )
    if len(results) < 2:
        raise SimulationShapeError("Simulate withdraw result length must be greater than 1")

    next_amount_outs = _released(
        next_withdraw.mode, next_pool, next_withdraw.withdraw_asset, results[1].amount_outs
    )
    next_min_amount_outs = (
        min_allocations(next_amount_outs, tolerance) if tolerance is not None else None
    )
    return WithdrawAmounts(
        amount_outs=amount_outs,
        next_amount_outs=next_amount_outs,
        min_amount_outs=min_amount_outs,
        next_min_amount_outs=next_min_amount_outs,
    )
