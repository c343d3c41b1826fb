"""Protocols for the external collaborators the SDK orchestrates.

The SDK never computes AMM math, talks to the chain, or encodes messages
itself. It drives these interfaces in order and reconciles their results.
``torch_sdk.client.TorchAPI`` implements all of them over HTTP; tests pass
in-memory fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from torch_sdk.models import (
        Asset,
        DepositIntent,
        ExactInIntent,
        ExactOutIntent,
        Hop,
        Pool,
        SignedRate,
        SimulateDepositResult,
        SimulateSwapResult,
        SimulateWithdrawResult,
        WithdrawIntent,
    )


@runtime_checkable
class PoolSource(Protocol):
    """Full-catalog pull used by PoolCatalog.refresh()."""

    async def fetch_all_pools(self) -> list[Pool]: ...


@runtime_checkable
class HopLookup(Protocol):
    """Pre-resolved hops for callers that do not pin a route."""

    async def lookup_hops(self, asset_in: Asset, asset_out: Asset) -> list[Hop]: ...


@runtime_checkable
class PoolSimulator(Protocol):
    """Simulates pool operations.

    ``simulate_swap`` returns one result per hop of ``intent.routes``. For
    ExactIn each result carries the hop's computed output; for ExactOut
    each carries the hop's required input, seeded by the final amount_out.
    """

    async def simulate_swap(
        self, intent: ExactInIntent | ExactOutIntent
    ) -> list[SimulateSwapResult]: ...

    async def simulate_deposit(self, intent: DepositIntent) -> list[SimulateDepositResult]: ...

    async def simulate_withdraw(self, intent: WithdrawIntent) -> list[SimulateWithdrawResult]: ...


@runtime_checkable
class RateOracle(Protocol):
    """Signed exchange rates for pools flagged ``use_rates``."""

    async def get_signed_rates(self, pool_addresses: list[str]) -> SignedRate: ...
