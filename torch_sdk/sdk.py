"""Torch SDK facade.

TorchSDK owns the pool catalog, the simulator and the quote chainer, and
exposes the swap, deposit and withdraw pipelines:

    intent -> hops -> simulation -> minimum outputs -> call descriptor

Every ``simulate_*`` call returns the quote together with a
``build_payload(sender)`` coroutine that reuses the simulation results, so
the payload matches what the caller was shown.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from torch_sdk.client import TorchAPI
from torch_sdk.config import DEFAULT_SDK_CONFIG, SDKConfig
from torch_sdk.constants import LP_ASSET_DECIMALS
from torch_sdk.errors import InvalidIntent, LengthMismatch, NoRoutesFound
from torch_sdk.interfaces import HopLookup, PoolSimulator, PoolSource, RateOracle
from torch_sdk.models import (
    Allocation,
    Asset,
    DepositCall,
    DepositIntent,
    DepositQuote,
    ExactInIntent,
    ExactInQuote,
    ExactOutIntent,
    ExactOutQuote,
    Hop,
    Pool,
    SignedRate,
    SimulateDepositResult,
    SimulateSwapResult,
    SimulateWithdrawResult,
    SwapCall,
    WithdrawCall,
    WithdrawIntent,
    WithdrawQuote,
)
from torch_sdk.payload import (
    DepositBounds,
    WithdrawAmounts,
    build_deposit_call,
    build_swap_call,
    build_withdraw_call,
    deposit_bounds,
    generate_query_id,
    prepare_deposit_allocations,
    prepare_withdraw_asset,
    withdraw_amounts,
)
from torch_sdk.pools import PoolCatalog
from torch_sdk.pricing import calculate_execution_price
from torch_sdk.routing import QuoteChain, QuoteChainer, resolve_hops
from torch_sdk.simulator import Simulator
from torch_sdk.slippage import min_amount_out

logger = structlog.get_logger()

SwapIntentType = ExactInIntent | ExactOutIntent
SwapQuoteType = ExactInQuote | ExactOutQuote
FirstHopCall = SwapCall | DepositCall | WithdrawCall


def _asset_decimals(pool: Pool, asset: Asset) -> int:
    decimals = pool.decimals_of(asset)
    if decimals is not None:
        return decimals
    if asset == pool.lp_asset:
        return LP_ASSET_DECIMALS
    raise InvalidIntent(f"Decimals of {asset.id} not found in pool {pool.address}")


@dataclass
class SwapSimulation:
    """Swap quote plus the data needed to build its payload."""

    quote: SwapQuoteType
    intent: SwapIntentType
    hops: list[Hop]
    chain: QuoteChain
    sdk: TorchSDK = field(repr=False)

    async def build_payload(self, sender: str) -> FirstHopCall:
        signed_rate = await self.sdk.get_signed_rates_for_pools([hop.pool for hop in self.hops])
        return build_swap_call(
            sender,
            self.sdk.as_exact_in(self.intent, self.chain.amount_in),
            self.hops,
            self.chain.min_amount_outs,
            signed_rate,
        )


@dataclass
class DepositSimulation:
    quote: DepositQuote
    intent: DepositIntent
    pools: list[Pool]
    results: list[SimulateDepositResult]
    sdk: TorchSDK = field(repr=False)

    async def build_payload(self, sender: str) -> DepositCall:
        signed_rate = await self.sdk.get_signed_rates_for_pools(self.pools)
        pool_allocations, meta_allocation = prepare_deposit_allocations(self.intent, self.pools)
        bounds = deposit_bounds(self.intent, self.results)
        return build_deposit_call(
            sender,
            self.intent,
            self.pools,
            pool_allocations,
            meta_allocation,
            bounds.min_lp_amount,
            bounds.next_min_lp_amount,
            signed_rate,
        )


@dataclass
class WithdrawSimulation:
    quote: WithdrawQuote
    intent: WithdrawIntent
    pools: list[Pool]
    amounts: WithdrawAmounts
    sdk: TorchSDK = field(repr=False)

    async def build_payload(self, sender: str) -> WithdrawCall:
        signed_rate = await self.sdk.get_signed_rates_for_pools(self.pools)
        next_pool = self.pools[1] if len(self.pools) > 1 else None
        return build_withdraw_call(
            sender,
            self.intent,
            self.pools,
            prepare_withdraw_asset(self.intent, next_pool),
            self.amounts.min_amount_outs,
            self.amounts.next_min_amount_outs,
            signed_rate,
        )


class TorchSDK:
    """Entry point for quoting and building Torch DEX operations.

    Collaborators default to a TorchAPI built from ``config``; pass any of
    them explicitly to replace it (tests pass in-memory fakes).

    Args:
        config: Endpoints, simulate mode and timeout
        api: HTTP client implementing every collaborator protocol
        pool_source: Source of the full pool list
        hop_lookup: Server-side route lookup for intents without routes
        simulator: Simulation backend
        rate_oracle: Signed-rate oracle
        pools: Initial catalog snapshot

    Raises:
        UnsupportedSimulateMode: If ``config.simulate_mode`` is not "offchain"
    """

    def __init__(
        self,
        config: SDKConfig = DEFAULT_SDK_CONFIG,
        api: TorchAPI | None = None,
        *,
        pool_source: PoolSource | None = None,
        hop_lookup: HopLookup | None = None,
        simulator: PoolSimulator | None = None,
        rate_oracle: RateOracle | None = None,
        pools: Iterable[Pool] | None = None,
    ) -> None:
        self.config = config
        needs_api = None in (pool_source, hop_lookup, simulator, rate_oracle)
        if api is None and needs_api:
            api = TorchAPI(config)
        self.api = api

        self.catalog = PoolCatalog(pool_source or api, pools)
        self.hop_lookup: HopLookup = hop_lookup or api
        self.rate_oracle: RateOracle = rate_oracle or api
        self.simulator = Simulator(simulator or api, config.simulate_mode)
        self.chainer = QuoteChainer(self.simulator)

    async def aclose(self) -> None:
        if self.api is not None:
            await self.api.aclose()

    async def __aenter__(self) -> TorchSDK:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    @staticmethod
    def generate_query_id() -> int:
        return generate_query_id()

    @staticmethod
    def as_exact_in(intent: SwapIntentType, amount_in: int) -> ExactInIntent:
        """The ExactIn form of ``intent`` that spends ``amount_in``."""
        if isinstance(intent, ExactInIntent):
            return intent
        return intent.to_exact_in(amount_in)

    # Pools and rates

    async def sync(self) -> None:
        """Refresh the whole pool catalog."""
        await self.catalog.refresh()

    async def get_pools(self, addresses: Iterable[str]) -> list[Pool]:
        return await self.catalog.get_pools(addresses)

    async def get_signed_rates_for_pools(self, pools: Iterable[Pool]) -> SignedRate | None:
        """Oracle rates for the pools flagged ``use_rates``; None if there are none."""
        addresses = [pool.address for pool in pools if pool.use_rates]
        if not addresses:
            return None
        signed_rate = await self.rate_oracle.get_signed_rates(addresses)
        logger.debug("signed_rates_fetched", pools=addresses)
        return signed_rate

    # Swap

    async def get_swap_routes(self, intent: SwapIntentType) -> list[Hop]:
        """Hops for a swap: resolved locally for explicit routes, looked up otherwise.

        Raises:
            NoRoutesFound: If no hop connects the assets
        """
        if intent.routes:
            pools = await self.catalog.get_pools(intent.routes)
            hops = resolve_hops(pools, intent.asset_in, intent.asset_out)
        else:
            hops = await self.hop_lookup.lookup_hops(intent.asset_in, intent.asset_out)
        if not hops:
            raise NoRoutesFound(f"No routes found from {intent.asset_in.id} to {intent.asset_out.id}")
        return hops

    async def calculate_swap_min_amount_outs(
        self,
        intent: SwapIntentType,
        results: list[SimulateSwapResult] | None = None,
    ) -> tuple[int, list[int] | None]:
        """Input amount and per-hop minimum outputs for a swap.

        ExactIn intents without a tolerance or bound skip simulation.
        """
        hops = await self.get_swap_routes(intent)
        return await self.chainer.quote_bounds(hops, intent, results)

    async def simulate_swap(self, intent: SwapIntentType) -> SwapSimulation:
        """Quote a swap.

        Raises:
            NoRoutesFound, PoolNotFound, NoValidConnection, UndeterminedAction:
                If the route cannot be resolved
            LengthMismatch, ModeMismatch, InvalidSequence, ZeroAmountIn:
                If simulation results are inconsistent
        """
        hops = await self.get_swap_routes(intent)
        routes = [hop.pool.address for hop in hops]
        intent = intent.with_routes(routes)
        decimals_in = _asset_decimals(hops[0].pool, intent.asset_in)
        decimals_out = _asset_decimals(hops[-1].pool, intent.asset_out)

        chain = await self.chainer.chain_quotes(hops, intent)
        minimums = chain.min_amount_outs

        quote: SwapQuoteType
        if isinstance(intent, ExactInIntent):
            quote = ExactInQuote(
                routes=routes,
                amount_out=chain.amount_out,
                min_amount_out=minimums[-1] if minimums else None,
                details=chain.results,
                execution_price=calculate_execution_price(
                    chain.amount_in, decimals_in, chain.amount_out, decimals_out
                ),
            )
        else:
            quote = ExactOutQuote(
                routes=routes,
                amount_in=chain.amount_in,
                min_amount_out=minimums[0] if minimums else None,
                details=chain.results,
                execution_price=calculate_execution_price(
                    chain.amount_in, decimals_in, intent.amount_out, decimals_out
                ),
            )

        logger.info(
            "swap_simulated",
            mode=intent.mode,
            routes=routes,
            amount_in=chain.amount_in,
            amount_out=chain.amount_out,
        )
        return SwapSimulation(quote=quote, intent=intent, hops=hops, chain=chain, sdk=self)

    async def get_swap_payload(self, sender: str, intent: SwapIntentType) -> FirstHopCall:
        """Call descriptor for a swap, quoting only as much as the bounds require."""
        hops = await self.get_swap_routes(intent)
        intent = intent.with_routes([hop.pool.address for hop in hops])
        signed_rate, (amount_in, minimums) = await asyncio.gather(
            self.get_signed_rates_for_pools([hop.pool for hop in hops]),
            self.chainer.quote_bounds(hops, intent),
        )
        return build_swap_call(
            sender, self.as_exact_in(intent, amount_in), hops, minimums, signed_rate
        )

    # Deposit

    def prepare_deposit_allocations(
        self, intent: DepositIntent, pools: list[Pool]
    ) -> tuple[list[Allocation], Allocation | None]:
        return prepare_deposit_allocations(intent, pools)

    async def calculate_deposit_min_amount_outs(
        self,
        intent: DepositIntent,
        results: list[SimulateDepositResult] | None = None,
    ) -> DepositBounds:
        """Minimum LP outputs; without a tolerance there is nothing to simulate."""
        if results is None and intent.slippage_tolerance is None:
            return DepositBounds()
        if results is None:
            results = await self.simulator.simulate_deposit(intent)
        return deposit_bounds(intent, results)

    async def _deposit_inputs(
        self, intent: DepositIntent
    ) -> tuple[list[Pool], list[SimulateDepositResult]]:
        pools, results = await asyncio.gather(
            self.get_pools(intent.pool_addresses),
            self.simulator.simulate_deposit(intent),
        )
        if len(results) != len(pools):
            raise LengthMismatch(
                f"Simulate deposit result length must match pools length: "
                f"{len(results)} != {len(pools)}"
            )
        return pools, results

    async def simulate_deposit(self, intent: DepositIntent) -> DepositSimulation:
        pools, results = await self._deposit_inputs(intent)
        last = results[-1]
        tolerance = intent.slippage_tolerance
        quote = DepositQuote(
            lp_token_out=last.lp_token_out,
            min_lp_token_out=(
                min_amount_out(last.lp_token_out, tolerance) if tolerance is not None else None
            ),
            lp_total_supply_after=last.lp_total_supply,
            details=results,
        )
        logger.info("deposit_simulated", pools=intent.pool_addresses, lp_token_out=last.lp_token_out)
        return DepositSimulation(quote=quote, intent=intent, pools=pools, results=results, sdk=self)

    async def get_deposit_payload(self, sender: str, intent: DepositIntent) -> DepositCall:
        pools = await self.get_pools(intent.pool_addresses)
        pool_allocations, meta_allocation = prepare_deposit_allocations(intent, pools)
        signed_rate, bounds = await asyncio.gather(
            self.get_signed_rates_for_pools(pools),
            self.calculate_deposit_min_amount_outs(intent),
        )
        return build_deposit_call(
            sender,
            intent,
            pools,
            pool_allocations,
            meta_allocation,
            bounds.min_lp_amount,
            bounds.next_min_lp_amount,
            signed_rate,
        )

    # Withdraw

    def prepare_withdraw_asset(self, intent: WithdrawIntent, next_pool: Pool | None) -> Asset | None:
        return prepare_withdraw_asset(intent, next_pool)

    async def calculate_withdraw_min_amount_outs(
        self,
        intent: WithdrawIntent,
        pools: list[Pool],
        withdraw_asset: Asset | None,
        results: list[SimulateWithdrawResult] | None = None,
    ) -> WithdrawAmounts:
        """Released amounts and minimums; skips simulation when there is no tolerance."""
        if results is None and intent.slippage_tolerance is None:
            return WithdrawAmounts()
        if results is None:
            results = await self.simulator.simulate_withdraw(intent)
        return withdraw_amounts(intent, pools, withdraw_asset, results)

    async def simulate_withdraw(self, intent: WithdrawIntent) -> WithdrawSimulation:
        pools, results = await asyncio.gather(
            self.get_pools(intent.pool_addresses),
            self.simulator.simulate_withdraw(intent),
        )
        if len(results) != len(pools):
            raise LengthMismatch(
                f"Simulate withdraw result length must match pools length: "
                f"{len(results)} != {len(pools)}"
            )
        next_pool = pools[1] if len(pools) > 1 else None
        withdraw_asset = prepare_withdraw_asset(intent, next_pool)
        amounts = withdraw_amounts(intent, pools, withdraw_asset, results)
        quote = WithdrawQuote(
            amount_outs=amounts.amount_outs + (amounts.next_amount_outs or []),
            min_amount_outs=(amounts.min_amount_outs or []) + (amounts.next_min_amount_outs or []),
            details=results,
        )
        logger.info("withdraw_simulated", pools=intent.pool_addresses, mode=intent.mode)
        return WithdrawSimulation(quote=quote, intent=intent, pools=pools, amounts=amounts, sdk=self)

    async def get_withdraw_payload(self, sender: str, intent: WithdrawIntent) -> WithdrawCall:
        pools = await self.get_pools(intent.pool_addresses)
        next_pool = pools[1] if len(pools) > 1 else None
        withdraw_asset = prepare_withdraw_asset(intent, next_pool)
        signed_rate, amounts = await asyncio.gather(
            self.get_signed_rates_for_pools(pools),
            self.calculate_withdraw_min_amount_outs(intent, pools, withdraw_asset),
        )
        return build_withdraw_call(
            sender,
            intent,
            pools,
            withdraw_asset,
            amounts.min_amount_outs,
            amounts.next_min_amount_outs,
            signed_rate,
        )


__all__ = ["DepositSimulation", "SwapSimulation", "TorchSDK", "WithdrawSimulation"]
