"""Quote chaining across hops.

The simulator is called once per route and returns one result per hop.
For ExactIn routes each result's ``amount_out`` is that hop's output. For
ExactOut routes each result's ``amount_in`` is that hop's required input,
so hop ``i``'s output is hop ``i + 1``'s required input and the last hop
outputs the requested ``amount_out``.

When the intent carries an explicit ``min_amount_out`` instead of a
slippage tolerance, the route is re-quoted in ExactOut mode seeded by that
floor, which yields an absolute per-hop minimum for every hop.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from torch_sdk.errors import InvalidSequence, LengthMismatch, ModeMismatch, ZeroAmountIn
from torch_sdk.models.intents import ExactInIntent, ExactOutIntent
from torch_sdk.slippage import min_amount_outs

if TYPE_CHECKING:
    from torch_sdk.interfaces import PoolSimulator
    from torch_sdk.models import Hop, SimulateSwapResult

logger = structlog.get_logger()


@dataclass
class QuoteChain:
    """Reconciled amounts for every hop of a route.

    Attributes:
        amount_in: Amount entering the first hop (the caller's amount for
            ExactIn, the simulated requirement for ExactOut)
        amount_outs: Output of each hop, first hop first
        min_amount_outs: Per-hop minimum outputs, or None when the intent
            carries no bound
        results: Raw simulation results, one per hop
    """

    amount_in: int
    amount_outs: list[int]
    min_amount_outs: list[int] | None = None
    results: list[SimulateSwapResult] = field(default_factory=list)

    @property
    def amount_out(self) -> int:
        return self.amount_outs[-1]


def _check_length(results: list[SimulateSwapResult], hop_count: int) -> None:
    if len(results) != hop_count:
        raise LengthMismatch(
            f"Simulate swap result length ({len(results)}) must match hops length ({hop_count})"
        )


def exact_in_amount_outs(results: list[SimulateSwapResult]) -> list[int]:
    """Per-hop outputs from an ExactIn simulation.

    Raises:
        ModeMismatch: If any result is ExactOut
    """
    amount_outs: list[int] = []
    for i, result in enumerate(results):
        if result.mode != "ExactIn":
            raise ModeMismatch(f"Received ExactOut simulation for ExactIn swap at hop {i}")
        amount_outs.append(result.amount_out)
    return amount_outs


def exact_out_amount_outs(results: list[SimulateSwapResult], final_amount_out: int) -> list[int]:
    """Per-hop outputs from an ExactOut simulation.

    Hop ``i`` must deliver what hop ``i + 1`` requires; the last hop
    delivers ``final_amount_out``.

    Raises:
        ModeMismatch: If the first result is not ExactOut
        InvalidSequence: If an ExactIn result follows an ExactOut result
    """
    if results and results[0].mode != "ExactOut":
        raise ModeMismatch("Simulate swap result mode must be ExactOut for the first hop")

    amount_outs: list[int] = []
    for i, result in enumerate(results):
        if result.mode == "ExactIn":
            raise InvalidSequence(f"Invalid simulation sequence: ExactIn result after ExactOut at hop {i}")
        if i + 1 < len(results):
            following = results[i + 1]
            if following.mode == "ExactIn":
                raise InvalidSequence(
                    f"Invalid simulation sequence: ExactIn result after ExactOut at hop {i + 1}"
                )
            amount_outs.append(following.amount_in)
        else:
            amount_outs.append(final_amount_out)
    return amount_outs


class QuoteChainer:
    """Drives swap simulation for a hop chain and reconciles the results.

    Quoting is all-or-nothing: any invariant violation raises before a
    payload can be built.
    """

    def __init__(self, simulator: PoolSimulator) -> None:
        self.simulator = simulator

    async def chain_quotes(
        self,
        hops: list[Hop],
        intent: ExactInIntent | ExactOutIntent,
        results: list[SimulateSwapResult] | None = None,
    ) -> QuoteChain:
        """Quote every hop and derive per-hop minimum outputs.

        Args:
            hops: Resolved hops, first to last
            intent: Swap intent; its route is pinned to the hops' pools
            results: Pre-fetched simulation results for ``intent``. If None,
                     the simulator is called.

        Returns:
            QuoteChain with amounts, minimums and raw results

        Raises:
            LengthMismatch: If result count differs from hop count
            ModeMismatch: If result modes disagree with the intent mode
            InvalidSequence: If an ExactOut chain contains a later ExactIn
            ZeroAmountIn: If the quoted input is zero
        """
        routes = [hop.pool.address for hop in hops]
        intent = intent.with_routes(routes)

        bound_intent: ExactOutIntent | None = None
        if intent.min_amount_out is not None:
            bound_intent = ExactOutIntent(
                asset_in=intent.asset_in,
                asset_out=intent.asset_out,
                amount_out=intent.min_amount_out,
                routes=routes,
            )

        # The bound re-quote does not depend on the main quote
        calls = []
        if results is None:
            calls.append(self.simulator.simulate_swap(intent))
        if bound_intent is not None:
            calls.append(self.simulator.simulate_swap(bound_intent))
        fetched = list(await asyncio.gather(*calls)) if calls else []
        if results is None:
            results = fetched.pop(0)
        bound_results = fetched.pop(0) if bound_intent is not None else None

        _check_length(results, len(hops))
        if isinstance(intent, ExactInIntent):
            amount_in = intent.amount_in
            amount_outs = exact_in_amount_outs(results)
        else:
            amount_outs = exact_out_amount_outs(results, intent.amount_out)
            amount_in = results[0].amount_in  # type: ignore[union-attr]

        if amount_in == 0:
            raise ZeroAmountIn("Amount in must be greater than 0")

        minimums: list[int] | None = None
        if intent.slippage_tolerance is not None:
            minimums = min_amount_outs(amount_outs, intent.slippage_tolerance)
        elif bound_intent is not None and bound_results is not None:
            _check_length(bound_results, len(hops))
            minimums = exact_out_amount_outs(bound_results, bound_intent.amount_out)

        logger.debug(
            "swap_quoted",
            mode=intent.mode,
            hops=len(hops),
            amount_in=amount_in,
            amount_out=amount_outs[-1] if amount_outs else None,
            bounded=minimums is not None,
        )
        return QuoteChain(
            amount_in=amount_in,
            amount_outs=amount_outs,
            min_amount_outs=minimums,
            results=list(results),
        )

    async def quote_bounds(
        self,
        hops: list[Hop],
        intent: ExactInIntent | ExactOutIntent,
        results: list[SimulateSwapResult] | None = None,
    ) -> tuple[int, list[int] | None]:
        """Input amount and per-hop minimums needed to build a payload.

        An ExactIn intent without a bound needs no simulation at all.
        """
        unbounded = intent.slippage_tolerance is None and intent.min_amount_out is None
        if isinstance(intent, ExactInIntent) and unbounded and results is None:
            return intent.amount_in, None
        chain = await self.chain_quotes(hops, intent, results)
        return chain.amount_in, chain.min_amount_outs


__all__ = [
    "QuoteChain",
    "QuoteChainer",
    "exact_in_amount_outs",
    "exact_out_amount_outs",
]
