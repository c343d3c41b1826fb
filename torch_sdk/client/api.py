"""HTTP client for the Torch indexer API and signed-rate oracle.

TorchAPI implements every collaborator protocol in
``torch_sdk.interfaces`` over a pair of ``httpx.AsyncClient`` instances.
Transport and status errors (``httpx.HTTPError``) propagate unchanged.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog
from pydantic import TypeAdapter

from torch_sdk.client.schemas import SYNC_POOLS_QUERY, PoolsResponse, WireHop
from torch_sdk.config import DEFAULT_SDK_CONFIG, SDKConfig
from torch_sdk.models import (
    Allocation,
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

logger = structlog.get_logger()

_swap_results_adapter: TypeAdapter[list[SimulateSwapResult]] = TypeAdapter(
    list[SimulateSwapResult]
)
_hops_adapter: TypeAdapter[list[WireHop]] = TypeAdapter(list[WireHop])


def _allocation_to_wire(allocation: Allocation) -> dict[str, Any]:
    return {"asset": allocation.asset.to_wire(), "value": str(allocation.value)}


def swap_request_body(intent: ExactInIntent | ExactOutIntent) -> dict[str, Any]:
    """JSON body for ``POST /simulate/swap``."""
    if isinstance(intent, ExactInIntent):
        body: dict[str, Any] = {"mode": "ExactIn", "amountIn": str(intent.amount_in)}
    else:
        body = {"mode": "ExactOut", "amountOut": str(intent.amount_out)}
    body["assetIn"] = intent.asset_in.to_wire()
    body["assetOut"] = intent.asset_out.to_wire()
    body["routes"] = intent.routes
    return body


def deposit_request_body(intent: DepositIntent) -> dict[str, Any]:
    """JSON body for ``POST /simulate/deposit``."""
    next_deposit = None
    if intent.next_deposit is not None:
        amounts = intent.next_deposit.deposit_amounts
        next_deposit = {
            "pool": intent.next_deposit.pool,
            "depositAmounts": _allocation_to_wire(amounts) if amounts is not None else None,
        }
    return {
        "pool": intent.pool,
        "depositAmounts": [_allocation_to_wire(a) for a in intent.deposit_amounts],
        "nextDeposit": next_deposit,
    }


def withdraw_request_body(intent: WithdrawIntent) -> dict[str, Any]:
    """JSON body for ``POST /simulate/withdraw``.

    A Single withdraw that chains into another pool withdraws that pool's
    LP asset.
    """
    withdraw_asset: Asset | None = None
    if intent.mode == "Single" and intent.next_withdraw is not None:
        withdraw_asset = Asset.jetton(intent.next_withdraw.pool)
    elif intent.mode == "Single":
        withdraw_asset = intent.withdraw_asset

    next_withdraw = None
    if intent.next_withdraw is not None:
        next_withdraw = {"mode": intent.next_withdraw.mode, "pool": intent.next_withdraw.pool}
        if intent.next_withdraw.mode == "Single" and intent.next_withdraw.withdraw_asset is not None:
            next_withdraw["withdrawAsset"] = intent.next_withdraw.withdraw_asset.to_wire()

    return {
        "pool": intent.pool,
        "removeLpAmount": str(intent.burn_lp_amount),
        "mode": intent.mode,
        "withdrawAsset": withdraw_asset.to_wire() if withdraw_asset is not None else None,
        "nextWithdraw": next_withdraw,
    }


class TorchAPI:
    """Indexer and oracle client.

    Args:
        config: Endpoints and timeout
        client: Client for the indexer API. Built from ``config`` if None.
        oracle_client: Client for the oracle. Built from ``config`` if None.

    Injected clients are not closed by ``aclose``.
    """

    def __init__(
        self,
        config: SDKConfig = DEFAULT_SDK_CONFIG,
        client: httpx.AsyncClient | None = None,
        oracle_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self._owns_clients = client is None and oracle_client is None
        headers = {"Content-Type": "application/json"}
        self._api = client or httpx.AsyncClient(
            base_url=config.api_endpoint, timeout=config.request_timeout, headers=headers
        )
        self._oracle = oracle_client or httpx.AsyncClient(
            base_url=config.oracle_endpoint, timeout=config.request_timeout, headers=headers
        )

    async def aclose(self) -> None:
        if self._owns_clients:
            await self._api.aclose()
            await self._oracle.aclose()

    async def __aenter__(self) -> TorchAPI:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _get(self, client: httpx.AsyncClient, url: str, **params: str) -> Any:
        response = await client.get(url, params=params or None)
        response.raise_for_status()
        return response.json()

    async def _post(self, url: str, body: dict[str, Any]) -> Any:
        response = await self._api.post(url, json=body)
        response.raise_for_status()
        return response.json()

    async def fetch_all_pools(self) -> list[Pool]:
        """Pull the full pool catalog via the ``pools`` GraphQL query."""
        data = await self._post("/graphql", {"query": SYNC_POOLS_QUERY})
        pools = [wire.to_pool() for wire in PoolsResponse.model_validate(data).data.pools]
        logger.debug("pools_fetched", count=len(pools))
        return pools

    async def lookup_hops(self, asset_in: Asset, asset_out: Asset) -> list[Hop]:
        """Server-selected route for an asset pair."""
        data = await self._get(self._api, "/hops", assetIn=asset_in.id, assetOut=asset_out.id)
        hops = [wire.to_hop() for wire in _hops_adapter.validate_python(data)]
        logger.debug("hops_fetched", asset_in=asset_in.id, asset_out=asset_out.id, count=len(hops))
        return hops

    async def simulate_swap(
        self, intent: ExactInIntent | ExactOutIntent
    ) -> list[SimulateSwapResult]:
        data = await self._post("/simulate/swap", swap_request_body(intent))
        # Results without a mode inherit the request mode
        tagged = [{"mode": intent.mode, **item} for item in data]
        return _swap_results_adapter.validate_python(tagged)

    async def simulate_deposit(self, intent: DepositIntent) -> list[SimulateDepositResult]:
        data = await self._post("/simulate/deposit", deposit_request_body(intent))
        return [SimulateDepositResult.model_validate(item) for item in data]

    async def simulate_withdraw(self, intent: WithdrawIntent) -> list[SimulateWithdrawResult]:
        data = await self._post("/simulate/withdraw", withdraw_request_body(intent))
        return [SimulateWithdrawResult.model_validate(item) for item in data]

    async def get_signed_rates(self, pool_addresses: list[str]) -> SignedRate:
        data = await self._get(
            self._oracle, "/signed-rates", poolAddresses=",".join(pool_addresses)
        )
        return SignedRate.model_validate(data)

    async def get_lp_account_active(self, lp_provider: str) -> list[str]:
        """Addresses of the active LP accounts owned by ``lp_provider``."""
        return list(await self._get(self._api, "/lpAccount/active", lpProvider=lp_provider))
