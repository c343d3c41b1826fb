"""Quote service endpoints.

``/simulate/*`` return quotes; ``/payload/*`` return the call descriptor
for the contract-call layer. SDK failures are mapped to 422 by the
exception handler in ``torch_sdk.api.main``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends

from torch_sdk.api.schemas import (
    DepositPayloadRequest,
    ErrorResponse,
    SwapIntentBody,
    SwapPayloadRequest,
    WithdrawPayloadRequest,
)
from torch_sdk.config import SDKConfig
from torch_sdk.models import (
    CallDescriptor,
    DepositIntent,
    DepositQuote,
    SwapQuote,
    WithdrawIntent,
    WithdrawQuote,
)
from torch_sdk.sdk import TorchSDK

logger = structlog.get_logger()

router = APIRouter(responses={422: {"model": ErrorResponse}})


@lru_cache(maxsize=1)
def get_default_sdk() -> TorchSDK:
    return TorchSDK(SDKConfig.from_env())


def get_sdk() -> TorchSDK:
    """Dependency provider for the SDK instance.

    Override this in tests to inject an SDK backed by fakes:
        app.dependency_overrides[get_sdk] = lambda: sdk
    """
    return get_default_sdk()


SDKDep = Annotated[TorchSDK, Depends(get_sdk)]


@router.post("/simulate/swap", response_model=SwapQuote, response_model_by_alias=True)
async def simulate_swap(body: SwapIntentBody, sdk: SDKDep) -> SwapQuote:
    intent = body.root
    logger.info("simulate_swap_request", mode=intent.mode, asset_in=intent.asset_in.id)
    simulation = await sdk.simulate_swap(intent)
    return simulation.quote


@router.post("/simulate/deposit", response_model=DepositQuote, response_model_by_alias=True)
async def simulate_deposit(intent: DepositIntent, sdk: SDKDep) -> DepositQuote:
    logger.info("simulate_deposit_request", pool=intent.pool)
    simulation = await sdk.simulate_deposit(intent)
    return simulation.quote


@router.post("/simulate/withdraw", response_model=WithdrawQuote, response_model_by_alias=True)
async def simulate_withdraw(intent: WithdrawIntent, sdk: SDKDep) -> WithdrawQuote:
    logger.info("simulate_withdraw_request", pool=intent.pool, mode=intent.mode)
    simulation = await sdk.simulate_withdraw(intent)
    return simulation.quote


@router.post("/payload/swap", response_model=CallDescriptor, response_model_exclude_none=True)
async def swap_payload(request: SwapPayloadRequest, sdk: SDKDep) -> CallDescriptor:
    return await sdk.get_swap_payload(request.sender, request.intent)


@router.post("/payload/deposit", response_model=CallDescriptor, response_model_exclude_none=True)
async def deposit_payload(request: DepositPayloadRequest, sdk: SDKDep) -> CallDescriptor:
    return await sdk.get_deposit_payload(request.sender, request.intent)


@router.post("/payload/withdraw", response_model=CallDescriptor, response_model_exclude_none=True)
async def withdraw_payload(request: WithdrawPayloadRequest, sdk: SDKDep) -> CallDescriptor:
    return await sdk.get_withdraw_payload(request.sender, request.intent)
