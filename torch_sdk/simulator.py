"""Simulation backend selection.

Only off-chain simulation (the indexer's ``/simulate`` endpoints) exists.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from torch_sdk.constants import SIMULATE_MODE_OFFCHAIN
from torch_sdk.errors import UnsupportedSimulateMode

if TYPE_CHECKING:
    from torch_sdk.interfaces import PoolSimulator
    from torch_sdk.models import (
        DepositIntent,
        ExactInIntent,
        ExactOutIntent,
        SimulateDepositResult,
        SimulateSwapResult,
        SimulateWithdrawResult,
        WithdrawIntent,
    )

logger = structlog.get_logger()

SUPPORTED_SIMULATE_MODES = frozenset({SIMULATE_MODE_OFFCHAIN})


class Simulator:
    """Routes simulation requests to the backend for the configured mode.

    Args:
        backend: Off-chain simulation collaborator
        mode: Simulation mode name

    Raises:
        UnsupportedSimulateMode: If ``mode`` is not "offchain"
    """

    def __init__(self, backend: PoolSimulator, mode: str = SIMULATE_MODE_OFFCHAIN) -> None:
        if mode not in SUPPORTED_SIMULATE_MODES:
            raise UnsupportedSimulateMode(f"Simulate mode {mode!r} is not implemented")
        self.mode = mode
        self._backend = backend

    async def simulate_swap(
        self, intent: ExactInIntent | ExactOutIntent
    ) -> list[SimulateSwapResult]:
        results = await self._backend.simulate_swap(intent)
        logger.debug("swap_simulated", mode=intent.mode, routes=intent.routes, results=len(results))
        return results

    async def simulate_deposit(self, intent: DepositIntent) -> list[SimulateDepositResult]:
        results = await self._backend.simulate_deposit(intent)
        logger.debug("deposit_simulated", pool=intent.pool, results=len(results))
        return results

    async def simulate_withdraw(self, intent: WithdrawIntent) -> list[SimulateWithdrawResult]:
        results = await self._backend.simulate_withdraw(intent)
        logger.debug("withdraw_simulated", pool=intent.pool, results=len(results))
        return results
