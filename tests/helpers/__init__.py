"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Addresses, assets and common amounts
- factories: Pool and simulation-result factory functions
- fakes: In-memory collaborators (pool source, simulator, oracle)
"""

from tests.helpers.constants import (
    BASE_LP,
    BASE_POOL_ADDR,
    H_TON,
    META_LP,
    META_POOL_ADDR,
    ONE_TON,
    OTHER_BASE_ADDR,
    RECIPIENT,
    SENDER,
    ST_TON,
    TON,
    TS_TON,
    USDT,
    USDT_POOL_ADDR,
)
from tests.helpers.factories import (
    deposit_result,
    exact_in_result,
    exact_out_result,
    make_all_pools,
    make_base_pool,
    make_meta_pool,
    make_other_base_pool,
    make_pool,
    make_usdt_pool,
    withdraw_result,
)
from tests.helpers.fakes import (
    ConstantProductSimulator,
    FakeHopLookup,
    FakePoolSource,
    FakeRateOracle,
    ScriptedSimulator,
)

__all__ = [
    # Constants
    "BASE_LP",
    "BASE_POOL_ADDR",
    "H_TON",
    "META_LP",
    "META_POOL_ADDR",
    "ONE_TON",
    "OTHER_BASE_ADDR",
    "RECIPIENT",
    "SENDER",
    "ST_TON",
    "TON",
    "TS_TON",
    "USDT",
    "USDT_POOL_ADDR",
    # Factories
    "deposit_result",
    "exact_in_result",
    "exact_out_result",
    "make_all_pools",
    "make_base_pool",
    "make_meta_pool",
    "make_other_base_pool",
    "make_pool",
    "make_usdt_pool",
    "withdraw_result",
    # Fakes
    "ConstantProductSimulator",
    "FakeHopLookup",
    "FakePoolSource",
    "FakeRateOracle",
    "ScriptedSimulator",
]
