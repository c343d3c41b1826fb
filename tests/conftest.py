"""Pytest configuration and fixtures."""

import pytest

from torch_sdk import SDKConfig, TorchSDK
from torch_sdk.models import Pool
from tests.helpers import (
    FakeHopLookup,
    FakePoolSource,
    FakeRateOracle,
    ScriptedSimulator,
    make_all_pools,
    make_base_pool,
    make_meta_pool,
    make_usdt_pool,
)


@pytest.fixture
def base_pool() -> Pool:
    return make_base_pool()


@pytest.fixture
def meta_pool(base_pool: Pool) -> Pool:
    return make_meta_pool(base_pool)


@pytest.fixture
def usdt_pool() -> Pool:
    return make_usdt_pool()


@pytest.fixture
def pool_source() -> FakePoolSource:
    return FakePoolSource(make_all_pools())


@pytest.fixture
def rate_oracle() -> FakeRateOracle:
    return FakeRateOracle()


@pytest.fixture
def hop_lookup() -> FakeHopLookup:
    return FakeHopLookup()


@pytest.fixture
def simulator() -> ScriptedSimulator:
    return ScriptedSimulator()


@pytest.fixture
def sdk(
    pool_source: FakePoolSource,
    hop_lookup: FakeHopLookup,
    simulator: ScriptedSimulator,
    rate_oracle: FakeRateOracle,
) -> TorchSDK:
    """SDK wired entirely to in-memory fakes.

    Tests program ``simulator`` with results before calling the SDK.
    """
    return TorchSDK(
        SDKConfig(),
        pool_source=pool_source,
        hop_lookup=hop_lookup,
        simulator=simulator,
        rate_oracle=rate_oracle,
    )
