"""Tests for hop resolution over explicit pool routes."""

import pytest

from torch_sdk.errors import NoValidConnection, UndeterminedAction
from torch_sdk.models import Asset, Hop, HopAction, Pool
from torch_sdk.routing import classify_hop_action, find_connecting_asset, resolve_hops
from tests.helpers import (
    BASE_LP,
    H_TON,
    ST_TON,
    TON,
    TS_TON,
    USDT,
    make_other_base_pool,
)


def assert_continuous(hops: list[Hop], asset_in: Asset, asset_out: Asset) -> None:
    assert hops[0].asset_in == asset_in
    assert hops[-1].asset_out == asset_out
    for current, following in zip(hops, hops[1:]):
        assert current.asset_out == following.asset_in


class TestClassifyHopAction:
    def test_swap(self, base_pool: Pool) -> None:
        assert classify_hop_action(base_pool, TON, TS_TON) == HopAction.SWAP

    def test_deposit(self, base_pool: Pool) -> None:
        assert classify_hop_action(base_pool, TON, BASE_LP) == HopAction.DEPOSIT

    def test_withdraw(self, base_pool: Pool) -> None:
        assert classify_hop_action(base_pool, BASE_LP, ST_TON) == HopAction.WITHDRAW

    def test_foreign_asset(self, base_pool: Pool) -> None:
        with pytest.raises(UndeterminedAction):
            classify_hop_action(base_pool, TON, H_TON)

    def test_lp_to_lp(self, base_pool: Pool) -> None:
        with pytest.raises(UndeterminedAction):
            classify_hop_action(base_pool, BASE_LP, BASE_LP)


class TestFindConnectingAsset:
    def test_lp_connects_base_to_meta(self, base_pool: Pool, meta_pool: Pool) -> None:
        assert find_connecting_asset(base_pool, meta_pool, TON) == BASE_LP

    def test_first_shared_asset_in_declared_order(self, base_pool: Pool) -> None:
        other = make_other_base_pool()
        # TON is skipped because it is the incoming asset
        with pytest.raises(NoValidConnection):
            find_connecting_asset(base_pool, other, TON)
        assert find_connecting_asset(base_pool, other, TS_TON) == TON

    def test_no_connection(self, meta_pool: Pool, usdt_pool: Pool) -> None:
        with pytest.raises(NoValidConnection):
            find_connecting_asset(meta_pool, usdt_pool, H_TON)


class TestResolveHops:
    def test_single_swap(self, base_pool: Pool) -> None:
        hops = resolve_hops([base_pool], TON, TS_TON)
        assert [hop.action for hop in hops] == [HopAction.SWAP]
        assert_continuous(hops, TON, TS_TON)

    def test_deposit_then_swap(self, base_pool: Pool, meta_pool: Pool) -> None:
        hops = resolve_hops([base_pool, meta_pool], TON, H_TON)
        assert [hop.action for hop in hops] == [HopAction.DEPOSIT, HopAction.SWAP]
        assert hops[0].asset_out == BASE_LP
        assert_continuous(hops, TON, H_TON)

    def test_swap_then_withdraw(self, base_pool: Pool, meta_pool: Pool) -> None:
        hops = resolve_hops([meta_pool, base_pool], H_TON, TS_TON)
        assert [hop.action for hop in hops] == [HopAction.SWAP, HopAction.WITHDRAW]
        assert_continuous(hops, H_TON, TS_TON)

    def test_two_swaps(self, base_pool: Pool, usdt_pool: Pool) -> None:
        hops = resolve_hops([base_pool, usdt_pool], TON, USDT)
        assert [hop.action for hop in hops] == [HopAction.SWAP, HopAction.SWAP]
        assert hops[0].asset_out == ST_TON
        assert_continuous(hops, TON, USDT)

    def test_three_hops(self, base_pool: Pool, meta_pool: Pool, usdt_pool: Pool) -> None:
        hops = resolve_hops([meta_pool, base_pool, usdt_pool], H_TON, USDT)
        assert [hop.action for hop in hops] == [
            HopAction.SWAP,
            HopAction.WITHDRAW,
            HopAction.SWAP,
        ]
        assert_continuous(hops, H_TON, USDT)

    def test_last_hop_undetermined(self, base_pool: Pool) -> None:
        with pytest.raises(UndeterminedAction):
            resolve_hops([base_pool], TON, USDT)

    def test_unbridgeable_pools(self, meta_pool: Pool, usdt_pool: Pool) -> None:
        with pytest.raises(NoValidConnection):
            resolve_hops([meta_pool, usdt_pool], H_TON, USDT)
