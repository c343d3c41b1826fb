"""Tests for call descriptor builders and deposit/withdraw preparation."""

from decimal import Decimal

import pytest

from torch_sdk.constants import QUERY_ID_MAX
from torch_sdk.errors import (
    InvalidIntent,
    InvalidWithdrawTarget,
    MissingMetaAllocation,
    MissingMetaAsset,
    NoRoutesFound,
    PoolNotFound,
    SimulationShapeError,
    WrongMetaAsset,
)
from torch_sdk.models import (
    Allocation,
    BalancedWithdrawConfig,
    DepositCall,
    DepositIntent,
    ExactInIntent,
    NextWithdraw,
    Pool,
    SignedRate,
    SingleWithdrawConfig,
    SwapCall,
    SwapNext,
    WithdrawCall,
    WithdrawIntent,
    WithdrawNext,
)
from torch_sdk.payload import (
    build_deposit_call,
    build_swap_call,
    build_withdraw_call,
    deposit_bounds,
    generate_query_id,
    prepare_deposit_allocations,
    prepare_withdraw_asset,
    withdraw_amounts,
)
from torch_sdk.routing import resolve_hops
from tests.helpers import (
    BASE_LP,
    BASE_POOL_ADDR,
    H_TON,
    META_POOL_ADDR,
    META_LP,
    OTHER_BASE_ADDR,
    SENDER,
    ST_TON,
    TON,
    TS_TON,
    USDT,
    deposit_result,
    make_other_base_pool,
    withdraw_result,
)


def test_generate_query_id_is_64_bit() -> None:
    ids = {generate_query_id() for _ in range(20)}
    assert all(0 <= query_id <= QUERY_ID_MAX for query_id in ids)
    assert len(ids) > 1


class TestBuildSwapCall:
    def test_swap_first_hop(self, base_pool: Pool, usdt_pool: Pool) -> None:
        hops = resolve_hops([base_pool, usdt_pool], TON, USDT)
        intent = ExactInIntent(asset_in=TON, asset_out=USDT, amount_in=1000, query_id=9, deadline=60)
        rate = SignedRate(signatures="ab", payload="cd")

        call = build_swap_call(SENDER, intent, hops, [900, 450], rate)

        assert isinstance(call, SwapCall)
        assert call.target_pool == base_pool.address
        assert (call.asset_in, call.asset_out) == (TON, ST_TON)
        assert call.amount_in == 1000
        assert call.min_amount_out == 900
        assert call.query_id == 9
        assert call.deadline == 60
        assert call.signed_rate == rate
        assert call.next == SwapNext(
            next_pool_address=usdt_pool.address, asset_out=USDT, min_amount_out=450
        )

    def test_deposit_first_hop(self, base_pool: Pool, meta_pool: Pool) -> None:
        hops = resolve_hops([base_pool, meta_pool], TS_TON, H_TON)
        intent = ExactInIntent(asset_in=TS_TON, asset_out=H_TON, amount_in=500)

        call = build_swap_call(SENDER, intent, hops, None)

        assert isinstance(call, DepositCall)
        assert call.pool_allocations == [
            Allocation(asset=TON, value=0),
            Allocation(asset=TS_TON, value=500),
            Allocation(asset=ST_TON, value=0),
        ]
        assert call.min_lp_amount is None
        assert isinstance(call.next, SwapNext)
        assert 0 <= call.query_id <= QUERY_ID_MAX

    def test_withdraw_first_hop(self, base_pool: Pool, usdt_pool: Pool) -> None:
        hops = resolve_hops([base_pool, usdt_pool], BASE_LP, USDT)
        intent = ExactInIntent(asset_in=BASE_LP, asset_out=USDT, amount_in=77)

        call = build_swap_call(SENDER, intent, hops, [60, 50])

        assert isinstance(call, WithdrawCall)
        assert call.burn_lp_amount == 77
        assert call.config == SingleWithdrawConfig(asset_out=ST_TON, min_amount_out=60)
        assert isinstance(call.next, SwapNext)

    def test_no_hops(self) -> None:
        intent = ExactInIntent(asset_in=TON, asset_out=USDT, amount_in=1)
        with pytest.raises(NoRoutesFound):
            build_swap_call(SENDER, intent, [], None)


class TestPrepareDepositAllocations:
    def test_plain_deposit(self, base_pool: Pool) -> None:
        intent = DepositIntent(pool=BASE_POOL_ADDR, deposit_amounts=[Allocation(asset=ST_TON, value=5)])
        allocations, meta = prepare_deposit_allocations(intent, [base_pool])
        assert [a.value for a in allocations] == [0, 0, 5]
        assert meta is None

    def test_meta_allocation_derived(self, base_pool: Pool, meta_pool: Pool) -> None:
        intent = DepositIntent(
            pool=BASE_POOL_ADDR,
            deposit_amounts=[Allocation(asset=TON, value=5)],
            next_deposit={"pool": META_POOL_ADDR},
        )
        _, meta = prepare_deposit_allocations(intent, [base_pool, meta_pool])
        assert meta == Allocation(asset=H_TON, value=0)

    def test_meta_allocation_given(self, base_pool: Pool, meta_pool: Pool) -> None:
        intent = DepositIntent(
            pool=BASE_POOL_ADDR,
            deposit_amounts=[Allocation(asset=TON, value=5)],
            next_deposit={"pool": META_POOL_ADDR, "deposit_amounts": {"asset": H_TON, "value": 8}},
        )
        _, meta = prepare_deposit_allocations(intent, [base_pool, meta_pool])
        assert meta == Allocation(asset=H_TON, value=8)

    def test_wrong_meta_asset(self, base_pool: Pool, meta_pool: Pool) -> None:
        intent = DepositIntent(
            pool=BASE_POOL_ADDR,
            deposit_amounts=[Allocation(asset=TON, value=5)],
            next_deposit={"pool": META_POOL_ADDR, "deposit_amounts": {"asset": USDT, "value": 8}},
        )
        with pytest.raises(WrongMetaAsset):
            prepare_deposit_allocations(intent, [base_pool, meta_pool])

    def test_next_pool_not_over_this_pool(self, base_pool: Pool) -> None:
        intent = DepositIntent(
            pool=BASE_POOL_ADDR,
            deposit_amounts=[Allocation(asset=TON, value=5)],
            next_deposit={"pool": OTHER_BASE_ADDR},
        )
        with pytest.raises(MissingMetaAsset):
            prepare_deposit_allocations(intent, [base_pool, make_other_base_pool()])

    def test_next_pool_missing(self, base_pool: Pool) -> None:
        intent = DepositIntent(
            pool=BASE_POOL_ADDR,
            deposit_amounts=[Allocation(asset=TON, value=5)],
            next_deposit={"pool": META_POOL_ADDR},
        )
        with pytest.raises(PoolNotFound):
            prepare_deposit_allocations(intent, [base_pool])

    def test_foreign_allocation(self, base_pool: Pool) -> None:
        intent = DepositIntent(pool=BASE_POOL_ADDR, deposit_amounts=[Allocation(asset=H_TON, value=5)])
        with pytest.raises(InvalidIntent):
            prepare_deposit_allocations(intent, [base_pool])


class TestBuildDepositCall:
    def test_chained_deposit(self, base_pool: Pool, meta_pool: Pool) -> None:
        intent = DepositIntent(
            pool=BASE_POOL_ADDR,
            deposit_amounts=[Allocation(asset=TON, value=5)],
            next_deposit={"pool": META_POOL_ADDR},
            query_id=3,
        )
        allocations, meta = prepare_deposit_allocations(intent, [base_pool, meta_pool])
        call = build_deposit_call(SENDER, intent, [base_pool, meta_pool], allocations, meta, 4, 2)
        assert call.target_pool == BASE_POOL_ADDR
        assert call.min_lp_amount == 4
        assert call.next.next_pool_address == META_POOL_ADDR
        assert call.next.min_lp_amount == 2
        assert call.next.meta_allocation == Allocation(asset=H_TON, value=0)

    def test_chained_deposit_needs_meta_allocation(self, base_pool: Pool, meta_pool: Pool) -> None:
        intent = DepositIntent(
            pool=BASE_POOL_ADDR,
            deposit_amounts=[Allocation(asset=TON, value=5)],
            next_deposit={"pool": META_POOL_ADDR},
        )
        with pytest.raises(MissingMetaAllocation):
            build_deposit_call(SENDER, intent, [base_pool, meta_pool], [], None)


class TestWithdraw:
    def chained_intent(self, **kwargs: object) -> WithdrawIntent:
        return WithdrawIntent(
            pool=META_POOL_ADDR,
            burn_lp_amount=1000,
            mode="Single",
            next_withdraw=NextWithdraw(pool=BASE_POOL_ADDR, mode="Balanced"),
            **kwargs,
        )

    def test_withdraw_asset_single(self) -> None:
        intent = WithdrawIntent(pool=BASE_POOL_ADDR, burn_lp_amount=1, mode="Single", withdraw_asset=TS_TON)
        assert prepare_withdraw_asset(intent, None) == TS_TON

    def test_withdraw_asset_chained(self, base_pool: Pool) -> None:
        assert prepare_withdraw_asset(self.chained_intent(), base_pool) == BASE_LP

    def test_withdraw_asset_balanced(self) -> None:
        intent = WithdrawIntent(pool=BASE_POOL_ADDR, burn_lp_amount=1, mode="Balanced")
        assert prepare_withdraw_asset(intent, None) is None

    def test_withdraw_asset_next_pool_missing(self) -> None:
        with pytest.raises(PoolNotFound):
            prepare_withdraw_asset(self.chained_intent(), None)

    def test_amounts_chained_with_slippage(self, base_pool: Pool, meta_pool: Pool) -> None:
        intent = self.chained_intent(slippage_tolerance="0.1")
        amounts = withdraw_amounts(
            intent,
            [meta_pool, base_pool],
            BASE_LP,
            [withdraw_result(1000), withdraw_result(300, 300, 401)],
        )
        assert amounts.amount_outs == [Allocation(asset=BASE_LP, value=1000)]
        assert amounts.min_amount_outs == [Allocation(asset=BASE_LP, value=900)]
        assert [a.value for a in amounts.next_amount_outs] == [300, 300, 401]
        assert [a.value for a in amounts.next_min_amount_outs] == [270, 270, 360]

    def test_amounts_balanced_shape(self, base_pool: Pool) -> None:
        intent = WithdrawIntent(pool=BASE_POOL_ADDR, burn_lp_amount=1, mode="Balanced")
        with pytest.raises(SimulationShapeError):
            withdraw_amounts(intent, [base_pool], None, [withdraw_result(1, 2)])

    def test_amounts_single_shape(self, base_pool: Pool) -> None:
        intent = WithdrawIntent(pool=BASE_POOL_ADDR, burn_lp_amount=1, mode="Single", withdraw_asset=TON)
        with pytest.raises(SimulationShapeError):
            withdraw_amounts(intent, [base_pool], TON, [withdraw_result(1, 2)])

    def test_amounts_missing_next_result(self, base_pool: Pool, meta_pool: Pool) -> None:
        with pytest.raises(SimulationShapeError):
            withdraw_amounts(self.chained_intent(), [meta_pool, base_pool], BASE_LP, [withdraw_result(5)])

    def test_chained_call_requires_base_next_pool(self, base_pool: Pool, meta_pool: Pool) -> None:
        intent = WithdrawIntent(
            pool=BASE_POOL_ADDR,
            burn_lp_amount=10,
            mode="Single",
            next_withdraw=NextWithdraw(pool=META_POOL_ADDR, mode="Balanced"),
        )
        with pytest.raises(InvalidWithdrawTarget):
            build_withdraw_call(SENDER, intent, [base_pool, meta_pool], META_LP)

    def test_build_chained_call(self, base_pool: Pool, meta_pool: Pool) -> None:
        mins = [Allocation(asset=BASE_LP, value=900)]
        next_mins = [Allocation(asset=TON, value=1)]
        call = build_withdraw_call(
            SENDER, self.chained_intent(), [meta_pool, base_pool], BASE_LP, mins, next_mins
        )
        assert call.target_pool == META_POOL_ADDR
        assert call.config == SingleWithdrawConfig(asset_out=BASE_LP, min_amount_out=900)
        assert call.next == WithdrawNext(
            next_pool_address=BASE_POOL_ADDR,
            config=BalancedWithdrawConfig(min_amount_outs=next_mins),
        )


class TestDepositBounds:
    def test_without_slippage(self) -> None:
        intent = DepositIntent(pool=BASE_POOL_ADDR, deposit_amounts=[Allocation(asset=TON, value=5)])
        bounds = deposit_bounds(intent, [deposit_result(100)])
        assert bounds.min_lp_amount is None
        assert bounds.next_min_lp_amount is None

    def test_chained_with_slippage(self) -> None:
        intent = DepositIntent(
            pool=BASE_POOL_ADDR,
            deposit_amounts=[Allocation(asset=TON, value=5)],
            next_deposit={"pool": META_POOL_ADDR},
            slippage_tolerance=Decimal("0.01"),
        )
        bounds = deposit_bounds(intent, [deposit_result(1000), deposit_result(500)])
        assert (bounds.min_lp_amount, bounds.next_min_lp_amount) == (990, 495)

    def test_chained_missing_result(self) -> None:
        intent = DepositIntent(
            pool=BASE_POOL_ADDR,
            deposit_amounts=[Allocation(asset=TON, value=5)],
            next_deposit={"pool": META_POOL_ADDR},
            slippage_tolerance=Decimal("0.01"),
        )
        with pytest.raises(SimulationShapeError):
            deposit_bounds(intent, [deposit_result(1000)])

    def test_empty_results(self) -> None:
        intent = DepositIntent(pool=BASE_POOL_ADDR, deposit_amounts=[Allocation(asset=TON, value=5)])
        with pytest.raises(SimulationShapeError):
            deposit_bounds(intent, [])
