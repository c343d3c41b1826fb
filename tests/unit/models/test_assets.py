"""Tests for Asset, Allocation and Pool value objects."""

import pytest
from pydantic import ValidationError

from torch_sdk.models import Allocation, Asset, AssetKind, Pool, PoolKind, normalize_allocations
from torch_sdk.models.pool import PoolInfo
from tests.helpers import (
    BASE_LP,
    BASE_POOL_ADDR,
    H_TON,
    META_POOL_ADDR,
    ST_TON,
    TON,
    TS_TON,
    make_base_pool,
    make_meta_pool,
)


class TestAsset:
    def test_structural_equality(self) -> None:
        assert Asset.jetton("0:" + "11" * 32) == TS_TON
        assert hash(Asset.jetton("0:" + "11" * 32)) == hash(TS_TON)
        assert Asset.ton() != TS_TON

    def test_ids(self) -> None:
        assert TON.id == "TON"
        assert TS_TON.id == f"jetton:{TS_TON.jetton_master}"
        assert Asset.extra_currency(7).id == "ec:7"

    def test_jetton_requires_master(self) -> None:
        with pytest.raises(ValidationError):
            Asset(kind=AssetKind.JETTON)

    def test_native_rejects_master(self) -> None:
        with pytest.raises(ValidationError):
            Asset(kind=AssetKind.NATIVE, jetton_master=BASE_POOL_ADDR)

    def test_wire_form(self) -> None:
        wire = {"type": 1, "jettonMaster": TS_TON.jetton_master, "currencyId": None}
        assert Asset.from_wire(wire) == TS_TON
        assert TS_TON.to_wire() == wire
        assert Asset.from_wire({"type": 0}) == TON

    def test_unknown_wire_type(self) -> None:
        with pytest.raises(ValueError):
            Asset.from_wire({"type": 9})

    def test_is_lp_of(self) -> None:
        assert BASE_LP.is_lp_of(BASE_POOL_ADDR)
        assert not TS_TON.is_lp_of(BASE_POOL_ADDR)


class TestAllocations:
    def test_create_rejects_duplicates(self) -> None:
        with pytest.raises(ValueError, match="Duplicate"):
            Allocation.create_allocations(
                [Allocation(asset=TON, value=1), Allocation(asset=TON, value=2)]
            )

    def test_normalize_orders_and_fills(self) -> None:
        allocations = normalize_allocations(
            [Allocation(asset=ST_TON, value=5), Allocation(asset=TON, value=3)],
            [TON, TS_TON, ST_TON],
        )
        assert allocations == [
            Allocation(asset=TON, value=3),
            Allocation(asset=TS_TON, value=0),
            Allocation(asset=ST_TON, value=5),
        ]

    def test_normalize_rejects_foreign_asset(self) -> None:
        with pytest.raises(ValueError, match="not in pool"):
            normalize_allocations([Allocation(asset=H_TON, value=1)], [TON, TS_TON])

    def test_amount_accepts_decimal_string(self) -> None:
        assert Allocation(asset=TON, value="123").value == 123

    def test_amount_is_arbitrary_precision(self) -> None:
        assert Allocation(asset=TON, value=2**127).value == 2**127
        assert Allocation(asset=TON, value=str(2**200)).value == 2**200

    def test_amount_rejects_negative(self) -> None:
        with pytest.raises(ValidationError):
            Allocation(asset=TON, value=-1)


class TestPool:
    def test_lp_asset_derived_from_address(self) -> None:
        pool = make_base_pool()
        assert pool.lp_asset == BASE_LP
        assert not pool.has_asset(BASE_LP)
        assert pool.assets_with_lp() == [TON, TS_TON, ST_TON, BASE_LP]

    def test_decimals_of(self) -> None:
        meta = make_meta_pool()
        assert meta.decimals_of(BASE_LP) == 18
        assert meta.decimals_of(H_TON) == 9
        assert meta.decimals_of(TON) is None

    def test_meta_requires_base_pool(self) -> None:
        with pytest.raises(ValidationError):
            Pool(address=META_POOL_ADDR, kind=PoolKind.META, assets=[BASE_LP, H_TON])

    def test_base_rejects_base_pool(self) -> None:
        base = make_base_pool()
        with pytest.raises(ValidationError):
            Pool(
                address=META_POOL_ADDR,
                kind=PoolKind.BASE,
                assets=[BASE_LP, H_TON],
                base_pool=PoolInfo(**base.model_dump(exclude={"base_pool"})),
            )

    def test_duplicate_assets_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Pool(address=BASE_POOL_ADDR, kind=PoolKind.BASE, assets=[TON, TON])

    def test_decimals_length_checked(self) -> None:
        with pytest.raises(ValidationError):
            Pool(
                address=BASE_POOL_ADDR,
                kind=PoolKind.BASE,
                assets=[TON, TS_TON],
                asset_decimals=[9],
            )
