"""Asset and allocation value objects."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Any

from pydantic import BaseModel, model_validator
from pydantic.alias_generators import to_camel

from torch_sdk.models.types import Address, Amount


class AssetKind(str, Enum):
    """What kind of fungible unit an asset is."""

    NATIVE = "native"
    JETTON = "jetton"
    EXTRA_CURRENCY = "extra_currency"


# Numeric asset types used by the indexer wire format
_WIRE_KINDS = {
    0: AssetKind.NATIVE,
    1: AssetKind.JETTON,
    2: AssetKind.EXTRA_CURRENCY,
}


class Asset(BaseModel):
    """A fungible unit: the native coin, a jetton, or an extra currency.

    Assets are frozen; equality and hashing are by identity fields, so two
    separately constructed assets for the same jetton master compare equal.
    """

    kind: AssetKind
    jetton_master: Address | None = None
    currency_id: int | None = None

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}

    @model_validator(mode="after")
    def check_identity(self) -> Asset:
        if self.kind == AssetKind.JETTON and self.jetton_master is None:
            raise ValueError("Jetton asset requires jetton_master")
        if self.kind == AssetKind.EXTRA_CURRENCY and self.currency_id is None:
            raise ValueError("Extra currency asset requires currency_id")
        if self.kind != AssetKind.JETTON and self.jetton_master is not None:
            raise ValueError(f"{self.kind.value} asset cannot carry jetton_master")
        if self.kind != AssetKind.EXTRA_CURRENCY and self.currency_id is not None:
            raise ValueError(f"{self.kind.value} asset cannot carry currency_id")
        return self

    @classmethod
    def ton(cls) -> Asset:
        return cls(kind=AssetKind.NATIVE)

    @classmethod
    def jetton(cls, master: str) -> Asset:
        return cls(kind=AssetKind.JETTON, jetton_master=master)

    @classmethod
    def extra_currency(cls, currency_id: int) -> Asset:
        return cls(kind=AssetKind.EXTRA_CURRENCY, currency_id=currency_id)

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> Asset:
        """Build an asset from the indexer form ``{type, jettonMaster, currencyId}``."""
        kind = _WIRE_KINDS.get(data.get("type"))  # type: ignore[arg-type]
        if kind is None:
            raise ValueError(f"Unknown asset type: {data.get('type')}")
        return cls(
            kind=kind,
            jetton_master=data.get("jettonMaster") if kind == AssetKind.JETTON else None,
            currency_id=data.get("currencyId") if kind == AssetKind.EXTRA_CURRENCY else None,
        )

    def to_wire(self) -> dict[str, Any]:
        """Inverse of from_wire."""
        wire_type = next(k for k, v in _WIRE_KINDS.items() if v == self.kind)
        return {
            "type": wire_type,
            "jettonMaster": self.jetton_master,
            "currencyId": self.currency_id,
        }

    @property
    def id(self) -> str:
        """Stable string identity (``TON``, ``jetton:<addr>``, ``ec:<id>``)."""
        if self.kind == AssetKind.NATIVE:
            return "TON"
        if self.kind == AssetKind.JETTON:
            return f"jetton:{self.jetton_master}"
        return f"ec:{self.currency_id}"

    def is_lp_of(self, pool_address: str) -> bool:
        """True if this asset is the LP jetton minted by the given pool."""
        return self.kind == AssetKind.JETTON and self.jetton_master == pool_address

    def __str__(self) -> str:
        return self.id


class Allocation(BaseModel):
    """An (asset, amount) pair."""

    asset: Asset
    value: Amount

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}

    @classmethod
    def create_allocations(cls, items: Allocation | Iterable[Allocation]) -> list[Allocation]:
        """Build an allocation list, rejecting duplicate assets.

        Args:
            items: A single allocation or an iterable of allocations

        Returns:
            List of allocations in the given order

        Raises:
            ValueError: If the same asset appears twice
        """
        allocations = [items] if isinstance(items, Allocation) else list(items)
        seen: set[Asset] = set()
        for allocation in allocations:
            if allocation.asset in seen:
                raise ValueError(f"Duplicate asset in allocations: {allocation.asset.id}")
            seen.add(allocation.asset)
        return allocations


def normalize_allocations(allocations: Iterable[Allocation], assets: list[Asset]) -> list[Allocation]:
    """Expand allocations to one entry per pool asset, in pool asset order.

    Assets without an allocation get value 0.

    Raises:
        ValueError: If an allocation names an asset outside ``assets``
    """
    by_asset = {a.asset: a.value for a in Allocation.create_allocations(allocations)}
    unknown = [asset.id for asset in by_asset if asset not in assets]
    if unknown:
        raise ValueError(f"Allocation assets not in pool: {', '.join(unknown)}")
    return [Allocation(asset=asset, value=by_asset.get(asset, 0)) for asset in assets]

