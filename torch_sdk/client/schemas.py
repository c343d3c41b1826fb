"""Wire models for the Torch indexer and oracle.

The indexer nests each pool asset as ``{asset: {...}, decimals}`` and uses
numeric asset types. These models validate that shape and convert it to
the SDK's ``Pool`` and ``Hop`` models.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from torch_sdk.models import Asset, Hop, HopAction, Pool, PoolInfo, PoolKind
from torch_sdk.models.types import Address


class WireAsset(BaseModel):
    type: int
    jetton_master: str | None = Field(default=None, alias="jettonMaster")
    currency_id: int | None = Field(default=None, alias="currencyId")
    decimals: int | None = Field(default=None, ge=0)

    def to_asset(self) -> Asset:
        return Asset.from_wire(
            {"type": self.type, "jettonMaster": self.jetton_master, "currencyId": self.currency_id}
        )


class WirePoolAsset(BaseModel):
    asset: WireAsset
    decimals: int | None = Field(default=None, ge=0)

    @property
    def resolved_decimals(self) -> int | None:
        return self.decimals if self.decimals is not None else self.asset.decimals


class WireBasePool(BaseModel):
    type: Literal["Base", "Meta"]
    address: Address
    use_rates: bool = Field(default=False, alias="useRates")
    assets: list[WirePoolAsset]
    lp_asset: WirePoolAsset | None = Field(default=None, alias="lpAsset")

    def _fields(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "kind": PoolKind(self.type),
            "assets": [entry.asset.to_asset() for entry in self.assets],
            "asset_decimals": [entry.resolved_decimals for entry in self.assets],
            "use_rates": self.use_rates,
        }

    def to_pool_info(self) -> PoolInfo:
        return PoolInfo(**self._fields())


class WirePool(WireBasePool):
    """One entry of the ``pools`` GraphQL query."""

    base_pool: WireBasePool | None = Field(default=None, alias="basePool")

    def to_pool(self) -> Pool:
        base_pool = self.base_pool.to_pool_info() if self.base_pool is not None else None
        return Pool(**self._fields(), base_pool=base_pool)


class PoolsData(BaseModel):
    pools: list[WirePool]


class PoolsResponse(BaseModel):
    """GraphQL envelope ``{data: {pools: [...]}}``."""

    data: PoolsData


class WireHop(BaseModel):
    """One element of ``GET /hops``."""

    action: HopAction
    pool: WirePool
    asset_in: WireAsset = Field(alias="assetIn")
    asset_out: WireAsset = Field(alias="assetOut")

    def to_hop(self) -> Hop:
        return Hop(
            action=self.action,
            pool=self.pool.to_pool(),
            asset_in=self.asset_in.to_asset(),
            asset_out=self.asset_out.to_asset(),
        )


SYNC_POOLS_QUERY = """
query SDK_SYNC_POOLS {
  pools {
    type
    address
    useRates
    assets { asset { currencyId id jettonMaster type } decimals }
    basePool {
      address
      type
      useRates
      lpAsset { asset { currencyId id jettonMaster type } decimals }
      assets { asset { currencyId id jettonMaster type } decimals }
    }
    lpAsset { asset { currencyId id jettonMaster type } decimals }
  }
}
"""


__all__ = [
    "SYNC_POOLS_QUERY",
    "PoolsResponse",
    "WireAsset",
    "WireBasePool",
    "WireHop",
    "WirePool",
    "WirePoolAsset",
]
