"""Pool metadata models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from torch_sdk.models.asset import Asset
from torch_sdk.models.types import Address


class PoolKind(str, Enum):
    """Base pools hold plain assets; meta pools hold a base pool's LP asset."""

    BASE = "Base"
    META = "Meta"


class PoolInfo(BaseModel):
    """Metadata shared by pools and the base-pool snapshots nested in meta pools.

    Attributes:
        address: Pool contract address
        kind: Base or Meta
        assets: Member assets in the pool's declared order
        asset_decimals: Decimals per member asset (parallel to ``assets``),
            empty when the source did not report them
        use_rates: Whether on-chain calls need a signed-rate payload
    """

    address: Address
    kind: PoolKind
    assets: list[Asset] = Field(min_length=1)
    asset_decimals: list[int | None] = Field(default_factory=list)
    use_rates: bool = False

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_assets(self) -> PoolInfo:
        if len(set(self.assets)) != len(self.assets):
            raise ValueError(f"Pool {self.address} lists the same asset twice")
        if self.asset_decimals and len(self.asset_decimals) != len(self.assets):
            raise ValueError(
                f"Pool {self.address}: {len(self.asset_decimals)} decimals for "
                f"{len(self.assets)} assets"
            )
        return self

    @property
    def lp_asset(self) -> Asset:
        """LP jetton minted by this pool (derived from the pool address)."""
        return Asset.jetton(self.address)

    def has_asset(self, asset: Asset) -> bool:
        """True if ``asset`` is a member asset (the LP asset is not a member)."""
        return asset in self.assets

    def assets_with_lp(self) -> list[Asset]:
        """Member assets in declared order, followed by the LP asset."""
        return [*self.assets, self.lp_asset]

    def decimals_of(self, asset: Asset) -> int | None:
        if asset not in self.assets or not self.asset_decimals:
            return None
        return self.asset_decimals[self.assets.index(asset)]


class Pool(PoolInfo):
    """A pool from the catalog.

    Invariant: a meta pool always carries its base pool; a base pool never does.
    """

    base_pool: PoolInfo | None = None

    @model_validator(mode="after")
    def check_base_pool(self) -> Pool:
        if self.kind == PoolKind.META and self.base_pool is None:
            raise ValueError(f"Meta pool {self.address} requires base_pool")
        if self.kind == PoolKind.BASE and self.base_pool is not None:
            raise ValueError(f"Base pool {self.address} cannot reference a base_pool")
        return self
