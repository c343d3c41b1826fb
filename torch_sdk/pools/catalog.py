"""Pool catalog: an address-keyed snapshot of pool metadata.

The snapshot is never mutated in place. A refresh builds a new mapping from
the pool source and swaps it in with a single assignment, so a reader that
grabbed the previous snapshot keeps a consistent view while a refresh is in
flight. There is no TTL and no per-entry eviction.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import structlog

from torch_sdk.errors import PoolNotFound
from torch_sdk.models.types import normalize_address

if TYPE_CHECKING:
    from torch_sdk.interfaces import PoolSource
    from torch_sdk.models import Pool

logger = structlog.get_logger()


class PoolCatalog:
    """Lazily populated cache of pools, refreshed wholesale on a miss."""

    def __init__(self, source: PoolSource, pools: Iterable[Pool] | None = None) -> None:
        """Initialize the catalog.

        Args:
            source: Collaborator providing the full pool list on refresh
            pools: Optional initial snapshot. If None, starts empty and the
                   first lookup triggers a refresh.
        """
        self._source = source
        self._snapshot: dict[str, Pool] = self._build_snapshot(pools or [])
        self.refresh_count = 0

    @staticmethod
    def _build_snapshot(pools: Iterable[Pool]) -> dict[str, Pool]:
        return {pool.address: pool for pool in pools}

    @property
    def pools(self) -> list[Pool]:
        """All pools in the current snapshot."""
        return list(self._snapshot.values())

    def __len__(self) -> int:
        return len(self._snapshot)

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and normalize_address(address) in self._snapshot

    def get_cached(self, address: str) -> Pool | None:
        """Look up a pool in the current snapshot without refreshing."""
        return self._snapshot.get(normalize_address(address))

    async def refresh(self) -> None:
        """Replace the whole snapshot with the source's current pool list."""
        pools = await self._source.fetch_all_pools()
        snapshot = self._build_snapshot(pools)
        self._snapshot = snapshot
        self.refresh_count += 1
        logger.debug("catalog_refreshed", pool_count=len(snapshot))

    async def get_pools(self, addresses: Iterable[str]) -> list[Pool]:
        """Resolve addresses to pools, in the order given.

        If any address is missing from the snapshot, performs exactly one
        refresh and retries against the new snapshot.

        Args:
            addresses: Pool addresses (raw or user-friendly form)

        Returns:
            Pools in the same order as ``addresses``

        Raises:
            PoolNotFound: If an address is still missing after the refresh
        """
        wanted = [normalize_address(address) for address in addresses]
        snapshot = self._snapshot

        missing = [address for address in wanted if address not in snapshot]
        if missing:
            logger.debug("catalog_miss", missing=missing)
            await self.refresh()
            snapshot = self._snapshot

        pools: list[Pool] = []
        for address in wanted:
            pool = snapshot.get(address)
            if pool is None:
                raise PoolNotFound(address)
            pools.append(pool)
        return pools


__all__ = ["PoolCatalog"]
