"""Pool catalog package.

Provides PoolCatalog, the SDK-owned snapshot of pool metadata.
"""

from .catalog import PoolCatalog

__all__ = ["PoolCatalog"]
