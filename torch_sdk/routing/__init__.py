"""Route resolution and quote chaining.

Module structure:
- resolver.py: resolve_hops and hop classification for explicit routes
- quotes.py: QuoteChainer reconciling per-hop simulation results
"""

from torch_sdk.routing.quotes import QuoteChain, QuoteChainer
from torch_sdk.routing.resolver import classify_hop_action, find_connecting_asset, resolve_hops

__all__ = [
    "QuoteChain",
    "QuoteChainer",
    "classify_hop_action",
    "find_connecting_asset",
    "resolve_hops",
]
