"""Protocol constants for the Torch SDK.

Centralizes default endpoints and on-chain numeric limits.
"""

# Default service endpoints
DEFAULT_API_ENDPOINT = "https://api.torch.finance"
DEFAULT_ORACLE_ENDPOINT = "https://oracle.torch.finance"

# Only offchain (indexer-backed) simulation is available
SIMULATE_MODE_OFFCHAIN = "offchain"

# Default HTTP timeout for indexer and oracle requests (seconds)
DEFAULT_REQUEST_TIMEOUT = 30.0

# Query ids are 64-bit unsigned
QUERY_ID_MAX = 2**64 - 1

# Digits after the decimal point in reported execution prices
EXECUTION_PRICE_PRECISION = 9

# Decimals assumed for LP assets (pool LP jettons are minted with 18 decimals)
LP_ASSET_DECIMALS = 18
