"""SDK configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from torch_sdk.constants import (
    DEFAULT_API_ENDPOINT,
    DEFAULT_ORACLE_ENDPOINT,
    DEFAULT_REQUEST_TIMEOUT,
    SIMULATE_MODE_OFFCHAIN,
)


@dataclass(frozen=True)
class SDKConfig:
    """Endpoints and transport settings supplied at construction time.

    Attributes:
        api_endpoint: Base URL of the indexer API (pools, hops, simulation)
        oracle_endpoint: Base URL of the signed-rate oracle
        simulate_mode: Simulation backend; only "offchain" is supported
        request_timeout: Per-request HTTP timeout in seconds
    """

    api_endpoint: str = DEFAULT_API_ENDPOINT
    oracle_endpoint: str = DEFAULT_ORACLE_ENDPOINT
    simulate_mode: str = SIMULATE_MODE_OFFCHAIN
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def from_env(cls) -> SDKConfig:
        """Build a config from TORCH_* environment variables, falling back to defaults."""
        return cls(
            api_endpoint=os.environ.get("TORCH_API_ENDPOINT", DEFAULT_API_ENDPOINT),
            oracle_endpoint=os.environ.get("TORCH_ORACLE_ENDPOINT", DEFAULT_ORACLE_ENDPOINT),
            simulate_mode=os.environ.get("TORCH_SIMULATE_MODE", SIMULATE_MODE_OFFCHAIN),
            request_timeout=float(
                os.environ.get("TORCH_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))
            ),
        )


# Default configuration instance
DEFAULT_SDK_CONFIG = SDKConfig()
