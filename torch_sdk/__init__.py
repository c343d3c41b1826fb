"""Torch SDK - route, quote and build Torch DEX operations."""

__version__ = "0.1.0"

from torch_sdk.config import SDKConfig  # noqa: E402
from torch_sdk.sdk import TorchSDK  # noqa: E402

__all__ = ["SDKConfig", "TorchSDK", "__version__"]
