"""HTTP implementation of the SDK's external collaborators."""

from torch_sdk.client.api import TorchAPI

__all__ = ["TorchAPI"]
