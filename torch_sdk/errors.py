"""Error classes for the Torch SDK.

Every failure in the route/quote/compose pipeline is raised as a subclass of
TorchSDKError and aborts the whole call. None of these subclass ValueError,
so they surface unchanged when raised from inside pydantic validators.
"""

from __future__ import annotations


class TorchSDKError(Exception):
    """Base error for SDK operations."""

    pass


class PoolNotFound(TorchSDKError):
    """Requested pool is absent from the catalog even after a refresh."""

    def __init__(self, address: str) -> None:
        super().__init__(f"Pool not found: {address}")
        self.address = address


class NoRoutesFound(TorchSDKError):
    """Hop lookup returned no hops for the asset pair."""

    pass


class NoValidConnection(TorchSDKError):
    """Two consecutive pools in a route share no connecting asset."""

    pass


class UndeterminedAction(TorchSDKError):
    """A hop matches none of Swap, Deposit or Withdraw."""

    pass


class LengthMismatch(TorchSDKError):
    """Simulation result count differs from the hop or pool count."""

    pass


class InvalidSequence(TorchSDKError):
    """An ExactIn simulation result follows an ExactOut result."""

    pass


class ModeMismatch(TorchSDKError):
    """Simulation result mode disagrees with the intent mode."""

    pass


class MissingMetaAsset(TorchSDKError):
    """Next deposit pool has no asset besides this pool's LP asset."""

    pass


class MissingMetaAllocation(TorchSDKError):
    """Cross-pool deposit could not derive a meta allocation."""

    pass


class WrongMetaAsset(TorchSDKError):
    """Explicit next-deposit allocation names an asset other than the meta asset."""

    pass


class InvalidWithdrawTarget(TorchSDKError):
    """Withdraw hop targets a pool that is not a base pool."""

    pass


class ConflictingBounds(TorchSDKError):
    """Mutually exclusive intent fields were supplied together (or neither was)."""

    pass


class ZeroAmountIn(TorchSDKError):
    """Quoted input amount resolved to zero."""

    pass


class SimulationShapeError(TorchSDKError):
    """Deposit or withdraw simulation returned amounts of the wrong shape."""

    pass


class InvalidIntent(TorchSDKError):
    """Intent failed a field-level validation rule."""

    pass


class UnsupportedSimulateMode(TorchSDKError):
    """Only the offchain simulator is available."""

    pass


__all__ = [
    "TorchSDKError",
    "PoolNotFound",
    "NoRoutesFound",
    "NoValidConnection",
    "UndeterminedAction",
    "LengthMismatch",
    "InvalidSequence",
    "ModeMismatch",
    "MissingMetaAsset",
    "MissingMetaAllocation",
    "WrongMetaAsset",
    "InvalidWithdrawTarget",
    "ConflictingBounds",
    "ZeroAmountIn",
    "SimulationShapeError",
    "InvalidIntent",
    "UnsupportedSimulateMode",
]
