"""Explicit intent validation rules.

Each check returns a ValidationResult instead of raising, so rules can be
evaluated and reported individually. Intent models call ``raise_for_error``
on every result from their model validators.

Examples:
    result = check_bounds_exclusive(Decimal("0.01"), 500)
    assert not result.is_valid
    assert result.error is ConflictingBounds
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from torch_sdk.errors import ConflictingBounds, InvalidIntent, TorchSDKError

if TYPE_CHECKING:
    from torch_sdk.models.asset import Allocation, Asset


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a single validation rule.

    Attributes:
        error: Error class to raise when the rule failed, None on success
        detail: Human-readable reason for the failure
    """

    error: type[TorchSDKError] | None = None
    detail: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls()

    @classmethod
    def fail(cls, error: type[TorchSDKError], detail: str) -> ValidationResult:
        return cls(error=error, detail=detail)

    def raise_for_error(self) -> None:
        """Raise the recorded error, if any."""
        if self.error is not None:
            raise self.error(self.detail or self.error.__name__)


def check_distinct_assets(asset_in: Asset, asset_out: Asset) -> ValidationResult:
    if asset_in == asset_out:
        return ValidationResult.fail(InvalidIntent, "Asset in and out must be different")
    return ValidationResult.ok()


def check_positive(name: str, amount: int) -> ValidationResult:
    if amount <= 0:
        return ValidationResult.fail(InvalidIntent, f"{name} must be greater than 0")
    return ValidationResult.ok()


def check_bounds_exclusive(
    slippage_tolerance: Decimal | None, min_amount_out: int | None
) -> ValidationResult:
    """A relative (slippage) and an absolute (explicit floor) bound cannot be combined."""
    if slippage_tolerance is not None and min_amount_out is not None:
        return ValidationResult.fail(
            ConflictingBounds, "slippage_tolerance and min_amount_out are mutually exclusive"
        )
    return ValidationResult.ok()


def check_bound_positive(min_amount_out: int | None) -> ValidationResult:
    """An explicit output floor of 0 is not a bound; leave it unset instead."""
    if min_amount_out is not None and min_amount_out <= 0:
        return ValidationResult.fail(InvalidIntent, "min_amount_out must be greater than 0")
    return ValidationResult.ok()


def check_single_withdraw_target(
    withdraw_asset: Asset | None, has_next_withdraw: bool
) -> ValidationResult:
    """Single-mode withdraw needs exactly one of withdraw_asset and next_withdraw."""
    if withdraw_asset is not None and has_next_withdraw:
        return ValidationResult.fail(
            ConflictingBounds,
            "Single withdraw cannot set both withdraw_asset and next_withdraw",
        )
    if withdraw_asset is None and not has_next_withdraw:
        return ValidationResult.fail(
            ConflictingBounds,
            "Single withdraw requires either withdraw_asset or next_withdraw",
        )
    return ValidationResult.ok()


def check_no_withdraw_asset(mode: str, withdraw_asset: Asset | None) -> ValidationResult:
    if withdraw_asset is not None:
        return ValidationResult.fail(
            InvalidIntent, f"{mode} withdraw does not take a withdraw_asset"
        )
    return ValidationResult.ok()


def check_next_pool(pool: str, next_pool: str | None) -> ValidationResult:
    if next_pool is not None and next_pool == pool:
        return ValidationResult.fail(InvalidIntent, f"Next pool must differ from pool {pool}")
    return ValidationResult.ok()


def check_deposit_amounts(allocations: list[Allocation]) -> ValidationResult:
    if not allocations:
        return ValidationResult.fail(InvalidIntent, "Deposit requires at least one allocation")
    if all(allocation.value == 0 for allocation in allocations):
        return ValidationResult.fail(InvalidIntent, "Deposit amounts are all zero")
    return ValidationResult.ok()


def raise_first_error(*results: ValidationResult) -> None:
    """Raise the first failed result, in the order given."""
    for result in results:
        result.raise_for_error()
