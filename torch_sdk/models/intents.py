"""Caller intents: swap, deposit and withdraw requests.

Intents are frozen pydantic models. Field-level problems (bad address,
negative amount, tolerance outside [0, 1]) surface as pydantic
ValidationError; cross-field rules are checked by the functions in
``torch_sdk.models.validation`` and raise typed TorchSDKError subclasses.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Self, TypeAlias

from pydantic import BaseModel, BeforeValidator, Field, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel

from torch_sdk.models.asset import Allocation, Asset
from torch_sdk.models.types import Address, Amount, BocHex, QueryId
from torch_sdk.models.validation import (
    check_bound_positive,
    check_bounds_exclusive,
    check_deposit_amounts,
    check_distinct_assets,
    check_next_pool,
    check_no_withdraw_asset,
    check_positive,
    check_single_withdraw_target,
    raise_first_error,
)
from torch_sdk.slippage import SlippageTolerance

SwapMode: TypeAlias = Literal["ExactIn", "ExactOut"]
WithdrawMode: TypeAlias = Literal["Single", "Balanced"]

_INTENT_CONFIG = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}


class _SwapIntentBase(BaseModel):
    """Fields shared by ExactIn and ExactOut swaps.

    ``routes`` is an ordered list of pool addresses from the first pool
    touched to the last; when absent the hop lookup service picks the route.
    """

    asset_in: Asset
    asset_out: Asset
    routes: list[Address] | None = None
    query_id: QueryId | None = None
    deadline: int | None = None
    slippage_tolerance: SlippageTolerance | None = None
    min_amount_out: Amount | None = None
    recipient: Address | None = None
    fulfill_payload: BocHex | None = None
    reject_payload: BocHex | None = None

    model_config = _INTENT_CONFIG

    def with_routes(self, routes: list[str]) -> Self:
        """Copy of this intent pinned to an explicit route."""
        return self.model_copy(update={"routes": list(routes)})


class ExactInIntent(_SwapIntentBase):
    mode: Literal["ExactIn"] = "ExactIn"
    amount_in: Amount

    @model_validator(mode="after")
    def check_intent(self) -> ExactInIntent:
        raise_first_error(
            check_distinct_assets(self.asset_in, self.asset_out),
            check_positive("Amount in", self.amount_in),
            check_bounds_exclusive(self.slippage_tolerance, self.min_amount_out),
            check_bound_positive(self.min_amount_out),
        )
        return self


class ExactOutIntent(_SwapIntentBase):
    mode: Literal["ExactOut"] = "ExactOut"
    amount_out: Amount

    @model_validator(mode="after")
    def check_intent(self) -> ExactOutIntent:
        raise_first_error(
            check_distinct_assets(self.asset_in, self.asset_out),
            check_positive("Amount out", self.amount_out),
            check_bounds_exclusive(self.slippage_tolerance, self.min_amount_out),
            check_bound_positive(self.min_amount_out),
        )
        return self

    def to_exact_in(self, amount_in: int) -> ExactInIntent:
        """The ExactIn intent that spends the quoted ``amount_in``.

        On-chain messages always carry an input amount, so ExactOut swaps are
        sent as ExactIn once the required input is known.
        """
        fields = self.model_dump(exclude={"mode", "amount_out"})
        return ExactInIntent(amount_in=amount_in, **fields)


SwapIntent: TypeAlias = Annotated[ExactInIntent | ExactOutIntent, Field(discriminator="mode")]

_swap_intent_adapter: TypeAdapter[ExactInIntent | ExactOutIntent] = TypeAdapter(SwapIntent)


def parse_swap_intent(data: Any) -> ExactInIntent | ExactOutIntent:
    """Validate a mapping into the ExactIn or ExactOut intent named by its ``mode``."""
    return _swap_intent_adapter.validate_python(data)


def _as_allocation_list(value: Any) -> Any:
    if isinstance(value, (Allocation, dict)):
        return [value]
    return value


class NextDeposit(BaseModel):
    """Second deposit into a meta pool using the LP minted by the first.

    ``deposit_amounts`` optionally names the meta asset allocation; when
    absent a zero allocation of the meta asset is derived.
    """

    pool: Address
    deposit_amounts: Allocation | None = None

    model_config = _INTENT_CONFIG


class DepositIntent(BaseModel):
    pool: Address
    deposit_amounts: Annotated[list[Allocation], BeforeValidator(_as_allocation_list)]
    next_deposit: NextDeposit | None = None
    slippage_tolerance: SlippageTolerance | None = None
    query_id: QueryId | None = None
    recipient: Address | None = None
    fulfill_payload: BocHex | None = None
    reject_payload: BocHex | None = None

    model_config = _INTENT_CONFIG

    @model_validator(mode="after")
    def check_intent(self) -> DepositIntent:
        Allocation.create_allocations(self.deposit_amounts)
        raise_first_error(
            check_deposit_amounts(self.deposit_amounts),
            check_next_pool(self.pool, self.next_deposit.pool if self.next_deposit else None),
        )
        return self

    @property
    def pool_addresses(self) -> list[str]:
        """Pools touched, in order."""
        if self.next_deposit is None:
            return [self.pool]
        return [self.pool, self.next_deposit.pool]


class NextWithdraw(BaseModel):
    """Withdraw from a base pool using the LP released by the first withdraw."""

    pool: Address
    mode: WithdrawMode
    withdraw_asset: Asset | None = None

    model_config = _INTENT_CONFIG

    @model_validator(mode="after")
    def check_intent(self) -> NextWithdraw:
        if self.mode == "Single":
            raise_first_error(check_single_withdraw_target(self.withdraw_asset, False))
        else:
            raise_first_error(check_no_withdraw_asset(self.mode, self.withdraw_asset))
        return self


class WithdrawIntent(BaseModel):
    """Burn LP from ``pool``.

    In Single mode exactly one of ``withdraw_asset`` and ``next_withdraw`` is
    set: either the asset to receive, or a follow-up withdraw whose LP asset
    is what this pool pays out.
    """

    pool: Address
    burn_lp_amount: Amount
    mode: WithdrawMode
    withdraw_asset: Asset | None = None
    next_withdraw: NextWithdraw | None = None
    slippage_tolerance: SlippageTolerance | None = None
    query_id: QueryId | None = None
    recipient: Address | None = None

    model_config = _INTENT_CONFIG

    @model_validator(mode="after")
    def check_intent(self) -> WithdrawIntent:
        if self.mode == "Single":
            target = check_single_withdraw_target(
                self.withdraw_asset, self.next_withdraw is not None
            )
        else:
            target = check_no_withdraw_asset(self.mode, self.withdraw_asset)
        raise_first_error(
            check_positive("Burn LP amount", self.burn_lp_amount),
            target,
            check_next_pool(self.pool, self.next_withdraw.pool if self.next_withdraw else None),
        )
        return self

    @property
    def pool_addresses(self) -> list[str]:
        if self.next_withdraw is None:
            return [self.pool]
        return [self.pool, self.next_withdraw.pool]
