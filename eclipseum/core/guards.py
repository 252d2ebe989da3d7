"""Precondition checks shared by every trade entry point.

One function per check; each raises the matching `ExchangeError` subclass and
returns None when the check passes. Callers run them in a fixed order, all
before any state is mutated:

    counterparty -> launched -> positive amount -> deadline -> balance -> allowance
    -> (amount computation) -> minimum outputs
"""

from __future__ import annotations

from .errors import (
    AllowanceError,
    DeadlineElapsedError,
    InsufficientBalanceError,
    SelfTradeError,
    SlippageError,
    ZeroAmountError,
)
from .types import Asset


def require_positive_amount(amount: int, asset: Asset) -> None:
    if amount <= 0:
        raise ZeroAmountError(f"amount of {asset.value} must be greater than zero")


def require_deadline(now: int, deadline: int) -> None:
    if now > deadline:
        raise DeadlineElapsedError(f"transaction deadline has elapsed: now={now} deadline={deadline}")


def require_balance(balance: int, amount: int, asset: Asset) -> None:
    if amount > balance:
        raise InsufficientBalanceError(
            f"{asset.value} spent ({amount}) exceeds balance ({balance})"
        )


def require_allowance(allowance: int, amount: int, asset: Asset) -> None:
    if amount > allowance:
        raise AllowanceError(
            f"{asset.value} transfer ({amount}) exceeds approved allowance ({allowance})"
        )


def require_min_out(actual: int, minimum: int, asset: Asset) -> None:
    if actual < minimum:
        raise SlippageError(
            f"unable to deliver minimum {asset.value} output: {actual} < {minimum}"
        )


def require_trade_inputs(*, amount: int, asset: Asset, now: int, deadline: int) -> None:
    """Amount and deadline checks common to all five trades."""
    require_positive_amount(amount, asset)
    require_deadline(now, deadline)


def require_counterparty(trader: str, pool_account: str) -> None:
    """The pools cannot trade with themselves; their balances are the pool state."""
    if trader == pool_account:
        raise SelfTradeError(f"trader must not be the exchange account: {pool_account}")
