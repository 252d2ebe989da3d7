"""Exception taxonomy for the exchange engine.

Every error is fatal to the single operation in progress. Guards raise before
any state mutation, so a caller that catches one of these can resubmit with
corrected parameters against unchanged state.
"""

from __future__ import annotations


class ExchangeError(Exception):
    """Base class for all exchange rejections."""


class NotLaunchedError(ExchangeError):
    """Raised by trades and pool views before `launch()` has succeeded."""


class AlreadyLaunchedError(ExchangeError):
    """Raised when `launch()` is called on an exchange that is already launched."""


class NotFundedError(ExchangeError):
    """Raised by `launch()` while the secondary pool holds no stable asset."""


class ZeroAmountError(ExchangeError):
    """Raised when the principal amount of a trade is zero."""


class DeadlineElapsedError(ExchangeError):
    """Raised when the current time is past the caller-supplied deadline."""


class InsufficientBalanceError(ExchangeError):
    """Raised when an account does not hold the amount it tries to spend."""


class AllowanceError(ExchangeError):
    """Raised when a delegated transfer exceeds the owner's approval."""


class SlippageError(ExchangeError):
    """Raised when a computed output is below the caller's minimum."""


class ArithmeticUnderflowError(ExchangeError):
    """Raised when a curve output would be negative."""


class InvariantViolationError(ExchangeError):
    """Raised when a post-state violates one or more invariants."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")


class SelfTradeError(ExchangeError):
    """Raised when the exchange's own account is named as the trader."""
