"""
Core exchange algorithms
"""

from .curve import swap_out
from .engine import (
    plan_buy_primary,
    plan_buy_secondary,
    plan_sell_primary,
    plan_sell_secondary,
    plan_soft_sell_primary,
)
from .errors import (
    AllowanceError,
    AlreadyLaunchedError,
    ArithmeticUnderflowError,
    DeadlineElapsedError,
    ExchangeError,
    InsufficientBalanceError,
    InvariantViolationError,
    NotFundedError,
    NotLaunchedError,
    SelfTradeError,
    SlippageError,
    ZeroAmountError,
)
from .fees import apply_fee, fee_of, split_fee_remainder
from .rebalance import secondary_buy_subsidy, transfer_to_other
from .types import (
    Asset,
    Event,
    LaunchState,
    LedgerOp,
    Movement,
    Party,
    PoolState,
    TradeEvent,
    TradeKind,
    TradePlan,
    VolumeState,
)

__all__ = [
    "swap_out",
    "apply_fee",
    "fee_of",
    "split_fee_remainder",
    "transfer_to_other",
    "secondary_buy_subsidy",
    "plan_buy_primary",
    "plan_sell_primary",
    "plan_soft_sell_primary",
    "plan_buy_secondary",
    "plan_sell_secondary",
    "Asset",
    "Event",
    "LaunchState",
    "LedgerOp",
    "Movement",
    "Party",
    "PoolState",
    "TradeEvent",
    "TradeKind",
    "TradePlan",
    "VolumeState",
    "ExchangeError",
    "NotLaunchedError",
    "AlreadyLaunchedError",
    "NotFundedError",
    "ZeroAmountError",
    "DeadlineElapsedError",
    "InsufficientBalanceError",
    "AllowanceError",
    "SelfTradeError",
    "SlippageError",
    "ArithmeticUnderflowError",
    "InvariantViolationError",
]
