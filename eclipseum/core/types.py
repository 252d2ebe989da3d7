"""Data types for the exchange engine.

All types are frozen dataclasses (immutable). The Exchange owns one mutable
reference to each state record and replaces it wholesale on commit.

Units/conventions:
- every amount is a non-negative int in the smallest unit of its asset,
- "volatile" is the native asset both pools hold,
- "primary" is ECL, "secondary" is the external stable asset.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Tuple


@unique
class Asset(Enum):
    VOLATILE = "volatile"
    PRIMARY = "primary"
    SECONDARY = "secondary"


@unique
class Party(Enum):
    """Account roles a ledger operation refers to, bound to ids by the Exchange."""
    TRADER = "trader"
    POOL = "pool"


@unique
class Movement(Enum):
    RECEIVE = "receive"    # trader -> pool, trader-initiated transfer
    PULL = "pull"          # trader -> pool, pool-initiated transfer_from
    PAY = "pay"            # pool -> trader
    MINT = "mint"
    BURN = "burn"


@unique
class TradeKind(Enum):
    BUY_PRIMARY = "buy_primary"
    SELL_PRIMARY = "sell_primary"
    SOFT_SELL_PRIMARY = "soft_sell_primary"
    BUY_SECONDARY = "buy_secondary"
    SELL_SECONDARY = "sell_secondary"


@unique
class Event(Enum):
    """One member per trade operation."""
    BUY_PRIMARY = "LogBuyPrimary"
    SELL_PRIMARY = "LogSellPrimary"
    SOFT_SELL_PRIMARY = "LogSoftSellPrimary"
    BUY_SECONDARY = "LogBuySecondary"
    SELL_SECONDARY = "LogSellSecondary"


@dataclass(frozen=True)
class PoolState:
    """Snapshot of both pools and the ECL supply.

    Only `eth_of_primary_pool` is stored by the Exchange; every other field is
    read from the ledgers. The secondary pool's volatile balance is derived,
    never stored, so the two pools always sum to `volatile_held`.
    """

    eth_of_primary_pool: int = 0
    volatile_held: int = 0
    primary_token_of_primary_pool: int = 0
    secondary_token_of_secondary_pool: int = 0
    total_supply: int = 0

    @property
    def eth_of_secondary_pool(self) -> int:
        return self.volatile_held - self.eth_of_primary_pool

    @property
    def circulating_supply(self) -> int:
        return self.total_supply - self.primary_token_of_primary_pool


@dataclass(frozen=True)
class VolumeState:
    """Cumulative volatile-asset flow per pool (informational only)."""

    volatile_volume_of_primary_pool: int = 0
    volatile_volume_of_secondary_pool: int = 0


@dataclass(frozen=True)
class LaunchState:
    launched: bool = False


@dataclass(frozen=True)
class LedgerOp:
    """One transfer, mint or burn the Exchange must issue for a trade."""

    movement: Movement
    asset: Asset
    party: Party
    amount: int


@dataclass(frozen=True)
class TradeEvent:
    """Informational record emitted after a successful trade."""

    event: Event
    trader: str
    volatile_amount: int = 0
    primary_amount: int = 0
    secondary_amount: int = 0

    def args(self) -> Tuple[object, ...]:
        """Positional event arguments, trader first."""
        if self.event is Event.BUY_PRIMARY:
            return (self.trader, self.primary_amount)
        if self.event is Event.BUY_SECONDARY:
            return (self.trader, self.secondary_amount)
        if self.event is Event.SOFT_SELL_PRIMARY:
            return (self.trader, self.volatile_amount, self.secondary_amount)
        return (self.trader, self.volatile_amount)


@dataclass(frozen=True)
class TradePlan:
    """Everything a trade will change, computed from the pre-state."""

    kind: TradeKind
    pool: PoolState
    volume: VolumeState
    ops: Tuple[LedgerOp, ...]
    event: TradeEvent
