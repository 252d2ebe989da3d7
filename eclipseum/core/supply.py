"""
Per-trade quotes: outputs, ECL mint/burn quantities and cross-pool credits.

Each `quote_*` function is pure and evaluates against the PRE-trade
`PoolState`. Mint/burn rules tie ECL supply to the trade type:

- primary buy mints the buyer's output plus a 1/6 slice (+1) to the pool,
- primary sell burns the sold amount plus a 1/6 slice of the pool reserve,
- soft sell burns the sold amount plus a fee-reduced pro-rata pool slice,
- secondary trades never touch ECL supply.
"""

from __future__ import annotations

from dataclasses import dataclass

from .curve import swap_out
from .fees import apply_fee, split_fee_remainder
from .math import POOL_SLICE_DENOMINATOR, mul_div, require_uint
from .rebalance import secondary_buy_subsidy, transfer_to_other
from .types import PoolState


@dataclass(frozen=True)
class PrimaryBuyQuote:
    sent: int
    received: int
    pool_mint: int
    to_secondary_pool: int

    @property
    def total_minted(self) -> int:
        return self.received + self.pool_mint

    @property
    def to_primary_pool(self) -> int:
        return self.sent - self.to_secondary_pool


@dataclass(frozen=True)
class PrimarySellQuote:
    amount_sold: int
    gross: int
    paid: int
    pool_burn: int

    @property
    def total_burned(self) -> int:
        return self.amount_sold + self.pool_burn


@dataclass(frozen=True)
class SoftSellQuote:
    amount_sold: int
    eth_from_primary: int
    eth_from_secondary: int
    secondary_token_out: int
    pool_burn: int

    @property
    def volatile_out(self) -> int:
        return self.eth_from_primary + self.eth_from_secondary

    @property
    def total_burned(self) -> int:
        return self.amount_sold + self.pool_burn


@dataclass(frozen=True)
class SecondaryBuyQuote:
    sent: int
    received: int
    to_primary_pool: int


@dataclass(frozen=True)
class SecondarySellQuote:
    amount_sold: int
    gross: int
    paid: int
    to_primary_pool: int


def pool_slice(amount: int) -> int:
    """The pool reserve's share of a primary trade: ``floor(amount / 6)``."""
    return require_uint(amount, "amount") // POOL_SLICE_DENOMINATOR


def quote_buy_primary(pool: PoolState, sent: int) -> PrimaryBuyQuote:
    gross = swap_out(pool.eth_of_primary_pool, pool.primary_token_of_primary_pool, sent)
    received = apply_fee(gross)
    return PrimaryBuyQuote(
        sent=sent,
        received=received,
        pool_mint=pool_slice(received) + 1,
        to_secondary_pool=transfer_to_other(
            pool.eth_of_primary_pool, pool.eth_of_secondary_pool, sent,
        ),
    )


def quote_sell_primary(pool: PoolState, amount_sold: int) -> PrimarySellQuote:
    gross = swap_out(pool.primary_token_of_primary_pool, pool.eth_of_primary_pool, amount_sold)
    return PrimarySellQuote(
        amount_sold=amount_sold,
        gross=gross,
        paid=apply_fee(gross),
        pool_burn=pool_slice(amount_sold),
    )


def quote_soft_sell_primary(pool: PoolState, amount_sold: int) -> SoftSellQuote:
    """Pro-rata redemption against both pools at the current circulating supply."""
    require_uint(amount_sold, "amount_sold")
    circulating = pool.circulating_supply
    return SoftSellQuote(
        amount_sold=amount_sold,
        eth_from_primary=apply_fee(mul_div(amount_sold, pool.eth_of_primary_pool, circulating)),
        eth_from_secondary=apply_fee(mul_div(amount_sold, pool.eth_of_secondary_pool, circulating)),
        secondary_token_out=apply_fee(
            mul_div(amount_sold, pool.secondary_token_of_secondary_pool, circulating)
        ),
        pool_burn=apply_fee(mul_div(amount_sold, pool.primary_token_of_primary_pool, circulating)),
    )


def quote_buy_secondary(pool: PoolState, sent: int) -> SecondaryBuyQuote:
    gross = swap_out(pool.eth_of_secondary_pool, pool.secondary_token_of_secondary_pool, sent)
    return SecondaryBuyQuote(
        sent=sent,
        received=apply_fee(gross),
        to_primary_pool=secondary_buy_subsidy(sent),
    )


def quote_sell_secondary(pool: PoolState, amount_sold: int) -> SecondarySellQuote:
    gross = swap_out(pool.secondary_token_of_secondary_pool, pool.eth_of_secondary_pool, amount_sold)
    paid = apply_fee(gross)
    split = split_fee_remainder(gross, paid)
    return SecondarySellQuote(
        amount_sold=amount_sold,
        gross=gross,
        paid=paid,
        to_primary_pool=split.to_other_pool,
    )
