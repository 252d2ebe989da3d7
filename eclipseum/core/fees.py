"""
Transaction fee kernels (deterministic, integer-only).

A single fixed 0.3% fee is applied exactly once per output leg. Rounding always
favours the pool: the fee is the remainder after flooring the trader's share,
so any dust stays behind.
"""

from __future__ import annotations

from dataclasses import dataclass

from .math import FEE_DENOMINATOR, FEE_NUMERATOR, mul_div, require_uint


def apply_fee(amount: int) -> int:
    """
    Net amount after the 0.3% fee.

        apply_fee(amount) = floor(amount * 997 / 1000)
    """
    return mul_div(amount, FEE_NUMERATOR, FEE_DENOMINATOR)


def fee_of(amount: int) -> int:
    """Fee withheld from *amount* (``amount - apply_fee(amount)``)."""
    return amount - apply_fee(amount)


@dataclass(frozen=True)
class FeeSplit:
    to_other_pool: int
    retained: int

    def __post_init__(self) -> None:
        for name, v in (
            ("to_other_pool", self.to_other_pool),
            ("retained", self.retained),
        ):
            require_uint(v, name)


def split_fee_remainder(gross: int, net: int) -> FeeSplit:
    """
    Split the untaken fee of a trade in half between the two pools.

    ``floor((gross - net) / 2)`` is routed to the other pool; the odd unit, if
    any, is retained by the pool that served the trade.
    """
    require_uint(gross, "gross")
    require_uint(net, "net")
    if net > gross:
        raise ValueError(f"net ({net}) exceeds gross ({gross})")
    fee = gross - net
    to_other = fee // 2
    return FeeSplit(to_other_pool=to_other, retained=fee - to_other)
