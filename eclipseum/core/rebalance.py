"""Inter-pool rebalancing of incoming volatile-asset payments.

Both pools draw on one volatile-asset balance. These helpers decide how much of
a payment that enters through one pool is credited to the other, so the two
pools' volatile holdings converge over repeated trades.
"""

from __future__ import annotations

from .math import (
    BPS_SCALE,
    REBALANCE_CAP_DENOMINATOR,
    REBALANCE_CAP_NUMERATOR,
    SUBSIDY_BPS,
    mul_div,
    require_uint,
)


def rebalance_cap(sent: int) -> int:
    """Upper bound of `transfer_to_other`: ``floor(sent * 3 / 4)``."""
    return mul_div(sent, REBALANCE_CAP_NUMERATOR, REBALANCE_CAP_DENOMINATOR)


def transfer_to_other(primary_eth: int, secondary_eth: int, sent: int) -> int:
    """
    Share of a primary-pool payment credited to the secondary pool.

        if E >= floor(S/2) + D:  floor(S*3/4)
        elif E + S <= D:         0
        else:                    floor((E + S - D) / 2)

    The result is always within ``[0, floor(3S/4)]``.
    """
    e = require_uint(primary_eth, "primary_eth")
    d = require_uint(secondary_eth, "secondary_eth")
    s = require_uint(sent, "sent")

    if e >= s // 2 + d:
        return rebalance_cap(s)
    if e + s <= d:
        return 0
    return (e + s - d) // 2


def secondary_buy_subsidy(sent: int) -> int:
    """Share of a secondary-pool payment credited to the primary pool (15 bps)."""
    return mul_div(sent, SUBSIDY_BPS, BPS_SCALE)
