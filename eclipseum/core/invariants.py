"""Invariant checkers for pool and volume state.

Each function returns True when the invariant holds, and `check_all()` returns
the list of violated invariant IDs (empty = all pass).
"""

from __future__ import annotations

from typing import Callable

from .types import PoolState, VolumeState


def inv_balances_nonneg(s: PoolState) -> bool:
    return min(
        s.eth_of_primary_pool,
        s.volatile_held,
        s.primary_token_of_primary_pool,
        s.secondary_token_of_secondary_pool,
        s.total_supply,
    ) >= 0


def inv_primary_eth_within_held(s: PoolState) -> bool:
    # Equivalent to eth_of_secondary_pool >= 0 under the derived representation.
    return s.eth_of_primary_pool <= s.volatile_held


def inv_supply_covers_pool(s: PoolState) -> bool:
    return s.total_supply >= s.primary_token_of_primary_pool


INVARIANT_REGISTRY: dict[str, Callable[[PoolState], bool]] = {
    "inv_balances_nonneg": inv_balances_nonneg,
    "inv_primary_eth_within_held": inv_primary_eth_within_held,
    "inv_supply_covers_pool": inv_supply_covers_pool,
}


def check_all(state: PoolState) -> list[str]:
    """Return list of violated invariant IDs (empty = all pass)."""
    return [
        inv_id
        for inv_id, check_fn in INVARIANT_REGISTRY.items()
        if not check_fn(state)
    ]


def check_volume_monotone(before: VolumeState, after: VolumeState) -> list[str]:
    violations = []
    if after.volatile_volume_of_primary_pool < before.volatile_volume_of_primary_pool:
        violations.append("inv_primary_volume_monotone")
    if after.volatile_volume_of_secondary_pool < before.volatile_volume_of_secondary_pool:
        violations.append("inv_secondary_volume_monotone")
    return violations
