"""Monotonic volatile-asset volume counters, one per pool."""

from __future__ import annotations

from dataclasses import replace

from .math import require_uint
from .types import VolumeState


def record_primary(state: VolumeState, amount: int) -> VolumeState:
    require_uint(amount, "amount")
    return replace(
        state,
        volatile_volume_of_primary_pool=state.volatile_volume_of_primary_pool + amount,
    )


def record_secondary(state: VolumeState, amount: int) -> VolumeState:
    require_uint(amount, "amount")
    return replace(
        state,
        volatile_volume_of_secondary_pool=state.volatile_volume_of_secondary_pool + amount,
    )
