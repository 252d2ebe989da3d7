"""Serialization of the Exchange's own state.

Only state the Exchange stores itself is captured: the primary pool's volatile
balance, the volume counters and the launch flag. Balances held by ledgers are
snapshotted by the ledgers.

Round-trip property (tested): `state_from_dict(state_to_dict(s)) == s`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..core.types import LaunchState, VolumeState
from .canonical import digest_fields


@dataclass(frozen=True)
class EngineSnapshot:
    eth_of_primary_pool: int = 0
    volatile_volume_of_primary_pool: int = 0
    volatile_volume_of_secondary_pool: int = 0
    launched: bool = False

    @property
    def volume(self) -> VolumeState:
        return VolumeState(
            volatile_volume_of_primary_pool=self.volatile_volume_of_primary_pool,
            volatile_volume_of_secondary_pool=self.volatile_volume_of_secondary_pool,
        )

    @property
    def launch(self) -> LaunchState:
        return LaunchState(launched=self.launched)


# Auto-derived from EngineSnapshot field definitions (single source of truth).
STATE_VAR_NAMES: tuple[str, ...] = tuple(EngineSnapshot.__dataclass_fields__)


def make_snapshot(eth_of_primary_pool: int, volume: VolumeState, launch: LaunchState) -> EngineSnapshot:
    return EngineSnapshot(
        eth_of_primary_pool=eth_of_primary_pool,
        volatile_volume_of_primary_pool=volume.volatile_volume_of_primary_pool,
        volatile_volume_of_secondary_pool=volume.volatile_volume_of_secondary_pool,
        launched=launch.launched,
    )


def state_to_dict(snapshot: EngineSnapshot) -> dict[str, bool | int]:
    return {name: getattr(snapshot, name) for name in STATE_VAR_NAMES}


def state_from_dict(d: Mapping[str, Any]) -> EngineSnapshot:
    """Deserialize a dict to an EngineSnapshot. Raises KeyError on missing fields."""
    kwargs: dict[str, Any] = {}
    for name in STATE_VAR_NAMES:
        val = d[name]
        if name == "launched":
            if not isinstance(val, bool):
                raise TypeError(f"state var {name!r} must be bool, got {type(val).__name__}")
            kwargs[name] = val
        elif isinstance(val, int) and not isinstance(val, bool):
            if val < 0:
                raise ValueError(f"state var {name!r} must be non-negative: {val}")
            kwargs[name] = int(val)
        else:
            raise TypeError(f"state var {name!r} must be int, got {type(val).__name__}")
    return EngineSnapshot(**kwargs)


def state_digest(snapshot: EngineSnapshot) -> str:
    return digest_fields("engine_snapshot", state_to_dict(snapshot))
