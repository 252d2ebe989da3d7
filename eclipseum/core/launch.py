"""One-way launch gate.

States: not launched -> launched (terminal). Trading and pool views are only
available once the secondary pool has been funded and `launch()` succeeded.
"""

from __future__ import annotations

from .errors import AlreadyLaunchedError, NotFundedError, NotLaunchedError
from .types import LaunchState, PoolState


def launch(state: LaunchState, pool: PoolState) -> LaunchState:
    """Flip the gate. Requires a funded secondary pool; not repeatable."""
    if state.launched:
        raise AlreadyLaunchedError("exchange is already launched")
    if pool.secondary_token_of_secondary_pool <= 0:
        raise NotFundedError("secondary pool must hold stable asset before launch")
    return LaunchState(launched=True)


def require_launched(state: LaunchState) -> None:
    if not state.launched:
        raise NotLaunchedError("exchange must be launched to invoke this operation")
