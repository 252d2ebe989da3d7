"""Integer helpers shared by every pricing formula.

Every function is stateless and operates on plain Python ints. Operands are
non-negative throughout the engine, so `//` is floor division and also
truncation toward zero; remainders are always retained by the pool.
"""

from __future__ import annotations

# Fixed 0.3% transaction fee, expressed as the retained fraction 997/1000.
FEE_NUMERATOR: int = 997
FEE_DENOMINATOR: int = 1000

# Cross-pool subsidy credited to the primary pool on a secondary buy (15 bps).
SUBSIDY_BPS: int = 15
BPS_SCALE: int = 10_000

# Extra ECL minted to / burned from the pool reserve per unit traded (1/6).
POOL_SLICE_DENOMINATOR: int = 6

# Rebalancer cap: at most 3/4 of an incoming payment moves to the other pool.
REBALANCE_CAP_NUMERATOR: int = 3
REBALANCE_CAP_DENOMINATOR: int = 4


def require_uint(value: int, name: str) -> int:
    """Return *value* if it is a non-negative int (bools rejected)."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")
    return value


def floor_div(numerator: int, denominator: int) -> int:
    """``floor(numerator / denominator)`` for non-negative operands."""
    require_uint(numerator, "numerator")
    require_uint(denominator, "denominator")
    if denominator == 0:
        raise ValueError("division by zero")
    return numerator // denominator


def mul_div(a: int, b: int, denominator: int) -> int:
    """``floor(a * b / denominator)`` computed without intermediate rounding."""
    require_uint(a, "a")
    require_uint(b, "b")
    return floor_div(a * b, denominator)
