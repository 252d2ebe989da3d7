"""
Constant-product output formula for a single pool leg.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Rounding
- Time Complexity: O(1)
- Rounding: floor division plus an unconditional extra unit withheld, so the
  pool never pays out the last unit of a rounding tie.
"""

from __future__ import annotations

from .errors import ArithmeticUnderflowError
from .math import floor_div, require_uint


def swap_out(in_balance: int, out_balance: int, in_amount: int) -> int:
    """
    Amount of the output asset bought by selling `in_amount` into the pool,
    before the transaction fee.

    This implements:
        k = in_balance * out_balance
        out = out_balance - floor(k / (in_balance + in_amount)) - 1

    Args:
        in_balance: Pool balance of the asset being sold (must be positive)
        out_balance: Pool balance of the asset being bought
        in_amount: Amount sold into the pool

    Returns:
        Gross output amount, strictly less than `out_balance`

    Raises:
        ValueError: If inputs are outside the curve's domain
        ArithmeticUnderflowError: If the output would be negative
    """
    require_uint(in_balance, "in_balance")
    require_uint(out_balance, "out_balance")
    require_uint(in_amount, "in_amount")
    if in_balance == 0:
        raise ValueError("in_balance must be positive")

    remaining = floor_div(in_balance * out_balance, in_balance + in_amount)
    out = out_balance - remaining - 1
    if out < 0:
        raise ArithmeticUnderflowError(
            f"curve output underflow: out_balance={out_balance} remaining={remaining}"
        )
    return out
