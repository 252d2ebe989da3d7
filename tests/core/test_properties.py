"""Property tests for the pricing kernels and the buy/sell round trip."""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import assume, given, settings

from eclipseum.core.curve import swap_out
from eclipseum.core.engine import plan_buy_primary, plan_sell_primary
from eclipseum.core.fees import apply_fee, split_fee_remainder
from eclipseum.core.rebalance import rebalance_cap, transfer_to_other
from eclipseum.core.types import LaunchState, PoolState, VolumeState

E18 = 10**18

balances = st.integers(min_value=1, max_value=10**30)
amounts = st.integers(min_value=1, max_value=10**30)
uints = st.integers(min_value=0, max_value=10**30)


@settings(max_examples=300, deadline=None)
@given(in_balance=balances, out_balance=balances, a=amounts, b=amounts)
def test_swap_out_monotone_and_bounded(in_balance: int, out_balance: int, a: int, b: int) -> None:
    lo, hi = min(a, b), max(a, b)
    out_lo = swap_out(in_balance, out_balance, lo)
    out_hi = swap_out(in_balance, out_balance, hi)
    assert 0 <= out_lo <= out_hi < out_balance


@settings(max_examples=300, deadline=None)
@given(x=uints)
def test_apply_fee_never_increases(x: int) -> None:
    net = apply_fee(x)
    assert 0 <= net <= x
    split = split_fee_remainder(x, net)
    assert split.to_other_pool + split.retained == x - net


@settings(max_examples=300, deadline=None)
@given(e=uints, d=uints, s=uints)
def test_transfer_to_other_within_cap(e: int, d: int, s: int) -> None:
    moved = transfer_to_other(e, d, s)
    assert 0 <= moved <= rebalance_cap(s)


@settings(max_examples=200, deadline=None)
@given(
    eth_primary=st.integers(min_value=10**12, max_value=10**24),
    eth_secondary=st.integers(min_value=0, max_value=10**24),
    ecl_pool=st.integers(min_value=10**18, max_value=10**27),
    circulating=st.integers(min_value=0, max_value=10**27),
    sent=st.integers(min_value=1, max_value=10**24),
)
def test_no_profitable_buy_sell_cycle(
    eth_primary: int, eth_secondary: int, ecl_pool: int, circulating: int, sent: int,
) -> None:
    pool = PoolState(
        eth_of_primary_pool=eth_primary,
        volatile_held=eth_primary + eth_secondary,
        primary_token_of_primary_pool=ecl_pool,
        secondary_token_of_secondary_pool=E18,
        total_supply=ecl_pool + circulating,
    )
    launched = LaunchState(launched=True)
    buy = plan_buy_primary(
        launch=launched, pool=pool, volume=VolumeState(), trader="t",
        sent=sent, min_out=0, now=0, deadline=0, trader_volatile=sent,
    )
    received = buy.event.primary_amount
    assume(received > 0)

    sell = plan_sell_primary(
        launch=launched, pool=buy.pool, volume=buy.volume, trader="t",
        amount_sold=received, min_out=0, now=0, deadline=0, trader_primary=received,
    )
    assert sell.event.volatile_amount <= sent
    assert sell.pool.volatile_held >= pool.volatile_held
