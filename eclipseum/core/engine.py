"""Trade planner: the functional core behind the Exchange.

``plan_*(...)`` evaluates one trade against the pre-state and returns a
``TradePlan`` holding the post-state, the ledger operations to issue and the
event to emit. Nothing is mutated here; the Exchange applies a plan only after
it has been fully computed, so a rejected trade leaves every balance untouched.

Each planner:

1. Runs the launch gate and transaction guards (raising on failure).
2. Quotes the trade (`supply.quote_*`).
3. Checks minimum outputs.
4. Derives the post-state and checks its invariants.
"""

from __future__ import annotations

from dataclasses import replace

from .errors import InvariantViolationError
from .guards import (
    require_allowance,
    require_balance,
    require_min_out,
    require_trade_inputs,
)
from .invariants import check_all, check_volume_monotone
from .launch import require_launched
from .supply import (
    quote_buy_primary,
    quote_buy_secondary,
    quote_sell_primary,
    quote_sell_secondary,
    quote_soft_sell_primary,
)
from .types import (
    Asset,
    Event,
    LaunchState,
    LedgerOp,
    Movement,
    Party,
    PoolState,
    TradeEvent,
    TradeKind,
    TradePlan,
    VolumeState,
)
from .volume import record_primary, record_secondary


def _ops(*ops: LedgerOp) -> tuple[LedgerOp, ...]:
    # Zero-amount legs (e.g. a pool burn that floors to 0) are dropped.
    return tuple(op for op in ops if op.amount > 0)


def _finish(
    kind: TradeKind,
    pool: PoolState,
    volume_before: VolumeState,
    volume: VolumeState,
    ops: tuple[LedgerOp, ...],
    event: TradeEvent,
) -> TradePlan:
    violations = check_all(pool) + check_volume_monotone(volume_before, volume)
    if violations:
        raise InvariantViolationError(violations)
    return TradePlan(kind=kind, pool=pool, volume=volume, ops=ops, event=event)


def plan_buy_primary(
    *,
    launch: LaunchState,
    pool: PoolState,
    volume: VolumeState,
    trader: str,
    sent: int,
    min_out: int,
    now: int,
    deadline: int,
    trader_volatile: int,
) -> TradePlan:
    require_launched(launch)
    require_trade_inputs(amount=sent, asset=Asset.VOLATILE, now=now, deadline=deadline)
    require_balance(trader_volatile, sent, Asset.VOLATILE)

    q = quote_buy_primary(pool, sent)
    require_min_out(q.received, min_out, Asset.PRIMARY)

    new_pool = replace(
        pool,
        eth_of_primary_pool=pool.eth_of_primary_pool + q.to_primary_pool,
        volatile_held=pool.volatile_held + sent,
        primary_token_of_primary_pool=pool.primary_token_of_primary_pool + q.pool_mint,
        total_supply=pool.total_supply + q.total_minted,
    )
    ops = _ops(
        LedgerOp(Movement.RECEIVE, Asset.VOLATILE, Party.TRADER, sent),
        LedgerOp(Movement.MINT, Asset.PRIMARY, Party.TRADER, q.received),
        LedgerOp(Movement.MINT, Asset.PRIMARY, Party.POOL, q.pool_mint),
    )
    event = TradeEvent(Event.BUY_PRIMARY, trader, primary_amount=q.received)
    return _finish(
        TradeKind.BUY_PRIMARY, new_pool, volume, record_primary(volume, sent), ops, event,
    )


def plan_sell_primary(
    *,
    launch: LaunchState,
    pool: PoolState,
    volume: VolumeState,
    trader: str,
    amount_sold: int,
    min_out: int,
    now: int,
    deadline: int,
    trader_primary: int,
) -> TradePlan:
    require_launched(launch)
    require_trade_inputs(amount=amount_sold, asset=Asset.PRIMARY, now=now, deadline=deadline)
    require_balance(trader_primary, amount_sold, Asset.PRIMARY)

    q = quote_sell_primary(pool, amount_sold)
    require_min_out(q.paid, min_out, Asset.VOLATILE)

    # The untaken fee (gross - paid) stays in the primary pool's accounted balance.
    new_pool = replace(
        pool,
        eth_of_primary_pool=pool.eth_of_primary_pool - q.paid,
        volatile_held=pool.volatile_held - q.paid,
        primary_token_of_primary_pool=pool.primary_token_of_primary_pool - q.pool_burn,
        total_supply=pool.total_supply - q.total_burned,
    )
    ops = _ops(
        LedgerOp(Movement.BURN, Asset.PRIMARY, Party.TRADER, amount_sold),
        LedgerOp(Movement.BURN, Asset.PRIMARY, Party.POOL, q.pool_burn),
        LedgerOp(Movement.PAY, Asset.VOLATILE, Party.TRADER, q.paid),
    )
    event = TradeEvent(Event.SELL_PRIMARY, trader, volatile_amount=q.paid)
    return _finish(
        TradeKind.SELL_PRIMARY, new_pool, volume, record_primary(volume, q.paid), ops, event,
    )


def plan_soft_sell_primary(
    *,
    launch: LaunchState,
    pool: PoolState,
    volume: VolumeState,
    trader: str,
    amount_sold: int,
    min_volatile_out: int,
    min_secondary_out: int,
    now: int,
    deadline: int,
    trader_primary: int,
) -> TradePlan:
    require_launched(launch)
    require_trade_inputs(amount=amount_sold, asset=Asset.PRIMARY, now=now, deadline=deadline)
    require_balance(trader_primary, amount_sold, Asset.PRIMARY)

    q = quote_soft_sell_primary(pool, amount_sold)
    require_min_out(q.volatile_out, min_volatile_out, Asset.VOLATILE)
    require_min_out(q.secondary_token_out, min_secondary_out, Asset.SECONDARY)

    new_pool = replace(
        pool,
        eth_of_primary_pool=pool.eth_of_primary_pool - q.eth_from_primary,
        volatile_held=pool.volatile_held - q.volatile_out,
        primary_token_of_primary_pool=pool.primary_token_of_primary_pool - q.pool_burn,
        secondary_token_of_secondary_pool=pool.secondary_token_of_secondary_pool - q.secondary_token_out,
        total_supply=pool.total_supply - q.total_burned,
    )
    ops = _ops(
        LedgerOp(Movement.BURN, Asset.PRIMARY, Party.TRADER, amount_sold),
        LedgerOp(Movement.BURN, Asset.PRIMARY, Party.POOL, q.pool_burn),
        LedgerOp(Movement.PAY, Asset.VOLATILE, Party.TRADER, q.volatile_out),
        LedgerOp(Movement.PAY, Asset.SECONDARY, Party.TRADER, q.secondary_token_out),
    )
    new_volume = record_secondary(record_primary(volume, q.eth_from_primary), q.eth_from_secondary)
    event = TradeEvent(
        Event.SOFT_SELL_PRIMARY,
        trader,
        volatile_amount=q.volatile_out,
        secondary_amount=q.secondary_token_out,
    )
    return _finish(TradeKind.SOFT_SELL_PRIMARY, new_pool, volume, new_volume, ops, event)


def plan_buy_secondary(
    *,
    launch: LaunchState,
    pool: PoolState,
    volume: VolumeState,
    trader: str,
    sent: int,
    min_out: int,
    now: int,
    deadline: int,
    trader_volatile: int,
) -> TradePlan:
    require_launched(launch)
    require_trade_inputs(amount=sent, asset=Asset.VOLATILE, now=now, deadline=deadline)
    require_balance(trader_volatile, sent, Asset.VOLATILE)

    q = quote_buy_secondary(pool, sent)
    require_min_out(q.received, min_out, Asset.SECONDARY)

    new_pool = replace(
        pool,
        eth_of_primary_pool=pool.eth_of_primary_pool + q.to_primary_pool,
        volatile_held=pool.volatile_held + sent,
        secondary_token_of_secondary_pool=pool.secondary_token_of_secondary_pool - q.received,
    )
    ops = _ops(
        LedgerOp(Movement.RECEIVE, Asset.VOLATILE, Party.TRADER, sent),
        LedgerOp(Movement.PAY, Asset.SECONDARY, Party.TRADER, q.received),
    )
    event = TradeEvent(Event.BUY_SECONDARY, trader, secondary_amount=q.received)
    return _finish(
        TradeKind.BUY_SECONDARY, new_pool, volume, record_secondary(volume, sent), ops, event,
    )


def plan_sell_secondary(
    *,
    launch: LaunchState,
    pool: PoolState,
    volume: VolumeState,
    trader: str,
    amount_sold: int,
    min_out: int,
    now: int,
    deadline: int,
    trader_secondary: int,
    allowance: int,
) -> TradePlan:
    require_launched(launch)
    require_trade_inputs(amount=amount_sold, asset=Asset.SECONDARY, now=now, deadline=deadline)
    require_balance(trader_secondary, amount_sold, Asset.SECONDARY)
    require_allowance(allowance, amount_sold, Asset.SECONDARY)

    q = quote_sell_secondary(pool, amount_sold)
    require_min_out(q.paid, min_out, Asset.VOLATILE)

    new_pool = replace(
        pool,
        eth_of_primary_pool=pool.eth_of_primary_pool + q.to_primary_pool,
        volatile_held=pool.volatile_held - q.paid,
        secondary_token_of_secondary_pool=pool.secondary_token_of_secondary_pool + amount_sold,
    )
    ops = _ops(
        LedgerOp(Movement.PULL, Asset.SECONDARY, Party.TRADER, amount_sold),
        LedgerOp(Movement.PAY, Asset.VOLATILE, Party.TRADER, q.paid),
    )
    event = TradeEvent(Event.SELL_SECONDARY, trader, volatile_amount=q.paid)
    return _finish(
        TradeKind.SELL_SECONDARY, new_pool, volume, record_secondary(volume, q.paid), ops, event,
    )
