"""
Exchange: imperative shell around the trade planner.

The Exchange owns the only engine state that is not held by a ledger (the
primary pool's volatile balance, the volume counters and the launch flag) and
wires three ledgers into the pure planner:

- `primary`: ECL, mintable/burnable by the Exchange,
- `secondary`: the external stable asset,
- `volatile`: the native asset both pools hold.

Every trade follows checks-then-effects ordering:
1. Reject the exchange account as trader, read a `PoolState` snapshot from
   storage + ledgers.
2. Plan the trade (all guards, quotes and slippage checks; may raise).
3. Pre-flight every ledger operation against current balances/allowances.
4. Apply ledger operations.
5. Re-read the ledgers and verify they match the planned post-state. On a
   mismatch or a ledger failure the applied operations are reverted and the
   stored state is left untouched; otherwise the stored state is committed.
6. Deliver the event.

No locking is performed; callers must serialize operations on one instance.
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from typing import Callable, Dict, List, Optional, Tuple

from ..core import curve, rebalance
from ..core.engine import (
    plan_buy_primary,
    plan_buy_secondary,
    plan_sell_primary,
    plan_sell_secondary,
    plan_soft_sell_primary,
)
from ..core.errors import (
    AllowanceError,
    ExchangeError,
    InsufficientBalanceError,
    InvariantViolationError,
)
from ..core.guards import require_counterparty
from ..core.invariants import check_all
from ..core.launch import launch as _launch_gate
from ..core.launch import require_launched
from ..core.math import require_uint
from ..core.types import (
    Asset,
    LaunchState,
    LedgerOp,
    Movement,
    Party,
    PoolState,
    TradeEvent,
    TradePlan,
    VolumeState,
)
from ..state.ledger import Ledger, MintableLedger
from ..state.snapshot import EngineSnapshot, make_snapshot
from .config import ExchangeConfig

logger = logging.getLogger(__name__)

Clock = Callable[[], int]
EventSink = Callable[[TradeEvent], None]


def wall_clock() -> int:
    return int(time.time())


class Exchange:
    def __init__(
        self,
        *,
        config: ExchangeConfig,
        primary: MintableLedger,
        secondary: Ledger,
        volatile: Ledger,
        clock: Clock = wall_clock,
        event_sink: Optional[EventSink] = None,
        eth_of_primary_pool: int = 0,
    ) -> None:
        self._config = config
        self._primary = primary
        self._secondary = secondary
        self._volatile = volatile
        self._clock = clock
        self._event_sink = event_sink

        self._eth_of_primary_pool = require_uint(eth_of_primary_pool, "eth_of_primary_pool")
        self._volume = VolumeState()
        self._launch = LaunchState()

        violations = check_all(self._pool_state())
        if violations:
            raise InvariantViolationError(violations)

    @classmethod
    def deploy(
        cls,
        *,
        config: ExchangeConfig,
        primary: MintableLedger,
        secondary: Ledger,
        volatile: Ledger,
        funder: str,
        funding: int,
        clock: Clock = wall_clock,
        event_sink: Optional[EventSink] = None,
    ) -> "Exchange":
        """
        Create an exchange seeded with `funding` units of the volatile asset.

        The initial ECL supply is minted to the exchange account, so circulating
        supply starts at zero; `config.primary_share_of(funding)` of the funding
        is attributed to the primary pool and the rest to the secondary pool.
        """
        require_uint(funding, "funding")
        account = config.exchange_account
        volatile.transfer(funder, account, funding)
        primary.mint(account, config.initial_supply)

        exchange = cls(
            config=config,
            primary=primary,
            secondary=secondary,
            volatile=volatile,
            clock=clock,
            event_sink=event_sink,
            eth_of_primary_pool=config.primary_share_of(funding),
        )
        logger.info(
            "deployed exchange account=%s funding=%d initial_supply=%d",
            account, funding, config.initial_supply,
        )
        return exchange

    # ------------------------------------------------------------------
    # Launch gate
    # ------------------------------------------------------------------

    @property
    def launched(self) -> bool:
        return self._launch.launched

    def launch(self) -> None:
        self._launch = _launch_gate(self._launch, self._pool_state())
        logger.info(
            "launched exchange account=%s secondary_pool=%d",
            self._config.exchange_account,
            self._secondary.balance_of(self._config.exchange_account),
        )

    # ------------------------------------------------------------------
    # Pure helpers (available in either launch state)
    # ------------------------------------------------------------------

    @staticmethod
    def swap_out(in_balance: int, out_balance: int, in_amount: int) -> int:
        return curve.swap_out(in_balance, out_balance, in_amount)

    @staticmethod
    def transfer_to_other(primary_eth: int, secondary_eth: int, sent: int) -> int:
        return rebalance.transfer_to_other(primary_eth, secondary_eth, sent)

    # ------------------------------------------------------------------
    # Views (gated)
    # ------------------------------------------------------------------

    def _pool_state(self, eth_of_primary_pool: Optional[int] = None) -> PoolState:
        account = self._config.exchange_account
        if eth_of_primary_pool is None:
            eth_of_primary_pool = self._eth_of_primary_pool
        return PoolState(
            eth_of_primary_pool=eth_of_primary_pool,
            volatile_held=self._volatile.balance_of(account),
            primary_token_of_primary_pool=self._primary.balance_of(account),
            secondary_token_of_secondary_pool=self._secondary.balance_of(account),
            total_supply=self._primary.total_supply(),
        )

    def pool_state(self) -> PoolState:
        require_launched(self._launch)
        return self._pool_state()

    def eth_of_primary_pool(self) -> int:
        return self.pool_state().eth_of_primary_pool

    def eth_of_secondary_pool(self) -> int:
        return self.pool_state().eth_of_secondary_pool

    def primary_token_of_primary_pool(self) -> int:
        return self.pool_state().primary_token_of_primary_pool

    def secondary_token_of_secondary_pool(self) -> int:
        return self.pool_state().secondary_token_of_secondary_pool

    def circulating_supply(self) -> int:
        return self.pool_state().circulating_supply

    def volatile_volume_of_primary_pool(self) -> int:
        require_launched(self._launch)
        return self._volume.volatile_volume_of_primary_pool

    def volatile_volume_of_secondary_pool(self) -> int:
        require_launched(self._launch)
        return self._volume.volatile_volume_of_secondary_pool

    # ------------------------------------------------------------------
    # Trades
    # ------------------------------------------------------------------

    def buy_primary(self, trader: str, sent: int, min_out: int, deadline: int) -> TradeEvent:
        """Pay `sent` volatile units for newly minted ECL."""
        return self._execute(
            "buy_primary",
            trader,
            lambda: plan_buy_primary(
                launch=self._launch,
                pool=self._pool_state(),
                volume=self._volume,
                trader=trader,
                sent=sent,
                min_out=min_out,
                now=self._clock(),
                deadline=deadline,
                trader_volatile=self._volatile.balance_of(trader),
            ),
        )

    def sell_primary(self, trader: str, amount_sold: int, min_out: int, deadline: int) -> TradeEvent:
        """Sell ECL into the primary pool curve for volatile units."""
        return self._execute(
            "sell_primary",
            trader,
            lambda: plan_sell_primary(
                launch=self._launch,
                pool=self._pool_state(),
                volume=self._volume,
                trader=trader,
                amount_sold=amount_sold,
                min_out=min_out,
                now=self._clock(),
                deadline=deadline,
                trader_primary=self._primary.balance_of(trader),
            ),
        )

    def soft_sell_primary(
        self,
        trader: str,
        amount_sold: int,
        min_volatile_out: int,
        min_secondary_out: int,
        deadline: int,
    ) -> TradeEvent:
        """Redeem ECL pro-rata against both pools."""
        return self._execute(
            "soft_sell_primary",
            trader,
            lambda: plan_soft_sell_primary(
                launch=self._launch,
                pool=self._pool_state(),
                volume=self._volume,
                trader=trader,
                amount_sold=amount_sold,
                min_volatile_out=min_volatile_out,
                min_secondary_out=min_secondary_out,
                now=self._clock(),
                deadline=deadline,
                trader_primary=self._primary.balance_of(trader),
            ),
        )

    def buy_secondary(self, trader: str, sent: int, min_out: int, deadline: int) -> TradeEvent:
        """Pay `sent` volatile units for stable asset from the secondary pool."""
        return self._execute(
            "buy_secondary",
            trader,
            lambda: plan_buy_secondary(
                launch=self._launch,
                pool=self._pool_state(),
                volume=self._volume,
                trader=trader,
                sent=sent,
                min_out=min_out,
                now=self._clock(),
                deadline=deadline,
                trader_volatile=self._volatile.balance_of(trader),
            ),
        )

    def sell_secondary(self, trader: str, amount_sold: int, min_out: int, deadline: int) -> TradeEvent:
        """Sell stable asset (pulled via prior allowance) for volatile units."""
        account = self._config.exchange_account
        return self._execute(
            "sell_secondary",
            trader,
            lambda: plan_sell_secondary(
                launch=self._launch,
                pool=self._pool_state(),
                volume=self._volume,
                trader=trader,
                amount_sold=amount_sold,
                min_out=min_out,
                now=self._clock(),
                deadline=deadline,
                trader_secondary=self._secondary.balance_of(trader),
                allowance=self._secondary.allowance(trader, account),
            ),
        )

    # ------------------------------------------------------------------
    # Plan execution
    # ------------------------------------------------------------------

    def _execute(self, name: str, trader: str, planner: Callable[[], TradePlan]) -> TradeEvent:
        try:
            require_counterparty(trader, self._config.exchange_account)
            plan = planner()
            self._preflight(plan, trader)
        except ExchangeError as exc:
            logger.warning("%s rejected trader=%s: %s: %s", name, trader, type(exc).__name__, exc)
            raise

        applied: List[LedgerOp] = []
        try:
            for op in plan.ops:
                self._apply(op, trader)
                applied.append(op)
            if self._pool_state(plan.pool.eth_of_primary_pool) != plan.pool:
                raise InvariantViolationError(["inv_ledgers_match_plan"])
        except Exception:
            logger.error("%s failed after %d ledger ops, reverting trader=%s", name, len(applied), trader)
            for op in reversed(applied):
                self._revert(op, trader)
            raise

        # Stored state is only committed once the ledgers agree with the plan.
        self._eth_of_primary_pool = plan.pool.eth_of_primary_pool
        self._volume = plan.volume

        logger.debug("%s committed trader=%s event_args=%s", name, trader, plan.event.args())
        if self._event_sink is not None:
            self._event_sink(plan.event)
        return plan.event

    def _ledger(self, asset: Asset) -> Ledger:
        if asset is Asset.PRIMARY:
            return self._primary
        if asset is Asset.SECONDARY:
            return self._secondary
        return self._volatile

    def _account(self, party: Party, trader: str) -> str:
        return trader if party is Party.TRADER else self._config.exchange_account

    def _preflight(self, plan: TradePlan, trader: str) -> None:
        """Check every debit of the plan against current balances before applying any."""
        account = self._config.exchange_account
        debits: Dict[Tuple[Asset, str], int] = defaultdict(int)
        for op in plan.ops:
            if op.movement in (Movement.RECEIVE, Movement.PULL):
                debits[(op.asset, trader)] += op.amount
            elif op.movement is Movement.PAY:
                debits[(op.asset, account)] += op.amount
            elif op.movement is Movement.BURN:
                debits[(op.asset, self._account(op.party, trader))] += op.amount
            if op.movement is Movement.PULL:
                approved = self._ledger(op.asset).allowance(trader, account)
                if op.amount > approved:
                    raise AllowanceError(
                        f"{op.asset.value} transfer ({op.amount}) exceeds approved allowance ({approved})"
                    )

        for (asset, holder), amount in debits.items():
            held = self._ledger(asset).balance_of(holder)
            if amount > held:
                raise InsufficientBalanceError(
                    f"{asset.value}: {holder} holds {held}, trade debits {amount}"
                )

    def _apply(self, op: LedgerOp, trader: str) -> None:
        account = self._config.exchange_account
        ledger = self._ledger(op.asset)
        if op.movement is Movement.RECEIVE:
            ledger.transfer(trader, account, op.amount)
        elif op.movement is Movement.PULL:
            ledger.transfer_from(account, trader, account, op.amount)
        elif op.movement is Movement.PAY:
            ledger.transfer(account, trader, op.amount)
        elif op.movement is Movement.MINT:
            self._primary.mint(self._account(op.party, trader), op.amount)
        elif op.movement is Movement.BURN:
            self._primary.burn(self._account(op.party, trader), op.amount)
        else:
            raise ValueError(f"unknown ledger movement: {op.movement}")

    def _revert(self, op: LedgerOp, trader: str) -> None:
        """Undo one applied ledger op (inverse movement, allowance restored for pulls)."""
        account = self._config.exchange_account
        ledger = self._ledger(op.asset)
        if op.movement is Movement.RECEIVE:
            ledger.transfer(account, trader, op.amount)
        elif op.movement is Movement.PULL:
            ledger.transfer(account, trader, op.amount)
            ledger.approve(trader, account, ledger.allowance(trader, account) + op.amount)
        elif op.movement is Movement.PAY:
            ledger.transfer(trader, account, op.amount)
        elif op.movement is Movement.MINT:
            self._primary.burn(self._account(op.party, trader), op.amount)
        elif op.movement is Movement.BURN:
            self._primary.mint(self._account(op.party, trader), op.amount)

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def snapshot(self) -> EngineSnapshot:
        return make_snapshot(self._eth_of_primary_pool, self._volume, self._launch)

    def restore(self, snapshot: EngineSnapshot) -> None:
        """Replace stored engine state; ledgers must already hold matching balances."""
        candidate = self._pool_state(snapshot.eth_of_primary_pool)
        violations = check_all(candidate)
        if violations:
            raise InvariantViolationError(violations)
        if snapshot.launched:
            # A launched snapshot must satisfy the same funding rule as launch().
            _launch_gate(LaunchState(), candidate)
        self._eth_of_primary_pool = snapshot.eth_of_primary_pool
        self._volume = snapshot.volume
        self._launch = snapshot.launch
