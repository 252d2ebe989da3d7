"""Shared fixtures: in-memory ledgers wired to a deployed (optionally launched) exchange."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import pytest

from eclipseum.core.types import TradeEvent
from eclipseum.integration.config import DECIMAL_FACTOR, ExchangeConfig
from eclipseum.integration.exchange import Exchange
from eclipseum.state.ledger import MintableLedger, TokenLedger

ETH = DECIMAL_FACTOR
NOW = 1_700_000_000
DEADLINE = NOW + 3600

DEPLOYER = "deployer"
ALICE = "alice"
BOB = "bob"


class FixedClock:
    def __init__(self, now: int = NOW) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


@dataclass
class Market:
    exchange: Exchange
    config: ExchangeConfig
    ecl: MintableLedger
    dai: TokenLedger
    eth: TokenLedger
    clock: FixedClock
    events: List[TradeEvent] = field(default_factory=list)

    @property
    def account(self) -> str:
        return self.config.exchange_account

    def fund_secondary_pool(self, amount: int) -> None:
        self.dai.transfer(DEPLOYER, self.account, amount)

    def volatile_total(self) -> int:
        return sum(self.eth.get_all_balances().values())


def build_market(
    *,
    config: ExchangeConfig | None = None,
    funding: int = 3 * ETH // 10,
    stable_pool: int = 100 * ETH,
    launch: bool = True,
    trader_eth: int = 100 * ETH,
    trader_dai: int = 1_000 * ETH,
) -> Market:
    cfg = config if config is not None else ExchangeConfig()
    ecl = MintableLedger(name=cfg.token_name, symbol=cfg.token_symbol, decimals=cfg.token_decimals)
    dai = TokenLedger(symbol="DAI")
    eth = TokenLedger(symbol="ETH")

    eth.credit(DEPLOYER, funding)
    dai.credit(DEPLOYER, stable_pool)
    for trader in (ALICE, BOB):
        eth.credit(trader, trader_eth)
        dai.credit(trader, trader_dai)

    clock = FixedClock()
    events: List[TradeEvent] = []
    ex = Exchange.deploy(
        config=cfg,
        primary=ecl,
        secondary=dai,
        volatile=eth,
        funder=DEPLOYER,
        funding=funding,
        clock=clock,
        event_sink=events.append,
    )
    market = Market(exchange=ex, config=cfg, ecl=ecl, dai=dai, eth=eth, clock=clock, events=events)
    if launch:
        market.fund_secondary_pool(stable_pool)
        ex.launch()
    return market


@pytest.fixture
def market() -> Market:
    return build_market()


@pytest.fixture
def unlaunched() -> Market:
    return build_market(launch=False)
