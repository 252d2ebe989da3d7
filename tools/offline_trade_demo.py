#!/usr/bin/env python3
"""Deploy an in-memory exchange, run one of each trade and print pool state."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from eclipseum.core.errors import ExchangeError
from eclipseum.integration.config import DECIMAL_FACTOR, ExchangeConfig, load_config
from eclipseum.integration.exchange import Exchange
from eclipseum.state.ledger import MintableLedger, TokenLedger
from eclipseum.state.snapshot import state_digest, state_to_dict

ETH = DECIMAL_FACTOR


def _pools(ex: Exchange) -> dict[str, int]:
    return {
        "eth_of_primary_pool": ex.eth_of_primary_pool(),
        "eth_of_secondary_pool": ex.eth_of_secondary_pool(),
        "primary_token_of_primary_pool": ex.primary_token_of_primary_pool(),
        "secondary_token_of_secondary_pool": ex.secondary_token_of_secondary_pool(),
        "circulating_supply": ex.circulating_supply(),
    }


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Run an offline Eclipseum trade sequence.")
    p.add_argument("--config", type=Path, default=None, help="YAML exchange config (default: built-in)")
    p.add_argument("--funding", type=int, default=3 * ETH, help="Volatile funding at deploy (default: 3e18)")
    p.add_argument("--stable", type=int, default=1000 * ETH, help="Stable asset seeded into the secondary pool")
    p.add_argument("--trade", type=int, default=ETH // 10, help="Volatile amount per buy (default: 1e17)")
    p.add_argument("-v", "--verbose", action="store_true", help="Log every committed trade")
    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = ExchangeConfig.from_env(load_config(args.config) if args.config else None)
    deployer, trader = "deployer", "trader"

    ecl = MintableLedger(name=cfg.token_name, symbol=cfg.token_symbol, decimals=cfg.token_decimals)
    dai = TokenLedger(symbol="DAI")
    eth = TokenLedger(symbol="ETH")
    eth.credit(deployer, args.funding)
    eth.credit(trader, 10 * args.trade)
    dai.credit(deployer, args.stable)

    events = []
    ex = Exchange.deploy(
        config=cfg,
        primary=ecl,
        secondary=dai,
        volatile=eth,
        funder=deployer,
        funding=args.funding,
        event_sink=events.append,
    )
    dai.transfer(deployer, cfg.exchange_account, args.stable)
    ex.launch()
    print(f"[offline-demo] pools after launch: {json.dumps(_pools(ex))}")

    deadline = int(time.time()) + 3600
    try:
        ex.buy_primary(trader, args.trade, 1, deadline)
        ex.sell_primary(trader, ecl.balance_of(trader) // 4, 1, deadline)
        ex.soft_sell_primary(trader, ecl.balance_of(trader) // 2, 0, 0, deadline)
        ex.buy_secondary(trader, args.trade, 1, deadline)
        dai.approve(trader, cfg.exchange_account, dai.balance_of(trader))
        ex.sell_secondary(trader, dai.balance_of(trader) // 2, 1, deadline)
    except ExchangeError as exc:
        print(f"[offline-demo] FAIL: {type(exc).__name__}: {exc}")
        return 1

    for ev in events:
        print(f"[offline-demo] {ev.event.value}{ev.args()}")
    print(f"[offline-demo] pools after trades: {json.dumps(_pools(ex))}")
    print(
        f"[offline-demo] trader balances: eth={eth.balance_of(trader)} "
        f"ecl={ecl.balance_of(trader)} dai={dai.balance_of(trader)}"
    )
    snap = ex.snapshot()
    print(f"[offline-demo] engine state: {json.dumps(state_to_dict(snap))}")
    print(f"[offline-demo] state digest: {state_digest(snap)}")
    print("[offline-demo] OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
