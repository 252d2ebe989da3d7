"""
Exchange deployment configuration.

Values come from (in increasing precedence) the dataclass defaults, a YAML
file (`load_config`) and `ECLIPSEUM_*` environment variables (`from_env`).
The transaction fee and the curve/rebalancing constants are not configurable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

DECIMAL_FACTOR = 10**18
MAX_SUPPLY = 10**40
MAX_DECIMALS = 36

_ENV_PREFIX = "ECLIPSEUM_"


def _env_int(name: str, default: int, *, lo: int, hi: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        v = int(raw.strip())
    except ValueError:
        return int(default)
    if v < lo:
        return int(lo)
    if v > hi:
        return int(hi)
    return int(v)


def _env_str(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


@dataclass(frozen=True)
class ExchangeConfig:
    # Account id under which the exchange holds pool balances on every ledger.
    exchange_account: str = "eclipseum"

    # ECL minted to the exchange account at deployment (initial curve depth).
    initial_supply: int = 100_000 * DECIMAL_FACTOR

    # Fraction of the deployment funding attributed to the primary pool; the
    # remainder belongs to the secondary pool.
    primary_funding_num: int = 1
    primary_funding_den: int = 3

    token_name: str = "Eclipseum"
    token_symbol: str = "ECL"
    token_decimals: int = 18

    def __post_init__(self) -> None:
        if not self.exchange_account:
            raise ValueError("exchange_account must be a non-empty string")
        for name in ("initial_supply", "primary_funding_num", "primary_funding_den", "token_decimals"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
        if self.initial_supply <= 0:
            raise ValueError(f"initial_supply must be positive: {self.initial_supply}")
        if self.primary_funding_den <= 0:
            raise ValueError("primary_funding_den must be positive")
        if not (0 <= self.primary_funding_num <= self.primary_funding_den):
            raise ValueError(
                f"primary funding share must be within [0, 1]: "
                f"{self.primary_funding_num}/{self.primary_funding_den}"
            )

    def primary_share_of(self, funding: int) -> int:
        """Part of an initial volatile funding amount credited to the primary pool."""
        return funding * self.primary_funding_num // self.primary_funding_den

    @classmethod
    def from_env(cls, base: Optional["ExchangeConfig"] = None) -> "ExchangeConfig":
        cfg = base if base is not None else cls()
        return replace(
            cfg,
            exchange_account=_env_str(_ENV_PREFIX + "EXCHANGE_ACCOUNT", cfg.exchange_account),
            initial_supply=_env_int(
                _ENV_PREFIX + "INITIAL_SUPPLY", cfg.initial_supply, lo=1, hi=MAX_SUPPLY,
            ),
            primary_funding_num=_env_int(
                _ENV_PREFIX + "PRIMARY_FUNDING_NUM", cfg.primary_funding_num, lo=0, hi=10_000,
            ),
            primary_funding_den=_env_int(
                _ENV_PREFIX + "PRIMARY_FUNDING_DEN", cfg.primary_funding_den, lo=1, hi=10_000,
            ),
            token_name=_env_str(_ENV_PREFIX + "TOKEN_NAME", cfg.token_name),
            token_symbol=_env_str(_ENV_PREFIX + "TOKEN_SYMBOL", cfg.token_symbol),
            token_decimals=_env_int(
                _ENV_PREFIX + "TOKEN_DECIMALS", cfg.token_decimals, lo=0, hi=MAX_DECIMALS,
            ),
        )


def config_from_mapping(obj: Mapping[str, Any]) -> ExchangeConfig:
    """Build a config from a plain mapping, rejecting unknown keys."""
    if not isinstance(obj, Mapping):
        raise ValueError("exchange config must be a mapping")
    known = {f.name for f in fields(ExchangeConfig)}
    unknown = sorted(set(obj) - known)
    if unknown:
        raise ValueError(f"unknown exchange config keys: {', '.join(unknown)}")
    return ExchangeConfig(**dict(obj))


def load_config(path: Union[str, Path]) -> ExchangeConfig:
    """Load an `ExchangeConfig` from a YAML file (empty file = defaults)."""
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if obj is None:
        return ExchangeConfig()
    return config_from_mapping(obj)
