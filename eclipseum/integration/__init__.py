"""
Imperative shell: configuration and the ledger-backed Exchange.
"""

from .config import ExchangeConfig, load_config
from .exchange import Exchange

__all__ = [
    "Exchange",
    "ExchangeConfig",
    "load_config",
]
