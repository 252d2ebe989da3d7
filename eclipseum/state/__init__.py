"""
State management for the Eclipseum exchange
"""

from .ledger import Ledger, MintableLedger, TokenLedger
from .snapshot import EngineSnapshot, state_digest, state_from_dict, state_to_dict

__all__ = [
    "Ledger",
    "TokenLedger",
    "MintableLedger",
    "EngineSnapshot",
    "state_to_dict",
    "state_from_dict",
    "state_digest",
]
