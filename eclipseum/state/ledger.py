"""
Fungible-token ledgers consumed by the Exchange.

`Ledger` is the capability interface; `TokenLedger` is an in-memory fixed-supply
implementation (used for the stable asset and the native volatile asset) and
`MintableLedger` adds the mint/burn primitives only ECL exposes.
"""

from __future__ import annotations

from typing import Dict, Tuple

from ..core.errors import AllowanceError, InsufficientBalanceError
from ..core.math import require_uint


# Type aliases
Account = str
Amount = int  # Non-negative integer (arbitrary precision)


class Ledger:
    """Interface for a fungible-token ledger."""

    def balance_of(self, account: Account) -> Amount:
        raise NotImplementedError

    def total_supply(self) -> Amount:
        raise NotImplementedError

    def transfer(self, sender: Account, to: Account, amount: Amount) -> bool:
        raise NotImplementedError

    def transfer_from(self, spender: Account, owner: Account, to: Account, amount: Amount) -> bool:
        raise NotImplementedError

    def allowance(self, owner: Account, spender: Account) -> Amount:
        raise NotImplementedError

    def approve(self, owner: Account, spender: Account, amount: Amount) -> bool:
        raise NotImplementedError


class TokenLedger(Ledger):
    """
    In-memory balance and allowance table for one asset.

    Zero balances and allowances are removed to keep the tables sparse. Supply
    only enters through `credit()` (genesis / faucet), never through trading.
    """

    def __init__(self, symbol: str = "", decimals: int = 18):
        self.symbol = symbol
        self.decimals = decimals
        self._balances: Dict[Account, Amount] = {}
        self._allowances: Dict[Tuple[Account, Account], Amount] = {}
        self._supply: Amount = 0

    def balance_of(self, account: Account) -> Amount:
        """Get balance for account. Returns 0 if not found."""
        return self._balances.get(account, 0)

    def total_supply(self) -> Amount:
        return self._supply

    def _set(self, account: Account, amount: Amount) -> None:
        if amount == 0:
            self._balances.pop(account, None)
        else:
            self._balances[account] = amount

    def _debit(self, account: Account, amount: Amount) -> None:
        current = self.balance_of(account)
        if amount > current:
            raise InsufficientBalanceError(
                f"{self.symbol or 'token'}: {account} holds {current}, needs {amount}"
            )
        self._set(account, current - amount)

    def credit(self, account: Account, amount: Amount) -> None:
        """
        Create `amount` new units in `account` outside of any trade.

        Args:
            account: Receiving account
            amount: Non-negative amount

        Raises:
            ValueError: If amount is negative
        """
        require_uint(amount, "amount")
        self._set(account, self.balance_of(account) + amount)
        self._supply += amount

    def transfer(self, sender: Account, to: Account, amount: Amount) -> bool:
        """
        Move `amount` from `sender` to `to`.

        Raises:
            InsufficientBalanceError: If sender holds less than amount
        """
        require_uint(amount, "amount")
        self._debit(sender, amount)
        self._set(to, self.balance_of(to) + amount)
        return True

    def allowance(self, owner: Account, spender: Account) -> Amount:
        return self._allowances.get((owner, spender), 0)

    def approve(self, owner: Account, spender: Account, amount: Amount) -> bool:
        require_uint(amount, "amount")
        if amount == 0:
            self._allowances.pop((owner, spender), None)
        else:
            self._allowances[(owner, spender)] = amount
        return True

    def increase_allowance(self, owner: Account, spender: Account, added: Amount) -> bool:
        require_uint(added, "added")
        return self.approve(owner, spender, self.allowance(owner, spender) + added)

    def decrease_allowance(self, owner: Account, spender: Account, subtracted: Amount) -> bool:
        require_uint(subtracted, "subtracted")
        current = self.allowance(owner, spender)
        if subtracted > current:
            raise AllowanceError(f"decreased allowance below zero: {current} - {subtracted}")
        return self.approve(owner, spender, current - subtracted)

    def transfer_from(self, spender: Account, owner: Account, to: Account, amount: Amount) -> bool:
        """
        Move `amount` from `owner` to `to` on behalf of `spender`.

        Raises:
            AllowanceError: If owner approved spender for less than amount
            InsufficientBalanceError: If owner holds less than amount
        """
        require_uint(amount, "amount")
        approved = self.allowance(owner, spender)
        if amount > approved:
            raise AllowanceError(
                f"{self.symbol or 'token'}: transfer of {amount} exceeds allowance {approved}"
            )
        self.transfer(owner, to, amount)
        self.approve(owner, spender, approved - amount)
        return True

    def get_all_balances(self) -> Dict[Account, Amount]:
        return dict(self._balances)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.symbol!r}, {len(self._balances)} holders)"


class MintableLedger(TokenLedger):
    """Token ledger whose supply is created and destroyed by the Exchange."""

    def __init__(self, name: str = "", symbol: str = "", decimals: int = 18):
        super().__init__(symbol=symbol, decimals=decimals)
        self.name = name

    def mint(self, to: Account, amount: Amount) -> None:
        self.credit(to, amount)

    def burn(self, account: Account, amount: Amount) -> None:
        """
        Destroy `amount` held by `account`.

        Raises:
            InsufficientBalanceError: If account holds less than amount
        """
        require_uint(amount, "amount")
        self._debit(account, amount)
        self._supply -= amount
