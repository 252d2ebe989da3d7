"""Tests for eclipseum/state/ledger.py — in-memory token ledgers."""

import pytest

from eclipseum.core.errors import AllowanceError, InsufficientBalanceError
from eclipseum.state.ledger import Ledger, MintableLedger, TokenLedger


def funded(**balances) -> TokenLedger:
    led = TokenLedger(symbol="DAI")
    for account, amount in balances.items():
        led.credit(account, amount)
    return led


class TestLedgerInterface:
    def test_methods_are_abstract(self):
        led = Ledger()
        with pytest.raises(NotImplementedError):
            led.balance_of("a")
        with pytest.raises(NotImplementedError):
            led.transfer("a", "b", 1)


class TestCredit:
    def test_credit_raises_supply(self):
        led = funded(alice=5, bob=7)
        assert led.balance_of("alice") == 5
        assert led.total_supply() == 12

    def test_unknown_account_is_zero(self):
        assert TokenLedger().balance_of("nobody") == 0

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            TokenLedger().credit("a", -1)


class TestTransfer:
    def test_moves_balance(self):
        led = funded(alice=10)
        assert led.transfer("alice", "bob", 4) is True
        assert led.balance_of("alice") == 6
        assert led.balance_of("bob") == 4
        assert led.total_supply() == 10

    def test_insufficient(self):
        led = funded(alice=3)
        with pytest.raises(InsufficientBalanceError):
            led.transfer("alice", "bob", 4)
        assert led.balance_of("alice") == 3
        assert led.balance_of("bob") == 0

    def test_zero_balances_pruned(self):
        led = funded(alice=3)
        led.transfer("alice", "bob", 3)
        assert led.get_all_balances() == {"bob": 3}


class TestAllowance:
    def test_approve_overwrites(self):
        led = funded()
        led.approve("alice", "ex", 5)
        led.approve("alice", "ex", 2)
        assert led.allowance("alice", "ex") == 2

    def test_increase_and_decrease(self):
        led = funded()
        led.increase_allowance("alice", "ex", 5)
        led.increase_allowance("alice", "ex", 5)
        led.decrease_allowance("alice", "ex", 3)
        assert led.allowance("alice", "ex") == 7

    def test_decrease_below_zero(self):
        led = funded()
        led.approve("alice", "ex", 1)
        with pytest.raises(AllowanceError, match="below zero"):
            led.decrease_allowance("alice", "ex", 2)
        assert led.allowance("alice", "ex") == 1


class TestTransferFrom:
    def test_spends_allowance(self):
        led = funded(alice=10)
        led.approve("alice", "ex", 6)
        led.transfer_from("ex", "alice", "ex", 4)
        assert led.balance_of("ex") == 4
        assert led.allowance("alice", "ex") == 2

    def test_allowance_checked_before_balance(self):
        led = funded(alice=1)
        with pytest.raises(AllowanceError):
            led.transfer_from("ex", "alice", "ex", 5)

    def test_insufficient_balance_keeps_allowance(self):
        led = funded(alice=1)
        led.approve("alice", "ex", 5)
        with pytest.raises(InsufficientBalanceError):
            led.transfer_from("ex", "alice", "ex", 5)
        assert led.allowance("alice", "ex") == 5


class TestMintableLedger:
    def test_metadata(self):
        ecl = MintableLedger(name="Eclipseum", symbol="ECL", decimals=18)
        assert (ecl.name, ecl.symbol, ecl.decimals) == ("Eclipseum", "ECL", 18)
        assert "ECL" in repr(ecl)

    def test_mint_and_burn(self):
        ecl = MintableLedger(symbol="ECL")
        ecl.mint("a", 10)
        ecl.burn("a", 4)
        assert ecl.balance_of("a") == 6
        assert ecl.total_supply() == 6

    def test_burn_more_than_held(self):
        ecl = MintableLedger(symbol="ECL")
        ecl.mint("a", 1)
        with pytest.raises(InsufficientBalanceError):
            ecl.burn("a", 2)
        assert ecl.total_supply() == 1
