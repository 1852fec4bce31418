# [TESTER] v1

from __future__ import annotations

import pytest

from rewardsplit.state import TokenLedger


def test_holdings_drop_emptied_balances() -> None:
    ledger = TokenLedger()
    ledger.mint("REWARD", "alice", 5)
    assert ledger.holdings() == {("REWARD", "alice"): 5}

    ledger.transfer("REWARD", "alice", "bob", 5)

    assert ledger.holdings() == {("REWARD", "bob"): 5}
    with pytest.raises(ValueError):
        ledger.transfer("REWARD", "alice", "bob", 1)


def test_zero_transfer_leaves_no_entry() -> None:
    ledger = TokenLedger()
    assert ledger.transfer("REWARD", "alice", "bob", 0) is True
    assert ledger.holdings() == {}


def test_transfer_moves_balance_and_runs_hook() -> None:
    ledger = TokenLedger()
    ledger.mint("REWARD", "alice", 100)
    received = []
    ledger.on_receive("bob", lambda asset, sender, amount: received.append((asset, sender, amount)))

    assert ledger.transfer("REWARD", "alice", "bob", 40) is True

    assert ledger.balance_of("REWARD", "alice") == 60
    assert ledger.balance_of("REWARD", "bob") == 40
    assert received == [("REWARD", "alice", 40)]
    assert sum(ledger.holdings().values()) == 100


def test_underfunded_transfer_raises() -> None:
    ledger = TokenLedger()
    ledger.mint("REWARD", "alice", 10)
    with pytest.raises(ValueError):
        ledger.transfer("REWARD", "alice", "bob", 11)
    assert ledger.balance_of("REWARD", "alice") == 10


def test_frozen_account_transfers_return_false() -> None:
    ledger = TokenLedger()
    ledger.mint("REWARD", "alice", 10)
    ledger.freeze("bob")
    assert ledger.transfer("REWARD", "alice", "bob", 1) is False
    ledger.unfreeze("bob")
    assert ledger.transfer("REWARD", "alice", "bob", 1) is True


def test_transfer_from_spends_allowance() -> None:
    ledger = TokenLedger()
    ledger.mint("WETH", "owner", 100)
    token = ledger.token("WETH")

    assert token.increase_allowance("owner", "router", 30) is True
    assert token.increase_allowance("owner", "router", 20) is True
    assert token.allowance("owner", "router") == 50

    ledger.transfer_from("WETH", "router", "owner", "router", 45)
    assert token.allowance("owner", "router") == 5
    assert token.balance_of("router") == 45
    with pytest.raises(ValueError):
        ledger.transfer_from("WETH", "router", "owner", "router", 6)


def test_snapshot_restore_round_trip() -> None:
    ledger = TokenLedger()
    ledger.mint("REWARD", "alice", 10)
    snap = ledger.snapshot()

    ledger.transfer("REWARD", "alice", "bob", 4)
    ledger.increase_allowance("REWARD", "alice", "bob", 9)
    ledger.restore(snap)

    assert ledger.balance_of("REWARD", "alice") == 10
    assert ledger.balance_of("REWARD", "bob") == 0
    assert ledger.allowance("REWARD", "alice", "bob") == 0
