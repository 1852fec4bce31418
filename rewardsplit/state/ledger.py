"""
In-memory fungible token ledger.

One ledger holds every asset. `token(asset)` hands out a `FungibleToken`
view bound to that asset, which is what the distributor consumes.

Test hooks:
- `on_receive(holder, hook)` runs `hook(asset, sender, amount)` after a
  transfer lands at `holder` (models a recipient contract that calls back).
- `freeze(holder)` makes transfers to or from `holder` return False.
"""

from __future__ import annotations

from typing import Callable, Dict, Set, Tuple

from ..core.interfaces import FungibleToken, TokenDirectory
from ..core.types import Address, Amount, AssetId

ReceiveHook = Callable[[AssetId, Address, Amount], None]
HoldingKey = Tuple[AssetId, Address]
AllowanceKey = Tuple[AssetId, Address, Address]
LedgerSnapshot = Tuple[Dict[HoldingKey, Amount], Dict[AllowanceKey, Amount]]


class TokenLedger(TokenDirectory):
    def __init__(self) -> None:
        # Zero balances are dropped.
        self._holdings: Dict[HoldingKey, Amount] = {}
        self._allowances: Dict[AllowanceKey, Amount] = {}
        self._hooks: Dict[Address, ReceiveHook] = {}
        self._frozen: Set[Address] = set()

    def token(self, asset: AssetId) -> "LedgerToken":
        return LedgerToken(self, asset)

    def balance_of(self, asset: AssetId, holder: Address) -> Amount:
        return self._holdings.get((asset, holder), 0)

    def holdings(self) -> Dict[HoldingKey, Amount]:
        """Every non-zero `(asset, holder) -> amount`."""
        return dict(self._holdings)

    def _credit(self, asset: AssetId, holder: Address, amount: Amount) -> None:
        if amount:
            self._holdings[(asset, holder)] = self.balance_of(asset, holder) + amount

    def _debit(self, asset: AssetId, holder: Address, amount: Amount) -> None:
        held = self.balance_of(asset, holder)
        if amount > held:
            raise ValueError(f"{holder!r} holds {held} {asset}, cannot send {amount}")
        if amount == held:
            self._holdings.pop((asset, holder), None)
        elif amount:
            self._holdings[(asset, holder)] = held - amount

    def mint(self, asset: AssetId, to: Address, amount: Amount) -> None:
        if amount <= 0:
            raise ValueError(f"mint amount must be positive: {amount}")
        self._credit(asset, to, amount)

    def transfer(self, asset: AssetId, sender: Address, to: Address, amount: Amount) -> bool:
        """Move `amount` of `asset`; False if either side is frozen, ValueError if underfunded."""
        if amount < 0:
            raise ValueError(f"transfer amount must be non-negative: {amount}")
        if sender in self._frozen or to in self._frozen:
            return False
        self._debit(asset, sender, amount)
        self._credit(asset, to, amount)
        hook = self._hooks.get(to)
        if hook is not None:
            hook(asset, sender, amount)
        return True

    def allowance(self, asset: AssetId, owner: Address, spender: Address) -> Amount:
        return self._allowances.get((asset, owner, spender), 0)

    def increase_allowance(self, asset: AssetId, owner: Address, spender: Address, amount: Amount) -> bool:
        if amount < 0:
            raise ValueError(f"allowance increase must be non-negative: {amount}")
        key = (asset, owner, spender)
        self._allowances[key] = self._allowances.get(key, 0) + amount
        return True

    def transfer_from(self, asset: AssetId, spender: Address, owner: Address, to: Address, amount: Amount) -> bool:
        key = (asset, owner, spender)
        allowed = self._allowances.get(key, 0)
        if amount > allowed:
            raise ValueError(f"Insufficient allowance: {allowed} < {amount}")
        self._allowances[key] = allowed - amount
        return self.transfer(asset, owner, to, amount)

    def on_receive(self, holder: Address, hook: ReceiveHook) -> None:
        self._hooks[holder] = hook

    def freeze(self, holder: Address) -> None:
        self._frozen.add(holder)

    def unfreeze(self, holder: Address) -> None:
        self._frozen.discard(holder)

    def snapshot(self) -> LedgerSnapshot:
        return dict(self._holdings), dict(self._allowances)

    def restore(self, snap: LedgerSnapshot) -> None:
        holdings, allowances = snap
        self._holdings = dict(holdings)
        self._allowances = dict(allowances)


class LedgerToken(FungibleToken):
    """`FungibleToken` view of one asset in a TokenLedger."""

    def __init__(self, ledger: TokenLedger, asset: AssetId) -> None:
        self._ledger = ledger
        self.asset = asset

    def balance_of(self, holder: Address) -> Amount:
        return self._ledger.balance_of(self.asset, holder)

    def transfer(self, sender: Address, to: Address, amount: Amount) -> bool:
        return self._ledger.transfer(self.asset, sender, to, amount)

    def allowance(self, owner: Address, spender: Address) -> Amount:
        return self._ledger.allowance(self.asset, owner, spender)

    def increase_allowance(self, owner: Address, spender: Address, amount: Amount) -> bool:
        return self._ledger.increase_allowance(self.asset, owner, spender, amount)

    def __repr__(self) -> str:
        return f"LedgerToken({self.asset!r})"
