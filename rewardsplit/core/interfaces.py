"""
Collaborator interfaces consumed by the distributor.

The distributor never owns balances, ownership or pricing: it talks to
these through the methods below. Reference in-memory implementations live in
`rewardsplit.state.ledger` and `rewardsplit.integration`.
"""

from __future__ import annotations

from typing import List, Sequence

from .types import Address, Amount, AssetId


class AccessControl:
    """Answers whether a caller holds the owner privilege."""

    def is_owner(self, caller: Address) -> bool:
        raise NotImplementedError


class FungibleToken:
    """
    A single fungible asset.

    `sender` / `owner` name the account the call acts for (the on-chain
    msg.sender). Mutating calls return False or raise on failure and must be
    all-or-nothing.
    """

    def balance_of(self, holder: Address) -> Amount:
        raise NotImplementedError

    def transfer(self, sender: Address, to: Address, amount: Amount) -> bool:
        raise NotImplementedError

    def allowance(self, owner: Address, spender: Address) -> Amount:
        raise NotImplementedError

    def increase_allowance(self, owner: Address, spender: Address, amount: Amount) -> bool:
        raise NotImplementedError


class TokenDirectory:
    """Resolves an asset id to its token."""

    def token(self, asset: AssetId) -> FungibleToken:
        raise NotImplementedError


class AmmRouter:
    """Multi-hop exact-input swap router."""

    address: Address

    def swap_exact_input(
        self,
        caller: Address,
        amount_in: Amount,
        min_amount_out: Amount,
        path: Sequence[AssetId],
        recipient: Address,
        deadline: int,
    ) -> List[Amount]:
        """Swap `amount_in` of path[0] into path[-1]; returns per-hop amounts (first = in, last = out)."""
        raise NotImplementedError

    def get_amounts_out(self, amount_in: Amount, path: Sequence[AssetId]) -> List[Amount]:
        raise NotImplementedError
