"""Single-owner access control."""

from __future__ import annotations

from ..core.errors import NoOpChange, Unauthorized
from ..core.interfaces import AccessControl
from ..core.types import Address


class SingleOwner(AccessControl):
    def __init__(self, owner: Address) -> None:
        if not isinstance(owner, str) or not owner:
            raise ValueError("owner must be a non-empty string")
        self._owner = owner

    @property
    def owner(self) -> Address:
        return self._owner

    def is_owner(self, caller: Address) -> bool:
        return caller == self._owner

    def transfer_ownership(self, caller: Address, new_owner: Address) -> Address:
        """Hand the owner role to `new_owner`; returns the previous owner."""
        if not self.is_owner(caller):
            raise Unauthorized(caller, "transfer_ownership")
        if not isinstance(new_owner, str) or not new_owner:
            raise ValueError("new_owner must be a non-empty string")
        if new_owner == self._owner:
            raise NoOpChange(f"{new_owner!r} is already the owner")
        previous = self._owner
        self._owner = new_owner
        return previous

    def snapshot(self) -> Address:
        return self._owner

    def restore(self, owner: Address) -> None:
        self._owner = owner
