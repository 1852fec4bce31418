"""
Reward distributor: swap adapter + distribution engine + owner-gated setters.

This is the imperative core that talks to the collaborators:
- `AccessControl` for the owner check on every setter,
- `TokenDirectory` / `FungibleToken` for balances, transfers and allowances,
- `AmmRouter` for converting held assets into the reward asset.

Every operation checks its preconditions before any external call or write.
Events are buffered per top-level call and committed only when the call
returns normally; a raising call emits nothing. Rolling back collaborator
state (balances, allowances, pool reserves) is the hosting runtime's job,
see `rewardsplit.integration.host.LocalHost`.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from .config import DistributorConfig, TargetsConfig
from .errors import (
    InvalidMinAmount,
    InvalidPath,
    NoBalance,
    NoOpChange,
    NoSwappableBalance,
    PathMustEndInRewardAsset,
    RewardSplitError,
    SwapFailed,
    TransferFailed,
    Unauthorized,
)
from .guards import ReentrancyGuard
from .interfaces import AccessControl, AmmRouter, FungibleToken, TokenDirectory
from .policy import AllocationPolicy
from .split import Allocation, AllocationBounds, RewardSplit, compute_allocation
from .types import (
    TARGET_ORDER,
    Address,
    Amount,
    AssetId,
    DistributionResult,
    EmittedEvent,
    Event,
    SwapResult,
    Target,
)

logger = logging.getLogger(__name__)

EventListener = Callable[[EmittedEvent], None]


def _wall_clock() -> int:
    return int(time.time())


class RewardDistributor:
    """
    Holds the reward split and target registry; moves the reward asset.

    `swap_for_reward` and `distribute` may be called by anyone and share one
    reentrancy guard. `set_split` and the target setters require the owner.
    """

    def __init__(
        self,
        config: DistributorConfig,
        targets: TargetsConfig,
        *,
        access: AccessControl,
        tokens: TokenDirectory,
        router: Optional[AmmRouter] = None,
        clock: Callable[[], int] = _wall_clock,
    ) -> None:
        self._config = config
        self._policy = AllocationPolicy(config.bounds, config.initial_split)
        self._targets: Dict[Target, Address] = {t: targets.for_target(t) for t in TARGET_ORDER}
        self._access = access
        self._tokens = tokens
        self._router = router
        self._clock = clock
        self._guard = ReentrancyGuard()
        self._events: List[EmittedEvent] = []
        self._pending: Optional[List[EmittedEvent]] = None
        self._listeners: List[EventListener] = []

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def address(self) -> Address:
        return self._config.address

    @property
    def reward_asset(self) -> AssetId:
        return self._config.reward_asset

    @property
    def events(self) -> Tuple[EmittedEvent, ...]:
        """Committed event log, oldest first."""
        return tuple(self._events)

    def get_split(self) -> RewardSplit:
        return self._policy.split

    def get_bounds(self) -> AllocationBounds:
        return self._policy.bounds

    def get_targets(self) -> Mapping[Target, Address]:
        return dict(self._targets)

    def target_of(self, target: Target) -> Address:
        return self._targets[target]

    def subscribe(self, listener: EventListener) -> None:
        """Register an observer called with each event once its call commits; a raising observer is logged and skipped."""
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Call plumbing
    # ------------------------------------------------------------------

    @contextmanager
    def _call(self) -> Iterator[None]:
        # Nested calls (e.g. from a transfer hook) share the outer buffer.
        if self._pending is not None:
            yield
            return
        self._pending = []
        try:
            yield
            committed = self._pending
        finally:
            self._pending = None
        self._events.extend(committed)
        for ev in committed:
            for listener in self._listeners:
                try:
                    listener(ev)
                except Exception:
                    logger.exception("event listener %r failed on %s", listener, ev.event.value)

    def _emit(self, event: Event, args: Mapping[str, Any]) -> None:
        if self._pending is None:
            raise AssertionError("event emitted outside of a call")
        self._pending.append(EmittedEvent(event=event, args=dict(args)))

    def _require_owner(self, caller: Address, operation: str) -> None:
        if not self._access.is_owner(caller):
            raise Unauthorized(caller, operation)

    def snapshot(self) -> Tuple[RewardSplit, Dict[Target, Address], int]:
        """Capture mutable state for a hosting runtime that may roll back."""
        return self._policy.split, dict(self._targets), len(self._events)

    def restore(self, snap: Tuple[RewardSplit, Dict[Target, Address], int]) -> None:
        split, targets, n_events = snap
        self._policy.restore(split)
        self._targets = dict(targets)
        del self._events[n_events:]

    # ------------------------------------------------------------------
    # Allocation policy / mutation gateway (owner only)
    # ------------------------------------------------------------------

    def set_split(self, caller: Address, new_split: RewardSplit) -> RewardSplit:
        """Replace the split wholesale; returns the previous one."""
        with self._call():
            self._require_owner(caller, "set_split")
            previous = self._policy.replace(new_split)
            self._emit(
                Event.SPLIT_UPDATED,
                {
                    "staking": new_split.staking,
                    "treasury": new_split.treasury,
                    "beneficiary_vaults": new_split.beneficiary_vaults,
                },
            )
            return previous

    def set_target(self, caller: Address, target: Target, new_recipient: Address) -> Address:
        """Point `target` at `new_recipient`; returns the previous recipient."""
        if not isinstance(target, Target):
            raise TypeError(f"target must be a Target, got {target!r}")
        with self._call():
            self._require_owner(caller, f"set_{target.value}_target")
            if not isinstance(new_recipient, str):
                raise TypeError("recipient must be a string address")
            current = self._targets[target]
            if new_recipient == current:
                raise NoOpChange(f"{target.value} target is already {current!r}")
            self._targets[target] = new_recipient
            self._emit(Event.TARGET_CHANGED, {"target": target.value, "from": current, "to": new_recipient})
            return current

    def set_staking_target(self, caller: Address, new_recipient: Address) -> Address:
        return self.set_target(caller, Target.STAKING, new_recipient)

    def set_treasury_target(self, caller: Address, new_recipient: Address) -> Address:
        return self.set_target(caller, Target.TREASURY, new_recipient)

    def set_vaults_target(self, caller: Address, new_recipient: Address) -> Address:
        return self.set_target(caller, Target.BENEFICIARY_VAULTS, new_recipient)

    # ------------------------------------------------------------------
    # Swap adapter
    # ------------------------------------------------------------------

    def _check_path(self, path: Tuple[AssetId, ...]) -> None:
        if len(path) < 2:
            raise InvalidPath(f"swap path needs at least 2 assets, got {len(path)}")
        if path[-1] != self.reward_asset:
            raise PathMustEndInRewardAsset(f"swap path must end in {self.reward_asset!r}, got {path[-1]!r}")

    def _require_router(self) -> AmmRouter:
        if self._router is None:
            raise SwapFailed("no swap router configured")
        return self._router

    def _ensure_allowance(self, token: FungibleToken, spender: Address, needed: Amount) -> None:
        current = token.allowance(self.address, spender)
        if current >= needed:
            return
        try:
            ok = token.increase_allowance(self.address, spender, needed - current)
        except RewardSplitError:
            raise
        except Exception as exc:
            raise SwapFailed(f"allowance increase failed: {exc}") from exc
        if not ok:
            raise SwapFailed("allowance increase refused")

    def swap_for_reward(self, caller: Address, path: Sequence[AssetId], min_amount_out: Amount) -> SwapResult:
        """
        Swap the entire held balance of path[0] into the reward asset.

        The router prices the swap; this only enforces `min_amount_out` and a
        deadline of now + `swap_deadline_seconds`.

        Raises:
            InvalidPath / InvalidMinAmount / PathMustEndInRewardAsset
            NoSwappableBalance: nothing of path[0] is held.
            SwapFailed: the router (or the allowance call) failed.
            ReentrantCall: entered from inside another guarded call.
        """
        path = tuple(path)
        with self._call(), self._guard.enter("swap_for_reward"):
            if len(path) < 2:
                raise InvalidPath(f"swap path needs at least 2 assets, got {len(path)}")
            if not isinstance(min_amount_out, int) or isinstance(min_amount_out, bool) or min_amount_out <= 0:
                raise InvalidMinAmount(f"min_amount_out must be a positive int, got {min_amount_out!r}")
            self._check_path(path)
            router = self._require_router()

            asset_in = path[0]
            token_in = self._tokens.token(asset_in)
            amount_in = token_in.balance_of(self.address)
            if amount_in == 0:
                raise NoSwappableBalance(f"no balance of {asset_in!r} to swap")

            self._ensure_allowance(token_in, router.address, amount_in)
            deadline = self._clock() + self._config.swap_deadline_seconds
            try:
                amounts = router.swap_exact_input(
                    self.address,
                    amount_in,
                    min_amount_out,
                    path,
                    self.address,
                    deadline,
                )
            except RewardSplitError:
                raise
            except Exception as exc:
                raise SwapFailed(f"router swap failed: {exc}") from exc

            if len(amounts) != len(path) or amounts[0] != amount_in:
                raise SwapFailed(f"router returned malformed amounts: {amounts!r}")
            amount_out = amounts[-1]
            if amount_out < min_amount_out:
                raise SwapFailed(f"router output {amount_out} below minimum {min_amount_out}")

            self._emit(
                Event.REWARD_SWAPPED,
                {"asset_in": asset_in, "amount_in": amount_in, "amount_out": amount_out},
            )
            return SwapResult(asset_in=asset_in, amount_in=amount_in, amount_out=amount_out)

    def quote_swap(self, path: Sequence[AssetId]) -> Amount:
        """Expected reward output for swapping the full held balance of path[0]; 0 if none is held."""
        path = tuple(path)
        self._check_path(path)
        router = self._require_router()
        amount_in = self._tokens.token(path[0]).balance_of(self.address)
        if amount_in == 0:
            return 0
        try:
            amounts = router.get_amounts_out(amount_in, path)
        except RewardSplitError:
            raise
        except Exception as exc:
            raise SwapFailed(f"router quote failed: {exc}") from exc
        if len(amounts) != len(path):
            raise SwapFailed(f"router returned malformed amounts: {amounts!r}")
        return amounts[-1]

    # ------------------------------------------------------------------
    # Distribution engine
    # ------------------------------------------------------------------

    def _transfer(self, token: FungibleToken, to: Address, amount: Amount) -> None:
        try:
            ok = token.transfer(self.address, to, amount)
        except RewardSplitError:
            raise
        except Exception as exc:
            raise TransferFailed(f"transfer of {amount} to {to!r} failed: {exc}") from exc
        if not ok:
            raise TransferFailed(f"transfer of {amount} to {to!r} refused")

    def preview_distribution(self) -> Allocation:
        """Amounts `distribute()` would send right now (no transfers, no events)."""
        balance = self._tokens.token(self.reward_asset).balance_of(self.address)
        return compute_allocation(balance, self._policy.split)

    def distribute(self, caller: Optional[Address] = None) -> DistributionResult:
        """
        Send the whole reward balance to the three targets per the current split.

        The split and recipients are read once at the start. Zero amounts are
        skipped without an event; the floor-rounding residual stays here.

        Raises:
            NoBalance: the reward balance is zero.
            TransferFailed: a transfer raised or returned False.
            ReentrantCall: entered from inside another guarded call.
        """
        with self._call(), self._guard.enter("distribute"):
            token = self._tokens.token(self.reward_asset)
            balance = token.balance_of(self.address)
            if balance == 0:
                raise NoBalance(f"no {self.reward_asset!r} balance to distribute")

            allocation = compute_allocation(balance, self._policy.split)
            recipients = dict(self._targets)

            for target in TARGET_ORDER:
                amount = allocation.amounts[target]
                if amount == 0:
                    continue
                recipient = recipients[target]
                self._transfer(token, recipient, amount)
                self._emit(
                    Event.REWARD_DEPOSITED,
                    {"target": target.value, "recipient": recipient, "amount": amount},
                )

            self._emit(Event.REWARDS_DISTRIBUTED, {"total": balance})
            return DistributionResult(
                total=balance,
                amounts=dict(allocation.amounts),
                residual=allocation.residual,
            )

    def __repr__(self) -> str:
        return f"RewardDistributor(address={self.address!r}, reward_asset={self.reward_asset!r})"
