"""
Reward split arithmetic (deterministic, integer-only).

A split is three fixed-point percentages (scale 1e18, so 100% == 100e18)
for (staking, treasury, beneficiary_vaults). Amounts are floor-rounded per
target; the truncation residual is never paid out here and stays with the
holder, to be picked up by the next split of its balance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Tuple

from .errors import InvalidSplitBounds, InvalidSplitTotal
from .types import TARGET_ORDER, Amount, Target


PERCENT_SCALE = 10**18
HUNDRED_PERCENT = 100 * PERCENT_SCALE

# Largest balance a token can report.
MAX_UINT256 = (1 << 256) - 1


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def percent(whole: int) -> int:
    """Scale a whole-number percentage, e.g. ``percent(33) == 33e18``."""
    _require_int("whole", whole)
    return whole * PERCENT_SCALE


@dataclass(frozen=True)
class AllocationBound:
    min: int
    max: int

    def __post_init__(self) -> None:
        _require_int("min", self.min)
        _require_int("max", self.max)
        if not (0 <= self.min <= self.max <= HUNDRED_PERCENT):
            raise ValueError(f"bound must satisfy 0 <= min <= max <= {HUNDRED_PERCENT}: [{self.min}, {self.max}]")

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class AllocationBounds:
    staking: AllocationBound
    treasury: AllocationBound
    beneficiary_vaults: AllocationBound

    def for_target(self, target: Target) -> AllocationBound:
        return getattr(self, target.value)

    def as_tuple(self) -> Tuple[AllocationBound, AllocationBound, AllocationBound]:
        return (self.staking, self.treasury, self.beneficiary_vaults)


@dataclass(frozen=True)
class RewardSplit:
    staking: int
    treasury: int
    beneficiary_vaults: int

    def __post_init__(self) -> None:
        for name, v in (
            ("staking", self.staking),
            ("treasury", self.treasury),
            ("beneficiary_vaults", self.beneficiary_vaults),
        ):
            _require_int(name, v)
            if v < 0:
                raise ValueError(f"{name} must be non-negative: {v}")

    def for_target(self, target: Target) -> int:
        return getattr(self, target.value)

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.staking, self.treasury, self.beneficiary_vaults)

    @property
    def total(self) -> int:
        return self.staking + self.treasury + self.beneficiary_vaults


DEFAULT_BOUNDS = AllocationBounds(
    staking=AllocationBound(min=percent(20), max=percent(80)),
    treasury=AllocationBound(min=percent(10), max=percent(80)),
    beneficiary_vaults=AllocationBound(min=percent(20), max=percent(90)),
)

DEFAULT_SPLIT = RewardSplit(staking=percent(33), treasury=percent(33), beneficiary_vaults=percent(34))


@dataclass(frozen=True)
class Allocation:
    """Per-target amounts for one balance; ``residual`` is what stays behind."""

    balance: Amount
    amounts: Mapping[Target, Amount]
    residual: Amount

    def for_target(self, target: Target) -> Amount:
        return self.amounts[target]


def validate_split(split: RewardSplit, bounds: AllocationBounds) -> None:
    """
    Check every entry against its bound, then the total.

    Raises:
        InvalidSplitBounds: an entry lies outside its target's [min, max].
        InvalidSplitTotal: the entries do not sum to exactly 100e18.
    """
    for target in TARGET_ORDER:
        value = split.for_target(target)
        bound = bounds.for_target(target)
        if not bound.contains(value):
            raise InvalidSplitBounds(target.value, value, bound.min, bound.max)
    if split.total != HUNDRED_PERCENT:
        raise InvalidSplitTotal(split.total, HUNDRED_PERCENT)


def compute_allocation(balance: Amount, split: RewardSplit) -> Allocation:
    """
    Split `balance` across the targets with floor rounding.

    amount[i] = floor(balance * split[i] / 100e18)

    For a split summing to 100e18 the residual is at most len(targets) - 1.
    """
    _require_int("balance", balance)
    if not (0 <= balance <= MAX_UINT256):
        raise ValueError(f"balance must be in [0, 2**256 - 1]: {balance}")

    amounts: Dict[Target, Amount] = {}
    for target in TARGET_ORDER:
        amounts[target] = (balance * split.for_target(target)) // HUNDRED_PERCENT
    distributed = sum(amounts.values())
    if distributed > balance:
        raise AssertionError("reward split over-distributed")

    return Allocation(balance=balance, amounts=amounts, residual=balance - distributed)
