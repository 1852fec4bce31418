"""Runtime config for the distributor (plain frozen dataclasses; YAML loading lives in `rewardsplit.config`)."""

from __future__ import annotations

from dataclasses import dataclass

from .split import DEFAULT_BOUNDS, DEFAULT_SPLIT, AllocationBounds, RewardSplit, validate_split
from .types import Address, AssetId, Target


# Router deadline offset applied to every swap.
SWAP_DEADLINE_SECONDS = 600


def _require_address(name: str, value: str) -> None:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string")


@dataclass(frozen=True)
class TargetsConfig:
    """Initial recipient for each target."""

    staking: Address
    treasury: Address
    beneficiary_vaults: Address

    def __post_init__(self) -> None:
        for target in Target:
            _require_address(target.value, getattr(self, target.value))

    def for_target(self, target: Target) -> Address:
        return getattr(self, target.value)


@dataclass(frozen=True)
class DistributorConfig:
    reward_asset: AssetId
    # Holder address the distributor's balances live under.
    address: Address = "reward-splitter"
    bounds: AllocationBounds = DEFAULT_BOUNDS
    initial_split: RewardSplit = DEFAULT_SPLIT
    swap_deadline_seconds: int = SWAP_DEADLINE_SECONDS

    def __post_init__(self) -> None:
        _require_address("reward_asset", self.reward_asset)
        _require_address("address", self.address)
        if not isinstance(self.swap_deadline_seconds, int) or isinstance(self.swap_deadline_seconds, bool):
            raise TypeError("swap_deadline_seconds must be an int")
        if self.swap_deadline_seconds <= 0:
            raise ValueError(f"swap_deadline_seconds must be positive: {self.swap_deadline_seconds}")
        validate_split(self.initial_split, self.bounds)
