"""Data types for the reward splitter.

All value types are frozen dataclasses. Units:
- percentages are fixed-point integers scaled by 1e18 (100% == 100 * 10**18),
- amounts are integer base units of the relevant asset,
- addresses and asset ids are plain strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, unique
from typing import Any, Mapping, Tuple


Address = str
AssetId = str
Amount = int


@unique
class Target(Enum):
    """The three fixed beneficiaries, in distribution order."""
    STAKING = "staking"
    TREASURY = "treasury"
    BENEFICIARY_VAULTS = "beneficiary_vaults"


TARGET_ORDER: Tuple[Target, ...] = (Target.STAKING, Target.TREASURY, Target.BENEFICIARY_VAULTS)


@unique
class Event(Enum):
    SPLIT_UPDATED = "RewardSplitUpdated"
    TARGET_CHANGED = "TargetChanged"
    REWARD_SWAPPED = "RewardSwapped"
    REWARD_DEPOSITED = "RewardDeposited"
    REWARDS_DISTRIBUTED = "RewardsDistributed"


@dataclass(frozen=True)
class EmittedEvent:
    """One committed event. ``args`` holds only str/int values."""

    event: Event
    args: Mapping[str, Any] = field(default_factory=dict)

    def to_json_dict(self) -> dict[str, Any]:
        return {"event": self.event.value, "args": dict(self.args)}


@dataclass(frozen=True)
class SwapRequest:
    path: Tuple[AssetId, ...]
    min_amount_out: Amount


@dataclass(frozen=True)
class SwapResult:
    asset_in: AssetId
    amount_in: Amount
    amount_out: Amount


@dataclass(frozen=True)
class DistributionResult:
    total: Amount
    amounts: Mapping[Target, Amount]
    residual: Amount

    @property
    def distributed(self) -> Amount:
        return sum(self.amounts.values())
