"""
Core reward splitter: split arithmetic, policy, guard and distributor.
"""

from .config import DistributorConfig, TargetsConfig, SWAP_DEADLINE_SECONDS
from .distributor import RewardDistributor
from .errors import (
    CollaboratorFailure,
    InsufficientBalance,
    RewardSplitError,
    ReentrantCall,
    Unauthorized,
    ValidationError,
)
from .interfaces import AccessControl, AmmRouter, FungibleToken, TokenDirectory
from .policy import AllocationPolicy
from .split import (
    DEFAULT_BOUNDS,
    DEFAULT_SPLIT,
    HUNDRED_PERCENT,
    PERCENT_SCALE,
    Allocation,
    AllocationBound,
    AllocationBounds,
    RewardSplit,
    compute_allocation,
    percent,
    validate_split,
)
from .types import TARGET_ORDER, DistributionResult, EmittedEvent, Event, SwapResult, Target

__all__ = [
    "DistributorConfig",
    "TargetsConfig",
    "SWAP_DEADLINE_SECONDS",
    "RewardDistributor",
    "CollaboratorFailure",
    "InsufficientBalance",
    "RewardSplitError",
    "ReentrantCall",
    "Unauthorized",
    "ValidationError",
    "AccessControl",
    "AmmRouter",
    "FungibleToken",
    "TokenDirectory",
    "AllocationPolicy",
    "DEFAULT_BOUNDS",
    "DEFAULT_SPLIT",
    "HUNDRED_PERCENT",
    "PERCENT_SCALE",
    "Allocation",
    "AllocationBound",
    "AllocationBounds",
    "RewardSplit",
    "compute_allocation",
    "percent",
    "validate_split",
    "TARGET_ORDER",
    "DistributionResult",
    "EmittedEvent",
    "Event",
    "SwapResult",
    "Target",
]
