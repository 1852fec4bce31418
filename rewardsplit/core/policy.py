"""Allocation policy: the current split and its fixed per-target bounds."""

from __future__ import annotations

from .split import DEFAULT_BOUNDS, DEFAULT_SPLIT, AllocationBounds, RewardSplit, validate_split


class AllocationPolicy:
    """
    Holds the live RewardSplit.

    Bounds are fixed at construction. `replace` validates the whole split
    before the single assignment, so a rejected split leaves nothing behind.
    """

    def __init__(self, bounds: AllocationBounds = DEFAULT_BOUNDS, split: RewardSplit = DEFAULT_SPLIT) -> None:
        validate_split(split, bounds)
        self._bounds = bounds
        self._split = split

    @property
    def bounds(self) -> AllocationBounds:
        return self._bounds

    @property
    def split(self) -> RewardSplit:
        return self._split

    def replace(self, new_split: RewardSplit) -> RewardSplit:
        """Validate and install `new_split`; returns the previous split."""
        validate_split(new_split, self._bounds)
        previous = self._split
        self._split = new_split
        return previous

    def restore(self, split: RewardSplit) -> None:
        """Reinstall a previously captured split (rollback path)."""
        validate_split(split, self._bounds)
        self._split = split

    def __repr__(self) -> str:
        return f"AllocationPolicy(split={self._split.as_tuple()})"
