"""
Constant-product pool state for the reference router.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from ..core.types import Amount, AssetId


def canonical_pair(asset_a: AssetId, asset_b: AssetId) -> Tuple[AssetId, AssetId]:
    if asset_a == asset_b:
        raise ValueError(f"pool assets must differ: {asset_a!r}")
    return (asset_a, asset_b) if asset_a < asset_b else (asset_b, asset_a)


@dataclass(frozen=True)
class PoolState:
    asset0: AssetId
    asset1: AssetId
    reserve0: Amount
    reserve1: Amount
    fee_bps: int = 30

    def __post_init__(self) -> None:
        if not self.asset0 < self.asset1:
            raise ValueError("pool assets must be sorted (asset0 < asset1)")
        if self.reserve0 <= 0 or self.reserve1 <= 0:
            raise ValueError(f"reserves must be positive: ({self.reserve0}, {self.reserve1})")
        if not (0 <= self.fee_bps < 10_000):
            raise ValueError(f"fee_bps must be in [0, 10000): {self.fee_bps}")

    def reserves_for(self, asset_in: AssetId, asset_out: AssetId) -> Optional[Tuple[Amount, Amount]]:
        """(reserve_in, reserve_out) for the given direction, or None if the pair does not match."""
        if asset_in == self.asset0 and asset_out == self.asset1:
            return self.reserve0, self.reserve1
        if asset_in == self.asset1 and asset_out == self.asset0:
            return self.reserve1, self.reserve0
        return None

    def with_reserves(self, asset_in: AssetId, new_reserve_in: Amount, new_reserve_out: Amount) -> "PoolState":
        if asset_in == self.asset0:
            return replace(self, reserve0=new_reserve_in, reserve1=new_reserve_out)
        return replace(self, reserve0=new_reserve_out, reserve1=new_reserve_in)
