"""
Reference constant-product router over an in-memory TokenLedger.

Pools are keyed by their sorted asset pair; a path hops through one pool per
adjacent pair. The router holds every pool's reserves under its own address
in the ledger, pulls the input via `transfer_from` (so the caller must have
granted an allowance) and pays the output to the recipient.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, List, Sequence, Tuple

from ..core.cpmm import swap_exact_in as _cpmm_swap_exact_in
from ..core.interfaces import AmmRouter
from ..core.types import Address, Amount, AssetId
from ..state.ledger import TokenLedger
from ..state.pools import PoolState, canonical_pair

logger = logging.getLogger(__name__)

PairKey = Tuple[AssetId, AssetId]


class RouterError(Exception):
    """Raised when a swap cannot be executed (the whole call reverts)."""


def _wall_clock() -> int:
    return int(time.time())


class ConstantProductRouter(AmmRouter):
    def __init__(
        self,
        ledger: TokenLedger,
        *,
        address: Address = "amm-router",
        clock: Callable[[], int] = _wall_clock,
    ) -> None:
        self.address = address
        self._ledger = ledger
        self._clock = clock
        self._pools: Dict[PairKey, PoolState] = {}

    def add_pool(
        self,
        asset_a: AssetId,
        asset_b: AssetId,
        reserve_a: Amount,
        reserve_b: Amount,
        fee_bps: int = 30,
    ) -> PoolState:
        """Create a pool and mint its reserves to the router."""
        key = canonical_pair(asset_a, asset_b)
        if key in self._pools:
            raise ValueError(f"pool already exists for {key}")
        if key[0] == asset_a:
            pool = PoolState(asset0=asset_a, asset1=asset_b, reserve0=reserve_a, reserve1=reserve_b, fee_bps=fee_bps)
        else:
            pool = PoolState(asset0=asset_b, asset1=asset_a, reserve0=reserve_b, reserve1=reserve_a, fee_bps=fee_bps)
        self._ledger.mint(asset_a, self.address, reserve_a)
        self._ledger.mint(asset_b, self.address, reserve_b)
        self._pools[key] = pool
        logger.debug("pool %s/%s created fee_bps=%d", pool.asset0, pool.asset1, fee_bps)
        return pool

    def pool(self, asset_a: AssetId, asset_b: AssetId) -> PoolState:
        key = canonical_pair(asset_a, asset_b)
        try:
            return self._pools[key]
        except KeyError:
            raise RouterError(f"no pool for pair {key}") from None

    def _simulate(self, amount_in: Amount, path: Sequence[AssetId]) -> Tuple[List[Amount], Dict[PairKey, PoolState]]:
        """Walk the path hop by hop on a working copy of the pools (a path may revisit a pool)."""
        if len(path) < 2:
            raise RouterError("INVALID_PATH")
        if amount_in <= 0:
            raise RouterError("INSUFFICIENT_INPUT_AMOUNT")
        pools = dict(self._pools)
        amounts = [amount_in]
        for asset_in, asset_out in zip(path, path[1:]):
            key = canonical_pair(asset_in, asset_out)
            pool = pools.get(key)
            if pool is None:
                raise RouterError(f"no pool for pair {key}")
            reserves = pool.reserves_for(asset_in, asset_out)
            if reserves is None:
                raise RouterError(f"pool does not trade {asset_in}->{asset_out}")
            rin, rout = reserves
            try:
                out, (new_rin, new_rout) = _cpmm_swap_exact_in(rin, rout, amounts[-1], pool.fee_bps)
            except ValueError as exc:
                raise RouterError(str(exc)) from exc
            pools[key] = pool.with_reserves(asset_in, new_rin, new_rout)
            amounts.append(out)
        return amounts, pools

    def get_amounts_out(self, amount_in: Amount, path: Sequence[AssetId]) -> List[Amount]:
        amounts, _ = self._simulate(amount_in, path)
        return amounts

    def swap_exact_input(
        self,
        caller: Address,
        amount_in: Amount,
        min_amount_out: Amount,
        path: Sequence[AssetId],
        recipient: Address,
        deadline: int,
    ) -> List[Amount]:
        if self._clock() > deadline:
            raise RouterError("EXPIRED")
        amounts, next_pools = self._simulate(amount_in, path)
        if amounts[-1] < min_amount_out:
            raise RouterError(f"INSUFFICIENT_OUTPUT_AMOUNT: {amounts[-1]} < {min_amount_out}")

        if not self._ledger.transfer_from(path[0], self.address, caller, self.address, amount_in):
            raise RouterError("TRANSFER_FROM_FAILED")

        self._pools = next_pools

        if not self._ledger.transfer(path[-1], self.address, recipient, amounts[-1]):
            raise RouterError("TRANSFER_FAILED")

        logger.debug(
            "swap %s %d -> %s %d for %s (%d hops)",
            path[0], amount_in, path[-1], amounts[-1], recipient, len(path) - 1,
        )
        return amounts

    def snapshot(self) -> Dict[PairKey, PoolState]:
        return dict(self._pools)

    def restore(self, snap: Dict[PairKey, PoolState]) -> None:
        self._pools = dict(snap)
