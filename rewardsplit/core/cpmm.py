"""
Constant Product Market Maker (CPMM) quote math.

Used by the reference router to price multi-hop swaps. Rounding rules:
- fee = ceil(amount_in * fee_bps / 10_000), charged on the gross input and left in the pool,
- amount_out = floor(reserve_out * net_in / (reserve_in + net_in)).

Invariant: after each swap, new_reserve_in * new_reserve_out >= reserve_in * reserve_out.
"""

from __future__ import annotations

from typing import Tuple

from .types import Amount


BPS_DENOM = 10_000


def _ceil_div_nonneg(numerator: int, denominator: int) -> int:
    if denominator <= 0:
        raise ValueError("denominator must be positive")
    if numerator < 0:
        raise ValueError("numerator must be non-negative")
    return (numerator + denominator - 1) // denominator


def compute_fee_total(gross_amount: Amount, fee_bps: int) -> Amount:
    """fee_total = ceil(gross_amount * fee_bps / 10_000)"""
    if gross_amount < 0:
        raise ValueError(f"gross_amount must be non-negative: {gross_amount}")
    if not (0 <= fee_bps <= BPS_DENOM):
        raise ValueError(f"fee_bps must be in [0, {BPS_DENOM}]: {fee_bps}")
    return _ceil_div_nonneg(gross_amount * fee_bps, BPS_DENOM)


def swap_exact_in(
    reserve_in: Amount,
    reserve_out: Amount,
    amount_in: Amount,
    fee_bps: int,
) -> Tuple[Amount, Tuple[Amount, Amount]]:
    """
    Compute output amount for an exact-in swap against one pool.

    Args:
        reserve_in: Current reserve of input asset
        reserve_out: Current reserve of output asset
        amount_in: Exact input amount
        fee_bps: Fee in basis points (0-10000)

    Returns:
        Tuple of (amount_out, (new_reserve_in, new_reserve_out))

    Raises:
        ValueError: If inputs are invalid or would violate invariants
    """
    if reserve_in <= 0 or reserve_out <= 0:
        raise ValueError(f"Reserves must be positive: ({reserve_in}, {reserve_out})")
    if amount_in <= 0:
        raise ValueError(f"amount_in must be positive: {amount_in}")

    fee = compute_fee_total(amount_in, fee_bps)
    net_in = amount_in - fee
    amount_out = (reserve_out * net_in) // (reserve_in + net_in)

    new_reserve_in = reserve_in + amount_in
    new_reserve_out = reserve_out - amount_out
    if new_reserve_out <= 0:
        raise ValueError("Swap would drain the output reserve")

    if new_reserve_in * new_reserve_out < reserve_in * reserve_out:
        raise ValueError("Invariant violation: k decreased")

    return amount_out, (new_reserve_in, new_reserve_out)
