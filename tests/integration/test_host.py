"""LocalHost: every collaborator is rolled back when a call raises."""

from __future__ import annotations

import pytest

from rewardsplit.core import DistributorConfig, ReentrantCall, RewardDistributor, RewardSplit, TargetsConfig, percent
from rewardsplit.core.errors import SwapFailed, TransferFailed
from rewardsplit.integration import ConstantProductRouter, LocalHost, SingleOwner
from rewardsplit.state import TokenLedger

REWARD = "REWARD"
WETH = "WETH"


def _deploy():
    ledger = TokenLedger()
    router = ConstantProductRouter(ledger, clock=lambda: 0)
    access = SingleOwner("owner")
    distributor = RewardDistributor(
        DistributorConfig(reward_asset=REWARD),
        TargetsConfig(staking="staking", treasury="treasury", beneficiary_vaults="vaults"),
        access=access,
        tokens=ledger,
        router=router,
        clock=lambda: 0,
    )
    host = LocalHost(ledger, router, distributor, access)
    return host, distributor, ledger, router


def test_failed_transfer_rolls_back_earlier_transfers() -> None:
    host, distributor, ledger, _ = _deploy()
    ledger.mint(REWARD, distributor.address, 1000)
    ledger.freeze("vaults")
    before = ledger.holdings()

    with pytest.raises(TransferFailed):
        host.call(distributor.distribute)

    assert ledger.holdings() == before
    assert ledger.balance_of(REWARD, "staking") == 0
    assert distributor.events == ()


def test_failed_swap_rolls_back_allowance() -> None:
    host, distributor, ledger, router = _deploy()
    router.add_pool(WETH, REWARD, 1_000_000, 2_000_000)
    ledger.mint(WETH, distributor.address, 1000)
    pools_before = router.snapshot()

    with pytest.raises(SwapFailed):
        host.call(distributor.swap_for_reward, "anyone", [WETH, REWARD], 10**9)

    assert ledger.allowance(WETH, distributor.address, router.address) == 0
    assert ledger.balance_of(WETH, distributor.address) == 1000
    assert router.snapshot() == pools_before


def test_reentrant_payout_rolls_back_swap_and_pools() -> None:
    host, distributor, ledger, router = _deploy()
    router.add_pool(WETH, REWARD, 1_000_000, 2_000_000)
    ledger.mint(WETH, distributor.address, 1000)
    ledger.on_receive(distributor.address, lambda asset, sender, amount: distributor.distribute())
    pools_before = router.snapshot()

    with pytest.raises(ReentrantCall):
        host.call(distributor.swap_for_reward, "anyone", [WETH, REWARD], 1)

    assert ledger.balance_of(WETH, distributor.address) == 1000
    assert ledger.balance_of(REWARD, distributor.address) == 0
    assert router.snapshot() == pools_before


def test_outer_failure_discards_committed_inner_state() -> None:
    host, distributor, ledger, _ = _deploy()
    ledger.mint(REWARD, distributor.address, 100)

    def batch() -> None:
        distributor.set_split("owner", RewardSplit(percent(20), percent(10), percent(70)))
        distributor.distribute()
        raise RuntimeError("later step failed")

    split_before = distributor.get_split()
    with pytest.raises(RuntimeError):
        host.call(batch)

    assert distributor.get_split() == split_before
    assert distributor.events == ()
    assert ledger.balance_of(REWARD, distributor.address) == 100


def test_successful_call_commits() -> None:
    host, distributor, ledger, _ = _deploy()
    ledger.mint(REWARD, distributor.address, 100)

    result = host.call(distributor.distribute)

    assert result.total == 100
    assert ledger.balance_of(REWARD, "vaults") == 34
    assert len(distributor.events) == 4


def test_ownership_transfer_is_rolled_back_with_the_call() -> None:
    host, distributor, _, _ = _deploy()
    access = SingleOwner("owner")
    host.register(access)

    def handoff_then_fail() -> None:
        access.transfer_ownership("owner", "new-owner")
        raise RuntimeError("abort")

    with pytest.raises(RuntimeError):
        host.call(handoff_then_fail)
    assert access.owner == "owner"
