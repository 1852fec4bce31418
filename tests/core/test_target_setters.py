"""Owner-gated setters: targets and split."""

from __future__ import annotations

import pytest

from rewardsplit.core import (
    DEFAULT_SPLIT,
    DistributorConfig,
    Event,
    HUNDRED_PERCENT,
    RewardDistributor,
    RewardSplit,
    Target,
    TargetsConfig,
    Unauthorized,
    ValidationError,
    percent,
)
from rewardsplit.core.errors import InvalidSplitBounds, InvalidSplitTotal, NoOpChange
from rewardsplit.integration import SingleOwner
from rewardsplit.state import TokenLedger

OWNER = "owner"
INITIAL = {Target.STAKING: "staking-pool", Target.TREASURY: "treasury-safe", Target.BENEFICIARY_VAULTS: "vaults"}


def _deploy() -> tuple[RewardDistributor, SingleOwner]:
    access = SingleOwner(OWNER)
    distributor = RewardDistributor(
        DistributorConfig(reward_asset="REWARD"),
        TargetsConfig(
            staking=INITIAL[Target.STAKING],
            treasury=INITIAL[Target.TREASURY],
            beneficiary_vaults=INITIAL[Target.BENEFICIARY_VAULTS],
        ),
        access=access,
        tokens=TokenLedger(),
    )
    return distributor, access


SETTERS = [
    ("set_staking_target", Target.STAKING),
    ("set_treasury_target", Target.TREASURY),
    ("set_vaults_target", Target.BENEFICIARY_VAULTS),
]


@pytest.mark.parametrize("setter, target", SETTERS)
def test_setter_replaces_only_its_target(setter: str, target: Target) -> None:
    distributor, _ = _deploy()

    previous = getattr(distributor, setter)(OWNER, "new-recipient")

    assert previous == INITIAL[target]
    expected = dict(INITIAL)
    expected[target] = "new-recipient"
    assert distributor.get_targets() == expected
    assert len(distributor.events) == 1
    ev = distributor.events[0]
    assert ev.event == Event.TARGET_CHANGED
    assert ev.args == {"target": target.value, "from": INITIAL[target], "to": "new-recipient"}


@pytest.mark.parametrize("setter, target", SETTERS)
def test_setter_rejects_current_value(setter: str, target: Target) -> None:
    distributor, _ = _deploy()

    with pytest.raises(NoOpChange) as exc_info:
        getattr(distributor, setter)(OWNER, INITIAL[target])
    assert isinstance(exc_info.value, ValidationError)
    assert distributor.events == ()


def test_setting_a_new_value_succeeds_exactly_once() -> None:
    distributor, _ = _deploy()

    distributor.set_treasury_target(OWNER, "treasury-v2")
    with pytest.raises(NoOpChange):
        distributor.set_treasury_target(OWNER, "treasury-v2")

    assert distributor.target_of(Target.TREASURY) == "treasury-v2"
    assert len(distributor.events) == 1


@pytest.mark.parametrize("setter, target", SETTERS)
def test_setter_requires_owner(setter: str, target: Target) -> None:
    distributor, _ = _deploy()

    with pytest.raises(Unauthorized):
        getattr(distributor, setter)("mallory", "mallory-wallet")
    assert distributor.target_of(target) == INITIAL[target]
    assert distributor.events == ()


def test_set_split_requires_owner() -> None:
    distributor, _ = _deploy()

    with pytest.raises(Unauthorized):
        distributor.set_split("mallory", RewardSplit(percent(20), percent(10), percent(70)))
    assert distributor.get_split() == DEFAULT_SPLIT


def test_set_split_replaces_and_emits_new_triple() -> None:
    distributor, _ = _deploy()
    new_split = RewardSplit(percent(20), percent(10), percent(70))

    previous = distributor.set_split(OWNER, new_split)

    assert previous == DEFAULT_SPLIT
    assert distributor.get_split() == new_split
    assert sum(distributor.get_split().as_tuple()) == HUNDRED_PERCENT
    assert distributor.events[0].event == Event.SPLIT_UPDATED
    assert distributor.events[0].args == {
        "staking": percent(20),
        "treasury": percent(10),
        "beneficiary_vaults": percent(70),
    }


@pytest.mark.parametrize(
    "split, exc_type",
    [
        (RewardSplit(percent(33), percent(33), percent(34) + 1), InvalidSplitTotal),
        (RewardSplit(percent(33), percent(33), percent(34) - 1), InvalidSplitTotal),
        (RewardSplit(percent(85), percent(10), percent(5)), InvalidSplitBounds),
    ],
)
def test_rejected_split_leaves_state_untouched(split: RewardSplit, exc_type: type) -> None:
    distributor, _ = _deploy()

    with pytest.raises(exc_type):
        distributor.set_split(OWNER, split)
    assert distributor.get_split() == DEFAULT_SPLIT
    assert distributor.events == ()


def test_bounds_are_exposed_read_only() -> None:
    distributor, _ = _deploy()
    bounds = distributor.get_bounds()
    assert bounds.for_target(Target.STAKING).min == percent(20)
    assert bounds.for_target(Target.TREASURY).max == percent(80)
    assert bounds.for_target(Target.BENEFICIARY_VAULTS).max == percent(90)


def test_ownership_handoff_moves_setter_rights() -> None:
    distributor, access = _deploy()

    assert access.transfer_ownership(OWNER, "new-owner") == OWNER
    with pytest.raises(Unauthorized):
        distributor.set_staking_target(OWNER, "x")
    distributor.set_staking_target("new-owner", "x")
    assert distributor.target_of(Target.STAKING) == "x"


def test_set_target_rejects_non_target_before_owner_check() -> None:
    distributor, _ = _deploy()

    with pytest.raises(TypeError):
        distributor.set_target("mallory", "staking", "x")
    assert distributor.target_of(Target.STAKING) == INITIAL[Target.STAKING]
    assert distributor.events == ()
