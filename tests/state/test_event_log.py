"""Canonical JSON and digest of the committed event log."""

from __future__ import annotations

import pytest

from rewardsplit.core.types import EmittedEvent, Event
from rewardsplit.state.canonical import canonical_json_bytes, domain_sep_bytes, event_log_digest, event_log_json


def test_canonical_json_is_sorted_and_compact() -> None:
    assert canonical_json_bytes({"b": 1, "a": [2, "x"]}) == b'{"a":[2,"x"],"b":1}'


def test_floats_rejected() -> None:
    with pytest.raises(TypeError):
        canonical_json_bytes({"amount": 1.5})
    with pytest.raises(TypeError):
        canonical_json_bytes([{"nested": [0.1]}])


def test_domain_separator_shape() -> None:
    assert domain_sep_bytes("event_log") == b"rewardsplit:event_log:v1\x00"
    with pytest.raises(ValueError):
        domain_sep_bytes("bad\x00label")


def test_event_log_digest_is_deterministic_and_order_sensitive() -> None:
    a = EmittedEvent(Event.REWARD_DEPOSITED, {"target": "staking", "recipient": "s", "amount": 33 * 10**18})
    b = EmittedEvent(Event.REWARDS_DISTRIBUTED, {"total": 100 * 10**18})

    assert event_log_json([a, b]) == [
        {"event": "RewardDeposited", "args": {"target": "staking", "recipient": "s", "amount": 33 * 10**18}},
        {"event": "RewardsDistributed", "args": {"total": 100 * 10**18}},
    ]
    assert event_log_digest([a, b]) == event_log_digest([a, b])
    assert event_log_digest([a, b]) != event_log_digest([b, a])
    assert event_log_digest([]).startswith("0x")
