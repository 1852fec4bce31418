"""
YAML configuration loading.

Example document:

    reward_asset: REWARD
    address: reward-splitter        # optional
    swap_deadline_seconds: 600      # optional
    bounds:                         # optional, defaults to DEFAULT_BOUNDS
      staking: {min: "20%", max: "80%"}
      treasury: {min: "10%", max: "80%"}
      beneficiary_vaults: {min: "20%", max: "90%"}
    split:                          # optional, defaults to DEFAULT_SPLIT
      staking: "33%"
      treasury: "33%"
      beneficiary_vaults: "34%"
    targets:
      staking: staking-pool
      treasury: treasury-safe
      beneficiary_vaults: beneficiary-vaults

Percentages are either already-scaled integers (33 * 10**18) or strings
ending in "%" ("12.5%"), converted exactly with Decimal.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Mapping, Tuple

import yaml

from .core.config import SWAP_DEADLINE_SECONDS, DistributorConfig, TargetsConfig
from .core.split import (
    DEFAULT_BOUNDS,
    DEFAULT_SPLIT,
    PERCENT_SCALE,
    AllocationBound,
    AllocationBounds,
    RewardSplit,
)
from .core.types import TARGET_ORDER


def parse_percent(value: Any, *, name: str = "percent") -> int:
    """Convert a config percentage to 1e18 fixed point."""
    if isinstance(value, bool):
        raise TypeError(f"{name} must be an int or a percent string")
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        raise TypeError(f"{name} must be an int or a percent string, got {type(value).__name__}")
    text = value.strip()
    if not text.endswith("%"):
        raise ValueError(f"{name} string must end with '%': {value!r}")
    try:
        scaled = Decimal(text[:-1].strip()) * PERCENT_SCALE
    except InvalidOperation as exc:
        raise ValueError(f"{name} is not a number: {value!r}") from exc
    if not scaled.is_finite():
        raise ValueError(f"{name} must be finite: {value!r}")
    if scaled != scaled.to_integral_value():
        raise ValueError(f"{name} has more than 18 decimal places: {value!r}")
    return int(scaled)


def _require_mapping(obj: Any, name: str) -> Mapping[str, Any]:
    if not isinstance(obj, Mapping):
        raise TypeError(f"{name} must be a mapping")
    return obj


def _parse_bounds(obj: Any) -> AllocationBounds:
    section = _require_mapping(obj, "bounds")
    parsed = {}
    for target in TARGET_ORDER:
        entry = _require_mapping(section.get(target.value), f"bounds.{target.value}")
        parsed[target.value] = AllocationBound(
            min=parse_percent(entry.get("min"), name=f"bounds.{target.value}.min"),
            max=parse_percent(entry.get("max"), name=f"bounds.{target.value}.max"),
        )
    return AllocationBounds(**parsed)


def _parse_split(obj: Any) -> RewardSplit:
    section = _require_mapping(obj, "split")
    return RewardSplit(
        **{t.value: parse_percent(section.get(t.value), name=f"split.{t.value}") for t in TARGET_ORDER}
    )


def config_from_dict(doc: Mapping[str, Any]) -> Tuple[DistributorConfig, TargetsConfig]:
    """Build configs from an already-parsed document. Unknown keys are ignored."""
    doc = _require_mapping(doc, "config")
    bounds = _parse_bounds(doc["bounds"]) if doc.get("bounds") is not None else DEFAULT_BOUNDS
    split = _parse_split(doc["split"]) if doc.get("split") is not None else DEFAULT_SPLIT

    kwargs: dict[str, Any] = {
        "reward_asset": doc.get("reward_asset"),
        "bounds": bounds,
        "initial_split": split,
        "swap_deadline_seconds": doc.get("swap_deadline_seconds", SWAP_DEADLINE_SECONDS),
    }
    if doc.get("address") is not None:
        kwargs["address"] = doc["address"]
    config = DistributorConfig(**kwargs)

    targets_doc = _require_mapping(doc.get("targets"), "targets")
    targets = TargetsConfig(**{t.value: targets_doc.get(t.value) for t in TARGET_ORDER})
    return config, targets


def load_yaml(path: Path | str) -> Mapping[str, Any]:
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    return _require_mapping(obj, "config YAML")


def load_config(path: Path | str) -> Tuple[DistributorConfig, TargetsConfig]:
    return config_from_dict(load_yaml(path))
