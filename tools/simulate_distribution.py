#!/usr/bin/env python3
"""
Offline swap + distribution simulation.

Reads a YAML scenario (distributor config plus holdings, pools and swaps),
runs every swap and then one distribution through a LocalHost, and prints
the resulting balances and canonical event log as JSON.

Scenario keys on top of the config document (see rewardsplit.config):

    owner: ops-multisig
    now: 1700000000                 # optional fixed clock
    holdings:                       # minted to the distributor
      - {asset: WETH, amount: 1000000}
    pools:
      - {assets: [WETH, REWARD], reserves: [1000000000, 2000000000], fee_bps: 30}
    swaps:
      - {path: [WETH, REWARD], min_amount_out: 1}
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rewardsplit.config import config_from_dict, load_yaml
from rewardsplit.core import TARGET_ORDER, RewardDistributor, RewardSplitError
from rewardsplit.core.types import SwapRequest
from rewardsplit.integration import ConstantProductRouter, LocalHost, SingleOwner
from rewardsplit.state import TokenLedger, event_log_digest, event_log_json


def run_scenario(doc: Mapping[str, Any]) -> Dict[str, Any]:
    config, targets = config_from_dict(doc)
    now = doc.get("now")
    clock = (lambda: int(now)) if now is not None else (lambda: int(time.time()))

    ledger = TokenLedger()
    router = ConstantProductRouter(ledger, clock=clock)
    access = SingleOwner(doc.get("owner") or "owner")
    distributor = RewardDistributor(config, targets, access=access, tokens=ledger, router=router, clock=clock)
    host = LocalHost(ledger, router, distributor)

    for pool in doc.get("pools") or []:
        (asset_a, asset_b), (reserve_a, reserve_b) = pool["assets"], pool["reserves"]
        router.add_pool(asset_a, asset_b, int(reserve_a), int(reserve_b), fee_bps=int(pool.get("fee_bps", 30)))
    for holding in doc.get("holdings") or []:
        ledger.mint(holding["asset"], distributor.address, int(holding["amount"]))

    swaps: List[Dict[str, Any]] = []
    for swap in doc.get("swaps") or []:
        req = SwapRequest(path=tuple(swap["path"]), min_amount_out=int(swap["min_amount_out"]))
        path = list(req.path)
        try:
            res = host.call(distributor.swap_for_reward, access.owner, req.path, req.min_amount_out)
        except RewardSplitError as exc:
            swaps.append({"path": path, "ok": False, "error": f"{type(exc).__name__}: {exc}"})
            continue
        swaps.append({"path": path, "ok": True, "amount_in": res.amount_in, "amount_out": res.amount_out})

    distribution: Dict[str, Any]
    try:
        result = host.call(distributor.distribute)
    except RewardSplitError as exc:
        distribution = {"ok": False, "error": f"{type(exc).__name__}: {exc}"}
    else:
        distribution = {
            "ok": True,
            "total": result.total,
            "amounts": {t.value: result.amounts[t] for t in TARGET_ORDER},
            "residual": result.residual,
        }

    recipients = {t.value: distributor.target_of(t) for t in TARGET_ORDER}
    return {
        "swaps": swaps,
        "distribution": distribution,
        "recipient_balances": {
            name: ledger.balance_of(config.reward_asset, addr) for name, addr in recipients.items()
        },
        "leftover": ledger.balance_of(config.reward_asset, distributor.address),
        "events": event_log_json(distributor.events),
        "event_log_digest": event_log_digest(distributor.events),
    }


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Simulate reward swaps and a distribution from a YAML scenario.")
    ap.add_argument("scenario", type=Path, help="Scenario YAML file")
    ap.add_argument("--out", type=Path, default=None, help="Write JSON here instead of stdout")
    args = ap.parse_args(argv)

    try:
        report = run_scenario(load_yaml(args.scenario))
    except (TypeError, ValueError, KeyError, RewardSplitError) as exc:
        print(f"[simulate] invalid scenario: {exc}", file=sys.stderr)
        return 2

    text = json.dumps(report, indent=2, sort_keys=True)
    if args.out is not None:
        args.out.write_text(text + "\n", encoding="utf-8")
    else:
        print(text)
    return 0 if report["distribution"]["ok"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
