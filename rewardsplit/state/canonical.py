"""
Canonical encoding of the committed event log.

The event log is the only durable record the distributor keeps; external
observers index it. These helpers give it a stable byte form and digest so
two runs of the same scenario can be compared.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Iterable, List

from ..core.types import EmittedEvent


EVENT_LOG_ENCODING_VERSION = 1


def _reject_floats(value: Any) -> None:
    if isinstance(value, float):
        raise TypeError("floats are not allowed in canonical encoding")
    if isinstance(value, dict):
        for k, v in value.items():
            if not isinstance(k, str):
                raise TypeError("dict keys must be str for canonical encoding")
            _reject_floats(v)
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            _reject_floats(item)


def canonical_json_bytes(value: Any) -> bytes:
    """
    Canonical JSON encoding for hashing.

    Rules:
    - UTF-8
    - sort_keys=True
    - separators=(',', ':') (no whitespace)
    - allow_nan=False
    - floats rejected (amounts are integers; 1e18-scaled values lose precision as floats)
    """
    _reject_floats(value)
    text = json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return text.encode("utf-8")


def sha256_hex(data: bytes) -> str:
    return "0x" + hashlib.sha256(data).hexdigest()


def domain_sep_bytes(label: str, version: int = 1) -> bytes:
    """ASCII-only, NUL-terminated domain separation prefix."""
    if not isinstance(label, str) or not label:
        raise TypeError("label must be a non-empty str")
    if "\x00" in label:
        raise ValueError("label must not contain NUL")
    try:
        label_bytes = label.encode("ascii")
    except UnicodeEncodeError as exc:
        raise ValueError("label must be ASCII") from exc
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("version must be a positive int")
    return b"rewardsplit:" + label_bytes + b":v" + str(version).encode("ascii") + b"\x00"


def event_log_json(events: Iterable[EmittedEvent]) -> List[dict]:
    return [ev.to_json_dict() for ev in events]


def event_log_digest(events: Iterable[EmittedEvent]) -> str:
    payload = canonical_json_bytes(event_log_json(events))
    return sha256_hex(domain_sep_bytes("event_log", EVENT_LOG_ENCODING_VERSION) + payload)
