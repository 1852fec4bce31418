"""
Balance state and event-log encoding for the reward splitter.
"""

from .canonical import canonical_json_bytes, event_log_digest, event_log_json
from .ledger import LedgerToken, TokenLedger

__all__ = [
    "canonical_json_bytes",
    "event_log_digest",
    "event_log_json",
    "LedgerToken",
    "TokenLedger",
]
