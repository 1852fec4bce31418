"""
All-or-nothing call runner.

The distributor assumes its host reverts every collaborator's state when a
call raises. `LocalHost` provides that for in-process use: it snapshots each
registered participant before the call and restores all of them if the call
raises, then re-raises.

A participant is anything with `snapshot() -> S` and `restore(S) -> None`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Protocol, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Participant(Protocol):
    def snapshot(self) -> Any: ...

    def restore(self, snap: Any) -> None: ...


class LocalHost:
    def __init__(self, *participants: Participant) -> None:
        self._participants: List[Participant] = list(participants)
        self._depth = 0

    def register(self, participant: Participant) -> None:
        self._participants.append(participant)

    def call(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run `fn(*args, **kwargs)`; on any exception restore every participant and re-raise."""
        # Nested calls run inside the outer call's snapshot.
        if self._depth > 0:
            return fn(*args, **kwargs)

        snaps: List[Tuple[Participant, Any]] = [(p, p.snapshot()) for p in self._participants]
        name = getattr(fn, "__name__", repr(fn))
        logger.debug("call %s", name)
        self._depth += 1
        try:
            return fn(*args, **kwargs)
        except Exception as exc:
            for participant, snap in snaps:
                participant.restore(snap)
            logger.warning("call %s reverted: %s", name, exc)
            raise
        finally:
            self._depth -= 1
