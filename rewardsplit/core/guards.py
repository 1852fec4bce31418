"""Reentrancy guard for the money-moving entry points."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from .errors import ReentrantCall


class ReentrancyGuard:
    """
    One guard shared by `swap_for_reward` and `distribute`.

    Entering while either is already running raises ReentrantCall, so a
    recipient or router calling back mid-operation aborts the outer call too.
    """

    def __init__(self) -> None:
        self._active: Optional[str] = None

    @property
    def active(self) -> Optional[str]:
        return self._active

    @contextmanager
    def enter(self, operation: str) -> Iterator[None]:
        if self._active is not None:
            raise ReentrantCall(operation, self._active)
        self._active = operation
        try:
            yield
        finally:
            self._active = None
