"""Exception types for the reward splitter.

Every operation checks its preconditions up front and raises one of these
before touching state or emitting events. Callers can match on the four
broad kinds (``Unauthorized``, ``ValidationError``, ``InsufficientBalance``,
``CollaboratorFailure``) or on the specific subclass.
"""

from __future__ import annotations


class RewardSplitError(Exception):
    """Base class for all reward splitter failures."""


class Unauthorized(RewardSplitError):
    """Raised when the caller lacks the owner privilege."""

    def __init__(self, caller: str, operation: str) -> None:
        self.caller = caller
        self.operation = operation
        super().__init__(f"{caller!r} is not allowed to call {operation}")


class ValidationError(RewardSplitError):
    """Raised when an input fails a precondition."""


class InvalidSplitBounds(ValidationError):
    def __init__(self, target: str, value: int, lo: int, hi: int) -> None:
        self.target = target
        self.value = value
        self.lo = lo
        self.hi = hi
        super().__init__(f"split for {target} out of bounds: {value} not in [{lo}, {hi}]")


class InvalidSplitTotal(ValidationError):
    def __init__(self, total: int, expected: int) -> None:
        self.total = total
        self.expected = expected
        super().__init__(f"split must sum to {expected}, got {total}")


class InvalidPath(ValidationError):
    """Swap path has fewer than two assets."""


class InvalidMinAmount(ValidationError):
    """Minimum swap output must be positive."""


class PathMustEndInRewardAsset(ValidationError):
    """Last asset of a swap path is not the reward asset."""


class NoOpChange(ValidationError):
    """New value equals the stored one."""


class InsufficientBalance(RewardSplitError):
    """Raised when there is nothing to swap or distribute."""


class NoSwappableBalance(InsufficientBalance):
    pass


class NoBalance(InsufficientBalance):
    pass


class CollaboratorFailure(RewardSplitError):
    """Raised when the token or router reports a failure."""


class TransferFailed(CollaboratorFailure):
    pass


class SwapFailed(CollaboratorFailure):
    pass


class ReentrantCall(RewardSplitError):
    """Raised when a guarded operation is entered while another is running."""

    def __init__(self, operation: str, active: str) -> None:
        self.operation = operation
        self.active = active
        super().__init__(f"reentrant call to {operation} while {active} is executing")
