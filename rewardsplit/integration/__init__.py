"""
In-process collaborators for the reward splitter: owner access, a
constant-product router and an all-or-nothing host.
"""

from .access import SingleOwner
from .host import LocalHost
from .router import ConstantProductRouter, RouterError

__all__ = [
    "SingleOwner",
    "LocalHost",
    "ConstantProductRouter",
    "RouterError",
]
