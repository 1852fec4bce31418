"""
rewardsplit: swap held assets into a reward asset and split it three ways
(staking / treasury / beneficiary vaults) under owner-bounded percentages.
"""

__version__ = "0.1.0"
