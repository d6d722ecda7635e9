"""
Reward network.

Rewards restaurant dinings: computes the reward a restaurant grants for a
dining, splits it across the paying account's beneficiaries and records a
confirmation, once per transaction.
"""

__version__ = "0.1.0"
