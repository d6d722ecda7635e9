"""
Domain model of the reward network.

Plain objects with no persistence concerns; repositories map them to and
from storage.
"""

from rewards.domain.account import ALLOCATION_TOLERANCE, Account, Beneficiary
from rewards.domain.dining import Dining
from rewards.domain.money import MINOR_UNIT, ZERO, to_money, to_percentage
from rewards.domain.restaurant import BenefitAvailabilityPolicy, Restaurant
from rewards.domain.reward import RewardConfirmation

__all__ = [
    "ALLOCATION_TOLERANCE",
    "Account",
    "Beneficiary",
    "BenefitAvailabilityPolicy",
    "Dining",
    "MINOR_UNIT",
    "Restaurant",
    "RewardConfirmation",
    "ZERO",
    "to_money",
    "to_percentage",
]
