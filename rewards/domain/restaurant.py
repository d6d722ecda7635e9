"""
Restaurants participating in the reward network.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from rewards.domain.dining import Dining
from rewards.domain.money import to_percentage


class BenefitAvailabilityPolicy(str, Enum):
    """Decides whether a dining at a restaurant earns a benefit."""

    ALWAYS = "A"
    NEVER = "N"

    def is_benefit_available_for(self, dining: Dining) -> bool:
        return self is BenefitAvailabilityPolicy.ALWAYS


@dataclass(frozen=True)
class Restaurant:
    """
    Attributes:
        merchant_number: Unique merchant number
        name: Display name
        benefit_percentage: Reward rate applied to dining amounts
        benefit_availability_policy: Eligibility policy
    """

    merchant_number: str
    name: str
    benefit_percentage: Decimal
    benefit_availability_policy: BenefitAvailabilityPolicy = BenefitAvailabilityPolicy.ALWAYS

    def __post_init__(self):
        object.__setattr__(self, "benefit_percentage", to_percentage(self.benefit_percentage))
        object.__setattr__(
            self,
            "benefit_availability_policy",
            BenefitAvailabilityPolicy(self.benefit_availability_policy),
        )
        if self.benefit_percentage < 0:
            raise ValueError(
                f"Restaurant '{self.merchant_number}' has a negative benefit percentage"
            )
