"""
Restaurant response schemas.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from rewards.domain.restaurant import BenefitAvailabilityPolicy


class RestaurantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    merchant_number: str
    name: str
    benefit_percentage: Decimal
    benefit_availability_policy: BenefitAvailabilityPolicy
