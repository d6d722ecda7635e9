"""
Restaurant table.
"""

from sqlalchemy import Column, String

from rewards.models.base import Base, DecimalString, ModelMixin, TimestampMixin, UUIDMixin


class RestaurantRecord(Base, UUIDMixin, TimestampMixin, ModelMixin):
    """
    Participating restaurant.

    Attributes:
        merchant_number: Unique merchant number
        name: Display name
        benefit_percentage: Reward rate applied to dining amounts
        benefit_availability_policy: "A" (always) or "N" (never)
    """

    __tablename__ = "restaurants"

    merchant_number = Column(String(32), nullable=False, unique=True)

    name = Column(String(255), nullable=False)

    benefit_percentage = Column(DecimalString, nullable=False)

    benefit_availability_policy = Column(
        String(1),
        nullable=False,
        default="A",
        doc="Benefit availability policy code"
    )
