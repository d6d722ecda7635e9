"""
Restaurant repository backed by SQLAlchemy.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rewards.domain.restaurant import BenefitAvailabilityPolicy, Restaurant
from rewards.models.restaurant import RestaurantRecord
from rewards.services.interfaces.repositories import IRestaurantRepository


class SqlAlchemyRestaurantRepository(IRestaurantRepository):
    """
    Repository for restaurant data access.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _load(self, merchant_number: str) -> Optional[RestaurantRecord]:
        result = await self.session.execute(
            select(RestaurantRecord).where(RestaurantRecord.merchant_number == merchant_number)
        )
        return result.scalar_one_or_none()

    async def find_by_merchant_number(self, merchant_number: str) -> Optional[Restaurant]:
        record = await self._load(merchant_number)
        if record is None:
            return None
        return Restaurant(
            merchant_number=record.merchant_number,
            name=record.name,
            benefit_percentage=record.benefit_percentage,
            benefit_availability_policy=BenefitAvailabilityPolicy(
                record.benefit_availability_policy
            ),
        )

    async def save(self, restaurant: Restaurant) -> None:
        record = await self._load(restaurant.merchant_number)
        if record is None:
            record = RestaurantRecord(merchant_number=restaurant.merchant_number)
            self.session.add(record)
        record.name = restaurant.name
        record.benefit_percentage = restaurant.benefit_percentage
        record.benefit_availability_policy = restaurant.benefit_availability_policy.value
        await self.session.flush()
