"""
Reward confirmation repository backed by SQLAlchemy.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rewards.domain.reward import RewardConfirmation
from rewards.exceptions import DuplicateTransaction
from rewards.models.reward import RewardAllocationRecord, RewardRecord
from rewards.services.interfaces.repositories import IRewardRepository


def to_confirmation(record: RewardRecord) -> RewardConfirmation:
    return RewardConfirmation(
        confirmation_number=record.id,
        transaction_id=record.transaction_id,
        account_number=record.account_number,
        amount=record.amount,
        allocations={
            row.beneficiary_name: row.amount
            for row in sorted(record.allocations, key=lambda row: row.position)
        },
        merchant_number=record.merchant_number,
        dining_amount=record.dining_amount,
        dining_date=datetime.fromisoformat(record.dining_date),
        created_at=datetime.fromisoformat(record.created_at),
    )


class SqlAlchemyRewardRepository(IRewardRepository):
    """
    Repository for reward confirmations.

    Confirmations are only ever inserted; the unique constraint on
    ``transaction_id`` guarantees one confirmation per dining even when
    two writers race.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_transaction_id(self, transaction_id: str) -> Optional[RewardConfirmation]:
        result = await self.session.execute(
            select(RewardRecord).where(RewardRecord.transaction_id == transaction_id)
        )
        record = result.scalar_one_or_none()
        return to_confirmation(record) if record is not None else None

    async def save(self, confirmation: RewardConfirmation) -> None:
        """
        Insert a confirmation.

        Raises:
            DuplicateTransaction: If the transaction id is already stored
        """
        record = RewardRecord(
            id=confirmation.confirmation_number,
            transaction_id=confirmation.transaction_id,
            account_number=confirmation.account_number,
            amount=confirmation.amount,
            merchant_number=confirmation.merchant_number,
            dining_amount=confirmation.dining_amount,
            dining_date=confirmation.dining_date.isoformat(),
            created_at=confirmation.created_at.isoformat(),
            allocations=[
                RewardAllocationRecord(position=position, beneficiary_name=name, amount=amount)
                for position, (name, amount) in enumerate(confirmation.allocations.items())
            ],
        )
        self.session.add(record)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise DuplicateTransaction(confirmation.transaction_id) from e
