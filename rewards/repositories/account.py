"""
Account repository backed by SQLAlchemy.

Maps account rows (with beneficiaries and credit cards) to the ``Account``
aggregate and saves it back with an optimistic version check.
"""

from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from rewards.domain.account import Account, Beneficiary
from rewards.exceptions import ConcurrentModification
from rewards.models.account import AccountRecord, BeneficiaryRecord, CreditCardRecord
from rewards.models.base import utc_now_iso
from rewards.services.interfaces.repositories import IAccountRepository


def to_account(record: AccountRecord) -> Account:
    """Build the domain aggregate from a loaded record."""
    return Account(
        number=record.number,
        name=record.name,
        beneficiaries=[
            Beneficiary(
                name=row.name,
                allocation_percentage=row.allocation_percentage,
                savings=row.savings,
            )
            for row in sorted(record.beneficiaries, key=lambda row: row.position)
        ],
        credit_card_numbers=[card.number for card in record.credit_cards],
        version=record.version,
    )


class SqlAlchemyAccountRepository(IAccountRepository):
    """
    Repository for account data access.

    Attributes:
        session: SQLAlchemy async session for database operations
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _load(self, *criteria) -> Optional[AccountRecord]:
        # populate_existing: always read the committed row, not the identity map
        stmt = (
            select(AccountRecord)
            .where(*criteria)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_credit_card_number(self, credit_card_number: str) -> Optional[Account]:
        record = await self._load(
            AccountRecord.id.in_(
                select(CreditCardRecord.account_id).where(
                    CreditCardRecord.number == credit_card_number
                )
            )
        )
        return to_account(record) if record is not None else None

    async def find_by_number(self, account_number: str) -> Optional[Account]:
        record = await self._load(AccountRecord.number == account_number)
        return to_account(record) if record is not None else None

    async def find_all(self) -> List[Account]:
        result = await self.session.execute(
            select(AccountRecord).order_by(AccountRecord.number)
        )
        return [to_account(record) for record in result.scalars().all()]

    async def save(self, account: Account) -> None:
        """
        Upsert an account.

        Existing accounts are updated with a compare-and-swap on ``version``:
        the UPDATE only matches when the stored version still equals the
        one the account was loaded with.

        Raises:
            ConcurrentModification: If the stored version moved on
        """
        new_version = account.version + 1
        result = await self.session.execute(
            update(AccountRecord)
            .where(
                AccountRecord.number == account.number,
                AccountRecord.version == account.version,
            )
            .values(version=new_version, name=account.name, updated_at=utc_now_iso())
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 0:
            exists = await self.session.scalar(
                select(AccountRecord.id).where(AccountRecord.number == account.number)
            )
            if exists is not None:
                raise ConcurrentModification(account.number, account.version)
            record = AccountRecord(
                number=account.number,
                name=account.name,
                version=new_version,
                beneficiaries=[],
                credit_cards=[],
            )
            self.session.add(record)
        else:
            record = await self._load(AccountRecord.number == account.number)

        self._sync_children(record, account)
        await self.session.flush()
        account.version = new_version

    @staticmethod
    def _sync_children(record: AccountRecord, account: Account) -> None:
        # Rows are matched by name/number; rows no longer present are deleted
        existing = {row.name: row for row in record.beneficiaries}
        beneficiaries = []
        for position, beneficiary in enumerate(account.beneficiaries):
            row = existing.get(beneficiary.name) or BeneficiaryRecord(name=beneficiary.name)
            row.position = position
            row.allocation_percentage = beneficiary.allocation_percentage
            row.savings = beneficiary.savings
            beneficiaries.append(row)
        record.beneficiaries = beneficiaries

        cards = {card.number: card for card in record.credit_cards}
        record.credit_cards = [
            cards.get(number) or CreditCardRecord(number=number)
            for number in account.credit_card_numbers
        ]
