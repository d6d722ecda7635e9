"""
Relational unit of work.

One SQLAlchemy session, and therefore one database transaction, shared by
the three repositories. Database errors leaving the block are translated
to ``PersistenceFailure``.
"""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rewards.core.logging_config import get_logger
from rewards.exceptions import PersistenceFailure
from rewards.repositories.account import SqlAlchemyAccountRepository
from rewards.repositories.restaurant import SqlAlchemyRestaurantRepository
from rewards.repositories.reward import SqlAlchemyRewardRepository
from rewards.services.interfaces.unit_of_work import IUnitOfWork

logger = get_logger(__name__)


class SqlAlchemyUnitOfWork(IUnitOfWork):
    """
    Unit of work over an async SQLAlchemy session.

    Example:
        async with SqlAlchemyUnitOfWork(async_session_maker) as uow:
            await uow.restaurants.save(restaurant)
            await uow.commit()
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        self.session = self._session_factory()
        self.accounts = SqlAlchemyAccountRepository(self.session)
        self.restaurants = SqlAlchemyRestaurantRepository(self.session)
        self.rewards = SqlAlchemyRewardRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            # Closing rolls back anything that was not committed
            await self.session.close()
        finally:
            self.session = None

        if isinstance(exc, SQLAlchemyError):
            logger.error(f"Database error, transaction rolled back: {exc}")
            raise PersistenceFailure(f"Database error: {exc}") from exc

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceFailure(f"Commit failed: {e}") from e

    async def rollback(self) -> None:
        await self.session.rollback()
