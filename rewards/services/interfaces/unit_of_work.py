"""
Unit of work interface.

Groups the repositories over one transactional boundary so that an account
update and its reward confirmation become visible together or not at all.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from rewards.services.interfaces.repositories import (
    IAccountRepository,
    IRestaurantRepository,
    IRewardRepository,
)


class IUnitOfWork(ABC):
    """
    Abstract transactional scope over the reward network repositories.

    Usage:
        async with uow_factory() as uow:
            account = await uow.accounts.find_by_number("123456789")
            ...
            await uow.accounts.save(account)
            await uow.commit()

    Leaving the ``async with`` block without calling ``commit()`` discards
    every write made through the repositories.
    """

    accounts: IAccountRepository
    restaurants: IRestaurantRepository
    rewards: IRewardRepository

    async def __aenter__(self) -> "IUnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> Optional[bool]:
        await self.rollback()
        return None

    @abstractmethod
    async def commit(self) -> None:
        """
        Publish all staged writes atomically.

        Raises:
            ConcurrentModification: If a saved account changed meanwhile
            DuplicateTransaction: If a saved reward's transaction id is taken
            PersistenceFailure: If the store rejected the writes
        """
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """
        Discard staged writes.
        """
        pass


UnitOfWorkFactory = Callable[[], IUnitOfWork]
