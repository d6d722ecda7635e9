"""
Repository interfaces.

Define the lookup/persist contracts the reward pipeline depends on. The
relational and in-memory implementations are interchangeable behind them.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from rewards.domain.account import Account
from rewards.domain.restaurant import Restaurant
from rewards.domain.reward import RewardConfirmation


class IAccountRepository(ABC):
    """
    Abstract interface for account storage.

    Returned accounts are detached copies: mutating one has no effect on
    storage until it is passed to ``save`` and the unit of work commits.
    """

    @abstractmethod
    async def find_by_credit_card_number(self, credit_card_number: str) -> Optional[Account]:
        """
        Load the account that owns a credit card.

        Args:
            credit_card_number: Card number from a dining

        Returns:
            The account, or None if no account owns the card
        """
        pass

    @abstractmethod
    async def find_by_number(self, account_number: str) -> Optional[Account]:
        """
        Load an account by its account number.

        Returns:
            The account, or None if it does not exist
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[Account]:
        """
        Load every account, ordered by account number.
        """
        pass

    @abstractmethod
    async def save(self, account: Account) -> None:
        """
        Insert or update an account with its beneficiaries and cards.

        The stored version must equal ``account.version``; on success both
        are incremented by one.

        Args:
            account: Account to persist

        Raises:
            ConcurrentModification: If the stored version differs, meaning
                another writer saved the account since it was loaded
        """
        pass


class IRestaurantRepository(ABC):
    """
    Abstract interface for restaurant storage.
    """

    @abstractmethod
    async def find_by_merchant_number(self, merchant_number: str) -> Optional[Restaurant]:
        """
        Load a restaurant by merchant number.

        Returns:
            The restaurant, or None if it is not registered
        """
        pass

    @abstractmethod
    async def save(self, restaurant: Restaurant) -> None:
        """
        Insert or update a restaurant (administrative use).
        """
        pass


class IRewardRepository(ABC):
    """
    Abstract interface for reward confirmation storage. Append-only.
    """

    @abstractmethod
    async def find_by_transaction_id(self, transaction_id: str) -> Optional[RewardConfirmation]:
        """
        Load the confirmation recorded for a dining transaction.

        Returns:
            The confirmation, or None if the transaction was never rewarded
        """
        pass

    @abstractmethod
    async def save(self, confirmation: RewardConfirmation) -> None:
        """
        Record a new confirmation.

        Raises:
            DuplicateTransaction: If a confirmation already exists for the
                same transaction id
        """
        pass
