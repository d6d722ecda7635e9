"""
Reward network interface.

The single entry point presentation layers (REST, CLI, batch jobs) use to
reward dinings.
"""

from abc import ABC, abstractmethod

from rewards.domain.dining import Dining
from rewards.domain.reward import RewardConfirmation


class IRewardNetwork(ABC):
    """
    Abstract interface for the reward pipeline.
    """

    @abstractmethod
    async def reward(self, dining: Dining) -> RewardConfirmation:
        """
        Reward the account that paid for a dining.

        Computes the reward, splits it across the account's beneficiaries,
        and persists the updated account together with a confirmation.
        Rewarding the same transaction twice returns the first confirmation.

        Args:
            dining: The dining transaction

        Returns:
            The reward confirmation

        Raises:
            RestaurantNotFound: If the merchant is unknown
            AccountNotFound: If no account owns the credit card
            InvalidAllocation: If the account's allocations are corrupt
            ConcurrentModification: If the account kept changing underneath
            PersistenceFailure: If the writes could not be committed
        """
        pass

    @abstractmethod
    async def find_confirmation(self, transaction_id: str) -> RewardConfirmation:
        """
        Look up the confirmation recorded for a transaction.

        Raises:
            RewardNotFound: If the transaction was never rewarded
        """
        pass
