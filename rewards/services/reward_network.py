"""
Reward network service.

Orchestrates the reward pipeline: resolve the restaurant and the account,
compute the reward, split it across beneficiaries, credit them, and persist
the account together with the confirmation in one unit of work.
"""

import asyncio
from typing import Optional

from rewards.core.logging_config import get_logger, log_with_context
from rewards.core.retry import retry_with_backoff
from rewards.domain.account import Account
from rewards.domain.dining import Dining
from rewards.domain.money import ZERO
from rewards.domain.reward import RewardConfirmation
from rewards.exceptions import (
    AccountNotFound,
    ConcurrentModification,
    DuplicateTransaction,
    PolicyViolation,
    RestaurantNotFound,
    RewardNotFound,
)
from rewards.services.allocation import allocate
from rewards.services.interfaces.reward_network import IRewardNetwork
from rewards.services.interfaces.unit_of_work import IUnitOfWork, UnitOfWorkFactory
from rewards.services.reward_calculator import calculate_reward

logger = get_logger(__name__)


class RewardNetworkService(IRewardNetwork):
    """
    Implementation of the reward network.

    Stateless apart from its unit-of-work factory: every call opens its own
    unit of work, so one instance can serve concurrent requests.

    Concurrent rewards against the same account are serialized
    optimistically. The account save fails with ``ConcurrentModification``
    when another call committed first; the whole attempt is then re-run
    from a fresh load, up to ``max_attempts`` times.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        max_attempts: int = 3,
        retry_base_delay: float = 0.05,
        retry_max_delay: float = 1.0,
    ):
        """
        Initialize the reward network.

        Args:
            uow_factory: Creates a fresh unit of work per attempt
            max_attempts: Attempts per reward() call on concurrent modification
            retry_base_delay: First backoff delay in seconds
            retry_max_delay: Cap on the backoff delay
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._uow_factory = uow_factory
        self.max_attempts = max_attempts
        self._reward_with_retry = retry_with_backoff(
            max_retries=max_attempts - 1,
            base_delay=retry_base_delay,
            max_delay=retry_max_delay,
            exceptions=(ConcurrentModification,),
        )(self._reward_once)

    async def reward(self, dining: Dining) -> RewardConfirmation:
        """
        Reward the account that paid for a dining.

        Steps:
        1. Resolve the restaurant by merchant number
        2. Resolve the account by credit card and check its allocations
        3. Return the existing confirmation if the transaction was rewarded
        4. Compute the reward (zero when the restaurant policy excludes it)
        5. Split it across beneficiaries
        6. Credit each beneficiary
        7. Save the account and the confirmation in one unit of work
        8. Return the confirmation

        Raises:
            RestaurantNotFound: Unknown merchant
            AccountNotFound: No account owns the credit card
            InvalidAllocation: Account allocations are corrupt
            ConcurrentModification: Still conflicting after max_attempts
            PersistenceFailure: Writes could not be committed
        """
        log_with_context(
            logger,
            "info",
            "Rewarding dining",
            transaction_id=dining.transaction_id,
            merchant_number=dining.merchant_number,
            amount=str(dining.amount),
        )
        return await self._reward_with_retry(dining)

    async def find_confirmation(self, transaction_id: str) -> RewardConfirmation:
        async with self._uow_factory() as uow:
            confirmation = await uow.rewards.find_by_transaction_id(transaction_id)
        if confirmation is None:
            raise RewardNotFound(transaction_id)
        return confirmation

    async def _reward_once(self, dining: Dining) -> RewardConfirmation:
        try:
            async with self._uow_factory() as uow:
                return await self._reward_in(uow, dining)
        except DuplicateTransaction:
            # A concurrent call recorded this transaction first; its result wins
            async with self._uow_factory() as uow:
                existing = await uow.rewards.find_by_transaction_id(dining.transaction_id)
            if existing is None:
                raise
            log_with_context(
                logger,
                "info",
                "Transaction rewarded concurrently, returning existing confirmation",
                transaction_id=dining.transaction_id,
            )
            return existing

    async def _reward_in(self, uow: IUnitOfWork, dining: Dining) -> RewardConfirmation:
        restaurant = await uow.restaurants.find_by_merchant_number(dining.merchant_number)
        if restaurant is None:
            raise RestaurantNotFound(dining.merchant_number)

        account = await uow.accounts.find_by_credit_card_number(dining.credit_card_number)
        if account is None:
            raise AccountNotFound(dining.credit_card_number)
        account.validate_allocations()

        existing = await uow.rewards.find_by_transaction_id(dining.transaction_id)
        if existing is not None:
            log_with_context(
                logger,
                "info",
                "Transaction already rewarded",
                transaction_id=dining.transaction_id,
                account_number=existing.account_number,
            )
            return existing

        try:
            amount = calculate_reward(dining, restaurant)
            allocations = allocate(amount, account.beneficiaries)
        except PolicyViolation as e:
            log_with_context(
                logger,
                "info",
                f"No benefit for dining: {e}",
                transaction_id=dining.transaction_id,
                merchant_number=restaurant.merchant_number,
            )
            amount, allocations = ZERO, {}

        account.credit(allocations)
        confirmation = RewardConfirmation.for_dining(dining, account.number, amount, allocations)

        await self._persist(uow, account if amount > 0 else None, confirmation)

        log_with_context(
            logger,
            "info",
            "Reward recorded",
            transaction_id=dining.transaction_id,
            account_number=account.number,
            confirmation_number=confirmation.confirmation_number,
            amount=str(amount),
        )
        return confirmation

    async def _persist(
        self,
        uow: IUnitOfWork,
        account: Optional[Account],
        confirmation: RewardConfirmation,
    ) -> None:
        """
        Write the account and the confirmation, then commit.

        Once started the write runs to completion even if the caller is
        cancelled, however many times; the cancellation is re-raised
        afterwards.
        """
        async def write() -> None:
            if account is not None:
                await uow.accounts.save(account)
            await uow.rewards.save(confirmation)
            await uow.commit()

        task = asyncio.ensure_future(write())
        cancelled = False
        # asyncio.wait never cancels the task it waits on
        while not task.done():
            try:
                await asyncio.wait({task})
            except asyncio.CancelledError:
                cancelled = True

        if cancelled:
            if not task.cancelled() and task.exception() is not None:
                logger.error(
                    f"Write for transaction {confirmation.transaction_id} failed "
                    f"after cancellation: {task.exception()}"
                )
            raise asyncio.CancelledError()
        task.result()
