"""
Unit tests for the reward network service over the in-memory store.

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

import asyncio
from decimal import Decimal

import pytest

from rewards.domain import Account, Beneficiary
from rewards.exceptions import (
    AccountNotFound,
    ConcurrentModification,
    InvalidAllocation,
    PersistenceFailure,
    RestaurantNotFound,
    RewardNotFound,
)
from rewards.repositories.memory import InMemoryUnitOfWork
from rewards.services.reward_network import RewardNetworkService

from conftest import ACCOUNT_NUMBER, NEVER_MERCHANT_NUMBER, make_dining


def savings(store, name: str) -> Decimal:
    return store.accounts[ACCOUNT_NUMBER].get_beneficiary(name).savings


class TestReward:
    """Tests for RewardNetworkService.reward()."""

    async def test_rewards_dining_and_credits_beneficiaries(self, network, store):
        """
        Arrange: $100.00 dining at the 8% restaurant with the reference card
        Act: Reward the dining
        Assert: $8.00 reward split 4.00/4.00, account saved once
        """
        # Act
        confirmation = await network.reward(make_dining("tx-1"))

        # Assert
        assert confirmation.account_number == ACCOUNT_NUMBER
        assert confirmation.amount == Decimal("8.00")
        assert confirmation.allocations == {
            "Annabelle": Decimal("4.00"),
            "Corgan": Decimal("4.00"),
        }
        assert confirmation.dining_amount == Decimal("100.00")
        assert savings(store, "Annabelle") == Decimal("4.00")
        assert savings(store, "Corgan") == Decimal("4.00")
        assert store.accounts[ACCOUNT_NUMBER].version == 1
        assert store.rewards["tx-1"] == confirmation
        assert store.commit_count == 1

    async def test_allocations_sum_to_amount(self, network):
        confirmation = await network.reward(make_dining("tx-odd", amount="12.34"))

        assert confirmation.amount == Decimal("0.99")
        assert sum(confirmation.allocations.values()) == confirmation.amount

    async def test_same_transaction_is_rewarded_once(self, network, store):
        """
        Arrange: Dining already rewarded
        Act: Reward the same transaction again
        Assert: Same confirmation, beneficiaries credited once
        """
        # Arrange
        first = await network.reward(make_dining("tx-1"))

        # Act
        second = await network.reward(make_dining("tx-1"))

        # Assert
        assert second.confirmation_number == first.confirmation_number
        assert savings(store, "Annabelle") == Decimal("4.00")
        assert store.commit_count == 1

    async def test_successive_dinings_accumulate(self, network, store):
        await network.reward(make_dining("tx-1"))
        await network.reward(make_dining("tx-2", amount="50.00"))

        assert savings(store, "Annabelle") == Decimal("6.00")
        assert savings(store, "Corgan") == Decimal("6.00")
        assert store.accounts[ACCOUNT_NUMBER].version == 2

    async def test_never_policy_records_zero_reward(self, network, store):
        """
        Arrange: Restaurant whose policy never grants a benefit
        Act: Reward a dining there
        Assert: Zero confirmation recorded, account untouched
        """
        # Act
        confirmation = await network.reward(
            make_dining("tx-never", merchant_number=NEVER_MERCHANT_NUMBER)
        )

        # Assert
        assert confirmation.amount == Decimal("0.00")
        assert confirmation.allocations == {}
        assert "tx-never" in store.rewards
        assert store.accounts[ACCOUNT_NUMBER].version == 0
        assert savings(store, "Annabelle") == Decimal("0.00")

    async def test_unknown_merchant_writes_nothing(self, network, store):
        with pytest.raises(RestaurantNotFound):
            await network.reward(make_dining("tx-1", merchant_number="0000000000"))

        assert store.commit_count == 0
        assert store.rewards == {}

    async def test_unknown_card_writes_nothing(self, network, store):
        with pytest.raises(AccountNotFound):
            await network.reward(make_dining("tx-1", credit_card_number="9999"))

        assert store.commit_count == 0

    async def test_corrupt_allocations_rejected_before_writing(self, network, store):
        """
        Arrange: Account whose beneficiaries only cover 90%
        Act: Reward a dining paid with its card
        Assert: InvalidAllocation, nothing written
        """
        # Arrange
        store.add_account(Account(
            number="555",
            name="Short",
            beneficiaries=[
                Beneficiary(name="A", allocation_percentage=Decimal("0.5")),
                Beneficiary(name="B", allocation_percentage=Decimal("0.4")),
            ],
            credit_card_numbers=["5555"],
        ))

        # Act / Assert
        with pytest.raises(InvalidAllocation):
            await network.reward(make_dining("tx-1", credit_card_number="5555"))
        assert store.commit_count == 0


class TestFindConfirmation:
    async def test_returns_recorded_confirmation(self, network):
        confirmation = await network.reward(make_dining("tx-1"))

        assert await network.find_confirmation("tx-1") == confirmation

    async def test_unknown_transaction(self, network):
        with pytest.raises(RewardNotFound):
            await network.find_confirmation("tx-missing")


class TestConcurrency:
    """Concurrent rewards against the same account."""

    async def test_concurrent_rewards_lose_no_update(self, store):
        """
        Arrange: Five distinct $100.00 dinings on the same card
        Act: Reward them concurrently
        Assert: Every reward credited exactly once
        """
        # Arrange
        network = RewardNetworkService(
            lambda: InMemoryUnitOfWork(store), max_attempts=10, retry_base_delay=0, retry_max_delay=0
        )
        dinings = [make_dining(f"tx-{index}") for index in range(5)]

        # Act
        confirmations = await asyncio.gather(*(network.reward(d) for d in dinings))

        # Assert
        assert len({c.confirmation_number for c in confirmations}) == 5
        assert savings(store, "Annabelle") == Decimal("20.00")
        assert savings(store, "Corgan") == Decimal("20.00")
        assert store.accounts[ACCOUNT_NUMBER].version == 5

    async def test_concurrent_duplicates_return_one_confirmation(self, network, store):
        first, second = await asyncio.gather(
            network.reward(make_dining("tx-dup")),
            network.reward(make_dining("tx-dup")),
        )

        assert first.confirmation_number == second.confirmation_number
        assert savings(store, "Annabelle") == Decimal("4.00")
        assert store.commit_count == 1

    async def test_retry_exhaustion_surfaces_concurrent_modification(self, store):
        """
        Arrange: Unit of work whose commit always conflicts
        Act: Reward with three attempts
        Assert: ConcurrentModification after three attempts, nothing applied
        """
        # Arrange
        attempts = []

        class ConflictingUnitOfWork(InMemoryUnitOfWork):
            async def commit(self):
                attempts.append(1)
                raise ConcurrentModification(ACCOUNT_NUMBER, 0)

        network = RewardNetworkService(
            lambda: ConflictingUnitOfWork(store), max_attempts=3, retry_base_delay=0, retry_max_delay=0
        )

        # Act
        with pytest.raises(ConcurrentModification):
            await network.reward(make_dining("tx-1"))

        # Assert
        assert len(attempts) == 3
        assert store.commit_count == 0
        assert savings(store, "Annabelle") == Decimal("0.00")

    async def test_persistence_failure_is_not_retried(self, store):
        attempts = []

        class BrokenUnitOfWork(InMemoryUnitOfWork):
            async def commit(self):
                attempts.append(1)
                raise PersistenceFailure("disk full")

        network = RewardNetworkService(lambda: BrokenUnitOfWork(store), max_attempts=3)

        with pytest.raises(PersistenceFailure):
            await network.reward(make_dining("tx-1"))
        assert len(attempts) == 1
        assert store.rewards == {}

    async def test_cancelled_caller_does_not_interrupt_write(self, store):
        """
        Arrange: Unit of work whose commit blocks until released
        Act: Cancel the reward while the commit is in flight, then release it
        Assert: CancelledError for the caller, but the reward is committed
        """
        # Arrange
        started, release = asyncio.Event(), asyncio.Event()

        class SlowUnitOfWork(InMemoryUnitOfWork):
            async def commit(self):
                started.set()
                await release.wait()
                await super().commit()

        network = RewardNetworkService(lambda: SlowUnitOfWork(store))
        task = asyncio.create_task(network.reward(make_dining("tx-1")))
        await started.wait()

        # Act
        task.cancel()
        release.set()

        # Assert
        with pytest.raises(asyncio.CancelledError):
            await task
        assert "tx-1" in store.rewards
        assert savings(store, "Annabelle") == Decimal("4.00")

    async def test_repeated_cancellation_still_waits_for_write(self, store):
        """
        Arrange: Unit of work whose commit blocks until released
        Act: Cancel the reward twice while the commit is in flight, then release it
        Assert: CancelledError only after the commit finished
        """
        # Arrange
        started, release = asyncio.Event(), asyncio.Event()

        class SlowUnitOfWork(InMemoryUnitOfWork):
            async def commit(self):
                started.set()
                await release.wait()
                await super().commit()

        network = RewardNetworkService(lambda: SlowUnitOfWork(store))
        task = asyncio.create_task(network.reward(make_dining("tx-1")))
        await started.wait()

        # Act
        task.cancel()
        await asyncio.sleep(0)
        task.cancel()
        await asyncio.sleep(0)
        assert not task.done()
        release.set()

        # Assert
        with pytest.raises(asyncio.CancelledError):
            await task
        assert "tx-1" in store.rewards
        assert store.commit_count == 1
        assert savings(store, "Annabelle") == Decimal("4.00")


class TestServiceConfiguration:
    def test_max_attempts_must_be_positive(self, store):
        with pytest.raises(ValueError):
            RewardNetworkService(lambda: InMemoryUnitOfWork(store), max_attempts=0)
