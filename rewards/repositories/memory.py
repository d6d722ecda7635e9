"""
In-memory repositories.

A process-local store with the same contracts as the relational
repositories: reads return detached copies, writes are staged in the unit
of work and published together under a lock on commit, and account saves
carry the same optimistic version check. Used as a test double and for
embedding the reward network without a database.
"""

import asyncio
import copy
from typing import Dict, List, Optional, Tuple

from rewards.domain.account import Account
from rewards.domain.restaurant import Restaurant
from rewards.domain.reward import RewardConfirmation
from rewards.exceptions import ConcurrentModification, DuplicateTransaction
from rewards.services.interfaces.repositories import (
    IAccountRepository,
    IRestaurantRepository,
    IRewardRepository,
)
from rewards.services.interfaces.unit_of_work import IUnitOfWork


class InMemoryRewardStore:
    """
    Committed state shared by every in-memory unit of work.

    Attributes:
        accounts: Accounts by account number
        restaurants: Restaurants by merchant number
        rewards: Confirmations by transaction id
        commit_count: Number of successful commits, for observing writes
    """

    def __init__(self):
        self.accounts: Dict[str, Account] = {}
        self.restaurants: Dict[str, Restaurant] = {}
        self.rewards: Dict[str, RewardConfirmation] = {}
        self.commit_count = 0
        self.lock = asyncio.Lock()

    def add_account(self, account: Account) -> None:
        """Seed an account directly, bypassing units of work."""
        self.accounts[account.number] = copy.deepcopy(account)

    def add_restaurant(self, restaurant: Restaurant) -> None:
        """Seed a restaurant directly, bypassing units of work."""
        self.restaurants[restaurant.merchant_number] = restaurant


class _StagedWrites:
    def __init__(self):
        # account number -> (version expected in the store, staged copy)
        self.accounts: Dict[str, Tuple[Optional[int], Account]] = {}
        self.restaurants: Dict[str, Restaurant] = {}
        self.rewards: Dict[str, RewardConfirmation] = {}


async def _round_trip() -> None:
    # Yield to the event loop the way a driver round-trip would
    await asyncio.sleep(0)


class InMemoryAccountRepository(IAccountRepository):
    def __init__(self, store: InMemoryRewardStore, staged: _StagedWrites):
        self._store = store
        self._staged = staged

    def _visible(self) -> Dict[str, Account]:
        accounts = dict(self._store.accounts)
        accounts.update({number: account for number, (_, account) in self._staged.accounts.items()})
        return accounts

    async def find_by_credit_card_number(self, credit_card_number: str) -> Optional[Account]:
        await _round_trip()
        for account in self._visible().values():
            if credit_card_number in account.credit_card_numbers:
                return copy.deepcopy(account)
        return None

    async def find_by_number(self, account_number: str) -> Optional[Account]:
        await _round_trip()
        account = self._visible().get(account_number)
        return copy.deepcopy(account) if account is not None else None

    async def find_all(self) -> List[Account]:
        await _round_trip()
        visible = self._visible()
        return [copy.deepcopy(visible[number]) for number in sorted(visible)]

    async def save(self, account: Account) -> None:
        await _round_trip()
        staged = self._staged.accounts.get(account.number)
        if staged is not None:
            expected, latest = staged
            current_version: Optional[int] = latest.version
        else:
            current = self._store.accounts.get(account.number)
            current_version = current.version if current is not None else None
            expected = current_version

        if current_version is not None and current_version != account.version:
            raise ConcurrentModification(account.number, account.version)

        account.version += 1
        self._staged.accounts[account.number] = (expected, copy.deepcopy(account))


class InMemoryRestaurantRepository(IRestaurantRepository):
    def __init__(self, store: InMemoryRewardStore, staged: _StagedWrites):
        self._store = store
        self._staged = staged

    async def find_by_merchant_number(self, merchant_number: str) -> Optional[Restaurant]:
        await _round_trip()
        return self._staged.restaurants.get(merchant_number) or self._store.restaurants.get(
            merchant_number
        )

    async def save(self, restaurant: Restaurant) -> None:
        await _round_trip()
        self._staged.restaurants[restaurant.merchant_number] = restaurant


class InMemoryRewardRepository(IRewardRepository):
    def __init__(self, store: InMemoryRewardStore, staged: _StagedWrites):
        self._store = store
        self._staged = staged

    async def find_by_transaction_id(self, transaction_id: str) -> Optional[RewardConfirmation]:
        await _round_trip()
        return self._staged.rewards.get(transaction_id) or self._store.rewards.get(
            transaction_id
        )

    async def save(self, confirmation: RewardConfirmation) -> None:
        await _round_trip()
        transaction_id = confirmation.transaction_id
        if transaction_id in self._store.rewards or transaction_id in self._staged.rewards:
            raise DuplicateTransaction(transaction_id)
        self._staged.rewards[transaction_id] = confirmation


class InMemoryUnitOfWork(IUnitOfWork):
    """
    Unit of work over an ``InMemoryRewardStore``.

    Example:
        store = InMemoryRewardStore()
        network = RewardNetworkService(lambda: InMemoryUnitOfWork(store))
    """

    def __init__(self, store: InMemoryRewardStore):
        self._store = store
        self._staged = _StagedWrites()
        self.accounts = InMemoryAccountRepository(store, self._staged)
        self.restaurants = InMemoryRestaurantRepository(store, self._staged)
        self.rewards = InMemoryRewardRepository(store, self._staged)

    async def commit(self) -> None:
        """
        Validate and publish staged writes in one step.

        Nothing is applied unless every account version still matches and
        every reward transaction id is still free.
        """
        staged = self._staged
        async with self._store.lock:
            for number, (expected, account) in staged.accounts.items():
                current = self._store.accounts.get(number)
                current_version = current.version if current is not None else None
                if current_version != expected:
                    raise ConcurrentModification(number, expected)

            for transaction_id in staged.rewards:
                if transaction_id in self._store.rewards:
                    raise DuplicateTransaction(transaction_id)

            for number, (_, account) in staged.accounts.items():
                self._store.accounts[number] = account
            self._store.restaurants.update(staged.restaurants)
            self._store.rewards.update(staged.rewards)
            self._store.commit_count += 1

        await self.rollback()

    async def rollback(self) -> None:
        self._staged.accounts.clear()
        self._staged.restaurants.clear()
        self._staged.rewards.clear()
