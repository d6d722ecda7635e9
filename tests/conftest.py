"""
Pytest configuration and shared fixtures.

This module provides:
- Environment variable setup for tests
- The reference account and restaurants used across the suite
- An in-memory reward network and a file-backed SQLite session factory
"""

import os
from decimal import Decimal
from functools import partial

import pytest


# Set test environment variables BEFORE any imports
# This must happen first to ensure settings load with test values
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_JSON"] = "true"
os.environ["REWARD_MAX_ATTEMPTS"] = "5"
os.environ["REWARD_RETRY_BASE_DELAY"] = "0"
os.environ["REWARD_RETRY_MAX_DELAY"] = "0"

from rewards.core.database import create_engine_for_url, create_session_factory, create_tables  # noqa: E402
from rewards.domain import Account, Beneficiary, BenefitAvailabilityPolicy, Dining, Restaurant  # noqa: E402
from rewards.repositories.memory import InMemoryRewardStore, InMemoryUnitOfWork  # noqa: E402
from rewards.repositories.unit_of_work import SqlAlchemyUnitOfWork  # noqa: E402
from rewards.services.reward_network import RewardNetworkService  # noqa: E402


ACCOUNT_NUMBER = "123456789"
CREDIT_CARD = "1234123412341234"
MERCHANT_NUMBER = "1234567890"
NEVER_MERCHANT_NUMBER = "1234567891"


def make_account() -> Account:
    """Keith and Keri Donald, rewarding Annabelle and Corgan 50/50."""
    return Account(
        number=ACCOUNT_NUMBER,
        name="Keith and Keri Donald",
        beneficiaries=[
            Beneficiary(name="Annabelle", allocation_percentage=Decimal("0.5")),
            Beneficiary(name="Corgan", allocation_percentage=Decimal("0.5")),
        ],
        credit_card_numbers=[CREDIT_CARD],
    )


def make_restaurant() -> Restaurant:
    return Restaurant(
        merchant_number=MERCHANT_NUMBER,
        name="AppleBee's",
        benefit_percentage=Decimal("0.08"),
        benefit_availability_policy=BenefitAvailabilityPolicy.ALWAYS,
    )


def make_never_restaurant() -> Restaurant:
    return Restaurant(
        merchant_number=NEVER_MERCHANT_NUMBER,
        name="Never Rewards",
        benefit_percentage=Decimal("0.08"),
        benefit_availability_policy=BenefitAvailabilityPolicy.NEVER,
    )


def make_dining(
    transaction_id: str = "tx-1",
    amount: str = "100.00",
    merchant_number: str = MERCHANT_NUMBER,
    credit_card_number: str = CREDIT_CARD,
) -> Dining:
    return Dining(
        amount=Decimal(amount),
        merchant_number=merchant_number,
        credit_card_number=credit_card_number,
        transaction_id=transaction_id,
    )


@pytest.fixture
def store() -> InMemoryRewardStore:
    """
    In-memory store seeded with the reference account and restaurants.
    """
    store = InMemoryRewardStore()
    store.add_account(make_account())
    store.add_restaurant(make_restaurant())
    store.add_restaurant(make_never_restaurant())
    return store


@pytest.fixture
def network(store: InMemoryRewardStore) -> RewardNetworkService:
    """
    Reward network over the in-memory store, retrying without delay.
    """
    return RewardNetworkService(
        lambda: InMemoryUnitOfWork(store),
        max_attempts=5,
        retry_base_delay=0,
        retry_max_delay=0,
    )


@pytest.fixture
async def session_factory(tmp_path):
    """
    Session factory over a fresh SQLite file database.

    A file database gives every session its own connection, like a real
    deployment. Tables are created before the test, the engine disposed
    after.
    """
    engine = create_engine_for_url(f"sqlite+aiosqlite:///{tmp_path / 'rewards.db'}")
    await create_tables(engine)

    yield create_session_factory(engine)

    await engine.dispose()


@pytest.fixture
async def seeded_session_factory(session_factory):
    """
    Session factory whose database holds the reference account and restaurants.
    """
    async with SqlAlchemyUnitOfWork(session_factory) as uow:
        await uow.accounts.save(make_account())
        await uow.restaurants.save(make_restaurant())
        await uow.restaurants.save(make_never_restaurant())
        await uow.commit()
    return session_factory


@pytest.fixture
def sql_network(seeded_session_factory) -> RewardNetworkService:
    return RewardNetworkService(
        partial(SqlAlchemyUnitOfWork, seeded_session_factory),
        max_attempts=5,
        retry_base_delay=0,
        retry_max_delay=0,
    )
