"""
Repository layer for data access.

Provides the relational (SQLAlchemy) and in-memory implementations of the
repository and unit-of-work interfaces, isolating storage from the reward
pipeline.
"""

from rewards.repositories.account import SqlAlchemyAccountRepository
from rewards.repositories.restaurant import SqlAlchemyRestaurantRepository
from rewards.repositories.reward import SqlAlchemyRewardRepository
from rewards.repositories.unit_of_work import SqlAlchemyUnitOfWork
from rewards.repositories.memory import InMemoryRewardStore, InMemoryUnitOfWork

__all__ = [
    "SqlAlchemyAccountRepository",
    "SqlAlchemyRestaurantRepository",
    "SqlAlchemyRewardRepository",
    "SqlAlchemyUnitOfWork",
    "InMemoryRewardStore",
    "InMemoryUnitOfWork",
]
