"""
FastAPI dependency functions.

This is the composition root: the SQLAlchemy session factory is wrapped in
a unit-of-work factory, and the reward network is built on top of it.
Tests swap in another store by overriding ``get_unit_of_work_factory``.
"""

from functools import partial
from typing import Annotated

from fastapi import Depends

from rewards.core.config import settings
from rewards.core.database import async_session_maker
from rewards.repositories.unit_of_work import SqlAlchemyUnitOfWork
from rewards.services.interfaces.reward_network import IRewardNetwork
from rewards.services.interfaces.unit_of_work import UnitOfWorkFactory
from rewards.services.reward_network import RewardNetworkService


def get_unit_of_work_factory() -> UnitOfWorkFactory:
    """
    Dependency providing a factory of relational units of work.
    """
    return partial(SqlAlchemyUnitOfWork, async_session_maker)


def get_reward_network(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_unit_of_work_factory)],
) -> IRewardNetwork:
    """
    Dependency to inject the reward network.

    Args:
        uow_factory: Unit-of-work factory from dependency injection

    Returns:
        RewardNetworkService configured from settings
    """
    return RewardNetworkService(
        uow_factory,
        max_attempts=settings.reward_max_attempts,
        retry_base_delay=settings.reward_retry_base_delay,
        retry_max_delay=settings.reward_retry_max_delay,
    )


# Type aliases for dependency injection
UnitOfWorkFactoryDep = Annotated[UnitOfWorkFactory, Depends(get_unit_of_work_factory)]
RewardNetworkDep = Annotated[IRewardNetwork, Depends(get_reward_network)]
