"""Service interface contracts (ABCs)"""

from rewards.services.interfaces.repositories import (
    IAccountRepository,
    IRestaurantRepository,
    IRewardRepository,
)
from rewards.services.interfaces.unit_of_work import IUnitOfWork, UnitOfWorkFactory
from rewards.services.interfaces.reward_network import IRewardNetwork

__all__ = [
    'IAccountRepository',
    'IRestaurantRepository',
    'IRewardRepository',
    'IUnitOfWork',
    'UnitOfWorkFactory',
    'IRewardNetwork',
]
