"""
SQLAlchemy ORM models for the reward network.

This module exports all database models and the declarative base.
Import models from this module to ensure they're registered with SQLAlchemy.
"""

from rewards.models.base import Base, TimestampMixin, UUIDMixin, ModelMixin, DecimalString
from rewards.models.account import AccountRecord, BeneficiaryRecord, CreditCardRecord
from rewards.models.restaurant import RestaurantRecord
from rewards.models.reward import RewardRecord, RewardAllocationRecord

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "ModelMixin",
    "DecimalString",
    # Models
    "AccountRecord",
    "BeneficiaryRecord",
    "CreditCardRecord",
    "RestaurantRecord",
    "RewardRecord",
    "RewardAllocationRecord",
]
